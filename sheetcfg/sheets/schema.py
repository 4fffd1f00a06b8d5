"""Shared data structures for the spreadsheet layout convention."""

# Module responsibilities:
# - Name the fixed row positions of the List and Single layouts.
# - Provide the row grid container and the metadata/schema records parsed from it.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from openpyxl.utils.cell import column_index_from_string, coordinate_from_string

OUTPUT_NAME_CELL = "B1"
SHAPE_CELL = "B2"

# 0-based row indices.
LIST_FIELD_NAME_ROW = 3
LIST_FIELD_TYPE_ROW = 4
LIST_DATA_START_ROW = 5
SINGLE_DATA_START_ROW = 3

SINGLE_MIN_CELLS = 3

Scalar = Union[int, float, str]
FieldMap = Dict[str, Scalar]
Document = Union[List[FieldMap], FieldMap]


class Shape(str, Enum):
    """Record layout selected by the B2 label."""

    LIST = "列表"
    SINGLE = "单项"

    @classmethod
    def from_label(cls, label: str) -> "Shape":
        for shape in cls:
            if shape.value == label:
                return shape
        raise ValueError(label)

    @classmethod
    def labels(cls) -> tuple[str, ...]:
        return tuple(shape.value for shape in cls)


@dataclass(frozen=True)
class SourceFile:
    path: Path

    @property
    def extension(self) -> str:
        return self.path.suffix.lower()


@dataclass(frozen=True)
class SheetMetadata:
    output_name: str
    shape: Shape


@dataclass(frozen=True)
class FieldSchema:
    names: tuple[str, ...]
    types: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.names)


@dataclass(frozen=True)
class SheetGrid:
    """Worksheet content as rows of cell text.

    Trailing empty cells are trimmed from every row and trailing empty rows
    are dropped; empty rows between populated ones stay as empty lists.
    """

    name: str
    rows: List[List[str]] = field(default_factory=list)

    @classmethod
    def from_values(cls, name: str, values: Sequence[Sequence[Any]]) -> "SheetGrid":
        rows = [_trim_row([cell_text(value) for value in row]) for row in values]
        while rows and not rows[-1]:
            rows.pop()
        return cls(name=name, rows=rows)

    def cell(self, ref: str) -> str:
        """Return the text at an A1-style reference, ``""`` when absent."""

        column_letter, row_number = coordinate_from_string(ref)
        row_idx = row_number - 1
        col_idx = column_index_from_string(column_letter) - 1
        if row_idx >= len(self.rows):
            return ""
        row = self.rows[row_idx]
        if col_idx >= len(row):
            return ""
        return row[col_idx]

    def __len__(self) -> int:
        return len(self.rows)


def _trim_row(row: List[str]) -> List[str]:
    end = len(row)
    while end and row[end - 1] == "":
        end -= 1
    return row[:end]


def cell_text(value: Any) -> str:
    """Render a raw cell value the way it reads in the spreadsheet."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if value != value:
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, int):
        return str(value)
    isoformat = getattr(value, "isoformat", None)
    if callable(isoformat):
        text = isoformat()
        return text[:-9] if text.endswith("T00:00:00") else text
    return str(value)


__all__ = [
    "Document",
    "FieldMap",
    "FieldSchema",
    "LIST_DATA_START_ROW",
    "LIST_FIELD_NAME_ROW",
    "LIST_FIELD_TYPE_ROW",
    "OUTPUT_NAME_CELL",
    "SHAPE_CELL",
    "SINGLE_DATA_START_ROW",
    "SINGLE_MIN_CELLS",
    "Scalar",
    "Shape",
    "SheetGrid",
    "SheetMetadata",
    "SourceFile",
    "cell_text",
]
