"""Sheet loading: metadata cells plus record parsing for one workbook."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sheetcfg.core.errors import CellReadError, ConversionError, UnsupportedShapeError

from .reader import read_grid
from .records import parse_records
from .schema import OUTPUT_NAME_CELL, SHAPE_CELL, Document, Shape, SheetGrid, SheetMetadata


@dataclass(frozen=True)
class LoadedSheet:
    """Parsed workbook ready for serialization."""

    source: Path
    metadata: SheetMetadata
    document: Document

    @property
    def record_count(self) -> int:
        return len(self.document)


def read_metadata(grid: SheetGrid) -> SheetMetadata:
    output_name = grid.cell(OUTPUT_NAME_CELL)
    if not output_name.strip():
        raise CellReadError(f"{OUTPUT_NAME_CELL} 未填写配置文件名")
    label = grid.cell(SHAPE_CELL)
    try:
        shape = Shape.from_label(label)
    except ValueError:
        accepted = "与".join(f"“{item}”" for item in Shape.labels())
        raise UnsupportedShapeError(f"配置类型错误，仅支持{accepted}") from None
    return SheetMetadata(output_name=output_name, shape=shape)


def load_sheet(path: Path, sheet_name: str = "Sheet1", *, strict: bool = False) -> LoadedSheet:
    """Open ``path`` and convert its worksheet into a document.

    Every ``ConversionError`` raised here carries ``path``.
    """

    try:
        grid = read_grid(path, sheet_name)
        metadata = read_metadata(grid)
        document = parse_records(grid, metadata.shape, strict=strict)
    except ConversionError as exc:
        raise exc.with_path(path)
    return LoadedSheet(source=path, metadata=metadata, document=document)
