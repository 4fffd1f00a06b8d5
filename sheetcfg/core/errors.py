"""Custom exceptions used across sheetcfg."""

from __future__ import annotations

from pathlib import Path


class SheetCfgError(Exception):
    """Base error for the application."""


class ConfigError(SheetCfgError):
    """Configuration related error."""


class WalkError(SheetCfgError):
    """Raised when the directory walk cannot continue."""


class ConversionError(SheetCfgError):
    """Per-file failure; rendered as ``[<path>]: <detail>`` once the path is known."""

    def __init__(self, detail: str, *, path: str | Path | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.path = Path(path) if path is not None else None

    def with_path(self, path: str | Path) -> "ConversionError":
        self.path = Path(path)
        return self

    def __str__(self) -> str:
        if self.path is None:
            return self.detail
        return f"[{self.path}]: {self.detail}"


class OpenError(ConversionError):
    """The file is not a readable spreadsheet."""


class CellReadError(ConversionError):
    """Metadata cells or the worksheet could not be read."""


class UnsupportedShapeError(ConversionError):
    """B2 holds a label other than the two supported shapes."""


class MalformedHeaderError(ConversionError):
    """The sheet has fewer rows than the header convention requires."""


class SchemaMismatchError(ConversionError):
    """Field name row and type label row differ in length."""


class RowLengthError(ConversionError):
    """A List-shape data row does not line up with the field schema."""

    def __init__(self, detail: str, *, row: int, column: int, path: str | Path | None = None) -> None:
        super().__init__(detail, path=path)
        self.row = row
        self.column = column


class RowTooShortError(ConversionError):
    """A Single-shape row has fewer than three cells."""

    def __init__(self, detail: str, *, row: int, path: str | Path | None = None) -> None:
        super().__init__(detail, path=path)
        self.row = row


class CellConversionError(ConversionError):
    """A cell value could not be coerced to its declared type."""

    def __init__(
        self,
        detail: str,
        *,
        row: int,
        column: int | None = None,
        path: str | Path | None = None,
    ) -> None:
        super().__init__(detail, path=path)
        self.row = row
        self.column = column


class OutputWriteError(ConversionError):
    """The JSON document could not be written."""


class CoercionError(ValueError):
    """Raised when cell text does not match its declared type."""

    def __init__(self, text: str, type_label: str, reason: str) -> None:
        super().__init__(f"无法将 {text!r} 转换为 {type_label}: {reason}")
        self.text = text
        self.type_label = type_label


class IntParseError(CoercionError):
    """Malformed integer text."""


class FloatParseError(CoercionError):
    """Malformed or non-finite float text."""


class UnknownTypeError(CoercionError):
    """Unrecognised type label under strict typing."""
