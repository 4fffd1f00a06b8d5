"""`sheetcfg.sheets` holds the spreadsheet layout convention and its JSON output."""

# Module responsibilities:
# - Re-export the reader, record parsers, coercion and writer as one API surface.

from __future__ import annotations

from .coerce import KNOWN_TYPES, coerce
from .loader import LoadedSheet, load_sheet, read_metadata
from .reader import read_grid
from .records import parse_list, parse_records, parse_single, read_field_schema
from .schema import FieldSchema, Shape, SheetGrid, SheetMetadata, SourceFile
from .writer import dump_document, resolve_output_path, write_document

__all__ = [
    "FieldSchema",
    "KNOWN_TYPES",
    "LoadedSheet",
    "Shape",
    "SheetGrid",
    "SheetMetadata",
    "SourceFile",
    "coerce",
    "dump_document",
    "load_sheet",
    "parse_list",
    "parse_records",
    "parse_single",
    "read_field_schema",
    "read_grid",
    "read_metadata",
    "resolve_output_path",
    "write_document",
]
