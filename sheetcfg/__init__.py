"""Convert spreadsheet configuration tables into mirrored JSON files."""

from __future__ import annotations

from sheetcfg.config import ConvertContext, ConvertSettings, load_settings
from sheetcfg.core.pipeline import ConvertReport, convert_file, convert_tree

__all__ = [
    "ConvertContext",
    "ConvertReport",
    "ConvertSettings",
    "convert_file",
    "convert_tree",
    "load_settings",
]

__version__ = "0.1.0"
