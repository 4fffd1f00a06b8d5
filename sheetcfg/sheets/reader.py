"""Spreadsheet input helpers."""

# Module responsibilities:
# - Open .xlsx/.xls workbooks through pandas with the matching engine.
# - Deliver one worksheet as a SheetGrid of cell text, releasing the file on every path.

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from sheetcfg.core.errors import CellReadError, OpenError

from .schema import SheetGrid

logger = logging.getLogger(__name__)

ENGINES = {
    ".xlsx": "openpyxl",
    ".xlsm": "openpyxl",
    ".xls": "xlrd",
}


def engine_for(path: Path) -> str:
    return ENGINES.get(path.suffix.lower(), "openpyxl")


def read_grid(path: Path, sheet_name: str) -> SheetGrid:
    """Load ``sheet_name`` from the workbook at ``path``.

    Raises:
        OpenError: When the file is missing or is not a readable workbook.
        CellReadError: When the worksheet does not exist.
    """

    engine = engine_for(path)
    logger.debug("Opening workbook %s (engine=%s)", path, engine)
    try:
        book = pd.ExcelFile(path, engine=engine)
    except Exception as exc:  # noqa: BLE001
        raise OpenError(f"无法打开表格文件: {exc}", path=path) from exc

    with book:
        if sheet_name not in book.sheet_names:
            raise CellReadError(f"工作表 {sheet_name} 不存在", path=path)
        try:
            frame = book.parse(sheet_name, header=None, dtype=object, na_filter=False)
        except Exception as exc:  # noqa: BLE001
            raise CellReadError(f"读取工作表 {sheet_name} 失败: {exc}", path=path) from exc

    grid = SheetGrid.from_values(sheet_name, frame.values.tolist())
    logger.debug("Read %s rows from %s!%s", len(grid), path.name, sheet_name)
    return grid
