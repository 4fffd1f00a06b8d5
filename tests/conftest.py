from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import sheetcfg.core.logger as core_logger

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

Rows = Sequence[Sequence[Optional[object]]]
WorkbookFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _isolated_logging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep log files out of the home directory and reconfigure per test."""

    monkeypatch.setattr(core_logger, "DEFAULT_LOG_DIR", tmp_path / "logs")
    core_logger.reset_logging()
    yield
    core_logger.reset_logging()


def write_workbook(path: Path, rows: Rows, sheet: str = "Sheet1") -> Path:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet
    for row_idx, row in enumerate(rows, start=1):
        for col_idx, value in enumerate(row, start=1):
            if value is None:
                continue
            ws.cell(row=row_idx, column=col_idx, value=value)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def list_rows(output_name: str, names: Sequence[str], types: Sequence[str], data: Rows) -> list:
    return [
        ["文件名", output_name],
        ["类型", "列表"],
        [],
        list(names),
        list(types),
        *[list(row) for row in data],
    ]


def single_rows(output_name: str, data: Rows) -> list:
    return [
        ["文件名", output_name],
        ["类型", "单项"],
        ["字段", "类型", "值"],
        *[list(row) for row in data],
    ]


@pytest.fixture()
def make_workbook() -> WorkbookFactory:
    return write_workbook


@pytest.fixture()
def make_list_workbook() -> WorkbookFactory:
    def _factory(path: Path, output_name: str, names, types, data, sheet: str = "Sheet1") -> Path:
        return write_workbook(path, list_rows(output_name, names, types, data), sheet=sheet)

    return _factory


@pytest.fixture()
def make_single_workbook() -> WorkbookFactory:
    def _factory(path: Path, output_name: str, data, sheet: str = "Sheet1") -> Path:
        return write_workbook(path, single_rows(output_name, data), sheet=sheet)

    return _factory


@pytest.fixture()
def legacy_xls() -> Path:
    """BIFF8 workbook: list shape named ``items`` with int, string and float columns."""

    return FIXTURES_DIR / "items.xls"
