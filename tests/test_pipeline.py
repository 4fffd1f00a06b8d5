"""End-to-end conversion tests."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from sheetcfg.config import ConvertContext, ConvertSettings
from sheetcfg.core.errors import RowLengthError, WalkError
from sheetcfg.core import pipeline
from sheetcfg.core.pipeline import convert_tree, new_report
from sheetcfg.core.report import generate_report
from sheetcfg.sheets.schema import SourceFile


def _context(tmp_path: Path, **overrides) -> ConvertContext:
    settings = ConvertSettings(source_dir=tmp_path / "tables", output_dir=tmp_path / "json", **overrides)
    return ConvertContext.from_settings(settings)


def _read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_list_and_single_sheets_convert_to_mirrored_json(
    tmp_path: Path, make_list_workbook, make_single_workbook
) -> None:
    tables = tmp_path / "tables"
    make_list_workbook(tables / "users" / "users.xlsx", "users", ["id", "name"], ["int", "string"], [["1", "Alice"]])
    make_single_workbook(tables / "boss.xlsx", "boss", [["maxHP", "int", "100"], ["title", "string", "Boss"]])

    report = convert_tree(_context(tmp_path))

    assert report.ok
    assert len(report.converted) == 2
    assert _read_json(tmp_path / "json" / "users" / "users.json") == [{"id": 1, "name": "Alice"}]
    assert _read_json(tmp_path / "json" / "boss.json") == {"maxHP": 100, "title": "Boss"}
    raw = (tmp_path / "json" / "boss.json").read_text(encoding="utf-8")
    assert raw == '{\n\t"maxHP": 100,\n\t"title": "Boss"\n}'


def test_lock_files_and_other_files_are_left_alone(tmp_path: Path, make_single_workbook) -> None:
    tables = tmp_path / "tables"
    make_single_workbook(tables / "~$report.xlsx", "report", [["a", "int", "1"]])
    (tables / "readme.txt").write_text("not a sheet", encoding="utf-8")

    report = convert_tree(_context(tmp_path))

    assert report.converted == []
    assert report.failures == []
    assert report.skipped == [str(tables / "~$report.xlsx")]
    assert not (tmp_path / "json" / "report.json").exists()


def test_failing_file_does_not_stop_later_files(
    tmp_path: Path, make_list_workbook, make_single_workbook
) -> None:
    tables = tmp_path / "tables"
    make_list_workbook(tables / "a_broken.xlsx", "broken", ["id", "name"], ["int", "string"], [["1"]])
    make_single_workbook(tables / "b_ok.xlsx", "ok", [["a", "int", "1"]])

    report = convert_tree(_context(tmp_path))

    assert not report.ok
    assert [f.source for f in report.failures] == [str(tables / "a_broken.xlsx")]
    assert "在第6行2列" in report.failures[0].message
    assert _read_json(tmp_path / "json" / "ok.json") == {"a": 1}


def test_fail_fast_stops_at_first_failure(tmp_path: Path, make_list_workbook, make_single_workbook) -> None:
    tables = tmp_path / "tables"
    make_list_workbook(tables / "a_broken.xlsx", "broken", ["id", "name"], ["int", "string"], [["1"]])
    make_single_workbook(tables / "b_ok.xlsx", "ok", [["a", "int", "1"]])

    with pytest.raises(RowLengthError) as excinfo:
        convert_tree(_context(tmp_path, fail_fast=True))

    assert excinfo.value.path == tables / "a_broken.xlsx"
    assert not (tmp_path / "json" / "ok.json").exists()


def test_missing_root_aborts_the_run(tmp_path: Path) -> None:
    with pytest.raises(WalkError):
        convert_tree(_context(tmp_path))


def test_duplicate_output_targets_are_reported(tmp_path: Path, make_single_workbook) -> None:
    tables = tmp_path / "tables"
    make_single_workbook(tables / "one.xlsx", "shared", [["v", "int", "1"]])
    make_single_workbook(tables / "two.xlsx", "shared", [["v", "int", "2"]])

    report = convert_tree(_context(tmp_path))

    target = tmp_path / "json" / "shared.json"
    assert _read_json(target) == {"v": 2}
    assert report.duplicate_outputs == {
        str(target): [str(tables / "one.xlsx"), str(tables / "two.xlsx")]
    }


def test_report_lists_conversions_and_failures(
    tmp_path: Path, make_list_workbook, make_single_workbook
) -> None:
    tables = tmp_path / "tables"
    make_list_workbook(tables / "bad.xlsx", "bad", ["id"], ["int"], [["x"]])
    make_single_workbook(tables / "good.xlsx", "good", [["a", "int", "1"]])

    report = convert_tree(_context(tmp_path))
    path = generate_report(tmp_path / "out" / "report.md", report)

    text = path.read_text(encoding="utf-8")
    assert "- Converted files: 1" in text
    assert "- Failed files: 1" in text
    assert "bad.xlsx" in text
    assert "| single | 1 |" in text


def test_legacy_xls_converts_alongside_xlsx(tmp_path: Path, legacy_xls: Path, make_single_workbook) -> None:
    tables = tmp_path / "tables"
    (tables / "shop").mkdir(parents=True)
    shutil.copyfile(legacy_xls, tables / "shop" / "items.xls")
    make_single_workbook(tables / "shop" / "config.xlsx", "config", [["open", "int", "1"]])

    report = convert_tree(_context(tmp_path))

    assert report.ok, report.failures
    assert len(report.converted) == 2
    assert _read_json(tmp_path / "json" / "shop" / "items.json") == [
        {"id": 1, "name": "苹果", "rate": 2.5},
        {"id": 2, "name": "梨", "rate": 0.75},
    ]
    assert _read_json(tmp_path / "json" / "shop" / "config.json") == {"open": 1}


def test_caller_report_keeps_results_when_walk_aborts(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_single_workbook
) -> None:
    tables = tmp_path / "tables"
    make_single_workbook(tables / "a.xlsx", "a", [["v", "int", "1"]])
    make_single_workbook(tables / "b.xlsx", "b", [["v", "int", "2"]])
    context = _context(tmp_path)

    def _aborting_walk(root, extensions, on_skip=None):
        yield SourceFile(path=tables / "a.xlsx")
        raise WalkError("遍历目录失败: 权限不足")

    monkeypatch.setattr(pipeline, "iter_source_files", _aborting_walk)
    report = new_report(context)

    with pytest.raises(WalkError):
        convert_tree(context, report)

    assert [item.source for item in report.converted] == [str(tables / "a.xlsx")]
    assert not (tmp_path / "json" / "b.json").exists()


def test_caller_report_keeps_failure_under_fail_fast(tmp_path: Path, make_list_workbook) -> None:
    tables = tmp_path / "tables"
    make_list_workbook(tables / "broken.xlsx", "broken", ["id", "name"], ["int", "string"], [["1"]])
    context = _context(tmp_path, fail_fast=True)
    report = new_report(context)

    with pytest.raises(RowLengthError):
        convert_tree(context, report)

    assert [failure.source for failure in report.failures] == [str(tables / "broken.xlsx")]
