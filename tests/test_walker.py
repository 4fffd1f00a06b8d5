"""Tests for directory traversal."""

from __future__ import annotations

from pathlib import Path

import pytest

from sheetcfg.core.errors import WalkError
from sheetcfg.core.walker import iter_source_files


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def test_walker_filters_extensions_and_lock_files(tmp_path: Path) -> None:
    keep_a = _touch(tmp_path / "a.xlsx")
    keep_b = _touch(tmp_path / "sub" / "b.xls")
    keep_c = _touch(tmp_path / "sub" / "deeper" / "C.XLSX")
    _touch(tmp_path / "~$report.xlsx")
    _touch(tmp_path / "notes.txt")
    (tmp_path / "folder.xlsx").mkdir()

    skipped: list[tuple[Path, str]] = []
    found = [f.path for f in iter_source_files(tmp_path, on_skip=lambda p, r: skipped.append((p, r)))]

    assert found == [keep_a, keep_b, keep_c]
    assert skipped == [(tmp_path / "~$report.xlsx", "lock")]


def test_walker_is_lazy(tmp_path: Path) -> None:
    _touch(tmp_path / "a.xlsx")
    _touch(tmp_path / "b.xlsx")
    walker = iter_source_files(tmp_path)
    assert next(walker).path.name == "a.xlsx"
    assert next(walker).path.name == "b.xlsx"
    with pytest.raises(StopIteration):
        next(walker)


def test_walker_honours_custom_extensions(tmp_path: Path) -> None:
    _touch(tmp_path / "a.xlsx")
    keep = _touch(tmp_path / "b.xlsm")
    assert [f.path for f in iter_source_files(tmp_path, [".xlsm"])] == [keep]


def test_walker_missing_root_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(WalkError):
        list(iter_source_files(tmp_path / "missing"))


def test_walker_listing_error_aborts(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import sheetcfg.core.walker as walker_mod

    def _failing_walk(top, onerror=None, **_):
        onerror(PermissionError(13, "Permission denied", str(top)))
        yield from ()

    monkeypatch.setattr(walker_mod.os, "walk", _failing_walk)
    with pytest.raises(WalkError):
        list(iter_source_files(tmp_path))
