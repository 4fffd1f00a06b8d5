"""Tests for the sample workbook tool."""

from __future__ import annotations

import json
from pathlib import Path

from tools import make_samples


def test_make_samples_round_trip_through_converter(tmp_path: Path) -> None:
    code = make_samples.main(["--dir", str(tmp_path / "samples"), "--convert", "--out", str(tmp_path / "json")])

    assert code == 0
    monsters = json.loads((tmp_path / "json" / "units" / "monsters.json").read_text(encoding="utf-8"))
    assert monsters[0] == {"id": 1, "name": "Slime", "hp": 30, "speed": 1.5}
    assert len(monsters) == 3
    boss = json.loads((tmp_path / "json" / "boss.json").read_text(encoding="utf-8"))
    assert boss == {"maxHP": 100, "title": "Boss", "critRate": 0.15}
