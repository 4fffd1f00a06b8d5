"""Generate example workbooks that follow the sheetcfg layout convention."""

# Module responsibilities:
# - Write one List-shape and one Single-shape workbook with openpyxl.
# - Optionally convert the generated tree right away to show the mirrored JSON output.

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from openpyxl import Workbook

from sheetcfg.config import ConvertContext, ConvertSettings
from sheetcfg.core.logger import get_logger
from sheetcfg.core.pipeline import convert_tree
from sheetcfg.sheets.schema import Shape

logger = logging.getLogger("sheetcfg.tools.make_samples")

LIST_SAMPLE = (
    ["id", "name", "hp", "speed"],
    ["int", "string", "int", "float"],
    [
        ["1", "Slime", "30", "1.5"],
        ["2", "Goblin", "55", "2.25"],
        ["3", "Dragon", "900", "0.75"],
    ],
)

SINGLE_SAMPLE = [
    ["maxHP", "int", "100"],
    ["title", "string", "Boss"],
    ["critRate", "float", "0.15"],
]


def _new_sheet(output_name: str, shape: Shape):
    wb = Workbook()
    ws = wb.active
    ws.title = "Sheet1"
    ws["A1"] = "文件名"
    ws["B1"] = output_name
    ws["A2"] = "类型"
    ws["B2"] = shape.value
    return wb, ws


def write_list_sample(path: Path, output_name: str = "monsters") -> Path:
    names, types, rows = LIST_SAMPLE
    wb, ws = _new_sheet(output_name, Shape.LIST)
    for col, (name, type_label) in enumerate(zip(names, types), start=1):
        ws.cell(row=4, column=col, value=name)
        ws.cell(row=5, column=col, value=type_label)
    for row_idx, row in enumerate(rows, start=6):
        for col, value in enumerate(row, start=1):
            ws.cell(row=row_idx, column=col, value=value)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    logger.info("Generated List sample %s", path)
    return path


def write_single_sample(path: Path, output_name: str = "boss") -> Path:
    wb, ws = _new_sheet(output_name, Shape.SINGLE)
    for row_idx, row in enumerate(SINGLE_SAMPLE, start=4):
        for col, value in enumerate(row, start=1):
            ws.cell(row=row_idx, column=col, value=value)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    logger.info("Generated Single sample %s", path)
    return path


def make_samples(directory: Path) -> list[Path]:
    return [
        write_list_sample(directory / "units" / "monsters.xlsx"),
        write_single_sample(directory / "boss.xlsx"),
    ]


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate sheetcfg sample workbooks")
    parser.add_argument("--dir", type=Path, default=Path("samples"), help="Directory for the workbooks")
    parser.add_argument("--convert", action="store_true", help="Convert the samples after writing them")
    parser.add_argument("--out", type=Path, default=None, help="Output root used with --convert")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    get_logger()
    try:
        paths = make_samples(args.dir)
        print("Samples:")
        for path in paths:
            print(f"  - {path}")
        if args.convert:
            settings = ConvertSettings(source_dir=args.dir, output_dir=args.out)
            report = convert_tree(ConvertContext.from_settings(settings))
            for item in report.converted:
                print(f"  -> {item.output}")
            return 0 if report.ok else 1
        return 0
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("Sample generation failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
