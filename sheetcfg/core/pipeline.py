from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from sheetcfg.config import ConvertContext
from sheetcfg.core.errors import ConversionError
from sheetcfg.core.walker import iter_source_files
from sheetcfg.sheets.loader import load_sheet
from sheetcfg.sheets.writer import resolve_output_path, write_document

logger = logging.getLogger(__name__)


class ConvertedFile(BaseModel):
    source: str
    output: str
    shape: str
    records: int


class FileFailure(BaseModel):
    source: str
    message: str


class ConvertReport(BaseModel):
    """Aggregated outcome of a conversion run."""

    root: str
    output_root: str
    converted: List[ConvertedFile] = Field(default_factory=list)
    failures: List[FileFailure] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    duplicate_outputs: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def matched(self) -> int:
        return len(self.converted) + len(self.failures)


def new_report(context: ConvertContext) -> ConvertReport:
    return ConvertReport(root=str(context.root), output_root=str(context.output_root))


def convert_file(source: Path, context: ConvertContext) -> ConvertedFile:
    """Convert one workbook and write its JSON document."""

    settings = context.settings
    loaded = load_sheet(source, settings.sheet_name, strict=settings.strict_types)
    target = resolve_output_path(source, loaded.metadata.output_name, context.root, context.output_root)
    write_document(
        target,
        loaded.document,
        source=source,
        indent=settings.indent,
        sort_keys=settings.sort_keys,
    )
    return ConvertedFile(
        source=str(source),
        output=str(target),
        shape=loaded.metadata.shape.name.lower(),
        records=loaded.record_count,
    )


def convert_tree(context: ConvertContext, report: Optional[ConvertReport] = None) -> ConvertReport:
    """Convert every matched workbook under the context root.

    Per-file failures are collected and the walk continues, unless
    ``fail_fast`` is set, in which case the first one is re-raised.
    ``WalkError`` always propagates. Results accumulate in ``report`` when
    one is passed in, so the caller keeps the partial outcome of an aborted run.
    """

    settings = context.settings
    if report is None:
        report = new_report(context)
    owners: Dict[str, str] = {}

    def _on_skip(path: Path, reason: str) -> None:
        report.skipped.append(str(path))

    logger.info("Scanning %s -> %s", context.root, context.output_root)
    for source_file in iter_source_files(context.root, settings.extensions, on_skip=_on_skip):
        source = source_file.path
        logger.info("Converting %s", source)
        try:
            converted = convert_file(source, context)
        except ConversionError as exc:
            logger.error("%s", exc)
            report.failures.append(FileFailure(source=str(source), message=str(exc)))
            if settings.fail_fast:
                raise
            continue

        previous = owners.get(converted.output)
        if previous is not None:
            logger.warning("%s overwrites output of %s: %s", source, previous, converted.output)
            report.duplicate_outputs.setdefault(converted.output, [previous]).append(str(source))
        owners[converted.output] = str(source)
        report.converted.append(converted)
        logger.info("Wrote %s (%s, %s records)", converted.output, converted.shape, converted.records)

    logger.info(
        "Converted %s of %s files (%s failed, %s lock files skipped)",
        len(report.converted),
        report.matched,
        len(report.failures),
        len(report.skipped),
    )
    return report
