"""Typer based command line entry point for sheetcfg."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from sheetcfg.config import ConvertContext, load_settings
from sheetcfg.core.errors import ConfigError, ConversionError, WalkError
from sheetcfg.core.logger import get_logger
from sheetcfg.core.pipeline import ConvertReport, convert_tree, new_report
from sheetcfg.core.report import generate_report

EXIT_FAILED = 1
EXIT_USAGE = 2

app = typer.Typer(help="Convert spreadsheet configuration tables into JSON files.", add_completion=False)


def _apply_log_level(logger: logging.Logger, log_level: str) -> None:
    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    logger.setLevel(level_value)


def _echo_summary(report: ConvertReport) -> None:
    typer.echo(
        f"Converted {len(report.converted)}/{report.matched} files into {report.output_root}"
    )
    if report.failures:
        typer.echo(f"{len(report.failures)} file(s) failed, see the log above")


def _write_report(path: Optional[Path], report: ConvertReport) -> None:
    if path is None:
        return
    try:
        written = generate_report(path, report)
    except OSError as exc:
        typer.echo(f"Error: cannot write report {path}: {exc}")
        raise typer.Exit(code=EXIT_FAILED)
    typer.echo(f"Report: {written}")


@app.command()
def convert(
    directory: Optional[Path] = typer.Option(None, "--dir", help="Root directory to scan (default ./)."),
    out: Optional[Path] = typer.Option(None, "--out", help="Output root (default <cwd>/json)."),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
    sheet: Optional[str] = typer.Option(None, "--sheet", help="Worksheet to read (default Sheet1)."),
    strict_types: bool = typer.Option(False, "--strict-types", help="Treat unknown type labels as errors."),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop at the first file that fails to convert."),
    report: Optional[Path] = typer.Option(None, "--report", help="Write a Markdown conversion report."),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (e.g. DEBUG/INFO/WARNING)."),
) -> None:
    """Walk --dir and write one JSON file per spreadsheet under the output root."""

    logger = get_logger()
    _apply_log_level(logger, log_level)

    try:
        settings = load_settings(config).merged(
            {
                "source_dir": directory,
                "output_dir": out,
                "sheet_name": sheet,
                "strict_types": strict_types or None,
                "fail_fast": fail_fast or None,
                "report_path": report,
            }
        )
    except ConfigError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=EXIT_USAGE)

    context = ConvertContext.from_settings(settings)
    result = new_report(context)
    try:
        convert_tree(context, result)
    except WalkError as exc:
        logger.error("Walk aborted: %s", exc)
        _write_report(settings.report_path, result)
        raise typer.Exit(code=EXIT_FAILED)
    except ConversionError:
        # already logged by convert_tree
        _write_report(settings.report_path, result)
        typer.echo("Stopped at the first failure (--fail-fast)")
        raise typer.Exit(code=EXIT_FAILED)

    _write_report(settings.report_path, result)
    _echo_summary(result)
    if not result.ok:
        raise typer.Exit(code=EXIT_FAILED)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
