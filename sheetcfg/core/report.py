"""Markdown reporting for conversion runs."""

from __future__ import annotations

from pathlib import Path

from .pipeline import ConvertReport


def render_report(report: ConvertReport) -> str:
    lines = ["# Sheet Conversion Report", ""]
    lines.append(f"- Source root: `{report.root}`")
    lines.append(f"- Output root: `{report.output_root}`")
    lines.append(f"- Converted files: {len(report.converted)}")
    lines.append(f"- Failed files: {len(report.failures)}")
    lines.append(f"- Skipped lock files: {len(report.skipped)}")
    lines.append("")

    if report.converted:
        lines.append("## Converted")
        lines.append("")
        lines.append("| Source | Output | Shape | Records |")
        lines.append("|---|---|---|---:|")
        for item in report.converted:
            lines.append(f"| {item.source} | {item.output} | {item.shape} | {item.records} |")
        lines.append("")

    if report.failures:
        lines.append("## Failures")
        for failure in report.failures:
            lines.append(f"- **{failure.source}**")
            lines.append(f"  - {failure.message}")
        lines.append("")

    if report.duplicate_outputs:
        lines.append("## Duplicate outputs")
        for output, sources in report.duplicate_outputs.items():
            lines.append(f"- `{output}` written by: {', '.join(sources)}")
        lines.append("")

    return "\n".join(lines)


def generate_report(path: Path, report: ConvertReport) -> Path:
    """Write the Markdown report to ``path``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(report), encoding="utf-8")
    return path
