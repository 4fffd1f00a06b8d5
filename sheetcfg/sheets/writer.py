"""JSON output helpers."""

# Module responsibilities:
# - Mirror the source directory layout under the output root.
# - Serialize documents as indented UTF-8 JSON, truncating previous output.

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from sheetcfg.core.errors import OutputWriteError

from .schema import Document

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"


def resolve_output_path(source: Path, output_name: str, root: Path, output_root: Path) -> Path:
    """Return ``<output_root>/<dir of source relative to root>/<output_name>.json``."""

    parent = Path(os.path.abspath(source.parent))
    try:
        relative = parent.relative_to(root)
    except ValueError as exc:
        raise OutputWriteError(f"源文件不在扫描目录 {root} 下", path=source) from exc
    target = Path(os.path.normpath(output_root / relative / f"{output_name}{JSON_SUFFIX}"))
    try:
        target.relative_to(os.path.normpath(output_root))
    except ValueError as exc:
        raise OutputWriteError(f"配置文件名 {output_name!r} 指向输出目录 {output_root} 之外", path=source) from exc
    return target


def dump_document(document: Document, *, indent: str = "\t", sort_keys: bool = False) -> str:
    return json.dumps(document, ensure_ascii=False, indent=indent, sort_keys=sort_keys, allow_nan=False)


def write_document(
    target: Path,
    document: Document,
    *,
    source: Path,
    indent: str = "\t",
    sort_keys: bool = False,
) -> Path:
    """Write ``document`` to ``target``, creating parent directories.

    Raises:
        OutputWriteError: When directories or the file cannot be written.
    """

    payload = dump_document(document, indent=indent, sort_keys=sort_keys)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(f"创建目录失败: {exc}", path=source) from exc
    try:
        with target.open("w", encoding="utf-8") as fh:
            fh.write(payload)
    except OSError as exc:
        raise OutputWriteError(f"写入 {target} 失败: {exc}", path=source) from exc
    logger.debug("Wrote %s bytes to %s", len(payload.encode("utf-8")), target)
    return target
