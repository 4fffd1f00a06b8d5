"""Directory traversal yielding spreadsheet sources."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from sheetcfg.core.errors import WalkError
from sheetcfg.sheets.schema import SourceFile

logger = logging.getLogger(__name__)

LOCK_FILE_PREFIX = "~$"

SkipCallback = Callable[[Path, str], None]


def _raise_walk_error(exc: OSError) -> None:
    raise WalkError(f"遍历目录失败: {exc.filename}: {exc.strerror or exc}") from exc


def iter_source_files(
    root: Path,
    extensions: Iterable[str] = (".xlsx", ".xls"),
    on_skip: Optional[SkipCallback] = None,
) -> Iterator[SourceFile]:
    """Yield spreadsheet files under ``root`` in sorted order.

    Lock files (``~$`` prefix) and other extensions are skipped. Any OS
    error while listing a directory aborts the walk with ``WalkError``.
    """

    wanted = {ext.lower() for ext in extensions}
    if not root.is_dir():
        raise WalkError(f"目录不存在: {root}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if filename.startswith(LOCK_FILE_PREFIX):
                logger.debug("Skipping lock file %s", path)
                if on_skip is not None:
                    on_skip(path, "lock")
                continue
            if path.suffix.lower() not in wanted:
                continue
            yield SourceFile(path=path)
