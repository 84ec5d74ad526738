"""
File reading — filesystem I/O only.

Reads many files concurrently through a bounded executor. The caller may
hand in its own executor (to share a pool and its bound) and a cancel
event; cancellation is checked before every read.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 8


class AnalysisCancelled(RuntimeError):
    """The cancel event fired while files were still being read."""


def read_file_content(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8", errors="replace")


def read_sources(
    root: Path,
    paths: Sequence[str],
    executor: Executor | None = None,
    cancel: threading.Event | None = None,
    max_workers: int = DEFAULT_WORKERS,
) -> list[tuple[str, str]]:
    """
    Read every path (relative to root) into (path, content) records.

    Records come back in the order of `paths`. Read errors propagate.
    Raises AnalysisCancelled when `cancel` is set before all reads start.
    """
    root = Path(root)

    def read_one(rel: str) -> tuple[str, str]:
        if cancel is not None and cancel.is_set():
            raise AnalysisCancelled(f"Cancelled before reading {rel}")
        return rel, read_file_content(root / rel)

    if cancel is not None and cancel.is_set():
        raise AnalysisCancelled("Cancelled before reading started")

    if executor is not None:
        return _collect([executor.submit(read_one, p) for p in paths])

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        return _collect([pool.submit(read_one, p) for p in paths])


def _collect(futures: list) -> list[tuple[str, str]]:
    records = []
    try:
        for future in futures:
            records.append(future.result())
    except BaseException:
        for future in futures:
            future.cancel()
        raise
    logger.debug("Read %d files", len(records))
    return records
