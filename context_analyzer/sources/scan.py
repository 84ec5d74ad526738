"""
File discovery — filesystem I/O only.

Walks a root directory and returns the relative POSIX paths of files that
match the include globs and none of the exclude globs. Third-party
dependency directories (node_modules) are pruned unless asked for.
"""
from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)

THIRD_PARTY_DIRS = {"node_modules"}


def match_globs(path: str, globs: Sequence[str]) -> bool:
    """
    True when path matches any glob.

    Globs with wildcards are tested against the full relative path and the
    file name; plain strings match a whole path segment or the file name.
    """
    if not globs:
        return False
    name = path.rsplit("/", 1)[-1]
    segments = path.split("/")
    for pattern in globs:
        if any(ch in pattern for ch in "*?["):
            if fnmatch.fnmatch(path, pattern) or fnmatch.fnmatch(name, pattern):
                return True
        elif pattern in segments or pattern == path:
            return True
    return False


def scan_files(
    root: Path,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
    include_node_modules: bool = False,
) -> list[str]:
    """
    Candidate source files under root, sorted, relative to root.

    include — globs a file must match (empty = every file)
    exclude — globs that remove a file or prune a directory
    """
    root = Path(root)
    found: list[str] = []

    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        rel_dir = "" if rel_dir == "." else rel_dir + "/"

        kept = []
        for d in sorted(dirnames):
            rel = rel_dir + d
            if d in THIRD_PARTY_DIRS and not include_node_modules:
                logger.debug("Skipping %s", rel)
                continue
            if match_globs(rel, exclude):
                logger.debug("Excluded %s", rel)
                continue
            kept.append(d)
        dirnames[:] = kept

        for name in filenames:
            rel = rel_dir + name
            if include and not match_globs(rel, include):
                continue
            if match_globs(rel, exclude):
                continue
            found.append(rel)

    return sorted(found)
