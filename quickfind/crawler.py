from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable

from quickfind.models import Candidate

log = logging.getLogger(__name__)


def _iter_files(root: Path, max_depth: int) -> Iterable[Candidate]:
    """Depth-bounded walk of one root; entries directly inside ``root`` are depth 1.

    Symlinks are neither emitted nor followed.
    """

    stack: list[tuple[Path, int]] = [(root, 0)]
    while stack:
        current, depth = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            log.debug("skip %s: %s", current, e)
            continue

        subdirs: list[Path] = []
        for entry in entries:
            try:
                if entry.is_file(follow_symlinks=False):
                    yield Candidate(name=entry.name, path=entry.path)
                elif entry.is_dir(follow_symlinks=False) and depth + 1 < max_depth:
                    subdirs.append(Path(entry.path))
            except OSError as e:
                log.debug("skip %s: %s", entry.path, e)
                continue

        # reversed so the stack pops subdirectories in name order
        stack.extend((d, depth + 1) for d in reversed(subdirs))


def crawl(roots: Iterable[str | Path], max_depth: int) -> list[Candidate]:
    """Collect regular files under each root, up to ``max_depth`` levels deep.

    Best-effort: missing roots and unreadable subtrees are skipped. The same
    file reached through two roots is reported twice.
    """

    out: list[Candidate] = []
    if max_depth <= 0:
        return out
    for root in roots:
        root = Path(root)
        if not root.is_dir():
            log.debug("search root missing: %s", root)
            continue
        out.extend(_iter_files(root, max_depth))
    return out


def _is_executable(entry: os.DirEntry) -> bool:
    st = entry.stat()
    return stat.S_ISREG(st.st_mode) and bool(st.st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def scan_path_executables(path_dirs: Iterable[str | Path]) -> list[Candidate]:
    """Executables found in PATH directories, one per name.

    Directories are scanned in PATH order and the first executable seen for a
    name wins, like a shell lookup. Symlinks to executables count.
    """

    seen: set[str] = set()
    out: list[Candidate] = []
    for d in path_dirs:
        try:
            with os.scandir(d) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            log.debug("skip PATH entry %s: %s", d, e)
            continue

        for entry in entries:
            if entry.name in seen:
                continue
            try:
                if not _is_executable(entry):
                    continue
            except OSError:
                # dangling symlink
                continue
            seen.add(entry.name)
            out.append(Candidate(name=entry.name, path=entry.path))
    return out
