from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from quickfind.icons import IconResolver
from quickfind.models import DesktopEntry

log = logging.getLogger(__name__)

DesktopIndex = dict[str, DesktopEntry]


def _iter_desktop_files(dirs: Iterable[Path]) -> Iterable[Path]:
    for d in dirs:
        if not d.is_dir():
            continue
        try:
            files = sorted(d.glob("*.desktop"))
        except OSError as e:
            log.debug("skip %s: %s", d, e)
            continue
        yield from files


def parse_desktop_file(path: Path) -> Optional[DesktopEntry]:
    """Read Name/Exec/Icon from a .desktop file.

    Only the first occurrence of each key counts, whatever group it is in.
    ``Exec`` keeps its first whitespace-separated token, so arguments and
    field codes like ``%U`` are dropped. Files without ``Exec`` give None.
    """

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.debug("cannot read %s: %s", path, e)
        return None

    name: Optional[str] = None
    exec_value: Optional[str] = None
    icon: Optional[str] = None
    for line in text.splitlines():
        line = line.strip()
        if name is None and line.startswith("Name="):
            name = line[len("Name="):].strip()
        elif exec_value is None and line.startswith("Exec="):
            parts = line[len("Exec="):].split()
            exec_value = parts[0] if parts else ""
        elif icon is None and line.startswith("Icon="):
            icon = line[len("Icon="):].strip() or None

        if name is not None and exec_value is not None and icon is not None:
            break

    if not exec_value:
        log.debug("no Exec in %s", path)
        return None

    return DesktopEntry(executable=exec_value, icon=icon, name=name)


def _resolve_entry_icon(entry: DesktopEntry, resolver: IconResolver) -> DesktopEntry:
    if entry.icon is None or Path(entry.icon).is_absolute():
        return entry
    return DesktopEntry(executable=entry.executable, icon=resolver.resolve(entry.icon), name=entry.name)


def build_index(dirs: Iterable[Path], resolver: IconResolver) -> DesktopIndex:
    """Index .desktop files by executable base name and by file stem.

    ``dirs`` is in priority order: the first entry seen for a key is kept.
    Relative icon tokens are resolved to files while indexing.
    """

    index: DesktopIndex = {}
    for path in _iter_desktop_files(dirs):
        entry = parse_desktop_file(path)
        if entry is None:
            continue
        entry = _resolve_entry_icon(entry, resolver)

        exec_key = Path(entry.executable).name
        index.setdefault(exec_key, entry)
        if path.stem != exec_key:
            index.setdefault(path.stem, entry)
    return index
