from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

SYSTEM_APPLICATIONS_DIR = Path("/usr/share/applications")
SNAP_APPLICATIONS_DIR = Path("/var/lib/snapd/desktop/applications")

# Well-known system roots crawled by the file search, in order.
SYSTEM_ROOTS = (
    SYSTEM_APPLICATIONS_DIR,
    Path("/usr/bin"),
    Path("/usr/local/bin"),
    Path("/snap/bin"),
)

HOME_SUBDIRS = ("Desktop", "Downloads", "Documents")


@dataclass(frozen=True)
class Environment:
    """Snapshot of the process environment the engine depends on.

    Read once at the boundary with :meth:`from_environ` and handed to each
    component, so nothing below re-reads ``os.environ``.
    """

    home: Optional[Path] = None
    path_dirs: tuple[Path, ...] = ()
    data_home: Optional[Path] = None
    extra_roots: tuple[Path, ...] = field(default=())

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "Environment":
        env = os.environ if environ is None else environ

        home_raw = (env.get("HOME") or "").strip()
        home = Path(home_raw) if home_raw else None

        path_dirs = tuple(Path(p) for p in (env.get("PATH") or "").split(os.pathsep) if p)

        data_raw = (env.get("XDG_DATA_HOME") or "").strip()
        data_home = Path(data_raw) if data_raw else None

        return cls(home=home, path_dirs=path_dirs, data_home=data_home)

    def with_extra_roots(self, roots: list[str] | tuple[str, ...]) -> "Environment":
        extra = tuple(Path(r).expanduser() for r in roots if r)
        return replace(self, extra_roots=extra)

    @property
    def user_applications_dir(self) -> Optional[Path]:
        if self.home is None:
            return None
        if self.data_home is not None:
            return self.data_home / "applications"
        return self.home / ".local" / "share" / "applications"


def search_roots(env: Environment) -> list[Path]:
    """Directories the file search crawls, in order.

    Home-derived roots are left out when the home directory is unknown.
    Roots are not checked for existence here; the crawler skips missing ones.
    """
    roots: list[Path] = []
    if env.home is not None:
        roots.append(env.home)
    roots.extend(SYSTEM_ROOTS)
    if env.home is not None:
        roots.extend(env.home / sub for sub in HOME_SUBDIRS)
    roots.extend(env.extra_roots)
    return roots


def desktop_dirs(env: Environment) -> list[Path]:
    """Application-metadata directories in priority order (first wins)."""
    dirs: list[Path] = []
    user_dir = env.user_applications_dir
    if user_dir is not None:
        dirs.append(user_dir)
    dirs.append(SNAP_APPLICATIONS_DIR)
    dirs.append(SYSTEM_APPLICATIONS_DIR)
    return dirs
