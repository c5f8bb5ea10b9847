from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from quickfind.paths import get_paths

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _resolve_level(explicit: str | None) -> int:
    name = (explicit or os.environ.get("QUICKFIND_LOG_LEVEL") or "WARNING").upper().strip()
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else logging.WARNING


def _file_handler(fmt: logging.Formatter, level: int) -> RotatingFileHandler | None:
    try:
        log_path = get_paths().log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(str(log_path), maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    except OSError:
        # read-only state dir: stderr only
        return None
    fh.setLevel(level)
    fh.setFormatter(fmt)
    return fh


def setup_logging(level: str | None = None) -> logging.Logger:
    """Route logs to stderr and a rotating file; stdout stays clean for JSON."""
    lvl = _resolve_level(level)
    fmt = logging.Formatter(_FORMAT)

    root = logging.getLogger()
    root.setLevel(lvl)

    if not any(getattr(h, "_quickfind", False) for h in root.handlers):
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(fmt)
        sh._quickfind = True  # type: ignore[attr-defined]
        root.addHandler(sh)
        fh = _file_handler(fmt, lvl)
        if fh is not None:
            fh._quickfind = True  # type: ignore[attr-defined]
            root.addHandler(fh)

    for h in root.handlers:
        if getattr(h, "_quickfind", False):
            h.setLevel(lvl)

    return logging.getLogger("quickfind")
