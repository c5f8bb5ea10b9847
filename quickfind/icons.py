from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import Optional, Sequence

log = logging.getLogger(__name__)


SYSTEM_ICON_DIRS = (
    Path("/usr/share/pixmaps"),
    Path("/usr/share/icons/hicolor"),
    Path("/usr/share/icons"),
)

DEFAULT_SIZES = ("128x128", "256x256", "scalable", "64x64", "48x48", "32x32")
DEFAULT_EXTENSIONS = ("png", "svg", "xpm")

_MIME_TYPES = {
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


class IconReadError(OSError):
    """Raised when an icon file cannot be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read icon {path}: {reason}")
        self.path = path
        self.reason = reason


def icon_base_dirs(home: Optional[Path]) -> list[Path]:
    dirs: list[Path] = []
    if home is not None:
        dirs.append(home / ".local" / "share" / "icons")
        dirs.append(home / ".icons")
    dirs.extend(SYSTEM_ICON_DIRS)
    return dirs


class IconResolver:
    """Resolves icon tokens (``firefox``) to image files using theme layout.

    Lookup runs two passes over the base directories: flat
    ``<dir>/<token>.<ext>`` files first, then themed
    ``<dir>/<size>/apps/<token>.<ext>`` and ``<dir>/<size>/<token>.<ext>``
    in size preference order.
    """

    def __init__(
        self,
        base_dirs: Sequence[Path],
        *,
        sizes: Sequence[str] = DEFAULT_SIZES,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        self.base_dirs = [Path(d) for d in base_dirs]
        self.sizes = tuple(sizes)
        self.extensions = tuple(e.lstrip(".") for e in extensions)

    @classmethod
    def for_home(cls, home: Optional[Path], **kwargs) -> "IconResolver":
        return cls(icon_base_dirs(home), **kwargs)

    def resolve(self, token: str) -> Optional[str]:
        token = (token or "").strip()
        if not token:
            return None

        p = Path(token)
        if p.is_absolute():
            return token if p.is_file() else None

        for base in self.base_dirs:
            for ext in self.extensions:
                cand = base / f"{token}.{ext}"
                if cand.is_file():
                    return str(cand)

        for base in self.base_dirs:
            for size in self.sizes:
                for ext in self.extensions:
                    for cand in (base / size / "apps" / f"{token}.{ext}", base / size / f"{token}.{ext}"):
                        if cand.is_file():
                            return str(cand)

        log.debug("icon %r not found", token)
        return None


def mime_type_for(path: str | Path) -> str:
    return _MIME_TYPES.get(Path(path).suffix.lower(), "image/png")


def encode_icon(icon_path: str | Path) -> str:
    """Read an icon file and return it as a ``data:`` URI."""
    try:
        data = Path(icon_path).read_bytes()
    except OSError as e:
        log.debug("icon read failed for %s: %s", icon_path, e)
        raise IconReadError(str(icon_path), e.strerror or str(e)) from e

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type_for(icon_path)};base64,{encoded}"
