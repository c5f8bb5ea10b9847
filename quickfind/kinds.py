from __future__ import annotations

from enum import Enum
from pathlib import PurePath


class ItemKind(str, Enum):
    PDF = "pdf"
    DOCUMENT = "document"
    TEXT = "text"
    IMAGE = "image"
    DESKTOP = "desktop"
    SCRIPT = "script"
    APP = "app"
    FILE = "file"


_EXTENSION_KINDS: dict[str, ItemKind] = {
    "pdf": ItemKind.PDF,
    "docx": ItemKind.DOCUMENT,
    "doc": ItemKind.DOCUMENT,
    "odt": ItemKind.DOCUMENT,
    "txt": ItemKind.TEXT,
    "md": ItemKind.TEXT,
    "png": ItemKind.IMAGE,
    "jpg": ItemKind.IMAGE,
    "jpeg": ItemKind.IMAGE,
    "webp": ItemKind.IMAGE,
    "desktop": ItemKind.DESKTOP,
    "sh": ItemKind.SCRIPT,
    "py": ItemKind.SCRIPT,
    "bin": ItemKind.SCRIPT,
    "exe": ItemKind.SCRIPT,
}


def classify(path: str | PurePath) -> ItemKind:
    """Map a file's extension to its content kind.

    Files without an extension, or with one not in the table, are ``FILE``.
    """
    suffix = PurePath(path).suffix
    if not suffix:
        return ItemKind.FILE
    return _EXTENSION_KINDS.get(suffix[1:].lower(), ItemKind.FILE)


def parse_kind(value: str | ItemKind) -> ItemKind | None:
    """Kind name from the boundary; None for names outside the enum."""
    if isinstance(value, ItemKind):
        return value
    try:
        return ItemKind((value or "").strip().lower())
    except ValueError:
        return None
