from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from quickfind.kinds import ItemKind


@dataclass(frozen=True)
class Candidate:
    """A file or PATH executable eligible for matching."""

    name: str
    path: str


@dataclass(frozen=True)
class DesktopEntry:
    """Parsed application metadata (Exec/Icon of a .desktop file)."""

    executable: str
    icon: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class ScoredCandidate:
    name: str
    path: str
    score: int


@dataclass(frozen=True)
class SearchResult:
    """Search result returned to the presentation layer."""

    name: str
    path: str
    kind: ItemKind
    score: int
    icon: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "kind": self.kind.value,
            "score": self.score,
            "icon": self.icon,
        }
