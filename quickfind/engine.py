from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from quickfind.config_model import ConfigModel
from quickfind.crawler import crawl, scan_path_executables
from quickfind.desktop_entries import DesktopIndex, build_index
from quickfind.environment import Environment, desktop_dirs, search_roots
from quickfind.fuzzy import rank
from quickfind.icons import IconReadError, IconResolver, encode_icon
from quickfind.kinds import ItemKind, classify
from quickfind.launcher import Launcher
from quickfind.models import SearchResult

log = logging.getLogger(__name__)


@dataclass
class SearchEngine:
    """The operations the presentation layer calls.

    Nothing is cached between calls: every search crawls and indexes afresh.
    """

    env: Environment
    config: ConfigModel = field(default_factory=ConfigModel)
    launcher: Optional[Launcher] = None

    def __post_init__(self) -> None:
        if self.config.search.extra_roots and not self.env.extra_roots:
            self.env = self.env.with_extra_roots(self.config.search.extra_roots)
        if self.launcher is None:
            self.launcher = Launcher(opener=list(self.config.launch.opener))

    @classmethod
    def from_environ(cls, config: ConfigModel | None = None) -> "SearchEngine":
        return cls(env=Environment.from_environ(), config=config or ConfigModel())

    def icon_resolver(self) -> IconResolver:
        icons = self.config.icons
        return IconResolver.for_home(self.env.home, sizes=icons.sizes, extensions=icons.extensions)

    def search_files(self, query: str) -> list[SearchResult]:
        if not (query or "").strip():
            return []
        s = self.config.search
        candidates = crawl(search_roots(self.env), s.max_depth)
        ranked = rank(query, candidates, s.file_cap, workers=s.workers, chunk_size=s.chunk_size)
        return [
            SearchResult(name=r.name, path=r.path, kind=classify(r.path), score=r.score)
            for r in ranked
        ]

    def search_executables(self, query: str) -> list[SearchResult]:
        if not (query or "").strip():
            return []
        s = self.config.search
        candidates = scan_path_executables(self.env.path_dirs)
        ranked = rank(query, candidates, s.app_cap, workers=s.workers, chunk_size=s.chunk_size)
        if not ranked:
            return []

        resolver = self.icon_resolver()
        index = build_index(desktop_dirs(self.env), resolver)
        return [
            SearchResult(
                name=r.name,
                path=r.path,
                kind=ItemKind.APP,
                score=r.score,
                icon=self._icon_for(r.name, index),
            )
            for r in ranked
        ]

    def _icon_for(self, name: str, index: DesktopIndex) -> Optional[str]:
        entry = index.get(name)
        if entry is None or not entry.icon:
            return None
        # themed tokens were resolved by build_index; absolute Icon= paths are taken as written
        icon_path = entry.icon
        if not Path(icon_path).is_file():
            return None
        if not self.config.icons.inline_icons:
            return icon_path
        try:
            return encode_icon(icon_path)
        except IconReadError as e:
            log.debug("icon for %s unavailable: %s", name, e)
            return None

    def launch(self, kind: str | ItemKind, target: str) -> bool:
        assert self.launcher is not None
        return self.launcher.launch(kind, target)

    def get_icon_data(self, icon_path: str) -> str:
        return encode_icon(icon_path)
