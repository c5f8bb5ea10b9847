from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_path, user_state_path


@dataclass(frozen=True)
class QuickfindPaths:
    config_dir: Path
    state_dir: Path

    @property
    def config_path(self) -> Path:
        return self.config_dir / "config.yaml"

    @property
    def log_path(self) -> Path:
        return self.state_dir / "quickfind.log"


def get_paths(*, app_name: str = "quickfind") -> QuickfindPaths:
    cfg = user_config_path(app_name, ensure_exists=False)
    state = user_state_path(app_name, ensure_exists=False)
    return QuickfindPaths(config_dir=Path(cfg), state_dir=Path(state))


def find_config_path(explicit: str | None = None) -> Path:
    if explicit:
        return Path(explicit).expanduser().resolve()

    env = os.environ.get("QUICKFIND_CONFIG")
    if env:
        return Path(env).expanduser().resolve()

    return get_paths().config_path


def ensure_default_config(*, dest_path: Path, template: str) -> bool:
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    if dest_path.exists():
        return False
    dest_path.write_text(template, encoding="utf-8")
    return True
