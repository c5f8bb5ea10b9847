from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from quickfind.config_model import default_opener
from quickfind.kinds import ItemKind, parse_kind

log = logging.getLogger(__name__)

Spawn = Callable[..., object]


class LaunchAction(str, Enum):
    RUN = "run"
    OPEN = "open"


# Every ItemKind has an entry; kinds from outside the enum fall back to OPEN.
LAUNCH_ACTIONS: dict[ItemKind, LaunchAction] = {
    ItemKind.APP: LaunchAction.RUN,
    ItemKind.FILE: LaunchAction.RUN,
    ItemKind.PDF: LaunchAction.OPEN,
    ItemKind.DOCUMENT: LaunchAction.OPEN,
    ItemKind.TEXT: LaunchAction.OPEN,
    ItemKind.IMAGE: LaunchAction.OPEN,
    ItemKind.DESKTOP: LaunchAction.OPEN,
    ItemKind.SCRIPT: LaunchAction.OPEN,
}


def action_for(kind: str | ItemKind) -> LaunchAction:
    parsed = parse_kind(kind)
    if parsed is None:
        return LaunchAction.OPEN
    return LAUNCH_ACTIONS[parsed]


@dataclass
class Launcher:
    """Starts a search result: runs it, or opens it with the default handler.

    Processes are detached and never waited on. Each action returns whether
    the spawn itself succeeded.
    """

    opener: list[str] = field(default_factory=default_opener)
    spawn: Spawn = subprocess.Popen

    def _spawn(self, cmd: list[str]) -> bool:
        try:
            self.spawn(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
            return True
        except (OSError, ValueError) as e:
            log.warning("failed to start %s: %s", cmd, e)
            return False

    def run_executable(self, target: str) -> bool:
        return self._spawn([target])

    def open_with_handler(self, target: str) -> bool:
        return self._spawn([*self.opener, target])

    def launch(self, kind: str | ItemKind, target: str) -> bool:
        action = action_for(kind)
        log.info("%s %s (kind=%s)", action.value, target, getattr(kind, "value", kind))
        if action is LaunchAction.RUN:
            return self.run_executable(target)
        return self.open_with_handler(target)
