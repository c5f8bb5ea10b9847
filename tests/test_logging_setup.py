from __future__ import annotations

import logging
from pathlib import Path

import pytest

from quickfind.logging_setup import setup_logging


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    level = root.level
    yield root
    for h in [h for h in root.handlers if getattr(h, "_quickfind", False)]:
        root.removeHandler(h)
        h.close()
    root.setLevel(level)


def test_setup_logging_levels_and_file(tmp_path: Path, monkeypatch, clean_root) -> None:
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setenv("QUICKFIND_LOG_LEVEL", "info")

    setup_logging()
    assert clean_root.level == logging.INFO

    setup_logging("DEBUG")
    assert clean_root.level == logging.DEBUG
    ours = [h for h in clean_root.handlers if getattr(h, "_quickfind", False)]
    assert len(ours) == 2
    assert all(h.level == logging.DEBUG for h in ours)

    logging.getLogger("quickfind.test").debug("hello")
    for h in ours:
        h.flush()
    assert "hello" in (tmp_path / "state" / "quickfind" / "quickfind.log").read_text(encoding="utf-8")


def test_unknown_level_falls_back(monkeypatch, tmp_path: Path, clean_root) -> None:
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    setup_logging("LOUD")
    assert clean_root.level == logging.WARNING
