from __future__ import annotations

from pathlib import Path

import pytest

from quickfind import engine as engine_mod
from quickfind import environment
from quickfind.config_model import ConfigModel
from quickfind.engine import SearchEngine
from quickfind.environment import Environment
from quickfind.icons import IconReadError
from quickfind.kinds import ItemKind
from quickfind.launcher import Launcher


def _touch(p: Path, data: bytes = b"x", mode: int | None = None) -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)
    if mode is not None:
        p.chmod(mode)
    return p


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    # keep real /usr/bin etc. out of the file search
    monkeypatch.setattr(environment, "SYSTEM_ROOTS", ())
    h = tmp_path / "home"
    h.mkdir()
    return h


def test_empty_query_returns_nothing(home: Path) -> None:
    eng = SearchEngine(env=Environment(home=home, path_dirs=(home,)))
    assert eng.search_files("") == []
    assert eng.search_files("   ") == []
    assert eng.search_executables(" \t ") == []


def test_search_files_classifies_and_orders(home: Path) -> None:
    _touch(home / "report.pdf")
    _touch(home / "Documents" / "report-draft.docx")
    _touch(home / "notes.txt")
    _touch(home / "Desktop" / "photo.JPG")

    results = SearchEngine(env=Environment(home=home)).search_files("report")
    by_path = {r.path: r for r in results}

    assert by_path[str(home / "report.pdf")].kind == ItemKind.PDF
    assert by_path[str(home / "Documents" / "report-draft.docx")].kind == ItemKind.DOCUMENT
    assert str(home / "notes.txt") not in by_path
    assert results[0].name == "report.pdf"
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)


def test_search_files_crawls_home_subdirs_again(home: Path) -> None:
    _touch(home / "Documents" / "thesis.odt")
    results = SearchEngine(env=Environment(home=home)).search_files("thesis")
    assert [r.name for r in results] == ["thesis.odt", "thesis.odt"]


def test_search_files_cap(home: Path) -> None:
    for i in range(150):
        _touch(home / f"file{i:03d}.txt")
    results = SearchEngine(env=Environment(home=home)).search_files("file")
    assert len(results) == 100


def test_search_files_respects_config(home: Path) -> None:
    _touch(home / "a" / "b" / "deep.txt")
    cfg = ConfigModel.model_validate({"search": {"max_depth": 2, "file_cap": 5}})
    assert SearchEngine(env=Environment(home=home), config=cfg).search_files("deep") == []
    cfg = ConfigModel.model_validate({"search": {"max_depth": 3}})
    assert [r.name for r in SearchEngine(env=Environment(home=home), config=cfg).search_files("deep")] == ["deep.txt"]


@pytest.fixture
def apps_setup(tmp_path: Path, home: Path, monkeypatch) -> Environment:
    bin1 = tmp_path / "bin1"
    bin2 = tmp_path / "bin2"
    _touch(bin1 / "qfbrowser", mode=0o755)
    _touch(bin2 / "qfbrowser", mode=0o755)
    _touch(bin2 / "qfbrowser-helper", mode=0o755)
    _touch(bin2 / "qfbrowser.conf", mode=0o644)

    apps = tmp_path / "applications"
    _touch(apps / "qfbrowser.desktop", b"[Desktop Entry]\nName=QF Browser\nExec=qfbrowser %u\nIcon=qfbrowser\n")
    _touch(home / ".local" / "share" / "icons" / "qfbrowser.png", b"\x89PNG-icon")
    monkeypatch.setattr(engine_mod, "desktop_dirs", lambda env: [apps])

    return Environment(home=home, path_dirs=(bin1, bin2))


def test_search_executables(apps_setup: Environment) -> None:
    results = SearchEngine(env=apps_setup).search_executables("qfbrowser")
    names = [r.name for r in results]

    assert sorted(names) == ["qfbrowser", "qfbrowser-helper"]
    assert len(names) == len(set(names))
    assert all(r.kind == ItemKind.APP for r in results)

    top = results[0]
    assert top.name == "qfbrowser"
    assert top.path.endswith("bin1/qfbrowser")
    assert top.icon is not None and top.icon.startswith("data:image/png;base64,")
    assert results[1].icon is None


def test_search_executables_icon_paths_when_not_inline(apps_setup: Environment, home: Path) -> None:
    cfg = ConfigModel.model_validate({"icons": {"inline_icons": False}})
    results = SearchEngine(env=apps_setup, config=cfg).search_executables("qfbrowser")
    assert results[0].icon == str(home / ".local" / "share" / "icons" / "qfbrowser.png")


def test_search_executables_unreadable_icon(apps_setup: Environment, monkeypatch) -> None:
    def fail(icon_path: str) -> str:
        raise IconReadError(icon_path, "permission denied")

    monkeypatch.setattr(engine_mod, "encode_icon", fail)
    results = SearchEngine(env=apps_setup).search_executables("qfbrowser")
    assert [r.name for r in results] == ["qfbrowser", "qfbrowser-helper"]
    assert results[0].icon is None


def test_search_executables_absolute_icon(tmp_path: Path, home: Path, monkeypatch) -> None:
    bindir = tmp_path / "bin"
    _touch(bindir / "qfviewer", mode=0o755)
    _touch(bindir / "qfeditor", mode=0o755)
    icon = _touch(tmp_path / "pixmaps" / "qfviewer.svg", b"<svg/>")

    apps = tmp_path / "applications"
    _touch(apps / "qfviewer.desktop", f"[Desktop Entry]\nExec=qfviewer\nIcon={icon}\n".encode())
    _touch(apps / "qfeditor.desktop", f"[Desktop Entry]\nExec=qfeditor\nIcon={tmp_path / 'gone.png'}\n".encode())
    monkeypatch.setattr(engine_mod, "desktop_dirs", lambda env: [apps])

    eng = SearchEngine(env=Environment(home=home, path_dirs=(bindir,)))
    icons = {r.name: r.icon for r in eng.search_executables("qf")}
    assert icons["qfviewer"] == "data:image/svg+xml;base64,PHN2Zy8+"
    assert icons["qfeditor"] is None


def test_search_executables_cap(tmp_path: Path, home: Path, monkeypatch) -> None:
    bindir = tmp_path / "bin"
    for i in range(80):
        _touch(bindir / f"qftool{i}", mode=0o755)
    monkeypatch.setattr(engine_mod, "desktop_dirs", lambda env: [])
    results = SearchEngine(env=Environment(home=home, path_dirs=(bindir,))).search_executables("qftool")
    assert len(results) == 50


def test_launch_goes_through_launcher(home: Path) -> None:
    calls: list[list[str]] = []
    launcher = Launcher(opener=["open-it"], spawn=lambda cmd, **kw: calls.append(list(cmd)))
    eng = SearchEngine(env=Environment(home=home), launcher=launcher)

    assert eng.launch("app", "/usr/bin/qf") is True
    assert eng.launch("pdf", "/tmp/a.pdf") is True
    assert eng.launch("unknown-kind", "/tmp/a") is True
    assert calls == [["/usr/bin/qf"], ["open-it", "/tmp/a.pdf"], ["open-it", "/tmp/a"]]


def test_launcher_built_from_config(home: Path) -> None:
    cfg = ConfigModel.model_validate({"launch": {"opener": ["gio", "open"]}})
    eng = SearchEngine(env=Environment(home=home), config=cfg)
    assert eng.launcher is not None
    assert eng.launcher.opener == ["gio", "open"]


def test_get_icon_data(home: Path) -> None:
    icon = _touch(home / "icon.svg", b"<svg/>")
    eng = SearchEngine(env=Environment(home=home))
    assert eng.get_icon_data(str(icon)) == "data:image/svg+xml;base64,PHN2Zy8+"
    with pytest.raises(IconReadError):
        eng.get_icon_data(str(home / "missing.png"))
