from __future__ import annotations

import argparse
import json
from typing import Any

from quickfind.config import DEFAULT_CONFIG_YAML, load_config
from quickfind.engine import SearchEngine
from quickfind.icons import IconReadError
from quickfind.logging_setup import setup_logging
from quickfind.paths import ensure_default_config, find_config_path, get_paths
from quickfind.yaml_config import get_dotted, set_dotted


def _emit_ok(payload: dict[str, Any]) -> int:
    out: dict[str, Any] = {"ok": True}
    out.update(payload)
    print(json.dumps(out))
    return 0


def _emit_error(message: str) -> int:
    print(json.dumps({"ok": False, "error": {"message": str(message)}}))
    return 2


def _engine(args: argparse.Namespace) -> SearchEngine:
    return SearchEngine.from_environ(load_config(find_config_path(args.config)))


def _cmd_files(args: argparse.Namespace) -> int:
    results = _engine(args).search_files(args.query)
    return _emit_ok({"results": [r.to_dict() for r in results]})


def _cmd_apps(args: argparse.Namespace) -> int:
    results = _engine(args).search_executables(args.query)
    return _emit_ok({"results": [r.to_dict() for r in results]})


def _cmd_launch(args: argparse.Namespace) -> int:
    if _engine(args).launch(args.kind, args.target):
        return _emit_ok({"launched": args.target})
    return _emit_error(f"failed to start {args.target}")


def _cmd_icon(args: argparse.Namespace) -> int:
    try:
        data = _engine(args).get_icon_data(args.path)
    except IconReadError as e:
        return _emit_error(str(e))
    return _emit_ok({"data": data})


def _cmd_init(args: argparse.Namespace) -> int:
    dest = find_config_path(args.config)
    created = ensure_default_config(dest_path=dest, template=DEFAULT_CONFIG_YAML)
    print(f"Config: {dest}{'' if created else ' (exists)'}")
    print(f"Log: {get_paths().log_path}")
    return 0


def _cmd_config_get(args: argparse.Namespace) -> int:
    print(get_dotted(find_config_path(args.config), args.key, default=None))
    return 0


def _cmd_config_set(args: argparse.Namespace) -> int:
    cfg_path = find_config_path(args.config)
    ensure_default_config(dest_path=cfg_path, template=DEFAULT_CONFIG_YAML)
    set_dotted(cfg_path, args.key, args.value)
    print(f"OK: {args.key} = {args.value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="quickfind", description="Search files and applications, then launch them")
    p.add_argument("--config", default=None, help="Path to config.yaml (default: XDG config dir)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_files = sub.add_parser("files", help="Fuzzy search files under home and system roots")
    p_files.add_argument("query")
    p_files.set_defaults(func=_cmd_files)

    p_apps = sub.add_parser("apps", help="Fuzzy search executables on PATH")
    p_apps.add_argument("query")
    p_apps.set_defaults(func=_cmd_apps)

    p_launch = sub.add_parser("launch", help="Run or open a result")
    p_launch.add_argument("kind", help="Result kind, e.g. app / pdf / file")
    p_launch.add_argument("target")
    p_launch.set_defaults(func=_cmd_launch)

    p_icon = sub.add_parser("icon", help="Print an icon file as a data: URI")
    p_icon.add_argument("path")
    p_icon.set_defaults(func=_cmd_icon)

    p_init = sub.add_parser("init", help="Write a default config.yaml")
    p_init.set_defaults(func=_cmd_init)

    p_cfg = sub.add_parser("config", help="Read or change config values")
    cfg_sub = p_cfg.add_subparsers(dest="cfg_cmd", required=True)

    p_get = cfg_sub.add_parser("get", help="Print a value")
    p_get.add_argument("key", help="e.g. search.max_depth")
    p_get.set_defaults(func=_cmd_config_get)

    p_set = cfg_sub.add_parser("set", help="Set a value")
    p_set.add_argument("key", help="e.g. search.max_depth")
    p_set.add_argument("value", help="e.g. 4 / true / xdg-open")
    p_set.set_defaults(func=_cmd_config_set)

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
