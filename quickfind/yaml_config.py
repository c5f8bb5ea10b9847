from __future__ import annotations

from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedSeq


def _yaml() -> YAML:
    y = YAML()
    y.preserve_quotes = True
    y.indent(mapping=2, sequence=4, offset=2)
    return y


def _split_key(dotted_key: str) -> list[str]:
    parts = [p for p in (dotted_key or "").split(".") if p]
    if not parts:
        raise ValueError("key must look like 'section.name'")
    return parts


def read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = _yaml().load(f)
    return data if isinstance(data, dict) else {}


def write_yaml(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        _yaml().dump(data, f)
    tmp.replace(path)


def get_dotted(path: Path, dotted_key: str, default: Any = None) -> Any:
    cur: Any = read_yaml(path)
    for p in _split_key(dotted_key):
        if not isinstance(cur, dict) or p not in cur:
            return default
        cur = cur[p]
    return cur


def parse_value(raw: str, current: Any = None) -> Any:
    """Turn a command-line string into a YAML value.

    List-valued keys (``launch.opener``, ``search.extra_roots``) take a
    comma or whitespace separated string.
    """
    if isinstance(current, list):
        items = [s for s in raw.replace(",", " ").split() if s]
        seq = CommentedSeq(items)
        seq.fa.set_flow_style()
        return seq

    low = raw.strip().lower()
    if low in ("null", "none", "~"):
        return None
    if low in ("true", "yes", "on"):
        return True
    if low in ("false", "no", "off"):
        return False
    try:
        return float(low) if "." in low else int(low)
    except ValueError:
        return raw


def set_dotted(path: Path, dotted_key: str, value: Any) -> None:
    parts = _split_key(dotted_key)
    data = read_yaml(path)
    section: Any = data
    for p in parts[:-1]:
        nxt = section.get(p)
        if not isinstance(nxt, dict):
            nxt = {}
            section[p] = nxt
        section = nxt

    last = parts[-1]
    section[last] = parse_value(value, section.get(last)) if isinstance(value, str) else value
    write_yaml(path, data)
