from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from quickfind.config_model import ConfigModel

log = logging.getLogger(__name__)


DEFAULT_CONFIG_YAML = """\
# quickfind configuration. Every key is optional.
search:
  max_depth: 3
  file_cap: 100
  app_cap: 50
  workers: 4
  chunk_size: 256
  extra_roots: []

icons:
  sizes: ["128x128", "256x256", "scalable", "64x64", "48x48", "32x32"]
  extensions: ["png", "svg", "xpm"]
  inline_icons: true

launch:
  opener: ["xdg-open"]
"""


def _ensure_mapping(root: Any) -> dict[str, Any]:
    if isinstance(root, dict):
        return root
    return {}


def load_config(config_path: str | Path | None) -> ConfigModel:
    if config_path is None:
        return ConfigModel()

    path = Path(config_path)
    if not path.exists():
        log.debug("config %s not found, using defaults", path)
        return ConfigModel()

    try:
        raw = _ensure_mapping(yaml.safe_load(path.read_text(encoding="utf-8")))
    except (OSError, yaml.YAMLError) as e:
        log.warning("cannot read config %s: %s; using defaults", path, e)
        return ConfigModel()

    try:
        return ConfigModel.model_validate(raw)
    except ValidationError as e:
        log.warning("invalid config %s: %s; using defaults", path, e)
        return ConfigModel()
