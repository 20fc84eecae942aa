from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from settings_tree.config.models import SchemaAppConfig
from settings_tree.lens.defaults import default_table
from settings_tree.lens.lens import Fallback


# ConfigError is raised for invalid configuration (fail fast).
class ConfigError(ValueError):
    pass


def load_yaml_config(path: Path) -> dict[str, object]:
    # YAML loader; returns a raw mapping for validation.
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    return raw


def load_config(path: Path) -> SchemaAppConfig:
    raw = load_yaml_config(path)
    try:
        return SchemaAppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid schema config {path}: {exc}") from exc


def load_default_table(path: Path) -> Fallback:
    # Fallback table seeded from a nested YAML mapping keyed by path segments.
    return default_table(load_yaml_config(path))
