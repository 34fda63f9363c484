from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from feature_env.config.envconf import Config
from feature_env.config.models import EnvConfigModel


# ConfigError is raised for invalid configuration (fail fast, before any action runs).
class ConfigError(ValueError):
    pass


def load_yaml_config(path: Path) -> dict[str, object]:
    # Raw YAML mapping; validation happens in load_config.
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw


def parse_config(raw: dict[str, object]) -> EnvConfigModel:
    try:
        return EnvConfigModel.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def load_config(path: Path) -> Config:
    return Config.from_model(parse_config(load_yaml_config(path)))
