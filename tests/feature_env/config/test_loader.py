from __future__ import annotations

import re
from pathlib import Path

import pytest

from feature_env.config.envconf import Config
from feature_env.config.loader import ConfigError, load_config, load_yaml_config
from feature_env.config.models import LoggingConfig


def _write(tmp_path: Path, lines: list[str]) -> Path:
    path = tmp_path / "env.yml"
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def test_load_config_happy_path(tmp_path: Path) -> None:
    # Filters are compiled, settings kept as free-form values.
    path = _write(
        tmp_path,
        [
            "version: 1",
            "filters:",
            "  feature: '^pods'",
            "  assess: ready",
            "logging:",
            "  level: debug",
            "settings:",
            "  namespace: e2e",
            "  replicas: 3",
        ],
    )
    config = load_config(path)
    assert isinstance(config, Config)
    assert isinstance(config.feature_regex, re.Pattern)
    assert config.feature_regex.pattern == "^pods"
    assert config.assessment_regex.pattern == "ready"
    assert config.value("namespace") == "e2e"
    assert config.value("replicas") == 3
    assert config.logging.level == "debug"


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    # An empty document means "no filters, no settings".
    config = load_config(_write(tmp_path, [""]))
    assert config.feature_regex is None
    assert config.assessment_regex is None
    assert config.settings == {}
    assert config.logging == LoggingConfig()


def test_non_mapping_root_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="mapping"):
        load_yaml_config(_write(tmp_path, ["- a", "- b"]))


def test_invalid_yaml_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_yaml_config(_write(tmp_path, ["filters: [unclosed"]))


def test_unknown_key_fails(tmp_path: Path) -> None:
    # Unknown keys are rejected to prevent silent misconfiguration.
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, ["filtres:", "  feature: x"]))


def test_invalid_regex_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="invalid regular expression"):
        load_config(_write(tmp_path, ["filters:", "  feature: '('"]))


def test_jsonl_logging_requires_path(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="logging.path"):
        load_config(_write(tmp_path, ["logging:", "  sink: jsonl"]))


def test_unsupported_version_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="version"):
        load_config(_write(tmp_path, ["version: 2"]))


def test_config_chaining_helpers() -> None:
    # Helpers mutate in place and return the same Config for chaining.
    config = Config()
    assert config.with_feature_regex("a").with_assessment_regex(re.compile("b")).with_setting("k", 1) is config
    assert config.feature_regex.pattern == "a"
    assert config.assessment_regex.pattern == "b"
    assert config.value("k") == 1
    assert config.value("missing", "d") == "d"
    config.with_feature_regex(None)
    assert config.feature_regex is None
