from __future__ import annotations

import argparse
import re
from collections.abc import Sequence
from pathlib import Path

from feature_env.config.envconf import Config
from feature_env.config.loader import ConfigError, load_config


def build_parser() -> argparse.ArgumentParser:
    # Flags share the process argv with the test runner, so help is left to the runner.
    parser = argparse.ArgumentParser(prog="feature-env", add_help=False)
    parser.add_argument("--config", help="Path to YAML environment config")
    parser.add_argument("--feature", help="Regular expression selecting features by name")
    parser.add_argument("--assess", help="Regular expression selecting assessments by name")
    return parser


def parse_args(argv: Sequence[str] | None) -> tuple[argparse.Namespace, list[str]]:
    # Unknown arguments are returned untouched so they can be forwarded to the suite runner.
    return build_parser().parse_known_args(argv)


def config_from_flags(argv: Sequence[str] | None = None) -> Config:
    # Flags take precedence over values loaded from --config.
    args, _ = parse_args(argv)
    config = load_config(Path(args.config)) if args.config else Config()
    apply_filter_overrides(config, feature=args.feature, assess=args.assess)
    return config


def apply_filter_overrides(config: Config, *, feature: str | None, assess: str | None) -> None:
    try:
        if feature is not None:
            config.with_feature_regex(feature)
        if assess is not None:
            config.with_assessment_regex(assess)
    except re.error as exc:
        raise ConfigError(f"invalid filter expression: {exc}") from exc
