from __future__ import annotations

import re
from dataclasses import dataclass, field

from feature_env.config.models import EnvConfigModel, LoggingConfig


def _compile(pattern: str | re.Pattern[str] | None) -> re.Pattern[str] | None:
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


@dataclass(slots=True)
class Config:
    """Configuration shared by reference with every action and step.

    The orchestration engine only reads the two name filters; `settings` is
    free-form state owned by the suite's own functions.
    """

    feature_regex: re.Pattern[str] | None = None
    assessment_regex: re.Pattern[str] | None = None
    settings: dict[str, object] = field(default_factory=dict)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_model(cls, model: EnvConfigModel) -> Config:
        return cls(
            feature_regex=_compile(model.filters.feature),
            assessment_regex=_compile(model.filters.assess),
            settings=dict(model.settings),
            logging=model.logging,
        )

    def with_feature_regex(self, pattern: str | re.Pattern[str] | None) -> Config:
        self.feature_regex = _compile(pattern)
        return self

    def with_assessment_regex(self, pattern: str | re.Pattern[str] | None) -> Config:
        self.assessment_regex = _compile(pattern)
        return self

    def with_setting(self, key: str, value: object) -> Config:
        self.settings[key] = value
        return self

    def value(self, key: str, default: object = None) -> object:
        return self.settings.get(key, default)


def new_config() -> Config:
    return Config()
