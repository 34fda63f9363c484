from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from feature_env.kernel.errors import InvalidFeatureError
from feature_env.kernel.step import Level, Step, StepFunc


@dataclass(frozen=True, slots=True)
class Feature:
    # Feature is an immutable, named, ordered list of leveled steps.
    name: str
    steps: tuple[Step, ...] = ()


@dataclass(slots=True)
class FeatureBuilder:
    """Chainable assembly of a Feature.

    Steps keep the order in which they were declared; levels are only used to
    partition them at execution time, so `setup` may be called after `assess`
    without changing when the setup runs.
    """

    name: str
    _steps: list[Step] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidFeatureError("Feature name must be a non-empty string")

    def with_step(self, name: str, level: Level, func: StepFunc) -> FeatureBuilder:
        if not isinstance(level, Level):
            raise InvalidFeatureError(f"Unknown step level: {level!r}")
        if not callable(func):
            raise InvalidFeatureError(f"Step '{name}' function must be callable")
        self._steps.append(Step(level=level, name=name, func=func))
        return self

    def setup(self, func: StepFunc, name: str = "setup") -> FeatureBuilder:
        return self.with_step(name, Level.SETUP, func)

    def assess(self, name: str, func: StepFunc) -> FeatureBuilder:
        # Assessments become named sub-scopes, so a name is mandatory.
        if not isinstance(name, str) or not name:
            raise InvalidFeatureError("Assessment name must be a non-empty string")
        return self.with_step(name, Level.ASSESS, func)

    def teardown(self, func: StepFunc, name: str = "teardown") -> FeatureBuilder:
        return self.with_step(name, Level.TEARDOWN, func)

    def feature(self) -> Feature:
        return Feature(name=self.name, steps=tuple(self._steps))


def new_feature(name: str, steps: Sequence[Step] = ()) -> Feature:
    if not isinstance(name, str) or not name:
        raise InvalidFeatureError("Feature name must be a non-empty string")
    return Feature(name=name, steps=tuple(steps))
