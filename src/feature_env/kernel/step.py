from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from feature_env.kernel.context import Context

if TYPE_CHECKING:
    from feature_env.config.envconf import Config
    from feature_env.reporting.scope import Reporter


class Level(Enum):
    # Position of a step inside its feature; execution order is SETUP, ASSESS, TEARDOWN.
    SETUP = "setup"
    ASSESS = "assess"
    TEARDOWN = "teardown"


class StepFunc(Protocol):
    # Feature steps report failures through the reporter instead of a return value.
    # Returning None keeps the incoming context.
    def __call__(self, ctx: Context, reporter: Reporter, config: Config) -> Context | None:
        raise NotImplementedError("StepFunc protocol has no implementation")


class EnvFunc(Protocol):
    # Action functions signal failure by raising.
    def __call__(self, ctx: Context, config: Config) -> Context | None:
        raise NotImplementedError("EnvFunc protocol has no implementation")


@dataclass(frozen=True, slots=True)
class Step:
    level: Level
    name: str
    func: StepFunc

    def __call__(self, ctx: Context, reporter: Reporter, config: Config) -> Context:
        result = self.func(ctx, reporter, config)
        return ctx if result is None else result


def get_steps_by_level(steps: Iterable[Step], level: Level) -> list[Step]:
    # Declaration order is preserved within a level.
    return [step for step in steps if step.level is level]
