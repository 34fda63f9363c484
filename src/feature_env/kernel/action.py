from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from feature_env.kernel.context import Context
from feature_env.kernel.errors import ActionError, ContractViolation
from feature_env.kernel.step import EnvFunc

if TYPE_CHECKING:
    from feature_env.config.envconf import Config


class ActionRole(Enum):
    # Role is fixed at registration and selects both the phase and the failure policy.
    SETUP = "setup"
    BEFORE = "before"
    AFTER = "after"
    FINISH = "finish"


@dataclass(frozen=True, slots=True)
class Action:
    role: ActionRole
    funcs: tuple[EnvFunc | None, ...]

    def run(self, ctx: Context, config: Config) -> Context:
        # Output context of function i is the input of function i+1.
        for index, func in enumerate(self.funcs):
            if func is None:
                continue
            try:
                result = func(ctx, config)
            except ContractViolation:
                raise
            except Exception as exc:  # noqa: BLE001 - wrapped so callers pick the phase policy
                # Stop at the first failure; ctx is the last context successfully produced.
                raise ActionError(self.role, index, ctx, exc) from exc
            if result is not None:
                ctx = result
        return ctx
