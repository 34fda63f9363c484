from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from feature_env.kernel.action import ActionRole
    from feature_env.kernel.context import Context


class ContractViolation(RuntimeError):
    # Caller misuse (missing context); never handled by the engine or reporting scopes.
    pass


class ContextCancelled(RuntimeError):
    pass


class DeadlineExceeded(TimeoutError):
    pass


class InvalidFeatureError(ValueError):
    pass


class ActionError(Exception):
    # Recoverable action failure; keeps the last context produced before the failing function.
    def __init__(self, role: ActionRole, index: int, context: Context, cause: Exception) -> None:
        super().__init__(f"{role.value} action function #{index} failed: {cause}")
        self.role = role
        self.index = index
        self.context = context
        self.cause = cause


class SuiteAborted(SystemExit):
    # Setup failure makes the whole suite unusable: exit the process with status 1.
    def __init__(self, error: ActionError) -> None:
        super().__init__(1)
        self.error = error

    def __str__(self) -> str:
        return f"suite aborted during setup: {self.error}"
