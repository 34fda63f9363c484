from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

# Severity order used by sinks to drop records below their threshold.
LEVELS: tuple[str, ...] = ("debug", "info", "warning", "error", "fatal")


@dataclass(frozen=True, slots=True)
class LogMessage:
    # Structured log payload for orchestration diagnostics.
    level: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    fields: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.level or not self.message:
            raise ValueError("LogMessage requires non-empty level/message")
        if self.level not in LEVELS:
            raise ValueError(f"Unknown log level: {self.level}")


def level_rank(level: str) -> int:
    return LEVELS.index(level)
