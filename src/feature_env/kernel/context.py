from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from types import MappingProxyType

from feature_env.kernel.errors import ContextCancelled, DeadlineExceeded


def _frozen(values: Mapping[str, object]) -> Mapping[str, object]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True, slots=True)
class Context:
    # Context is immutable ambient state threaded through actions and steps.
    # Every with_* helper returns a new Context; the receiver is never touched.
    values: Mapping[str, object] = field(default_factory=lambda: _frozen({}))
    deadline: datetime | None = None
    signals: tuple[threading.Event, ...] = ()

    def value(self, key: str, default: object = None) -> object:
        return self.values.get(key, default)

    def with_value(self, key: str, value: object) -> Context:
        updated = dict(self.values)
        updated[key] = value
        return replace(self, values=_frozen(updated))

    def with_deadline(self, deadline: datetime) -> Context:
        if deadline.tzinfo is None:
            raise ValueError("Context deadline must be timezone-aware")
        # A derived context can only tighten the deadline of its parent.
        if self.deadline is not None and self.deadline <= deadline:
            return self
        return replace(self, deadline=deadline)

    def with_timeout(self, seconds: float) -> Context:
        return self.with_deadline(datetime.now(tz=UTC) + timedelta(seconds=seconds))

    def with_cancel(self) -> tuple[Context, Callable[[], None]]:
        # Parent signals are inherited, so cancelling a parent also cancels this child.
        signal = threading.Event()
        return replace(self, signals=(*self.signals, signal)), signal.set

    @property
    def cancelled(self) -> bool:
        return any(signal.is_set() for signal in self.signals)

    @property
    def expired(self) -> bool:
        return self.deadline is not None and datetime.now(tz=UTC) >= self.deadline

    def done(self) -> bool:
        return self.cancelled or self.expired

    def raise_if_done(self) -> None:
        if self.cancelled:
            raise ContextCancelled("context cancelled")
        if self.expired:
            raise DeadlineExceeded(f"context deadline exceeded at {self.deadline.isoformat()}")


def background() -> Context:
    # Root context: no values, no deadline, never cancelled.
    return Context()
