from __future__ import annotations

from collections.abc import Callable, Iterator
from enum import Enum
from typing import NoReturn, Protocol

import pytest

from feature_env.kernel.errors import ContractViolation


class ScopeStatus(Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class ScopeFailed(AssertionError):
    # Raised by fail(); terminates the body of the current scope.
    pass


class ScopeSkipped(Exception):
    # Raised by skip(); terminates the body of the current scope.
    pass


class Reporter(Protocol):
    # Reporting handle passed to feature steps and to Environment.test.
    name: str

    @property
    def failed(self) -> bool:
        raise NotImplementedError

    @property
    def skipped(self) -> bool:
        raise NotImplementedError

    def run(self, name: str, body: Callable[[Reporter], None]) -> bool:
        raise NotImplementedError

    def error(self, reason: str) -> None:
        raise NotImplementedError

    def fail(self, reason: str) -> NoReturn:
        raise NotImplementedError

    def skip(self, reason: str) -> NoReturn:
        raise NotImplementedError


class ScopeReporter:
    """In-memory hierarchical reporting scope.

    Every `run` call creates a child scope and executes its body synchronously.
    `fail` and `skip` stop the body of the scope they are called on; the scope
    that created it keeps going. A failed child marks all its ancestors failed,
    a skipped child does not. `error` records a failure without stopping.
    """

    def __init__(self, name: str, parent: ScopeReporter | None = None) -> None:
        self.name = name
        self.parent = parent
        self.children: list[ScopeReporter] = []
        self.status = ScopeStatus.PASSED
        self.messages: list[str] = []

    @property
    def path(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.path}/{self.name}"

    @property
    def failed(self) -> bool:
        return self.status is ScopeStatus.FAILED

    @property
    def skipped(self) -> bool:
        return self.status is ScopeStatus.SKIPPED

    @property
    def reason(self) -> str | None:
        return "; ".join(self.messages) if self.messages else None

    def run(self, name: str, body: Callable[[Reporter], None]) -> bool:
        child = self._child(name)
        self.children.append(child)
        try:
            body(child)
        except (ScopeFailed, ScopeSkipped):
            pass
        except pytest.skip.Exception as exc:
            # Steps may use pytest outcomes directly; they end only this scope.
            child._mark_skipped(exc.msg or "skipped")
        except pytest.fail.Exception as exc:
            child._mark_failed(exc.msg or "failed")
        except ContractViolation:
            raise
        except Exception as exc:  # noqa: BLE001 - an unexpected error fails only this scope
            child._mark_failed(f"{type(exc).__name__}: {exc}")
        return not child.failed

    def error(self, reason: str) -> None:
        self._mark_failed(reason)

    def fail(self, reason: str) -> NoReturn:
        self._mark_failed(reason)
        raise ScopeFailed(reason)

    def skip(self, reason: str) -> NoReturn:
        self._mark_skipped(reason)
        raise ScopeSkipped(reason)

    def iter_scopes(self) -> Iterator[ScopeReporter]:
        yield self
        for child in self.children:
            yield from child.iter_scopes()

    def find(self, path: str) -> ScopeReporter | None:
        for scope in self.iter_scopes():
            if scope.path == path:
                return scope
        return None

    def render(self) -> str:
        return "\n".join(self._render_lines(0))

    def _render_lines(self, depth: int) -> list[str]:
        line = f"{'  ' * depth}{self.name} [{self.status.value.upper()}]"
        if self.messages:
            line += f": {self.reason}"
        lines = [line]
        for child in self.children:
            lines.extend(child._render_lines(depth + 1))
        return lines

    def _child(self, name: str) -> ScopeReporter:
        return ScopeReporter(name, parent=self)

    def _mark_skipped(self, reason: str) -> None:
        # A scope that already failed stays failed.
        if not self.failed:
            self.status = ScopeStatus.SKIPPED
        self.messages.append(reason)

    def _mark_failed(self, reason: str) -> None:
        self.status = ScopeStatus.FAILED
        self.messages.append(reason)
        scope = self.parent
        while scope is not None:
            scope.status = ScopeStatus.FAILED
            scope = scope.parent
