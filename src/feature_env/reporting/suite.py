from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

import pytest


class SuiteRunner(Protocol):
    # Discovers and executes the declared feature tests; returns a process exit status.
    def run(self) -> int:
        raise NotImplementedError("SuiteRunner protocol has no implementation")


@dataclass(frozen=True, slots=True)
class PytestSuite:
    # Runs pytest in-process so test modules share the Environment built by the caller.
    args: Sequence[str] = ()
    plugins: Sequence[object] = field(default_factory=tuple)

    def run(self) -> int:
        return int(pytest.main(list(self.args), plugins=list(self.plugins)))
