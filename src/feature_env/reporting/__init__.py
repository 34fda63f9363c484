from .scope import Reporter, ScopeFailed, ScopeReporter, ScopeSkipped, ScopeStatus
from .suite import PytestSuite, SuiteRunner

# PytestReporter is exported from reporting.pytest_plugin.
__all__ = [
    "PytestSuite",
    "Reporter",
    "ScopeFailed",
    "ScopeReporter",
    "ScopeSkipped",
    "ScopeStatus",
    "SuiteRunner",
]
