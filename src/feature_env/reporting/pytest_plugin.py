"""pytest integration for feature environments.

Enable it from a conftest.py::

    pytest_plugins = ["feature_env.reporting.pytest_plugin"]

Test functions then receive a `feature_reporter` to hand to
`Environment.test`. Assessments run as child scopes of that reporter; when any
of them fails, the test function is reported as failed with the scope tree as
the failure message.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import NoReturn

import pytest

from feature_env.config.envconf import Config
from feature_env.config.flags import apply_filter_overrides
from feature_env.config.loader import load_config
from feature_env.reporting.scope import ScopeReporter


class PytestReporter(ScopeReporter):
    # Root scope bound to a pytest item: fail/skip become pytest outcomes.
    def fail(self, reason: str) -> NoReturn:
        self._mark_failed(reason)
        pytest.fail(reason, pytrace=False)

    def skip(self, reason: str) -> NoReturn:
        self._mark_skipped(reason)
        pytest.skip(reason)


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("feature-env")
    group.addoption("--env-config", dest="env_config", help="Path to YAML environment config")
    group.addoption("--feature", dest="feature_regex", help="Regular expression selecting features by name")
    group.addoption("--assess", dest="assessment_regex", help="Regular expression selecting assessments by name")


@pytest.fixture
def feature_reporter(request: pytest.FixtureRequest) -> PytestReporter:
    return PytestReporter(request.node.name)


@pytest.fixture(scope="session")
def env_config(pytestconfig: pytest.Config) -> Config:
    # Command-line filters take precedence over the config file.
    path = pytestconfig.getoption("env_config")
    config = load_config(Path(path)) if path else Config()
    apply_filter_overrides(
        config,
        feature=pytestconfig.getoption("feature_regex"),
        assess=pytestconfig.getoption("assessment_regex"),
    )
    return config


@pytest.hookimpl(wrapper=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> Generator[None, object, object]:
    result = yield
    reporter = pyfuncitem.funcargs.get("feature_reporter")
    if isinstance(reporter, ScopeReporter) and reporter.failed:
        pytest.fail(reporter.render(), pytrace=False)
    return result
