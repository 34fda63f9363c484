from .config import Config, ConfigError, config_from_flags, load_config
from .env import Environment, name_matches, new_environment, new_with_config, new_with_context
from .kernel import (
    Action,
    ActionError,
    ActionRole,
    Context,
    ContractViolation,
    Feature,
    FeatureBuilder,
    Level,
    Step,
    SuiteAborted,
    background,
)
from .reporting import PytestSuite, Reporter, ScopeReporter, SuiteRunner

__all__ = [
    "Action",
    "ActionError",
    "ActionRole",
    "Config",
    "ConfigError",
    "Context",
    "ContractViolation",
    "Environment",
    "Feature",
    "FeatureBuilder",
    "Level",
    "PytestSuite",
    "Reporter",
    "ScopeReporter",
    "Step",
    "SuiteAborted",
    "SuiteRunner",
    "background",
    "config_from_flags",
    "load_config",
    "name_matches",
    "new_environment",
    "new_with_config",
    "new_with_context",
]
