from .action import Action, ActionRole
from .context import Context, background
from .errors import (
    ActionError,
    ContextCancelled,
    ContractViolation,
    DeadlineExceeded,
    InvalidFeatureError,
    SuiteAborted,
)
from .feature import Feature, FeatureBuilder, new_feature
from .step import EnvFunc, Level, Step, StepFunc, get_steps_by_level

# Kernel exports: context, steps, features, actions and their error types.
__all__ = [
    "Action",
    "ActionRole",
    "ActionError",
    "Context",
    "ContextCancelled",
    "ContractViolation",
    "DeadlineExceeded",
    "EnvFunc",
    "Feature",
    "FeatureBuilder",
    "InvalidFeatureError",
    "Level",
    "Step",
    "StepFunc",
    "SuiteAborted",
    "background",
    "get_steps_by_level",
    "new_feature",
]
