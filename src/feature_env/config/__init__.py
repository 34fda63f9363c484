from .envconf import Config, new_config
from .flags import config_from_flags
from .loader import ConfigError, load_config, load_yaml_config
from .models import EnvConfigModel, FiltersConfig, LoggingConfig

__all__ = [
    "Config",
    "ConfigError",
    "EnvConfigModel",
    "FiltersConfig",
    "LoggingConfig",
    "config_from_flags",
    "load_config",
    "load_yaml_config",
    "new_config",
]
