from .environment import Environment, new_environment, new_with_config, new_with_context
from .filters import name_matches

__all__ = ["Environment", "name_matches", "new_environment", "new_with_config", "new_with_context"]
