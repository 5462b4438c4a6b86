from .schema import ConnectionSettings, settings, expand_env_vars
from .loader import load_settings
from .env import Config, config

__all__ = [
    "ConnectionSettings",
    "settings",
    "expand_env_vars",
    "load_settings",
    "Config",
    "config",
]
