"""User settings for MyEmployeeProject.

Settings are persisted as JSON in the per-user application data folder and
exposed through the :class:`ConfigManager` singleton or the module-level
helpers below.
"""

from .exceptions import ConfigError
from .manager import ConfigManager, get_config, get_extra, save_config, set_extra
from .models import AppSettings

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigManager",
    "get_config",
    "get_extra",
    "save_config",
    "set_extra",
]
