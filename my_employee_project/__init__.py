"""Top-level package for MyEmployeeProject.

Application code should read and persist user preferences through
:mod:`my_employee_project.config` rather than touching ``config.json``
directly.
"""

from .config import AppSettings, ConfigManager, get_config  # re-export for convenience

__all__: list[str] = [
    "AppSettings",
    "ConfigManager",
    "get_config",
]
