from __future__ import annotations

"""Configuration store exception classes.

These are raised by the internal load/save/convert helpers and caught at
the public boundary of :class:`~my_employee_project.config.ConfigManager`,
where they are logged and replaced by a fallback value. Callers of the
public API never see them.
"""

from pathlib import Path
from typing import Optional


class ConfigError(Exception):
    """Base exception for all configuration store errors."""

    def __init__(self, message: str, path: Optional[Path] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        text = super().__str__()
        if self.path is not None:
            text = f"[{self.path}] {text}"
        if self.cause is not None:
            text = f"{text}: {self.cause}"
        return text


class ConfigDirectoryError(ConfigError):
    """Raised when the configuration directory cannot be created."""
    pass


class ConfigReadError(ConfigError):
    """Raised when the configuration file exists but cannot be read."""
    pass


class ConfigParseError(ConfigError):
    """Raised when the file content is not valid JSON or not a settings object."""
    pass


class ConfigWriteError(ConfigError):
    """Raised when settings cannot be serialised or written to disk."""
    pass


class ExtraConversionError(ConfigError):
    """Raised when an extras value cannot be converted to the requested type.

    Carries the offending value and the requested type for diagnostics.
    """

    def __init__(self, value: object, target: type,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(
            f"Cannot convert {value!r} ({type(value).__name__}) to "
            f"{getattr(target, '__name__', target)}",
            cause=cause,
        )
        self.value = value
        self.target = target
