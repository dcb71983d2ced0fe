from __future__ import annotations

"""Process-wide settings store.

The settings live in a single JSON file in the per-user application data
folder:

On Windows: ``%APPDATA%\\MyEmployeeProject\\config.json``
On Unix: ``$XDG_CONFIG_HOME/MyEmployeeProject/config.json`` (``~/.config``)

:class:`ConfigManager` is a lazily created singleton. Nothing here ever
raises to the caller: a missing or corrupt file loads as defaults, a failed
write is logged and the in-memory settings are kept, and an extras value
that cannot be converted yields the caller's default.
"""

import json
import logging
import os
import threading
import time
from pathlib import Path
from typing import Any, Optional

from .conversion import convert_extra, is_extra_value
from .exceptions import (
    ConfigDirectoryError,
    ConfigError,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    ExtraConversionError,
)
from .models import AppSettings

logger = logging.getLogger(__name__)

__all__ = [
    "ConfigManager",
    "APP_DIR_NAME",
    "CONFIG_FILENAME",
    "get_user_config_dir",
    "get_config",
    "save_config",
    "set_extra",
    "get_extra",
]

APP_DIR_NAME = "MyEmployeeProject"
CONFIG_FILENAME = "config.json"


def get_user_config_dir() -> Path:
    """Get the per-user application data directory for MyEmployeeProject."""
    if os.name == 'nt':  # Windows
        appdata = os.environ.get('APPDATA')
        if appdata:
            return Path(appdata) / APP_DIR_NAME
        else:
            # Fallback for Windows
            return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME
    else:  # Unix-like systems
        xdg = os.environ.get('XDG_CONFIG_HOME')
        base = Path(xdg) if xdg else Path.home() / ".config"
        return base / APP_DIR_NAME


class _Singleton(type):
    _instance: "ConfigManager" | None = None
    _instance_lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = super().__call__(*args, **kwargs)
        return cls._instance

    def reset_instance(cls) -> None:
        """Forget the current instance; the next call builds a fresh one."""
        with cls._instance_lock:
            cls._instance = None


class ConfigManager(metaclass=_Singleton):
    """Owns the current :class:`AppSettings` and its backing file.

    The first ``ConfigManager(...)`` call fixes the file path and loads the
    settings; later calls return the same instance and ignore arguments.
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if config_path is None:
            config_path = get_user_config_dir() / CONFIG_FILENAME
        self._path = Path(config_path)
        self._lock = threading.RLock()
        self._config: AppSettings = self.load()

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    @property
    def config_path(self) -> Path:
        return self._path

    @property
    def config(self) -> AppSettings:
        """The current settings. Never ``None``."""
        return self._config

    def load(self) -> AppSettings:
        """Read settings from disk, falling back to defaults on any failure.

        The loaded settings become the current settings.
        """
        with self._lock:
            try:
                settings = self._read_settings()
            except ConfigParseError as exc:
                logger.warning("Invalid config file, using defaults: %s", exc)
                self._backup_corrupt_file()
                settings = AppSettings()
            except ConfigError as exc:
                logger.error("Could not load config, using defaults: %s", exc)
                settings = AppSettings()
            self._config = settings
            return settings

    def save(self, settings: AppSettings) -> bool:
        """Make *settings* current and write them to disk.

        The in-memory settings are replaced before the write is attempted,
        so they stay in effect even when persisting fails.

        Returns:
            True if the file now holds *settings*, False if the write failed
            (the failure is logged, never raised).
        """
        with self._lock:
            self._config = settings
            try:
                self._write_settings(settings)
            except ConfigError as exc:
                logger.error("Could not save config: %s", exc)
                return False
            logger.debug("Config saved to %s", self._path)
            return True

    def set_extra(self, key: str, value: Any) -> None:
        """Insert or overwrite an extras entry and persist the settings."""
        if not isinstance(key, str):
            logger.warning(
                "Ignoring extras key %r: keys must be str, not %s",
                key, type(key).__name__,
            )
            return
        if not is_extra_value(value):
            logger.warning(
                "Ignoring extras '%s': %s values cannot be stored",
                key, type(value).__name__,
            )
            return
        with self._lock:
            self._config.extras[key] = value
            self.save(self._config)

    def get_extra(self, key: str, default: Any = None,
                  value_type: Optional[type] = None) -> Any:
        """Return extras *key* converted to the requested type, or *default*.

        The requested type is *value_type* if given, otherwise the type of
        *default*. With neither, the stored value is returned unconverted.
        """
        if key not in self._config.extras:
            return default
        value = self._config.extras[key]

        target = value_type if value_type is not None else (
            type(default) if default is not None else None
        )
        if target is None:
            return value

        try:
            return convert_extra(value, target)
        except ExtraConversionError as exc:
            logger.debug("Extras '%s' falls back to default: %s", key, exc)
            return default

    # ------------------------------------------------------------------
    # Internal I/O
    # ------------------------------------------------------------------
    def _ensure_dir(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigDirectoryError(
                "Could not create config directory", path=self._path.parent, cause=exc
            ) from exc

    def _read_settings(self) -> AppSettings:
        self._ensure_dir()
        if not self._path.exists():
            logger.info("No config file at %s, using defaults", self._path)
            return AppSettings()

        try:
            raw = self._path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigReadError("Could not read config file", path=self._path, cause=exc) from exc

        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise ConfigParseError("Malformed JSON", path=self._path, cause=exc) from exc

        settings = AppSettings.from_dict(data, source=self._path)
        logger.info("Config loaded from %s", self._path)
        return settings

    def _write_settings(self, settings: AppSettings) -> None:
        self._ensure_dir()
        try:
            text = json.dumps(settings.to_dict(), indent=2, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise ConfigWriteError("Could not serialise settings", path=self._path, cause=exc) from exc

        # Atomic write
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            try:
                tmp.unlink()
            except OSError:
                pass
            raise ConfigWriteError("Could not write config file", path=self._path, cause=exc) from exc

    def _backup_corrupt_file(self) -> None:
        ts = time.strftime("%Y%m%d_%H%M%S")
        bak = self._path.with_name(f"{self._path.name}.bak.{ts}")
        try:
            bak.write_bytes(self._path.read_bytes())
            logger.info("Backed up invalid config to %s", bak)
        except OSError as exc:
            logger.warning("Could not back up invalid config %s: %s", self._path, exc)


# ----------------------------------------------------------------------
# Module-level convenience API
# ----------------------------------------------------------------------
def get_config() -> AppSettings:
    """Return the current settings, loading them on first use."""
    return ConfigManager().config


def save_config(settings: AppSettings) -> bool:
    return ConfigManager().save(settings)


def set_extra(key: str, value: Any) -> None:
    ConfigManager().set_extra(key, value)


def get_extra(key: str, default: Any = None, value_type: Optional[type] = None) -> Any:
    return ConfigManager().get_extra(key, default, value_type)
