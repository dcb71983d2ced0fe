from __future__ import annotations

"""Central logging configuration for MyEmployeeProject.

Import and call :func:`setup_logging` at application start-up.

The configuration comes from the packaged ``logging.yml``; a ``logging.yml``
placed in the user's MyEmployeeProject config folder overrides its
top-level sections.
"""

import importlib.resources
import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from my_employee_project.config.manager import get_user_config_dir

__all__ = ["setup_logging"]

LOGGING_FILENAME = "logging.yml"


def setup_logging() -> None:
    """Configure logging for the application using configuration from YAML files."""
    log_dir = os.environ.get("MYEMPLOYEE_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "app.log")

    try:
        logging_config = _load_logging_config()

        if logging_config.get("version"):
            # Update the filename dynamically
            if "handlers" in logging_config and "file" in logging_config["handlers"]:
                logging_config["handlers"]["file"]["filename"] = log_file

            logging.config.dictConfig(logging_config)
            logging.info("===== Logging initialised from config files =====")
        else:
            # No valid config found, use minimal fallback
            _setup_minimal_logging(f"no 'version' key in {LOGGING_FILENAME}")
    except Exception as exc:
        # Error loading config, fall back to minimal logging
        _setup_minimal_logging(str(exc))

    _apply_debug_overrides()


def _load_logging_config() -> Dict[str, Any]:
    """Return the packaged logging config merged with the user's override."""
    packaged = importlib.resources.files(__package__).joinpath(LOGGING_FILENAME)
    config: Dict[str, Any] = yaml.safe_load(packaged.read_text(encoding="utf-8")) or {}

    user_path: Path = get_user_config_dir() / LOGGING_FILENAME
    if user_path.exists():
        overrides = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
        if not isinstance(overrides, dict):
            raise ValueError(f"{user_path} must contain a mapping")
        config.update(overrides)
    return config


def _setup_minimal_logging(reason: str) -> None:
    """Set up minimal console-only logging when config is unavailable."""
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {
            'level': 'INFO',
            'handlers': ['console'],
        },
    }

    logging.config.dictConfig(minimal_config)
    logging.error("===== Logging initialised with minimal fallback (%s) =====", reason)


def _apply_debug_overrides() -> None:
    """Raise loggers listed in MYEMPLOYEE_DEBUG_MODULES (comma separated) to DEBUG."""
    extra_modules = os.environ.get('MYEMPLOYEE_DEBUG_MODULES', '').strip()
    targets = [m.strip() for m in extra_modules.split(',') if m.strip()]
    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        logger.info("Debug override active for logger '%s'", name)
