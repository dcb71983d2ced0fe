"""Shared fixtures for the MyEmployeeProject settings tests.

Every test runs against a throwaway user config folder and a fresh
:class:`ConfigManager`, so nothing touches the real ``config.json``.
"""

import logging
from pathlib import Path

import pytest

from my_employee_project.config import ConfigManager
from my_employee_project.config.manager import APP_DIR_NAME, CONFIG_FILENAME

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def user_config_root(tmp_path, monkeypatch):
    """Point the per-user config folder at a temporary directory."""
    root = tmp_path / "userdata"
    monkeypatch.setenv("APPDATA", str(root))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(root))
    return root


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the ConfigManager singleton around each test."""
    ConfigManager.reset_instance()
    yield
    ConfigManager.reset_instance()


@pytest.fixture
def config_path(user_config_root) -> Path:
    """Default location of config.json for the test run."""
    return user_config_root / APP_DIR_NAME / CONFIG_FILENAME


@pytest.fixture
def write_config(config_path):
    """Write raw text to config.json before the manager is created."""
    def _write(text: str) -> Path:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(text, encoding="utf-8")
        return config_path
    return _write


@pytest.fixture
def restart():
    """Simulate a process restart: drop the singleton and load again."""
    def _restart(path=None) -> ConfigManager:
        ConfigManager.reset_instance()
        return ConfigManager(path)
    return _restart


@pytest.fixture
def unwritable_path(tmp_path) -> Path:
    """A config path whose parent directory can never be created."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    return blocker / APP_DIR_NAME / CONFIG_FILENAME
