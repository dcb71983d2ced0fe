import logging
from pathlib import Path

import pytest
import yaml

from my_employee_project import logging_config
from my_employee_project.logging_config import setup_logging


def _is_pytest_handler(handler) -> bool:
    return type(handler).__module__.startswith("_pytest")


@pytest.fixture(autouse=True)
def restore_logging():
    """Put root and package loggers back the way the test found them."""
    root = logging.getLogger()
    pkg = logging.getLogger("my_employee_project")
    own = [h for h in root.handlers if not _is_pytest_handler(h)]
    saved = (own, root.level, list(pkg.handlers), pkg.level)
    yield
    # pytest swaps its capture handlers per phase; keep whichever are current
    capture = [h for h in root.handlers if _is_pytest_handler(h)]
    for handler in root.handlers:
        if handler not in own and handler not in capture:
            handler.close()
    root.handlers[:] = own + capture
    root.setLevel(saved[1])
    pkg.handlers[:] = saved[2]
    pkg.setLevel(saved[3])


@pytest.fixture
def log_dir(tmp_path, monkeypatch) -> Path:
    path = tmp_path / "logs"
    monkeypatch.setenv("MYEMPLOYEE_LOG_DIR", str(path))
    monkeypatch.delenv("MYEMPLOYEE_DEBUG_MODULES", raising=False)
    return path


def _file_handlers():
    return [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]


def test_setup_logging_uses_packaged_config(log_dir):
    setup_logging()

    handlers = _file_handlers()
    assert handlers, "Expected the packaged file handler to be installed"
    assert Path(handlers[0].baseFilename) == log_dir / "app.log"

    logging.getLogger("my_employee_project.config.manager").info("hello from test")
    for handler in handlers:
        handler.flush()
    assert "hello from test" in (log_dir / "app.log").read_text(encoding="utf-8")


def test_user_override_replaces_sections(log_dir, user_config_root):
    user_dir = user_config_root / "MyEmployeeProject"
    user_dir.mkdir(parents=True)
    (user_dir / "logging.yml").write_text(
        yaml.safe_dump({"root": {"level": "WARNING", "handlers": ["console"]}}),
        encoding="utf-8",
    )

    setup_logging()

    assert logging.getLogger().level == logging.WARNING
    assert not _file_handlers()


def test_invalid_user_override_falls_back_to_minimal(log_dir, user_config_root):
    user_dir = user_config_root / "MyEmployeeProject"
    user_dir.mkdir(parents=True)
    (user_dir / "logging.yml").write_text("root: [unbalanced", encoding="utf-8")

    setup_logging()

    assert logging.getLogger().level == logging.INFO
    assert not _file_handlers()


def test_missing_version_falls_back_to_minimal(log_dir, monkeypatch):
    monkeypatch.setattr(logging_config, "_load_logging_config", lambda: {"root": {}})

    setup_logging()

    assert not _file_handlers()
    assert any(isinstance(h, logging.StreamHandler) for h in logging.getLogger().handlers)


def test_debug_modules_override(log_dir, monkeypatch):
    monkeypatch.setenv("MYEMPLOYEE_DEBUG_MODULES", "my_employee_project.config, other.module")

    setup_logging()

    assert logging.getLogger("my_employee_project.config").level == logging.DEBUG
    assert logging.getLogger("other.module").level == logging.DEBUG
    logging.getLogger("my_employee_project.config").setLevel(logging.NOTSET)
    logging.getLogger("other.module").setLevel(logging.NOTSET)
