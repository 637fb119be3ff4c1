"""ロギング設定のテスト"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from fishdrift import config
from fishdrift.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    monkeypatch.delenv(config.LOG_LEVEL_ENV, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_console_only_by_default():
    setup_logging("INFO", log_file=None)
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 1


def test_repeated_setup_does_not_duplicate_handlers():
    setup_logging("INFO", log_file=None)
    setup_logging("INFO", log_file=None)
    assert len(logging.getLogger().handlers) == 1


def test_env_overrides_level(monkeypatch):
    monkeypatch.setenv(config.LOG_LEVEL_ENV, "debug")
    setup_logging("WARNING", log_file=None)
    assert logging.getLogger().level == logging.DEBUG


def test_file_handler(tmp_path):
    log_file = tmp_path / "fishdrift.log"
    setup_logging("INFO", log_file=str(log_file))
    handlers = logging.getLogger().handlers
    assert any(isinstance(h, RotatingFileHandler) for h in handlers)

    logging.getLogger("fishdrift.test").info("hello")
    for h in handlers:
        h.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")
