"""
Tests for application logging setup.
"""

import logging

import pytest

from changekb.logging import configure_logging
from changekb.logging.setup import DEFAULT_LOG_FILENAME

APP_NAME = "changekb-test"


@pytest.fixture
def app_logger():
    logger = logging.getLogger(APP_NAME)
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestConfigureLogging:
    """Handler wiring and log directory selection"""

    def test_writes_to_given_directory(self, tmp_path, app_logger):
        log_dir = tmp_path / "logs"
        logger = configure_logging(app_name=APP_NAME, log_dir=log_dir)
        assert logger is app_logger
        logger.info("hello from the test")
        for handler in logger.handlers:
            handler.flush()
        log_file = log_dir / DEFAULT_LOG_FILENAME
        assert log_file.exists()
        assert "hello from the test" in log_file.read_text(encoding="utf-8")

    def test_defaults_to_settings_log_dir(self, tmp_path, monkeypatch, app_logger):
        monkeypatch.setenv("CHANGEKB_LOG_DIR", str(tmp_path / "from-env"))
        configure_logging(app_name=APP_NAME)
        assert (tmp_path / "from-env" / DEFAULT_LOG_FILENAME).exists()

    def test_second_call_keeps_handlers(self, tmp_path, app_logger):
        configure_logging(app_name=APP_NAME, log_dir=tmp_path)
        handlers = list(app_logger.handlers)
        configure_logging(app_name=APP_NAME, log_dir=tmp_path / "elsewhere")
        assert app_logger.handlers == handlers
        assert not (tmp_path / "elsewhere").exists()

    def test_console_level(self, tmp_path, app_logger):
        configure_logging(app_name=APP_NAME, log_dir=tmp_path, console_level=logging.WARNING)
        levels = sorted(handler.level for handler in app_logger.handlers)
        assert levels == [logging.DEBUG, logging.WARNING]
