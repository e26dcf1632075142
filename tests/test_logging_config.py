"""Tests for logging setup."""

import logging

import pytest

from yuan_rates.infra.settings import SettingsLoader
from yuan_rates.logging_config import LOGGER_NAME, configure_logging


@pytest.fixture
def fresh_logger(tmp_path):
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers, saved_level = logger.handlers[:], logger.level
    settings = SettingsLoader()
    saved_config = dict(settings._config)
    logger.handlers = []
    settings.set("log_file", str(tmp_path / "logs" / "yuan_rates.log"))
    yield logger, settings
    for h in logger.handlers:
        h.close()
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)
    settings._config = saved_config


def _console(logger):
    return [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]


class TestConfigureLogging:
    def test_file_and_console_handlers(self, fresh_logger, tmp_path):
        logger, settings = fresh_logger
        settings.set("console_log_level", "WARNING")

        configure_logging()

        files = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(files) == 1
        assert (tmp_path / "logs").is_dir()
        assert [h.level for h in _console(logger)] == [logging.WARNING]

    def test_second_call_refreshes_levels(self, fresh_logger):
        logger, settings = fresh_logger
        settings.set("log_level", "INFO")
        settings.set("console_log_level", "WARNING")
        configure_logging()

        settings.set("log_level", "DEBUG")
        settings.set("console_log_level", "DEBUG")
        configure_logging()

        assert len(logger.handlers) == 2
        assert logger.level == logging.DEBUG
        assert [h.level for h in _console(logger)] == [logging.DEBUG]
        files = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert files[0].level == logging.NOTSET
