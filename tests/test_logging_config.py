"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from quality_lens.logging_config import get_logger, setup_logging


@pytest.mark.usefixtures("package_logger")
class TestSetupLogging:
    def test_levels(self):
        assert setup_logging("verbose").level == logging.DEBUG
        assert setup_logging("quiet").level == logging.ERROR
        assert setup_logging().level == logging.WARNING

    def test_unknown_verbosity(self):
        with pytest.raises(KeyError):
            setup_logging("loud")

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        logger = setup_logging("verbose")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_root_logger_untouched(self):
        root_handlers = list(logging.getLogger().handlers)
        setup_logging("verbose")
        assert logging.getLogger().handlers == root_handlers

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(log_file=str(log_file))
        get_logger("analysis").warning("3 files failed")
        assert "WARNING" in log_file.read_text()
        assert "quality_lens.analysis: 3 files failed" in log_file.read_text()


class TestGetLogger:
    def test_namespacing(self):
        assert get_logger().name == "quality_lens"
        assert get_logger("analysis").name == "quality_lens.analysis"
        assert get_logger("quality_lens.metrics").name == "quality_lens.metrics"
