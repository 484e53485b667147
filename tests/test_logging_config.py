"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from stride_analyzer.logging_config import get_logger, setup_logging


class TestGetLogger:
    def test_module_names_stay_in_namespace(self):
        assert get_logger("stride_analyzer.core").name == "stride_analyzer.core"
        assert get_logger("plugin").name == "stride_analyzer.plugin"
        assert get_logger().name == "stride_analyzer"


class TestSetupLogging:
    def test_levels(self):
        assert setup_logging(verbose=True).level == logging.DEBUG
        assert setup_logging(quiet=True).level == logging.ERROR
        assert setup_logging().level == logging.WARNING

    def test_repeated_calls_replace_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_log_file_receives_debug(self, tmp_path):
        target = tmp_path / "scan.log"
        logger = setup_logging(log_file=str(target))
        get_logger("stride_analyzer.test").debug("skipped %s", "a.bin")
        for handler in logger.handlers:
            handler.flush()
        assert "skipped a.bin" in target.read_text()
        setup_logging()
