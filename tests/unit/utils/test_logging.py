"""Tests for logging utility."""

import logging
from io import StringIO


class TestLoggerConfiguration:
    """Test that logger configures correctly from settings."""

    def test_configure_logging_creates_logger(self):
        """configure_logging should return a configured logger."""
        from cv_tailor.utils.logging import configure_logging

        logger = configure_logging()
        assert isinstance(logger, logging.Logger)
        assert logger.name == "cv_tailor"
        assert logger.propagate is False

    def test_configure_logging_respects_level(self):
        """Logger should respect the configured log level."""
        from cv_tailor.utils.logging import configure_logging

        logger = configure_logging(level="DEBUG")
        assert logger.level == logging.DEBUG

        logger = configure_logging(level="WARNING")
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_configure_logging_default_level_is_info(self):
        """Default log level should be INFO."""
        from cv_tailor.utils.logging import configure_logging

        logger = configure_logging()
        assert logger.level == logging.INFO

    def test_noisy_loggers_are_quietened(self):
        from cv_tailor.utils.logging import configure_logging

        configure_logging(level="DEBUG")
        assert logging.getLogger("LiteLLM").level == logging.WARNING

    def test_log_file_receives_debug(self, tmp_path):
        from cv_tailor.utils.logging import configure_logging, get_logger

        log_file = tmp_path / "logs" / "run.log"
        logger = configure_logging(level="WARNING", log_file=log_file)
        get_logger("test").debug("debug detail")

        for handler in logger.handlers:
            handler.flush()
        assert logger.level == logging.DEBUG
        assert "debug detail" in log_file.read_text(encoding="utf-8")


class TestLogOutput:
    """Test that log output format is correct."""

    def test_log_message_includes_level_and_name(self):
        from cv_tailor.utils.logging import configure_logging, get_logger

        logger = configure_logging(level="INFO")
        buffer = StringIO()
        handler = logging.StreamHandler(buffer)
        handler.setFormatter(logger.handlers[0].formatter)
        logger.addHandler(handler)

        get_logger("tailoring").info("Test message")

        output = buffer.getvalue()
        assert "INFO" in output
        assert "cv_tailor.tailoring" in output
        assert "Test message" in output


def test_reset_logging_clears_handlers() -> None:
    from cv_tailor.utils.logging import configure_logging, reset_logging

    logger = configure_logging()
    reset_logging()

    assert logger.handlers == []
    assert logger.propagate is True
