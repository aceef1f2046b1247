"""Logging configuration for CV-Tailor.

Console output goes to stderr so that it never mixes with the review
prompts printed on stdout. An optional log file captures DEBUG output
(including the LLM client's chatter) for post-mortem inspection.
"""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "cv_tailor"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are far too chatty at INFO.
NOISY_LOGGERS = ("LiteLLM", "litellm", "httpx", "httpcore", "openai")

_configured = False


def _resolve_level(level: str | None) -> int:
    if level is None:
        return logging.INFO
    return getattr(logging, level.upper(), logging.INFO)


def configure_logging(
    level: str | None = None,
    log_file: Path | None = None,
    format_string: str = LOG_FORMAT,
    date_format: str = DATE_FORMAT,
) -> logging.Logger:
    """Configure and return the application logger.

    Args:
        level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to INFO.
        log_file: Optional file that receives every record at DEBUG level.
        format_string: Format string for log messages.
        date_format: Format string for timestamps.

    Returns:
        The configured ``cv_tailor`` logger.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    console_level = _resolve_level(level)

    if _configured:
        has_file = False
        for handler in logger.handlers:
            if isinstance(handler, logging.FileHandler):
                has_file = True
            else:
                handler.setLevel(console_level)
        logger.setLevel(logging.DEBUG if has_file else console_level)
        return logger

    logger.handlers.clear()
    formatter = logging.Formatter(format_string, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger_level = console_level
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger_level = logging.DEBUG

    logger.setLevel(logger_level)
    logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child of the application logger (``cv_tailor.<name>``)."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Reset logging configuration (useful for testing)."""
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

    _configured = False
