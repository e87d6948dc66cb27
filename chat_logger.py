"""
chat_logger.py - Centralized logging configuration for the avatar relay

Sets up Python logging with:
- File handler: logs/YYYY-MM-DD/relay.txt (one folder per day)
- Console handler: stdout
- Configurable log level via LOG_LEVEL env variable
- Masking of sensitive data (API keys, user keys, tokens)
"""

import os
import logging
from datetime import datetime
from pathlib import Path

DEFAULT_LOGGER_NAME = "avatar_relay"


class MillisecondFormatter(logging.Formatter):
    """Formatter that appends milliseconds to the configured date format."""

    def formatTime(self, record, datefmt=None):
        if datefmt:
            s = datetime.fromtimestamp(record.created).strftime(datefmt)
            ms = int((record.created - int(record.created)) * 1000)
            return f"{s}.{ms:03d}"
        return super().formatTime(record, datefmt)


def sanitize_log_string(text: str) -> str:
    """
    Sanitize string for logging to prevent log injection attacks.
    Removes newlines, carriage returns, and other control characters.

    Args:
        text: String to sanitize

    Returns:
        Sanitized string safe for logging
    """
    if not text:
        return text
    text = text.replace('\n', ' ').replace('\r', ' ').replace('\t', ' ')
    return ''.join(char if ord(char) >= 32 else ' ' for char in text)


def truncate_for_log(text: str, limit: int = 100) -> str:
    """Sanitize and shorten user-supplied text for a single log line."""
    if not text:
        return ""
    text = sanitize_log_string(text)
    return text[:limit] + "..." if len(text) > limit else text


def mask_secret(value: str, visible: int = 4) -> str:
    """
    Mask a credential so only a short prefix reaches the logs.

    >>> mask_secret("uk_1234567890")
    'uk_1***'
    """
    if not value:
        return "<unset>"
    if len(value) <= visible:
        return "***"
    return f"{value[:visible]}***"


def setup_logger(name: str = DEFAULT_LOGGER_NAME, log_level: str = "INFO") -> logging.Logger:
    """
    Configure and return a logger with file and console handlers.

    Args:
        name: Logger name
        log_level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Prevent duplicate handlers if setup is called multiple times
    if logger.handlers:
        return logger

    formatter = MillisecondFormatter(
        fmt="[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # ─── File Handler (one folder per day) ───
    today = datetime.now().strftime("%Y-%m-%d")
    log_dir = Path("logs") / today
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_dir / "relay.txt", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # ─── Console Handler ───
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Get the configured logger instance.
    If logger doesn't exist, create it with the level from LOG_LEVEL.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        setup_logger(name, os.getenv("LOG_LEVEL", "INFO"))
    return logger
