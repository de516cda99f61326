"""Logging configuration for the JMdict kana index builder.

Provides centralized logging with secret redaction so that GitHub API
tokens are never written to log files.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Optional


# Secret patterns to redact from logs
SECRET_PATTERNS = [
    # Authorization header values
    (re.compile(r'(authorization[\'"\s:=]+)(bearer\s+|token\s+)?[^\s,}\]\'"]+', re.IGNORECASE),
     r'\1\2[REDACTED]'),
    # GitHub token formats (classic, fine-grained, app tokens)
    (re.compile(r'\b(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{20,}\b'), '[REDACTED]'),
    (re.compile(r'\bgithub_pat_[A-Za-z0-9_]{20,}\b'), '[REDACTED]'),
    # Token query parameters
    (re.compile(r'([?&](access_)?token=)[^&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
]


class RedactingFormatter(logging.Formatter):
    """Custom formatter that redacts secrets from log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record, redacting any secrets."""
        message = super().format(record)
        for pattern, replacement in SECRET_PATTERNS:
            message = pattern.sub(replacement, message)
        return message


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True
) -> logging.Logger:
    """
    Configure application logging with secret redaction.

    Args:
        level: Logging level (default INFO)
        log_file: Optional file path for log output
        console: Whether to output to console (default True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("jmdict_kana")
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    formatter = RedactingFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Console handler
    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "jmdict_kana") -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (default is app logger)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
