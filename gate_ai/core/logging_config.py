"""
Centralized logging configuration for gate-ai.

Every module logs through ``get_logger(__name__)``, so all records land under
the ``gate_ai`` package logger. Importing the library only attaches a
NullHandler; a host that wants output calls setup_logging(), which configures
the package logger and leaves the root logger alone.
"""
import logging
import os
import re
import sys
from pathlib import Path
from typing import Iterable, Optional, Union

PACKAGE_LOGGER = "gate_ai"

# Default log level from environment or INFO
DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Log directory
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

# Loggers of the HTTP stack and vendor SDKs, kept at WARNING
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")

_CREDENTIAL_PATTERNS = [
    # Gemini sends the key as a query parameter
    (re.compile(r"([?&]key=)[^&\s'\"]+"), r"\1***"),
    (re.compile(r"(Bearer\s+)[A-Za-z0-9._\-]+"), r"\1***"),
    (re.compile(r"(x-api-key['\"]?\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE), r"\1***"),
]

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def redact(text: str) -> str:
    """Mask credentials (query keys, bearer tokens, x-api-key values) in ``text``."""
    for pattern, replacement in _CREDENTIAL_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class RedactingFilter(logging.Filter):
    """Rewrites each record's message with credentials masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = redact(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class _GateAIHandlerMixin:
    """Marks handlers installed by setup_logging so a second call replaces them."""
    gate_ai_handler = True


class _StreamHandler(_GateAIHandlerMixin, logging.StreamHandler):
    pass


class _FileHandler(_GateAIHandlerMixin, logging.FileHandler):
    pass


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[Union[str, Path]] = None,
    enable_file_logging: bool = False,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    Configure the ``gate_ai`` package logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file (defaults to logs/gate_ai.log)
        enable_file_logging: Whether to enable file logging
        quiet_loggers: Third-party loggers raised to WARNING

    Returns:
        The configured package logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)

    for handler in list(package_logger.handlers):
        if getattr(handler, "gate_ai_handler", False):
            package_logger.removeHandler(handler)
            handler.close()

    redacting_filter = RedactingFilter()

    console_handler = _StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%H:%M:%S'
    ))
    console_handler.addFilter(redacting_filter)
    package_logger.addHandler(console_handler)

    if enable_file_logging:
        log_path = Path(log_file) if log_file is not None else LOG_DIR / "gate_ai.log"
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = _FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # File gets all logs
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        file_handler.addFilter(redacting_filter)
        package_logger.addHandler(file_handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger under the gate_ai hierarchy when called from library modules
    """
    return logging.getLogger(name)
