"""Logging configuration for shopify-oauth.

Log lines never carry Shopify access tokens: a filter on every handler
installed here masks anything shaped like one before it is written.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import Any

logger = logging.getLogger("shopify_oauth")

# shpat_ (admin), shpca_ (custom app), shppa_ (private app), shpss_ (shared secret)
_TOKEN_RE = re.compile(r"\b(shp(?:at|ca|pa|ss)_)[0-9A-Za-z]+")

STANDARD_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(message)s"


class RedactTokensFilter(logging.Filter):
    """Masks Shopify access tokens in the formatted message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _TOKEN_RE.sub(r"\1***", message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with any structured context merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | None = None,
    format_style: str = "standard",
) -> logging.Logger:
    """
    Configure the shopify_oauth logger.

    Args:
        level: Logging level name or number
        log_file: Optional file that receives the same lines as stderr
        format_style: "standard" for human-readable, "json" for one object per line

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger.setLevel(level)
    logger.handlers.clear()

    if format_style == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(RedactTokensFilter())
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get the ``shopify_oauth.<name>`` child logger."""
    return logging.getLogger(f"shopify_oauth.{name}")


def _with_context(message: str, context: dict[str, Any] | None) -> str:
    if not context:
        return message
    return message + " | Context: " + ", ".join(f"{k}={v}" for k, v in context.items())


def log_failure(
    logger: logging.Logger,
    operation: str,
    error: Exception | str,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log a failed operation as ``<operation> failed: [<Type>] <message>``.

    The context is appended to the text and also attached to the record,
    where the JSON formatter emits it as an object.
    """
    error_type = type(error).__name__ if isinstance(error, Exception) else "Error"
    message = f"{operation} failed: [{error_type}] {error}"
    logger.log(level, _with_context(message, context), extra={"context": context or {}})


def log_warning(
    logger: logging.Logger,
    operation: str,
    message: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Log a warning as ``<operation>: <message>`` with optional context."""
    logger.warning(_with_context(f"{operation}: {message}", context), extra={"context": context or {}})


setup_logging(level=logging.WARNING)
