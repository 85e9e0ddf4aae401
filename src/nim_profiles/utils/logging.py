"""Logging setup for the nim_profiles logger tree."""

import logging
import sys
from typing import Any

from nim_profiles.utils.errors import ConfigurationError

ROOT_LOGGER = "nim_profiles"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
STRUCTURED_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _render_value(value: Any) -> str:
    text = str(value)
    # Manifest paths may contain spaces
    if not text or any(c.isspace() for c in text):
        return repr(text)
    return text


class StructuredFormatter(logging.Formatter):
    """Formatter that appends a record's context as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return message
        pairs = " ".join(f"{k}={_render_value(v)}" for k, v in context.items())
        return f"{message} {pairs}"


def configure_logging(level: str = "INFO", structured: bool = False) -> None:
    """Send nim_profiles log records to stderr.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), any case
        structured: Add timestamps and logger names, and append context fields

    Raises:
        ConfigurationError: If the level name is unknown
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ConfigurationError(f"Unknown log level: {level}", config_key="logging.level")

    handler = logging.StreamHandler(sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter(STRUCTURED_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the nim_profiles tree.

    Args:
        name: Module name, prefixed with ``nim_profiles`` when it lacks it
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that stores its context on every record."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = kwargs.setdefault("extra", {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextLogger:
    """Get a logger whose records carry fixed context, such as a manifest source."""
    return ContextLogger(get_logger(name), context)
