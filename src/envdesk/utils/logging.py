"""Logging setup for envdesk.

Messages about one env file carry the file as a context field, e.g.
``INFO: Backed up to .env.backup.1718000000000 file=.env``.
"""

import logging
import sys
from typing import Any

DEFAULT_FORMAT = "%(levelname)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``key=value`` context fields to messages."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "context", None)
        if not fields:
            return message
        return message + " " + " ".join(f"{k}={v}" for k, v in fields.items())


def configure_logging(level: str = "INFO") -> None:
    """Send envdesk logs to stderr.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = level.upper()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ContextFormatter(DEBUG_FORMAT if level == "DEBUG" else DEFAULT_FORMAT))

    logger = logging.getLogger("envdesk")
    logger.setLevel(getattr(logging, level))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger named ``envdesk.<name>``."""
    if not name.startswith("envdesk"):
        name = f"envdesk.{name}"
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Attaches fixed context fields to every record."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**kwargs.get("extra", {}), "context": self.extra}
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextAdapter:
    """Logger whose messages all carry the given context, such as ``file=".env"``."""
    return ContextAdapter(get_logger(name), context)
