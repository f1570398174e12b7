"""Structured logging for the ``sofia`` package."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

PACKAGE_LOGGER = "sofia"

# Attributes present on every LogRecord; anything else came from ``extra=``
_RESERVED = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON objects.

    Fields passed through ``logger.info(..., extra={...})`` are merged into
    the payload, so ``method``, ``rows`` or ``chart_type`` can be queried
    directly in a log aggregator.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED:
                payload[key] = value

        # numpy scalars and the like fall back to str()
        return json.dumps(payload, default=str)


def configure_logging(
    level: str = "WARNING",
    json_format: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again replaces the previous handler rather than adding a
    second one.

    Args:
        level: Level name, e.g. ``'INFO'``.
        json_format: Use :class:`JsonFormatter` instead of plain text.
        stream: Output stream; defaults to ``sys.stderr``.

    Returns:
        The configured ``sofia`` logger.

    Raises:
        ValueError: If *level* is not a known level name.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
        )

    logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False
    return logger
