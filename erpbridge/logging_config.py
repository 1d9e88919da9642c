"""Logging setup for the ``erpbridge`` logger namespace."""

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from .errors import REDACTED, SECRET_KEYS, redact

ROOT_LOGGER = "erpbridge"
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()) | {"message", "asctime"}

_SECRET_PAIR = re.compile(
    r"(?P<key>" + "|".join(sorted(SECRET_KEYS, key=len, reverse=True)) + r")(?P<sep>\s*[=:]\s*)(?P<value>[^\s,;&]+)",
    re.IGNORECASE,
)


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED and not k.startswith("_")}


class RedactingFilter(logging.Filter):
    """Masks secret values in messages and ``extra`` fields."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _SECRET_PAIR.sub(lambda m: f"{m.group('key')}{m.group('sep')}{REDACTED}", message)
        if masked != message:
            record.msg = masked
            record.args = None
        for key, value in _extras(record).items():
            if key.lower() in SECRET_KEYS:
                setattr(record, key, REDACTED)
            elif isinstance(value, (dict, list, tuple)):
                setattr(record, key, redact(value))
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extras(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    level: str = "INFO",
    fmt: str = "text",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Replaces any handler installed by a previous call, so it is safe to
    call more than once.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR)
        fmt: "text" or "json"
        stream: Output stream, stderr by default

    Returns:
        The configured ``erpbridge`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_erpbridge", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler._erpbridge = True  # type: ignore[attr-defined]
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler.addFilter(RedactingFilter())

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
