"""Structured JSON logger for yamlnote.

Each log record is a single-line JSON object.  The text-boundary entry
points log every input they reject at ``WARNING`` so that a fail-soft
default (an empty patch, an unchanged document) can still be traced:

    {"ts": "2026-10-18T12:00:00.123456+00:00", "level": "WARNING",
     "logger": "yamlnote.core", "message": "apply_patch fell back to original",
     "op": "apply_patch", "error_code": "APPLY_ERROR", "index": 2}

Usage::

    from yamlnote.observability import get_logger, log_fields

    log = get_logger("yamlnote.diff")
    log.debug("diff computed", extra=log_fields(op="diff", ops=3))
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from yamlnote.errors import YamlNoteError


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys: ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Fields passed through ``extra={"extra_fields": {...}}``
    are merged at the top level.  When the record carries a
    :class:`~yamlnote.errors.YamlNoteError`, its ``code`` and ``context``
    are added as ``error_code`` / ``error_context`` next to the formatted
    traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if extra_fields is not None:
            log_entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            if isinstance(exc, YamlNoteError):
                log_entry.setdefault("error_code", str(getattr(exc.code, "value", exc.code)))
                if exc.context:
                    log_entry["error_context"] = exc.context
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str)


def log_fields(**fields: Any) -> dict[str, Any]:
    """Build the ``extra`` mapping understood by :class:`StructuredFormatter`."""
    return {"extra_fields": fields}


# One handler per logger name so ``get_logger`` stays idempotent.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "yamlnote",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name.  Component loggers are named ``"yamlnote.diff"``,
        ``"yamlnote.patch"``, ``"yamlnote.core"`` and so on.
    level:
        Minimum log level, as an ``int`` or a case-insensitive string.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        A logger with a :class:`StructuredFormatter` handler.  Repeated
        calls with the same *name* do not add duplicate handlers.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        resolved_level = (
            logging.getLevelName(level.upper())
            if isinstance(level, str)
            else level
        )
        logger.setLevel(resolved_level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
