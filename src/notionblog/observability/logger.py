"""JSON log lines for the blog pipeline.

The client logs missing credentials (WARNING) and swallowed API failures
(ERROR); the parser and fetcher log dropped blocks and per-level fetch
stats (DEBUG).  A failed block fetch looks like::

    {"ts": "2026-10-18T12:00:00.123456+00:00", "level": "ERROR",
     "logger": "notionblog.client", "message": "Notion request failed",
     "op": "get_page_blocks", "error_code": "NOT_FOUND", "page_id": "abc123"}

Attach fields to a record with ``extra={"extra_fields": {...}}``::

    from notionblog.observability import get_logger

    log = get_logger("notionblog.fetcher")
    log.debug("children fetched", extra={"extra_fields": {"block_id": "abc"}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Render each record as one JSON object.

    Always present: ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Caller-supplied ``extra_fields`` are merged into the top
    level; ``exception`` and ``stack_info`` are added when present.
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
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


# One handler per logger name, so repeated get_logger calls never stack handlers.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "notionblog",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Return the named logger, wiring a JSON handler the first time.

    Parameters
    ----------
    name:
        Dotted logger name, e.g. ``"notionblog.fetcher"``.
    level:
        Minimum level, as an ``int`` or a case-insensitive name.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        Non-propagating; later calls with the same *name* ignore
        *level* and *stream*.
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
