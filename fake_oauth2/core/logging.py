"""Logging configuration for the fake OAuth2 server.

Two output shapes, picked by LOG_JSON:

  _ContainerFormatter: one human-readable line per record.  This is what
    you want when the server runs next to a test suite in a terminal or in
    CI output: you scan it with your eyes.

  _JsonFormatter: one JSON object per line (JSON Lines).  Use it when the
    server runs inside docker-compose next to other services and the logs
    are shipped somewhere that parses JSON.

Either way the request-context middleware attaches request_id, method,
path, status_code and duration_ms to its summary line, and the OAuth
endpoints attach grant_type / client_id.  The JSON formatter lifts those
onto the top level so they can be filtered on.
"""

from __future__ import annotations

import json
import logging
import sys
import time

# Set by the request-context filter when no request is in flight.
_NO_REQUEST = "-"

# uvicorn.access duplicates the request-context summary line.
_QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "httpcore", "httpx")


def _timestamp(record: logging.LogRecord) -> str:
    """Local ISO-8601 time with milliseconds: 2024-01-01T12:00:00.007+0000."""
    ct = time.localtime(record.created)
    date = time.strftime("%Y-%m-%dT%H:%M:%S", ct)
    return f"{date}.{int(record.msecs):03d}{time.strftime('%z', ct)}"


def _request_id(record: logging.LogRecord) -> str | None:
    request_id = getattr(record, "request_id", None)
    if request_id in (None, _NO_REQUEST):
        return None
    return request_id


class _ContainerFormatter(logging.Formatter):
    """time level logger [request-id]  message  [file:line]

    The request id only appears for records logged while serving a
    request; file:line only for WARNING and above.
    """

    def format(self, record: logging.LogRecord) -> str:
        head = [_timestamp(record), f"{record.levelname:<8}", record.name]
        request_id = _request_id(record)
        if request_id:
            head.append(f"[{request_id}]")

        line = f"{' '.join(head)}  {record.getMessage()}"
        if record.levelno >= logging.WARNING:
            line += f"  [{record.filename}:{record.lineno}]"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class _JsonFormatter(logging.Formatter):
    """JSON Lines formatter.

    Extra context fields set via ``extra=`` (or by the request-context
    filter) become top-level keys when they are present on the record.
    """

    _CONTEXT_FIELDS = (
        "method",
        "path",
        "status_code",
        "duration_ms",
        "grant_type",
        "client_id",
    )

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": _timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = _request_id(record)
        if request_id:
            entry["request_id"] = request_id
        entry.update(
            (key, getattr(record, key))
            for key in self._CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Point the root logger at stdout with the chosen formatter.

    Args:
        level_name: debug/info/warning/error.  Unknown names fall back to INFO.
        json_format: emit JSON Lines instead of the single-line text format.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
