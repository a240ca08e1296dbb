"""Logging setup for MockSwift.

Every Swift request produces one access-log record from the server
middleware. Besides the HTTP fields it carries the Swift context of the
request as ``extra`` attributes: the transaction id (also returned as
``X-Trans-Id``), the resolved account and the operation, e.g.
``"PUT object"``. Both formatters below render that context; records from
elsewhere simply lack it.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO

# HTTP fields of an access-log record
HTTP_FIELDS = ("method", "path", "status", "duration_ms")

# Swift request context, present once a request has been resolved
SWIFT_FIELDS = ("trans_id", "account", "operation")


def request_extra(
    method: str,
    path: str,
    status: int,
    duration_ms: float,
    trans_id: str,
    account: str | None = None,
    operation: str | None = None,
) -> dict:
    """Build the ``extra`` mapping for an access-log call.

    ``account`` and ``operation`` are None for requests that never reached
    a Swift resource (auth, health, unparseable paths).
    """
    return {
        "method": method,
        "path": path,
        "status": status,
        "duration_ms": duration_ms,
        "trans_id": trans_id,
        "account": account,
        "operation": operation,
    }


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects.

    Fields: timestamp, level, logger, message, then whichever HTTP and
    Swift request fields the record carries.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        for key in HTTP_FIELDS + SWIFT_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val
        return json.dumps(entry, default=str)


class SwiftTextFormatter(logging.Formatter):
    """Human-readable lines with the Swift request context appended.

    ``... GET /v1/AUTH_test/c 204 0.41ms [tx3f... account=test op=GET container]``
    """

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = []
        trans_id = getattr(record, "trans_id", None)
        if trans_id:
            context.append(trans_id)
        account = getattr(record, "account", None)
        if account:
            context.append(f"account={account}")
        operation = getattr(record, "operation", None)
        if operation:
            context.append(f"op={operation}")
        if not context:
            return line
        return f"{line} [{' '.join(context)}]"


def configure_logging(level: str = "INFO", fmt: str = "text", stream: IO[str] | None = None) -> None:
    """Configure root logging with the specified level and format.

    uvicorn's own access log is silenced below WARNING since the server
    middleware already logs every request with its Swift context.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        fmt: 'text' for human-readable lines, 'json' for structured output.
        stream: Where to write; stderr by default.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(JSONFormatter() if fmt == "json" else SwiftTextFormatter())
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(max(numeric_level, logging.WARNING))
