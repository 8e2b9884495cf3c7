from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

from flask import has_request_context, request


class RequestContextFilter(logging.Filter):
    """Tag every record with the HTTP method and path it was logged under ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            record.method = request.method
            record.path = request.path
        else:
            record.method = "-"
            record.path = "-"
        return True


class KeyValueFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds")
        method = getattr(record, "method", "-")
        path = getattr(record, "path", "-")
        line = (
            f"{ts.replace('+00:00', 'Z')} level={record.levelname} logger={record.name} "
            f"method={method} path={path} msg={record.getMessage()}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # create_app runs once per test; drop the handler a previous call installed
    for existing in [h for h in root.handlers if getattr(h, "goal_tracker", False)]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.goal_tracker = True
    handler.setLevel(lvl)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(KeyValueFormatter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
