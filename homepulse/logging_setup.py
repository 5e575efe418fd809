"""Logging for the simulator process.

Three sources write log lines: HTTP requests, the interval ticker thread and
the dynamic motion timers. JSON output (the default) keeps them greppable by
`tick_source`, `sensor` and `request_id`; LOG_FORMAT=console is for local runs.

Request lines carry `request_id` (inbound `X-Request-ID`, else a uuid4 set
by the middleware). Timer and ticker threads have none.
"""

from __future__ import annotations

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Context var set by middleware
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class _ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        rid = request_id_var.get()
        if rid:
            setattr(record, "request_id", rid)
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Common structured fields (set by filter / extra)
        for key in ("request_id", "tick_source", "sensor", "changes", "data_file"):
            v = getattr(record, key, None)
            if v is not None:
                payload[key] = v

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging(*, log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure root logging.

    Idempotent: safe to call multiple times.
    """

    level = getattr(logging, (log_level or "INFO").upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers to avoid duplicate logs when Uvicorn config runs.
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    if (log_format or "json").lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    handler.addFilter(_ContextFilter())

    root.addHandler(handler)

    # Access logs duplicate the request middleware; keep warnings only.
    logging.getLogger("uvicorn.access").setLevel(max(level, logging.WARNING))
