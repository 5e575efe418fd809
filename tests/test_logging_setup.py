from __future__ import annotations

import json
import logging

from homepulse.logging_setup import JsonFormatter, _ContextFilter, request_id_var


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("homepulse.engine", logging.INFO, __file__, 1, "Tick complete: %d change(s)", (3,), None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_json_formatter_includes_structured_fields() -> None:
    out = json.loads(JsonFormatter().format(_record(tick_source="interval", changes=3)))

    assert out["severity"] == "INFO"
    assert out["logger"] == "homepulse.engine"
    assert out["message"] == "Tick complete: 3 change(s)"
    assert out["tick_source"] == "interval"
    assert out["changes"] == 3
    assert "request_id" not in out


def test_context_filter_attaches_request_id() -> None:
    token = request_id_var.set("req-42")
    try:
        record = _record()
        assert _ContextFilter().filter(record)
    finally:
        request_id_var.reset(token)

    assert json.loads(JsonFormatter().format(record))["request_id"] == "req-42"
