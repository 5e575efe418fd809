from __future__ import annotations

import logging
import time
import uuid
from typing import Awaitable, Callable

from fastapi import Request, Response

from .logging_setup import request_id_var

logger = logging.getLogger(__name__)


async def request_context_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]):
    """Bind a request id for log correlation and log one line per request.

    The id comes from `X-Request-ID` when the client sends one, else uuid4.
    It is echoed back as `X-Request-ID` on the response.
    """

    rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    token = request_id_var.set(rid)
    started = time.perf_counter()

    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000.0,
        )
        return response
    finally:
        request_id_var.reset(token)
