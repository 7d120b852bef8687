"""Request-scoped logging context."""

from __future__ import annotations

import time
import uuid

from fastapi import FastAPI, Request, Response

from aggregator_core.logging import bind_request_context, get_logger

log = get_logger("aggregator_core.api")

REQUEST_ID_HEADER = "X-Request-ID"


def register_request_logging(app: FastAPI) -> None:
    """Bind a request id into the log context and log each completed request."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        bind_request_context(request_id=request_id, path=request.url.path)
        started = time.perf_counter()

        response: Response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        log.info(
            "request_completed",
            method=request.method,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response
