"""Custom exceptions and centralized FastAPI error handlers."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from aggregator_core.logging import get_logger

log = get_logger(__name__)


class AggregatorError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class BadRequestError(AggregatorError):
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class UnsupportedChainError(AggregatorError):
    def __init__(self, chain_id: int, supported: set[int]):
        super().__init__(
            f"Unsupported chain ID: {chain_id}. Supported: {sorted(supported)}",
            status_code=400,
        )


class UpstreamNotConfiguredError(AggregatorError):
    def __init__(self) -> None:
        super().__init__("1inch API key not configured", status_code=500)


class UpstreamError(AggregatorError):
    """The upstream API failed or could not be reached."""

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message, status_code=502)
        self.upstream_status = upstream_status


class UpstreamTimeoutError(UpstreamError):
    def __init__(self, message: str):
        super().__init__(message)
        self.status_code = 504


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(AggregatorError)
    async def handle_aggregator_error(_request: Request, exc: AggregatorError):
        if exc.status_code >= 500:
            log.warning("request_failed", error=str(exc), status=exc.status_code)
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        log.exception("unhandled_error", error=str(exc))
        return JSONResponse({"error": "Internal server error"}, status_code=500)
