"""FastAPI application for the aggregator dashboard backend."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aggregator_core.api.middleware import register_request_logging
from aggregator_core.api.routes import (
    health,
    history,
    limit_orders,
    market,
    portfolio,
    quote_stream,
    swap,
)
from aggregator_core.cache import ResponseCache
from aggregator_core.config import AppConfig, load_config
from aggregator_core.errors import register_error_handlers
from aggregator_core.exchange import OneInchClient
from aggregator_core.logging import get_logger

log = get_logger(__name__)


def create_app(
    config: AppConfig | None = None,
    client: OneInchClient | None = None,
    response_cache: ResponseCache | None = None,
    metadata_cache: ResponseCache | None = None,
) -> FastAPI:
    """Build the app. Collaborators not passed in are constructed from *config*.

    The caches and the upstream client live on ``app.state`` and are owned by
    this app instance; two apps never share a cache.
    """
    config = config or load_config()

    if client is None:
        client = OneInchClient(
            base_url=config.upstream.base_url,
            api_key=config.upstream.api_key,
            timeout_s=config.upstream.timeout_s,
            history_retries=config.upstream.history_retries,
        )
    if response_cache is None:
        response_cache = ResponseCache(
            ttl_seconds=config.cache.ttl_seconds,
            max_entries=config.cache.max_entries,
        )
    if metadata_cache is None:
        metadata_cache = ResponseCache(
            ttl_seconds=config.cache.metadata_ttl_seconds,
            max_entries=config.cache.max_entries,
        )

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if not client.configured:
            log.warning("upstream_api_key_missing", demo_available=config.demo_available)
        yield
        await client.close()

    app = FastAPI(
        title="Aggregator Dashboard API",
        description="Cached proxy over the 1inch developer API for the dashboard client",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.client = client
    app.state.response_cache = response_cache
    app.state.metadata_cache = metadata_cache

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_request_logging(app)
    register_error_handlers(app)

    for module in (health, market, swap, limit_orders, history, portfolio, quote_stream):
        app.include_router(module.router, prefix="/api")

    return app


app = create_app()
