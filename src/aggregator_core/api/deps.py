"""FastAPI dependencies resolving the per-app config, client and caches."""

from __future__ import annotations

from fastapi import Query, Request

from aggregator_core.cache import ResponseCache
from aggregator_core.config import AppConfig
from aggregator_core.exchange import OneInchClient


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_client(request: Request) -> OneInchClient:
    return request.app.state.client


def get_response_cache(request: Request) -> ResponseCache:
    """Short-lived cache (quotes, balances, prices)."""
    return request.app.state.response_cache


def get_metadata_cache(request: Request) -> ResponseCache:
    """Long-lived cache (token metadata, token lists, spender address)."""
    return request.app.state.metadata_cache


def serve_demo(request: Request, demo: bool = Query(False)) -> bool:
    """Whether this request should get a demo payload instead of an upstream call.

    Demo is served when the caller asks for it and demo mode is available, or
    in development when no API key is configured.
    """
    config = get_config(request)
    if demo and config.demo_available:
        return True
    return config.is_development and not get_client(request).configured
