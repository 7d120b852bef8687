"""Health check route."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from aggregator_core.api.deps import get_client, get_config, get_response_cache
from aggregator_core.cache import ResponseCache
from aggregator_core.config import AppConfig
from aggregator_core.exchange import OneInchClient

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    config: AppConfig = Depends(get_config),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Lightweight health check; makes no upstream calls."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config.environment,
        "upstreamConfigured": client.configured,
        "demoAvailable": config.demo_available,
        "cachedEntries": len(cache),
    }
