"""Swap routes: Fusion quotes, swap building, approvals and the v6 swap API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request

from aggregator_core.api.deps import (
    get_client,
    get_config,
    get_metadata_cache,
    get_response_cache,
)
from aggregator_core.cache import ResponseCache, cache_key, get_or_fetch
from aggregator_core.config import AppConfig
from aggregator_core.demo import fixtures
from aggregator_core.errors import BadRequestError, UpstreamError, UpstreamNotConfiguredError
from aggregator_core.exchange import OneInchClient
from aggregator_core.logging import get_logger
from aggregator_core.models import SwapQuote

log = get_logger(__name__)

router = APIRouter(tags=["swap"])

QUOTE_REQUIRED_PARAMS = ("src", "dst", "amount", "from")


def missing_quote_params(params: dict[str, Any]) -> list[str]:
    return [name for name in QUOTE_REQUIRED_PARAMS if not params.get(name)]


async def fetch_fusion_quote(
    client: OneInchClient,
    cache: ResponseCache,
    chain_id: int,
    params: dict[str, Any],
) -> dict[str, Any]:
    """Fetch (or reuse) a Fusion quote and reshape it for the dashboard."""

    async def fetch():
        data = await client.get_fusion_quote(chain_id, params)
        return SwapQuote.from_fusion(data).to_response()

    return await get_or_fetch(cache, cache_key(f"/fusion/quote/{chain_id}", params), fetch)


@router.get("/swap/quote/{chain_id}")
async def get_fusion_quote(
    chain_id: int,
    request: Request,
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Fusion quote. Requires src, dst, amount and from; other params pass through."""
    params = dict(request.query_params)
    missing = missing_quote_params(params)
    if missing:
        raise BadRequestError(f"Missing required parameters: {', '.join(missing)}")
    return await fetch_fusion_quote(client, cache, chain_id, params)


@router.post("/swap/build/{chain_id}")
@router.post("/swap/{chain_id}/swap")
async def build_swap(
    chain_id: int,
    body: dict[str, Any] | None = Body(None),
    config: AppConfig = Depends(get_config),
    client: OneInchClient = Depends(get_client),
):
    """Build swap calldata for the wallet to sign. Never cached."""
    body = body or {}
    try:
        return await client.build_swap(chain_id, body)
    except (UpstreamError, UpstreamNotConfiguredError) as e:
        if not config.is_development:
            raise
        log.warning("build_swap_demo_fallback", chain_id=chain_id, error=str(e))
        return fixtures.swap_transaction(body)


@router.get("/swap/{chain_id}/quote")
async def get_swap_quote(
    chain_id: int,
    request: Request,
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Classic (non-Fusion) swap quote; params pass through unchanged."""
    params = dict(request.query_params)
    missing = [name for name in ("src", "dst", "amount") if not params.get(name)]
    if missing:
        raise BadRequestError(f"Missing required parameters: {', '.join(missing)}")
    return await get_or_fetch(
        cache,
        cache_key(f"/swap/{chain_id}/quote", params),
        lambda: client.get_swap_quote(chain_id, params),
    )


@router.get("/swap/{chain_id}/approve/allowance")
async def get_allowance(
    chain_id: int,
    token_address: str = Query(..., alias="tokenAddress"),
    wallet_address: str = Query(..., alias="walletAddress"),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    return await get_or_fetch(
        cache,
        cache_key(
            f"/swap/{chain_id}/approve/allowance",
            {"tokenAddress": token_address.lower(), "walletAddress": wallet_address.lower()},
        ),
        lambda: client.get_allowance(chain_id, token_address, wallet_address),
    )


@router.get("/swap/{chain_id}/approve/spender")
async def get_spender(
    chain_id: int,
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_metadata_cache),
):
    return await get_or_fetch(
        cache,
        cache_key(f"/swap/{chain_id}/approve/spender"),
        lambda: client.get_spender(chain_id),
    )


@router.get("/swap/{chain_id}/approve/transaction")
async def get_approve_transaction(
    chain_id: int,
    token_address: str = Query(..., alias="tokenAddress"),
    amount: str | None = Query(None),
    client: OneInchClient = Depends(get_client),
):
    """Approval calldata. Not cached, like every call that produces a transaction."""
    return await client.get_approve_transaction(chain_id, token_address, amount)


@router.get("/swap/{chain_id}/liquidity-sources")
async def get_liquidity_sources(
    chain_id: int,
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_metadata_cache),
):
    return await get_or_fetch(
        cache,
        cache_key(f"/swap/{chain_id}/liquidity-sources"),
        lambda: client.get_liquidity_sources(chain_id),
    )


@router.get("/swap/{chain_id}/tokens")
async def get_tokens(
    chain_id: int,
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_metadata_cache),
):
    return await get_or_fetch(
        cache,
        cache_key(f"/swap/{chain_id}/tokens"),
        lambda: client.get_tokens(chain_id),
    )
