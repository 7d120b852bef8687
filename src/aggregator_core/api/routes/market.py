"""Market data routes: balances, spot prices, token metadata, active pairs."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

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
from aggregator_core.exchange.chains import (
    NATIVE_TOKEN_METADATA,
    UNKNOWN_TOKEN_METADATA,
    is_native,
    token_symbol,
)
from aggregator_core.logging import get_logger

log = get_logger(__name__)

router = APIRouter(tags=["market"])


class PriceParams(BaseModel):
    tokens: list[str] | None = None
    currency: str = "USD"


class PriceRequest(BaseModel):
    params: PriceParams = Field(default_factory=PriceParams)


@router.get("/balances/{chain_id}/{address}")
async def get_balances(
    chain_id: int,
    address: str,
    config: AppConfig = Depends(get_config),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Raw token balances for a wallet, keyed by token address."""
    try:
        return await get_or_fetch(
            cache,
            cache_key(f"/balances/{chain_id}/{address.lower()}"),
            lambda: client.get_balances(chain_id, address),
        )
    except (UpstreamError, UpstreamNotConfiguredError) as e:
        if not config.is_development:
            raise
        log.warning("balances_demo_fallback", chain_id=chain_id, error=str(e))
        return fixtures.balances()


@router.get("/prices/{chain_id}")
async def get_prices(
    chain_id: int,
    tokens: str | None = Query(None, description="Comma-separated token addresses"),
    currency: str = Query("USD"),
    config: AppConfig = Depends(get_config),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Spot prices for a comma-separated list of tokens."""
    token_list = [t.strip() for t in (tokens or "").split(",") if t.strip()]
    if not token_list:
        raise BadRequestError("Tokens parameter required")
    return await _prices(config, client, cache, chain_id, token_list, currency, via_post=False)


@router.post("/prices/{chain_id}")
async def post_prices(
    chain_id: int,
    req: PriceRequest,
    config: AppConfig = Depends(get_config),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Spot prices for a token list sent in the body (for lists too long for a URL)."""
    if not req.params.tokens:
        raise BadRequestError("Tokens array required")
    return await _prices(
        config, client, cache, chain_id, req.params.tokens, req.params.currency, via_post=True
    )


async def _prices(
    config: AppConfig,
    client: OneInchClient,
    cache: ResponseCache,
    chain_id: int,
    tokens: list[str],
    currency: str,
    via_post: bool,
) -> dict:
    # GET and POST return the same data, so they share cache entries
    key = cache_key(f"/prices/{chain_id}", {"tokens": tokens, "currency": currency})

    async def fetch():
        if via_post:
            return await client.post_prices(chain_id, tokens, currency)
        return await client.get_prices(chain_id, tokens, currency)

    try:
        return await get_or_fetch(cache, key, fetch)
    except (UpstreamError, UpstreamNotConfiguredError) as e:
        if not config.is_development:
            raise
        log.warning("prices_demo_fallback", chain_id=chain_id, error=str(e))
        return fixtures.prices(tokens)


@router.get("/token/{chain_id}")
async def get_token_metadata(
    chain_id: int,
    address: str | None = Query(None),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_metadata_cache),
):
    """Token symbol, name, decimals and logo. Falls back to an "UNKNOWN" placeholder."""
    if not address:
        raise BadRequestError("Address parameter required")
    if is_native(address):
        return {"assets": NATIVE_TOKEN_METADATA}

    try:
        return await get_or_fetch(
            cache,
            cache_key(f"/token-details/{chain_id}", {"address": address.lower()}),
            lambda: client.get_token_details(chain_id, address),
        )
    except (UpstreamError, UpstreamNotConfiguredError) as e:
        log.info("token_metadata_placeholder", chain_id=chain_id, token=address, error=str(e))
        return {"assets": UNKNOWN_TOKEN_METADATA}


@router.get("/token-pairs/{chain_id}")
async def get_token_pairs(
    chain_id: int,
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Pairs with active limit orders, labelled with known token symbols."""
    data = await get_or_fetch(
        cache,
        cache_key(f"/orderbook/{chain_id}/active-pairs"),
        lambda: client.get_active_pairs(chain_id),
    )
    items = data.get("items", []) if isinstance(data, dict) else data

    pairs = []
    for item in items:
        maker, taker = item.get("makerAsset", ""), item.get("takerAsset", "")
        maker_symbol, taker_symbol = token_symbol(maker), token_symbol(taker)
        pairs.append({
            "makerAsset": maker,
            "takerAsset": taker,
            "makerSymbol": maker_symbol,
            "takerSymbol": taker_symbol,
            "label": f"{maker_symbol}/{taker_symbol}",
        })
    return {"chainId": chain_id, "pairs": pairs, "total": len(pairs)}
