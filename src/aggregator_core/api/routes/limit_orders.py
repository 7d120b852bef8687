"""Limit order routes: proxies over the 1inch orderbook v4 API.

Order creation and cancellation need a wallet signature upstream; in demo
mode they are simulated so the dashboard flows can be exercised without
funds.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request

from aggregator_core.api.deps import get_client, get_response_cache, serve_demo
from aggregator_core.cache import ResponseCache, cache_key, get_or_fetch
from aggregator_core.demo import fixtures
from aggregator_core.errors import AggregatorError, BadRequestError
from aggregator_core.exchange import OneInchClient
from aggregator_core.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/limit-orders/{chain_id}", tags=["limit-orders"])

# Query params consumed by this service, never forwarded upstream
_LOCAL_PARAMS = {"demo"}


def _forwarded(request: Request) -> dict[str, Any]:
    return {k: v for k, v in request.query_params.items() if k not in _LOCAL_PARAMS}


@router.post("")
async def create_limit_order(
    chain_id: int,
    order: dict[str, Any] = Body(...),
    demo: bool = Depends(serve_demo),
    client: OneInchClient = Depends(get_client),
):
    """Submit a signed order to the order book."""
    if demo:
        return fixtures.created_order(order)
    result = await client.create_limit_order(chain_id, order)
    log.info("limit_order_created", chain_id=chain_id, maker=order.get("maker"))
    return result


@router.delete("/cancel")
async def cancel_limit_order(
    chain_id: int,
    order_id: str | None = Query(None, alias="orderId"),
    demo: bool = Depends(serve_demo),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    if not order_id:
        raise BadRequestError("Order ID is required")
    if demo:
        return fixtures.cancelled_order(order_id)
    result = await client.cancel_order(chain_id, order_id)
    cache.invalidate(cache_key(f"/orderbook/{chain_id}/order/{order_id.lower()}"))
    return {"success": True, "orderId": order_id, "result": result}


@router.get("/all")
async def get_all_orders(
    chain_id: int,
    request: Request,
    demo: bool = Depends(serve_demo),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    if demo:
        return fixtures.limit_orders("0x0000000000000000000000000000000000000000")
    params = _forwarded(request)
    return await get_or_fetch(
        cache,
        cache_key(f"/orderbook/{chain_id}/all", params),
        lambda: client.get_all_orders(chain_id, params),
    )


@router.get("/count")
async def count_orders(
    chain_id: int,
    request: Request,
    demo: bool = Depends(serve_demo),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    if demo:
        return fixtures.order_count()
    params = _forwarded(request)
    return await get_or_fetch(
        cache,
        cache_key(f"/orderbook/{chain_id}/count", params),
        lambda: client.count_orders(chain_id, params),
    )


@router.get("/events")
async def get_order_events(
    chain_id: int,
    request: Request,
    client: OneInchClient = Depends(get_client),
):
    """Fill and cancel events across the whole book. Not cached."""
    return await client.get_order_events(chain_id, params=_forwarded(request))


@router.get("/events/{order_hash}")
async def get_events_for_order(
    chain_id: int,
    order_hash: str,
    client: OneInchClient = Depends(get_client),
):
    return await client.get_order_events(chain_id, order_hash)


@router.get("/active-pairs")
async def get_active_pairs(
    chain_id: int,
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    return await get_or_fetch(
        cache,
        cache_key(f"/orderbook/{chain_id}/active-pairs"),
        lambda: client.get_active_pairs(chain_id),
    )


@router.get("/has-permit/{wallet_address}/{token_address}")
async def has_active_orders_with_permit(
    chain_id: int,
    wallet_address: str,
    token_address: str,
    client: OneInchClient = Depends(get_client),
):
    return await client.has_active_orders_with_permit(chain_id, wallet_address, token_address)


@router.get("/quote")
async def get_limit_order_quote(
    chain_id: int,
    maker_asset: str | None = Query(None, alias="makerAsset"),
    taker_asset: str | None = Query(None, alias="takerAsset"),
    taking_amount: str | None = Query(None, alias="takingAmount"),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Making amount the book would require for a given taking amount."""
    if not (maker_asset and taker_asset and taking_amount):
        raise BadRequestError("makerAsset, takerAsset, and takingAmount are required")
    params = {"makerAsset": maker_asset, "takerAsset": taker_asset, "takingAmount": taking_amount}
    return await get_or_fetch(
        cache,
        cache_key(f"/orderbook/{chain_id}/quote", params),
        lambda: client.get_limit_order_quote(chain_id, maker_asset, taker_asset, taking_amount),
    )


@router.get("/protocol-fee")
async def get_protocol_fee(chain_id: int, demo: bool = Depends(serve_demo)):
    """Fee schedule. The v4 order book has no fee endpoint, so this is demo-only."""
    if not demo:
        raise AggregatorError("Protocol fee schedule is only available in demo mode", status_code=501)
    return fixtures.protocol_fee(chain_id)


@router.get("/orderbook")
async def get_orderbook(
    chain_id: int,
    base_token: str | None = Query(None, alias="baseToken"),
    quote_token: str | None = Query(None, alias="quoteToken"),
    demo: bool = Depends(serve_demo),
):
    """Aggregated depth for a pair. Demo-only: the v4 order book exposes orders, not depth."""
    if not (base_token and quote_token):
        raise BadRequestError("Missing required parameters: baseToken, quoteToken")
    if not demo:
        raise AggregatorError("Order book depth is only available in demo mode", status_code=501)
    return {"chainId": chain_id, **fixtures.orderbook(base_token, quote_token)}


@router.get("/order/{order_hash}")
async def get_order(
    chain_id: int,
    order_hash: str,
    demo: bool = Depends(serve_demo),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    if demo:
        return fixtures.order(order_hash, chain_id)
    return await get_or_fetch(
        cache,
        cache_key(f"/orderbook/{chain_id}/order/{order_hash.lower()}"),
        lambda: client.get_order(chain_id, order_hash),
    )


# Registered last: the catch-all segment would shadow the fixed paths above
@router.get("/{address}")
async def get_orders_by_maker(
    chain_id: int,
    address: str,
    request: Request,
    demo: bool = Depends(serve_demo),
    client: OneInchClient = Depends(get_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    if demo:
        return fixtures.limit_orders(address)
    params = _forwarded(request)
    return await get_or_fetch(
        cache,
        cache_key(f"/orderbook/{chain_id}/address/{address.lower()}", params),
        lambda: client.get_orders_by_maker(chain_id, address, params),
    )
