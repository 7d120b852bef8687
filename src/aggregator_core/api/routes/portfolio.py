"""Portfolio route: current wallet value in USD."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from aggregator_core.api.deps import get_client, get_metadata_cache, get_response_cache
from aggregator_core.cache import ResponseCache
from aggregator_core.exchange import OneInchClient
from aggregator_core.portfolio import format_address, format_currency, total_value, value_wallet

router = APIRouter(tags=["portfolio"])


@router.get("/portfolio/current-value")
async def get_current_value(
    chain_id: int = Query(1, alias="chainId"),
    address: str | None = Query(None),
    client: OneInchClient = Depends(get_client),
    response_cache: ResponseCache = Depends(get_response_cache),
    metadata_cache: ResponseCache = Depends(get_metadata_cache),
):
    """Sum of balance x USD price over the wallet's tokens; zero with no wallet connected."""
    if not address:
        return {"currentValueUsd": 0, "holdings": []}

    holdings = await value_wallet(client, response_cache, metadata_cache, chain_id, address)
    current_value = total_value(holdings)
    return {
        "chainId": chain_id,
        "address": address,
        "addressDisplay": format_address(address),
        "currentValueUsd": current_value,
        "currentValueDisplay": format_currency(current_value),
        "holdings": [h.to_response() for h in holdings],
    }
