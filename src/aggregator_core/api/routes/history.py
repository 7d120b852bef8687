"""Wallet history route: 1inch History API events as flat transactions."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query

from aggregator_core.api.deps import get_client, serve_demo
from aggregator_core.demo import fixtures
from aggregator_core.errors import UnsupportedChainError
from aggregator_core.exchange import OneInchClient
from aggregator_core.exchange.chains import SUPPORTED_CHAINS
from aggregator_core.logging import get_logger
from aggregator_core.models import Transaction

log = get_logger(__name__)

router = APIRouter(tags=["history"])


@router.get("/transactions/{chain_id}/{address}")
async def get_transactions(
    chain_id: int,
    address: str,
    limit: int = Query(50, ge=1, le=500),
    event_type: Literal["all", "swaps"] = Query("all", alias="type"),
    demo: bool = Depends(serve_demo),
    client: OneInchClient = Depends(get_client),
):
    """Recent wallet activity. History is never cached: new blocks change it."""
    chain_name = SUPPORTED_CHAINS.get(chain_id)
    if chain_name is None:
        raise UnsupportedChainError(chain_id, set(SUPPORTED_CHAINS))

    if demo:
        events = fixtures.history_events(address, limit)
        source = "demo"
    else:
        events = await client.get_history_events(address, chain_id, limit=limit, event_type=event_type)
        source = "1inch_history_api"

    transactions = []
    for event in events:
        if not isinstance(event, dict):
            log.warning("history_event_skipped", event_id=None, error="not an object")
            continue
        try:
            transactions.append(
                Transaction.from_history_event(event, chain_id, chain_name).to_response()
            )
        except (KeyError, TypeError, ValueError) as e:
            log.warning("history_event_skipped", event_id=event.get("id"), error=str(e))

    log.info("history_fetched", chain_id=chain_id, count=len(transactions), source=source)
    return {
        "result": transactions,
        "meta": {
            "source": source,
            "eventType": event_type,
            "chainId": chain_id,
            "chainName": chain_name,
            "limit": limit,
            "count": len(transactions),
        },
    }
