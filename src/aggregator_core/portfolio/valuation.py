"""Wallet valuation: balances x spot prices, summed in USD."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from aggregator_core.cache import ResponseCache, cache_key, get_or_fetch
from aggregator_core.errors import UpstreamError
from aggregator_core.exchange.chains import NATIVE_TOKEN_METADATA, is_native
from aggregator_core.exchange.oneinch import OneInchClient
from aggregator_core.logging import get_logger
from aggregator_core.portfolio.formatting import (
    format_currency,
    format_token_balance,
    format_token_balance_display,
    token_decimals,
)

log = get_logger(__name__)


@dataclass
class Holding:
    address: str
    symbol: str
    balance: float
    price_usd: float
    value_usd: float
    raw_balance: str
    decimals: int

    def to_response(self) -> dict:
        return {
            "address": self.address,
            "symbol": self.symbol,
            "balance": self.balance,
            "balanceDisplay": format_token_balance_display(self.raw_balance, self.decimals),
            "priceUsd": self.price_usd,
            "valueUsd": round(self.value_usd, 2),
            "valueDisplay": format_currency(self.value_usd),
        }


async def _token_metadata(
    client: OneInchClient,
    metadata_cache: ResponseCache,
    chain_id: int,
    address: str,
) -> dict:
    if is_native(address):
        return NATIVE_TOKEN_METADATA
    key = cache_key(f"/token-details/{chain_id}", {"address": address.lower()})
    try:
        details = await get_or_fetch(
            metadata_cache, key, lambda: client.get_token_details(chain_id, address)
        )
    except UpstreamError as e:
        # Tokens without metadata are valued at 18 decimals
        log.warning("token_metadata_unavailable", token=address, error=str(e))
        return {"symbol": "UNKNOWN", "decimals": 18}
    return details.get("assets") or details


async def value_wallet(
    client: OneInchClient,
    response_cache: ResponseCache,
    metadata_cache: ResponseCache,
    chain_id: int,
    address: str,
) -> list[Holding]:
    """Value every non-zero balance of *address* on *chain_id*.

    Tokens without a price are reported with a zero price rather than dropped.
    """
    balances = await get_or_fetch(
        response_cache,
        cache_key(f"/balances/{chain_id}/{address.lower()}"),
        lambda: client.get_balances(chain_id, address),
    )
    held = sorted(token for token, raw in balances.items() if raw and str(raw) != "0")
    if not held:
        return []

    prices = await get_or_fetch(
        response_cache,
        cache_key(f"/prices/{chain_id}", {"tokens": held, "currency": "USD"}),
        lambda: client.get_prices(chain_id, held, currency="USD"),
    )
    metadata = await asyncio.gather(
        *[_token_metadata(client, metadata_cache, chain_id, token) for token in held]
    )

    holdings = []
    for token, meta in zip(held, metadata):
        decimals = token_decimals(meta.get("decimals"))
        balance = format_token_balance(balances[token], decimals)
        price = float(prices.get(token) or prices.get(token.lower()) or 0)
        holdings.append(
            Holding(
                address=token,
                symbol=meta.get("symbol") or "UNKNOWN",
                balance=balance,
                price_usd=price,
                value_usd=balance * price,
                raw_balance=str(balances[token]),
                decimals=decimals,
            )
        )
    holdings.sort(key=lambda h: h.value_usd, reverse=True)
    return holdings


def total_value(holdings: list[Holding]) -> float:
    return round(sum(h.value_usd for h in holdings), 2)
