"""Demo payloads served when demo mode is on or the upstream is unavailable in development.

Shapes mirror the upstream responses closely enough for the dashboard to
render. Generated values come from a ``random.Random`` seeded by the request
inputs, so the same request yields the same payload.
"""

from __future__ import annotations

import random
import secrets
import time
from datetime import datetime, timedelta, timezone
from typing import Any

from aggregator_core.exchange.chains import NATIVE_TOKEN

USDC = "0xa0b86a33e6441e5ba2ad8d73b8e76c6b72c2e6ef"
WBTC = "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599"

_DEMO_PRICES = {
    "eeeeeeee": 2800.0,
    "a0b86a33": 1.0,
    "2260fac5": 45000.0,
}

_DEMO_TOKENS = [
    {"symbol": "ETH", "name": "Ethereum", "decimals": 18},
    {"symbol": "USDC", "name": "USD Coin", "decimals": 6},
    {"symbol": "USDT", "name": "Tether USD", "decimals": 6},
    {"symbol": "WBTC", "name": "Wrapped Bitcoin", "decimals": 8},
    {"symbol": "DAI", "name": "Dai Stablecoin", "decimals": 18},
    {"symbol": "UNI", "name": "Uniswap", "decimals": 18},
    {"symbol": "LINK", "name": "Chainlink", "decimals": 18},
]

_DEMO_PROTOCOLS = ["Uniswap V3", "1inch", "SushiSwap", "Curve", "Balancer"]


def _hex(rng: random.Random, nbytes: int) -> str:
    return "0x" + "".join(f"{rng.getrandbits(8):02x}" for _ in range(nbytes))


def _now() -> int:
    return int(time.time())


def balances() -> dict[str, str]:
    return {
        NATIVE_TOKEN: "1500000000000000000",
        USDC: "1000000000",
        WBTC: "5000000",
    }


def prices(tokens: list[str]) -> dict[str, float]:
    """Fixed prices for the well-known demo tokens, seeded noise for the rest."""
    result: dict[str, float] = {}
    for token in tokens:
        for marker, price in _DEMO_PRICES.items():
            if marker in token.lower():
                result[token] = price
                break
        else:
            result[token] = round(random.Random(token.lower()).uniform(0, 100), 4)
    return result


def swap_transaction(body: dict[str, Any]) -> dict[str, Any]:
    zero = "0x0000000000000000000000000000000000000000"
    return {
        "tx": {
            "to": "0x1234567890123456789012345678901234567890",
            "data": "0x",
            "value": "0",
            "gas": "200000",
            "gasPrice": "20000000000",
        },
        "protocols": [
            {
                "name": "Uniswap V3",
                "part": 100,
                "fromTokenAddress": body.get("src") or zero,
                "toTokenAddress": body.get("dst") or zero,
            }
        ],
    }


def limit_orders(address: str) -> list[dict[str, Any]]:
    rng = random.Random(address.lower())
    now = _now()
    return [
        {
            "id": "1",
            "orderId": _hex(rng, 32),
            "status": "active",
            "makerAsset": NATIVE_TOKEN,
            "takerAsset": USDC,
            "makingAmount": "1.5",
            "takingAmount": "4200.0",
            "filled": "0",
            "remaining": "1.5",
            "maker": address,
            "expiry": now + 86400,
            "createdAt": now - 3600,
            "makerToken": {"symbol": "ETH", "name": "Ethereum", "decimals": 18, "logoURI": None},
            "takerToken": {"symbol": "USDC", "name": "USD Coin", "decimals": 6, "logoURI": None},
            "rate": "2800.0",
        },
        {
            "id": "2",
            "orderId": _hex(rng, 32),
            "status": "active",
            "makerAsset": USDC,
            "takerAsset": WBTC,
            "makingAmount": "5000.0",
            "takingAmount": "0.1",
            "filled": "0",
            "remaining": "5000.0",
            "maker": address,
            "expiry": now + 172800,
            "createdAt": now - 7200,
            "makerToken": {"symbol": "USDC", "name": "USD Coin", "decimals": 6, "logoURI": None},
            "takerToken": {"symbol": "WBTC", "name": "Wrapped Bitcoin", "decimals": 8, "logoURI": None},
            "rate": "50000.0",
        },
    ]


def created_order(order: dict[str, Any]) -> dict[str, Any]:
    return {
        "orderId": "0x" + secrets.token_hex(32),
        "status": "active",
        "hash": "0x" + secrets.token_hex(32),
        **order,
        "createdAt": _now(),
        "id": secrets.token_hex(5),
    }


def cancelled_order(order_id: str) -> dict[str, Any]:
    return {
        "success": True,
        "message": "Demo order cancelled successfully",
        "orderId": order_id,
        "status": "cancelled",
        "cancelledAt": _now(),
    }


def order_count() -> dict[str, int]:
    return {"count": 42, "active": 38, "filled": 3, "cancelled": 1, "expired": 0}


def order(order_hash: str, chain_id: int) -> dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "id": order_hash,
        "orderId": order_hash,
        "maker": "0x1234567890123456789012345678901234567890",
        "makerAsset": "0x0000000000000000000000000000000000000000",
        "takerAsset": USDC,
        "makingAmount": "1000000000000000000",
        "takingAmount": "3200000000",
        "status": "active",
        "createdAt": (now - timedelta(days=1)).isoformat(),
        "expiresAt": (now + timedelta(days=7)).isoformat(),
        "filledAmount": "0",
        "remainingAmount": "1000000000000000000",
        "chainId": chain_id,
        "signature": "0x" + "0" * 130,
    }


def protocol_fee(chain_id: int) -> dict[str, Any]:
    return {
        "protocolFee": {
            "percentage": "0.1",
            "minimumFee": "1000000000000000",
            "maximumFee": "100000000000000000",
        },
        "feeStructure": {
            "makerFee": "0.05",
            "takerFee": "0.1",
            "cancelFee": "0",
            "partialFillFee": "0.02",
        },
        "feeTokens": [
            {"token": NATIVE_TOKEN, "symbol": "ETH", "decimals": 18, "discountPercentage": "0"},
            {
                "token": "0x111111111117dc0aa78b770fa6a738034120c302",
                "symbol": "1INCH",
                "decimals": 18,
                "discountPercentage": "50",
            },
        ],
        "volumeDiscounts": [
            {"minimumVolume": "0", "discountPercentage": "0"},
            {"minimumVolume": "10000", "discountPercentage": "10"},
            {"minimumVolume": "100000", "discountPercentage": "25"},
            {"minimumVolume": "1000000", "discountPercentage": "50"},
        ],
        "formula": "orderValue * protocolFeePercentage * (1 - volumeDiscount) * (1 - tokenDiscount)",
        "chainId": chain_id,
        "lastUpdated": datetime.now(timezone.utc).isoformat(),
    }


def orderbook(base_token: str, quote_token: str, base_price: float = 3000.0, depth: int = 20) -> dict[str, Any]:
    """Synthetic two-sided book around *base_price*; bids descend, asks ascend."""
    rng = random.Random(f"{base_token.lower()}/{quote_token.lower()}")
    now = datetime.now(timezone.utc)

    def level(side: str, i: int, price: float) -> dict[str, Any]:
        return {
            "id": f"{side}_{i}",
            "price": f"{price:.6f}",
            "amount": f"{rng.uniform(0.1, 2.1):.4f}",
            "maker": _hex(rng, 20),
            "timestamp": (now - timedelta(seconds=rng.uniform(0, 3600))).isoformat(),
        }

    bids = [level("bid", i, base_price * (0.999 - i * 0.0005)) for i in range(depth)]
    asks = [level("ask", i, base_price * (1.001 + i * 0.0005)) for i in range(depth)]
    best_bid = float(bids[0]["price"])
    best_ask = float(asks[0]["price"])

    return {
        "pair": f"{base_token}/{quote_token}",
        "baseToken": {"address": base_token, "symbol": "BASE", "decimals": 18},
        "quoteToken": {"address": quote_token, "symbol": "QUOTE", "decimals": 6},
        "bids": bids,
        "asks": asks,
        "stats": {
            "bestBid": f"{best_bid:.6f}",
            "bestAsk": f"{best_ask:.6f}",
            "spread": f"{(best_ask - best_bid) / best_bid * 100:.3f}%",
            "high24h": f"{base_price * 1.05:.2f}",
            "low24h": f"{base_price * 0.95:.2f}",
        },
        "timestamp": now.isoformat(),
    }


def history_events(address: str, limit: int) -> list[dict[str, Any]]:
    """Raw History API events, one per minute going back from now."""
    rng = random.Random(address.lower())
    now = _now()
    events = []
    for i in range(limit):
        src, dst = rng.sample(_DEMO_TOKENS, 2)
        events.append({
            "id": f"demo-{i}",
            "type": "swap",
            "txHash": _hex(rng, 32),
            "logIndex": 0,
            "blockNumber": 19_000_000 - i * 5,
            "timeStamp": now - i * 60,
            "fromToken": {
                **src,
                "address": _hex(rng, 20),
                "amount": str(rng.randint(1, 1000) * 10 ** (src["decimals"] - 2)),
            },
            "toToken": {
                **dst,
                "address": _hex(rng, 20),
                "amount": str(rng.randint(1, 1000) * 10 ** (dst["decimals"] - 2)),
            },
            "sender": address,
            "gasUsed": str(rng.randint(90_000, 250_000)),
            "gasPrice": str(rng.randint(10, 40) * 10**9),
            "gasCost": str(rng.randint(1, 9) * 10**15),
            "protocol": {"name": rng.choice(_DEMO_PROTOCOLS)},
            "description": "swap",
        })
    return events
