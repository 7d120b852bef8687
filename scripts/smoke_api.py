#!/usr/bin/env python3
"""Smoke test for a running aggregator dashboard API.

Hits the main endpoints with demo payloads enabled, so it works without a
1inch API key when the server runs in development mode.
"""

import asyncio
import json
import sys

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"
WALLET = "0x1111111111111111111111111111111111111111"
ETH = "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"


async def check(client: httpx.AsyncClient, label: str, method: str, path: str, **kwargs) -> dict | list | None:
    print(label)
    try:
        response = await client.request(method, f"{BASE_URL}{path}", **kwargs)
    except httpx.HTTPError as e:
        print(f"   Error: {e}\n")
        return None
    print(f"   Status: {response.status_code}")
    return response.json()


async def test_endpoints():
    """Exercise the dashboard endpoints."""
    async with httpx.AsyncClient(timeout=30) as client:
        print("Testing Aggregator Dashboard API...\n")

        data = await check(client, "1. /api/health", "GET", "/api/health")
        if data is not None:
            print(f"   Response: {json.dumps(data, indent=2)}\n")

        data = await check(client, "2. /api/balances/1/{address}", "GET", f"/api/balances/1/{WALLET}")
        if isinstance(data, dict):
            print(f"   Tokens held: {len(data)}\n")

        data = await check(client, "3. /api/prices/1", "GET", "/api/prices/1", params={"tokens": f"{ETH},{USDC}"})
        if isinstance(data, dict):
            for token, price in data.items():
                print(f"   - {token[:10]}...: {price}")
            print()

        data = await check(
            client,
            "4. /api/portfolio/current-value",
            "GET",
            "/api/portfolio/current-value",
            params={"chainId": 1, "address": WALLET},
        )
        if isinstance(data, dict):
            print(f"   Current value: ${data.get('currentValueUsd', 0):,.2f}\n")

        data = await check(
            client,
            "5. /api/transactions/1/{address}",
            "GET",
            f"/api/transactions/1/{WALLET}",
            params={"limit": 5, "demo": "true"},
        )
        if isinstance(data, dict):
            print(f"   Source: {data['meta']['source']}, count: {data['meta']['count']}\n")

        data = await check(
            client,
            "6. /api/limit-orders/1/{address}",
            "GET",
            f"/api/limit-orders/1/{WALLET}",
            params={"demo": "true"},
        )
        if isinstance(data, list):
            print(f"   Orders: {len(data)}\n")

        data = await check(
            client,
            "7. /api/swap/quote/1",
            "GET",
            "/api/swap/quote/1",
            params={"src": ETH, "dst": USDC, "amount": "1000000000000000000", "from": WALLET},
        )
        if data is not None:
            print(f"   Response: {json.dumps(data, indent=2)[:400]}\n")


if __name__ == "__main__":
    asyncio.run(test_endpoints())
