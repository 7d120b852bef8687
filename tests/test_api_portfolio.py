"""Tests for wallet valuation and the portfolio route."""

from __future__ import annotations

import asyncio

from aggregator_core.cache import ResponseCache
from aggregator_core.exchange.chains import NATIVE_TOKEN
from aggregator_core.portfolio import total_value, value_wallet

WALLET = "0x1111111111111111111111111111111111111111"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
MYSTERY = "0x9999999999999999999999999999999999999999"


def _seed(upstream, balances=None, prices=None):
    upstream.on(
        "GET",
        f"/balance/v1.2/1/balances/{WALLET}",
        balances if balances is not None else {NATIVE_TOKEN: "1500000000000000000", USDC: "2500000", MYSTERY: "0"},
    )
    upstream.on("GET", "/price/v1.1/1", prices if prices is not None else {NATIVE_TOKEN: "3000", USDC: "1"})
    upstream.on("GET", f"/token-details/v1.0/details/1/{USDC}", {"assets": {"symbol": "USDC", "decimals": 6}})


class TestValueWallet:
    def test_values_non_zero_balances(self, upstream, oneinch):
        _seed(upstream)
        holdings = asyncio.run(
            value_wallet(oneinch, ResponseCache(), ResponseCache(ttl_seconds=3600), 1, WALLET)
        )
        assert [h.symbol for h in holdings] == ["ETH", "USDC"]
        assert holdings[0].value_usd == 4500.0
        assert holdings[1].balance == 2.5
        assert total_value(holdings) == 4502.5

    def test_zero_balances_skip_price_lookup(self, upstream, oneinch):
        _seed(upstream, balances={USDC: "0"})
        holdings = asyncio.run(value_wallet(oneinch, ResponseCache(), ResponseCache(), 1, WALLET))
        assert holdings == []
        assert upstream.count("/price/v1.1/1") == 0

    def test_zero_decimal_token_not_scaled(self, upstream, oneinch):
        _seed(upstream, balances={MYSTERY: "5"}, prices={MYSTERY: "10"})
        upstream.on(
            "GET",
            f"/token-details/v1.0/details/1/{MYSTERY}",
            {"assets": {"symbol": "TICKET", "decimals": 0}},
        )
        holdings = asyncio.run(value_wallet(oneinch, ResponseCache(), ResponseCache(), 1, WALLET))
        assert holdings[0].symbol == "TICKET"
        assert holdings[0].balance == 5.0
        assert holdings[0].value_usd == 50.0
        assert holdings[0].to_response()["balanceDisplay"] == "5.00000"

    def test_unpriced_token_kept_at_zero(self, upstream, oneinch):
        _seed(upstream, balances={MYSTERY: "1000000000000000000"}, prices={})
        holdings = asyncio.run(value_wallet(oneinch, ResponseCache(), ResponseCache(), 1, WALLET))
        assert len(holdings) == 1
        assert holdings[0].symbol == "UNKNOWN"
        assert holdings[0].balance == 1.0
        assert holdings[0].value_usd == 0.0


class TestPortfolioRoute:
    def test_no_wallet_connected(self, api, upstream):
        resp = api.get("/api/portfolio/current-value")
        assert resp.json() == {"currentValueUsd": 0, "holdings": []}
        assert upstream.calls == []

    def test_current_value(self, api, upstream):
        _seed(upstream)
        body = api.get("/api/portfolio/current-value", params={"chainId": 1, "address": WALLET}).json()
        assert body["currentValueUsd"] == 4502.5
        assert body["currentValueDisplay"] == "$4,502.50"
        assert body["addressDisplay"] == "0x1111...1111"
        assert body["holdings"][0] == {
            "address": NATIVE_TOKEN,
            "symbol": "ETH",
            "balance": 1.5,
            "balanceDisplay": "1.50000",
            "priceUsd": 3000.0,
            "valueUsd": 4500.0,
            "valueDisplay": "$4,500.00",
        }

    def test_reuses_cached_balances(self, api, upstream):
        _seed(upstream)
        api.get(f"/api/balances/1/{WALLET}")
        api.get("/api/portfolio/current-value", params={"address": WALLET})
        assert upstream.count(f"/balance/v1.2/1/balances/{WALLET}") == 1
