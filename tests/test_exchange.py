"""Tests for the 1inch API client."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from aggregator_core.errors import (
    UpstreamError,
    UpstreamNotConfiguredError,
    UpstreamTimeoutError,
)
from aggregator_core.exchange import OneInchClient

WALLET = "0x1111111111111111111111111111111111111111"


def run(coro):
    return asyncio.run(coro)


class TestOneInchClient:
    def test_default_url(self):
        c = OneInchClient()
        assert c.base_url == "https://api.1inch.dev"
        assert c.configured is False

    def test_custom_url_trailing_slash_stripped(self):
        c = OneInchClient(base_url="https://proxy.example/", api_key="k")
        assert c.base_url == "https://proxy.example"
        assert c.configured is True

    def test_missing_key_raises_before_any_request(self, upstream):
        c = OneInchClient(transport=httpx.MockTransport(upstream))
        with pytest.raises(UpstreamNotConfiguredError):
            run(c.get_balances(1, WALLET))
        assert upstream.calls == []

    def test_sends_bearer_token(self, upstream, oneinch):
        upstream.on("GET", f"/balance/v1.2/1/balances/{WALLET}", {"0xabc": "1"})
        assert run(oneinch.get_balances(1, WALLET)) == {"0xabc": "1"}
        request = upstream.calls[0]
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["Accept"] == "application/json"

    def test_get_prices_joins_tokens(self, upstream, oneinch):
        upstream.on("GET", "/price/v1.1/1", {"0xa": "1.0"})
        run(oneinch.get_prices(1, ["0xa", "0xb"], currency="USD"))
        params = upstream.calls[0].url.params
        assert params["tokens"] == "0xa,0xb"
        assert params["currency"] == "USD"

    def test_post_prices_sends_json_body(self, upstream, oneinch):
        upstream.on("POST", "/price/v1.1/137", {"0xa": "2.0"})
        assert run(oneinch.post_prices(137, ["0xa"])) == {"0xa": "2.0"}
        assert json.loads(upstream.calls[0].content) == {"tokens": ["0xa"], "currency": "USD"}

    def test_none_params_not_sent(self, upstream, oneinch):
        upstream.on("GET", "/swap/v6.0/1/approve/transaction", {"data": "0x"})
        run(oneinch.get_approve_transaction(1, "0xtoken"))
        params = upstream.calls[0].url.params
        assert params["tokenAddress"] == "0xtoken"
        assert "amount" not in params

    def test_order_events_path(self, upstream, oneinch):
        upstream.on("GET", "/orderbook/v4.0/1/events/0xhash", [{"id": 1}])
        upstream.on("GET", "/orderbook/v4.0/1/events", [])

        async def both():
            return await oneinch.get_order_events(1, "0xhash"), await oneinch.get_order_events(1)

        assert run(both()) == ([{"id": 1}], [])

    def test_cancel_uses_delete(self, upstream, oneinch):
        upstream.on("DELETE", "/orderbook/v4.0/1/order/0xhash", {"success": True})
        assert run(oneinch.cancel_order(1, "0xhash")) == {"success": True}

    def test_empty_body_returns_empty_dict(self, upstream, oneinch):
        upstream.on("GET", "/swap/v6.0/1/approve/spender", handler=lambda r: httpx.Response(200))
        assert run(oneinch.get_spender(1)) == {}


class TestErrors:
    def test_http_error_maps_to_upstream_error(self, upstream, oneinch):
        upstream.on("GET", "/swap/v6.0/1/tokens", {"description": "insufficient liquidity"}, status=400)
        with pytest.raises(UpstreamError) as exc:
            run(oneinch.get_tokens(1))
        assert exc.value.status_code == 502
        assert exc.value.upstream_status == 400
        assert "insufficient liquidity" in str(exc.value)

    def test_non_json_error_body(self, upstream, oneinch):
        upstream.on(
            "GET",
            "/swap/v6.0/1/tokens",
            handler=lambda r: httpx.Response(503, text="<html>down</html>"),
        )
        with pytest.raises(UpstreamError) as exc:
            run(oneinch.get_tokens(1))
        assert "503" in str(exc.value)

    def test_timeout_maps_to_504(self, upstream, oneinch):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        upstream.on("GET", "/swap/v6.0/1/tokens", handler=slow)
        with pytest.raises(UpstreamTimeoutError) as exc:
            run(oneinch.get_tokens(1))
        assert exc.value.status_code == 504

    def test_connection_error_maps_to_upstream_error(self, upstream, oneinch):
        def refused(request):
            raise httpx.ConnectError("refused", request=request)

        upstream.on("GET", "/swap/v6.0/1/tokens", handler=refused)
        with pytest.raises(UpstreamError) as exc:
            run(oneinch.get_tokens(1))
        assert "unreachable" in str(exc.value)


class TestHistory:
    PATH = f"/history/v2.0/history/{WALLET}/events"

    def test_all_events_uses_get(self, upstream, oneinch):
        upstream.on("GET", self.PATH, {"items": [{"id": 1}, {"id": 2}]})
        events = run(oneinch.get_history_events(WALLET, 1, limit=10))
        assert events == [{"id": 1}, {"id": 2}]
        params = upstream.calls[0].url.params
        assert params["chainId"] == "1"
        assert params["limit"] == "10"

    def test_swaps_uses_post(self, upstream, oneinch):
        upstream.on("POST", f"{self.PATH}/swaps", {"items": [{"id": 3}]})
        events = run(oneinch.get_history_events(WALLET, 1, limit=5, event_type="swaps"))
        assert events == [{"id": 3}]
        assert json.loads(upstream.calls[0].content) == {"chainId": 1, "limit": 5}

    def test_missing_items_is_empty(self, upstream, oneinch):
        upstream.on("GET", self.PATH, {})
        assert run(oneinch.get_history_events(WALLET, 1)) == []

    def test_bare_list_body_returned_as_items(self, upstream, oneinch):
        upstream.on("GET", self.PATH, [{"id": 1}])
        assert run(oneinch.get_history_events(WALLET, 1)) == [{"id": 1}]

    def test_retries_after_timeout(self, upstream, oneinch):
        attempts = []

        def flaky(request):
            attempts.append(request)
            if len(attempts) < 3:
                raise httpx.ReadTimeout("timed out", request=request)
            return httpx.Response(200, json={"items": [{"id": "ok"}]})

        upstream.on("GET", self.PATH, handler=flaky)
        assert run(oneinch.get_history_events(WALLET, 1)) == [{"id": "ok"}]
        assert len(attempts) == 3

    def test_gives_up_after_last_attempt(self, upstream, oneinch):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        upstream.on("GET", self.PATH, handler=slow)
        with pytest.raises(UpstreamTimeoutError):
            run(oneinch.get_history_events(WALLET, 1))
        assert upstream.count(self.PATH) == 3

    def test_other_errors_not_retried(self, upstream, oneinch):
        upstream.on("GET", self.PATH, {"description": "bad address"}, status=400)
        with pytest.raises(UpstreamError):
            run(oneinch.get_history_events(WALLET, 1))
        assert upstream.count(self.PATH) == 1
