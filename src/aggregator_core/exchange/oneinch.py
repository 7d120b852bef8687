"""1inch developer API client: REST.

All endpoints live under one host (https://api.1inch.dev) and authenticate
with a Bearer API key. Each product has its own versioned prefix:

    balance/v1.2, price/v1.1, token-details/v1.0, fusion/quote/v1.0,
    swap/v6.0, orderbook/v4.0, history/v2.0
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from aggregator_core.errors import (
    UpstreamError,
    UpstreamNotConfiguredError,
    UpstreamTimeoutError,
)
from aggregator_core.logging import get_logger

log = get_logger(__name__)


class OneInchClient:
    """Async client for the 1inch developer API."""

    def __init__(
        self,
        base_url: str = "https://api.1inch.dev",
        api_key: str | None = None,
        timeout_s: float = 15.0,
        history_retries: int = 3,
        retry_backoff_s: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_s = timeout_s
        self.history_retries = max(1, history_retries)
        self.retry_backoff_s = retry_backoff_s
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)
        return self._http

    async def close(self) -> None:
        if self._http and not self._http.is_closed:
            await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        timeout_s: float | None = None,
    ) -> Any:
        if not self.api_key:
            raise UpstreamNotConfiguredError()

        http = await self._get_http()
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            resp = await http.request(
                method,
                f"{self.base_url}{path}",
                params=params or None,
                json=json,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Accept": "application/json",
                },
                timeout=timeout_s or self.timeout_s,
            )
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(f"1inch API timed out: {path}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"1inch API unreachable: {e}") from e

        if resp.is_error:
            raise UpstreamError(
                f"1inch API error {resp.status_code}: {_describe(resp)}",
                upstream_status=resp.status_code,
            )
        if not resp.content:
            return {}
        return resp.json()

    # --- Balances, prices, token metadata ---

    async def get_balances(self, chain_id: int, address: str) -> dict[str, str]:
        """Raw token balances (smallest unit, as strings) keyed by token address."""
        return await self._request("GET", f"/balance/v1.2/{chain_id}/balances/{address}")

    async def get_prices(
        self, chain_id: int, tokens: list[str], currency: str = "USD"
    ) -> dict[str, str]:
        return await self._request(
            "GET",
            f"/price/v1.1/{chain_id}",
            params={"tokens": ",".join(tokens), "currency": currency},
        )

    async def post_prices(
        self, chain_id: int, tokens: list[str], currency: str = "USD"
    ) -> dict[str, str]:
        return await self._request(
            "POST",
            f"/price/v1.1/{chain_id}",
            json={"tokens": tokens, "currency": currency},
        )

    async def get_token_details(self, chain_id: int, address: str) -> dict:
        """Token metadata; the payload nests symbol/name/decimals under ``assets``."""
        return await self._request("GET", f"/token-details/v1.0/details/{chain_id}/{address}")

    # --- Swap ---

    async def get_fusion_quote(self, chain_id: int, params: dict[str, Any]) -> dict:
        return await self._request("GET", f"/fusion/quote/v1.0/{chain_id}", params=params)

    async def get_swap_quote(self, chain_id: int, params: dict[str, Any]) -> dict:
        return await self._request("GET", f"/swap/v6.0/{chain_id}/quote", params=params)

    async def build_swap(self, chain_id: int, body: dict[str, Any]) -> dict:
        """Build swap calldata. Never cached: the result depends on chain state."""
        return await self._request("POST", f"/swap/v6.0/{chain_id}/swap", json=body)

    async def get_allowance(self, chain_id: int, token_address: str, wallet_address: str) -> dict:
        return await self._request(
            "GET",
            f"/swap/v6.0/{chain_id}/approve/allowance",
            params={"tokenAddress": token_address, "walletAddress": wallet_address},
        )

    async def get_spender(self, chain_id: int) -> dict:
        return await self._request("GET", f"/swap/v6.0/{chain_id}/approve/spender")

    async def get_approve_transaction(
        self, chain_id: int, token_address: str, amount: str | None = None
    ) -> dict:
        return await self._request(
            "GET",
            f"/swap/v6.0/{chain_id}/approve/transaction",
            params={"tokenAddress": token_address, "amount": amount},
        )

    async def get_liquidity_sources(self, chain_id: int) -> dict:
        return await self._request("GET", f"/swap/v6.0/{chain_id}/liquidity-sources")

    async def get_tokens(self, chain_id: int) -> dict:
        return await self._request("GET", f"/swap/v6.0/{chain_id}/tokens")

    # --- Limit order book ---

    async def create_limit_order(self, chain_id: int, order: dict[str, Any]) -> dict:
        return await self._request("POST", f"/orderbook/v4.0/{chain_id}", json=order)

    async def get_orders_by_maker(
        self, chain_id: int, address: str, params: dict[str, Any] | None = None
    ) -> list[dict]:
        return await self._request(
            "GET", f"/orderbook/v4.0/{chain_id}/address/{address}", params=params
        )

    async def get_all_orders(self, chain_id: int, params: dict[str, Any] | None = None) -> list[dict]:
        return await self._request("GET", f"/orderbook/v4.0/{chain_id}/all", params=params)

    async def count_orders(self, chain_id: int, params: dict[str, Any] | None = None) -> dict:
        return await self._request("GET", f"/orderbook/v4.0/{chain_id}/count", params=params)

    async def get_order(self, chain_id: int, order_hash: str) -> dict:
        return await self._request("GET", f"/orderbook/v4.0/{chain_id}/order/{order_hash}")

    async def get_order_events(
        self,
        chain_id: int,
        order_hash: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        path = f"/orderbook/v4.0/{chain_id}/events"
        if order_hash:
            path = f"{path}/{order_hash}"
        return await self._request("GET", path, params=params)

    async def get_active_pairs(self, chain_id: int, params: dict[str, Any] | None = None) -> dict:
        return await self._request(
            "GET", f"/orderbook/v4.0/{chain_id}/unique-active-pairs", params=params
        )

    async def has_active_orders_with_permit(
        self, chain_id: int, wallet_address: str, token_address: str
    ) -> dict:
        return await self._request(
            "GET",
            f"/orderbook/v4.0/{chain_id}/has-active-orders-with-permit/{wallet_address}/{token_address}",
        )

    async def get_limit_order_quote(
        self, chain_id: int, maker_asset: str, taker_asset: str, taking_amount: str
    ) -> dict:
        return await self._request(
            "GET",
            f"/orderbook/v4.0/{chain_id}/quote",
            params={
                "makerAsset": maker_asset,
                "takerAsset": taker_asset,
                "takingAmount": taking_amount,
            },
        )

    async def cancel_order(self, chain_id: int, order_hash: str) -> dict:
        return await self._request("DELETE", f"/orderbook/v4.0/{chain_id}/order/{order_hash}")

    # --- History ---

    async def get_history_events(
        self,
        address: str,
        chain_id: int,
        limit: int = 50,
        event_type: str = "all",
    ) -> list[dict]:
        """Fetch wallet history events, retrying on timeouts.

        Each attempt gets a longer timeout (``timeout_s * attempt``) and a
        linear pause before the next one. Non-timeout failures are raised
        immediately.
        """
        base = f"/history/v2.0/history/{address}/events"
        for attempt in range(1, self.history_retries + 1):
            timeout = self.timeout_s * attempt
            try:
                if event_type == "swaps":
                    data = await self._request(
                        "POST",
                        f"{base}/swaps",
                        json={"chainId": chain_id, "limit": limit},
                        timeout_s=timeout,
                    )
                else:
                    data = await self._request(
                        "GET",
                        base,
                        params={"chainId": chain_id, "limit": limit},
                        timeout_s=timeout,
                    )
            except UpstreamTimeoutError:
                if attempt == self.history_retries:
                    raise
                log.warning(
                    "history_timeout_retrying",
                    attempt=attempt,
                    max_attempts=self.history_retries,
                    chain_id=chain_id,
                )
                await asyncio.sleep(self.retry_backoff_s * attempt)
                continue
            items = data.get("items") if isinstance(data, dict) else data
            return items or []
        return []


def _describe(resp: httpx.Response) -> str:
    """Pull a human-readable reason out of an upstream error response."""
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase or "unknown error"
    if isinstance(body, dict):
        return str(body.get("description") or body.get("error") or body.get("message") or body)
    return str(body)
