"""Wallet history models: 1inch History API events flattened into transactions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from aggregator_core.portfolio.formatting import format_token_balance, token_decimals


class HistoryToken(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    symbol: str
    address: str | None = None
    name: str | None = None
    decimals: int | None = None
    logo_uri: str | None = Field(default=None, alias="logoURI")


class Transaction(BaseModel):
    """One history event. Amounts are display units with six decimals."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hash: str
    time_stamp: str
    from_: str = Field(alias="from")
    to: str
    value: str
    value_in_eth: str
    event_type: str
    protocol: str | None = None
    from_token: HistoryToken
    to_token: HistoryToken
    from_amount: str
    to_amount: str
    # The History API only reports successful events
    status: str = "1"
    gas_used: str = "0"
    gas_price: str = "0"
    gas_cost_eth: str = "0"
    function_name: str | None = None
    chain_id: int
    chain_name: str
    block_number: str | None = None
    log_index: str | None = None
    event_id: str | None = None
    price_impact: str | None = None
    slippage: str | None = None
    effective_price: str | None = None

    @classmethod
    def from_history_event(cls, event: dict[str, Any], chain_id: int, chain_name: str) -> Transaction:
        src = event.get("fromToken") or {}
        dst = event.get("toToken") or {}
        details = event.get("details") or {}
        src_decimals = token_decimals(src.get("decimals"))
        dst_decimals = token_decimals(dst.get("decimals"))
        src_amount = src.get("amount") or "0"

        gas_cost = event.get("gasCost")
        return cls(
            hash=event.get("txHash", ""),
            time_stamp=str(event.get("timeStamp", "")),
            from_=event.get("sender", ""),
            to=event.get("recipient") or dst.get("address") or "",
            value=src_amount,
            value_in_eth=(
                f"{format_token_balance(src_amount, src_decimals):.6f}"
                if src.get("symbol") == "ETH"
                else "0"
            ),
            event_type=event.get("type", "unknown"),
            protocol=(event.get("protocol") or {}).get("name"),
            from_token=_token(src),
            to_token=_token(dst),
            from_amount=f"{format_token_balance(src_amount, src_decimals):.6f}",
            to_amount=f"{format_token_balance(dst.get('amount') or '0', dst_decimals):.6f}",
            gas_used=event.get("gasUsed") or "0",
            gas_price=event.get("gasPrice") or "0",
            gas_cost_eth=f"{format_token_balance(gas_cost, 18):.6f}" if gas_cost else "0",
            function_name=event.get("description"),
            chain_id=chain_id,
            chain_name=chain_name,
            block_number=_str_or_none(event.get("blockNumber")),
            log_index=_str_or_none(event.get("logIndex")),
            event_id=_str_or_none(event.get("id")),
            price_impact=details.get("priceImpact"),
            slippage=details.get("slippage"),
            effective_price=details.get("effectivePrice"),
        )

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def _token(raw: dict[str, Any]) -> HistoryToken:
    return HistoryToken(
        symbol=raw.get("symbol") or "TOKEN",
        address=raw.get("address"),
        name=raw.get("name"),
        decimals=raw.get("decimals"),
        logo_uri=raw.get("logoURI"),
    )


def _str_or_none(value: Any) -> str | None:
    return None if value is None else str(value)
