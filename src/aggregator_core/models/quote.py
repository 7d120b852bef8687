"""Swap quote models: the Fusion quote reshaped for the dashboard."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TokenRef(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    address: str | None = None
    symbol: str | None = None
    decimals: int | None = None


class SwapQuote(BaseModel):
    """A quote as served to the client; amounts stay in the token's smallest unit."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    from_token: TokenRef
    to_token: TokenRef
    from_amount: str | None = None
    to_amount: str | None = None
    protocols: list[Any] = Field(default_factory=list)
    estimated_gas: int | str | None = None
    price_impact: float | str | None = None
    # Slippage is applied client-side, so this starts equal to to_amount
    minimum_received: str | None = None
    route: list[Any] = Field(default_factory=list)
    quote_id: str | None = None

    @classmethod
    def from_fusion(cls, data: dict[str, Any]) -> SwapQuote:
        return cls(
            from_token=TokenRef(
                address=data.get("src"),
                symbol=data.get("srcSymbol"),
                decimals=data.get("srcDecimals"),
            ),
            to_token=TokenRef(
                address=data.get("dst"),
                symbol=data.get("dstSymbol"),
                decimals=data.get("dstDecimals"),
            ),
            from_amount=data.get("srcAmount"),
            to_amount=data.get("dstAmount"),
            protocols=data.get("protocols") or [],
            estimated_gas=data.get("estimatedGas"),
            price_impact=data.get("priceImpact"),
            minimum_received=data.get("dstAmount"),
            route=data.get("route") or [],
            quote_id=data.get("quoteId"),
        )

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
