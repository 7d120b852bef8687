"""Portfolio valuation and display formatting."""

from aggregator_core.portfolio.formatting import (
    format_address,
    format_currency,
    format_token_balance,
    format_token_balance_display,
    token_decimals,
)
from aggregator_core.portfolio.valuation import Holding, total_value, value_wallet

__all__ = [
    "Holding",
    "format_address",
    "format_currency",
    "format_token_balance",
    "format_token_balance_display",
    "token_decimals",
    "total_value",
    "value_wallet",
]
