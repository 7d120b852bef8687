"""Pydantic response models."""

from aggregator_core.models.quote import SwapQuote, TokenRef
from aggregator_core.models.transaction import HistoryToken, Transaction

__all__ = ["HistoryToken", "SwapQuote", "TokenRef", "Transaction"]
