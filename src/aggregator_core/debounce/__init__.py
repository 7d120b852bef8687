"""Debouncing of user-input-triggered calls."""

from aggregator_core.debounce.debouncer import Debounced, debounce

__all__ = ["Debounced", "debounce"]
