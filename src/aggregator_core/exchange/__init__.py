"""Upstream API clients."""

from aggregator_core.exchange.oneinch import OneInchClient

__all__ = ["OneInchClient"]
