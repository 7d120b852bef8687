"""Demo payloads for running the dashboard without upstream access."""

from aggregator_core.demo import fixtures

__all__ = ["fixtures"]
