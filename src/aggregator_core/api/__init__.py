"""HTTP API: FastAPI app factory and route modules."""

from aggregator_core.api.app import create_app

__all__ = ["create_app"]
