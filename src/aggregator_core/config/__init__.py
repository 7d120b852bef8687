"""Configuration system."""

from aggregator_core.config.loader import load_config
from aggregator_core.config.schema import AppConfig

__all__ = ["AppConfig", "load_config"]
