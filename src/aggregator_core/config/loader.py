"""Config loader — reads YAML, applies env var overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from aggregator_core.config.schema import AppConfig

_TRUTHY = {"1", "true", "yes", "on"}


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML file, then apply env var overrides.

    If *path* is None or the file doesn't exist, returns defaults.

    Environment variable overrides:
        ONEINCH_API_KEY           -> upstream.api_key
        AGGREGATOR_UPSTREAM_URL   -> upstream.base_url
        AGGREGATOR_ENVIRONMENT    -> environment
        AGGREGATOR_DEMO_ENABLED   -> demo.enabled
        AGGREGATOR_CACHE_TTL_S    -> cache.ttl_seconds
        AGGREGATOR_LOG_LEVEL      -> logging.level
        AGGREGATOR_LOG_FORMAT     -> logging.format
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}

    api_key = os.environ.get("ONEINCH_API_KEY")
    if api_key:
        data.setdefault("upstream", {})["api_key"] = api_key

    upstream_url = os.environ.get("AGGREGATOR_UPSTREAM_URL")
    if upstream_url:
        data.setdefault("upstream", {})["base_url"] = upstream_url

    environment = os.environ.get("AGGREGATOR_ENVIRONMENT")
    if environment:
        data["environment"] = environment

    demo_enabled = os.environ.get("AGGREGATOR_DEMO_ENABLED")
    if demo_enabled:
        data.setdefault("demo", {})["enabled"] = demo_enabled.strip().lower() in _TRUTHY

    cache_ttl = os.environ.get("AGGREGATOR_CACHE_TTL_S")
    if cache_ttl:
        data.setdefault("cache", {})["ttl_seconds"] = float(cache_ttl)

    log_level = os.environ.get("AGGREGATOR_LOG_LEVEL")
    if log_level:
        data.setdefault("logging", {})["level"] = log_level

    log_format = os.environ.get("AGGREGATOR_LOG_FORMAT")
    if log_format:
        data.setdefault("logging", {})["format"] = log_format

    return AppConfig.model_validate(data)
