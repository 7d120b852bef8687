"""Configuration schema — Pydantic models for config.yaml."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class UpstreamConfig(BaseModel):
    base_url: str = "https://api.1inch.dev"
    api_key: str | None = None
    timeout_s: float = 15.0
    history_retries: int = 3


class CacheConfig(BaseModel):
    ttl_seconds: float = 30.0
    metadata_ttl_seconds: float = 3600.0
    # None keeps the cache unbounded (lazy expiry only)
    max_entries: int | None = None


class QuoteStreamConfig(BaseModel):
    debounce_seconds: float = 0.5


class DemoConfig(BaseModel):
    enabled: bool = False
    allow_in_production: bool = False


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class AppConfig(BaseModel):
    environment: Literal["development", "production"] = "development"
    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    quote_stream: QuoteStreamConfig = Field(default_factory=QuoteStreamConfig)
    demo: DemoConfig = Field(default_factory=DemoConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def demo_available(self) -> bool:
        """Demo payloads need an explicit opt-in, and production needs a second one."""
        return self.demo.enabled and (self.is_development or self.demo.allow_in_production)
