"""Cache key construction."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def cache_key(endpoint: str, params: Mapping[str, Any] | None = None) -> str:
    """Build a key from an endpoint path and its query parameters.

    Parameters are sorted by name so that the same request always maps to
    the same key regardless of argument order. ``None`` values are dropped;
    list values are joined with commas.

    >>> cache_key("/price/v1.1/1", {"tokens": ["0xb", "0xa"], "currency": "USD"})
    '/price/v1.1/1?currency=USD&tokens=0xb,0xa'
    """
    if not params:
        return endpoint
    parts = []
    for name in sorted(params):
        value = params[name]
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        parts.append(f"{name}={value}")
    if not parts:
        return endpoint
    return f"{endpoint}?{'&'.join(parts)}"
