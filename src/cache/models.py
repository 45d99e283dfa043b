# src/cache/models.py — v2
"""Cache domain model: CacheEntry."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """Original (pre-summary) content retained for later retrieval.

    ``timestamp`` comes from the cache's monotonic clock and is only used
    for expiry.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    timestamp: float
