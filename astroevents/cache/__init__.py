"""Memoisation layer sitting between the engine and position providers."""

from __future__ import annotations

from .lru import DEFAULT_MAX_SIZE, CacheKey, LRUCache, NullCache, PositionCache

__all__ = ["CacheKey", "DEFAULT_MAX_SIZE", "LRUCache", "NullCache", "PositionCache"]
