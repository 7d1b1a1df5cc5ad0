"""Durable storage helpers."""

from placemap.persistence.fallback_cache import FallbackCache

__all__ = ["FallbackCache"]
