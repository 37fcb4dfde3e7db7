"""
Masa caching package.

Provides the namespaced in-memory cache used by the domain client to avoid
repeating identical upstream calls. Prefer short-lived regions and explicit
invalidation.
"""

from .cache_manager import CacheOptions, NamespacedCache, TypedRegion, make_cache_key

__all__ = [
    "CacheOptions",
    "NamespacedCache",
    "TypedRegion",
    "make_cache_key",
]
