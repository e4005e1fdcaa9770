"""
Gateway caching package.

Provides the TTL cache that fronts the registry fetch and the liveness
results, plus the durable stores it writes through to (an on-disk store
by default, Redis when the location is a redis URL).
"""

from .cache import Cache, CachedEntry, CacheOptions
from .storage import FileStorage, RedisStorage, Storage, create_storage

__all__ = [
    "Cache",
    "CachedEntry",
    "CacheOptions",
    "FileStorage",
    "RedisStorage",
    "Storage",
    "create_storage",
]
