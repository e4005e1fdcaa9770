"""
Write-through TTL cache with an in-memory layer over a durable store.
"""

import json
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, TYPE_CHECKING

from pydantic import BaseModel, Field

from shared.config import DEFAULT_CACHE_EXPIRATION_TIME, DEFAULT_CACHE_LOCATION
from shared.errors import StorageError
from shared.logging import get_logger
from .storage import Storage, create_storage

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


def now_ms() -> int:
    return int(time.time() * 1000)


class CacheOptions(BaseModel):
    """Options for a Cache instance."""
    location: str = Field(DEFAULT_CACHE_LOCATION, description="Durable cache directory or redis URL")
    expiration_time: int = Field(DEFAULT_CACHE_EXPIRATION_TIME, ge=0, description="Default TTL in seconds")


@dataclass
class CachedEntry:
    """A cached value and its absolute expiration in epoch milliseconds."""
    data: Any
    expiration: Optional[int] = None

    @classmethod
    def create(cls, data: Any, ttl: int) -> "CachedEntry":
        expiration = now_ms() + ttl * 1000 if ttl else None
        return cls(data=data, expiration=expiration)

    def is_expired(self, at_ms: Optional[int] = None) -> bool:
        if self.expiration is None:
            return False
        return (at_ms if at_ms is not None else now_ms()) > self.expiration

    def to_json(self) -> str:
        return json.dumps({"data": self.data, "expiration": self.expiration})

    @classmethod
    def from_json(cls, raw: str) -> "CachedEntry":
        """Parse a stored envelope, raising ValueError when it is malformed."""
        envelope = json.loads(raw)
        if not isinstance(envelope, dict) or "data" not in envelope:
            raise ValueError("Cache envelope is missing its data field")
        expiration = envelope.get("expiration")
        if expiration is not None and not isinstance(expiration, (int, float)):
            raise ValueError("Cache envelope has an invalid expiration")
        return cls(data=envelope["data"], expiration=expiration)


class Cache:
    """Caching mechanism storing JSON-serializable values.

    Reads check the in-memory layer first and fall back to the durable
    store, promoting valid durable hits into memory. Writes update memory
    unconditionally and then persist the envelope. Durable-layer failures
    never propagate: a failed read is a miss, a failed write is reported
    through the return value of ``set``.

    No locking is done; concurrent writers to one key race and the last
    completed write wins in each layer independently.
    """

    def __init__(
        self,
        options: Optional[CacheOptions] = None,
        storage: Optional[Storage] = None,
        *,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.options = options or CacheOptions()
        self.logger = get_logger("argateway.cache")
        self.metrics = metrics
        self._storage = storage
        self._memory: Dict[str, CachedEntry] = {}

    def _get_storage(self) -> Storage:
        if self._storage is None:
            self._storage = create_storage(self.options.location)
        return self._storage

    def _record(self, hit: bool) -> None:
        if self.metrics:
            self.metrics.record_cache_access("argateway", hit)

    async def get(self, key: str) -> Optional[Any]:
        """Get cached data by key, or None if absent or expired."""
        entry = self._memory.get(key)
        if entry is not None:
            if not entry.is_expired():
                self._record(True)
                return entry.data
            del self._memory[key]

        try:
            raw = await self._get_storage().get(key)
        except StorageError as e:
            self.logger.warning("Cache read failed", key=key, error=str(e), details=e.details)
            self._record(False)
            return None

        if raw is None:
            self.logger.debug("Cache miss", key=key)
            self._record(False)
            return None

        try:
            entry = CachedEntry.from_json(raw)
        except ValueError as e:
            self.logger.warning("Discarding unreadable cache entry", key=key, error=str(e))
            self._record(False)
            return None

        if entry.is_expired():
            self.logger.debug("Cache entry expired", key=key, expiration=entry.expiration)
            self._record(False)
            return None

        # Promote into the in-memory layer
        self._memory[key] = entry
        self._record(True)
        return entry.data

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Cache a value.

        Args:
            key: Cache key.
            value: JSON-serializable value. A value that cannot be
                serialized raises TypeError and leaves both layers untouched.
            ttl: Seconds to live. None applies the configured default,
                0 stores an entry that never expires.

        Returns:
            True when the durable write succeeded, False otherwise.
        """
        expiration_time = self.options.expiration_time if ttl is None else ttl
        entry = CachedEntry.create(value, expiration_time)
        serialized = entry.to_json()
        self._memory[key] = entry

        try:
            await self._get_storage().set(key, serialized)
        except StorageError as e:
            self.logger.error("Cache write failed", key=key, error=str(e), details=e.details)
            return False

        self.logger.debug("Cached value", key=key, ttl=expiration_time)
        return True

    async def close(self) -> None:
        """Close the durable store."""
        if self._storage is not None:
            await self._storage.close()
