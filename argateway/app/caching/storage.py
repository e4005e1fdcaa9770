"""
Durable key-value stores backing the gateway cache.
"""

import asyncio
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

import redis.asyncio as redis
from redis.exceptions import RedisError

from shared.errors import StorageError
from shared.logging import get_logger


REDIS_SCHEMES = ("redis://", "rediss://", "unix://")


class Storage(ABC):
    """Key to JSON-string store used as the cache's durable layer."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None when the key is absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a string under a key, replacing any previous value."""

    async def close(self) -> None:
        """Release resources held by the store."""


class FileStorage(Storage):
    """Embedded on-disk store keeping one file per key under a directory."""

    def __init__(self, location: Union[str, Path]):
        self.location = Path(location)
        self.logger = get_logger("argateway.storage")

    def _path_for(self, key: str) -> Path:
        return self.location / quote(key, safe="")

    def _read(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _write(self, key: str, value: str) -> None:
        self.location.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.location, prefix=".tmp-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_path, self._path_for(key))
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    async def get(self, key: str) -> Optional[str]:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._read, key)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(
                f"Failed to read cache entry: {key}",
                details={"location": str(self.location), "error": str(e)}
            ) from e

    async def set(self, key: str, value: str) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._write, key, value)
        except OSError as e:
            raise StorageError(
                f"Failed to write cache entry: {key}",
                details={"location": str(self.location), "error": str(e)}
            ) from e
        self.logger.debug("Persisted cache entry", key=key, location=str(self.location))


class RedisStorage(Storage):
    """Redis-backed store for deployments sharing one cache."""

    KEY_PREFIX = "argateway"

    def __init__(self, redis_url: str):
        self.redis_url = redis_url
        self.logger = get_logger("argateway.storage")
        self._redis: Optional[redis.Redis] = None

    async def _get_redis(self) -> redis.Redis:
        """Get Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(self.redis_url)
        return self._redis

    def _make_key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}:{key}"

    async def get(self, key: str) -> Optional[str]:
        try:
            redis_client = await self._get_redis()
            cached_data = await redis_client.get(self._make_key(key))
        except RedisError as e:
            raise StorageError(
                f"Failed to read cache entry: {key}",
                details={"error": str(e)}
            ) from e

        if cached_data is None:
            return None
        return cached_data.decode("utf-8") if isinstance(cached_data, bytes) else cached_data

    async def set(self, key: str, value: str) -> None:
        try:
            redis_client = await self._get_redis()
            await redis_client.set(self._make_key(key), value)
        except RedisError as e:
            raise StorageError(
                f"Failed to write cache entry: {key}",
                details={"error": str(e)}
            ) from e
        self.logger.debug("Persisted cache entry", key=key)

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None


def create_storage(location: Union[str, Path]) -> Storage:
    """Pick a storage backend from a cache location."""
    location_str = str(location)
    if location_str.startswith(REDIS_SCHEMES):
        return RedisStorage(location_str)
    return FileStorage(location_str)
