"""
Shared configuration management for the AR.IO gateway selector.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_REGISTRY_URL = (
    "https://dev.arns.app/v1/contract/bLAgYxAdX2Ry-nt6aH2ixgvJXbpsEYm28NgJgyqfs-U/gateways"
)
DEFAULT_CACHE_LOCATION = "./cache/argateway"
DEFAULT_CACHE_EXPIRATION_TIME = 3600
DEFAULT_PROBE_TIMEOUT = 5.0


class BaseConfig(BaseSettings):
    """Base configuration class with common settings.

    Every field can be overridden with an ``ARGATEWAY_``-prefixed
    environment variable or a ``.env`` file entry.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ARGATEWAY_",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_level: str = Field(default="info")

    # Registry source
    registry_url: str = Field(default=DEFAULT_REGISTRY_URL)

    # Cache
    cache_location: str = Field(default=DEFAULT_CACHE_LOCATION)
    cache_expiration_time: int = Field(default=DEFAULT_CACHE_EXPIRATION_TIME, ge=0)

    # Liveness probing
    probe_timeout: float = Field(default=DEFAULT_PROBE_TIMEOUT, gt=0)

    # Observability
    enable_metrics: bool = Field(default=False)


def get_config() -> BaseConfig:
    """Get configuration from the environment."""
    return BaseConfig()
