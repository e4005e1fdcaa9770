"""
Gateway liveness probe client.
"""

import asyncio
from typing import Optional, TYPE_CHECKING

import httpx

from shared.config import DEFAULT_PROBE_TIMEOUT
from shared.logging import get_logger
from ..domain.models import Gateway

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


def gateway_url(gateway: Gateway) -> str:
    """Base URL of a gateway, e.g. ``https://ar-io.dev:443/``."""
    settings = gateway.settings
    return f"{settings.protocol}://{settings.fqdn}:{settings.port}/"


class LivenessClient:
    """Issues bounded-time HEAD requests against gateways."""

    def __init__(self, timeout: float = DEFAULT_PROBE_TIMEOUT, *, metrics: Optional["MetricsCollector"] = None):
        self.timeout = timeout
        self.logger = get_logger("argateway.liveness_client")
        self.metrics = metrics

    async def _head(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.head(url)

    async def is_online(self, gateway: Gateway) -> bool:
        """Return True only when the gateway answers HEAD with 200 OK.

        Errors, timeouts and non-OK statuses all yield False.
        """
        url = gateway_url(gateway)

        try:
            response = await asyncio.wait_for(self._head(url), timeout=self.timeout)
            online = response.status_code == httpx.codes.OK
            if not online:
                self.logger.debug("Gateway responded with non-OK status", url=url, status_code=response.status_code)
        except asyncio.TimeoutError:
            self.logger.debug("Gateway probe timed out", url=url, timeout=self.timeout)
            online = False
        except Exception as e:
            self.logger.debug("Gateway probe failed", url=url, error=str(e))
            online = False

        if self.metrics:
            self.metrics.record_probe(online)
        return online
