"""
Gateway address registry client.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING

import httpx

from shared.errors import RegistryFetchError
from shared.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


def extract_gateways(payload: Any) -> Dict[str, Dict[str, Any]]:
    """Normalize a registry response into an address to gateway map.

    Accepts either ``{"gateways": {...}}`` or ``{"state": {"gateways": {...}}}``.
    Any other shape yields an empty registry.
    """
    if not isinstance(payload, dict):
        return {}

    gateways = payload.get("gateways")
    if gateways is None:
        state = payload.get("state")
        if isinstance(state, dict):
            gateways = state.get("gateways")

    return gateways if isinstance(gateways, dict) else {}


class RegistryClient:
    """Client for the remote gateway address registry.

    The fetch is attempted once with the HTTP client's default timeout.
    Failures degrade to an empty registry.
    """

    def __init__(self, registry_url: str, *, metrics: Optional["MetricsCollector"] = None):
        self.registry_url = registry_url
        self.logger = get_logger("argateway.registry_client")
        self.metrics = metrics

    async def _request_registry(self, url: str) -> Any:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise RegistryFetchError(
                f"Registry responded with {e.response.status_code}",
                details={"url": url, "status_code": e.response.status_code}
            ) from e
        except httpx.HTTPError as e:
            raise RegistryFetchError(
                "Registry unavailable",
                details={"url": url, "http_error": str(e)}
            ) from e
        except ValueError as e:
            raise RegistryFetchError(
                "Registry returned invalid JSON",
                details={"url": url, "error": str(e)}
            ) from e

    async def fetch_registry(self, url: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
        """Fetch the raw registry, returning {} on any failure."""
        target_url = url or self.registry_url

        try:
            if self.metrics:
                with self.metrics.time_operation("registry_fetch_duration_seconds"):
                    payload = await self._request_registry(target_url)
            else:
                payload = await self._request_registry(target_url)
        except RegistryFetchError as e:
            self.logger.warning("Registry fetch failed", url=target_url, error=e.message, details=e.details)
            if self.metrics:
                self.metrics.increment_counter("registry_fetch_total", status="error")
            return {}

        gateways = extract_gateways(payload)
        if not gateways:
            self.logger.warning("Registry response contained no gateways", url=target_url)
        else:
            self.logger.debug("Fetched gateway registry", url=target_url, count=len(gateways))

        if self.metrics:
            self.metrics.increment_counter("registry_fetch_total", status="success")
        return gateways
