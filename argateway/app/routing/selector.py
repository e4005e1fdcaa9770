"""
Gateway selector: fetch, probe, cache and route.
"""

import asyncio
import random
from typing import Any, Callable, Dict, Optional, Tuple, Union

import structlog
from pydantic import ValidationError

from shared.config import BaseConfig, get_config
from shared.logging import configure_logging, get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from ..adapters.liveness_client import LivenessClient
from ..adapters.registry_client import RegistryClient
from ..caching.cache import Cache, CacheOptions
from ..domain.defaults import DEFAULT_GATEWAY
from ..domain.models import (
    Gateway,
    GatewayRegistry,
    RawRegistry,
    RoutingMethod,
    registry_from_wire,
    registry_to_wire,
)
from .methods import resolve_routing_method, select_gateway

SERVICE_NAME = "argateway"
ONLINE_GATEWAYS_CACHE_KEY = "onlineGateways"
UNKNOWN_ROUTING_METHOD = "unknown"

SelectionFunction = Callable[[GatewayRegistry], Optional[Gateway]]


class GatewaySelector:
    """Selects one reachable gateway out of the AR.IO gateway registry.

    The online registry is computed once per instance (or loaded from the
    cache) and reused for every later selection.
    """

    def __init__(
        self,
        registry_url: Optional[str] = None,
        cache_options: Optional[CacheOptions] = None,
        *,
        cache: Optional[Cache] = None,
        registry_client: Optional[RegistryClient] = None,
        liveness_client: Optional[LivenessClient] = None,
        default_gateway: Gateway = DEFAULT_GATEWAY,
        rng: Optional[random.Random] = None,
        metrics: Optional[MetricsCollector] = None,
        config: Optional[BaseConfig] = None,
    ):
        config = config or get_config()
        if not structlog.is_configured():
            configure_logging(SERVICE_NAME, config.log_level)
        if metrics is None and config.enable_metrics:
            metrics = get_metrics_collector(SERVICE_NAME)

        self.registry_url = registry_url or config.registry_url
        self.default_gateway = default_gateway
        self.logger = get_logger("argateway.selector")
        self.metrics = metrics
        self.rng = rng or random.Random()

        if cache_options is None:
            cache_options = CacheOptions(
                location=config.cache_location,
                expiration_time=config.cache_expiration_time,
            )
        self.cache = cache or Cache(cache_options, metrics=metrics)
        self.registry_client = registry_client or RegistryClient(self.registry_url, metrics=metrics)
        self.liveness_client = liveness_client or LivenessClient(config.probe_timeout, metrics=metrics)

        self._registry: GatewayRegistry = {}

    async def fetch_gateway_address_registry_cache(self, registry_url: Optional[str] = None) -> RawRegistry:
        """Fetch the raw gateway address registry, {} on failure."""
        return await self.registry_client.fetch_registry(registry_url or self.registry_url)

    async def is_gateway_online(self, gateway: Gateway) -> bool:
        """Probe one gateway; never raises."""
        return await self.liveness_client.is_online(gateway)

    async def _probe_entry(self, address: str, entry: Dict[str, Any]) -> Tuple[str, Gateway]:
        gateway = Gateway.model_validate(entry)
        online = await self.is_gateway_online(gateway)
        return address, gateway.with_online(online)

    async def _load_cached_registry(self) -> GatewayRegistry:
        cached = await self.cache.get(ONLINE_GATEWAYS_CACHE_KEY)
        if not cached or not isinstance(cached, dict):
            return {}
        try:
            return registry_from_wire(cached)
        except ValidationError as e:
            self.logger.warning("Ignoring malformed cached registry", error=str(e))
            return {}

    async def get_online_gateways(self, registry_url: Optional[str] = None) -> GatewayRegistry:
        """Return the registry with every gateway stamped with its liveness.

        A non-empty cached result is returned as is. Otherwise the registry
        is fetched, every entry is probed concurrently and the merged result
        is written back to the cache.
        """
        cached = await self._load_cached_registry()
        if cached:
            self.logger.debug("Using cached online gateways", count=len(cached))
            return cached

        raw_registry = await self.fetch_gateway_address_registry_cache(registry_url)

        addresses = list(raw_registry.keys())
        results = await asyncio.gather(
            *(self._probe_entry(address, raw_registry[address]) for address in addresses),
            return_exceptions=True,
        )

        merged: GatewayRegistry = {}
        for address, outcome in zip(addresses, results):
            if isinstance(outcome, BaseException):
                self.logger.warning("Skipping gateway that could not be probed", address=address, error=str(outcome))
                continue
            probed_address, gateway = outcome
            merged[probed_address] = gateway

        online_count = sum(1 for gateway in merged.values() if gateway.online)
        self.logger.info("Probed gateway registry", total=len(raw_registry), online=online_count)

        await self.cache.set(ONLINE_GATEWAYS_CACHE_KEY, registry_to_wire(merged))
        return merged

    async def get_online_gateway(
        self,
        routing_method: Union[RoutingMethod, str, None] = RoutingMethod.HIGHEST_STAKE,
        registry_url: Optional[str] = None,
        selection_function: Optional[SelectionFunction] = None,
    ) -> Gateway:
        """Select one gateway.

        Args:
            routing_method: Algorithm applied to the online gateways. None
                selects highest stake; an unrecognized method yields the
                default gateway.
            registry_url: Registry source used if the registry must be fetched.
            selection_function: Overrides routing_method. Receives the full,
                unfiltered registry and must do its own online filtering;
                returning None falls back to the default gateway.

        Returns:
            The selected gateway, or the default gateway when none is online.
        """
        if not self._registry:
            self._registry = await self.get_online_gateways(registry_url)

        registry = self._registry

        if selection_function is not None:
            gateway = selection_function(dict(registry)) or self.default_gateway
            method_label = "selection_function"
        else:
            method = resolve_routing_method(routing_method)
            if method is None:
                self.logger.warning("Unknown routing method, using default", routing_method=str(routing_method))
                gateway = self.default_gateway
                method_label = UNKNOWN_ROUTING_METHOD
            else:
                gateway = select_gateway(registry, method, self.default_gateway, self.rng)
                method_label = method.value

        if gateway is self.default_gateway:
            self.logger.info("No online gateway selected, using default", routing_method=method_label)

        self.logger.info("Gateway selected", routing_method=method_label, fqdn=gateway.settings.fqdn)
        if self.metrics:
            self.metrics.record_selection(method_label)
        return gateway

    async def close(self) -> None:
        """Release the cache's durable store."""
        await self.cache.close()
