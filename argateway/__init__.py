"""
AR.IO gateway selector.

Usage:
    from argateway import GatewaySelector, RoutingMethod

    selector = GatewaySelector()
    gateway = await selector.get_online_gateway(RoutingMethod.STAKE_RANDOM)
"""

from .app.caching import Cache, CacheOptions
from .app.domain import DEFAULT_GATEWAY, Gateway, GatewaySettings, RoutingMethod, Vault, online_gateways
from .app.routing import GatewaySelector

__all__ = [
    "Cache",
    "CacheOptions",
    "DEFAULT_GATEWAY",
    "Gateway",
    "GatewaySelector",
    "GatewaySettings",
    "RoutingMethod",
    "Vault",
    "online_gateways",
]
