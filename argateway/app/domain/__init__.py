"""
Domain package for the gateway selector.

Holds the registry data model, the routing method enum and the static
default gateway. Models are frozen: probe results are stamped onto copies.
"""

from .defaults import DEFAULT_GATEWAY
from .models import (
    Gateway,
    GatewayRegistry,
    GatewaySettings,
    RawRegistry,
    RoutingMethod,
    Vault,
    online_gateways,
    registry_from_wire,
    registry_to_wire,
)

__all__ = [
    "DEFAULT_GATEWAY",
    "Gateway",
    "GatewayRegistry",
    "GatewaySettings",
    "RawRegistry",
    "RoutingMethod",
    "Vault",
    "online_gateways",
    "registry_from_wire",
    "registry_to_wire",
]
