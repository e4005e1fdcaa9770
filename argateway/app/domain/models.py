"""
Gateway data models for the gateway selector.
"""

from typing import Any, Dict, List, Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RoutingMethod(str, Enum):
    """Gateway selection algorithms."""
    RANDOM = "RANDOM_ROUTE_METHOD"
    STAKE_RANDOM = "STAKE_RANDOM_ROUTE_METHOD"
    HIGHEST_STAKE = "HIGHEST_STAKE_ROUTE_METHOD"
    RANDOM_TOP_FIVE_STAKED = "RANDOM_TOP_FIVE_STAKED_ROUTE_METHOD"


class Vault(BaseModel):
    """Balance locked by a gateway operator for a period."""
    model_config = ConfigDict(frozen=True, extra="allow")

    balance: float = Field(0, description="Locked balance")
    start: int = Field(0, description="Lock start block")
    end: int = Field(0, description="Lock end block, 0 while still locked")


class GatewaySettings(BaseModel):
    """Network settings advertised by a gateway."""
    model_config = ConfigDict(frozen=True, extra="allow")

    label: str = Field("", description="Human readable label")
    fqdn: str = Field(..., min_length=1, description="Fully-qualified domain name")
    port: int = Field(443, ge=0, le=65535, description="Listening port")
    protocol: str = Field("https", description="Protocol scheme")
    properties: str = Field("", description="Properties identifier")
    note: str = Field("", description="Free-text note")


class Gateway(BaseModel):
    """One entry of the gateway address registry."""
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    operator_stake: float = Field(0, ge=0, alias="operatorStake", description="Stake used as selection weight")
    vaults: List[Vault] = Field(default_factory=list)
    settings: GatewaySettings
    status: str = Field("", description="Lifecycle label, e.g. joined")
    start: int = Field(0, description="Registration start block")
    end: int = Field(0, description="Registration end block, 0 while active")
    online: bool = Field(False, description="Result of the last liveness probe")

    def with_online(self, online: bool) -> "Gateway":
        """Return a copy stamped with a liveness probe result."""
        return self.model_copy(update={"online": online})

    def to_wire(self) -> Dict[str, Any]:
        """Serialize using the registry's field names."""
        return self.model_dump(mode="json", by_alias=True)


GatewayRegistry = Dict[str, Gateway]
RawRegistry = Dict[str, Dict[str, Any]]


def online_gateways(registry: Mapping[str, Gateway]) -> GatewayRegistry:
    """Filter a registry down to the gateways marked online."""
    return {address: gateway for address, gateway in registry.items() if gateway.online}


def registry_to_wire(registry: Mapping[str, Gateway]) -> RawRegistry:
    """Serialize a registry into its JSON-compatible form."""
    return {address: gateway.to_wire() for address, gateway in registry.items()}


def registry_from_wire(raw: Mapping[str, Any]) -> GatewayRegistry:
    """Parse a previously serialized registry."""
    return {address: Gateway.model_validate(entry) for address, entry in raw.items()}
