"""
Adapters package for the gateway selector.

Contains the HTTP clients the selector depends on:

- RegistryClient: fetches the gateway address registry
- LivenessClient: probes a single gateway with a bounded HEAD request

Both absorb transport failures into fallback values instead of raising.
"""

from .liveness_client import LivenessClient, gateway_url
from .registry_client import RegistryClient, extract_gateways

__all__ = [
    "LivenessClient",
    "RegistryClient",
    "extract_gateways",
    "gateway_url",
]
