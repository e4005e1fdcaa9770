"""
Test helper functions and factory methods for the AR.IO gateway selector.
"""

import json
from typing import Dict, Any, Optional

import httpx


class GatewayFactory:
    """Factory for gateway registry test data."""

    @staticmethod
    def create_gateway(
        fqdn: str = "gateway.example.com",
        operator_stake: float = 10000,
        online: Optional[bool] = None,
        port: int = 443,
        protocol: str = "https",
        label: str = "Test Gateway",
        status: str = "joined",
    ) -> Dict[str, Any]:
        """Create a registry entry in its wire form."""
        gateway: Dict[str, Any] = {
            "operatorStake": operator_stake,
            "vaults": [{"balance": operator_stake, "start": 1200000, "end": 0}],
            "settings": {
                "label": label,
                "fqdn": fqdn,
                "port": port,
                "protocol": protocol,
                "properties": "FH1aVetOoulPGqgYukj0VE0wIhDy90WiQoV3U2PeY44",
                "note": f"{label} for testing",
            },
            "status": status,
            "start": 1200000,
            "end": 0,
        }
        if online is not None:
            gateway["online"] = online
        return gateway

    @staticmethod
    def create_registry(stakes: Dict[str, float], online: Optional[bool] = None) -> Dict[str, Dict[str, Any]]:
        """Create a registry with one gateway per address, fqdn derived from the address."""
        return {
            address: GatewayFactory.create_gateway(
                fqdn=f"{address}.gateway.example.com",
                operator_stake=stake,
                online=online,
                label=f"Gateway {address}",
            )
            for address, stake in stakes.items()
        }

    @staticmethod
    def create_registry_response(gateways: Dict[str, Any], nested: bool = False) -> Dict[str, Any]:
        """Wrap gateways in one of the two registry response shapes."""
        if nested:
            return {"state": {"gateways": gateways}}
        return {"gateways": gateways}


def mock_http_response(
    method: str,
    url: str,
    status_code: int = 200,
    json_body: Optional[Any] = None,
    content: Optional[bytes] = None,
) -> httpx.Response:
    """Build a real httpx.Response bound to a request."""
    if content is None and json_body is not None:
        content = json.dumps(json_body).encode("utf-8")
    return httpx.Response(
        status_code=status_code,
        content=content or b"",
        request=httpx.Request(method, url),
    )


class TestEnvironment:
    """Test environment configuration."""

    @staticmethod
    def get_mock_config() -> Dict[str, str]:
        """Get mock environment configuration."""
        return {
            "ARGATEWAY_LOG_LEVEL": "debug",
            "ARGATEWAY_ENABLE_METRICS": "true",
            "ARGATEWAY_REGISTRY_URL": "http://localhost:3000/gateways",
            "ARGATEWAY_CACHE_EXPIRATION_TIME": "60",
            "ARGATEWAY_PROBE_TIMEOUT": "1.5",
        }
