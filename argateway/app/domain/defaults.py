"""
Static reference data for the gateway selector.
"""

from .models import Gateway, GatewaySettings


# Returned whenever no online gateway can be determined.
DEFAULT_GATEWAY = Gateway(
    operator_stake=250000,
    vaults=[],
    settings=GatewaySettings(
        label="AR.IO Test",
        fqdn="ar-io.dev",
        port=443,
        protocol="https",
        properties="raJgvbFU-YAnku-WsupIdbTsqqGLQiYpGzoqk9SCVgY",
        note="Test Gateway operated by PDS for the AR.IO ecosystem.",
    ),
    status="joined",
    start=1256694,
    end=0,
    online=True,
)
