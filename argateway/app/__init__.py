"""
Gateway selection engine for the AR.IO network.

Picks one reachable gateway out of the dynamically fetched gateway
address registry, weighting choices by operator stake.

Structure:
- app.domain: Gateway model, routing methods and the default gateway.
- app.caching: TTL cache and its durable stores.
- app.adapters: HTTP clients for the registry and liveness probes.
- app.routing: Selection algorithms and the GatewaySelector.
"""
