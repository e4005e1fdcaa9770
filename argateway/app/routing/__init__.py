"""
Routing package for the gateway selector.

- methods: the four stake-aware selection algorithms
- selector: GatewaySelector, which fetches, probes and caches the registry
  before dispatching to an algorithm or a caller-supplied function
"""

from .methods import (
    ROUTING_ALGORITHMS,
    resolve_routing_method,
    select_gateway,
    select_highest_stake,
    select_random,
    select_random_top_five_staked,
    select_stake_weighted,
)
from .selector import ONLINE_GATEWAYS_CACHE_KEY, GatewaySelector, SelectionFunction

__all__ = [
    "GatewaySelector",
    "ONLINE_GATEWAYS_CACHE_KEY",
    "ROUTING_ALGORITHMS",
    "resolve_routing_method",
    "SelectionFunction",
    "select_gateway",
    "select_highest_stake",
    "select_random",
    "select_random_top_five_staked",
    "select_stake_weighted",
]
