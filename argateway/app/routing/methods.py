"""
Gateway selection algorithms.

Each algorithm receives the full registry, considers only the gateways
marked online, and returns the default gateway when none qualify.
"""

import random
from typing import Callable, Dict, Mapping, Optional, Union

from ..domain.models import Gateway, RoutingMethod, online_gateways

TOP_STAKED_POOL_SIZE = 5

SelectionAlgorithm = Callable[[Mapping[str, Gateway], Gateway, random.Random], Gateway]


def select_highest_stake(registry: Mapping[str, Gateway], default: Gateway, rng: random.Random) -> Gateway:
    """Pick the online gateway with the largest stake, breaking ties at random."""
    candidates = list(online_gateways(registry).values())
    if not candidates:
        return default

    max_stake = max(gateway.operator_stake for gateway in candidates)
    top = [gateway for gateway in candidates if gateway.operator_stake == max_stake]
    if len(top) == 1:
        return top[0]
    return rng.choice(top)


def select_random_top_five_staked(registry: Mapping[str, Gateway], default: Gateway, rng: random.Random) -> Gateway:
    """Pick uniformly among the five highest staked online gateways."""
    candidates = sorted(
        online_gateways(registry).values(),
        key=lambda gateway: gateway.operator_stake,
        reverse=True,
    )
    if not candidates:
        return default
    return rng.choice(candidates[:TOP_STAKED_POOL_SIZE])


def select_stake_weighted(registry: Mapping[str, Gateway], default: Gateway, rng: random.Random) -> Gateway:
    """Pick an online gateway with probability proportional to its stake."""
    candidates = list(online_gateways(registry).values())
    total_stake = sum(gateway.operator_stake for gateway in candidates)

    remaining = rng.random() * total_stake
    for gateway in candidates:
        remaining -= gateway.operator_stake
        if remaining <= 0:
            return gateway

    return default


def select_random(registry: Mapping[str, Gateway], default: Gateway, rng: random.Random) -> Gateway:
    """Pick uniformly among all online gateways."""
    candidates = list(online_gateways(registry).values())
    if not candidates:
        return default
    return rng.choice(candidates)


ROUTING_ALGORITHMS: Dict[RoutingMethod, SelectionAlgorithm] = {
    RoutingMethod.HIGHEST_STAKE: select_highest_stake,
    RoutingMethod.RANDOM_TOP_FIVE_STAKED: select_random_top_five_staked,
    RoutingMethod.STAKE_RANDOM: select_stake_weighted,
    RoutingMethod.RANDOM: select_random,
}


def resolve_routing_method(routing_method: Union[RoutingMethod, str, None]) -> Optional[RoutingMethod]:
    """Map a routing method or its wire name to a RoutingMethod.

    None selects HIGHEST_STAKE_ROUTE_METHOD; an unrecognized value
    resolves to None.
    """
    if routing_method is None:
        return RoutingMethod.HIGHEST_STAKE
    try:
        return RoutingMethod(routing_method)
    except ValueError:
        return None


def select_gateway(
    registry: Mapping[str, Gateway],
    routing_method: Union[RoutingMethod, str, None],
    default: Gateway,
    rng: Optional[random.Random] = None,
) -> Gateway:
    """Dispatch to the algorithm registered for a routing method.

    An unrecognized routing method yields the default gateway.
    """
    method = resolve_routing_method(routing_method)
    if method is None:
        return default
    algorithm = ROUTING_ALGORITHMS[method]
    return algorithm(registry, default, rng or random.Random())
