# physics/matching.py
"""
Balun / un-un matching transforms.

Each network is an ideal transformer with impedance ratio N:1 (turns ratio
n = sqrt(N)). The antenna sits on the high-impedance winding, so the source
sees the feed impedance divided by N.
"""
import math
from typing import Dict, Union

from core.constants import MATCHING_ALIASES, MATCHING_NETWORKS
from core.exceptions import MatchingNetworkError
from core.types import Impedance, MatchingNetwork, MatchingResult
from utils.logging_config import get_logger

logger = get_logger(__name__)

DIRECT_FEED = MatchingNetwork(ratio=None, name="None", type="none")

_network_registry: Dict[int, MatchingNetwork] = {
    ratio: MatchingNetwork(ratio=ratio, name=name, type=kind)
    for ratio, (name, kind) in MATCHING_NETWORKS.items()
}

RatioSpec = Union[None, int, float, str]


def get_matching_network(ratio: RatioSpec) -> MatchingNetwork:
    """
    Look up a network by numeric ratio or by name ("4:1", "use4to1Balun", "none").
    """
    if ratio is None:
        return DIRECT_FEED
    if isinstance(ratio, str):
        key = ratio.strip().lower()
        if key not in MATCHING_ALIASES:
            raise MatchingNetworkError(f"Unknown matching network: {ratio}")
        alias = MATCHING_ALIASES[key]
        return DIRECT_FEED if alias is None else _network_registry[alias]
    if isinstance(ratio, bool) or not isinstance(ratio, (int, float)):
        raise MatchingNetworkError(f"Matching ratio must be a number or a name, got {type(ratio).__name__}")
    if float(ratio).is_integer() and int(ratio) in _network_registry:
        return _network_registry[int(ratio)]
    raise MatchingNetworkError(f"Unknown matching ratio: {ratio}")


def register_matching_network(ratio: int, name: str, kind: str) -> MatchingNetwork:
    """Add a custom transformer ratio (e.g. 16:1) to the registry."""
    if not isinstance(ratio, int) or ratio < 1:
        raise MatchingNetworkError("Matching ratio must be a positive integer.")
    if kind not in ("balun", "unun"):
        raise MatchingNetworkError("Matching network type must be 'balun' or 'unun'.")
    network = MatchingNetwork(ratio=ratio, name=name, type=kind)
    _network_registry[ratio] = network
    return network


def available_networks() -> Dict[int, MatchingNetwork]:
    return dict(_network_registry)


class MatchingTransform:
    """Refers a feed impedance to the system side of a matching network."""

    def apply(self, impedance: Impedance, ratio: RatioSpec = None) -> MatchingResult:
        network = get_matching_network(ratio)
        if network.ratio is None:
            return MatchingResult(impedance=impedance, network=network)

        turns = math.sqrt(network.ratio)
        z_system = impedance.as_complex() / turns ** 2
        logger.debug("Applied %s: %s -> %s", network.name, impedance.as_complex(), z_system)
        return MatchingResult(
            impedance=Impedance(resistance=z_system.real, reactance=z_system.imag),
            network=network,
        )
