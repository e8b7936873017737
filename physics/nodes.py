# physics/nodes.py
"""
Standing-wave node/antinode topology and resonance guidance.

Positions are in metres along the wire axis with the wire centre at 0.
"""
from __future__ import annotations

import math
from typing import Callable, Iterable, List, Optional, Tuple

from core.constants import NODES_CONFIG, PHYSICS_CONSTANTS, NodesConfig
from core.numeric import is_resonant as default_is_resonant
from core.types import (
    AntennaType, DetailedResonanceInfo, Impedance, NodeSet, NodesResult,
    ResonanceInfo, ResonantLength,
)
from physics.impedance import classify_feed

RESONANT_FRACTIONS: Tuple[Tuple[float, str], ...] = (
    (0.25, "λ/4 (Quarter Wave)"),
    (0.5, "λ/2 (Half Wave)"),
    (0.75, "3λ/4 (Three Quarter)"),
    (1.0, "λ (Full Wave)"),
    (1.5, "3λ/2 (One and Half)"),
)

_ORDINALS = {1: "1st (Fundamental)", 2: "2nd", 3: "3rd"}


def harmonic_number(electrical_length: float) -> int:
    """Nearest half-wave multiple, rounding halves up, never below 1."""
    return max(1, int(math.floor(2 * electrical_length + 0.5)))


def get_harmonic_name(harmonic: int) -> str:
    if harmonic in _ORDINALS:
        return _ORDINALS[harmonic]
    if 11 <= harmonic % 100 <= 13:
        return f"{harmonic}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(harmonic % 10, "th")
    return f"{harmonic}{suffix}"


class NodesCalculator:
    """
    Derives node/antinode positions and resonance status.

    Args:
        config: Harmonic count and buffer settings.
        resonance_check: Predicate deciding whether an impedance is resonant.
    """

    def __init__(self, config: NodesConfig = NODES_CONFIG,
                 resonance_check: Callable[[Impedance], bool] = default_is_resonant) -> None:
        self.config = config
        self.resonance_check = resonance_check

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------
    def calculate_nodes_and_antinodes(self, length: float, wave_number: float,
                                      feed_position: float, impedance: Impedance) -> NodesResult:
        wavelength = 2 * math.pi / wave_number
        half_length = length / 2
        edge = self.edge_buffer(wavelength)
        center = self.center_buffer(wavelength)
        feed_type = classify_feed(feed_position)

        odd = self._quarter_wave_positions(wave_number)     # (n + 1/2) * pi / k
        even = self._half_wave_positions(wave_number)       # n * pi / k, n >= 1

        current_nodes = [-half_length, half_length]
        current_nodes += self._mirrored(odd, half_length - edge)

        current_antinodes = [self._feed_coordinate(length, feed_position, feed_type)]
        current_antinodes += self._mirrored(even, half_length - edge)

        voltage_nodes = [0.0] if feed_type is AntennaType.CENTER_FED else []
        voltage_nodes += self._mirrored(even, half_length - edge)

        voltage_antinodes = [-half_length, half_length]
        voltage_antinodes += self._mirrored((x for x in odd if x > center), half_length - edge)

        nodes = NodeSet(
            current_nodes=self._normalize(current_nodes),
            current_antinodes=self._normalize(current_antinodes),
            voltage_nodes=self._normalize(voltage_nodes),
            voltage_antinodes=self._normalize(voltage_antinodes),
        )
        return NodesResult(
            nodes=nodes,
            harmonic=harmonic_number(length / wavelength),
            is_resonant=self.resonance_check(impedance),
        )

    def edge_buffer(self, wavelength: float) -> float:
        return min(self.config.EDGE_BUFFER, wavelength * self.config.EDGE_BUFFER_FRACTION)

    def center_buffer(self, wavelength: float) -> float:
        return max(self.config.CENTER_BUFFER, wavelength * self.config.EDGE_BUFFER_FRACTION)

    def _quarter_wave_positions(self, k: float) -> List[float]:
        return [(n + 0.5) * math.pi / k for n in range(self.config.MAX_HARMONICS)]

    def _half_wave_positions(self, k: float) -> List[float]:
        return [n * math.pi / k for n in range(1, self.config.MAX_HARMONICS)]

    @staticmethod
    def _mirrored(positions: Iterable[float], limit: float) -> List[float]:
        out: List[float] = []
        for x in positions:
            if x < limit:
                out.extend((x, -x))
        return out

    @staticmethod
    def _feed_coordinate(length: float, feed_position: float, feed_type: AntennaType) -> float:
        if feed_type is AntennaType.CENTER_FED:
            return 0.0
        if feed_type is AntennaType.END_FED:
            return -length / 2 if feed_position < 0.5 else length / 2
        return (feed_position - 0.5) * length

    def _normalize(self, positions: Iterable[float]) -> Tuple[float, ...]:
        """Sort ascending and drop positions closer than the dedup resolution."""
        tolerance = 10.0 ** -self.config.POSITION_DECIMALS
        out: List[float] = []
        for x in sorted(x + 0.0 for x in positions):
            if not out or x - out[-1] > tolerance:
                out.append(x)
        return tuple(out)

    # ------------------------------------------------------------------
    # Resonance guidance
    # ------------------------------------------------------------------
    def get_resonance_guidance(self, impedance: Impedance, length: float,
                               wavelength: float) -> ResonanceInfo:
        """
        Suggest a length change from the sign and size of the reactance.

        The adjustment ``|X| / eta0 * wavelength * 0.1`` is a rough tuning
        heuristic; it is not derived by inverting the impedance model.
        """
        if self.resonance_check(impedance):
            return ResonanceInfo(status="Resonant", guidance="Antenna is well-matched",
                                 reactance=impedance.reactance)

        reactance = impedance.reactance
        threshold = PHYSICS_CONSTANTS.RESONANCE_REACTANCE_THRESHOLD
        adjustment = abs(reactance) / PHYSICS_CONSTANTS.FREE_SPACE_IMPEDANCE * wavelength * 0.1

        if reactance < -threshold:
            target = length + adjustment
            return ResonanceInfo(
                status="Not Resonant",
                guidance=f"Too Short - Add ~{adjustment:.1f}m wire (Target: {target:.1f}m)",
                direction="lengthen", length_adjustment=adjustment,
                target_length=target, reactance=reactance,
            )
        if reactance > threshold:
            target = length - adjustment
            return ResonanceInfo(
                status="Not Resonant",
                guidance=f"Too Long - Remove ~{adjustment:.1f}m wire (Target: {target:.1f}m)",
                direction="shorten", length_adjustment=adjustment,
                target_length=target, reactance=reactance,
            )
        return ResonanceInfo(status="Not Resonant",
                             guidance="Nearly Resonant - Minor adjustment needed",
                             length_adjustment=0.0, target_length=length, reactance=reactance)

    def closest_resonant_length(self, length: float, wavelength: float) -> ResonantLength:
        fraction, name = min(RESONANT_FRACTIONS, key=lambda item: abs(length - item[0] * wavelength))
        resonant = fraction * wavelength
        difference = length - resonant
        return ResonantLength(name=name, length=resonant, difference=difference,
                              percent_off=difference / resonant * 100)

    def get_detailed_resonance_info(self, length: float, wave_number: float, feed_position: float,
                                    impedance: Impedance,
                                    nodes: Optional[NodesResult] = None) -> DetailedResonanceInfo:
        wavelength = 2 * math.pi / wave_number
        if nodes is None:
            nodes = self.calculate_nodes_and_antinodes(length, wave_number, feed_position, impedance)
        return DetailedResonanceInfo(
            nodes=nodes,
            guidance=self.get_resonance_guidance(impedance, length, wavelength),
            impedance=impedance,
            closest_resonant=self.closest_resonant_length(length, wavelength),
            harmonic_name=get_harmonic_name(nodes.harmonic),
        )
