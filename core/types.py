# core/types.py
"""
Value types shared by the physics modules and the antenna model.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from core.constants import PHYSICS_CONSTANTS


class AntennaType(Enum):
    END_FED = "End-Fed"
    CENTER_FED = "Center-Fed"
    OFF_CENTER_FED = "Off-Center-Fed"


@dataclass
class AntennaDesign:
    """
    Mutable design parameters of a single wire antenna.

    Attributes:
        length: Physical wire length in metres.
        frequency: Operating frequency in MHz.
        feed_position: Feed point as a fraction of the length, 0..1.
        wire_diameter: Conductor diameter in millimetres.
        matching_network: "none", "1:1", "4:1", "9:1" or "49:1".
        reference_impedance: Characteristic impedance of the feed line (ohm).
    """
    length: float = 10.6
    frequency: float = 14.2
    feed_position: float = 0.5
    wire_diameter: float = 2.0
    matching_network: str = "none"
    reference_impedance: float = PHYSICS_CONSTANTS.STANDARD_IMPEDANCE

    @classmethod
    def from_percent(cls, length: float, frequency: float, feed_point: float,
                     wire_diameter: float, matching_network: str = "none",
                     reference_impedance: float = PHYSICS_CONSTANTS.STANDARD_IMPEDANCE) -> "AntennaDesign":
        """Build a design from a 0-100 % feed point as entered in a form."""
        return cls(length=length, frequency=frequency, feed_position=feed_point / 100.0,
                   wire_diameter=wire_diameter, matching_network=matching_network,
                   reference_impedance=reference_impedance)


@dataclass(frozen=True, slots=True)
class Impedance:
    resistance: float
    reactance: float

    def as_complex(self) -> complex:
        return complex(self.resistance, self.reactance)


@dataclass(frozen=True, slots=True)
class MatchingNetwork:
    ratio: Optional[int]
    name: str
    type: str


@dataclass(frozen=True, slots=True)
class MatchingResult:
    """Impedance seen on the system side of a matching transformer."""
    impedance: Impedance
    network: MatchingNetwork


@dataclass(frozen=True, slots=True)
class NodeSet:
    current_nodes: Tuple[float, ...]
    current_antinodes: Tuple[float, ...]
    voltage_nodes: Tuple[float, ...]
    voltage_antinodes: Tuple[float, ...]


@dataclass(frozen=True, slots=True)
class NodesResult:
    nodes: NodeSet
    harmonic: int
    is_resonant: bool


@dataclass(frozen=True)
class ResonanceInfo:
    """
    Resonance status and a tuning hint.

    ``length_adjustment`` comes from an approximate heuristic, not from
    inverting the impedance model; ``approximate`` is always True for it.
    """
    status: str
    guidance: str
    direction: Optional[str] = None          # "lengthen", "shorten" or None
    length_adjustment: Optional[float] = None
    target_length: Optional[float] = None
    reactance: Optional[float] = None
    approximate: bool = True


@dataclass(frozen=True)
class ResonantLength:
    name: str
    length: float
    difference: float
    percent_off: float


@dataclass(frozen=True)
class DetailedResonanceInfo:
    nodes: NodesResult
    guidance: ResonanceInfo
    impedance: Impedance
    closest_resonant: ResonantLength
    harmonic_name: str = field(default="")
