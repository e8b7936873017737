# core/constants.py
"""
Frozen physical constants, output limits and configuration records.
"""
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class PhysicsConstants:
    SPEED_OF_LIGHT: float = 299792458.0          # m/s
    FREE_SPACE_IMPEDANCE: float = 376.730313668  # ohm
    STANDARD_IMPEDANCE: float = 50.0
    DIPOLE_BASE_RESISTANCE: float = 73.1
    MHZ_TO_HZ: float = 1e6
    MM_TO_M: float = 0.001
    HIGH_IMPEDANCE_LIMIT: float = 15000.0
    CURRENT_NULL_RESISTANCE: float = 2000.0
    HALF_WAVE_END_FED_RESISTANCE: float = 2500.0
    END_FED_HIGH_IMPEDANCE: float = 5000.0
    RESONANCE_REACTANCE_THRESHOLD: float = 15.0
    RESONANCE_PERCENTAGE_THRESHOLD: float = 0.2


@dataclass(frozen=True, slots=True)
class PhysicsLimits:
    MIN_RESISTANCE: float = 0.1
    MAX_RESISTANCE: float = 50000.0
    MIN_REACTANCE: float = -5000.0
    MAX_REACTANCE: float = 5000.0
    MIN_SWR: float = 1.0
    MAX_SWR: float = 999.0


@dataclass(frozen=True, slots=True)
class NodesConfig:
    MAX_HARMONICS: int = 8
    EDGE_BUFFER: float = 0.1               # m, upper bound of the edge buffer
    EDGE_BUFFER_FRACTION: float = 0.05     # of a wavelength
    CENTER_BUFFER: float = 0.1             # m, lower bound of the centre buffer
    POSITION_DECIMALS: int = 9             # dedup resolution, 1e-9 m


@dataclass(frozen=True, slots=True)
class CacheConfig:
    MAX_ENTRIES: int = 4096
    LENGTH_DECIMALS: int = 3
    FREQUENCY_DECIMALS: int = 3
    FEED_POSITION_DECIMALS: int = 3
    WIRE_DIAMETER_DECIMALS: int = 1


@dataclass(frozen=True, slots=True)
class InputLimits:
    """Ranges enforced by the design-file validation boundary."""
    MIN_FREQUENCY: float = 1.0        # MHz
    MAX_FREQUENCY: float = 10000.0    # MHz
    MIN_LENGTH: float = 0.01          # m
    MAX_LENGTH: float = 500.0         # m
    MIN_FEED_POINT: float = 0.0       # %
    MAX_FEED_POINT: float = 100.0     # %
    MIN_WIRE_DIAMETER: float = 0.1    # mm
    MAX_WIRE_DIAMETER: float = 10.0   # mm


PHYSICS_CONSTANTS = PhysicsConstants()
PHYSICS_LIMITS = PhysicsLimits()
NODES_CONFIG = NodesConfig()
CACHE_CONFIG = CacheConfig()
INPUT_LIMITS = InputLimits()

# Feed positions within this band of 0, 0.5 or 1 select the end-fed or
# center-fed regime. Half of the 3-decimal cache key resolution, so a value
# that rounds to 0.500 is always treated as center-fed.
FEED_POSITION_TOLERANCE = 5e-4

# ratio -> (display name, network type)
MATCHING_NETWORKS = MappingProxyType({
    1: ("1:1 Balun", "balun"),
    4: ("4:1 Balun", "balun"),
    9: ("9:1 UnUn", "unun"),
    49: ("49:1 UnUn", "unun"),
})

# Accepted spellings of each network; None means a direct feed.
MATCHING_ALIASES = MappingProxyType({
    "none": None,
    "1:1": 1, "use1to1balun": 1,
    "4:1": 4, "use4to1balun": 4,
    "9:1": 9, "use9to1unun": 9,
    "49:1": 49, "use49to1unun": 49,
})
