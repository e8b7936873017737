# core/numeric.py
"""
Stateless numeric helpers: clamping, SWR, resonance test, formatting.
"""
import math

from core.constants import PHYSICS_CONSTANTS, PHYSICS_LIMITS
from core.types import Impedance


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* to [lo, hi]. NaN collapses onto *lo*."""
    if math.isnan(value):
        return lo
    return max(lo, min(hi, value))


def log10(value: float) -> float:
    return math.log10(value)


def reflection_coefficient(resistance: float, reactance: float,
                           reference_impedance: float = PHYSICS_CONSTANTS.STANDARD_IMPEDANCE) -> complex:
    """Gamma = (Z - Z0) / (Z + Z0)."""
    z = complex(resistance, reactance)
    z0 = complex(reference_impedance, 0.0)
    return (z - z0) / (z + z0)


def swr(resistance: float, reactance: float,
        reference_impedance: float = PHYSICS_CONSTANTS.STANDARD_IMPEDANCE) -> float:
    """
    Standing wave ratio of a load against a real reference impedance.

    Args:
        resistance: Load resistance in ohms.
        reactance: Load reactance in ohms.
        reference_impedance: System impedance Z0 in ohms.

    Returns:
        SWR clamped to [MIN_SWR, MAX_SWR].
    """
    magnitude = abs(reflection_coefficient(resistance, reactance, reference_impedance))
    if magnitude >= 1.0:
        return PHYSICS_LIMITS.MAX_SWR
    value = (1.0 + magnitude) / (1.0 - magnitude)
    return clamp(value, PHYSICS_LIMITS.MIN_SWR, PHYSICS_LIMITS.MAX_SWR)


def return_loss_db(resistance: float, reactance: float,
                   reference_impedance: float = PHYSICS_CONSTANTS.STANDARD_IMPEDANCE) -> float:
    """Return loss in dB (positive); infinite for a perfect match."""
    magnitude = abs(reflection_coefficient(resistance, reactance, reference_impedance))
    if magnitude == 0.0:
        return math.inf
    return -20.0 * math.log10(magnitude)


def is_resonant(impedance: Impedance) -> bool:
    threshold = max(PHYSICS_CONSTANTS.RESONANCE_REACTANCE_THRESHOLD,
                    PHYSICS_CONSTANTS.RESONANCE_PERCENTAGE_THRESHOLD * impedance.resistance)
    return abs(impedance.reactance) < threshold


def format_impedance(resistance: float, reactance: float) -> str:
    """Format as ``"73.1 + 1.5j Ω"``."""
    sign = "-" if reactance < 0 else "+"
    return f"{resistance:.1f} {sign} {abs(reactance):.1f}j Ω"
