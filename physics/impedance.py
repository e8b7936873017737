# physics/impedance.py
"""
Closed-form feed-point impedance of a thin linear wire antenna.

The model dispatches on the feed position:

* center-fed  -- short-dipole, near half-wave and general sinusoidal-current
  formulas (Kraus & Marhefka, thin-wire form);
* end-fed     -- quarter-wave, half-wave and general high-impedance formulas;
* off-center  -- the center-fed result transformed by the feed offset.

Every branch returns a finite number; singular points (sin(beta) ~ 0) have
dedicated fallbacks and the result is clamped to PHYSICS_LIMITS.
"""
from __future__ import annotations

import math
from typing import Optional

from core.cache import BoundedCache, CacheInfo, input_digest
from core.constants import (
    CACHE_CONFIG, FEED_POSITION_TOLERANCE, PHYSICS_CONSTANTS, PHYSICS_LIMITS,
)
from core.numeric import clamp, log10
from core.types import AntennaType, Impedance
from utils.logging_config import get_logger

logger = get_logger(__name__)

SINGULARITY_THRESHOLD = 0.001
SHORT_DIPOLE_LIMIT = 0.1
HALF_WAVE_BAND = 0.05
END_FED_BAND = 0.02
EULER_GAMMA_APPROX = 0.577
# Log-based wire-radius correction: WIRE_REACTANCE_SCALE * (log10(L/a) - WIRE_LOG_OFFSET)
WIRE_REACTANCE_SCALE = 42.5
WIRE_LOG_OFFSET = 2.25
MUTUAL_REACTANCE_SCALE = 43.1


def classify_feed(feed_position: float, tolerance: float = FEED_POSITION_TOLERANCE) -> AntennaType:
    """
    Map a feed position (0..1) onto the regime used by the impedance model.

    The position is rounded to the cache key resolution first, so every input
    that shares a cache entry also shares a regime.
    """
    feed_position = round(feed_position, CACHE_CONFIG.FEED_POSITION_DECIMALS)
    if abs(feed_position - 0.5) <= tolerance:
        return AntennaType.CENTER_FED
    if feed_position <= tolerance or feed_position >= 1.0 - tolerance:
        return AntennaType.END_FED
    return AntennaType.OFF_CENTER_FED


def wire_reactance(length_to_radius: float) -> float:
    return WIRE_REACTANCE_SCALE * (log10(length_to_radius) - WIRE_LOG_OFFSET)


class ImpedanceCalculator:
    """
    Feed impedance calculator with a bounded memo cache.

    A single instance may be shared between threads; the cache is lock-guarded.
    """

    def __init__(self, cache: Optional[BoundedCache] = None) -> None:
        self._cache = cache if cache is not None else BoundedCache()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def calculate_impedance(self, length: float, frequency: float,
                            feed_position: float, wire_diameter: float) -> Impedance:
        """
        Compute the clamped feed impedance.

        Args:
            length: Wire length in metres.
            frequency: Frequency in MHz.
            feed_position: Feed point as a fraction of the length (0..1).
            wire_diameter: Wire diameter in millimetres.

        Returns:
            Impedance with resistance and reactance inside PHYSICS_LIMITS.
        """
        key = self.cache_key(length, frequency, feed_position, wire_diameter)
        value, hit = self._cache.get_or_compute(
            key, lambda: self._compute(length, frequency, feed_position, wire_diameter))
        if hit:
            logger.debug("Impedance cache hit for L=%.3f f=%.3f fp=%.3f d=%.1f",
                         length, frequency, feed_position, wire_diameter)
        return value

    @staticmethod
    def cache_key(length: float, frequency: float, feed_position: float, wire_diameter: float) -> bytes:
        return input_digest(
            (length, frequency, feed_position, wire_diameter),
            (CACHE_CONFIG.LENGTH_DECIMALS, CACHE_CONFIG.FREQUENCY_DECIMALS,
             CACHE_CONFIG.FEED_POSITION_DECIMALS, CACHE_CONFIG.WIRE_DIAMETER_DECIMALS),
        )

    def cache_info(self) -> CacheInfo:
        return self._cache.info()

    def clear_cache(self) -> None:
        self._cache.clear()

    # ------------------------------------------------------------------
    # Regimes
    # ------------------------------------------------------------------
    def _compute(self, length: float, frequency: float,
                 feed_position: float, wire_diameter: float) -> Impedance:
        # Same resolution as the cache key, so a hit equals a fresh computation
        feed_position = round(feed_position, CACHE_CONFIG.FEED_POSITION_DECIMALS)
        wavelength = PHYSICS_CONSTANTS.SPEED_OF_LIGHT / (frequency * PHYSICS_CONSTANTS.MHZ_TO_HZ)
        electrical_length = length / wavelength
        k = 2 * math.pi / wavelength
        wire_radius = wire_diameter * PHYSICS_CONSTANTS.MM_TO_M / 2
        length_to_radius = length / wire_radius

        regime = classify_feed(feed_position)
        logger.debug("Computing impedance: regime=%s eLen=%.4f", regime.value, electrical_length)
        if regime is AntennaType.CENTER_FED:
            resistance, reactance = self._center_fed(length, electrical_length, k, length_to_radius)
        elif regime is AntennaType.END_FED:
            resistance, reactance = self._end_fed(length, electrical_length, k, length_to_radius)
        else:
            resistance, reactance = self._off_center(length, electrical_length, k,
                                                     length_to_radius, feed_position)

        return Impedance(
            resistance=clamp(resistance, PHYSICS_LIMITS.MIN_RESISTANCE, PHYSICS_LIMITS.MAX_RESISTANCE),
            reactance=clamp(reactance, PHYSICS_LIMITS.MIN_REACTANCE, PHYSICS_LIMITS.MAX_REACTANCE),
        )

    def _center_fed(self, length, e_len, k, l_to_r):
        if e_len < SHORT_DIPOLE_LIMIT:
            resistance = max(20 * math.pi ** 2 * e_len ** 2, PHYSICS_LIMITS.MIN_RESISTANCE)
            reactance = -PHYSICS_CONSTANTS.FREE_SPACE_IMPEDANCE / (2 * math.pi) * \
                (log10(2 * l_to_r) - EULER_GAMMA_APPROX)
            return resistance, reactance

        if abs(e_len - 0.5) < HALF_WAVE_BAND:
            return PHYSICS_CONSTANTS.DIPOLE_BASE_RESISTANCE, wire_reactance(l_to_r) * 0.02

        beta = k * length / 2
        sin_beta = math.sin(beta)
        cos_beta = math.cos(beta)
        if abs(sin_beta) < SINGULARITY_THRESHOLD:
            # current null at the feed
            return PHYSICS_CONSTANTS.CURRENT_NULL_RESISTANCE, 0.0

        resistance = PHYSICS_CONSTANTS.DIPOLE_BASE_RESISTANCE * sin_beta ** 2
        reactance = MUTUAL_REACTANCE_SCALE * (cos_beta - math.cos(k * length)) / sin_beta + \
            wire_reactance(l_to_r) * 0.1
        return resistance, reactance

    def _end_fed(self, length, e_len, k, l_to_r):
        if abs(e_len - 0.25) < END_FED_BAND:
            return PHYSICS_CONSTANTS.DIPOLE_BASE_RESISTANCE / 2, wire_reactance(l_to_r) / 2

        if abs(e_len - 0.5) < END_FED_BAND:
            return PHYSICS_CONSTANTS.HALF_WAVE_END_FED_RESISTANCE, 0.0

        beta = k * length
        sin_beta = math.sin(beta)
        cos_beta = math.cos(beta)
        if abs(sin_beta) < SINGULARITY_THRESHOLD:
            return PHYSICS_CONSTANTS.END_FED_HIGH_IMPEDANCE, 0.0

        if cos_beta == 0.0:
            resistance = PHYSICS_CONSTANTS.HIGH_IMPEDANCE_LIMIT
        else:
            resistance = min(PHYSICS_CONSTANTS.DIPOLE_BASE_RESISTANCE / cos_beta ** 2,
                             PHYSICS_CONSTANTS.HIGH_IMPEDANCE_LIMIT)
        reactance = clamp(PHYSICS_CONSTANTS.FREE_SPACE_IMPEDANCE * math.tan(beta / 2),
                          PHYSICS_LIMITS.MIN_REACTANCE, PHYSICS_LIMITS.MAX_REACTANCE)
        return resistance, reactance

    def _off_center(self, length, e_len, k, l_to_r, feed_position):
        center_r, center_x = self._center_fed(length, e_len, k, l_to_r)
        offset = abs(feed_position - 0.5)
        electrical_offset = offset * k * length
        current_scaling = math.cos(electrical_offset)

        if offset < 0.1:
            transform = 1 + 2 * offset
        elif current_scaling == 0.0:
            # feed at a current null: resistance saturates at the clamp bound
            return PHYSICS_LIMITS.MAX_RESISTANCE, 0.0
        else:
            transform = 1 / current_scaling ** 2

        return (center_r * transform,
                center_x * math.sqrt(transform) * current_scaling)
