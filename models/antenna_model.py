# models/antenna_model.py
import dataclasses
import math
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from core.constants import PHYSICS_CONSTANTS
from core.exceptions import DesignValidationError
from core.numeric import format_impedance, swr
from core.types import (
    AntennaDesign, AntennaType, DetailedResonanceInfo, Impedance, MatchingResult,
    NodesResult, ResonanceInfo,
)
from physics.impedance import ImpedanceCalculator, classify_feed
from physics.matching import MatchingTransform
from physics.nodes import NodesCalculator
from utils.logging_config import get_logger

logger = get_logger(__name__)


class AntennaModel:
    """
    Holds the current design and exposes every derived quantity.

    All accessors are pure functions of ``self.design``; collaborators are
    injected so a sweep can share one ImpedanceCalculator (and its cache).
    """

    def __init__(self, design: Optional[AntennaDesign] = None,
                 impedance_calculator: Optional[ImpedanceCalculator] = None,
                 matching: Optional[MatchingTransform] = None,
                 nodes_calculator: Optional[NodesCalculator] = None) -> None:
        self.design = design or AntennaDesign()
        self.impedance_calculator = impedance_calculator or ImpedanceCalculator()
        self.matching = matching or MatchingTransform()
        self.nodes_calculator = nodes_calculator or NodesCalculator()

    # ------------------------------------------------------------------
    # Configuration events
    # ------------------------------------------------------------------
    def update(self, **fields: Any) -> None:
        """Replace design fields, e.g. ``model.update(frequency=7.1)``."""
        known = {f.name for f in dataclasses.fields(AntennaDesign)}
        unknown = set(fields) - known
        if unknown:
            raise DesignValidationError(f"Unknown design fields: {', '.join(sorted(unknown))}")
        self.design = dataclasses.replace(self.design, **fields)
        logger.debug("Design updated: %s", fields)

    def clone(self, **fields: Any) -> "AntennaModel":
        """Copy sharing the same collaborators, optionally with changed fields."""
        return AntennaModel(dataclasses.replace(self.design, **fields),
                            self.impedance_calculator, self.matching, self.nodes_calculator)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def length(self) -> float:
        return self.design.length

    @property
    def frequency(self) -> float:
        return self.design.frequency

    @property
    def feed_position(self) -> float:
        return self.design.feed_position

    @property
    def wavelength(self) -> float:
        return PHYSICS_CONSTANTS.SPEED_OF_LIGHT / (self.design.frequency * PHYSICS_CONSTANTS.MHZ_TO_HZ)

    @property
    def electrical_length(self) -> float:
        return self.design.length / self.wavelength

    @property
    def wave_number(self) -> float:
        return 2 * math.pi / self.wavelength

    # ------------------------------------------------------------------
    # Electrical
    # ------------------------------------------------------------------
    def calculate_impedance(self) -> Impedance:
        d = self.design
        return self.impedance_calculator.calculate_impedance(
            d.length, d.frequency, d.feed_position, d.wire_diameter)

    def apply_matching(self, impedance: Optional[Impedance] = None) -> MatchingResult:
        if impedance is None:
            impedance = self.calculate_impedance()
        return self.matching.apply(impedance, self.design.matching_network)

    def calculate_swr(self, reference_impedance: Optional[float] = None) -> float:
        """SWR of the system-side impedance against the feed line."""
        z0 = reference_impedance if reference_impedance is not None else self.design.reference_impedance
        system = self.apply_matching().impedance
        return swr(system.resistance, system.reactance, z0)

    def get_phase_angle(self) -> float:
        """Impedance phase angle in degrees."""
        z = self.calculate_impedance()
        return math.degrees(math.atan2(z.reactance, z.resistance))

    def get_antenna_type(self) -> AntennaType:
        return classify_feed(self.design.feed_position)

    def is_resonant(self) -> bool:
        """Resonance test of the injected NodesCalculator applied to the feed impedance."""
        return self.nodes_calculator.resonance_check(self.calculate_impedance())

    # ------------------------------------------------------------------
    # Standing waves
    # ------------------------------------------------------------------
    def calculate_nodes_and_antinodes(self) -> NodesResult:
        return self.nodes_calculator.calculate_nodes_and_antinodes(
            self.design.length, self.wave_number, self.design.feed_position,
            self.calculate_impedance())

    def get_resonance_guidance(self) -> ResonanceInfo:
        return self.nodes_calculator.get_resonance_guidance(
            self.calculate_impedance(), self.design.length, self.wavelength)

    def get_detailed_resonance_info(self) -> DetailedResonanceInfo:
        return self.nodes_calculator.get_detailed_resonance_info(
            self.design.length, self.wave_number, self.design.feed_position,
            self.calculate_impedance())

    def get_spatial_distributions(self, positions: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Sample normalised current and voltage amplitudes along the wire.

        Sinusoidal thin-wire distribution with current nulls at both open ends:
        I(x) ~ |sin k(H - |x|)| and V(x) ~ |cos k(H - |x|)|. Current is scaled
        by its peak on the wire (sin kH for wires shorter than a half wave), so
        both curves peak at 1. Positions beyond the wire ends sample as 0.

        Args:
            positions: Sample positions in metres, wire centre at 0.

        Returns:
            (current, voltage) arrays parallel to *positions*.
        """
        x = np.asarray(positions, dtype=float)
        half_length = self.design.length / 2
        k = self.wave_number
        phase = k * (half_length - np.abs(x))

        current = np.abs(np.sin(phase))
        voltage = np.abs(np.cos(phase))

        peak = 1.0 if k * half_length >= math.pi / 2 else math.sin(k * half_length)
        if peak > 0:
            current = current / peak

        outside = np.abs(x) > half_length
        current[outside] = 0.0
        voltage[outside] = 0.0
        return current, voltage

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------
    def summary(self) -> Dict[str, Any]:
        """Aggregate read-out for display layers."""
        impedance = self.calculate_impedance()
        matched = self.apply_matching(impedance)
        nodes = self.calculate_nodes_and_antinodes()
        guidance = self.get_resonance_guidance()
        return {
            "frequency_mhz": self.design.frequency,
            "length_m": self.design.length,
            "wavelength_m": self.wavelength,
            "electrical_length": self.electrical_length,
            "antenna_type": self.get_antenna_type().value,
            "impedance": format_impedance(impedance.resistance, impedance.reactance),
            "matching_network": matched.network.name,
            "system_impedance": format_impedance(matched.impedance.resistance, matched.impedance.reactance),
            "swr": self.calculate_swr(),
            "phase_angle_deg": self.get_phase_angle(),
            "harmonic": nodes.harmonic,
            "is_resonant": self.is_resonant(),
            "resonance": guidance.status,
            "guidance": guidance.guidance,
        }

    def __repr__(self) -> str:
        return f"<AntennaModel {self.design}>"
