# inout/presets.py
"""
Catalogue of example wire-antenna designs.

Lengths are stored in wavelengths and converted to metres at the preset
frequency, so each example starts at its nominal resonance.
"""
from dataclasses import dataclass
from typing import Dict, List

from core.constants import PHYSICS_CONSTANTS
from core.exceptions import DesignValidationError
from core.types import AntennaDesign


@dataclass(frozen=True)
class Preset:
    key: str
    title: str
    description: str
    category: str
    frequency: float            # MHz
    electrical_length: float    # wavelengths
    feed_point: float           # %
    wire_diameter: float        # mm
    balun_ratio: str

    def to_design(self) -> AntennaDesign:
        wavelength = PHYSICS_CONSTANTS.SPEED_OF_LIGHT / (self.frequency * PHYSICS_CONSTANTS.MHZ_TO_HZ)
        return AntennaDesign.from_percent(
            length=round(self.electrical_length * wavelength, 3),
            frequency=self.frequency,
            feed_point=self.feed_point,
            wire_diameter=self.wire_diameter,
            matching_network=self.balun_ratio,
        )


PRESETS: Dict[str, Preset] = {p.key: p for p in (
    Preset("20m-dipole", "20m Center-Fed Dipole", "Classic half-wave dipole for 20 meter band",
           "hf", 14.2, 0.5, 50, 2.0, "1:1"),
    Preset("40m-ocf", "40m Off-Center Fed", "Off-center fed dipole for multi-band operation",
           "hf", 7.1, 0.5, 33, 2.5, "4:1"),
    Preset("80m-efhw", "80m End-Fed Halfwave", "End-fed antenna for 80 meter band",
           "hf", 3.75, 0.5, 100, 2.0, "49:1"),
    Preset("2m-quarter-wave", "2m Quarter-Wave Vertical", "Simple quarter-wave vertical for 2 meters",
           "vhf", 146.0, 0.25, 100, 3.0, "1:1"),
    Preset("70cm-jpole", "70cm J-Pole", "Three-quarter-wave J-pole radiator for 70 centimeters",
           "vhf", 435.0, 0.75, 25, 2.0, "1:1"),
    Preset("meshtastic-915", "Meshtastic 915 MHz", "Half-wave dipole for 915 MHz mesh nodes",
           "digital", 915.0, 0.5, 50, 1.5, "1:1"),
    Preset("lora-433", "LoRa 433 MHz", "Quarter-wave whip for 433 MHz LoRa",
           "digital", 433.0, 0.25, 100, 1.0, "1:1"),
    Preset("aprs-144", "APRS 144.39 MHz", "Tuned specifically for APRS frequency",
           "digital", 144.39, 0.5, 50, 2.0, "1:1"),
)}


def get_preset(key: str) -> Preset:
    try:
        return PRESETS[key.lower()]
    except KeyError:
        raise DesignValidationError(
            f"Unknown preset '{key}'. Available: {', '.join(sorted(PRESETS))}") from None


def presets_by_category(category: str) -> List[Preset]:
    return [p for p in PRESETS.values() if p.category == category]
