import pytest
from core.types import AntennaDesign
from models.antenna_model import AntennaModel
from physics.impedance import ImpedanceCalculator

# At this frequency the free-space wavelength is exactly 1 m.
UNIT_WAVELENGTH_MHZ = 299.792458


@pytest.fixture
def calculator():
    return ImpedanceCalculator()

@pytest.fixture
def dipole_model():
    """20 m half-wave dipole, center-fed, no balun."""
    design = AntennaDesign(length=10.6, frequency=14.2, feed_position=0.5,
                           wire_diameter=2.0, matching_network="none")
    return AntennaModel(design)

@pytest.fixture
def end_fed_model():
    """Same wire fed at one end through a 49:1 un-un."""
    design = AntennaDesign(length=10.6, frequency=14.2, feed_position=0.0,
                           wire_diameter=2.0, matching_network="49:1")
    return AntennaModel(design)

@pytest.fixture
def unit_wavelength_model():
    design = AntennaDesign(length=0.5, frequency=UNIT_WAVELENGTH_MHZ, feed_position=0.5,
                           wire_diameter=2.0)
    return AntennaModel(design)

@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog
