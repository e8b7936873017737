import math
import pytest
from core.constants import PHYSICS_CONSTANTS, NodesConfig
from core.types import Impedance
from physics.nodes import NodesCalculator, get_harmonic_name, harmonic_number

K_UNIT = 2 * math.pi  # wave number for a 1 m wavelength
MATCHED = Impedance(73.1, 1.5)

@pytest.fixture
def nodes_calc():
    return NodesCalculator()

def test_half_wave_center_fed(nodes_calc):
    result = nodes_calc.calculate_nodes_and_antinodes(0.5, K_UNIT, 0.5, MATCHED)
    assert result.nodes.current_nodes == (-0.25, 0.25)
    assert result.nodes.current_antinodes == (0.0,)
    assert result.nodes.voltage_nodes == (0.0,)
    assert result.nodes.voltage_antinodes == (-0.25, 0.25)
    assert result.harmonic == 1
    assert result.is_resonant

def test_full_wave_center_fed(nodes_calc):
    result = nodes_calc.calculate_nodes_and_antinodes(1.0, K_UNIT, 0.5, MATCHED)
    assert result.nodes.current_nodes == pytest.approx((-0.5, -0.25, 0.25, 0.5))
    assert result.nodes.current_antinodes == (0.0,)
    assert result.nodes.voltage_nodes == (0.0,)
    assert result.nodes.voltage_antinodes == pytest.approx((-0.5, -0.25, 0.25, 0.5))
    assert result.harmonic == 2

def test_long_wire_internal_positions(nodes_calc):
    # 2.5 wavelengths: internal half-wave points at +-0.5 and +-1.0
    result = nodes_calc.calculate_nodes_and_antinodes(2.5, K_UNIT, 0.5, MATCHED)
    assert result.nodes.current_antinodes == pytest.approx((-1.0, -0.5, 0.0, 0.5, 1.0))
    assert result.nodes.voltage_nodes == pytest.approx((-1.0, -0.5, 0.0, 0.5, 1.0))
    assert result.harmonic == 5

@pytest.mark.parametrize("length, frequency", [
    (10.6, 14.2), (5.3, 14.2), (40.0, 3.75), (1.0, 146.0), (20.0, 28.4), (0.33, 433.0), (3.0, 915.0),
])
@pytest.mark.parametrize("feed", [0.0, 0.33, 0.5, 1.0])
def test_wire_ends_always_present(nodes_calc, length, frequency, feed):
    wavelength = PHYSICS_CONSTANTS.SPEED_OF_LIGHT / (frequency * 1e6)
    k = 2 * math.pi / wavelength
    nodes = nodes_calc.calculate_nodes_and_antinodes(length, k, feed, MATCHED).nodes
    half = length / 2
    assert nodes.current_nodes[0] == -half and nodes.current_nodes[-1] == half
    assert nodes.voltage_antinodes[0] == -half and nodes.voltage_antinodes[-1] == half
    if feed == 0.5:
        assert 0.0 in nodes.current_antinodes
    for seq in (nodes.current_nodes, nodes.current_antinodes, nodes.voltage_nodes, nodes.voltage_antinodes):
        assert list(seq) == sorted(set(seq))

def test_end_fed_antinode_at_feed_end(nodes_calc):
    low = nodes_calc.calculate_nodes_and_antinodes(0.5, K_UNIT, 0.0, MATCHED)
    high = nodes_calc.calculate_nodes_and_antinodes(0.5, K_UNIT, 1.0, MATCHED)
    assert low.nodes.current_antinodes == (-0.25,)
    assert high.nodes.current_antinodes == (0.25,)
    assert low.nodes.voltage_nodes == ()

def test_off_center_antinode_at_feed(nodes_calc):
    result = nodes_calc.calculate_nodes_and_antinodes(0.5, K_UNIT, 0.33, MATCHED)
    assert result.nodes.current_antinodes == pytest.approx(((0.33 - 0.5) * 0.5,))
    assert result.nodes.voltage_nodes == ()

def test_max_harmonics_bounds_internal_points():
    calc = NodesCalculator(config=NodesConfig(MAX_HARMONICS=2))
    result = calc.calculate_nodes_and_antinodes(10.0, K_UNIT, 0.5, MATCHED)
    # n = 0..1 quarter-wave points only
    assert result.nodes.current_nodes == pytest.approx((-5.0, -0.75, -0.25, 0.25, 0.75, 5.0))

def test_resonance_check_is_injected():
    calc = NodesCalculator(resonance_check=lambda z: True)
    result = calc.calculate_nodes_and_antinodes(0.5, K_UNIT, 0.5, Impedance(2000.0, 4000.0))
    assert result.is_resonant

def test_harmonic_number_monotonic():
    lengths = [i * 0.05 for i in range(0, 200)]
    harmonics = [harmonic_number(e) for e in lengths]
    assert min(harmonics) == 1
    assert all(b >= a for a, b in zip(harmonics, harmonics[1:]))

@pytest.mark.parametrize("e_len, expected", [(0.0, 1), (0.1, 1), (0.5, 1), (0.75, 2), (1.0, 2), (1.25, 3), (2.5, 5)])
def test_harmonic_number_values(e_len, expected):
    assert harmonic_number(e_len) == expected

@pytest.mark.parametrize("n, name", [(1, "1st (Fundamental)"), (2, "2nd"), (3, "3rd"), (4, "4th"),
                                     (11, "11th"), (12, "12th"), (21, "21st"), (22, "22nd")])
def test_harmonic_names(n, name):
    assert get_harmonic_name(n) == name

def test_guidance_resonant(nodes_calc):
    info = nodes_calc.get_resonance_guidance(MATCHED, 10.6, 21.1)
    assert info.status == "Resonant"
    assert info.guidance == "Antenna is well-matched"
    assert info.length_adjustment is None

def test_guidance_too_short(nodes_calc):
    info = nodes_calc.get_resonance_guidance(Impedance(50.0, -100.0), 10.0, 20.0)
    expected = 100.0 / PHYSICS_CONSTANTS.FREE_SPACE_IMPEDANCE * 20.0 * 0.1
    assert info.status == "Not Resonant"
    assert info.direction == "lengthen"
    assert info.length_adjustment == pytest.approx(expected)
    assert info.target_length == pytest.approx(10.0 + expected)
    assert info.approximate

def test_guidance_too_long(nodes_calc):
    info = nodes_calc.get_resonance_guidance(Impedance(50.0, 100.0), 10.0, 20.0)
    assert info.direction == "shorten"
    assert info.target_length < 10.0
    assert info.guidance.startswith("Too Long")

def test_guidance_nearly_resonant(nodes_calc):
    info = nodes_calc.get_resonance_guidance(Impedance(50.0, 15.0), 10.0, 20.0)
    assert info.status == "Not Resonant"
    assert info.direction is None
    assert info.length_adjustment == 0.0

def test_closest_resonant_length(nodes_calc):
    closest = nodes_calc.closest_resonant_length(0.52, 1.0)
    assert closest.name == "λ/2 (Half Wave)"
    assert closest.difference == pytest.approx(0.02)
    assert closest.percent_off == pytest.approx(4.0)

def test_detailed_resonance_info(nodes_calc):
    info = nodes_calc.get_detailed_resonance_info(1.0, K_UNIT, 0.5, Impedance(2000.0, 0.0))
    assert info.nodes.harmonic == 2
    assert info.harmonic_name == "2nd"
    assert info.closest_resonant.name == "λ (Full Wave)"
    assert info.guidance.status == "Resonant"
