import math
import pytest
from core.numeric import clamp, format_impedance, is_resonant, log10, reflection_coefficient, return_loss_db, swr
from core.types import Impedance

def test_clamp_bounds():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10

def test_clamp_nan_collapses_to_lower_bound():
    assert clamp(float("nan"), 0.1, 50000) == 0.1

def test_log10():
    assert log10(1000) == pytest.approx(3.0)

def test_swr_matched_load():
    assert swr(50, 0, 50) == 1.0

@pytest.mark.parametrize("r, x", [(73.1, 0), (25, 0), (50, 50), (1000, -300), (0.1, 5000), (50000, -5000)])
def test_swr_at_least_one(r, x):
    assert swr(r, x) >= 1.0

@pytest.mark.parametrize("r, x", [(73.1, 12.0), (30, 200), (2500, 40)])
def test_swr_symmetric_in_reactance_sign(r, x):
    assert swr(r, x) == pytest.approx(swr(r, -x))

def test_swr_known_value():
    # 100 ohm on a 50 ohm line: |Gamma| = 1/3
    assert swr(100, 0, 50) == pytest.approx(2.0)

def test_swr_clamped_for_total_reflection():
    assert swr(0, 5000, 50) == 999.0

def test_reflection_coefficient():
    gamma = reflection_coefficient(100, 0, 50)
    assert gamma == pytest.approx(complex(1 / 3, 0))

def test_return_loss():
    assert return_loss_db(100, 0, 50) == pytest.approx(-20 * math.log10(1 / 3))
    assert return_loss_db(50, 0, 50) == math.inf

def test_is_resonant_absolute_threshold():
    assert is_resonant(Impedance(50, 14.9))
    assert not is_resonant(Impedance(50, 15.0))

def test_is_resonant_relative_threshold():
    # 20 % of 200 ohm = 40 ohm beats the 15 ohm floor
    assert is_resonant(Impedance(200, -39))
    assert not is_resonant(Impedance(200, -41))

def test_format_impedance():
    assert format_impedance(73.1, 1.509) == "73.1 + 1.5j Ω"
    assert format_impedance(36.0, -42.0) == "36.0 - 42.0j Ω"
