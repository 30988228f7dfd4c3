import math

import numpy as np
import pytest

from freqradio.errors import ValidationError
from freqradio.sweep import (
    PatternType, path_loss_vs_distance, radiation_pattern, reactance_vs_frequency,
    vswr_vs_frequency,
)

L, C = 1e-6, 100e-12
F0 = 1.0 / (2.0 * math.pi * math.sqrt(L * C))


class TestVSWRvsFrequency:
    def test_matched_at_resonance(self):
        chart = vswr_vs_frequency(F0, L, C, 50.0, steps=101)
        assert len(chart.x) == 101
        assert chart.x[0] == pytest.approx(0.5 * F0)
        assert chart.x[-1] == pytest.approx(1.5 * F0)
        assert chart.y[50] == pytest.approx(1.0)
        assert chart.y.min() == pytest.approx(1.0)

    def test_rises_away_from_resonance(self):
        chart = vswr_vs_frequency(F0, L, C, 50.0, steps=101)
        assert chart.y[0] > chart.y[40] > chart.y[50]
        assert chart.y[-1] > chart.y[60] > chart.y[50]

    def test_default_grid(self):
        chart = vswr_vs_frequency(F0, L, C, 50.0)
        assert len(chart.pairs()) == 100
        assert chart.y_label == "VSWR"

    def test_zero_resistance_rejected(self):
        with pytest.raises(ValidationError) as exc:
            vswr_vs_frequency(F0, L, C, 0.0)
        assert exc.value.field == "resistance"


class TestReactanceVsFrequency:
    def test_inductor_rises(self):
        chart = reactance_vs_frequency("inductor", L, 10e6)
        assert chart.x[0] == pytest.approx(1e6)
        assert chart.x[-1] == pytest.approx(21e6)
        assert np.all(np.diff(chart.y) > 0)
        assert chart.y[0] == pytest.approx(2 * math.pi * 1e6 * L)

    def test_capacitor_falls(self):
        chart = reactance_vs_frequency("capacitor", C, 10e6, steps=50)
        assert len(chart.x) == 50
        assert np.all(np.diff(chart.y) < 0)


def test_path_loss_vs_distance():
    chart = path_loss_vs_distance(2.4e9, [1000.0, 2000.0, 4000.0])
    np.testing.assert_allclose(chart.x, [1.0, 2.0, 4.0])
    np.testing.assert_allclose(np.diff(chart.y), [20 * math.log10(2)] * 2)
    assert chart.y[0] == pytest.approx(100.0, abs=0.1)


class TestRadiationPattern:
    def test_grid(self):
        chart = radiation_pattern("isotropic")
        assert len(chart.x) == 181
        assert chart.x[-1] == 360.0
        np.testing.assert_allclose(chart.y, 0.0)

    def test_dipole(self):
        chart = radiation_pattern(PatternType.DIPOLE)
        assert chart.y[45] == pytest.approx(0.0)      # 90°
        assert chart.y[0] == pytest.approx(-30.0)     # null floored at -30 dB
        assert chart.y.min() >= -30.0

    def test_monopole_has_no_lower_half(self):
        chart = radiation_pattern("monopole")
        assert chart.y[135] == pytest.approx(-30.0)   # 270°
        assert chart.y[45] == pytest.approx(0.0)

    def test_yagi(self):
        chart = radiation_pattern("yagi", gain=10.0, front_to_back_db=20.0)
        assert chart.y[0] == pytest.approx(10.0)
        assert chart.y[90] == pytest.approx(-10.0)    # 180°

    def test_unknown_pattern(self):
        with pytest.raises(ValidationError) as exc:
            radiation_pattern("helical")
        assert exc.value.field == "pattern"
