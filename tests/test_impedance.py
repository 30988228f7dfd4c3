import math

import numpy as np
import pytest

from freqradio.analysis.impedance import (
    ComplexImpedance, ImpedanceAnalyzer, MatchingNetwork, MatchQuality,
    ReflectionState, VSWRMode, match_quality,
)
from freqradio.errors import ValidationError
from freqradio.results import NotApplicable


@pytest.fixture
def analyzer():
    return ImpedanceAnalyzer(50.0)


class TestComplexImpedance:
    def test_magnitude_and_phase(self):
        z = ComplexImpedance(50.0, 50.0)
        assert z.magnitude == pytest.approx(50 * math.sqrt(2))
        assert z.phase_deg == pytest.approx(45.0)

    def test_phase_on_negative_real_axis(self):
        assert ComplexImpedance(-1.0, 0.0).phase_deg == 180.0
        assert ComplexImpedance(-1.0, -0.0).phase_deg == 180.0

    def test_complex_round_trip(self):
        assert ComplexImpedance.from_complex(3 - 4j) == ComplexImpedance(3.0, -4.0)


class TestSmith:
    def test_round_trip(self, analyzer):
        z = np.array([10 + 5j, 50 + 0j, 200 - 75j])
        np.testing.assert_allclose(analyzer.from_smith(analyzer.to_smith(z)), z)

    def test_matched_load_is_centre(self, analyzer):
        assert analyzer.to_smith(50 + 0j) == 0

    def test_reflection_of_complex_load(self, analyzer):
        refl = analyzer.reflection(ComplexImpedance(25.0, 25.0))
        gamma = (25 + 25j - 50) / (25 + 25j + 50)
        assert refl.gamma_real == pytest.approx(gamma.real)
        assert refl.gamma_imag == pytest.approx(gamma.imag)
        assert refl.gamma_magnitude == pytest.approx(abs(gamma))
        assert refl.vswr == pytest.approx((1 + abs(gamma)) / (1 - abs(gamma)))

    def test_reflection_accepts_python_complex(self, analyzer):
        assert analyzer.reflection(50 + 0j).vswr == pytest.approx(1.0)

    def test_negative_resistance(self, analyzer):
        with pytest.raises(ValidationError) as exc:
            analyzer.reflection(ComplexImpedance(-5.0, 0.0))
        assert exc.value.field == "real"

    def test_bad_z0(self):
        with pytest.raises(ValidationError) as exc:
            ImpedanceAnalyzer(0.0)
        assert exc.value.field == "z0"


class TestVSWR:
    def test_75_ohm_on_50(self, analyzer):
        r = analyzer.analyze_vswr(zl=75.0)
        assert r.mode is VSWRMode.IMPEDANCES
        assert r.gamma == pytest.approx(0.2)
        assert r.vswr == pytest.approx(1.5)
        assert r.return_loss_db == pytest.approx(13.98, abs=0.01)
        assert r.mismatch_loss_db == pytest.approx(-10 * math.log10(0.96))
        assert r.power_reflected_percent == pytest.approx(4.0)
        assert r.power_transmitted_percent == pytest.approx(96.0)
        assert r.z_max_ohm == pytest.approx(75.0)
        assert r.z_min_ohm == pytest.approx(50 / 1.5)
        assert r.quality is MatchQuality.GOOD

    def test_state_matches_scalar_fields(self, analyzer):
        r = analyzer.analyze_vswr(zl=75.0)
        expected = ReflectionState.from_gamma(0.2)
        assert r.state.vswr == pytest.approx(expected.vswr)
        assert r.state.return_loss_db == pytest.approx(expected.return_loss_db)

    def test_from_vswr(self, analyzer):
        r = analyzer.analyze_vswr("vswr", vswr=3.0)
        assert r.gamma == pytest.approx(0.5)
        assert r.quality is MatchQuality.POOR

    def test_vswr_below_one(self, analyzer):
        with pytest.raises(ValidationError) as exc:
            analyzer.analyze_vswr("vswr", vswr=0.5)
        assert exc.value.field == "vswr"

    def test_from_return_loss(self, analyzer):
        r = analyzer.analyze_vswr("return_loss", return_loss=20.0)
        assert r.gamma == pytest.approx(0.1)

    def test_from_reflection(self, analyzer):
        r = analyzer.analyze_vswr(VSWRMode.REFLECTION, gamma=1.0)
        assert r.vswr == math.inf
        assert r.mismatch_loss_db == math.inf
        assert r.return_loss_db == pytest.approx(0.0)

    def test_short_circuit_load(self, analyzer):
        r = analyzer.analyze_vswr(zl=0.0)
        assert r.gamma == pytest.approx(1.0)
        assert r.vswr == math.inf

    def test_perfect_match(self, analyzer):
        r = analyzer.analyze_vswr(zl=50.0)
        assert r.vswr == pytest.approx(1.0)
        assert r.return_loss_db == math.inf
        assert r.quality is MatchQuality.EXCELLENT

    def test_explicit_z0(self, analyzer):
        r = analyzer.analyze_vswr(z0=75.0, zl=75.0)
        assert r.z0_ohm == 75.0
        assert r.gamma == pytest.approx(0.0)

    def test_missing_input(self, analyzer):
        with pytest.raises(ValidationError) as exc:
            analyzer.analyze_vswr("vswr")
        assert exc.value.field == "vswr"

    def test_bad_mode(self, analyzer):
        with pytest.raises(ValidationError) as exc:
            analyzer.analyze_vswr("smith", zl=75.0)
        assert exc.value.field == "mode"


class TestReflectionState:
    def test_from_impedances(self):
        state = ReflectionState.from_impedances(50.0, 75.0)
        assert state == ReflectionState.from_gamma(0.2)
        assert state.vswr == pytest.approx(1.5)

    def test_from_impedances_open_line(self):
        with pytest.raises(ValidationError) as exc:
            ReflectionState.from_impedances(0.0, 0.0)
        assert exc.value.field == "z0"

    def test_from_impedances_negative_load(self):
        with pytest.raises(ValidationError) as exc:
            ReflectionState.from_impedances(50.0, -1.0)
        assert exc.value.field == "zl"

    def test_views_agree(self):
        by_vswr = ReflectionState.from_vswr(1.5)
        by_rl = ReflectionState.from_return_loss(by_vswr.return_loss_db)
        assert by_vswr.gamma == pytest.approx(0.2)
        assert by_rl.gamma == pytest.approx(0.2)


def test_match_quality_boundaries():
    assert match_quality(1.2) is MatchQuality.EXCELLENT
    assert match_quality(1.5) is MatchQuality.GOOD
    assert match_quality(2.0) is MatchQuality.ACCEPTABLE
    assert match_quality(2.01) is MatchQuality.POOR


class TestLNetwork:
    def test_50_to_200(self, analyzer):
        net = analyzer.design_l_network(14.2, load_resistance=200.0)
        assert isinstance(net, MatchingNetwork)
        assert net.q_required == pytest.approx(math.sqrt(3))
        assert net.q == pytest.approx(math.sqrt(3))
        assert not net.step_down
        assert net.series_reactance_ohm == pytest.approx(50 * math.sqrt(3))
        assert net.parallel_reactance_ohm == pytest.approx(200 / math.sqrt(3))
        assert net.bandwidth_hz == pytest.approx(14.2e6 / math.sqrt(3))

    def test_topologies_are_mirrored(self, analyzer):
        net = analyzer.design_l_network(14.2, load_resistance=200.0)
        first, second = net.topologies
        assert (first.parallel.kind, first.series.kind) == ("L", "C")
        assert (second.parallel.kind, second.series.kind) == ("C", "L")
        assert first.parallel.reactance_ohm == pytest.approx(second.parallel.reactance_ohm)
        assert first.series.reactance_ohm == pytest.approx(second.series.reactance_ohm)

    def test_component_values(self, analyzer):
        net = analyzer.design_l_network(14.2, load_resistance=200.0)
        omega = 2 * math.pi * 14.2e6
        high_pass = net.topologies[0]
        assert high_pass.parallel.value == pytest.approx(net.parallel_reactance_ohm / omega)
        assert high_pass.series.value == pytest.approx(1 / (net.series_reactance_ohm * omega))
        assert "nH" in high_pass.parallel.describe()
        assert "pF" in high_pass.series.describe()

    def test_step_down_lists_low_pass_first(self, analyzer):
        net = analyzer.design_l_network(14.2, source_resistance=200.0, load_resistance=50.0)
        assert net.step_down
        assert net.topologies[0].parallel.kind == "C"
        assert net.q_required == pytest.approx(math.sqrt(3))

    def test_already_matched(self, analyzer):
        result = analyzer.design_l_network(14.2, load_resistance=50.05)
        assert isinstance(result, NotApplicable)
        assert "matched" in result.reason

    def test_target_q(self, analyzer):
        net = analyzer.design_l_network(14.2, load_resistance=200.0, target_q=3.0)
        assert net.q == pytest.approx(3.0)
        assert net.q_required == pytest.approx(math.sqrt(3))

    def test_target_q_below_required(self, analyzer):
        with pytest.raises(ValidationError) as exc:
            analyzer.design_l_network(14.2, load_resistance=200.0, target_q=1.0)
        assert exc.value.field == "target_q"

    def test_missing_load(self, analyzer):
        with pytest.raises(ValidationError) as exc:
            analyzer.design_l_network(14.2)
        assert exc.value.field == "load_resistance"
