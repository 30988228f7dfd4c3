import math

import pytest

from freqradio.analysis.transmission import (
    SpecialCase, classify_length, transmission_line, transmission_line_for_cable,
)
from freqradio.errors import ValidationError
from freqradio.utils.constants import C_0


class TestClassifyLength:
    @pytest.mark.parametrize("wavelengths, expected", [
        (0.25, SpecialCase.QUARTER_WAVE),
        (0.27, SpecialCase.QUARTER_WAVE),
        (0.5, SpecialCase.HALF_WAVE),
        (0.75, SpecialCase.THREE_QUARTER_WAVE),
        (1.0, SpecialCase.HALF_WAVE_MULTIPLE),
        (1.52, SpecialCase.HALF_WAVE_MULTIPLE),
        (0.6, None),
        (0.1, None),
    ])
    def test_cases(self, wavelengths, expected):
        assert classify_length(wavelengths) is expected

    def test_just_below_a_multiple_is_not_matched(self):
        # Only the remainder above a multiple of λ/2 is tested.
        assert classify_length(0.98) is None


class TestTransmissionLine:
    def test_quarter_wave_section(self):
        lam_line = C_0 * 0.66 / 100e6
        line = transmission_line(100, "MHz", lam_line / 4, "m", velocity_factor=0.66)
        assert line.electrical_length_deg == pytest.approx(90.0)
        assert line.electrical_length_rad == pytest.approx(math.pi / 2)
        assert line.electrical_length_wavelengths == pytest.approx(0.25)
        assert line.quarter_wave_m == pytest.approx(lam_line / 4)
        assert line.special_case is SpecialCase.QUARTER_WAVE

    def test_delay_and_phase_velocity(self):
        line = transmission_line(100, "MHz", 10, velocity_factor=0.66)
        assert line.phase_velocity_m_s == pytest.approx(C_0 * 0.66)
        assert line.delay_s == pytest.approx(10 / (C_0 * 0.66))
        assert line.free_space_wavelength_m == pytest.approx(C_0 / 100e6)

    def test_lossless_by_default(self):
        line = transmission_line(100, "MHz", 10)
        assert line.total_loss_db == 0.0
        assert line.cable is None

    def test_loss_scales_with_root_frequency(self):
        at_1ghz = transmission_line(1, "GHz", 10, loss_db_per_100m=100.0)
        assert at_1ghz.loss_db_per_m == pytest.approx(1.0)
        assert at_1ghz.total_loss_db == pytest.approx(10.0)
        at_250mhz = transmission_line(250, "MHz", 10, loss_db_per_100m=100.0)
        assert at_250mhz.loss_db_per_m == pytest.approx(0.5)

    def test_length_units(self):
        line = transmission_line(100, "MHz", 100, "ft")
        assert line.length_m == pytest.approx(30.48)

    @pytest.mark.parametrize("vf", [0.05, 1.1])
    def test_velocity_factor_range(self, vf):
        with pytest.raises(ValidationError) as exc:
            transmission_line(100, "MHz", 1, velocity_factor=vf)
        assert exc.value.field == "velocity_factor"

    def test_negative_loss(self):
        with pytest.raises(ValidationError) as exc:
            transmission_line(100, "MHz", 1, loss_db_per_100m=-1)
        assert exc.value.field == "loss_db_per_100m"

    def test_zero_length(self):
        with pytest.raises(ValidationError) as exc:
            transmission_line(100, "MHz", 0)
        assert exc.value.field == "length"


class TestCable:
    def test_lmr400(self):
        line = transmission_line_for_cable(1, "GHz", 100, cable="LMR-400")
        assert line.cable == "LMR-400"
        assert line.velocity_factor == pytest.approx(0.85)
        assert line.characteristic_impedance_ohm == 50.0
        assert line.total_loss_db == pytest.approx(22.0)

    def test_75_ohm_cable(self):
        line = transmission_line_for_cable(100, "MHz", 10, cable="RG-6")
        assert line.characteristic_impedance_ohm == 75.0

    def test_unknown_cable(self):
        with pytest.raises(ValidationError) as exc:
            transmission_line_for_cable(100, "MHz", 10, cable="RG-999")
        assert exc.value.field == "cable"
