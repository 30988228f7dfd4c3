import math

import pytest

from freqradio.errors import DomainError, UnknownUnitError, ValidationError
from freqradio.utils import units
from freqradio.utils.units import (
    CAPACITANCE, FREQUENCY, INDUCTANCE, LENGTH, RESISTANCE, UnitTable,
    convert_field_strength, convert_gain, convert_linear, convert_power,
    convert_temperature, db_to_linear, db_to_mag, dbm_to_watts, decibel_relationships,
    from_si,
    linear_to_db, mag_to_db, thermal_noise_dbm_per_hz, to_si, to_watts,
    watts_to_dbm, watts_to_dbw,
)


class TestUnitTable:
    def test_base_unit(self):
        assert FREQUENCY.base == "Hz"
        assert LENGTH.base == "m"
        assert CAPACITANCE.base == "F"

    def test_rejects_two_base_units(self):
        with pytest.raises(ValueError):
            UnitTable("bad", {"a": 1.0, "b": 1.0})

    def test_rejects_non_positive_factor(self):
        with pytest.raises(ValueError):
            UnitTable("bad", {"a": 1.0, "b": 0.0})
        with pytest.raises(ValueError):
            UnitTable("bad", {"a": 1.0, "b": math.inf})

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            FREQUENCY.factors["THz"] = 1e12

    def test_contains(self):
        assert "MHz" in FREQUENCY
        assert "MHZ" not in FREQUENCY


class TestLinearConversion:
    def test_frequency(self):
        assert convert_linear(1, "MHz", "kHz", FREQUENCY) == pytest.approx(1000.0)
        assert to_si(2.4, "GHz", FREQUENCY) == pytest.approx(2.4e9)
        assert from_si(14.2e6, "MHz", FREQUENCY) == pytest.approx(14.2)

    def test_imperial_lengths(self):
        assert convert_linear(1, "ft", "inches", LENGTH) == pytest.approx(12.0)
        assert convert_linear(1, "miles", "km", LENGTH) == pytest.approx(1.60934)

    @pytest.mark.parametrize("table", [FREQUENCY, LENGTH, INDUCTANCE, CAPACITANCE, RESISTANCE])
    def test_round_trip(self, table):
        for unit in table.units:
            there = convert_linear(123.456, table.base, unit, table)
            back = convert_linear(there, unit, table.base, table)
            assert back == pytest.approx(123.456, rel=1e-9)

    def test_identity_still_validates_unit(self):
        assert convert_linear(5.0, "m", "m", LENGTH) == 5.0
        with pytest.raises(UnknownUnitError):
            convert_linear(5.0, "yd", "yd", LENGTH)

    def test_unknown_unit_names_field(self):
        with pytest.raises(UnknownUnitError) as exc:
            to_si(1.0, "THz", FREQUENCY, field="frequency")
        assert exc.value.field == "frequency_unit"
        assert exc.value.unit == "THz"
        assert isinstance(exc.value, KeyError)

    def test_non_finite_value(self):
        with pytest.raises(ValidationError) as exc:
            convert_linear(math.nan, "m", "cm", LENGTH)
        assert exc.value.field == "value"

    def test_plain_mapping_accepted(self):
        assert convert_linear(3, "yd", "ft", {"ft": 1.0, "yd": 3.0}) == pytest.approx(9.0)

    def test_resistance_megohm(self):
        assert convert_linear(2.2, "Mohm", "kohm", RESISTANCE) == pytest.approx(2200.0)


class TestDecibels:
    def test_linear_to_db_rejects_zero(self):
        with pytest.raises(DomainError):
            linear_to_db(0.0)
        with pytest.raises(DomainError):
            mag_to_db(-1.0)

    def test_power_and_voltage_relationships(self):
        rel = decibel_relationships(3.0, "power")
        assert rel.value_db == 3.0
        assert rel.power_ratio == pytest.approx(1.99526, rel=1e-5)
        assert rel.voltage_ratio == pytest.approx(math.sqrt(rel.power_ratio))

        rel = decibel_relationships(20.0, "voltage")
        assert rel.value_db == 20.0
        assert rel.voltage_ratio == pytest.approx(10.0)
        assert rel.power_ratio == pytest.approx(100.0)

    def test_unknown_kind(self):
        with pytest.raises(ValidationError) as exc:
            decibel_relationships(3.0, "current")
        assert exc.value.field == "kind"

    def test_overflow_is_a_domain_error(self):
        with pytest.raises(DomainError) as exc:
            db_to_linear(4000.0, field="gain")
        assert exc.value.field == "gain"
        with pytest.raises(DomainError):
            db_to_mag(8000.0)
        with pytest.raises(DomainError) as exc:
            to_watts(4000.0, "dBm", field="power")
        assert exc.value.field == "power"

    def test_large_relationship_overflows(self):
        with pytest.raises(DomainError) as exc:
            decibel_relationships(4000.0, "voltage")
        assert exc.value.field == "value"

    def test_underflow_goes_to_zero(self):
        assert dbm_to_watts(-4000.0) == 0.0


class TestPower:
    def test_dbm(self):
        assert watts_to_dbm(1.0) == pytest.approx(30.0)
        assert dbm_to_watts(30.0) == pytest.approx(1.0)
        assert watts_to_dbw(100.0) == pytest.approx(20.0)

    def test_zero_watts_has_no_dbm(self):
        with pytest.raises(DomainError):
            watts_to_dbm(0.0)
        with pytest.raises(DomainError):
            convert_power(0.0, "W", "dBm")

    def test_convert_power(self):
        assert convert_power(100, "W", "dBm") == pytest.approx(50.0)
        assert convert_power(0, "dBm", "mW") == pytest.approx(1.0)
        assert convert_power(1, "kW", "dBW") == pytest.approx(30.0)
        assert convert_power(10, "dBW", "dBm") == pytest.approx(40.0)

    def test_to_watts(self):
        assert to_watts(500, "mW") == pytest.approx(0.5)
        with pytest.raises(UnknownUnitError):
            to_watts(1, "hp")


class TestGain:
    def test_dbd_dbi(self):
        assert convert_gain(0.0, "dBd", "dBi") == pytest.approx(2.14)
        assert convert_gain(2.14, "dBi", "dBd") == pytest.approx(0.0)

    def test_linear(self):
        assert convert_gain(10.0, "linear", "dBi") == pytest.approx(10.0)
        assert convert_gain(3.0, "dBi", "linear") == pytest.approx(1.99526, rel=1e-5)

    def test_non_positive_linear(self):
        with pytest.raises(DomainError):
            convert_gain(0.0, "linear", "dBi")

    def test_unknown_unit(self):
        with pytest.raises(UnknownUnitError):
            convert_gain(1.0, "dBic", "dBi")


class TestFieldStrength:
    def test_log_units(self):
        assert convert_field_strength(1.0, "V/m", "dBuV/m") == pytest.approx(120.0)
        assert convert_field_strength(60.0, "dBuV/m", "mV/m") == pytest.approx(1.0)

    def test_micro_sign_aliases(self):
        assert convert_field_strength(1.0, "µV/m", "dBµV/m") == pytest.approx(0.0, abs=1e-9)
        assert convert_field_strength(1.0, "μV/m", "uV/m") == pytest.approx(1.0)

    def test_zero_field_in_db(self):
        with pytest.raises(DomainError):
            convert_field_strength(0.0, "V/m", "dBV/m")


class TestTemperature:
    def test_conversions(self):
        assert convert_temperature(0, "C", "K") == pytest.approx(273.15)
        assert convert_temperature(212, "F", "C") == pytest.approx(100.0)
        assert convert_temperature(300, "K", "K") == pytest.approx(300.0)

    def test_below_absolute_zero(self):
        with pytest.raises(ValidationError):
            convert_temperature(-300, "C", "K")

    def test_unknown_unit(self):
        with pytest.raises(UnknownUnitError):
            convert_temperature(10, "R", "K")

    def test_thermal_noise_floor(self):
        assert thermal_noise_dbm_per_hz(290.0) == pytest.approx(-173.98, abs=0.01)
        with pytest.raises(DomainError):
            thermal_noise_dbm_per_hz(0.0)


def test_choice_tuples_cover_log_units():
    assert "dBm" in units.POWER_UNIT_CHOICES
    assert "dBuV/m" in units.FIELD_UNIT_CHOICES
    assert units.GAIN_UNIT_CHOICES == ("linear", "dBi", "dBd")
