"""
Unit conversion utilities for RF engineering.

Linear units live in ``UnitTable`` instances (pure scale factors relative to
an SI base unit). Logarithmic units (dBm/dBW, dBi/dBd, dBµV/m and friends)
are never put in a table: they have dedicated conversion functions below.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..errors import DomainError, UnknownUnitError, ValidationError
from .constants import (
    BOLTZMANN, CAPACITANCE_UNITS, DIPOLE_GAIN_DBI, FIELD_STRENGTH_UNITS,
    FREQ_UNITS, INDUCTANCE_UNITS, LENGTH_UNITS, POWER_UNITS, RESISTANCE_UNITS,
    ABSOLUTE_ZERO_C,
)
from .validation import require_number


# ─── Linear unit tables ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class UnitTable:
    """
    Unit name → scale factor relative to the base unit.

    Exactly one entry has factor 1 (the base unit); every factor is finite
    and strictly positive.
    """
    name: str
    factors: Mapping[str, float]

    def __post_init__(self):
        factors = dict(self.factors)
        bad = [u for u, f in factors.items()
               if not isinstance(f, (int, float)) or not math.isfinite(f) or f <= 0]
        if bad:
            raise ValueError(f"{self.name}: non-positive or non-finite factors for {bad}")
        bases = [u for u, f in factors.items() if f == 1]
        if len(bases) != 1:
            raise ValueError(f"{self.name}: expected exactly one base unit, found {bases}")
        object.__setattr__(self, "factors", MappingProxyType(factors))

    @property
    def base(self) -> str:
        return next(u for u, f in self.factors.items() if f == 1)

    @property
    def units(self) -> tuple[str, ...]:
        return tuple(self.factors)

    def factor(self, unit: str, field: str | None = None) -> float:
        try:
            return self.factors[unit]
        except (KeyError, TypeError):
            raise UnknownUnitError(str(unit), self.name, field=field) from None

    def __contains__(self, unit) -> bool:
        return unit in self.factors


FREQUENCY = UnitTable("frequency", FREQ_UNITS)
LENGTH = UnitTable("length", LENGTH_UNITS)
INDUCTANCE = UnitTable("inductance", INDUCTANCE_UNITS)
CAPACITANCE = UnitTable("capacitance", CAPACITANCE_UNITS)
RESISTANCE = UnitTable("resistance", RESISTANCE_UNITS)
POWER = UnitTable("power", POWER_UNITS)
FIELD_STRENGTH = UnitTable("field strength", FIELD_STRENGTH_UNITS)


def _as_table(table: UnitTable | Mapping[str, float]) -> UnitTable:
    if isinstance(table, UnitTable):
        return table
    return UnitTable("custom", table)


def convert_linear(value: float, from_unit: str, to_unit: str,
                   table: UnitTable | Mapping[str, float],
                   field: str = "value") -> float:
    """Convert between two units of the same linear table."""
    table = _as_table(table)
    value = require_number(value, field)
    from_factor = table.factor(from_unit, field=f"{field}_unit")
    to_factor = table.factor(to_unit, field=f"{field}_unit")
    if from_unit == to_unit:
        return value
    return value * from_factor / to_factor


def to_si(value: float, unit: str, table: UnitTable, field: str = "value") -> float:
    """Express ``value`` (given in ``unit``) in the table's base unit."""
    return convert_linear(value, unit, table.base, table, field=field)


def from_si(value: float, unit: str, table: UnitTable, field: str = "value") -> float:
    """Express a base-unit ``value`` in ``unit``."""
    return convert_linear(value, table.base, unit, table, field=field)


# ─── Power / amplitude ratios ───────────────────────────────────────────────

def _pow10(exponent: float, field: str | None) -> float:
    try:
        return 10.0 ** exponent
    except OverflowError:
        raise DomainError("decibel value exceeds the representable range",
                          field=field) from None


def db_to_linear(db: float, field: str | None = None) -> float:
    """Convert dB (power) to linear ratio."""
    return _pow10(db / 10.0, field)


def linear_to_db(ratio: float) -> float:
    """Convert linear power ratio to dB."""
    if ratio <= 0:
        raise DomainError("non-positive ratio has no decibel representation")
    return 10.0 * math.log10(ratio)


def db_to_mag(db: float, field: str | None = None) -> float:
    """Convert dB to voltage magnitude (20*log10 convention)."""
    return _pow10(db / 20.0, field)


def mag_to_db(mag: float) -> float:
    """Convert voltage magnitude to dB (20*log10 convention)."""
    if mag <= 0:
        raise DomainError("non-positive magnitude has no decibel representation")
    return 20.0 * math.log10(mag)


@dataclass(frozen=True)
class DecibelRelationships:
    """
    One decibel figure seen as both a power and a voltage ratio.

    ``value_db`` is the same number under either convention; only the linear
    ratios differ (P ∝ V², so power_ratio == voltage_ratio²).
    """
    value_db: float
    power_ratio: float
    voltage_ratio: float


def decibel_relationships(value_db: float, kind: str = "power") -> DecibelRelationships:
    """
    Interpret ``value_db`` as a power ratio ("power") or an amplitude ratio
    ("voltage" / "field") and express it both ways.
    """
    value_db = require_number(value_db, "value")
    if kind == "power":
        power_ratio = db_to_linear(value_db, field="value")
        voltage_ratio = math.sqrt(power_ratio)
    elif kind in ("voltage", "field"):
        voltage_ratio = db_to_mag(value_db, field="value")
        power_ratio = db_to_linear(2.0 * value_db, field="value")
    else:
        raise ValidationError("kind", f"must be power, voltage or field; got {kind!r}")
    return DecibelRelationships(value_db=value_db, power_ratio=power_ratio,
                                voltage_ratio=voltage_ratio)


def dbm_to_watts(dbm: float, field: str | None = None) -> float:
    """Convert dBm to Watts."""
    return _pow10((dbm - 30.0) / 10.0, field)


def watts_to_dbm(watts: float) -> float:
    """Convert Watts to dBm."""
    if watts <= 0:
        raise DomainError("non-positive power has no decibel representation")
    return 10.0 * math.log10(watts * 1000.0)


def dbw_to_watts(dbw: float, field: str | None = None) -> float:
    """Convert dBW to Watts."""
    return _pow10(dbw / 10.0, field)


def watts_to_dbw(watts: float) -> float:
    """Convert Watts to dBW."""
    if watts <= 0:
        raise DomainError("non-positive power has no decibel representation")
    return 10.0 * math.log10(watts)


# ─── Power ──────────────────────────────────────────────────────────────────

_POWER_FROM_LOG = {"dBm": dbm_to_watts, "dBW": dbw_to_watts}
_POWER_TO_LOG = {"dBm": watts_to_dbm, "dBW": watts_to_dbw}
POWER_UNIT_CHOICES = POWER.units + tuple(_POWER_FROM_LOG)


def _check_unit(unit: str, choices: tuple[str, ...], table: str, field: str):
    if unit not in choices:
        raise UnknownUnitError(str(unit), table, field=field)


def to_watts(value: float, unit: str, field: str = "value") -> float:
    """Any supported power unit → Watts."""
    value = require_number(value, field)
    _check_unit(unit, POWER_UNIT_CHOICES, "power", f"{field}_unit")
    if unit in _POWER_FROM_LOG:
        return _POWER_FROM_LOG[unit](value, field)
    return value * POWER.factor(unit)


def convert_power(value: float, from_unit: str, to_unit: str,
                  field: str = "value") -> float:
    """Convert power between W, mW, kW, dBm and dBW."""
    value = require_number(value, field)
    _check_unit(from_unit, POWER_UNIT_CHOICES, "power", f"{field}_unit")
    _check_unit(to_unit, POWER_UNIT_CHOICES, "power", f"{field}_unit")
    if from_unit == to_unit:
        return value
    watts = to_watts(value, from_unit, field)
    if to_unit in _POWER_TO_LOG:
        return _POWER_TO_LOG[to_unit](watts)
    return watts / POWER.factor(to_unit)


# ─── Antenna gain ───────────────────────────────────────────────────────────

GAIN_UNIT_CHOICES = ("linear", "dBi", "dBd")


def convert_gain(value: float, from_unit: str, to_unit: str,
                 field: str = "value") -> float:
    """Convert antenna gain between linear, dBi and dBd (dBi = dBd + 2.14)."""
    value = require_number(value, field)
    _check_unit(from_unit, GAIN_UNIT_CHOICES, "gain", f"{field}_unit")
    _check_unit(to_unit, GAIN_UNIT_CHOICES, "gain", f"{field}_unit")
    if from_unit == to_unit:
        return value

    if from_unit == "linear":
        if value <= 0:
            raise DomainError("non-positive gain has no decibel representation")
        dbi = 10.0 * math.log10(value)
    elif from_unit == "dBd":
        dbi = value + DIPOLE_GAIN_DBI
    else:
        dbi = value

    if to_unit == "linear":
        return db_to_linear(dbi, field)
    if to_unit == "dBd":
        return dbi - DIPOLE_GAIN_DBI
    return dbi


# ─── Field strength ─────────────────────────────────────────────────────────

_FIELD_ALIASES = {
    "µV/m": "uV/m", "μV/m": "uV/m",
    "dBµV/m": "dBuV/m", "dBμV/m": "dBuV/m",
}
# dB unit → scale applied to V/m before 20·log10
_FIELD_LOG_SCALE = {"dBuV/m": 1e6, "dBmV/m": 1e3, "dBV/m": 1.0}
FIELD_UNIT_CHOICES = FIELD_STRENGTH.units + tuple(_FIELD_LOG_SCALE)


def convert_field_strength(value: float, from_unit: str, to_unit: str,
                           field: str = "value") -> float:
    """Convert electric field strength between V/m-family and dB-family units."""
    value = require_number(value, field)
    from_unit = _FIELD_ALIASES.get(from_unit, from_unit)
    to_unit = _FIELD_ALIASES.get(to_unit, to_unit)
    _check_unit(from_unit, FIELD_UNIT_CHOICES, "field strength", f"{field}_unit")
    _check_unit(to_unit, FIELD_UNIT_CHOICES, "field strength", f"{field}_unit")
    if from_unit == to_unit:
        return value

    if from_unit in _FIELD_LOG_SCALE:
        v_per_m = db_to_mag(value, field) / _FIELD_LOG_SCALE[from_unit]
    else:
        v_per_m = value * FIELD_STRENGTH.factor(from_unit)

    if to_unit in _FIELD_LOG_SCALE:
        if v_per_m <= 0:
            raise DomainError("non-positive field strength has no decibel representation")
        return 20.0 * math.log10(v_per_m * _FIELD_LOG_SCALE[to_unit])
    return v_per_m / FIELD_STRENGTH.factor(to_unit)


# ─── Temperature ────────────────────────────────────────────────────────────

TEMPERATURE_UNIT_CHOICES = ("C", "F", "K")


def to_kelvin(value: float, unit: str, field: str = "value") -> float:
    value = require_number(value, field)
    _check_unit(unit, TEMPERATURE_UNIT_CHOICES, "temperature", f"{field}_unit")
    if unit == "C":
        kelvin = value - ABSOLUTE_ZERO_C
    elif unit == "F":
        kelvin = (value - 32.0) * 5.0 / 9.0 - ABSOLUTE_ZERO_C
    else:
        kelvin = value
    if kelvin < 0:
        raise ValidationError(field, "temperature is below absolute zero")
    return kelvin


def convert_temperature(value: float, from_unit: str, to_unit: str,
                        field: str = "value") -> float:
    """Convert between C, F and K, always staged through kelvin."""
    _check_unit(to_unit, TEMPERATURE_UNIT_CHOICES, "temperature", f"{field}_unit")
    kelvin = to_kelvin(value, from_unit, field)
    if to_unit == "C":
        return kelvin + ABSOLUTE_ZERO_C
    if to_unit == "F":
        return (kelvin + ABSOLUTE_ZERO_C) * 9.0 / 5.0 + 32.0
    return kelvin


def thermal_noise_dbm_per_hz(kelvin: float) -> float:
    """Thermal noise density kT in dBm/Hz (≈ -174 dBm/Hz at 290 K)."""
    kelvin = require_number(kelvin, "temperature")
    if kelvin <= 0:
        raise DomainError("thermal noise is undefined at or below 0 K")
    return 10.0 * math.log10(BOLTZMANN * kelvin * 1000.0)
