"""
Transmission line electrical length and loss.

Loss figures are quoted per 100 m at 1 GHz and scaled by √(f/1 GHz), a
skin-effect approximation that ignores dielectric loss.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from ..errors import ValidationError
from ..utils.constants import C_0, COAX_TYPES
from ..utils.rfmath import electrical_length, frequency_to_wavelength
from ..utils.units import FREQUENCY, LENGTH, to_si
from ..utils.validation import require_non_negative, require_positive, require_range

logger = logging.getLogger(__name__)

SPECIAL_CASE_TOLERANCE = 0.05     # wavelengths


class SpecialCase(str, Enum):
    QUARTER_WAVE = "Quarter-wave transformer"
    HALF_WAVE = "Half-wave (impedance repeater)"
    THREE_QUARTER_WAVE = "Three-quarter wave"
    HALF_WAVE_MULTIPLE = "Multiple of half-wavelength"


def classify_length(wavelengths: float,
                    tolerance: float = SPECIAL_CASE_TOLERANCE) -> Optional[SpecialCase]:
    """Recognize line lengths with well-known impedance behaviour (first match wins)."""
    if abs(wavelengths - 0.25) < tolerance:
        return SpecialCase.QUARTER_WAVE
    if abs(wavelengths - 0.5) < tolerance:
        return SpecialCase.HALF_WAVE
    if abs(wavelengths - 0.75) < tolerance:
        return SpecialCase.THREE_QUARTER_WAVE
    if wavelengths % 0.5 < tolerance:
        return SpecialCase.HALF_WAVE_MULTIPLE
    return None


@dataclass(frozen=True)
class TransmissionLine:
    frequency_hz: float
    length_m: float
    velocity_factor: float
    free_space_wavelength_m: float
    line_wavelength_m: float
    electrical_length_deg: float
    electrical_length_rad: float
    electrical_length_wavelengths: float
    phase_velocity_m_s: float
    delay_s: float
    loss_db_per_m: float
    total_loss_db: float
    quarter_wave_m: float
    half_wave_m: float
    three_quarter_wave_m: float
    special_case: Optional[SpecialCase]
    cable: Optional[str] = None
    characteristic_impedance_ohm: Optional[float] = None


def transmission_line(frequency: float, frequency_unit: str, length: float,
                      length_unit: str = "m", velocity_factor: float = 0.66,
                      loss_db_per_100m: float = 0.0) -> TransmissionLine:
    """
    Electrical length, delay and loss of a line section.

    Args:
        velocity_factor: in [0.1, 1]
        loss_db_per_100m: matched loss at 1 GHz (0 = lossless)
    """
    f_hz = require_positive(to_si(frequency, frequency_unit, FREQUENCY, field="frequency"),
                            "frequency")
    length_m = require_positive(to_si(length, length_unit, LENGTH, field="length"), "length")
    vf = require_range(velocity_factor, "velocity_factor", 0.1, 1.0)
    loss = require_non_negative(loss_db_per_100m, "loss_db_per_100m")

    lam_line = frequency_to_wavelength(f_hz, velocity_factor=vf)
    degrees = electrical_length(f_hz, length_m, vf)
    wavelengths = length_m / lam_line
    phase_velocity = C_0 * vf
    loss_per_m = loss / 100.0 * math.sqrt(f_hz / 1e9)

    result = TransmissionLine(
        frequency_hz=f_hz,
        length_m=length_m,
        velocity_factor=vf,
        free_space_wavelength_m=frequency_to_wavelength(f_hz),
        line_wavelength_m=lam_line,
        electrical_length_deg=degrees,
        electrical_length_rad=math.radians(degrees),
        electrical_length_wavelengths=wavelengths,
        phase_velocity_m_s=phase_velocity,
        delay_s=length_m / phase_velocity,
        loss_db_per_m=loss_per_m,
        total_loss_db=loss_per_m * length_m,
        quarter_wave_m=lam_line / 4.0,
        half_wave_m=lam_line / 2.0,
        three_quarter_wave_m=lam_line * 3.0 / 4.0,
        special_case=classify_length(wavelengths),
    )
    logger.debug("Transmission line: %s", result)
    return result


def transmission_line_for_cable(frequency: float, frequency_unit: str, length: float,
                                length_unit: str = "m",
                                cable: str = "RG-58") -> TransmissionLine:
    """Same as ``transmission_line`` with VF, loss and Z0 taken from the coax table."""
    try:
        spec = COAX_TYPES[cable]
    except KeyError:
        raise ValidationError(
            "cable", f"unknown cable {cable!r}; choose from {', '.join(COAX_TYPES)}"
        ) from None
    line = transmission_line(frequency, frequency_unit, length, length_unit,
                             velocity_factor=spec.velocity_factor,
                             loss_db_per_100m=spec.loss_db_100m_1ghz)
    return replace(line, cable=spec.name, characteristic_impedance_ohm=spec.impedance)
