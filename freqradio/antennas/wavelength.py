"""
Wavelength and practical element lengths.

The wavelength in the wire/cable medium is c·vf/f. Practical element
lengths are the usual fractions of it, shortened by an end-effect
correction (default 5 %) for the capacitance at the element tips.
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import AntennaCalculator, DesignParameter, frequency_parameter
from ..utils.constants import END_EFFECT_PERCENT
from ..utils.rfmath import (
    AmateurBandMatch, frequency_to_wavelength, get_frequency_band,
    get_nearest_amateur_band,
)


@dataclass(frozen=True)
class ElementLengths:
    """Wavelength and end-effect-corrected element lengths [m]."""
    frequency_hz: float
    velocity_factor: float
    end_effect_percent: float
    wavelength_m: float
    full_wave_m: float
    half_wave_m: float
    quarter_wave_m: float
    three_quarter_wave_m: float
    five_eighth_wave_m: float
    eighth_wave_m: float
    band: str
    nearest_amateur_band: AmateurBandMatch


class WavelengthCalculator(AntennaCalculator):

    @property
    def name(self) -> str:
        return "Wavelength"

    @property
    def description(self) -> str:
        return (
            "Wavelength at a frequency for a given velocity factor, with practical "
            "full/half/quarter/3-4/5-8/1-8 wave element lengths after end-effect "
            "correction."
        )

    @property
    def parameters(self) -> list[DesignParameter]:
        return [
            frequency_parameter(),
            DesignParameter("velocity_factor", 0.0, 1.0, 0.95, "",
                            "Propagation velocity / c", min_inclusive=False),
            DesignParameter("end_effect_percent", 0.0, 50.0, END_EFFECT_PERCENT, "%",
                            "Tip capacitance shortening", max_inclusive=False),
        ]

    def design(self, frequency=None, frequency_unit: str = "MHz",
               velocity_factor: float | None = None,
               end_effect_percent: float | None = None) -> ElementLengths:
        f_hz = self.validate("frequency", frequency, frequency_unit)
        vf = self.validate("velocity_factor", velocity_factor)
        end_effect = self.validate("end_effect_percent", end_effect_percent)

        lam = frequency_to_wavelength(f_hz, velocity_factor=vf)
        k = 1.0 - end_effect / 100.0

        result = ElementLengths(
            frequency_hz=f_hz,
            velocity_factor=vf,
            end_effect_percent=end_effect,
            wavelength_m=lam,
            full_wave_m=lam * k,
            half_wave_m=lam / 2.0 * k,
            quarter_wave_m=lam / 4.0 * k,
            three_quarter_wave_m=lam * 3.0 / 4.0 * k,
            five_eighth_wave_m=lam * 5.0 / 8.0 * k,
            eighth_wave_m=lam / 8.0 * k,
            band=get_frequency_band(f_hz),
            nearest_amateur_band=get_nearest_amateur_band(f_hz),
        )
        self._log_design(result)
        return result
