"""
Yagi-Uda array rules of thumb.

Element lengths scale off a 0.95-shortened half-wave driven element.
Gain grows linearly by 1.2 dB per director above a 2.14 dBi dipole; this
is a crude estimate kept for compatibility, not a physical model.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .base import AntennaCalculator, DesignParameter, frequency_parameter
from ..errors import UnknownUnitError
from ..utils.constants import (
    DIPOLE_FACTOR, DIPOLE_GAIN_DBI, YAGI_DIRECTOR_RATIO, YAGI_FEED_IMPEDANCE,
    YAGI_GAIN_PER_DIRECTOR, YAGI_MAX_ELEMENTS, YAGI_MIN_ELEMENTS,
    YAGI_REFLECTOR_RATIO, YAGI_TYPICAL_SPACING,
)
from ..utils.rfmath import frequency_to_wavelength, get_frequency_band
from ..utils.units import LENGTH

BOOM_WAVELENGTH_UNIT = "wavelength"


@dataclass(frozen=True)
class YagiDesign:
    """Yagi dimensions [m] and estimated performance."""
    frequency_hz: float
    wavelength_m: float
    elements: int
    directors: int
    driven_length_m: float
    reflector_length_m: float
    director_length_m: float
    boom_length_m: float
    element_spacing_m: float
    element_spacing_wavelengths: float
    element_positions_m: tuple[float, ...]   # reflector, driven, director 1..n
    gain_dbi: float
    front_to_back_db: float
    feed_impedance_ohm: float
    bandwidth_percent: float
    beamwidth_e_deg: float
    beamwidth_h_deg: float
    band: str


class YagiCalculator(AntennaCalculator):

    @property
    def name(self) -> str:
        return "Yagi-Uda"

    @property
    def description(self) -> str:
        return (
            "Reflector + driven element + directors. Reflector 5 % longer and "
            "directors 10 % shorter than the driven element; default boom "
            "spacing 0.15 λ per element."
        )

    @property
    def parameters(self) -> list[DesignParameter]:
        return [
            frequency_parameter(),
            DesignParameter("elements", YAGI_MIN_ELEMENTS, YAGI_MAX_ELEMENTS, 5, "",
                            "Total number of elements", is_integer=True),
            DesignParameter("boom_length", 0.0, math.inf, None, "m",
                            "Boom length (optional)", table=LENGTH,
                            min_inclusive=False),
            DesignParameter("velocity_factor", 0.0, 1.0, 1.0, "",
                            "Velocity factor used for λ", min_inclusive=False),
        ]

    def _boom_length(self, boom_length, boom_unit: str, lam: float, n: int) -> float:
        if boom_length is None:
            return (n - 1) * YAGI_TYPICAL_SPACING * lam
        if boom_unit == BOOM_WAVELENGTH_UNIT:
            return self.validate("boom_length", boom_length, "m") * lam
        if boom_unit not in LENGTH:
            raise UnknownUnitError(boom_unit, "length", field="boom_length_unit")
        return self.validate("boom_length", boom_length, boom_unit)

    def design(self, frequency=None, frequency_unit: str = "MHz",
               elements: int | None = None, boom_length: float | None = None,
               boom_length_unit: str = "m",
               velocity_factor: float | None = None) -> YagiDesign:
        f_hz = self.validate("frequency", frequency, frequency_unit)
        n = self.validate("elements", elements)
        vf = self.validate("velocity_factor", velocity_factor)

        lam = frequency_to_wavelength(f_hz, velocity_factor=vf)
        driven = lam / 2.0 * DIPOLE_FACTOR
        boom = self._boom_length(boom_length, boom_length_unit, lam, n)

        directors = n - 2
        gain = DIPOLE_GAIN_DBI + directors * YAGI_GAIN_PER_DIRECTOR
        spacing = boom / (n - 1)
        # reflector at 0, driven at one spacing, directors beyond
        positions = (0.0, spacing) + tuple(spacing * (i + 1) for i in range(1, directors + 1))
        beamwidth_e = 60.0 / math.sqrt(gain / DIPOLE_GAIN_DBI)

        result = YagiDesign(
            frequency_hz=f_hz,
            wavelength_m=lam,
            elements=n,
            directors=directors,
            driven_length_m=driven,
            reflector_length_m=driven * YAGI_REFLECTOR_RATIO,
            director_length_m=driven * YAGI_DIRECTOR_RATIO,
            boom_length_m=boom,
            element_spacing_m=spacing,
            element_spacing_wavelengths=spacing / lam,
            element_positions_m=positions,
            gain_dbi=gain,
            front_to_back_db=15.0 + 2.0 * directors,
            feed_impedance_ohm=YAGI_FEED_IMPEDANCE,
            bandwidth_percent=15.0 - 0.5 * n,
            beamwidth_e_deg=beamwidth_e,
            beamwidth_h_deg=beamwidth_e * 1.2,
            band=get_frequency_band(f_hz),
        )
        self._log_design(result)
        return result
