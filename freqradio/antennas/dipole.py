"""
Dipole and quarter-wave monopole.

Lengths are the textbook fraction of the free-space wavelength times a
0.95 shortening factor. Feed resistance, directivity, gain and beamwidth
are fixed reference values per antenna type, not derived from geometry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .base import AntennaCalculator, DesignParameter, frequency_parameter
from ..utils.constants import (
    DIPOLE_FACTOR, DIPOLE_RESISTANCE, FULLWAVE_RESISTANCE, MONOPOLE_FACTOR,
    MONOPOLE_RESISTANCE,
)
from ..utils.rfmath import frequency_to_wavelength, get_frequency_band
from ..utils.units import LENGTH
from ..utils.validation import require_choice


class DipoleType(str, Enum):
    HALFWAVE = "halfwave"
    FULLWAVE = "fullwave"
    QUARTERWAVE = "quarterwave"     # monopole over a ground plane


@dataclass(frozen=True)
class _TypeData:
    wavelengths: float
    shortening: float
    resistance: float
    directivity: float
    gain_dbi: float
    beamwidth_deg: float
    q: float


_TYPE_DATA = {
    DipoleType.HALFWAVE: _TypeData(0.5, DIPOLE_FACTOR, DIPOLE_RESISTANCE, 1.64, 2.14, 78.0, 15.0),
    DipoleType.FULLWAVE: _TypeData(1.0, DIPOLE_FACTOR, FULLWAVE_RESISTANCE, 2.41, 3.82, 47.0, 15.0),
    DipoleType.QUARTERWAVE: _TypeData(0.25, MONOPOLE_FACTOR, MONOPOLE_RESISTANCE, 1.64, 2.14, 78.0, 25.0),
}


def bandwidth_class(length_to_diameter: float) -> str:
    """Thicker elements (low L/D) are broader."""
    if length_to_diameter < 100:
        return "High"
    if length_to_diameter < 1000:
        return "Medium"
    return "Low"


@dataclass(frozen=True)
class DipoleDesign:
    """Dipole / monopole dimensions [m] and reference performance."""
    antenna_type: DipoleType
    frequency_hz: float
    wavelength_m: float
    total_length_m: float
    element_length_m: float          # one leg for dipoles, the whole radiator for a monopole
    feed_resistance_ohm: float
    directivity: float               # linear
    gain_dbi: float
    beamwidth_deg: float
    q: float
    bandwidth_hz: float
    band: str
    wire_diameter_m: Optional[float] = None
    length_to_diameter: Optional[float] = None
    bandwidth_class: Optional[str] = None


class DipoleCalculator(AntennaCalculator):

    @property
    def name(self) -> str:
        return "Dipole / Monopole"

    @property
    def description(self) -> str:
        return (
            "Half-wave or full-wave dipole, or quarter-wave monopole. Length is "
            "the free-space fraction of λ times 0.95; 73 Ω / 199 Ω / 36.5 Ω feed."
        )

    @property
    def parameters(self) -> list[DesignParameter]:
        return [
            frequency_parameter(),
            DesignParameter("wire_diameter", 0.0, math.inf, None, "mm",
                            "Conductor diameter (optional)", table=LENGTH,
                            min_inclusive=False),
            DesignParameter("velocity_factor", 0.0, 1.0, 1.0, "",
                            "Velocity factor used for λ", min_inclusive=False),
        ]

    def design(self, frequency=None, frequency_unit: str = "MHz",
               antenna_type: DipoleType | str = DipoleType.HALFWAVE,
               wire_diameter: float | None = None, wire_diameter_unit: str = "mm",
               velocity_factor: float | None = None) -> DipoleDesign:
        f_hz = self.validate("frequency", frequency, frequency_unit)
        kind = require_choice(antenna_type, DipoleType, "antenna_type")
        vf = self.validate("velocity_factor", velocity_factor)
        data = _TYPE_DATA[kind]

        lam = frequency_to_wavelength(f_hz, velocity_factor=vf)
        total = lam * data.wavelengths * data.shortening
        element = total if kind is DipoleType.QUARTERWAVE else total / 2.0

        diameter = ratio = bw_class = None
        if wire_diameter is not None:
            diameter = self.validate("wire_diameter", wire_diameter, wire_diameter_unit)
            ratio = total / diameter
            bw_class = bandwidth_class(ratio)

        result = DipoleDesign(
            antenna_type=kind,
            frequency_hz=f_hz,
            wavelength_m=lam,
            total_length_m=total,
            element_length_m=element,
            feed_resistance_ohm=data.resistance,
            directivity=data.directivity,
            gain_dbi=data.gain_dbi,
            beamwidth_deg=data.beamwidth_deg,
            q=data.q,
            bandwidth_hz=f_hz / data.q,
            band=get_frequency_band(f_hz),
            wire_diameter_m=diameter,
            length_to_diameter=ratio,
            bandwidth_class=bw_class,
        )
        self._log_design(result)
        return result
