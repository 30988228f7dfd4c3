"""
Loop antenna template.

Three regimes, each sized from the free-space wavelength:
  - small: circumference 0.08 λ, magnetic-dipole behaviour,
    R_rad = 31171·(C/λ)⁴ Ω, very low efficiency without loading
  - large: full-wave loop (1.005 λ), ~115 Ω
  - quad:  2 λ circumference, ~50 Ω

The circumference is then laid out as a circle, a square or a 2:1 rectangle.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .base import AntennaCalculator, DesignParameter, frequency_parameter
from ..utils.constants import MU_0, Z0_DEFAULT
from ..utils.rfmath import frequency_to_wavelength, get_frequency_band
from ..utils.validation import require_choice


class LoopType(str, Enum):
    SMALL = "small"
    LARGE = "large"
    QUAD = "quad"


class LoopShape(str, Enum):
    CIRCULAR = "circular"
    SQUARE = "square"
    RECTANGULAR = "rectangular"


@dataclass(frozen=True)
class _Regime:
    circumference_wavelengths: float
    resistance_ohm: Optional[float]    # None → Wheeler's small-loop formula
    efficiency: float
    gain_dbi: float
    directivity: float
    bandwidth_percent: float


_REGIMES = {
    LoopType.SMALL: _Regime(0.08, None, 0.1, -1.76, 1.5, 1.0),
    LoopType.LARGE: _Regime(1.005, 115.0, 0.95, 2.1, 1.64, 10.0),
    LoopType.QUAD: _Regime(2.0, 50.0, 0.9, 3.1, 2.0, 8.0),
}


@dataclass(frozen=True)
class LoopDimensions:
    """Layout of the loop conductor [m, m²]; fields not used by a shape are None."""
    shape: LoopShape
    area_m2: float
    diameter_m: Optional[float] = None
    radius_m: Optional[float] = None
    side_m: Optional[float] = None
    diagonal_m: Optional[float] = None
    long_side_m: Optional[float] = None
    short_side_m: Optional[float] = None


def loop_dimensions(circumference: float, shape: LoopShape) -> LoopDimensions:
    """Lay a loop of the given circumference out in ``shape``."""
    if shape is LoopShape.CIRCULAR:
        diameter = circumference / math.pi
        radius = diameter / 2.0
        return LoopDimensions(shape, math.pi * radius ** 2,
                              diameter_m=diameter, radius_m=radius)
    if shape is LoopShape.SQUARE:
        side = circumference / 4.0
        return LoopDimensions(shape, side * side,
                              side_m=side, diagonal_m=side * math.sqrt(2.0))
    # 2:1 rectangle
    long_side = circumference / 6.0
    short_side = circumference / 12.0
    return LoopDimensions(shape, long_side * short_side,
                          long_side_m=long_side, short_side_m=short_side)


@dataclass(frozen=True)
class LoopDesign:
    loop_type: LoopType
    frequency_hz: float
    wavelength_m: float
    circumference_m: float
    dimensions: LoopDimensions
    radiation_resistance_ohm: float
    efficiency: float
    gain_dbi: float
    directivity: float
    bandwidth_percent: float
    band: str
    # small loops only
    inductance_h: Optional[float] = None
    required_q: Optional[float] = None     # to transform R_rad up to 50 Ω


class LoopCalculator(AntennaCalculator):

    @property
    def name(self) -> str:
        return "Loop Antenna"

    @property
    def description(self) -> str:
        return (
            "Small (magnetic), full-wave or quad loop. For electrically small "
            "loops the radiation resistance is R_rad = 31171·(C/λ)⁴ Ω."
        )

    @property
    def parameters(self) -> list[DesignParameter]:
        return [
            frequency_parameter(),
            DesignParameter("velocity_factor", 0.0, 1.0, 1.0, "",
                            "Velocity factor used for λ", min_inclusive=False),
        ]

    def _small_loop_inductance(self, area: float, circumference: float) -> float:
        """Rough inductance: L ≈ μ₀·A/C."""
        return area * MU_0 / circumference

    def design(self, frequency=None, frequency_unit: str = "MHz",
               loop_type: LoopType | str = LoopType.SMALL,
               shape: LoopShape | str = LoopShape.CIRCULAR,
               velocity_factor: float | None = None) -> LoopDesign:
        f_hz = self.validate("frequency", frequency, frequency_unit)
        kind = require_choice(loop_type, LoopType, "loop_type")
        shape = require_choice(shape, LoopShape, "shape")
        vf = self.validate("velocity_factor", velocity_factor)
        regime = _REGIMES[kind]

        lam = frequency_to_wavelength(f_hz, velocity_factor=vf)
        circumference = lam * regime.circumference_wavelengths
        dims = loop_dimensions(circumference, shape)

        inductance = required_q = None
        if regime.resistance_ohm is None:
            # Wheeler
            r_rad = 31171.0 * (circumference / lam) ** 4
            inductance = self._small_loop_inductance(dims.area_m2, circumference)
            required_q = Z0_DEFAULT / r_rad
        else:
            r_rad = regime.resistance_ohm

        result = LoopDesign(
            loop_type=kind,
            frequency_hz=f_hz,
            wavelength_m=lam,
            circumference_m=circumference,
            dimensions=dims,
            radiation_resistance_ohm=r_rad,
            efficiency=regime.efficiency,
            gain_dbi=regime.gain_dbi,
            directivity=regime.directivity,
            bandwidth_percent=regime.bandwidth_percent,
            band=get_frequency_band(f_hz),
            inductance_h=inductance,
            required_q=required_q,
        )
        self._log_design(result)
        return result
