"""
Microstrip Patch Antenna template.

Rectangular patch on a grounded substrate. Width and length come from the
standard transmission-line model with a Hammerstad fringing correction:

  εr_eff = (εr+1)/2 + (εr−1)/2 · 1/√(1 + 12·h/1mm)
  W      = c / (2f√εr_eff)
  L      = c / (2f√εr_eff) − 2ΔL

Impedance, bandwidth and gain are rough rules of thumb, kept as-is.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .base import AntennaCalculator, DesignParameter, frequency_parameter
from ..errors import DomainError
from ..utils.constants import C_0
from ..utils.rfmath import get_frequency_band
from ..utils.units import LENGTH

PATCH_EFFICIENCY = 0.85
PATCH_BEAMWIDTH_DEG = 78.0


@dataclass(frozen=True)
class PatchDesign:
    """Patch dimensions [m] and estimated performance."""
    frequency_hz: float
    substrate_er: float
    thickness_m: float
    effective_er: float
    width_m: float
    length_m: float
    effective_length_m: float
    fringe_extension_m: float
    input_impedance_ohm: float
    bandwidth_percent: float
    directivity: float
    efficiency: float
    gain_dbi: float
    ground_plane_m: float        # recommended minimum side
    band: str


class PatchCalculator(AntennaCalculator):

    @property
    def name(self) -> str:
        return "Microstrip Patch Antenna"

    @property
    def description(self) -> str:
        return (
            "Rectangular microstrip patch. Resonance at L ≈ λ/(2√εr_eff) less the "
            "fringing extension. Broadside radiation pattern; bandwidth grows "
            "with substrate height."
        )

    @property
    def parameters(self) -> list[DesignParameter]:
        return [
            frequency_parameter(),
            DesignParameter("substrate_er", 1.0, 15.0, 4.4, "",
                            "Substrate relative permittivity"),
            DesignParameter("thickness", 0.0, math.inf, 1.6, "mm",
                            "Substrate height", table=LENGTH, min_inclusive=False),
        ]

    def _effective_er(self, er: float, h_m: float) -> float:
        return (er + 1) / 2 + (er - 1) / 2 * (1 / math.sqrt(1 + 12 * h_m / 0.001))

    def _fringe_extension(self, er_eff: float, h_m: float, w_m: float) -> float:
        """Fringing field extension ΔL (Hammerstad)."""
        ratio = w_m / h_m
        return 0.412 * h_m * (
            (er_eff + 0.3) * (ratio + 0.264) /
            ((er_eff - 0.258) * (ratio + 0.8))
        )

    def design(self, frequency=None, frequency_unit: str = "MHz",
               substrate_er: float | None = None,
               thickness: float | None = None,
               thickness_unit: str = "mm") -> PatchDesign:
        f_hz = self.validate("frequency", frequency, frequency_unit)
        er = self.validate("substrate_er", substrate_er)
        h = self.validate("thickness", thickness, thickness_unit)

        if er == 1.0:
            raise DomainError("input impedance is undefined for εr = 1",
                              field="substrate_er")

        er_eff = self._effective_er(er, h)
        width = C_0 / (2.0 * f_hz * math.sqrt(er_eff))
        dL = self._fringe_extension(er_eff, h, width)
        l_eff = C_0 / (2.0 * f_hz * math.sqrt(er_eff))
        length = l_eff - 2.0 * dL
        if length <= 0:
            raise DomainError("substrate too thick: fringing correction exceeds patch length",
                              field="thickness")

        impedance = 90.0 * er ** 2 / (er - 1.0) * (length / width) ** 2
        bandwidth = 3.77 * (er - 1.0) / er ** 2 * (h * 1000.0) * (width / length)
        directivity = 32400.0 / PATCH_BEAMWIDTH_DEG ** 2
        gain = 10.0 * math.log10(directivity * PATCH_EFFICIENCY)

        result = PatchDesign(
            frequency_hz=f_hz,
            substrate_er=er,
            thickness_m=h,
            effective_er=er_eff,
            width_m=width,
            length_m=length,
            effective_length_m=l_eff,
            fringe_extension_m=dL,
            input_impedance_ohm=impedance,
            bandwidth_percent=bandwidth,
            directivity=directivity,
            efficiency=PATCH_EFFICIENCY,
            gain_dbi=gain,
            ground_plane_m=max(width, length) + 6.0 * h,
            band=get_frequency_band(f_hz),
        )
        self._log_design(result)
        return result
