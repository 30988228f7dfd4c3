"""
Free-space path loss.

FSPL [dB] = 32.44 + 20·log10(f_MHz) + 20·log10(d_km). The figure assumes
isotropic antennas and no ground reflection, absorption or obstruction.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..utils.constants import REFERENCE_TX_POWERS_W
from ..utils.rfmath import (
    free_space_path_loss, frequency_to_wavelength, fresnel_zone_radius,
    get_frequency_band,
)
from ..utils.units import FREQUENCY, LENGTH, to_si, watts_to_dbm
from ..utils.validation import require_positive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReceivedPower:
    tx_power_w: float
    rx_power_dbm: float


@dataclass(frozen=True)
class PathLoss:
    frequency_hz: float
    distance_m: float
    fspl_db: float
    wavelength_m: float
    far_field_distance_m: float        # 2λ, a rough lower bound
    fresnel_radius_m: float            # first zone at mid-path
    received_power: tuple[ReceivedPower, ...]
    field_strength_v_m: float          # 1 W isotropic
    field_strength_dbuv_m: float
    band: str


def free_space_loss(frequency: float, frequency_unit: str, distance: float,
                    distance_unit: str = "km") -> PathLoss:
    """FSPL plus received power for 1 W … 1 kW and the 1 W isotropic field."""
    f_hz = require_positive(to_si(frequency, frequency_unit, FREQUENCY, field="frequency"),
                            "frequency")
    d_m = require_positive(to_si(distance, distance_unit, LENGTH, field="distance"),
                           "distance")

    fspl = free_space_path_loss(f_hz, d_m)
    lam = frequency_to_wavelength(f_hz)
    field = math.sqrt(30.0 * 1.0) / d_m

    result = PathLoss(
        frequency_hz=f_hz,
        distance_m=d_m,
        fspl_db=fspl,
        wavelength_m=lam,
        far_field_distance_m=2.0 * lam,
        fresnel_radius_m=fresnel_zone_radius(f_hz, d_m / 2.0, d_m / 2.0, 1),
        received_power=tuple(ReceivedPower(p, watts_to_dbm(p) - fspl)
                             for p in REFERENCE_TX_POWERS_W),
        field_strength_v_m=field,
        field_strength_dbuv_m=20.0 * math.log10(field * 1e6),
        band=get_frequency_band(f_hz),
    )
    logger.debug("FSPL: %s", result)
    return result
