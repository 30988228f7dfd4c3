"""
Far-field power density and field strength from a transmitter.

  S = EIRP / (4πd²)        E = √(30·EIRP) / d        H = E / η₀
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..utils.constants import ETA_0
from ..utils.units import (
    LENGTH, convert_gain, dbm_to_watts, to_si, to_watts, watts_to_dbm,
)
from ..utils.validation import require_positive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldStrength:
    power_w: float
    gain_dbi: float
    distance_m: float
    eirp_w: float
    eirp_dbm: float
    power_density_w_m2: float
    power_density_dbm_m2: float
    e_field_v_m: float
    e_field_dbuv_m: float
    h_field_a_m: float


def field_strength(power: float, power_unit: str = "W", gain: float = 0.0,
                   gain_unit: str = "dBi", distance: float = 1.0,
                   distance_unit: str = "m") -> FieldStrength:
    """Power density and E/H field at ``distance`` from an antenna of ``gain``."""
    p_w = require_positive(to_watts(power, power_unit, field="power"), "power")
    g_dbi = convert_gain(gain, gain_unit, "dBi", field="gain")
    d_m = require_positive(to_si(distance, distance_unit, LENGTH, field="distance"),
                           "distance")

    # Logarithmic figures are summed in dB so extreme inputs stay finite.
    eirp_dbm = watts_to_dbm(p_w) + g_dbi
    eirp = dbm_to_watts(eirp_dbm, field="gain")
    spreading_db = 10.0 * math.log10(4.0 * math.pi) + 20.0 * math.log10(d_m)
    e_field = math.sqrt(30.0) * math.sqrt(eirp) / d_m

    result = FieldStrength(
        power_w=p_w,
        gain_dbi=g_dbi,
        distance_m=d_m,
        eirp_w=eirp,
        eirp_dbm=eirp_dbm,
        power_density_w_m2=eirp / (4.0 * math.pi) / d_m / d_m,
        power_density_dbm_m2=eirp_dbm - spreading_db,
        e_field_v_m=e_field,
        e_field_dbuv_m=10.0 * math.log10(30.0) + eirp_dbm - 30.0
                       - 20.0 * math.log10(d_m) + 120.0,
        h_field_a_m=e_field / ETA_0,
    )
    logger.debug("Field strength: %s", result)
    return result
