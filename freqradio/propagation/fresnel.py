"""
Fresnel zone clearance.

r_n = √(n·λ·d1·d2 / (d1+d2)). Keeping 60 % of the first zone clear of
obstructions gives near free-space loss; the Earth bulge d1·d2/(2R) must
be added to antenna heights on long paths.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..errors import DomainError, UnknownUnitError
from ..utils.constants import EARTH_RADIUS, FRESNEL_CLEARANCE_LOSS_DB
from ..utils.rfmath import frequency_to_wavelength, fresnel_zone_radius
from ..utils.units import FREQUENCY, LENGTH, to_si
from ..utils.validation import require_number, require_positive

logger = logging.getLogger(__name__)

PERCENT_UNIT = "percent"
ZONES = (1, 2, 3, 4, 5)


@dataclass(frozen=True)
class FresnelZoneRadius:
    zone: int
    radius_m: float


@dataclass(frozen=True)
class ClearanceImpact:
    clearance_fraction: float      # of the first zone radius
    additional_loss_db: float


@dataclass(frozen=True)
class FresnelAnalysis:
    frequency_hz: float
    distance_m: float
    d1_m: float
    d2_m: float
    wavelength_m: float
    zones: tuple[FresnelZoneRadius, ...]
    first_zone_radius_m: float
    clearance_60_m: float
    clearance_100_m: float
    earth_bulge_m: float
    recommended_height_m: float
    clearance_impact: tuple[ClearanceImpact, ...]


def fresnel_zone(frequency: float, frequency_unit: str, distance: float,
                 distance_unit: str = "km", position: Optional[float] = None,
                 position_unit: str = PERCENT_UNIT) -> FresnelAnalysis:
    """
    Fresnel zones 1–5 at a point on the path.

    Args:
        position: distance from the transmitter, in ``position_unit`` (a
            length unit or "percent" of the path); None means mid-path.

    Raises:
        DomainError: the point is not strictly between the two ends
    """
    f_hz = require_positive(to_si(frequency, frequency_unit, FREQUENCY, field="frequency"),
                            "frequency")
    total = require_positive(to_si(distance, distance_unit, LENGTH, field="distance"),
                             "distance")

    if position is None:
        d1 = total / 2.0
    elif position_unit == PERCENT_UNIT:
        d1 = total * require_number(position, "position") / 100.0
    elif position_unit in LENGTH:
        d1 = to_si(position, position_unit, LENGTH, field="position")
    else:
        raise UnknownUnitError(position_unit, "position", field="position_unit")

    d2 = total - d1
    if d1 <= 0 or d2 <= 0:
        raise DomainError("position must be between transmitter and receiver",
                          field="position")

    zones = tuple(FresnelZoneRadius(n, fresnel_zone_radius(f_hz, d1, d2, n)) for n in ZONES)
    r1 = zones[0].radius_m
    bulge = d1 * d2 / (2.0 * EARTH_RADIUS)

    result = FresnelAnalysis(
        frequency_hz=f_hz,
        distance_m=total,
        d1_m=d1,
        d2_m=d2,
        wavelength_m=frequency_to_wavelength(f_hz),
        zones=zones,
        first_zone_radius_m=r1,
        clearance_60_m=0.6 * r1,
        clearance_100_m=r1,
        earth_bulge_m=bulge,
        recommended_height_m=0.6 * r1 + bulge,
        clearance_impact=tuple(ClearanceImpact(c, loss) for c, loss in FRESNEL_CLEARANCE_LOSS_DB),
    )
    logger.debug("Fresnel zone: %s", result)
    return result
