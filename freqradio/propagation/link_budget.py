"""
Point-to-point link budget.

  EIRP   = P_tx[dBm] + G_tx − L_tx
  P_rx   = EIRP − FSPL − L_rx − L_other
  signal = P_rx + G_rx

The signal is compared against a fixed table of typical receiver
sensitivities to give a margin and a status per mode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..utils.constants import RECEIVER_SENSITIVITIES_DBM
from ..utils.rfmath import free_space_path_loss, get_frequency_band
from ..utils.units import (
    FREQUENCY, LENGTH, convert_power, db_to_linear, dbm_to_watts, to_si, to_watts,
)
from ..utils.validation import require_non_negative, require_number, require_positive

logger = logging.getLogger(__name__)

_LOG_POWER_UNITS = ("dBm", "dBW")


class MarginStatus(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    MARGINAL = "Marginal"
    INSUFFICIENT = "Insufficient"


def margin_status(margin_db: float) -> MarginStatus:
    if margin_db > 10:
        return MarginStatus.EXCELLENT
    if margin_db > 6:
        return MarginStatus.GOOD
    if margin_db > 3:
        return MarginStatus.FAIR
    if margin_db > 0:
        return MarginStatus.MARGINAL
    return MarginStatus.INSUFFICIENT


@dataclass(frozen=True)
class LinkMargin:
    mode: str
    sensitivity_dbm: float
    margin_db: float
    status: MarginStatus


@dataclass(frozen=True)
class LinkBudget:
    frequency_hz: float
    distance_m: float
    tx_power_dbm: float
    tx_power_w: float
    fspl_db: float
    eirp_dbm: float
    eirp_w: float
    total_path_loss_db: float
    rx_power_dbm: float
    rx_power_w: float
    signal_dbm: float
    signal_w: float
    path_efficiency_percent: float
    margins: tuple[LinkMargin, ...]
    band: str


def link_budget(frequency: float, frequency_unit: str, distance: float,
                distance_unit: str, tx_power: float, tx_power_unit: str = "W",
                tx_gain_dbi: float = 0.0, rx_gain_dbi: float = 0.0,
                tx_loss_db: float = 0.0, rx_loss_db: float = 0.0,
                other_loss_db: float = 0.0) -> LinkBudget:
    """Received signal and margins for a free-space link."""
    f_hz = require_positive(to_si(frequency, frequency_unit, FREQUENCY, field="frequency"),
                            "frequency")
    d_m = require_positive(to_si(distance, distance_unit, LENGTH, field="distance"),
                           "distance")
    if tx_power_unit in _LOG_POWER_UNITS:
        tx_power = require_number(tx_power, "tx_power")
    else:
        tx_power = require_positive(tx_power, "tx_power")
    tx_w = to_watts(tx_power, tx_power_unit, field="tx_power")
    tx_dbm = convert_power(tx_power, tx_power_unit, "dBm", field="tx_power")

    g_tx = require_number(tx_gain_dbi, "tx_gain_dbi")
    g_rx = require_number(rx_gain_dbi, "rx_gain_dbi")
    l_tx = require_non_negative(tx_loss_db, "tx_loss_db")
    l_rx = require_non_negative(rx_loss_db, "rx_loss_db")
    l_other = require_non_negative(other_loss_db, "other_loss_db")

    fspl = free_space_path_loss(f_hz, d_m)
    eirp = tx_dbm + g_tx - l_tx
    rx = eirp - fspl - l_rx - l_other
    signal = rx + g_rx
    rx_w = dbm_to_watts(rx, field="tx_gain_dbi")

    result = LinkBudget(
        frequency_hz=f_hz,
        distance_m=d_m,
        tx_power_dbm=tx_dbm,
        tx_power_w=tx_w,
        fspl_db=fspl,
        eirp_dbm=eirp,
        eirp_w=dbm_to_watts(eirp, field="tx_gain_dbi"),
        total_path_loss_db=fspl + l_tx + l_rx + l_other,
        rx_power_dbm=rx,
        rx_power_w=rx_w,
        signal_dbm=signal,
        signal_w=dbm_to_watts(signal, field="rx_gain_dbi"),
        path_efficiency_percent=db_to_linear(rx - tx_dbm, field="tx_gain_dbi") * 100.0,
        margins=tuple(
            LinkMargin(mode, sens, signal - sens, margin_status(signal - sens))
            for mode, sens in RECEIVER_SENSITIVITIES_DBM
        ),
        band=get_frequency_band(f_hz),
    )
    logger.debug("Link budget: %s", result)
    return result
