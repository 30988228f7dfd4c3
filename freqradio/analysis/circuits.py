"""
LC / RLC resonant circuit analysis.

Provides:
  - LC tank resonance
  - Single-component reactance at f, f/2 and 2f
  - Series / parallel RLC Q, bandwidth and damping
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from ..errors import DomainError
from ..utils.constants import C_0
from ..utils.rfmath import (
    capacitive_reactance, get_frequency_band, inductive_reactance,
    lc_resonant_frequency, series_q_factor,
)
from ..utils.units import CAPACITANCE, FREQUENCY, INDUCTANCE, RESISTANCE, to_si
from ..utils.validation import require_choice, require_non_negative, require_positive

logger = logging.getLogger(__name__)

# Companion parts used to quote a resonance for a lone component
COMPANION_CAPACITANCE_F = 100e-12
COMPANION_INDUCTANCE_H = 1e-6


class ComponentType(str, Enum):
    INDUCTOR = "inductor"
    CAPACITOR = "capacitor"


class Topology(str, Enum):
    SERIES = "series"
    PARALLEL = "parallel"


class DampingType(str, Enum):
    OVERDAMPED = "Overdamped"
    CRITICALLY_DAMPED = "Critically damped"
    UNDERDAMPED = "Underdamped"


# ─── LC resonance ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LCResonance:
    inductance_h: float
    capacitance_f: float
    resonant_frequency_hz: float
    inductive_reactance_ohm: float
    capacitive_reactance_ohm: float
    net_reactance_ohm: float
    characteristic_impedance_ohm: float    # √(L/C)
    wavelength_m: float
    period_s: float
    band: str


def lc_resonance(inductance: float, inductance_unit: str,
                 capacitance: float, capacitance_unit: str) -> LCResonance:
    """Resonant frequency of an LC tank and the (equal) reactances there."""
    L = require_positive(to_si(inductance, inductance_unit, INDUCTANCE, field="inductance"),
                         "inductance")
    C = require_positive(to_si(capacitance, capacitance_unit, CAPACITANCE, field="capacitance"),
                         "capacitance")
    f0 = lc_resonant_frequency(L, C)
    x_l = inductive_reactance(f0, L)
    x_c = capacitive_reactance(f0, C)

    result = LCResonance(
        inductance_h=L,
        capacitance_f=C,
        resonant_frequency_hz=f0,
        inductive_reactance_ohm=x_l,
        capacitive_reactance_ohm=x_c,
        net_reactance_ohm=x_l - x_c,
        characteristic_impedance_ohm=math.sqrt(L / C),
        wavelength_m=C_0 / f0,
        period_s=1.0 / f0,
        band=get_frequency_band(f0),
    )
    logger.debug("LC resonance: %s", result)
    return result


# ─── Reactance ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ReactancePoint:
    frequency_hz: float
    reactance_ohm: float


@dataclass(frozen=True)
class ReactanceResult:
    component: ComponentType
    value_si: float                  # H or F
    frequency_hz: float
    reactance_ohm: float
    impedance_magnitude_ohm: float
    phase_deg: float                 # +90 inductive, -90 capacitive
    comparison: tuple[ReactancePoint, ...]   # at f/2, f, 2f
    companion_resonance_hz: float    # with 100 pF (inductor) or 1 µH (capacitor)


def reactance(frequency: float, frequency_unit: str, component: ComponentType | str,
              value: float, unit: str) -> ReactanceResult:
    """Reactance of a single inductor or capacitor, with a f/2 and 2f comparison."""
    f_hz = require_positive(to_si(frequency, frequency_unit, FREQUENCY, field="frequency"),
                            "frequency")
    component = require_choice(component, ComponentType, "component")

    if component is ComponentType.INDUCTOR:
        value_si = require_positive(to_si(value, unit, INDUCTANCE, field="value"), "value")
        x_of = inductive_reactance
        phase = 90.0
        companion = lc_resonant_frequency(value_si, COMPANION_CAPACITANCE_F)
    else:
        value_si = require_positive(to_si(value, unit, CAPACITANCE, field="value"), "value")
        x_of = capacitive_reactance
        phase = -90.0
        companion = lc_resonant_frequency(COMPANION_INDUCTANCE_H, value_si)

    x = x_of(f_hz, value_si)
    result = ReactanceResult(
        component=component,
        value_si=value_si,
        frequency_hz=f_hz,
        reactance_ohm=x,
        impedance_magnitude_ohm=abs(x),
        phase_deg=phase,
        comparison=tuple(ReactancePoint(f, x_of(f, value_si)) for f in (f_hz * 0.5, f_hz, f_hz * 2.0)),
        companion_resonance_hz=companion,
    )
    logger.debug("Reactance: %s", result)
    return result


# ─── RLC ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RLCAnalysis:
    topology: Topology
    resistance_ohm: float
    inductance_h: float
    capacitance_f: float
    resonant_frequency_hz: float
    q: float
    bandwidth_hz: float
    lower_cutoff_hz: float
    upper_cutoff_hz: float
    characteristic_impedance_ohm: float
    impedance_at_resonance_ohm: float   # minimum (series) or maximum (parallel)
    damping_factor: float
    damping: DampingType
    time_constant_s: float              # 2L/R
    ringdown_time_s: float              # 2Q/ω0


def classify_damping(q: float) -> DampingType:
    """
    Damping class from Q.

    Critical damping is an exact equality test on Q == 0.5; with real-valued
    component inputs it is effectively never hit.
    """
    if q < 0.5:
        return DampingType.OVERDAMPED
    if q == 0.5:
        return DampingType.CRITICALLY_DAMPED
    return DampingType.UNDERDAMPED


def rlc_analysis(resistance: float, resistance_unit: str,
                 inductance: float, inductance_unit: str,
                 capacitance: float, capacitance_unit: str,
                 topology: Topology | str = Topology.SERIES) -> RLCAnalysis:
    """Q, bandwidth and damping of a series or parallel RLC circuit."""
    R = require_non_negative(to_si(resistance, resistance_unit, RESISTANCE, field="resistance"),
                             "resistance")
    L = require_positive(to_si(inductance, inductance_unit, INDUCTANCE, field="inductance"),
                         "inductance")
    C = require_positive(to_si(capacitance, capacitance_unit, CAPACITANCE, field="capacitance"),
                         "capacitance")
    topology = require_choice(topology, Topology, "topology")

    f0 = lc_resonant_frequency(L, C)
    if topology is Topology.SERIES:
        q = series_q_factor(R, L, C)
    else:
        if R == 0:
            raise DomainError("zero resistance has undefined Q", field="resistance")
        q = R / inductive_reactance(f0, L)

    bandwidth = f0 / q
    result = RLCAnalysis(
        topology=topology,
        resistance_ohm=R,
        inductance_h=L,
        capacitance_f=C,
        resonant_frequency_hz=f0,
        q=q,
        bandwidth_hz=bandwidth,
        lower_cutoff_hz=f0 - bandwidth / 2.0,
        upper_cutoff_hz=f0 + bandwidth / 2.0,
        characteristic_impedance_ohm=math.sqrt(L / C),
        impedance_at_resonance_ohm=R,
        damping_factor=1.0 / (2.0 * q),
        damping=classify_damping(q),
        time_constant_s=2.0 * L / R,
        ringdown_time_s=2.0 * q / (2.0 * math.pi * f0),
    )
    logger.debug("RLC %s: %s", topology.value, result)
    return result
