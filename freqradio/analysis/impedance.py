"""
Impedance analysis and matching network design.

Provides:
  - Complex impedance and reflection coefficient (Smith chart coordinates)
  - VSWR / return loss / mismatch loss from any one of four inputs
  - L-network matching synthesis between two resistances
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..errors import ValidationError
from ..results import NotApplicable
from ..utils.constants import Z0_DEFAULT
from ..utils.rfmath import (
    gamma_to_return_loss, gamma_to_vswr, mismatch_loss, return_loss_to_gamma,
    vswr_to_gamma,
)
from ..utils.units import FREQUENCY, to_si
from ..utils.validation import (
    require_choice, require_non_negative, require_number, require_positive,
    require_range,
)

logger = logging.getLogger(__name__)

MATCH_TOLERANCE_OHM = 0.1


# ═══════════════════════════════════════════════════════════════════════════════
# Value types
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ComplexImpedance:
    """Z = R + jX [Ω]."""
    real: float
    imaginary: float = 0.0

    @property
    def magnitude(self) -> float:
        return math.hypot(self.real, self.imaginary)

    @property
    def phase_deg(self) -> float:
        """Angle in (−180, 180]."""
        phase = math.degrees(math.atan2(self.imaginary, self.real))
        return 180.0 if phase == -180.0 else phase

    def as_complex(self) -> complex:
        return complex(self.real, self.imaginary)

    @classmethod
    def from_complex(cls, z: complex) -> ComplexImpedance:
        return cls(z.real, z.imag)


@dataclass(frozen=True)
class ReflectionState:
    """One mismatch seen four ways; Γ is the canonical value."""
    gamma: float
    vswr: float
    return_loss_db: float
    mismatch_loss_db: float

    @classmethod
    def from_gamma(cls, gamma: float) -> ReflectionState:
        return cls(
            gamma=gamma,
            vswr=gamma_to_vswr(gamma),
            return_loss_db=gamma_to_return_loss(gamma),
            mismatch_loss_db=mismatch_loss(gamma),
        )

    @classmethod
    def from_vswr(cls, vswr: float) -> ReflectionState:
        return cls.from_gamma(vswr_to_gamma(vswr))

    @classmethod
    def from_return_loss(cls, return_loss_db: float) -> ReflectionState:
        return cls.from_gamma(return_loss_to_gamma(return_loss_db))

    @classmethod
    def from_impedances(cls, z0: float, zl: float) -> ReflectionState:
        """Resistive load ``zl`` on a line of impedance ``z0``."""
        z0 = require_positive(z0, "z0")
        zl = require_non_negative(zl, "zl")
        return cls.from_gamma(abs((zl - z0) / (zl + z0)))


class VSWRMode(str, Enum):
    IMPEDANCES = "impedances"
    VSWR = "vswr"
    REFLECTION = "reflection"
    RETURN_LOSS = "return_loss"


class MatchQuality(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    ACCEPTABLE = "Acceptable"
    POOR = "Poor"


def match_quality(vswr: float) -> MatchQuality:
    if vswr <= 1.2:
        return MatchQuality.EXCELLENT
    if vswr <= 1.5:
        return MatchQuality.GOOD
    if vswr <= 2.0:
        return MatchQuality.ACCEPTABLE
    return MatchQuality.POOR


@dataclass(frozen=True)
class VSWRAnalysis:
    mode: VSWRMode
    z0_ohm: float
    gamma: float
    vswr: float
    return_loss_db: float
    mismatch_loss_db: float
    power_reflected_percent: float
    power_transmitted_percent: float
    z_max_ohm: float              # impedance seen at a voltage maximum
    z_min_ohm: float
    voltage_max: float            # relative to the incident wave
    voltage_min: float
    quality: MatchQuality

    @property
    def state(self) -> ReflectionState:
        return ReflectionState(self.gamma, self.vswr, self.return_loss_db,
                               self.mismatch_loss_db)


@dataclass(frozen=True)
class ComplexReflection:
    """Reflection of a complex load against a real reference impedance."""
    load: ComplexImpedance
    z0_ohm: float
    gamma_real: float
    gamma_imag: float
    gamma_magnitude: float
    gamma_phase_deg: float
    vswr: float
    return_loss_db: float
    mismatch_loss_db: float


@dataclass(frozen=True)
class MatchingElement:
    """One reactive part of an L-network."""
    kind: str               # "L" | "C"
    position: str           # "parallel" | "series"
    reactance_ohm: float    # magnitude
    value: float            # H or F

    def describe(self) -> str:
        if self.kind == "L":
            return f"{self.position} L = {self.value * 1e9:.2f} nH"
        return f"{self.position} C = {self.value * 1e12:.2f} pF"


@dataclass(frozen=True)
class LNetworkTopology:
    """Parallel element across the higher resistance, series element toward the lower."""
    parallel: MatchingElement
    series: MatchingElement
    notes: str = ""

    def describe(self) -> str:
        """Human-readable description."""
        return f"{self.parallel.describe()} → {self.series.describe()}"


@dataclass(frozen=True)
class MatchingNetwork:
    """A synthesized L-network with its two topology variants."""
    frequency_hz: float
    source_resistance_ohm: float
    load_resistance_ohm: float
    step_down: bool                  # source resistance above load
    q_required: float
    q: float
    bandwidth_hz: float
    parallel_reactance_ohm: float
    series_reactance_ohm: float
    topologies: tuple[LNetworkTopology, LNetworkTopology]


# ═══════════════════════════════════════════════════════════════════════════════
# Analyzer
# ═══════════════════════════════════════════════════════════════════════════════

class ImpedanceAnalyzer:
    """Reflection analysis and matching network synthesis against a reference Z0."""

    def __init__(self, z0: float = Z0_DEFAULT):
        self.z0 = require_positive(z0, "z0")

    # ─── Smith chart data ────────────────────────────────────────────────

    def to_smith(self, z: np.ndarray | complex) -> np.ndarray | complex:
        """Convert impedance to reflection coefficient (Smith chart coordinates)."""
        return (z - self.z0) / (z + self.z0)

    def from_smith(self, gamma: np.ndarray | complex) -> np.ndarray | complex:
        """Convert reflection coefficient to impedance."""
        return self.z0 * (1 + gamma) / (1 - gamma)

    def reflection(self, z: ComplexImpedance | complex) -> ComplexReflection:
        """Complex Γ of a passive load plus the scalar reflection views."""
        if not isinstance(z, ComplexImpedance):
            z = ComplexImpedance.from_complex(complex(z))
        r = require_non_negative(z.real, "real")
        x = require_number(z.imaginary, "imaginary")

        gamma = self.to_smith(complex(r, x))
        magnitude = min(abs(gamma), 1.0)
        state = ReflectionState.from_gamma(magnitude)
        result = ComplexReflection(
            load=z,
            z0_ohm=self.z0,
            gamma_real=gamma.real,
            gamma_imag=gamma.imag,
            gamma_magnitude=magnitude,
            gamma_phase_deg=math.degrees(math.atan2(gamma.imag, gamma.real)),
            vswr=state.vswr,
            return_loss_db=state.return_loss_db,
            mismatch_loss_db=state.mismatch_loss_db,
        )
        logger.debug("Reflection of %s: %s", z, result)
        return result

    # ─── VSWR ────────────────────────────────────────────────────────────

    def _state_for_mode(self, mode: VSWRMode, z0: float, zl, vswr, gamma,
                        return_loss) -> ReflectionState:
        if mode is VSWRMode.IMPEDANCES:
            return ReflectionState.from_impedances(z0, require_non_negative(zl, "zl"))
        if mode is VSWRMode.VSWR:
            s = require_number(vswr, "vswr")
            if s < 1.0:
                raise ValidationError("vswr", f"must be >= 1, got {s:g}")
            return ReflectionState.from_vswr(s)
        if mode is VSWRMode.REFLECTION:
            return ReflectionState.from_gamma(require_range(gamma, "gamma", 0.0, 1.0))
        return ReflectionState.from_return_loss(
            require_non_negative(return_loss, "return_loss"))

    def analyze_vswr(self, mode: VSWRMode | str = VSWRMode.IMPEDANCES, *,
                     z0: float | None = None, zl: float | None = None,
                     vswr: float | None = None, gamma: float | None = None,
                     return_loss: float | None = None) -> VSWRAnalysis:
        """
        Normalize one of four mutually exclusive inputs to Γ and derive the rest.

        Args:
            mode: which of zl / vswr / gamma / return_loss is given
            z0: reference impedance (defaults to the analyzer's Z0)
        """
        mode = require_choice(mode, VSWRMode, "mode")
        z0 = self.z0 if z0 is None else require_positive(z0, "z0")
        state = self._state_for_mode(mode, z0, zl, vswr, gamma, return_loss)
        g = state.gamma
        result = VSWRAnalysis(
            mode=mode,
            z0_ohm=z0,
            gamma=state.gamma,
            vswr=state.vswr,
            return_loss_db=state.return_loss_db,
            mismatch_loss_db=state.mismatch_loss_db,
            power_reflected_percent=g * g * 100.0,
            power_transmitted_percent=(1.0 - g * g) * 100.0,
            z_max_ohm=z0 * state.vswr,
            z_min_ohm=z0 / state.vswr,
            voltage_max=1.0 + g,
            voltage_min=1.0 - g,
            quality=match_quality(state.vswr),
        )
        logger.debug("VSWR analysis (%s): %s", mode.value, result)
        return result

    # ─── Matching Network Synthesis ──────────────────────────────────────

    def design_l_network(self, frequency: float, frequency_unit: str = "MHz",
                         source_resistance: float | None = None,
                         load_resistance: float | None = None,
                         target_q: float | None = None) -> MatchingNetwork | NotApplicable:
        """
        Synthesize an L-section between two resistances.

        Q_required = √(R_high/R_low − 1). A caller-supplied ``target_q`` may
        widen the network (lower bandwidth) but not go below Q_required.
        Always returns two variants: low-pass and high-pass.
        """
        f_hz = require_positive(to_si(frequency, frequency_unit, FREQUENCY, field="frequency"),
                                "frequency")
        r_s = require_positive(self.z0 if source_resistance is None else source_resistance,
                               "source_resistance")
        r_l = require_positive(load_resistance, "load_resistance")

        if abs(r_s - r_l) < MATCH_TOLERANCE_OHM:
            return NotApplicable("source and load are already matched: no matching network needed")

        q_req = math.sqrt(max(r_s, r_l) / min(r_s, r_l) - 1.0)
        if target_q is None:
            q = q_req
        else:
            q = require_positive(target_q, "target_q")
            if q < q_req:
                raise ValidationError("target_q", f"must be at least the required Q {q_req:.4g}")

        omega = 2.0 * math.pi * f_hz
        step_down = r_s > r_l
        if step_down:
            xp = r_s / q
            xs = q * r_l
        else:
            xs = q * r_s
            xp = r_l / q

        def element(kind: str, position: str, x: float) -> MatchingElement:
            value = x / omega if kind == "L" else 1.0 / (x * omega)
            return MatchingElement(kind, position, x, value)

        low_pass = LNetworkTopology(element("C", "parallel", xp), element("L", "series", xs),
                                    "Low-pass L-match (parallel C, series L)")
        high_pass = LNetworkTopology(element("L", "parallel", xp), element("C", "series", xs),
                                     "High-pass L-match (parallel L, series C)")
        topologies = (low_pass, high_pass) if step_down else (high_pass, low_pass)

        network = MatchingNetwork(
            frequency_hz=f_hz,
            source_resistance_ohm=r_s,
            load_resistance_ohm=r_l,
            step_down=step_down,
            q_required=q_req,
            q=q,
            bandwidth_hz=f_hz / q,
            parallel_reactance_ohm=xp,
            series_reactance_ohm=xs,
            topologies=topologies,
        )
        logger.debug("L-network %g Ω → %g Ω: Q=%.3f", r_s, r_l, q)
        return network
