"""
Stateless RF math: wavelength, reactance, resonance, reflection views,
path loss, Fresnel radius and band lookup.

Every function takes and returns SI values. Inputs are validated and a
``ValidationError`` naming the argument is raised when one is out of domain.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Integral

from ..errors import DomainError, ValidationError
from .constants import AMATEUR_BANDS, C_0, FREQUENCY_BANDS
from .units import FREQUENCY, LENGTH, to_si, from_si
from .validation import require_non_negative, require_number, require_positive, require_range


# ─── Frequency ↔ wavelength ─────────────────────────────────────────────────

def frequency_to_wavelength(frequency: float, unit: str = "Hz",
                            velocity_factor: float = 1.0) -> float:
    """Wavelength [m] of ``frequency`` (given in ``unit``) in a medium with velocity factor vf."""
    f_hz = require_positive(to_si(frequency, unit, FREQUENCY, field="frequency"), "frequency")
    vf = require_positive(velocity_factor, "velocity_factor", maximum=1.0)
    return C_0 * vf / f_hz


def wavelength_to_frequency(wavelength: float, unit: str = "m",
                            velocity_factor: float = 1.0,
                            frequency_unit: str = "Hz") -> float:
    """Inverse of ``frequency_to_wavelength``; result expressed in ``frequency_unit``."""
    lam = require_positive(to_si(wavelength, unit, LENGTH, field="wavelength"), "wavelength")
    vf = require_positive(velocity_factor, "velocity_factor", maximum=1.0)
    return from_si(C_0 * vf / lam, frequency_unit, FREQUENCY, field="frequency")


def electrical_length(frequency_hz: float, physical_length_m: float,
                      velocity_factor: float = 1.0) -> float:
    """Electrical length in degrees: (physical length / guided wavelength) · 360."""
    length = require_non_negative(physical_length_m, "physical_length")
    return length / frequency_to_wavelength(frequency_hz, velocity_factor=velocity_factor) * 360.0


# ─── Reactance and resonance ────────────────────────────────────────────────

def inductive_reactance(frequency_hz: float, inductance_h: float) -> float:
    """X_L = 2πfL [Ω]."""
    f = require_non_negative(frequency_hz, "frequency")
    L = require_non_negative(inductance_h, "inductance")
    return 2.0 * math.pi * f * L


def capacitive_reactance(frequency_hz: float, capacitance_f: float) -> float:
    """
    X_C = 1/(2πfC) [Ω].

    Returns ``math.inf`` when f·C is zero (DC, or no capacitance): the
    capacitor is an open circuit there.
    """
    f = require_non_negative(frequency_hz, "frequency")
    C = require_non_negative(capacitance_f, "capacitance")
    if f * C == 0:
        return math.inf
    return 1.0 / (2.0 * math.pi * f * C)


def lc_resonant_frequency(inductance_h: float, capacitance_f: float) -> float:
    """f0 = 1/(2π√(LC)) [Hz]."""
    L = require_positive(inductance_h, "inductance")
    C = require_positive(capacitance_f, "capacitance")
    return 1.0 / (2.0 * math.pi * math.sqrt(L * C))


def series_q_factor(resistance_ohm: float, inductance_h: float,
                    capacitance_f: float) -> float:
    """Unloaded Q of a series RLC: X_L(f0) / R."""
    R = require_non_negative(resistance_ohm, "resistance")
    f0 = lc_resonant_frequency(inductance_h, capacitance_f)
    if R == 0:
        raise DomainError("zero resistance has undefined Q", field="resistance")
    return inductive_reactance(f0, inductance_h) / R


# ─── Reflection views: Γ, VSWR, return loss, mismatch loss ──────────────────

def _require_gamma(gamma: float) -> float:
    return require_range(gamma, "gamma", 0.0, 1.0)


def gamma_to_vswr(gamma: float) -> float:
    """VSWR = (1+Γ)/(1−Γ); +inf for total reflection."""
    g = _require_gamma(gamma)
    if g == 1.0:
        return math.inf
    return (1.0 + g) / (1.0 - g)


def vswr_to_gamma(vswr: float) -> float:
    """Γ = (VSWR−1)/(VSWR+1); an infinite VSWR maps to 1."""
    if vswr == math.inf:
        return 1.0
    s = require_number(vswr, "vswr")
    if s < 1.0:
        raise ValidationError("vswr", f"must be >= 1, got {s:g}")
    return (s - 1.0) / (s + 1.0)


def gamma_to_return_loss(gamma: float) -> float:
    """RL = −20·log10(Γ) [dB]; +inf at a perfect match."""
    g = _require_gamma(gamma)
    if g == 0.0:
        return math.inf
    return -20.0 * math.log10(g)


def return_loss_to_gamma(return_loss_db: float) -> float:
    """Γ = 10^(−RL/20); an infinite return loss maps to 0."""
    if return_loss_db == math.inf:
        return 0.0
    rl = require_non_negative(return_loss_db, "return_loss")
    return 10.0 ** (-rl / 20.0)


def mismatch_loss(gamma: float) -> float:
    """ML = −10·log10(1−Γ²) [dB]; +inf for total reflection."""
    g = _require_gamma(gamma)
    if g == 1.0:
        return math.inf
    return -10.0 * math.log10(1.0 - g * g)


# ─── Propagation ────────────────────────────────────────────────────────────

def free_space_path_loss(frequency_hz: float, distance_m: float) -> float:
    """FSPL [dB] = 32.44 + 20·log10(f_MHz) + 20·log10(d_km)."""
    f = require_positive(frequency_hz, "frequency")
    d = require_positive(distance_m, "distance")
    return 32.44 + 20.0 * math.log10(f / 1e6) + 20.0 * math.log10(d / 1e3)


def fresnel_zone_radius(frequency_hz: float, d1_m: float, d2_m: float,
                        n: int = 1) -> float:
    """Radius [m] of the n-th Fresnel zone at distances d1, d2 from the two ends."""
    if isinstance(n, bool) or not isinstance(n, Integral) or n < 1:
        raise ValidationError("n", f"zone number must be an integer >= 1, got {n!r}")
    d1 = require_positive(d1_m, "d1")
    d2 = require_positive(d2_m, "d2")
    lam = frequency_to_wavelength(frequency_hz)
    return math.sqrt(n * lam * d1 * d2 / (d1 + d2))


# ─── Band lookup ────────────────────────────────────────────────────────────

def get_frequency_band(frequency_hz: float) -> str:
    """ITU band name for ``frequency_hz``, or "Unknown" outside every range."""
    f_mhz = frequency_hz / 1e6
    for name, low, high in FREQUENCY_BANDS:
        if low <= f_mhz < high:
            return name
    return "Unknown"


@dataclass(frozen=True)
class AmateurBandMatch:
    """Closest amateur band to a frequency."""
    key: str
    name: str
    freq_mhz: float
    difference_mhz: float


def get_nearest_amateur_band(frequency_hz: float) -> AmateurBandMatch:
    """Amateur band whose reference frequency is closest; ties go to the earlier band."""
    f_mhz = require_number(frequency_hz, "frequency") / 1e6
    best = None
    best_diff = math.inf
    for band in AMATEUR_BANDS:
        diff = abs(f_mhz - band.freq_mhz)
        if diff < best_diff:
            best, best_diff = band, diff
    return AmateurBandMatch(best.key, best.name, best.freq_mhz, best_diff)


def complex_impedance(real: float, imaginary: float = 0.0):
    """Build a ``ComplexImpedance`` from rectangular parts."""
    from ..analysis.impedance import ComplexImpedance
    return ComplexImpedance(require_number(real, "real"),
                            require_number(imaginary, "imaginary"))
