"""
Chart data generation.

Each helper returns plain numpy arrays (x, y) ready for any plotting
front end; nothing here draws.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from .analysis.circuits import ComponentType
from .utils.constants import Z0_DEFAULT
from .utils.rfmath import free_space_path_loss
from .utils.validation import require_choice, require_positive

PATTERN_STEP_DEG = 2
PATTERN_FLOOR = 0.001          # −30 dB


class PatternType(str, Enum):
    DIPOLE = "dipole"
    MONOPOLE = "monopole"
    LOOP = "loop"
    YAGI = "yagi"
    ISOTROPIC = "isotropic"


@dataclass(frozen=True)
class ChartData:
    x: np.ndarray
    y: np.ndarray
    x_label: str
    y_label: str

    def pairs(self) -> list[tuple[float, float]]:
        return list(zip(self.x.tolist(), self.y.tolist()))


def vswr_vs_frequency(center_hz: float, inductance_h: float, capacitance_f: float,
                      resistance_ohm: float, steps: int = 100, span: float = 0.5,
                      z0: float = Z0_DEFAULT) -> ChartData:
    """
    VSWR of a series RLC against a real Z0 over center·(1 ± span).

    Only |Z| is compared with Z0, so this is a magnitude-only approximation.
    """
    f0 = require_positive(center_hz, "frequency")
    L = require_positive(inductance_h, "inductance")
    C = require_positive(capacitance_f, "capacitance")
    R = require_positive(resistance_ohm, "resistance")

    f = f0 * (1.0 - span + 2.0 * span * np.arange(steps) / (steps - 1))
    omega = 2.0 * np.pi * f
    x = omega * L - 1.0 / (omega * C)
    z = np.sqrt(R ** 2 + x ** 2)
    gamma = np.abs((z - z0) / (z + z0))
    with np.errstate(divide="ignore"):
        vswr = np.where(gamma < 1.0, (1.0 + gamma) / (1.0 - gamma), np.inf)
    return ChartData(f, vswr, "Frequency (Hz)", "VSWR")


def reactance_vs_frequency(component: ComponentType | str, value_si: float,
                           center_hz: float, steps: int = 100) -> ChartData:
    """Reactance of one L or C from 0.1·f to 2.1·f."""
    component = require_choice(component, ComponentType, "component")
    value = require_positive(value_si, "value")
    f0 = require_positive(center_hz, "frequency")

    f = f0 * (0.1 + 2.0 * np.arange(steps) / (steps - 1))
    if component is ComponentType.INDUCTOR:
        x = 2.0 * np.pi * f * value
    else:
        x = 1.0 / (2.0 * np.pi * f * value)
    return ChartData(f, x, "Frequency (Hz)", "Reactance (Ω)")


def path_loss_vs_distance(frequency_hz: float, distances_m: Sequence[float]) -> ChartData:
    """FSPL at each distance; x is returned in km."""
    d = np.asarray(distances_m, dtype=float)
    loss = np.array([free_space_path_loss(frequency_hz, float(di)) for di in d])
    return ChartData(d / 1e3, loss, "Distance (km)", "Path loss (dB)")


def radiation_pattern(pattern: PatternType | str = PatternType.ISOTROPIC,
                      gain: float = 10.0, front_to_back_db: float = 20.0) -> ChartData:
    """
    Idealized 2-D pattern in dB, 0–360° in 2° steps, floored at −30 dB.

    ``gain`` and ``front_to_back_db`` only shape the Yagi pattern (0° is forward).
    """
    pattern = require_choice(pattern, PatternType, "pattern")
    theta = np.arange(0, 361, PATTERN_STEP_DEG, dtype=float)
    rad = np.radians(theta)

    if pattern in (PatternType.DIPOLE, PatternType.LOOP):
        g = np.sin(rad) ** 2
    elif pattern is PatternType.MONOPOLE:
        g = np.where(theta <= 180, np.sin(rad) ** 2, 0.0)
    elif pattern is PatternType.YAGI:
        front = (theta <= 90) | (theta >= 270)
        g = np.where(front, np.cos(rad) * gain, gain / 10.0 ** (front_to_back_db / 10.0))
        g = np.maximum(g, 0.0)
    else:
        g = np.ones_like(theta)

    return ChartData(theta, 10.0 * np.log10(np.maximum(PATTERN_FLOOR, g)),
                     "Angle (°)", "Relative gain (dB)")
