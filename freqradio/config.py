"""
Calculator defaults.

Nothing in the engine reads global state: callers that want different
defaults build a ``CalculatorDefaults`` and pass the values in explicitly.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from .errors import ValidationError

LOG_LEVEL_ENV = "FREQRADIO_LOG_LEVEL"


@dataclass(frozen=True)
class CalculatorDefaults:
    """Default inputs used when a caller leaves a field unset."""

    # Propagation in cable / antenna wire
    velocity_factor: float = 0.95            # wavelength calculator
    coax_velocity_factor: float = 0.66       # solid-PE coax

    # Element tip correction
    end_effect_percent: float = 5.0

    # Reference impedance
    z0: float = 50.0

    # Patch substrate (FR-4)
    substrate_er: float = 4.4
    substrate_thickness_mm: float = 1.6

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> CalculatorDefaults:
        """Build defaults from a plain dict (e.g. a saved preset), rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            if key not in known:
                raise ValidationError(key, "is not a known default")
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(key, f"must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValidationError(key, "must be finite")
            kwargs[key] = float(value)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


DEFAULTS = CalculatorDefaults()


def log_level_from_env(default: int = logging.WARNING) -> int:
    """Log level named by ``FREQRADIO_LOG_LEVEL``, or ``default`` when unset or invalid."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default
