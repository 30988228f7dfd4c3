"""
Base classes for antenna sizing calculators.

Every antenna family (dipole, Yagi, loop, patch, ...) inherits from
AntennaCalculator. The calculator defines:
  - Named parameters with bounds and an optional unit table
  - A ``design`` method that validates inputs, converts them to SI and
    returns a frozen design record
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import ValidationError
from ..utils.units import FREQUENCY, UnitTable, to_si
from ..utils.validation import require_number

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Design Parameter
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DesignParameter:
    """A single numeric design input with bounds (in SI) and metadata."""
    name: str
    min_val: float
    max_val: float
    default: Optional[float] = None     # None = required
    unit: str = ""                      # default input unit
    description: str = ""
    is_integer: bool = False
    table: Optional[UnitTable] = None   # unit table for ``unit``, if any
    min_inclusive: bool = True
    max_inclusive: bool = True

    def validate(self, value: Any, unit: str | None = None) -> float:
        """
        Check ``value`` (given in ``unit``) and return it in SI.

        Unlike a clamp, out-of-bounds values are rejected with a
        ``ValidationError`` naming this parameter. A defaulted value is
        always read in the parameter's own ``unit``.
        """
        if value is None:
            value, unit = self.default, None
        value = require_number(value, self.name)
        if self.is_integer and value != int(value):
            raise ValidationError(self.name, f"must be a whole number, got {value:g}")
        if self.table is not None:
            value = to_si(value, unit or self.unit, self.table, field=self.name)

        too_low = value < self.min_val if self.min_inclusive else value <= self.min_val
        too_high = value > self.max_val if self.max_inclusive else value >= self.max_val
        if too_low or too_high:
            raise ValidationError(self.name, f"must be in {self.describe_bounds()}, got {value:g}")
        return int(value) if self.is_integer else value

    def describe_bounds(self) -> str:
        low = "[" if self.min_inclusive else "("
        high = "]" if self.max_inclusive else ")"
        top = "inf" if math.isinf(self.max_val) else f"{self.max_val:g}"
        return f"{low}{self.min_val:g}, {top}{high}"


def frequency_parameter(description: str = "Operating frequency") -> DesignParameter:
    """Required, strictly positive frequency (default input unit MHz)."""
    return DesignParameter("frequency", 0.0, math.inf, None, "MHz", description,
                           table=FREQUENCY, min_inclusive=False)


# ═══════════════════════════════════════════════════════════════════════════════
# Abstract Antenna Calculator
# ═══════════════════════════════════════════════════════════════════════════════

class AntennaCalculator(ABC):
    """
    Abstract base for all antenna sizing calculators.

    Subclasses must implement:
      - name / description
      - parameters: list of DesignParameter
      - design(**inputs): validated SI inputs → frozen design record
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable calculator name."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        ...

    @property
    @abstractmethod
    def parameters(self) -> list[DesignParameter]:
        """List of numeric design parameters with bounds."""
        ...

    @abstractmethod
    def design(self, **inputs):
        """
        Size the antenna.

        Raises:
            ValidationError: an input is missing, non-finite or out of bounds
            DomainError: inputs are valid but jointly have no defined result
            UnknownUnitError: a unit selector is not in its table
        """
        ...

    # ─── Convenience methods ─────────────────────────────────────────────────

    def get_parameter(self, name: str) -> DesignParameter:
        for p in self.parameters:
            if p.name == name:
                return p
        raise KeyError(f"{self.name} has no parameter '{name}'")

    def get_default_params(self) -> dict[str, Optional[float]]:
        """Return default parameter values (None for required ones)."""
        return {p.name: p.default for p in self.parameters}

    def get_bounds(self) -> list[tuple[float, float]]:
        """Return parameter bounds as list of (min, max) tuples."""
        return [(p.min_val, p.max_val) for p in self.parameters]

    def get_param_names(self) -> list[str]:
        """Return parameter names in order."""
        return [p.name for p in self.parameters]

    def validate(self, name: str, value: Any, unit: str | None = None) -> float:
        """Validate one named input and return it in SI."""
        return self.get_parameter(name).validate(value, unit)

    def _log_design(self, design) -> None:
        logger.debug("%s design: %s", self.name, design)
