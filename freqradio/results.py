"""
Tagged calculation outcomes.

Every dispatch through ``freqradio.calculators.evaluate`` produces exactly
one of these: a result, a benign "not applicable" answer, or a failure that
names its error kind and (when attributable) the offending field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Ok:
    """Successful calculation."""
    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class NotApplicable:
    """The calculation does not apply to these inputs (not an error)."""
    reason: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Calculation failed: ``kind`` is "validation", "domain" or "unknown_unit"."""
    kind: str
    message: str
    field: str | None = None

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Ok, NotApplicable, Failure]
