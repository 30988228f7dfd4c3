"""
Exception hierarchy for the calculator engine.

Calculators raise one of these; ``freqradio.calculators.evaluate`` turns
them into ``Failure`` outcomes for callers that prefer values to exceptions.
"""

from __future__ import annotations


class FreqRadioError(Exception):
    """Base exception for FreqRadio errors."""
    kind = "error"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(FreqRadioError):
    """Raised when a single input field is missing, non-finite or out of range."""
    kind = "validation"

    def __init__(self, field: str, message: str):
        super().__init__(message, field=field)

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class DomainError(FreqRadioError):
    """Raised when valid inputs jointly have no defined result."""
    kind = "domain"


class UnknownUnitError(FreqRadioError, KeyError):
    """Raised when a unit selector is not present in its conversion table."""
    kind = "unknown_unit"

    def __init__(self, unit: str, table: str, field: str | None = None):
        super().__init__(f"Unknown {table} unit '{unit}'", field=field)
        self.unit = unit
        self.table = table

    def __str__(self) -> str:
        return self.message
