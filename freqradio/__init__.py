"""
FreqRadio — RF and antenna engineering calculators.

Closed-form, first-order formulas for antenna sizing, resonant circuits,
matching and propagation, built on a small unit-conversion core.
"""

__version__ = "0.1.0"
