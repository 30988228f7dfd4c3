"""Circuit, impedance and transmission line analysis."""

from .circuits import lc_resonance, reactance, rlc_analysis
from .impedance import ComplexImpedance, ImpedanceAnalyzer, ReflectionState
from .transmission import transmission_line, transmission_line_for_cable
