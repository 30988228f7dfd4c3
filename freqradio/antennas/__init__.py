"""
Antenna sizing calculators.

Each module implements one antenna family with:
  - Bounded, unit-aware input parameters
  - Closed-form dimensions
  - Rule-of-thumb performance estimates
"""

from .base import AntennaCalculator, DesignParameter
from .wavelength import WavelengthCalculator, ElementLengths
from .dipole import DipoleCalculator, DipoleDesign, DipoleType
from .yagi import YagiCalculator, YagiDesign
from .loop import LoopCalculator, LoopDesign, LoopShape, LoopType
from .patch import PatchCalculator, PatchDesign

# Registry of all calculators
CALCULATOR_REGISTRY: dict[str, type] = {
    "wavelength": WavelengthCalculator,
    "dipole": DipoleCalculator,
    "yagi": YagiCalculator,
    "loop": LoopCalculator,
    "patch": PatchCalculator,
}


def get_calculator(name: str) -> AntennaCalculator:
    """Instantiate a calculator by name."""
    key = name.lower().strip()
    if key not in CALCULATOR_REGISTRY:
        raise KeyError(
            f"Unknown calculator '{name}'. Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[key]()


def list_calculators() -> list[dict[str, str]]:
    """List all available calculators with descriptions."""
    result = []
    for key, cls in CALCULATOR_REGISTRY.items():
        inst = cls()
        result.append({
            "key": key,
            "name": inst.name,
            "description": inst.description,
            "num_parameters": len(inst.parameters),
        })
    return result
