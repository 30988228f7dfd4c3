"""
Typed calculator dispatch.

Each calculator has a frozen input dataclass. ``evaluate`` resolves the
handler from the input's type and always returns one tagged outcome:
``Ok``, ``NotApplicable`` or ``Failure``. ``sweep`` re-runs a request over
a range of one field, which is how chart data is produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Callable, ClassVar, Iterable, Optional

import numpy as np

from .analysis.circuits import lc_resonance, reactance, rlc_analysis
from .analysis.impedance import ImpedanceAnalyzer
from .analysis.transmission import transmission_line, transmission_line_for_cable
from .antennas import (
    DipoleCalculator, LoopCalculator, PatchCalculator, WavelengthCalculator,
    YagiCalculator,
)
from .config import DEFAULTS, CalculatorDefaults
from .errors import DomainError, FreqRadioError
from .propagation import field_strength, free_space_loss, fresnel_zone, link_budget
from .results import Failure, NotApplicable, Ok, Outcome
from .utils import units
from .utils.validation import require_choice

logger = logging.getLogger(__name__)


class CalculatorKind(str, Enum):
    WAVELENGTH = "wavelength"
    DIPOLE = "dipole"
    YAGI = "yagi"
    LOOP = "loop"
    PATCH = "patch"
    LC_RESONANCE = "lc_resonance"
    REACTANCE = "reactance"
    RLC = "rlc"
    VSWR = "vswr"
    TRANSMISSION_LINE = "transmission_line"
    MATCHING = "matching"
    FSPL = "fspl"
    LINK_BUDGET = "link_budget"
    FRESNEL = "fresnel"
    FIELD_STRENGTH = "field_strength"
    CONVERSION = "conversion"


class Quantity(str, Enum):
    FREQUENCY = "frequency"
    LENGTH = "length"
    INDUCTANCE = "inductance"
    CAPACITANCE = "capacitance"
    RESISTANCE = "resistance"
    POWER = "power"
    GAIN = "gain"
    FIELD_STRENGTH = "field_strength"
    TEMPERATURE = "temperature"


# ═══════════════════════════════════════════════════════════════════════════════
# Inputs
# ═══════════════════════════════════════════════════════════════════════════════
# Fields left as None fall back to CalculatorDefaults.

@dataclass(frozen=True)
class WavelengthInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.WAVELENGTH
    frequency: float
    frequency_unit: str = "MHz"
    velocity_factor: Optional[float] = None
    end_effect_percent: Optional[float] = None


@dataclass(frozen=True)
class DipoleInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.DIPOLE
    frequency: float
    frequency_unit: str = "MHz"
    antenna_type: str = "halfwave"
    wire_diameter: Optional[float] = None
    wire_diameter_unit: str = "mm"


@dataclass(frozen=True)
class YagiInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.YAGI
    frequency: float
    frequency_unit: str = "MHz"
    elements: int = 5
    boom_length: Optional[float] = None
    boom_length_unit: str = "m"


@dataclass(frozen=True)
class LoopInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.LOOP
    frequency: float
    frequency_unit: str = "MHz"
    loop_type: str = "small"
    shape: str = "circular"


@dataclass(frozen=True)
class PatchInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.PATCH
    frequency: float
    frequency_unit: str = "MHz"
    substrate_er: Optional[float] = None
    thickness: Optional[float] = None
    thickness_unit: str = "mm"


@dataclass(frozen=True)
class LCInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.LC_RESONANCE
    inductance: float
    capacitance: float
    inductance_unit: str = "uH"
    capacitance_unit: str = "pF"


@dataclass(frozen=True)
class ReactanceInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.REACTANCE
    frequency: float
    value: float
    component: str = "inductor"
    frequency_unit: str = "MHz"
    unit: str = "uH"


@dataclass(frozen=True)
class RLCInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.RLC
    resistance: float
    inductance: float
    capacitance: float
    topology: str = "series"
    resistance_unit: str = "ohm"
    inductance_unit: str = "uH"
    capacitance_unit: str = "pF"


@dataclass(frozen=True)
class VSWRInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.VSWR
    mode: str = "impedances"
    z0: Optional[float] = None
    zl: Optional[float] = None
    vswr: Optional[float] = None
    gamma: Optional[float] = None
    return_loss: Optional[float] = None


@dataclass(frozen=True)
class TransmissionLineInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.TRANSMISSION_LINE
    frequency: float
    length: float
    frequency_unit: str = "MHz"
    length_unit: str = "m"
    velocity_factor: Optional[float] = None
    loss_db_per_100m: float = 0.0
    cable: Optional[str] = None        # overrides velocity factor and loss


@dataclass(frozen=True)
class MatchingInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.MATCHING
    frequency: float
    load_resistance: float
    source_resistance: Optional[float] = None
    frequency_unit: str = "MHz"
    target_q: Optional[float] = None


@dataclass(frozen=True)
class FSPLInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.FSPL
    frequency: float
    distance: float
    frequency_unit: str = "MHz"
    distance_unit: str = "km"


@dataclass(frozen=True)
class LinkBudgetInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.LINK_BUDGET
    frequency: float
    distance: float
    tx_power: float
    frequency_unit: str = "MHz"
    distance_unit: str = "km"
    tx_power_unit: str = "W"
    tx_gain_dbi: float = 0.0
    rx_gain_dbi: float = 0.0
    tx_loss_db: float = 0.0
    rx_loss_db: float = 0.0
    other_loss_db: float = 0.0


@dataclass(frozen=True)
class FresnelInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.FRESNEL
    frequency: float
    distance: float
    frequency_unit: str = "MHz"
    distance_unit: str = "km"
    position: Optional[float] = None
    position_unit: str = "percent"


@dataclass(frozen=True)
class FieldStrengthInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.FIELD_STRENGTH
    power: float
    distance: float
    power_unit: str = "W"
    gain: float = 0.0
    gain_unit: str = "dBi"
    distance_unit: str = "m"


@dataclass(frozen=True)
class ConversionInput:
    kind: ClassVar[CalculatorKind] = CalculatorKind.CONVERSION
    quantity: str
    value: float
    from_unit: str
    to_unit: str


# ═══════════════════════════════════════════════════════════════════════════════
# Handlers
# ═══════════════════════════════════════════════════════════════════════════════

Handler = Callable[[Any, CalculatorDefaults], Any]
_HANDLERS: dict[type, Handler] = {}


def _handles(input_type: type) -> Callable[[Handler], Handler]:
    def register(fn: Handler) -> Handler:
        _HANDLERS[input_type] = fn
        return fn
    return register


def _or(value, default):
    return default if value is None else value


@_handles(WavelengthInput)
def _wavelength(req: WavelengthInput, d: CalculatorDefaults):
    return WavelengthCalculator().design(
        req.frequency, req.frequency_unit,
        velocity_factor=_or(req.velocity_factor, d.velocity_factor),
        end_effect_percent=_or(req.end_effect_percent, d.end_effect_percent),
    )


@_handles(DipoleInput)
def _dipole(req: DipoleInput, d: CalculatorDefaults):
    return DipoleCalculator().design(
        req.frequency, req.frequency_unit, antenna_type=req.antenna_type,
        wire_diameter=req.wire_diameter, wire_diameter_unit=req.wire_diameter_unit,
    )


@_handles(YagiInput)
def _yagi(req: YagiInput, d: CalculatorDefaults):
    return YagiCalculator().design(
        req.frequency, req.frequency_unit, elements=req.elements,
        boom_length=req.boom_length, boom_length_unit=req.boom_length_unit,
    )


@_handles(LoopInput)
def _loop(req: LoopInput, d: CalculatorDefaults):
    return LoopCalculator().design(
        req.frequency, req.frequency_unit, loop_type=req.loop_type, shape=req.shape,
    )


@_handles(PatchInput)
def _patch(req: PatchInput, d: CalculatorDefaults):
    if req.thickness is None:
        thickness, thickness_unit = d.substrate_thickness_mm, "mm"
    else:
        thickness, thickness_unit = req.thickness, req.thickness_unit
    return PatchCalculator().design(
        req.frequency, req.frequency_unit,
        substrate_er=_or(req.substrate_er, d.substrate_er),
        thickness=thickness, thickness_unit=thickness_unit,
    )


@_handles(LCInput)
def _lc(req: LCInput, d: CalculatorDefaults):
    return lc_resonance(req.inductance, req.inductance_unit,
                        req.capacitance, req.capacitance_unit)


@_handles(ReactanceInput)
def _reactance(req: ReactanceInput, d: CalculatorDefaults):
    return reactance(req.frequency, req.frequency_unit, req.component, req.value, req.unit)


@_handles(RLCInput)
def _rlc(req: RLCInput, d: CalculatorDefaults):
    return rlc_analysis(req.resistance, req.resistance_unit,
                        req.inductance, req.inductance_unit,
                        req.capacitance, req.capacitance_unit,
                        topology=req.topology)


@_handles(VSWRInput)
def _vswr(req: VSWRInput, d: CalculatorDefaults):
    return ImpedanceAnalyzer(d.z0).analyze_vswr(
        req.mode, z0=req.z0, zl=req.zl, vswr=req.vswr, gamma=req.gamma,
        return_loss=req.return_loss,
    )


@_handles(TransmissionLineInput)
def _transmission_line(req: TransmissionLineInput, d: CalculatorDefaults):
    if req.cable is not None:
        return transmission_line_for_cable(req.frequency, req.frequency_unit,
                                           req.length, req.length_unit, cable=req.cable)
    return transmission_line(
        req.frequency, req.frequency_unit, req.length, req.length_unit,
        velocity_factor=_or(req.velocity_factor, d.coax_velocity_factor),
        loss_db_per_100m=req.loss_db_per_100m,
    )


@_handles(MatchingInput)
def _matching(req: MatchingInput, d: CalculatorDefaults):
    return ImpedanceAnalyzer(d.z0).design_l_network(
        req.frequency, req.frequency_unit,
        source_resistance=req.source_resistance,
        load_resistance=req.load_resistance,
        target_q=req.target_q,
    )


@_handles(FSPLInput)
def _fspl(req: FSPLInput, d: CalculatorDefaults):
    return free_space_loss(req.frequency, req.frequency_unit, req.distance, req.distance_unit)


@_handles(LinkBudgetInput)
def _link_budget(req: LinkBudgetInput, d: CalculatorDefaults):
    return link_budget(
        req.frequency, req.frequency_unit, req.distance, req.distance_unit,
        req.tx_power, req.tx_power_unit,
        tx_gain_dbi=req.tx_gain_dbi, rx_gain_dbi=req.rx_gain_dbi,
        tx_loss_db=req.tx_loss_db, rx_loss_db=req.rx_loss_db,
        other_loss_db=req.other_loss_db,
    )


@_handles(FresnelInput)
def _fresnel(req: FresnelInput, d: CalculatorDefaults):
    return fresnel_zone(req.frequency, req.frequency_unit, req.distance, req.distance_unit,
                        position=req.position, position_unit=req.position_unit)


@_handles(FieldStrengthInput)
def _field_strength(req: FieldStrengthInput, d: CalculatorDefaults):
    return field_strength(req.power, req.power_unit, req.gain, req.gain_unit,
                          req.distance, req.distance_unit)


_LINEAR_TABLES = {
    Quantity.FREQUENCY: units.FREQUENCY,
    Quantity.LENGTH: units.LENGTH,
    Quantity.INDUCTANCE: units.INDUCTANCE,
    Quantity.CAPACITANCE: units.CAPACITANCE,
    Quantity.RESISTANCE: units.RESISTANCE,
}

_SPECIAL_CONVERSIONS = {
    Quantity.POWER: units.convert_power,
    Quantity.GAIN: units.convert_gain,
    Quantity.FIELD_STRENGTH: units.convert_field_strength,
    Quantity.TEMPERATURE: units.convert_temperature,
}


@_handles(ConversionInput)
def _conversion(req: ConversionInput, d: CalculatorDefaults):
    quantity = require_choice(req.quantity, Quantity, "quantity")
    if quantity in _LINEAR_TABLES:
        return units.convert_linear(req.value, req.from_unit, req.to_unit,
                                    _LINEAR_TABLES[quantity])
    return _SPECIAL_CONVERSIONS[quantity](req.value, req.from_unit, req.to_unit)


# ═══════════════════════════════════════════════════════════════════════════════
# Dispatch
# ═══════════════════════════════════════════════════════════════════════════════

def evaluate(request, defaults: CalculatorDefaults = DEFAULTS) -> Outcome:
    """
    Run the calculator for ``request``.

    Never raises for validation, domain or unit errors; those come back as
    a ``Failure``, as does float overflow on extreme inputs (kind "domain").
    Passing an object that is not a calculator input is a
    programming error and raises ``TypeError``.
    """
    try:
        handler = _HANDLERS[type(request)]
    except KeyError:
        raise TypeError(f"No calculator for {type(request).__name__}") from None

    try:
        value = handler(request, defaults)
    except FreqRadioError as e:
        logger.info("%s failed (%s): %s", request.kind.value, e.kind, e)
        return Failure(kind=e.kind, message=e.message, field=e.field)
    except ArithmeticError as e:
        # Float overflow or underflow on extreme but finite inputs.
        logger.warning("%s arithmetic failure: %s", request.kind.value, e)
        return Failure(kind=DomainError.kind,
                       message=f"result is not representable ({e})")

    if isinstance(value, NotApplicable):
        logger.info("%s not applicable: %s", request.kind.value, value.reason)
        return value
    return Ok(value)


def input_types() -> dict[CalculatorKind, type]:
    """Input dataclass for every calculator kind."""
    return {t.kind: t for t in _HANDLERS}


# ─── Sweep ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SweepResult:
    """One output swept over one input; failed points are NaN in ``y``."""
    field: str
    output: str
    x: np.ndarray
    y: np.ndarray
    outcomes: tuple[Outcome, ...]

    @property
    def failures(self) -> int:
        return sum(1 for o in self.outcomes if not isinstance(o, Ok))

    def pairs(self) -> list[tuple[float, float]]:
        return list(zip(self.x.tolist(), self.y.tolist()))


def sweep(request, field: str, values: Iterable[float], output: str,
          defaults: CalculatorDefaults = DEFAULTS) -> SweepResult:
    """
    Evaluate ``request`` once per value of ``field`` and collect ``output``.

    Args:
        field: name of a numeric field of the input dataclass
        values: the x values
        output: numeric attribute of the result to plot
    """
    names = {f.name for f in fields(request)}
    if field not in names:
        raise ValueError(f"{type(request).__name__} has no field '{field}'")

    x = np.asarray(list(values), dtype=float)
    y = np.full(x.shape, np.nan)
    outcomes = []
    for i, value in enumerate(x):
        outcome = evaluate(replace(request, **{field: float(value)}), defaults)
        outcomes.append(outcome)
        if isinstance(outcome, Ok):
            y[i] = float(getattr(outcome.value, output))

    result = SweepResult(field, output, x, y, tuple(outcomes))
    if result.failures:
        logger.info("Sweep of %s over %s: %d of %d points failed",
                    output, field, result.failures, len(x))
    return result
