#!/usr/bin/env python3
"""
FreqRadio — RF and antenna engineering calculators.

Usage:
    python app.py wavelength 14.2           # Element lengths at 14.2 MHz
    python app.py dipole 14.2 --type halfwave
    python app.py vswr --zl 75              # VSWR of 75 Ω on 50 Ω
    python app.py match 14.2 --rl 200       # L-network 50 → 200 Ω
    python app.py convert power 100 W dBm   # Unit conversion
    python app.py list                      # Available antenna calculators
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from dataclasses import fields, is_dataclass
from enum import Enum

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from freqradio import calculators as calc
from freqradio.antennas import list_calculators
from freqradio.config import log_level_from_env
from freqradio.errors import FreqRadioError
from freqradio.results import NotApplicable, Ok
from freqradio.utils.logging_config import setup_logging
from freqradio.utils.rfmath import get_frequency_band, get_nearest_amateur_band
from freqradio.utils.units import FREQUENCY, to_si

logger = logging.getLogger("freqradio.cli")

EXIT_OK = 0
EXIT_FAILURE = 2


# ─── Rendering ──────────────────────────────────────────────────────────────

def _format(value) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"
        return f"{value:.6g}"
    return str(value)


def _render(console: Console, title: str, value) -> None:
    """Print a result dataclass as a two-column table; nested records get their own tables."""
    if not is_dataclass(value):
        console.print(f"[bold]{title}:[/bold] [green]{_format(value)}[/green]")
        return

    table = Table(title=title)
    table.add_column("Quantity", style="cyan")
    table.add_column("Value", style="green")
    nested = []
    for f in fields(value):
        v = getattr(value, f.name)
        if v is None:
            continue
        if is_dataclass(v):
            nested.append((f.name, v))
        elif isinstance(v, tuple) and v and is_dataclass(v[0]):
            nested.append((f.name, v))
        elif isinstance(v, tuple):
            table.add_row(f.name, ", ".join(_format(x) for x in v))
        else:
            table.add_row(f.name, _format(v))
    console.print(table)

    for name, v in nested:
        if isinstance(v, tuple):
            _render_rows(console, name, v)
        else:
            _render(console, name, v)


def _render_rows(console: Console, title: str, rows: tuple) -> None:
    table = Table(title=title)
    columns = [f.name for f in fields(rows[0])]
    for c in columns:
        table.add_column(c, style="cyan" if c == columns[0] else "green")
    for row in rows:
        cells = []
        for c in columns:
            v = getattr(row, c)
            cells.append(v.describe() if hasattr(v, "describe") else _format(v))
        table.add_row(*cells)
    console.print(table)


def _run(console: Console, request, title: str) -> int:
    outcome = calc.evaluate(request)
    if isinstance(outcome, Ok):
        _render(console, title, outcome.value)
        return EXIT_OK
    if isinstance(outcome, NotApplicable):
        console.print(f"[yellow]{escape(outcome.reason)}[/yellow]")
        return EXIT_OK
    where = f"{outcome.field}: " if outcome.field else ""
    console.print(f"[bold red]{outcome.kind} error[/bold red] {escape(where + outcome.message)}")
    return EXIT_FAILURE


# ─── Commands ───────────────────────────────────────────────────────────────

def cmd_wavelength(args, console):
    return _run(console, calc.WavelengthInput(
        args.freq, args.unit, velocity_factor=args.vf, end_effect_percent=args.end_effect,
    ), f"Wavelength @ {args.freq} {args.unit}")


def cmd_dipole(args, console):
    return _run(console, calc.DipoleInput(
        args.freq, args.unit, antenna_type=args.type,
        wire_diameter=args.wire, wire_diameter_unit=args.wire_unit,
    ), f"{args.type} @ {args.freq} {args.unit}")


def cmd_yagi(args, console):
    return _run(console, calc.YagiInput(
        args.freq, args.unit, elements=args.elements,
        boom_length=args.boom, boom_length_unit=args.boom_unit,
    ), f"{args.elements}-element Yagi @ {args.freq} {args.unit}")


def cmd_loop(args, console):
    return _run(console, calc.LoopInput(
        args.freq, args.unit, loop_type=args.type, shape=args.shape,
    ), f"{args.type} {args.shape} loop @ {args.freq} {args.unit}")


def cmd_patch(args, console):
    return _run(console, calc.PatchInput(
        args.freq, args.unit, substrate_er=args.er,
        thickness=args.thickness, thickness_unit=args.thickness_unit,
    ), f"Patch @ {args.freq} {args.unit}")


def cmd_lc(args, console):
    return _run(console, calc.LCInput(
        args.inductance, args.capacitance,
        inductance_unit=args.l_unit, capacitance_unit=args.c_unit,
    ), "LC resonance")


def cmd_reactance(args, console):
    return _run(console, calc.ReactanceInput(
        args.freq, args.value, component=args.component,
        frequency_unit=args.unit, unit=args.value_unit,
    ), f"{args.component} reactance")


def cmd_rlc(args, console):
    return _run(console, calc.RLCInput(
        args.resistance, args.inductance, args.capacitance, topology=args.topology,
        resistance_unit=args.r_unit, inductance_unit=args.l_unit,
        capacitance_unit=args.c_unit,
    ), f"{args.topology} RLC")


def cmd_vswr(args, console):
    given = [m for m, v in (("impedances", args.zl), ("vswr", args.vswr),
                            ("reflection", args.gamma), ("return_loss", args.rl))
             if v is not None]
    if len(given) != 1:
        console.print("[bold red]Give exactly one of --zl, --vswr, --gamma, --rl[/bold red]")
        return EXIT_FAILURE
    return _run(console, calc.VSWRInput(
        mode=given[0], z0=args.z0, zl=args.zl, vswr=args.vswr,
        gamma=args.gamma, return_loss=args.rl,
    ), "VSWR analysis")


def cmd_tline(args, console):
    return _run(console, calc.TransmissionLineInput(
        args.freq, args.length, frequency_unit=args.unit, length_unit=args.length_unit,
        velocity_factor=args.vf, loss_db_per_100m=args.loss, cable=args.cable,
    ), "Transmission line")


def cmd_match(args, console):
    return _run(console, calc.MatchingInput(
        args.freq, args.rl, source_resistance=args.rs,
        frequency_unit=args.unit, target_q=args.q,
    ), f"L-network {args.rs or 50:g} Ω → {args.rl:g} Ω")


def cmd_fspl(args, console):
    return _run(console, calc.FSPLInput(
        args.freq, args.distance, frequency_unit=args.unit, distance_unit=args.distance_unit,
    ), "Free-space path loss")


def cmd_link(args, console):
    return _run(console, calc.LinkBudgetInput(
        args.freq, args.distance, args.power,
        frequency_unit=args.unit, distance_unit=args.distance_unit,
        tx_power_unit=args.power_unit, tx_gain_dbi=args.tx_gain, rx_gain_dbi=args.rx_gain,
        tx_loss_db=args.tx_loss, rx_loss_db=args.rx_loss, other_loss_db=args.other_loss,
    ), "Link budget")


def cmd_fresnel(args, console):
    return _run(console, calc.FresnelInput(
        args.freq, args.distance, frequency_unit=args.unit, distance_unit=args.distance_unit,
        position=args.position, position_unit=args.position_unit,
    ), "Fresnel zone")


def cmd_field(args, console):
    return _run(console, calc.FieldStrengthInput(
        args.power, args.distance, power_unit=args.power_unit,
        gain=args.gain, gain_unit=args.gain_unit, distance_unit=args.distance_unit,
    ), "Field strength")


def cmd_convert(args, console):
    return _run(console, calc.ConversionInput(
        args.quantity, args.value, args.from_unit, args.to_unit,
    ), f"{args.value:g} {args.from_unit} in {args.to_unit}")


def cmd_band(args, console):
    try:
        f_hz = to_si(args.freq, args.unit, FREQUENCY, field="frequency")
    except FreqRadioError as e:
        console.print(f"[bold red]{e.kind} error[/bold red] {escape(str(e))}")
        return EXIT_FAILURE
    nearest = get_nearest_amateur_band(f_hz)
    table = Table(title=f"{args.freq} {args.unit}")
    table.add_column("Quantity", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("band", get_frequency_band(f_hz))
    table.add_row("nearest amateur band", f"{nearest.name} ({nearest.freq_mhz:g} MHz)")
    table.add_row("offset (MHz)", _format(nearest.difference_mhz))
    console.print(table)
    return EXIT_OK


def cmd_list(args, console):
    table = Table(title="Antenna calculators")
    table.add_column("Key", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Description")
    for c in list_calculators():
        table.add_row(c["key"], c["name"], c["description"])
    console.print(table)
    return EXIT_OK


# ─── Parser ─────────────────────────────────────────────────────────────────

def _freq_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("freq", type=float, help="Frequency")
    p.add_argument("-u", "--unit", default="MHz", help="Frequency unit (Hz, kHz, MHz, GHz)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="FreqRadio — RF and antenna engineering calculators",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python app.py dipole 14.2                     # Half-wave dipole for 20 m
  python app.py yagi 144 -n 7                   # 7-element 2 m Yagi
  python app.py patch 2.45 -u GHz --er 4.4      # FR-4 patch at 2.45 GHz
  python app.py fspl 2400 -d 1                  # Path loss over 1 km
  python app.py link 144 -d 50 -p 50 --tx-gain 10
        """,
    )
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")

    sub = parser.add_subparsers(dest="command", help="Command")

    p = sub.add_parser("wavelength", help="Wavelength and element lengths")
    _freq_args(p)
    p.add_argument("--vf", type=float, default=None, help="Velocity factor")
    p.add_argument("--end-effect", type=float, default=None, dest="end_effect",
                   help="End-effect correction (%%)")

    p = sub.add_parser("dipole", help="Dipole / monopole")
    _freq_args(p)
    p.add_argument("-t", "--type", default="halfwave",
                   choices=["halfwave", "fullwave", "quarterwave"])
    p.add_argument("--wire", type=float, default=None, help="Wire diameter")
    p.add_argument("--wire-unit", default="mm", dest="wire_unit")

    p = sub.add_parser("yagi", help="Yagi-Uda")
    _freq_args(p)
    p.add_argument("-n", "--elements", type=int, default=5)
    p.add_argument("--boom", type=float, default=None, help="Boom length")
    p.add_argument("--boom-unit", default="m", dest="boom_unit",
                   help="Length unit or 'wavelength'")

    p = sub.add_parser("loop", help="Loop antenna")
    _freq_args(p)
    p.add_argument("-t", "--type", default="small", choices=["small", "large", "quad"])
    p.add_argument("-s", "--shape", default="circular",
                   choices=["circular", "square", "rectangular"])

    p = sub.add_parser("patch", help="Microstrip patch")
    _freq_args(p)
    p.add_argument("--er", type=float, default=None, help="Substrate εr")
    p.add_argument("--thickness", type=float, default=None)
    p.add_argument("--thickness-unit", default="mm", dest="thickness_unit")

    p = sub.add_parser("lc", help="LC resonance")
    p.add_argument("inductance", type=float)
    p.add_argument("capacitance", type=float)
    p.add_argument("--l-unit", default="uH", dest="l_unit")
    p.add_argument("--c-unit", default="pF", dest="c_unit")

    p = sub.add_parser("reactance", help="Inductor / capacitor reactance")
    _freq_args(p)
    p.add_argument("value", type=float, help="Component value")
    p.add_argument("-c", "--component", default="inductor", choices=["inductor", "capacitor"])
    p.add_argument("--value-unit", default="uH", dest="value_unit")

    p = sub.add_parser("rlc", help="Series / parallel RLC")
    p.add_argument("resistance", type=float)
    p.add_argument("inductance", type=float)
    p.add_argument("capacitance", type=float)
    p.add_argument("--topology", default="series", choices=["series", "parallel"])
    p.add_argument("--r-unit", default="ohm", dest="r_unit")
    p.add_argument("--l-unit", default="uH", dest="l_unit")
    p.add_argument("--c-unit", default="pF", dest="c_unit")

    p = sub.add_parser("vswr", help="VSWR / return loss / mismatch loss")
    p.add_argument("--z0", type=float, default=None, help="Reference impedance (Ω)")
    p.add_argument("--zl", type=float, default=None, help="Load resistance (Ω)")
    p.add_argument("--vswr", type=float, default=None)
    p.add_argument("--gamma", type=float, default=None, help="|Γ|")
    p.add_argument("--rl", type=float, default=None, help="Return loss (dB)")

    p = sub.add_parser("tline", help="Transmission line")
    _freq_args(p)
    p.add_argument("length", type=float)
    p.add_argument("--length-unit", default="m", dest="length_unit")
    p.add_argument("--vf", type=float, default=None)
    p.add_argument("--loss", type=float, default=0.0, help="dB/100 m at 1 GHz")
    p.add_argument("--cable", default=None, help="Coax type, e.g. RG-58")

    p = sub.add_parser("match", help="L-network matching")
    _freq_args(p)
    p.add_argument("--rs", type=float, default=None, help="Source resistance (Ω)")
    p.add_argument("--rl", type=float, required=True, help="Load resistance (Ω)")
    p.add_argument("-q", type=float, default=None, help="Loaded Q (>= required)")

    p = sub.add_parser("fspl", help="Free-space path loss")
    _freq_args(p)
    p.add_argument("-d", "--distance", type=float, required=True)
    p.add_argument("--distance-unit", default="km", dest="distance_unit")

    p = sub.add_parser("link", help="Link budget")
    _freq_args(p)
    p.add_argument("-d", "--distance", type=float, required=True)
    p.add_argument("--distance-unit", default="km", dest="distance_unit")
    p.add_argument("-p", "--power", type=float, required=True, help="TX power")
    p.add_argument("--power-unit", default="W", dest="power_unit")
    p.add_argument("--tx-gain", type=float, default=0.0, dest="tx_gain")
    p.add_argument("--rx-gain", type=float, default=0.0, dest="rx_gain")
    p.add_argument("--tx-loss", type=float, default=0.0, dest="tx_loss")
    p.add_argument("--rx-loss", type=float, default=0.0, dest="rx_loss")
    p.add_argument("--other-loss", type=float, default=0.0, dest="other_loss")

    p = sub.add_parser("fresnel", help="Fresnel zone clearance")
    _freq_args(p)
    p.add_argument("-d", "--distance", type=float, required=True)
    p.add_argument("--distance-unit", default="km", dest="distance_unit")
    p.add_argument("--position", type=float, default=None)
    p.add_argument("--position-unit", default="percent", dest="position_unit")

    p = sub.add_parser("field", help="Power density and field strength")
    p.add_argument("power", type=float)
    p.add_argument("distance", type=float)
    p.add_argument("--power-unit", default="W", dest="power_unit")
    p.add_argument("--gain", type=float, default=0.0)
    p.add_argument("--gain-unit", default="dBi", dest="gain_unit")
    p.add_argument("--distance-unit", default="m", dest="distance_unit")

    p = sub.add_parser("convert", help="Unit conversion")
    p.add_argument("quantity", choices=[q.value for q in calc.Quantity])
    p.add_argument("value", type=float)
    p.add_argument("from_unit")
    p.add_argument("to_unit")

    p = sub.add_parser("band", help="Band of a frequency")
    _freq_args(p)

    sub.add_parser("list", help="List antenna calculators")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else log_level_from_env(),
                  log_file=args.log_file)
    logger.debug("Verbose logging enabled.")

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    commands = {
        "wavelength": cmd_wavelength,
        "dipole": cmd_dipole,
        "yagi": cmd_yagi,
        "loop": cmd_loop,
        "patch": cmd_patch,
        "lc": cmd_lc,
        "reactance": cmd_reactance,
        "rlc": cmd_rlc,
        "vswr": cmd_vswr,
        "tline": cmd_tline,
        "match": cmd_match,
        "fspl": cmd_fspl,
        "link": cmd_link,
        "fresnel": cmd_fresnel,
        "field": cmd_field,
        "convert": cmd_convert,
        "band": cmd_band,
        "list": cmd_list,
    }

    console = Console()
    return commands[args.command](args, console)


if __name__ == "__main__":
    sys.exit(main())
