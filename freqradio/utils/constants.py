"""
Physical constants and reference tables for RF/antenna calculations.

All values in SI units unless otherwise noted. Tables are read-only:
mappings are wrapped in ``MappingProxyType`` and sequences are tuples.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType

# ─── Fundamental Constants ───────────────────────────────────────────────────
C_0 = 299_792_458.0            # Speed of light in vacuum [m/s]
MU_0 = 4.0 * math.pi * 1e-7   # Permeability of free space [H/m]
ETA_0 = 376.730313668          # Impedance of free space [Ω]
BOLTZMANN = 1.380649e-23       # Boltzmann constant [J/K]
EARTH_RADIUS = 6_371_000.0     # Mean Earth radius [m]
ABSOLUTE_ZERO_C = -273.15      # 0 K in °C

# ─── Common Characteristic Impedances ────────────────────────────────────────
Z0_DEFAULT = 50.0              # Standard system impedance [Ω]

# ─── Linear unit scale factors (relative to the SI base unit) ────────────────
FREQ_UNITS = MappingProxyType({
    "Hz": 1.0,
    "kHz": 1e3,
    "MHz": 1e6,
    "GHz": 1e9,
})

LENGTH_UNITS = MappingProxyType({
    "m": 1.0,
    "cm": 0.01,
    "mm": 0.001,
    "ft": 0.3048,
    "inches": 0.0254,
    "km": 1000.0,
    "miles": 1609.34,
})

INDUCTANCE_UNITS = MappingProxyType({
    "H": 1.0,
    "mH": 1e-3,
    "uH": 1e-6,
    "nH": 1e-9,
})

CAPACITANCE_UNITS = MappingProxyType({
    "F": 1.0,
    "mF": 1e-3,
    "uF": 1e-6,
    "nF": 1e-9,
    "pF": 1e-12,
})

RESISTANCE_UNITS = MappingProxyType({
    "ohm": 1.0,
    "kohm": 1e3,
    "Mohm": 1e6,
})

# Logarithmic power units (dBm, dBW) are handled in units.convert_power.
POWER_UNITS = MappingProxyType({
    "W": 1.0,
    "mW": 1e-3,
    "kW": 1e3,
})

# Logarithmic field units (dBµV/m, ...) are handled in units.convert_field_strength.
FIELD_STRENGTH_UNITS = MappingProxyType({
    "V/m": 1.0,
    "mV/m": 1e-3,
    "uV/m": 1e-6,
})

# ─── Antenna rules of thumb ──────────────────────────────────────────────────
DIPOLE_FACTOR = 0.95           # Typical shortening factor for a dipole
MONOPOLE_FACTOR = 0.95
END_EFFECT_PERCENT = 5.0       # Default end-effect correction [%]
DIPOLE_RESISTANCE = 73.0       # Half-wave dipole feed resistance [Ω]
MONOPOLE_RESISTANCE = 36.5     # Quarter-wave monopole (half of dipole) [Ω]
FULLWAVE_RESISTANCE = 199.0    # Full-wave dipole (approximate) [Ω]
DIPOLE_GAIN_DBI = 2.14         # Half-wave dipole gain; dBi = dBd + 2.14

YAGI_REFLECTOR_RATIO = 1.05    # Reflector length / driven element
YAGI_DIRECTOR_RATIO = 0.9      # Director length / driven element
YAGI_TYPICAL_SPACING = 0.15    # Element spacing [λ]
YAGI_GAIN_PER_DIRECTOR = 1.2   # Linear-per-director gain increase [dB]
YAGI_FEED_IMPEDANCE = 28.0     # Typical with reflector [Ω]
YAGI_MIN_ELEMENTS = 3
YAGI_MAX_ELEMENTS = 20

# ─── Frequency Bands ─────────────────────────────────────────────────────────
# ITU designations as half-open [min, max) ranges in MHz, in scan order.
FREQUENCY_BANDS = (
    ("LF", 0.03, 0.3),
    ("MF", 0.3, 3.0),
    ("HF", 3.0, 30.0),
    ("VHF", 30.0, 300.0),
    ("UHF", 300.0, 3000.0),
    ("SHF", 3000.0, 30000.0),
    ("EHF", 30000.0, 300000.0),
)


@dataclass(frozen=True)
class AmateurBand:
    """Amateur radio band reference point."""
    key: str
    name: str
    freq_mhz: float


AMATEUR_BANDS = (
    AmateurBand("160m", "160 meters", 1.8),
    AmateurBand("80m", "80 meters", 3.5),
    AmateurBand("40m", "40 meters", 7.0),
    AmateurBand("20m", "20 meters", 14.0),
    AmateurBand("15m", "15 meters", 21.0),
    AmateurBand("10m", "10 meters", 28.0),
    AmateurBand("6m", "6 meters", 50.0),
    AmateurBand("2m", "2 meters", 144.0),
    AmateurBand("70cm", "70 centimeters", 440.0),
    AmateurBand("23cm", "23 centimeters", 1296.0),
)


# ─── Coaxial cables ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CoaxCable:
    """Nominal coax properties; loss is dB per 100 m at 1 GHz."""
    name: str
    impedance: float
    velocity_factor: float
    loss_db_100m_1ghz: float


COAX_TYPES = MappingProxyType({
    c.name: c for c in (
        CoaxCable("RG-58", 50.0, 0.66, 195.0),
        CoaxCable("RG-174", 50.0, 0.66, 680.0),
        CoaxCable("RG-213", 50.0, 0.66, 67.0),
        CoaxCable("LMR-195", 50.0, 0.83, 78.0),
        CoaxCable("LMR-240", 50.0, 0.84, 54.0),
        CoaxCable("LMR-400", 50.0, 0.85, 22.0),
        CoaxCable("LMR-600", 50.0, 0.87, 13.8),
        CoaxCable("RG-59", 75.0, 0.66, 180.0),
        CoaxCable("RG-6", 75.0, 0.82, 50.0),
    )
})

# ─── Link budget ─────────────────────────────────────────────────────────────
RECEIVER_SENSITIVITIES_DBM = (
    ("SSB/CW", -120.0),
    ("FM Narrow", -110.0),
    ("FM Wide", -105.0),
    ("Digital (1200 bps)", -115.0),
    ("Digital (9600 bps)", -105.0),
    ("WiFi 802.11g", -85.0),
)

REFERENCE_TX_POWERS_W = (1.0, 10.0, 100.0, 1000.0)

# First Fresnel zone clearance fraction → additional path loss [dB]
FRESNEL_CLEARANCE_LOSS_DB = (
    (0.0, 6.0),     # complete obstruction
    (0.2, 3.0),
    (0.4, 1.0),
    (0.6, 0.0),     # recommended
    (1.0, 0.0),
)
