"""
Standard Dimensions
===================

Seed data for the seven SI base dimensions and their common units,
plus named signatures for frequently used derived dimensions.

    Length             m     Mass               kg
    Time               s     ElectricCurrent    A
    Temperature        K     AmountOfSubstance  mol
    LuminousIntensity  cd

Usage:
    >>> from dimensional.registry import UnitRegistry
    >>> from dimensional.standard import register_standard_units
    >>> reg = register_standard_units(UnitRegistry())
    >>> reg.get_unit_definition('degF').offset
    255.37222222222222
"""

from typing import List, Optional

from dimensional.registry import DimensionDefinition, UnitRegistry
from dimensional.signature import DimensionSignature


# =============================================================================
# BASE DIMENSIONS
# =============================================================================

LENGTH_CONFIG = DimensionDefinition(
    name="Length",
    base_unit_symbol="m",
    units={
        "m": {"factor": 1.0},
        "km": {"factor": 1000.0},
        "cm": {"factor": 0.01},
        "mm": {"factor": 0.001},
        "µm": {"factor": 1e-6},
        "nm": {"factor": 1e-9},
        "pm": {"factor": 1e-12},
        "ft": {"factor": 0.3048},
        "in": {"factor": 0.0254},
        "yd": {"factor": 0.9144},
        "mi": {"factor": 1609.344},
        "nmi": {"factor": 1852.0},
        "au": {"factor": 1.495978707e11},
        "ly": {"factor": 9.4607304725808e15},
        "pc": {"factor": 3.08567758149137e16},
    },
)

MASS_CONFIG = DimensionDefinition(
    name="Mass",
    base_unit_symbol="kg",
    units={
        "kg": {"factor": 1.0},
        "g": {"factor": 0.001},
        "mg": {"factor": 1e-6},
        "µg": {"factor": 1e-9},
        "t": {"factor": 1000.0},
        "lb": {"factor": 0.45359237},
        "oz": {"factor": 0.028349523125},
        "st": {"factor": 6.35029318},
        "ton": {"factor": 907.18474},      # US short ton
        "lton": {"factor": 1016.0469088},  # imperial long ton
    },
)

TIME_CONFIG = DimensionDefinition(
    name="Time",
    base_unit_symbol="s",
    units={
        "s": {"factor": 1.0},
        "ms": {"factor": 0.001},
        "µs": {"factor": 1e-6},
        "ns": {"factor": 1e-9},
        "min": {"factor": 60.0},
        "h": {"factor": 3600.0},
        "d": {"factor": 86400.0},
        "wk": {"factor": 604800.0},
        "yr": {"factor": 31557600.0},  # Julian year
    },
)

ELECTRIC_CURRENT_CONFIG = DimensionDefinition(
    name="ElectricCurrent",
    base_unit_symbol="A",
    units={
        "A": {"factor": 1.0},
        "mA": {"factor": 1e-3},
        "kA": {"factor": 1e3},
        "µA": {"factor": 1e-6},
    },
)

# T(K) = T(F) * 5/9 + (273.15 - 32 * 5/9)
TEMPERATURE_CONFIG = DimensionDefinition(
    name="Temperature",
    base_unit_symbol="K",
    units={
        "K": {"factor": 1.0},
        "degC": {"factor": 1.0, "offset": 273.15},
        "degF": {"factor": 5 / 9, "offset": 255.37222222222222},
        "degR": {"factor": 5 / 9},
    },
)

AMOUNT_OF_SUBSTANCE_CONFIG = DimensionDefinition(
    name="AmountOfSubstance",
    base_unit_symbol="mol",
    units={
        "mol": {"factor": 1.0},
        "mmol": {"factor": 1e-3},
        "kmol": {"factor": 1e3},
        "µmol": {"factor": 1e-6},
    },
)

LUMINOUS_INTENSITY_CONFIG = DimensionDefinition(
    name="LuminousIntensity",
    base_unit_symbol="cd",
    units={
        "cd": {"factor": 1.0},
        "mcd": {"factor": 1e-3},
        "kcd": {"factor": 1e3},
    },
)

# Registration order fixes the order of dimensions in composite symbols
STANDARD_DIMENSIONS: List[DimensionDefinition] = [
    LENGTH_CONFIG,
    MASS_CONFIG,
    TIME_CONFIG,
    ELECTRIC_CURRENT_CONFIG,
    TEMPERATURE_CONFIG,
    AMOUNT_OF_SUBSTANCE_CONFIG,
    LUMINOUS_INTENSITY_CONFIG,
]


def register_standard_units(registry: Optional[UnitRegistry] = None) -> UnitRegistry:
    """Register the seven standard dimensions. Returns the registry used."""
    if registry is None:
        registry = UnitRegistry()
    for definition in STANDARD_DIMENSIONS:
        registry.define_dimension(definition)
    return registry


# =============================================================================
# NAMED SIGNATURES
# =============================================================================

LENGTH = DimensionSignature.of(Length=1)
MASS = DimensionSignature.of(Mass=1)
TIME = DimensionSignature.of(Time=1)
CURRENT = DimensionSignature.of(ElectricCurrent=1)
TEMPERATURE = DimensionSignature.of(Temperature=1)
AMOUNT = DimensionSignature.of(AmountOfSubstance=1)
LUMINOSITY = DimensionSignature.of(LuminousIntensity=1)

# Derived
AREA = LENGTH ** 2
VOLUME = LENGTH ** 3
FREQUENCY = TIME ** -1
SPEED = LENGTH / TIME
ACCELERATION = SPEED / TIME
FORCE = MASS * ACCELERATION
PRESSURE = FORCE / AREA
ENERGY = FORCE * LENGTH
POWER = ENERGY / TIME
ELECTRIC_CHARGE = CURRENT * TIME
VOLTAGE = POWER / CURRENT


__all__ = [
    'LENGTH_CONFIG', 'MASS_CONFIG', 'TIME_CONFIG', 'ELECTRIC_CURRENT_CONFIG',
    'TEMPERATURE_CONFIG', 'AMOUNT_OF_SUBSTANCE_CONFIG', 'LUMINOUS_INTENSITY_CONFIG',
    'STANDARD_DIMENSIONS', 'register_standard_units',

    'LENGTH', 'MASS', 'TIME', 'CURRENT', 'TEMPERATURE', 'AMOUNT', 'LUMINOSITY',
    'AREA', 'VOLUME', 'FREQUENCY', 'SPEED', 'ACCELERATION', 'FORCE', 'PRESSURE',
    'ENERGY', 'POWER', 'ELECTRIC_CHARGE', 'VOLTAGE',
]
