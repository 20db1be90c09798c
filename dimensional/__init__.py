"""
dimensional - Dimensional Quantity Engine
=========================================

Physical measurements with dimensionally-safe arithmetic, affine unit
conversion and derived-unit synthesis.

    VALUE + UNIT -> BASE UNITS -> ALGEBRA -> LABELLED RESULT

Architecture:
    - registry:  dimensions and units (factor + offset per unit)
    - signature: exponent-vector algebra, composite unit symbols
    - quantity:  the immutable value type
    - standard:  seed data for the seven SI base dimensions
    - config/:   YAML unit files
    - arrays:    numpy conversion of whole columns
    - server/:   HTTP handlers

Usage:
    >>> from dimensional import Q
    >>> (Q(5, "m") / Q(2, "s")).to_display_string()
    '2.50000 m/s'
    >>> Q(1, "km").equals(Q(1000, "m"))
    True
"""

__version__ = "1.0.0"

from .errors import (
    ConsistencyError,
    DimensionMismatchError,
    DivisionByZeroError,
    NotFoundError,
    QuantityError,
)
from .registry import (
    DimensionDefinition,
    UnitDefinition,
    UnitRegistry,
    define_dimension,
    get_default_registry,
    get_dimension_definition,
    get_unit_definition,
    has_dimension,
    has_unit,
    list_dimensions,
    list_units,
    set_default_registry,
)
from .signature import (
    DIMENSIONLESS,
    DimensionSignature,
    combine,
    derive_composite_unit_symbol,
    divide_signatures,
    signatures_equal,
    to_display_string,
)
from .quantity import Q, Quantity
from .standard import register_standard_units

__all__ = [
    '__version__',
    # Core classes
    'Quantity', 'Q', 'DimensionSignature', 'UnitRegistry',
    'UnitDefinition', 'DimensionDefinition',
    # Errors
    'QuantityError', 'NotFoundError', 'DimensionMismatchError',
    'DivisionByZeroError', 'ConsistencyError',
    # Registry
    'define_dimension', 'get_unit_definition', 'get_dimension_definition',
    'list_dimensions', 'list_units', 'has_unit', 'has_dimension',
    'get_default_registry', 'set_default_registry', 'register_standard_units',
    # Algebra
    'DIMENSIONLESS', 'signatures_equal', 'combine', 'divide_signatures',
    'to_display_string', 'derive_composite_unit_symbol',
]
