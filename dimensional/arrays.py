"""
Array Conversion
================

Element-wise unit conversion for signal columns and other numeric
sequences. Same conversion law and dimension check as Quantity, applied
with numpy so a column converts in one pass.

Usage:
    >>> from dimensional.arrays import convert_values
    >>> convert_values([0.0, 100.0], "degC", "degF")
    array([ 32., 212.])
"""

from typing import Optional, Sequence, Union

import numpy as np

from dimensional.errors import DimensionMismatchError
from dimensional.registry import UnitRegistry, resolve_registry

ArrayLike = Union[Sequence[float], np.ndarray]


def to_base_units(
    values: ArrayLike,
    unit_symbol: str,
    registry: Optional[UnitRegistry] = None,
) -> np.ndarray:
    """values * factor + offset, as a new float64 array."""
    unit = resolve_registry(registry).get_unit_definition(unit_symbol)
    return np.asarray(values, dtype=np.float64) * unit.factor + unit.offset


def from_base_units(
    values: ArrayLike,
    unit_symbol: str,
    registry: Optional[UnitRegistry] = None,
) -> np.ndarray:
    """(values - offset) / factor, as a new float64 array."""
    unit = resolve_registry(registry).get_unit_definition(unit_symbol)
    return (np.asarray(values, dtype=np.float64) - unit.offset) / unit.factor


def convert_values(
    values: ArrayLike,
    source_unit: str,
    target_unit: str,
    registry: Optional[UnitRegistry] = None,
) -> np.ndarray:
    """
    Convert an array of values between two units of the same dimension.

    Raises:
        NotFoundError: either unit is not registered
        DimensionMismatchError: units belong to different dimensions
    """
    registry = resolve_registry(registry)
    source = registry.get_unit_definition(source_unit)
    target = registry.get_unit_definition(target_unit)

    if source.dimension_name != target.dimension_name:
        raise DimensionMismatchError(
            f"Cannot convert {source_unit} ({source.dimension_name}) "
            f"to {target_unit} ({target.dimension_name})",
            left=source.dimension_name,
            right=target.dimension_name,
        )

    base = to_base_units(values, source_unit, registry)
    return from_base_units(base, target_unit, registry)


__all__ = ['to_base_units', 'from_base_units', 'convert_values']
