"""
Dimensional Quantity
====================

A physical quantity: a value in a specific unit, its value in base units,
and its dimension signature.

    >>> from dimensional.quantity import Q
    >>> Q(5, "m") + Q(100, "cm")
    Q(6.0, 'm')
    >>> Q(5, "m") / Q(2, "s")
    Q(2.5, 'm/s')
    >>> round(Q(32, "degF").convert_to("degC").value, 9)
    0.0

Rules:
    - all arithmetic and comparison runs on value_in_base_units
    - add/subtract keep the LEFT operand's unit
    - multiply/divide/power synthesize a composite unit from base units
      (m/s, m^2, m.kg/s^2) unless that symbol is itself a registered unit
    - quantities are immutable; every operation returns a new Quantity
"""

from __future__ import annotations

import numbers
from typing import Any, Dict, Mapping, Optional, Union

from dimensional.errors import DimensionMismatchError, DivisionByZeroError
from dimensional.registry import UnitRegistry, resolve_registry
from dimensional.signature import (
    DimensionSignature,
    SignatureLike,
    as_signature,
    combine,
    derive_composite_unit_symbol,
    divide_signatures,
    parse_composite_unit_symbol,
    power,
    signatures_equal,
    to_display_string,
)

# Absolute tolerance on base-unit values for equals()
EQUALITY_TOLERANCE = 1e-9


def _simple_signature(dimension_name: str) -> DimensionSignature:
    return DimensionSignature(((dimension_name, 1),))


def _bracket(sig: DimensionSignature) -> str:
    return f"[{to_display_string(sig)}]"


class Quantity:
    """
    A physical quantity with value, unit, and dimensional tracking.

    Args:
        value: Numeric value expressed in unit_symbol
        unit_symbol: Registered unit symbol (e.g. "km", "degC")
        registry: Registry to resolve units against (process default if None)

    Raises:
        NotFoundError: unit_symbol is not registered
    """

    __slots__ = ('_value', '_unit_symbol', '_signature', '_value_in_base', '_registry')

    def __init__(self, value: float, unit_symbol: str, registry: Optional[UnitRegistry] = None):
        registry = resolve_registry(registry)
        unit_def = registry.get_unit_definition(unit_symbol)
        value = float(value)
        self._init(
            value,
            unit_symbol,
            _simple_signature(unit_def.dimension_name),
            unit_def.to_base(value),
            registry,
        )

    def _init(self, value, unit_symbol, signature, value_in_base, registry):
        object.__setattr__(self, '_value', value)
        object.__setattr__(self, '_unit_symbol', unit_symbol)
        object.__setattr__(self, '_signature', signature)
        object.__setattr__(self, '_value_in_base', value_in_base)
        object.__setattr__(self, '_registry', registry)

    def __setattr__(self, name, value):
        raise AttributeError("Quantity is immutable")

    def __delattr__(self, name):
        raise AttributeError("Quantity is immutable")

    @classmethod
    def _build(
        cls,
        value: float,
        unit_symbol: str,
        signature: DimensionSignature,
        value_in_base: float,
        registry: UnitRegistry,
    ) -> Quantity:
        q = cls.__new__(cls)
        q._init(value, unit_symbol, signature, value_in_base, registry)
        return q

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def from_base_units(
        cls,
        value_in_base_units: float,
        signature: SignatureLike,
        registry: Optional[UnitRegistry] = None,
    ) -> Quantity:
        """
        Build a quantity from a base-unit value and a signature.

        The unit symbol is derived from the signature. When that symbol is
        a registered unit, the value is expressed through its definition;
        otherwise the symbol is made of base units only, so the value is
        the base value unchanged.
        """
        registry = resolve_registry(registry)
        signature = as_signature(signature)
        value_in_base_units = float(value_in_base_units)
        symbol = derive_composite_unit_symbol(signature, registry)

        if registry.has_unit(symbol):
            value = registry.get_unit_definition(symbol).from_base(value_in_base_units)
        else:
            value = value_in_base_units
        return cls._build(value, symbol, signature, value_in_base_units, registry)

    @classmethod
    def from_transport(
        cls,
        data: Mapping[str, Any],
        registry: Optional[UnitRegistry] = None,
    ) -> Quantity:
        """
        Rebuild a quantity from its transport form {'value': ..., 'unit': ...}.

        Registered units go through the constructor; composite symbols made
        of base units (m/s, m^2) are parsed back into a signature.
        """
        if 'value' not in data or 'unit' not in data:
            raise ValueError("Transport form needs 'value' and 'unit'")

        registry = resolve_registry(registry)
        unit = data['unit']
        if registry.has_unit(unit):
            return cls(data['value'], unit, registry)

        signature = parse_composite_unit_symbol(unit, registry)
        return cls.from_base_units(float(data['value']), signature, registry)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def value(self) -> float:
        return self._value

    @property
    def unit_symbol(self) -> str:
        return self._unit_symbol

    @property
    def dimension_signature(self) -> DimensionSignature:
        return self._signature

    @property
    def value_in_base_units(self) -> float:
        return self._value_in_base

    @property
    def registry(self) -> UnitRegistry:
        return self._registry

    def is_dimensionless(self) -> bool:
        return self._signature.is_dimensionless()

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _require_same_signature(self, other: Quantity, verb: str, preposition: str) -> None:
        if not signatures_equal(self._signature, other.dimension_signature):
            raise DimensionMismatchError(
                f"Dimension mismatch: cannot {verb} {_bracket(other.dimension_signature)} "
                f"{preposition} {_bracket(self._signature)}",
                left=self._signature,
                right=other.dimension_signature,
            )

    def _in_own_unit(self, value_in_base: float) -> Quantity:
        """Same unit and signature as self, new base value."""
        if self._registry.has_unit(self._unit_symbol):
            unit_def = self._registry.get_unit_definition(self._unit_symbol)
            value = unit_def.from_base(value_in_base)
        else:
            value = value_in_base
        return self._build(value, self._unit_symbol, self._signature, value_in_base, self._registry)

    def _with_value(self, value: float) -> Quantity:
        """Same unit and signature as self, new display value."""
        if self._registry.has_unit(self._unit_symbol):
            value_in_base = self._registry.get_unit_definition(self._unit_symbol).to_base(value)
        else:
            value_in_base = value
        return self._build(value, self._unit_symbol, self._signature, value_in_base, self._registry)

    def add(self, other: Quantity) -> Quantity:
        """Sum in base units, expressed in this quantity's unit."""
        self._require_same_signature(other, 'add', 'to')
        return self._in_own_unit(self._value_in_base + other.value_in_base_units)

    def subtract(self, other: Quantity) -> Quantity:
        """Difference in base units, expressed in this quantity's unit."""
        self._require_same_signature(other, 'subtract', 'from')
        return self._in_own_unit(self._value_in_base - other.value_in_base_units)

    def multiply(self, other: Quantity) -> Quantity:
        signature = combine(self._signature, other.dimension_signature)
        return Quantity.from_base_units(
            self._value_in_base * other.value_in_base_units, signature, self._registry
        )

    def divide(self, other: Quantity) -> Quantity:
        # Checked on the base value: 0 degC is 273.15 K and divides fine
        if other.value_in_base_units == 0:
            raise DivisionByZeroError("Division by zero")
        signature = divide_signatures(self._signature, other.dimension_signature)
        return Quantity.from_base_units(
            self._value_in_base / other.value_in_base_units, signature, self._registry
        )

    def power(self, n: int) -> Quantity:
        """Integer power of the quantity."""
        signature = power(self._signature, n)
        if n < 0 and self._value_in_base == 0:
            raise DivisionByZeroError("Division by zero")
        return Quantity.from_base_units(self._value_in_base ** n, signature, self._registry)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def convert_to(self, target_unit_symbol: str) -> Quantity:
        """
        Convert to another registered unit of the same single dimension.

        Raises:
            NotFoundError: target unit is not registered
            DimensionMismatchError: target unit has a different dimension
        """
        target = self._registry.get_unit_definition(target_unit_symbol)
        target_sig = _simple_signature(target.dimension_name)

        if not signatures_equal(self._signature, target_sig):
            raise DimensionMismatchError(
                f"Cannot convert quantity with dimension {_bracket(self._signature)} "
                f"to unit {target_unit_symbol} (dimension {target.dimension_name})",
                left=self._signature,
                right=target_sig,
            )

        return Quantity(target.from_base(self._value_in_base), target_unit_symbol, self._registry)

    def is_compatible(self, target_unit_symbol: str) -> bool:
        """Check if conversion to target unit is possible"""
        if not self._registry.has_unit(target_unit_symbol):
            return False
        target = self._registry.get_unit_definition(target_unit_symbol)
        return signatures_equal(self._signature, _simple_signature(target.dimension_name))

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def equals(self, other: Quantity) -> bool:
        """Equal within 1e-9 in base units; False when dimensions differ."""
        if not signatures_equal(self._signature, other.dimension_signature):
            return False
        return abs(self._value_in_base - other.value_in_base_units) < EQUALITY_TOLERANCE

    def is_less_than(self, other: Quantity) -> bool:
        self._require_same_signature(other, 'compare', 'with')
        return self._value_in_base < other.value_in_base_units

    def is_greater_than(self, other: Quantity) -> bool:
        self._require_same_signature(other, 'compare', 'with')
        return self._value_in_base > other.value_in_base_units

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def to_display_string(self) -> str:
        """Value to 6 significant digits followed by the unit symbol."""
        return f"{self._value:#.6g} {self._unit_symbol}"

    def to_transport(self) -> Dict[str, Union[float, str]]:
        return {'value': self._value, 'unit': self._unit_symbol}

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __add__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: Union[Quantity, float, int]) -> Quantity:
        if isinstance(other, Quantity):
            return self.multiply(other)
        if isinstance(other, numbers.Real):
            return self._with_value(self._value * float(other))
        return NotImplemented

    def __rmul__(self, other: Union[float, int]) -> Quantity:
        if isinstance(other, numbers.Real):
            return self._with_value(float(other) * self._value)
        return NotImplemented

    def __truediv__(self, other: Union[Quantity, float, int]) -> Quantity:
        if isinstance(other, Quantity):
            return self.divide(other)
        if isinstance(other, numbers.Real):
            if other == 0:
                raise DivisionByZeroError("Division by zero")
            return self._with_value(self._value / float(other))
        return NotImplemented

    def __pow__(self, n: int) -> Quantity:
        if not isinstance(n, numbers.Integral) or isinstance(n, bool):
            return NotImplemented
        return self.power(int(n))

    def __neg__(self) -> Quantity:
        return self._with_value(-self._value)

    def __abs__(self) -> Quantity:
        return self._with_value(abs(self._value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.equals(other)

    # Tolerance-based equality cannot be hashed consistently
    __hash__ = None

    def __lt__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.is_less_than(other)

    def __gt__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.is_greater_than(other)

    def __le__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.is_less_than(other) or self.equals(other)

    def __ge__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.is_greater_than(other) or self.equals(other)

    def __float__(self) -> float:
        return self._value

    def __repr__(self) -> str:
        return f"Q({self._value!r}, '{self._unit_symbol}')"

    def __str__(self) -> str:
        return self.to_display_string()


# Convenience alias
Q = Quantity


__all__ = ['Quantity', 'Q', 'EQUALITY_TOLERANCE']
