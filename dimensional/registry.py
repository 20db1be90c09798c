"""
Dimensional Registry
====================

Table of dimensions and the units registered under them.

    dimension name -> base unit symbol
    unit symbol    -> UnitDefinition        (factor, offset, owner)

A dimension owns exactly the units that currently resolve to it, so
DimensionDefinition objects handed out by queries are built from the unit
table on each call and carry a read-only units view.

Conversion law for a unit with value v:

    value_in_base = v * factor + offset
    v             = (value_in_base - offset) / factor

Registration is last-write-wins: re-registering a dimension name or a unit
symbol overwrites the previous entry and logs a warning. Hard failures
(ConsistencyError) are a base unit that is not the identity transform of
its own dimension, a zero factor, and moving another dimension's base unit.

Usage:
    >>> from dimensional.registry import UnitRegistry
    >>> reg = UnitRegistry()
    >>> reg.define_dimension({
    ...     'name': 'Length',
    ...     'base_unit_symbol': 'm',
    ...     'units': {'m': {'factor': 1}, 'km': {'factor': 1000}},
    ... })
    >>> reg.get_unit_definition('km').factor
    1000.0

A process-wide registry seeded with the standard dimensions is available
through get_default_registry(); the module-level functions delegate to it.
Tests should build their own UnitRegistry instead.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from dimensional.errors import ConsistencyError, NotFoundError

logger = logging.getLogger(__name__)


# =============================================================================
# DEFINITIONS
# =============================================================================

@dataclass(frozen=True)
class UnitDefinition:
    """Definition of a single unit"""
    symbol: str                # e.g. "km"
    factor: float              # multiply by this to get base units
    dimension_name: str        # owning dimension, e.g. "Length"
    offset: float = 0.0        # for temperature scales (degC, degF)

    def to_base(self, value: float) -> float:
        return value * self.factor + self.offset

    def from_base(self, value_in_base: float) -> float:
        return (value_in_base - self.offset) / self.factor

    def is_identity(self) -> bool:
        return self.factor == 1 and self.offset == 0


def _require_factor(symbol: str, spec: Mapping[str, Any], dimension_name: str) -> None:
    if 'factor' not in spec:
        raise ValueError(f'Unit "{symbol}" in dimension "{dimension_name}" has no conversion factor')


@dataclass(frozen=True)
class DimensionDefinition:
    """
    A dimension, its base unit and the units declared under it.

    units maps unit symbol -> {'factor': float, 'offset': float}. Definitions
    returned by a registry carry a read-only view built from the units that
    currently resolve to the dimension.
    """
    name: str
    base_unit_symbol: str
    units: Mapping[str, Mapping[str, float]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DimensionDefinition:
        """
        Build a definition from a plain mapping.

        Accepts 'base_unit_symbol', 'baseUnitSymbol' or 'base_unit' for the
        base unit, and unit entries given either as a bare factor or as a
        {'factor': ..., 'offset': ...} mapping.
        """
        base = data.get('base_unit_symbol', data.get('baseUnitSymbol', data.get('base_unit')))
        if 'name' not in data or base is None:
            raise ValueError("Dimension definition needs 'name' and 'base_unit_symbol'")

        units: Dict[str, Dict[str, float]] = {}
        for symbol, spec in (data.get('units') or {}).items():
            if isinstance(spec, Mapping):
                _require_factor(symbol, spec, data['name'])
                units[symbol] = {
                    'factor': float(spec['factor']),
                    'offset': float(spec.get('offset', 0.0) or 0.0),
                }
            else:
                units[symbol] = {'factor': float(spec), 'offset': 0.0}

        return cls(name=data['name'], base_unit_symbol=base, units=units)


DefinitionLike = Union[DimensionDefinition, Mapping[str, Any]]


# =============================================================================
# REGISTRY
# =============================================================================

class UnitRegistry:
    """
    Mutable registry of dimensions and units.

    All access is serialised by a re-entrant lock, so one instance can be
    shared between threads. Dimension names are interned to small integer
    ids in registration order; ids survive overwrites.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._dimensions: Dict[str, str] = {}        # name -> base unit symbol
        self._units: Dict[str, UnitDefinition] = {}
        self._dimension_ids: Dict[str, int] = {}

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def define_dimension(self, definition: DefinitionLike) -> DimensionDefinition:
        """
        Register (or overwrite) a dimension and all of its units.

        The base unit is added with factor 1 / offset 0 when it is not
        listed. Nothing is mutated if validation fails.

        Raises:
            ConsistencyError: base unit already known with a non-identity
                transform or under another dimension, a zero factor, or a
                unit that is another dimension's base unit
            ValueError: a unit entry has no factor
        """
        if not isinstance(definition, DimensionDefinition):
            definition = DimensionDefinition.from_mapping(definition)

        name = definition.name
        base = definition.base_unit_symbol

        new_units: Dict[str, UnitDefinition] = {}
        for symbol, spec in definition.units.items():
            _require_factor(symbol, spec, name)
            factor = float(spec['factor'])
            if factor == 0:
                raise ConsistencyError(
                    f'Unit "{symbol}" in dimension "{name}" has a conversion factor of 0.'
                )
            new_units[symbol] = UnitDefinition(
                symbol=symbol,
                factor=factor,
                dimension_name=name,
                offset=float(spec.get('offset', 0.0) or 0.0),
            )

        with self._lock:
            # Base unit as it will look once this definition is applied
            base_def = new_units.get(base, self._units.get(base))
            if base_def is not None:
                if not base_def.is_identity():
                    raise ConsistencyError(
                        f'Base unit "{base}" for dimension "{name}" must have a '
                        f'conversion factor of 1 and offset of 0.'
                    )
                if base_def.dimension_name != name:
                    raise ConsistencyError(
                        f'Base unit "{base}" is registered to dimension '
                        f'"{base_def.dimension_name}" but defined as base for "{name}".'
                    )

            # A unit may move between dimensions, another dimension's base unit may not
            for symbol in new_units:
                for other, other_base in self._dimensions.items():
                    if symbol == other_base and other != name:
                        raise ConsistencyError(
                            f'Unit "{symbol}" is the base unit of dimension "{other}" '
                            f'and cannot be moved to "{name}".'
                        )

            if name in self._dimensions:
                logger.warning(f'Dimension "{name}" is already defined. Overwriting.')

            for symbol, unit in new_units.items():
                if symbol in self._units:
                    logger.warning(f'Unit symbol "{symbol}" is already defined. Overwriting.')
                self._units[symbol] = unit

            if base not in self._units:
                self._units[base] = UnitDefinition(base, 1.0, name, 0.0)

            self._dimensions[name] = base
            self._dimension_ids.setdefault(name, len(self._dimension_ids))
            stored = self._snapshot(name)

        logger.debug(f"Registered dimension {name} ({len(stored.units)} units, base {base})")
        return stored

    def _snapshot(self, name: str) -> DimensionDefinition:
        """Definition of a dimension as it resolves now. Caller holds the lock."""
        units = {
            unit.symbol: {'factor': unit.factor, 'offset': unit.offset}
            for unit in self._units.values()
            if unit.dimension_name == name
        }
        return DimensionDefinition(
            name=name,
            base_unit_symbol=self._dimensions[name],
            units=MappingProxyType(units),
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_unit_definition(self, symbol: str) -> UnitDefinition:
        with self._lock:
            unit = self._units.get(symbol)
        if unit is None:
            raise NotFoundError('unit', symbol)
        return unit

    def get_dimension_definition(self, name: str) -> DimensionDefinition:
        with self._lock:
            if name not in self._dimensions:
                raise NotFoundError('dimension', name)
            return self._snapshot(name)

    def base_unit_symbol(self, name: str) -> str:
        with self._lock:
            base = self._dimensions.get(name)
        if base is None:
            raise NotFoundError('dimension', name)
        return base

    def has_unit(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._units

    def has_dimension(self, name: str) -> bool:
        with self._lock:
            return name in self._dimensions

    def dimension_id(self, name: str) -> int:
        """Interned id of a dimension (its registration order)."""
        with self._lock:
            dim_id = self._dimension_ids.get(name)
        if dim_id is None:
            raise NotFoundError('dimension', name)
        return dim_id

    def list_dimensions(self) -> List[DimensionDefinition]:
        """Snapshot of all dimensions in registration order."""
        with self._lock:
            return [self._snapshot(name) for name in self._dimensions]

    def list_units(self, dimension_name: Optional[str] = None) -> List[UnitDefinition]:
        """Snapshot of registered units, optionally for one dimension."""
        with self._lock:
            if dimension_name is not None and dimension_name not in self._dimensions:
                raise NotFoundError('dimension', dimension_name)
            return [
                unit for unit in self._units.values()
                if dimension_name is None or unit.dimension_name == dimension_name
            ]

    def __contains__(self, symbol: str) -> bool:
        return self.has_unit(symbol)

    def __len__(self) -> int:
        with self._lock:
            return len(self._units)

    def __repr__(self) -> str:
        with self._lock:
            return f"UnitRegistry({len(self._dimensions)} dimensions, {len(self._units)} units)"


# =============================================================================
# PROCESS DEFAULT
# =============================================================================

_default_registry: Optional[UnitRegistry] = None
_default_lock = threading.Lock()


def get_default_registry() -> UnitRegistry:
    """Process-wide registry, seeded with the standard dimensions on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            from dimensional.standard import register_standard_units

            registry = UnitRegistry()
            register_standard_units(registry)
            _default_registry = registry
        return _default_registry


def set_default_registry(registry: Optional[UnitRegistry]) -> Optional[UnitRegistry]:
    """
    Replace the process-wide registry and return the previous one.

    Passing None makes the next get_default_registry() call build a fresh
    standard registry.
    """
    global _default_registry
    with _default_lock:
        previous = _default_registry
        _default_registry = registry
    return previous


def resolve_registry(registry: Optional[UnitRegistry] = None) -> UnitRegistry:
    return registry if registry is not None else get_default_registry()


def define_dimension(definition: DefinitionLike) -> DimensionDefinition:
    return get_default_registry().define_dimension(definition)


def get_unit_definition(symbol: str) -> UnitDefinition:
    return get_default_registry().get_unit_definition(symbol)


def get_dimension_definition(name: str) -> DimensionDefinition:
    return get_default_registry().get_dimension_definition(name)


def list_dimensions() -> List[DimensionDefinition]:
    return get_default_registry().list_dimensions()


def list_units(dimension_name: Optional[str] = None) -> List[UnitDefinition]:
    return get_default_registry().list_units(dimension_name)


def has_unit(symbol: str) -> bool:
    return get_default_registry().has_unit(symbol)


def has_dimension(name: str) -> bool:
    return get_default_registry().has_dimension(name)


__all__ = [
    'UnitDefinition',
    'DimensionDefinition',
    'UnitRegistry',
    'get_default_registry',
    'set_default_registry',
    'resolve_registry',
    'define_dimension',
    'get_unit_definition',
    'get_dimension_definition',
    'list_dimensions',
    'list_units',
    'has_unit',
    'has_dimension',
]
