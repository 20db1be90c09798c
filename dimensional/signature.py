"""
Dimension Signature Algebra
===========================

A dimension signature is the exponent vector of a quantity over named
base dimensions:

    speed  = {Length: 1, Time: -1}
    force  = {Mass: 1, Length: 1, Time: -2}

Rules:
    - exponents are nonzero integers; a zero exponent is dropped, never stored
    - a missing dimension means exponent 0
    - multiply -> add exponents, divide -> subtract exponents

Signatures are immutable: terms are kept as a name-sorted tuple, so
equality is a plain tuple comparison and signatures can be dict keys.

Composite unit symbols (m/s, m.kg/s^2) are derived from a signature by
looking up each dimension's base unit in a registry.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Mapping, Tuple, Union

from dimensional.errors import NotFoundError

if TYPE_CHECKING:
    from dimensional.registry import UnitRegistry


DIMENSIONLESS_SYMBOL = "dimensionless"


# =============================================================================
# SIGNATURE TYPE
# =============================================================================

@dataclass(frozen=True)
class DimensionSignature:
    """
    Immutable exponent vector over dimension names.

    Examples:
        >>> speed = DimensionSignature.of(Length=1, Time=-1)
        >>> speed['Length'], speed['Mass']
        (1, 0)
        >>> str(speed * DimensionSignature.of(Time=1))
        'Length'
    """
    terms: Tuple[Tuple[str, int], ...] = ()

    def __post_init__(self):
        merged: Dict[str, int] = {}
        for name, exponent in self.terms:
            if isinstance(exponent, bool) or not isinstance(exponent, int):
                raise TypeError(f"Exponent for {name} must be int, got {exponent!r}")
            merged[name] = merged.get(name, 0) + exponent
        normalized = tuple(sorted((n, e) for n, e in merged.items() if e != 0))
        object.__setattr__(self, 'terms', normalized)

    @classmethod
    def of(cls, **exponents: int) -> DimensionSignature:
        return cls(tuple(exponents.items()))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, int]) -> DimensionSignature:
        return cls(tuple(mapping.items()))

    @property
    def mapping(self) -> Dict[str, int]:
        return dict(self.terms)

    def is_dimensionless(self) -> bool:
        return not self.terms

    def __getitem__(self, name: str) -> int:
        for dim, exponent in self.terms:
            if dim == name:
                return exponent
        return 0

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self):
        return iter(self.terms)

    def __mul__(self, other: SignatureLike) -> DimensionSignature:
        return combine(self, other)

    def __truediv__(self, other: SignatureLike) -> DimensionSignature:
        return divide_signatures(self, other)

    def __pow__(self, n: int) -> DimensionSignature:
        return power(self, n)

    def __str__(self) -> str:
        return to_display_string(self)

    def __repr__(self) -> str:
        return f"DimensionSignature({self.mapping!r})"


SignatureLike = Union[DimensionSignature, Mapping[str, int]]

DIMENSIONLESS = DimensionSignature()


def as_signature(value: SignatureLike) -> DimensionSignature:
    if isinstance(value, DimensionSignature):
        return value
    return DimensionSignature.from_mapping(value)


# =============================================================================
# ALGEBRA
# =============================================================================

def signatures_equal(a: SignatureLike, b: SignatureLike) -> bool:
    """Same dimensions with identical exponents (order irrelevant)."""
    return as_signature(a).terms == as_signature(b).terms


def combine(a: SignatureLike, b: SignatureLike) -> DimensionSignature:
    """Multiply quantities -> add exponents"""
    return DimensionSignature(as_signature(a).terms + as_signature(b).terms)


def divide_signatures(a: SignatureLike, b: SignatureLike) -> DimensionSignature:
    """Divide quantities -> subtract exponents"""
    negated = tuple((name, -exponent) for name, exponent in as_signature(b).terms)
    return DimensionSignature(as_signature(a).terms + negated)


def power(sig: SignatureLike, n: int) -> DimensionSignature:
    """Raise to power -> multiply all exponents"""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Power must be an integer, got {n!r}")
    return DimensionSignature(tuple((name, e * n) for name, e in as_signature(sig).terms))


def to_display_string(sig: SignatureLike) -> str:
    """
    Render a signature for messages: 'Length.Time^-1'.

    The dimensionless signature renders as an empty string.
    """
    parts = []
    for name, exponent in as_signature(sig).terms:
        parts.append(name if exponent == 1 else f"{name}^{exponent}")
    return '.'.join(parts)


# =============================================================================
# COMPOSITE UNIT SYMBOLS
# =============================================================================

def derive_composite_unit_symbol(sig: SignatureLike, registry: UnitRegistry) -> str:
    """
    Derive a unit symbol for a signature from the registry's base units.

    Examples (standard registry):
        {}                       -> 'dimensionless'
        {Length: 1}              -> 'm'
        {Length: 1, Time: -1}    -> 'm/s'
        {Length: 2}              -> 'm^2'
        {Time: -1}               -> '1/s'

    Dimensions are ordered by registration; dimensions the registry does
    not know come last and are rendered by name.
    """
    sig = as_signature(sig)
    if sig.is_dimensionless():
        return DIMENSIONLESS_SYMBOL

    if len(sig) == 1:
        name, exponent = sig.terms[0]
        if exponent == 1 and registry.has_dimension(name):
            return registry.base_unit_symbol(name)

    def order(term: Tuple[str, int]) -> Tuple[int, int, str]:
        name = term[0]
        if registry.has_dimension(name):
            return (0, registry.dimension_id(name), name)
        return (1, 0, name)

    numerator: List[str] = []
    denominator: List[str] = []
    for name, exponent in sorted(sig.terms, key=order):
        if registry.has_dimension(name):
            token = registry.base_unit_symbol(name)
        else:
            token = name
        part = token if abs(exponent) == 1 else f"{token}^{abs(exponent)}"
        if exponent > 0:
            numerator.append(part)
        else:
            denominator.append(part)

    num = '.'.join(numerator)
    den = '.'.join(denominator)
    if not numerator and denominator:
        return f"1/{den}"
    if not denominator:
        return num or "1"
    return f"{num}/{den}"


_TOKEN_SPLIT = re.compile(r'[.*]')


def parse_composite_unit_symbol(symbol: str, registry: UnitRegistry) -> DimensionSignature:
    """
    Parse a symbol made of base-unit tokens back into a signature.

    Inverse of derive_composite_unit_symbol for registered dimensions:
    'm/s', 'm.kg/s^2', '1/s', 'm^2', 'dimensionless'.

    Raises:
        NotFoundError: a token is not the base unit of a registered dimension
        ValueError: malformed symbol
    """
    cleaned = symbol.strip()
    if cleaned in (DIMENSIONLESS_SYMBOL, "1"):
        return DIMENSIONLESS
    if cleaned == "":
        raise ValueError("Empty unit symbol")

    pieces = cleaned.split('/')
    if len(pieces) > 2:
        raise ValueError(f"Malformed unit symbol '{symbol}': more than one '/'")

    base_units = {d.base_unit_symbol: d.name for d in registry.list_dimensions()}

    terms: List[Tuple[str, int]] = []
    for sign, piece in zip((1, -1), pieces):
        piece = piece.strip()
        if piece == "1" and sign == 1:
            continue
        for token in _TOKEN_SPLIT.split(piece):
            token = token.strip()
            if token == "":
                raise ValueError(f"Malformed unit symbol '{symbol}': empty token")
            if '^' in token:
                base, power_text = token.split('^', 1)
                try:
                    exponent = int(power_text)
                except ValueError as exc:
                    raise ValueError(f"Exponent must be integer in '{token}'") from exc
            else:
                base, exponent = token, 1
            if base not in base_units:
                raise NotFoundError('unit', base)
            terms.append((base_units[base], sign * exponent))

    return DimensionSignature(tuple(terms))


__all__ = [
    'DimensionSignature',
    'SignatureLike',
    'DIMENSIONLESS',
    'DIMENSIONLESS_SYMBOL',
    'as_signature',
    'signatures_equal',
    'combine',
    'divide_signatures',
    'power',
    'to_display_string',
    'derive_composite_unit_symbol',
    'parse_composite_unit_symbol',
]
