"""
Test Unit Conversions
=====================

Conversion law and seed data for the standard dimensions.
"""

import pytest

from dimensional.errors import DimensionMismatchError
from dimensional.standard import STANDARD_DIMENSIONS


def _all_units():
    for dim in STANDARD_DIMENSIONS:
        for symbol in dim.units:
            yield dim.name, symbol


def _unit_pairs():
    for dim in STANDARD_DIMENSIONS:
        for source in dim.units:
            for target in dim.units:
                yield source, target


@pytest.mark.parametrize("dimension,symbol", list(_all_units()))
def test_round_trip_same_unit(q, dimension, symbol):
    """Converting a unit to itself returns the same value."""
    for v in [42.5, -3.0, 0.0]:
        back = q(v, symbol).convert_to(symbol)

        assert back.value == pytest.approx(v, rel=1e-9, abs=1e-9)
        assert back.unit_symbol == symbol


@pytest.mark.parametrize("dimension,symbol", list(_all_units()))
def test_round_trip_through_base(q, dimension, symbol):
    """Every unit converts to its base unit and back."""
    base_symbol = next(d.base_unit_symbol for d in STANDARD_DIMENSIONS if d.name == dimension)

    back = q(42.5, symbol).convert_to(base_symbol).convert_to(symbol)

    assert back.value == pytest.approx(42.5, rel=1e-9)
    assert back.unit_symbol == symbol


@pytest.mark.parametrize("source,target", list(_unit_pairs()))
def test_conversion_formula(registry, q, source, target):
    """target value = (v * f1 + o1 - o2) / f2"""
    s = registry.get_unit_definition(source)
    t = registry.get_unit_definition(target)
    expected = (100 * s.factor + s.offset - t.offset) / t.factor

    result = q(100, source).convert_to(target)

    assert result.unit_symbol == target
    assert result.value == pytest.approx(expected, rel=1e-9, abs=1e-6)


def test_length(q):
    assert q(1, 'km').convert_to('m').value == 1000
    assert q(12, 'in').convert_to('ft').value == pytest.approx(1)
    assert q(1, 'nmi').convert_to('m').value == 1852


def test_mass(q):
    assert q(1, 'lb').convert_to('kg').value == pytest.approx(0.45359237)
    assert q(16, 'oz').convert_to('lb').value == pytest.approx(1)
    assert q(1, 't').convert_to('kg').value == 1000


def test_time(q):
    assert q(1, 'd').convert_to('h').value == pytest.approx(24)
    assert q(1, 'wk').convert_to('d').value == pytest.approx(7)
    assert q(1, 'yr').convert_to('d').value == pytest.approx(365.25)


def test_temperature_celsius(q):
    assert q(0, 'K').convert_to('degC').value == -273.15
    assert q(0, 'degC').convert_to('K').value == pytest.approx(273.15)
    assert q(300, 'K').convert_to('degC').value == pytest.approx(26.85)


def test_temperature_fahrenheit(q):
    assert q(32, 'degF').convert_to('degC').value == pytest.approx(0, abs=1e-9)
    assert q(212, 'degF').convert_to('degC').value == pytest.approx(100)
    assert q(100, 'degC').convert_to('degF').value == pytest.approx(212)
    assert q(-40, 'degC').convert_to('degF').value == pytest.approx(-40)


def test_temperature_absolute_zero(q):
    assert q(-459.67, 'degF').convert_to('K').value == pytest.approx(0, abs=1e-9)
    assert q(0, 'K').convert_to('degR').value == pytest.approx(0)


def test_temperature_rankine(q):
    assert q(491.67, 'degR').convert_to('K').value == pytest.approx(273.15)
    assert q(491.67, 'degR').convert_to('degF').value == pytest.approx(32)


def test_temperature_base_value_includes_offset(q):
    assert q(25, 'degC').value_in_base_units == pytest.approx(298.15)


def test_small_si_prefixes(q):
    assert q(1, 'µm').convert_to('nm').value == pytest.approx(1000)
    assert q(1, 'mA').convert_to('µA').value == pytest.approx(1000)
    assert q(1, 'kmol').convert_to('mol').value == 1000
    assert q(1, 'kcd').convert_to('mcd').value == pytest.approx(1e6)


def test_astronomical(q):
    assert q(1, 'pc').convert_to('ly').value == pytest.approx(3.26156, rel=1e-5)


def test_cross_dimension_rejected(q):
    for source, target in [('m', 'kg'), ('degC', 's'), ('mol', 'cd')]:
        with pytest.raises(DimensionMismatchError):
            q(1, source).convert_to(target)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
