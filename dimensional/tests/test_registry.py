"""
Test Registry
=============
"""

import logging
import threading

import pytest

from dimensional.errors import ConsistencyError, NotFoundError
from dimensional.registry import DimensionDefinition, UnitRegistry


def test_get_unit_definition(registry):
    """Base unit resolves with identity transform."""
    unit = registry.get_unit_definition('m')

    assert unit.factor == 1
    assert unit.offset == 0
    assert unit.dimension_name == 'Length'


def test_unknown_unit_raises(registry):
    """Unknown symbol fails instead of returning nothing."""
    with pytest.raises(NotFoundError, match='Unit "unknown_unit" is not defined'):
        registry.get_unit_definition('unknown_unit')


def test_not_found_is_key_error(registry):
    with pytest.raises(KeyError):
        registry.get_unit_definition('furlong')


def test_get_dimension_definition(registry):
    dim = registry.get_dimension_definition('Length')

    assert dim.name == 'Length'
    assert dim.base_unit_symbol == 'm'
    assert 'km' in dim.units

    with pytest.raises(NotFoundError, match='Dimension "UnknownDimension" is not defined'):
        registry.get_dimension_definition('UnknownDimension')


def test_list_dimensions_registration_order(registry):
    names = [d.name for d in registry.list_dimensions()]

    assert names == [
        'Length', 'Mass', 'Time', 'ElectricCurrent',
        'Temperature', 'AmountOfSubstance', 'LuminousIntensity',
    ]


def test_list_dimensions_is_snapshot(registry):
    """Mutating the returned list does not touch the registry."""
    snapshot = registry.list_dimensions()
    snapshot.clear()

    assert len(registry.list_dimensions()) == 7


def test_define_custom_dimension(registry):
    registry.define_dimension({
        'name': 'TestDim',
        'baseUnitSymbol': 'test_base',
        'units': {
            'test_base': {'factor': 1},
            'test_k': {'factor': 1000},
        },
    })

    unit = registry.get_unit_definition('test_k')
    assert unit.factor == 1000
    assert unit.offset == 0
    assert unit.dimension_name == 'TestDim'


def test_base_unit_added_when_missing():
    """Base unit is registered with factor 1 even if not listed."""
    reg = UnitRegistry()
    reg.define_dimension(DimensionDefinition('Angle', 'rad', {'deg': {'factor': 0.0174533}}))

    base = reg.get_unit_definition('rad')
    assert base.factor == 1
    assert base.offset == 0
    assert base.dimension_name == 'Angle'
    assert 'rad' in reg.get_dimension_definition('Angle').units


def test_offset_defaults_to_zero():
    reg = UnitRegistry()
    reg.define_dimension({'name': 'Length', 'base_unit_symbol': 'm', 'units': {'km': 1000}})

    assert reg.get_unit_definition('km').offset == 0.0


def test_base_unit_with_factor_raises(registry):
    """Re-registering the base unit with a non-identity factor is inconsistent."""
    with pytest.raises(ConsistencyError, match='factor of 1 and offset of 0'):
        registry.define_dimension({
            'name': 'Length',
            'base_unit_symbol': 'm',
            'units': {'m': {'factor': 2}},
        })


def test_base_unit_with_offset_raises():
    reg = UnitRegistry()
    with pytest.raises(ConsistencyError):
        reg.define_dimension({
            'name': 'Temperature',
            'base_unit_symbol': 'K',
            'units': {'K': {'factor': 1, 'offset': 1}},
        })


def test_base_unit_owned_by_other_dimension_raises(registry):
    """A base unit already owned by another dimension is rejected."""
    with pytest.raises(ConsistencyError, match='registered to dimension "Length"'):
        registry.define_dimension({
            'name': 'Distance',
            'base_unit_symbol': 'm',
            'units': {'yard': {'factor': 0.9144}},
        })


def test_failed_definition_leaves_registry_unchanged(registry):
    """No partial registration on failure."""
    with pytest.raises(ConsistencyError):
        registry.define_dimension({
            'name': 'Distance',
            'base_unit_symbol': 'm',
            'units': {'furlong': {'factor': 201.168}},
        })

    assert not registry.has_unit('furlong')
    assert not registry.has_dimension('Distance')


def test_zero_factor_rejected():
    reg = UnitRegistry()
    with pytest.raises(ConsistencyError, match='factor of 0'):
        reg.define_dimension({'name': 'Length', 'base_unit_symbol': 'm', 'units': {'x': 0}})


def test_overwrite_dimension_warns(registry, caplog):
    """Duplicate dimension name is a warning, not an error."""
    with caplog.at_level(logging.WARNING, logger='dimensional.registry'):
        registry.define_dimension({
            'name': 'Length',
            'base_unit_symbol': 'm',
            'units': {'furlong': {'factor': 201.168}},
        })

    assert 'Dimension "Length" is already defined' in caplog.text
    assert registry.get_unit_definition('furlong').factor == 201.168


def test_duplicate_unit_symbol_last_write_wins(registry, caplog):
    """A unit symbol registered again moves to the new dimension."""
    with caplog.at_level(logging.WARNING, logger='dimensional.registry'):
        registry.define_dimension({
            'name': 'Pressure',
            'base_unit_symbol': 'Pa',
            'units': {'t': {'factor': 133.322}},
        })

    assert 'Unit symbol "t" is already defined' in caplog.text
    unit = registry.get_unit_definition('t')
    assert unit.dimension_name == 'Pressure'
    assert unit.factor == 133.322


def _owned(registry, name):
    return set(registry.get_dimension_definition(name).units)


def _resolving(registry, name):
    return {u.symbol for u in registry.list_units(name)}


def test_moved_unit_leaves_previous_dimension(registry):
    """Dimension units and list_units agree after a unit changes owner."""
    registry.define_dimension({
        'name': 'Pressure',
        'base_unit_symbol': 'Pa',
        'units': {'t': {'factor': 133.322}},
    })

    assert 't' not in _owned(registry, 'Mass')
    assert 't' in _owned(registry, 'Pressure')
    for name in ['Mass', 'Pressure']:
        assert _owned(registry, name) == _resolving(registry, name)

    listed = {d.name: set(d.units) for d in registry.list_dimensions()}
    assert 't' not in listed['Mass']


def test_overwritten_dimension_keeps_resolving_units(registry):
    """Units from an earlier definition still resolve and are still listed."""
    registry.define_dimension({'name': 'Length', 'base_unit_symbol': 'm', 'units': {'furlong': 201.168}})

    assert {'km', 'furlong', 'm'} <= _owned(registry, 'Length')
    assert _owned(registry, 'Length') == _resolving(registry, 'Length')


def test_returned_definition_is_read_only(registry):
    dim = registry.get_dimension_definition('Mass')

    with pytest.raises(TypeError):
        dim.units['zz'] = {'factor': 2.0, 'offset': 0.0}

    dim.units['kg']['factor'] = 99.0
    assert registry.get_dimension_definition('Mass').units['kg']['factor'] == 1.0
    assert registry.get_unit_definition('kg').factor == 1.0


def test_cannot_move_another_base_unit(registry):
    with pytest.raises(ConsistencyError, match='base unit of dimension "Mass"'):
        registry.define_dimension({
            'name': 'Weight',
            'base_unit_symbol': 'wt',
            'units': {'kg': {'factor': 1}},
        })

    assert registry.get_unit_definition('kg').dimension_name == 'Mass'
    assert not registry.has_dimension('Weight')


def test_missing_factor_is_value_error(registry):
    """Malformed input is not reported as an unknown symbol."""
    with pytest.raises(ValueError, match='"y" in dimension "X" has no conversion factor') as exc:
        registry.define_dimension({'name': 'X', 'base_unit_symbol': 'x', 'units': {'y': {'offset': 1}}})
    assert not isinstance(exc.value, KeyError)

    with pytest.raises(ValueError):
        registry.define_dimension(DimensionDefinition('X', 'x', {'y': {'offset': 1}}))
    assert not registry.has_dimension('X')


def test_base_unit_symbol(registry):
    assert registry.base_unit_symbol('Temperature') == 'K'
    with pytest.raises(NotFoundError):
        registry.base_unit_symbol('Money')


def test_has_unit_and_dimension(registry):
    assert registry.has_unit('degC')
    assert not registry.has_unit('parsecsquared')
    assert registry.has_dimension('Time')
    assert not registry.has_dimension('Money')
    assert 'kg' in registry


def test_dimension_ids_follow_registration(registry):
    assert registry.dimension_id('Length') == 0
    assert registry.dimension_id('Time') == 2

    registry.define_dimension({'name': 'Length', 'base_unit_symbol': 'm', 'units': {}})
    assert registry.dimension_id('Length') == 0

    with pytest.raises(NotFoundError):
        registry.dimension_id('Money')


def test_list_units_by_dimension(registry):
    symbols = {u.symbol for u in registry.list_units('Temperature')}

    assert symbols == {'K', 'degC', 'degF', 'degR'}

    with pytest.raises(NotFoundError):
        registry.list_units('Money')


def test_isolated_registries():
    """Registries do not share state."""
    a = UnitRegistry()
    b = UnitRegistry()
    a.define_dimension({'name': 'Length', 'base_unit_symbol': 'm', 'units': {}})

    assert a.has_unit('m')
    assert not b.has_unit('m')


def test_concurrent_registration():
    """Parallel registrations all land."""
    reg = UnitRegistry()

    def register(i):
        reg.define_dimension({
            'name': f'Dim{i}',
            'base_unit_symbol': f'u{i}',
            'units': {f'k{i}': {'factor': 1000}},
        })

    threads = [threading.Thread(target=register, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(reg.list_dimensions()) == 20
    assert len(reg) == 40
    assert sorted(reg.dimension_id(f'Dim{i}') for i in range(20)) == list(range(20))


def test_default_registry_is_seeded():
    from dimensional.registry import get_default_registry, get_unit_definition

    assert get_default_registry().has_dimension('LuminousIntensity')
    assert get_unit_definition('mcd').factor == 1e-3


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
