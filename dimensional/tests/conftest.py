import pytest

from dimensional.registry import UnitRegistry
from dimensional.standard import register_standard_units


@pytest.fixture()
def registry():
    """Fresh, fully seeded registry so tests never touch the process default."""
    return register_standard_units(UnitRegistry())


@pytest.fixture()
def q(registry):
    """Quantity constructor bound to the isolated registry."""
    from dimensional.quantity import Quantity

    def make(value, unit):
        return Quantity(value, unit, registry)

    return make
