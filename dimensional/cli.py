"""
Dimensional CLI

Inspect the unit registry and convert values from the command line.

Usage:
    python -m dimensional convert 100 degF degC
    python -m dimensional convert 5 km mi --json
    python -m dimensional dimensions
    python -m dimensional units --dimension Temperature
    python -m dimensional inspect degF
    python -m dimensional --units-file units.yaml units --dimension Information
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from dimensional import __version__
from dimensional.config import ConfigurationError, load_environment_units, register_dimension_file
from dimensional.errors import QuantityError
from dimensional.quantity import Quantity
from dimensional.registry import UnitRegistry, get_default_registry

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dimensional", description="Dimensional quantity engine")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--units-file", help="YAML file with extra dimensions")
    parser.add_argument("--log-level", default="WARNING", type=str.upper, choices=LOG_LEVELS,
                        help="Logging level (default: WARNING)")

    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Convert a value between units")
    convert.add_argument("value", type=float, help="Numeric value")
    convert.add_argument("source", help="Unit of the value")
    convert.add_argument("target", help="Unit to convert to")
    convert.add_argument("--json", action="store_true", help="Print the transport form")

    sub.add_parser("dimensions", help="List registered dimensions")

    units = sub.add_parser("units", help="List registered units")
    units.add_argument("--dimension", help="Only units of this dimension")

    inspect = sub.add_parser("inspect", help="Show one unit definition")
    inspect.add_argument("symbol", help="Unit symbol")

    return parser


def cmd_convert(args, registry: UnitRegistry) -> None:
    result = Quantity(args.value, args.source, registry).convert_to(args.target)
    if args.json:
        print(json.dumps(result.to_transport(), ensure_ascii=False))
    else:
        print(result.to_display_string())


def cmd_dimensions(args, registry: UnitRegistry) -> None:
    print(f"{'DIMENSION':20} {'BASE':6} UNITS")
    print("=" * 40)
    for dim in registry.list_dimensions():
        print(f"{dim.name:20} {dim.base_unit_symbol:6} {len(registry.list_units(dim.name))}")


def cmd_units(args, registry: UnitRegistry) -> None:
    print(f"{'SYMBOL':8} {'DIMENSION':20} {'FACTOR':>14} {'OFFSET':>14}")
    print("=" * 60)
    for unit in registry.list_units(args.dimension):
        print(f"{unit.symbol:8} {unit.dimension_name:20} {unit.factor:>14.6g} {unit.offset:>14.6g}")


def cmd_inspect(args, registry: UnitRegistry) -> None:
    unit = registry.get_unit_definition(args.symbol)
    dim = registry.get_dimension_definition(unit.dimension_name)
    print(f"Symbol:    {unit.symbol}")
    print(f"Dimension: {unit.dimension_name} (base unit {dim.base_unit_symbol})")
    print(f"Factor:    {unit.factor!r}")
    print(f"Offset:    {unit.offset!r}")
    print(f"Law:       base = value * {unit.factor:g} + {unit.offset:g}")


COMMANDS = {
    "convert": cmd_convert,
    "dimensions": cmd_dimensions,
    "units": cmd_units,
    "inspect": cmd_inspect,
}


def main(argv: Optional[List[str]] = None, registry: Optional[UnitRegistry] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format='%(levelname)s %(name)s: %(message)s')

    if registry is None:
        registry = get_default_registry()

    try:
        load_environment_units(registry)
        if args.units_file:
            register_dimension_file(args.units_file, registry)
        COMMANDS[args.command](args, registry)
    except (QuantityError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
