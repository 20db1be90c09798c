"""
Dimensional Unit Files
======================

Extra dimensions are declared in YAML and registered at start-up.

    # units.yaml
    dimensions:
      - name: Information
        base_unit: bit
        units:
          bit: 1
          B: 8
          kB: {factor: 8000}
      - name: Angle
        base_unit: rad
        units:
          rad: 1
          deg: 0.017453292519943295

A unit entry is either a bare factor or a mapping with 'factor' and an
optional 'offset'. The environment variable DIMENSIONAL_UNITS_FILE names a
file that the CLI and server load on start-up.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from dimensional.config.validator import (
    ConfigurationError,
    require_number,
    validate_section,
)
from dimensional.registry import DimensionDefinition, UnitRegistry, resolve_registry

logger = logging.getLogger(__name__)

UNITS_FILE_ENV = 'DIMENSIONAL_UNITS_FILE'


def _parse_unit(symbol: str, spec: Any, section: str, path: Path) -> Dict[str, float]:
    if isinstance(spec, dict):
        validate_section(spec, 'unit', f"{section}.units.{symbol}", path)
        factor = require_number(spec['factor'], 'factor', f"{section}.units.{symbol}", path)
        offset = require_number(spec.get('offset', 0.0), 'offset', f"{section}.units.{symbol}", path)
    else:
        factor = require_number(spec, 'factor', f"{section}.units.{symbol}", path)
        offset = 0.0

    if factor == 0:
        raise ConfigurationError(f"{section}.units.{symbol}: factor must be nonzero (in {path})")
    return {'factor': factor, 'offset': offset}


def load_dimension_file(path: Union[str, Path]) -> List[DimensionDefinition]:
    """
    Load dimension definitions from a YAML file.

    Raises:
        ConfigurationError: file missing, not a mapping, or entries incomplete
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Units file not found: {path}")

    with open(path) as f:
        try:
            config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(config, dict) or not isinstance(config.get('dimensions'), list):
        raise ConfigurationError(f"{path}: expected a top-level 'dimensions' list")

    definitions = []
    for i, entry in enumerate(config['dimensions']):
        section = f"dimensions[{i}]"
        if not isinstance(entry, dict):
            raise ConfigurationError(f"{section}: expected a mapping (in {path})")

        validate_section(entry, 'dimension', section, path)
        if not isinstance(entry['units'], dict):
            raise ConfigurationError(f"{section}.units: expected a mapping (in {path})")

        units = {
            str(symbol): _parse_unit(str(symbol), spec, section, path)
            for symbol, spec in entry['units'].items()
        }
        definitions.append(DimensionDefinition(
            name=str(entry['name']),
            base_unit_symbol=str(entry['base_unit']),
            units=units,
        ))

    return definitions


def register_dimension_file(
    path: Union[str, Path],
    registry: Optional[UnitRegistry] = None,
) -> List[str]:
    """Load a YAML unit file into a registry. Returns the dimension names."""
    registry = resolve_registry(registry)
    definitions = load_dimension_file(path)

    names = []
    for definition in definitions:
        registry.define_dimension(definition)
        logger.info(f"Registered dimension {definition.name} from {path} ({len(definition.units)} units)")
        names.append(definition.name)
    return names


def load_environment_units(registry: Optional[UnitRegistry] = None) -> List[str]:
    """Register the file named by DIMENSIONAL_UNITS_FILE, if set."""
    path = os.environ.get(UNITS_FILE_ENV)
    if not path:
        return []
    return register_dimension_file(path, registry)
