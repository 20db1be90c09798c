"""
Dimensional Configuration Validator

Unit files declare everything explicitly: a dimension without a name,
base unit or unit table is rejected, never patched with defaults.

Usage:
    from dimensional.config.validator import ConfigurationError, validate_required

    validate_required(entry, ['name', 'base_unit', 'units'], 'dimensions[0]', path)
"""

from pathlib import Path
from typing import Any, Dict, List, Optional


class ConfigurationError(Exception):
    """
    Raised when a unit configuration file is missing or malformed.

    The message tells the user exactly which fields to add and where.
    """
    pass


# Required fields per configuration section
REQUIRED_FIELDS = {
    'dimension': [
        'name',
        'base_unit',
        'units',
    ],
    'unit': [
        'factor',
    ],
}


def validate_required(
    config: Dict[str, Any],
    required_keys: List[str],
    section: str,
    config_path: Optional[Path] = None,
) -> None:
    """
    Validate that all required configuration keys are present.

    Args:
        config: Configuration dictionary
        required_keys: List of keys that must be present and not None
        section: Section name (for error message)
        config_path: Path to config file (for error message)

    Raises:
        ConfigurationError: If any required key is missing or None
    """
    missing = [key for key in required_keys if key not in config or config[key] is None]

    if missing:
        location = f"File: {config_path}\n" if config_path else ""
        raise ConfigurationError(
            f"\n{'='*60}\n"
            f"CONFIGURATION ERROR: Missing required fields\n"
            f"{'='*60}\n"
            f"{location}"
            f"Section: {section}\n\n"
            f"Missing fields:\n"
            f"{''.join(f'  - {k}' + chr(10) for k in missing)}\n"
            f"Add to your units file:\n"
            f"{''.join(f'  {k}: <value>' + chr(10) for k in missing)}"
            f"{'='*60}"
        )


def validate_section(config: Dict[str, Any], kind: str, section: str,
                     config_path: Optional[Path] = None) -> None:
    """
    Validate one entry against the predefined required fields for its kind.

    Raises:
        ConfigurationError: If kind unknown or required fields missing
    """
    if kind not in REQUIRED_FIELDS:
        raise ConfigurationError(f"Unknown configuration section kind: {kind}")

    validate_required(config, REQUIRED_FIELDS[kind], section, config_path)


def require_number(value: Any, field: str, section: str,
                   config_path: Optional[Path] = None) -> float:
    """
    Coerce a configuration value to float.

    Raises:
        ConfigurationError: If the value is not numeric
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        location = f" in {config_path}" if config_path else ""
        raise ConfigurationError(
            f"{section}: '{field}' must be a number, got {value!r}{location}"
        )
    return float(value)

