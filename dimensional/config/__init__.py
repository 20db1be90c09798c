"""
Dimensional Configuration
=========================

YAML unit files and their validation.
"""

from .validator import ConfigurationError, validate_required, validate_section
from .loader import (
    UNITS_FILE_ENV,
    load_dimension_file,
    load_environment_units,
    register_dimension_file,
)

__all__ = [
    'ConfigurationError',
    'validate_required',
    'validate_section',
    'UNITS_FILE_ENV',
    'load_dimension_file',
    'load_environment_units',
    'register_dimension_file',
]
