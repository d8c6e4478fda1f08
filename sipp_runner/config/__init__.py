"""Config module - run configuration loading and validation."""

from .schema import (
    REQUIRED_OPTIONS,
    RunConfiguration,
    ValidationError,
    ValidationResult,
)
from .parser import parse_configuration, parse_configuration_data
from .validator import validate_configuration

__all__ = [
    "REQUIRED_OPTIONS",
    "RunConfiguration",
    "ValidationError",
    "ValidationResult",
    "parse_configuration",
    "parse_configuration_data",
    "validate_configuration",
]
