"""SIPp runner - supervises a single SIPp load test run."""

from .config import RunConfiguration, parse_configuration, validate_configuration
from .command import build_command
from .errors import (
    ExitOnInternalCommand,
    FatalError,
    FatalSocketBindingError,
    InvalidConfigurationError,
    NoCallsProcessed,
    SippError,
    SippGenericError,
    TerminatedBySignal,
)
from .runner import ExitOutcome, ExitStatus, Runner, RunnerState

__version__ = "0.1.0"

__all__ = [
    "RunConfiguration",
    "parse_configuration",
    "validate_configuration",
    "build_command",
    "ExitOnInternalCommand",
    "FatalError",
    "FatalSocketBindingError",
    "InvalidConfigurationError",
    "NoCallsProcessed",
    "SippError",
    "SippGenericError",
    "TerminatedBySignal",
    "ExitOutcome",
    "ExitStatus",
    "Runner",
    "RunnerState",
]
