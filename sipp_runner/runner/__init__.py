"""Runner module - SIPp process supervision."""

from .exit_status import (
    EXIT_CODE_OUTCOMES,
    OUTCOME_ERRORS,
    ExitOutcome,
    ExitStatus,
    classify_exit_status,
)
from .process_runner import Runner, RunnerState
from .stream_reader import StderrReader

__all__ = [
    "EXIT_CODE_OUTCOMES",
    "OUTCOME_ERRORS",
    "ExitOutcome",
    "ExitStatus",
    "classify_exit_status",
    "Runner",
    "RunnerState",
    "StderrReader",
]
