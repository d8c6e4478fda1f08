"""Classification of SIPp exit statuses.

SIPp documents a handful of exit codes. Each maps to one outcome, and each
failing outcome maps to one exception class. Codes outside the table are
generic failures. A negative return code means the child was killed by a
signal and is classified on its own, never through the code table.
"""

import signal
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..errors import (
    ExitOnInternalCommand,
    FatalError,
    FatalSocketBindingError,
    NoCallsProcessed,
    SippError,
    SippGenericError,
    TerminatedBySignal,
)


class ExitOutcome(str, Enum):
    """Possible outcomes of a SIPp run."""
    SUCCESS = "success"
    PARTIAL_FAILURE = "partial_failure"
    EXIT_ON_INTERNAL_COMMAND = "exit_on_internal_command"
    NO_CALLS_PROCESSED = "no_calls_processed"
    FATAL_SOCKET_BINDING_ERROR = "fatal_socket_binding_error"
    FATAL_ERROR = "fatal_error"
    GENERIC_ERROR = "generic_error"
    TERMINATED_BY_SIGNAL = "terminated_by_signal"

    @property
    def is_error(self) -> bool:
        return self not in (ExitOutcome.SUCCESS, ExitOutcome.PARTIAL_FAILURE)


EXIT_CODE_OUTCOMES: dict[int, ExitOutcome] = {
    0: ExitOutcome.SUCCESS,
    1: ExitOutcome.PARTIAL_FAILURE,
    97: ExitOutcome.EXIT_ON_INTERNAL_COMMAND,
    99: ExitOutcome.NO_CALLS_PROCESSED,
    254: ExitOutcome.FATAL_SOCKET_BINDING_ERROR,
    255: ExitOutcome.FATAL_ERROR,
}

OUTCOME_ERRORS: dict[ExitOutcome, type[SippError]] = {
    ExitOutcome.EXIT_ON_INTERNAL_COMMAND: ExitOnInternalCommand,
    ExitOutcome.NO_CALLS_PROCESSED: NoCallsProcessed,
    ExitOutcome.FATAL_SOCKET_BINDING_ERROR: FatalSocketBindingError,
    ExitOutcome.FATAL_ERROR: FatalError,
    ExitOutcome.GENERIC_ERROR: SippGenericError,
}


def classify_exit_status(returncode: int) -> ExitOutcome:
    """Map a subprocess return code to an ExitOutcome.

    Args:
        returncode: Popen.returncode; negative when killed by a signal.

    Returns:
        The matching outcome, GENERIC_ERROR for undocumented codes.
    """
    if returncode < 0:
        return ExitOutcome.TERMINATED_BY_SIGNAL
    return EXIT_CODE_OUTCOMES.get(returncode, ExitOutcome.GENERIC_ERROR)


def _signal_name(signal_number: int) -> str:
    try:
        return signal.Signals(signal_number).name
    except ValueError:
        return f"signal {signal_number}"


@dataclass
class ExitStatus:
    """Exit status of a finished SIPp process and its captured stderr."""
    returncode: int
    stderr: str = ""
    outcome: ExitOutcome = field(init=False)

    def __post_init__(self):
        self.outcome = classify_exit_status(self.returncode)

    @property
    def signal_number(self) -> Optional[int]:
        """Signal that killed the process, None if it exited normally."""
        if self.returncode < 0:
            return -self.returncode
        return None

    @property
    def message(self) -> str:
        """Error text: stderr without its trailing line break."""
        message = self.stderr.rstrip("\r\n")
        if not message and self.signal_number is not None:
            message = f"SIPp terminated by {_signal_name(self.signal_number)}"
        return message

    def raise_for_status(self) -> bool:
        """Convert the outcome to a return value or an exception.

        Returns:
            True on success, False when some calls failed.

        Raises:
            TerminatedBySignal: If the process was killed by a signal.
            SippError: The subclass mapped to the exit code otherwise.
        """
        if self.outcome is ExitOutcome.SUCCESS:
            return True
        if self.outcome is ExitOutcome.PARTIAL_FAILURE:
            return False
        if self.outcome is ExitOutcome.TERMINATED_BY_SIGNAL:
            raise TerminatedBySignal(self.message, signal_number=self.signal_number)
        raise OUTCOME_ERRORS[self.outcome](self.message, returncode=self.returncode)
