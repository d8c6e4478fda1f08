"""Exceptions raised when a SIPp run fails.

Failures to create the child process or to signal it are not wrapped here:
the OSError raised by subprocess or os.kill reaches the caller unchanged.
"""

from typing import Optional


class SippError(Exception):
    """Base class for failures classified from the SIPp exit status.

    The message is the text SIPp wrote to its standard error.
    """

    def __init__(self, message: str = "", returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class ExitOnInternalCommand(SippError):
    """SIPp exited on an internal command (exit code 97)."""


class NoCallsProcessed(SippError):
    """SIPp exited without processing any call (exit code 99)."""


class FatalSocketBindingError(SippError):
    """SIPp could not bind its socket (exit code 254)."""


class FatalError(SippError):
    """SIPp reported a fatal error (exit code 255)."""


class SippGenericError(SippError):
    """SIPp exited with an undocumented non-zero code."""


class TerminatedBySignal(SippError):
    """SIPp was terminated by a signal and has no exit code."""

    def __init__(self, message: str = "", signal_number: int = 0):
        super().__init__(message, returncode=-signal_number)
        self.signal_number = signal_number


class InvalidConfigurationError(ValueError):
    """The run configuration cannot produce a SIPp command."""

    def __init__(self, errors: list):
        self.errors = list(errors)
        details = "; ".join(f"{e.path}: {e.message}" for e in self.errors)
        super().__init__(f"Invalid run configuration: {details}")
