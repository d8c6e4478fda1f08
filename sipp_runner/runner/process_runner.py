"""SIPp process runner - supervises one SIPp child process.

Runs the command built from a RunConfiguration, waits for it to exit and
turns its exit status into a return value or a typed exception. stop()
kills the child while run() is blocked waiting for it.
"""

import logging
import os
import shlex
import signal
import subprocess
import sys
from enum import Enum
from typing import IO, Any, Callable, Mapping, Optional, Union

from ..command.builder import build_command
from ..config.schema import RunConfiguration
from .exit_status import ExitStatus
from .stream_reader import StderrReader

log = logging.getLogger(__name__)

STDERR_DRAIN_TIMEOUT = 0.5


class RunnerState(str, Enum):
    """Lifecycle of the process owned by a Runner."""
    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


class Runner:
    """Runs a single SIPp test and classifies its outcome.

    A Runner owns at most one child process at a time. The process ID is
    recorded while the child runs and cleared once it has exited.
    """

    def __init__(
        self,
        config: Union[RunConfiguration, Mapping[str, Any], None] = None,
        logger: Optional[logging.Logger] = None,
        on_start: Optional[Callable[[int], None]] = None,
        sipp_stdout: Union[IO, int, None] = None,
    ):
        """Initialize runner.

        Args:
            config: Run options, as a RunConfiguration or a plain mapping.
            logger: Logger for progress messages (default: module logger).
            on_start: Called with the PID once SIPp has started.
            sipp_stdout: Where SIPp's stdout goes when full_sipp_output is
                set (default: inherited from this process).
        """
        if config is None:
            config = RunConfiguration()
        elif not isinstance(config, RunConfiguration):
            config = RunConfiguration.from_mapping(config)
        self.config = config
        self.logger = logger or log
        self.on_start = on_start
        self.sipp_stdout = sipp_stdout
        self.sipp_pid: Optional[int] = None
        self.last_status: Optional[ExitStatus] = None
        self._state = RunnerState.IDLE
        self._process: Optional[subprocess.Popen] = None
        self._reader: Optional[StderrReader] = None

    @property
    def state(self) -> RunnerState:
        return self._state

    def is_running(self) -> bool:
        """Whether the child process is still alive.

        Reaps a child whose wait() was interrupted, clearing the PID.
        """
        if self._state is not RunnerState.RUNNING:
            return False
        if self._process is not None and self._process.poll() is None:
            return True
        self._release()
        return False

    def prepare_command(self) -> str:
        """Build the SIPp command line for this run."""
        return build_command(self.config)

    def run(self) -> bool:
        """Run SIPp and wait for it to exit.

        Returns:
            True if every call succeeded, False if SIPp completed but some
            calls failed.

        Raises:
            RuntimeError: If this Runner already has a running process.
            OSError: If the process could not be created.
            SippError: The subclass matching the SIPp exit status, with
                SIPp's stderr output as message.
        """
        if self.is_running():
            raise RuntimeError(f"SIPp is already running with PID {self.sipp_pid}")

        command = self.prepare_command()
        self.logger.info(f"Preparing to run SIPp command: {command}")

        status = self._execute(command)
        self.last_status = status
        result = status.raise_for_status()

        if result:
            self.logger.info("Test completed successfully")
        else:
            self.logger.info("Test completed successfully but some calls failed.")

        if self.config.stats_file:
            stats_path = os.path.abspath(os.path.expanduser(self.config.stats_file))
            self.logger.info(f"Statistics logged at {stats_path}")

        return result

    def stop(self) -> None:
        """Kill the running SIPp process, if any.

        Raises:
            ProcessLookupError: If the process no longer exists.
            PermissionError: If the process may not be signalled.
        """
        if self.sipp_pid is None:
            return
        self.logger.debug(f"Sending SIGKILL to SIPp process {self.sipp_pid}")
        os.kill(self.sipp_pid, signal.SIGKILL)

    def _spawn(self, command: str) -> subprocess.Popen:
        """Start SIPp in its own session with stderr piped."""
        if self.config.full_sipp_output:
            stdout = self.sipp_stdout
        else:
            stdout = subprocess.DEVNULL
        return subprocess.Popen(
            shlex.split(command),
            stdin=subprocess.DEVNULL,
            stdout=stdout,
            stderr=subprocess.PIPE,
            start_new_session=True,
        )

    def _execute(self, command: str) -> ExitStatus:
        process = self._spawn(command)
        self._process = process
        self._state = RunnerState.RUNNING
        self.sipp_pid = process.pid
        self.logger.debug(f"SIPp started with PID {process.pid}")

        relay = sys.stderr if self.config.full_sipp_output else None
        reader = StderrReader(process.stderr, relay=relay)
        self._reader = reader
        reader.start()

        if self.on_start is not None:
            self.on_start(process.pid)

        # On interruption the PID stays recorded so stop() still works
        returncode = process.wait()
        stderr = reader.collect(timeout=STDERR_DRAIN_TIMEOUT)
        self._release()

        self.logger.debug(f"SIPp exited with return code {returncode}")
        return ExitStatus(returncode=returncode, stderr=stderr)

    def _release(self) -> None:
        if self._reader is not None:
            self._reader.cancel()
        self._process = None
        self._reader = None
        self.sipp_pid = None
        self._state = RunnerState.TERMINATED
