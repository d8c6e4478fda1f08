"""Tests for stopping a SIPp run."""

import signal
from unittest import mock

import pytest

from sipp_runner.runner import process_runner

PID = 1234


@pytest.fixture
def kill(monkeypatch):
    kill = mock.Mock(name="os.kill")
    monkeypatch.setattr(process_runner.os, "kill", kill)
    return kill


def test_kills_process_when_pid_recorded(runner, kill):
    runner.sipp_pid = PID

    runner.stop()

    kill.assert_called_once_with(PID, signal.SIGKILL)


def test_does_nothing_without_pid(runner, kill):
    runner.stop()

    kill.assert_not_called()


def test_process_lookup_error_propagates(runner, kill):
    runner.sipp_pid = PID
    kill.side_effect = ProcessLookupError(3, "No such process")

    with pytest.raises(ProcessLookupError):
        runner.stop()


def test_permission_error_propagates(runner, kill):
    runner.sipp_pid = PID
    kill.side_effect = PermissionError(1, "Operation not permitted")

    with pytest.raises(PermissionError):
        runner.stop()


def test_does_not_clear_pid(runner, kill):
    runner.sipp_pid = PID

    runner.stop()

    assert runner.sipp_pid == PID
