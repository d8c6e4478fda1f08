"""Shared fixtures for sipp_runner tests."""

from unittest import mock

import pytest

from sipp_runner.runner import Runner


@pytest.fixture
def logger():
    return mock.Mock(name="logger")


@pytest.fixture
def settings():
    return {}


@pytest.fixture
def runner(settings, logger):
    return Runner(settings, logger=logger)


@pytest.fixture
def exiting_command():
    """Build a shell command that writes to stderr and exits with a code."""
    def _command(exit_code: int, error_string: str = "Some error") -> str:
        return f"sh -c 'echo \"{error_string}\" 1>&2; exit {exit_code}'"
    return _command
