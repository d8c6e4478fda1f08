"""SIPp command line builder."""

import os
import shlex

from ..config.schema import RunConfiguration
from ..config.validator import validate_configuration
from ..errors import InvalidConfigurationError


def build_command(config: RunConfiguration) -> str:
    """Assemble the SIPp command line for a run configuration.

    Args:
        config: Run options.

    Returns:
        Shell-quoted command string, destination last.

    Raises:
        InvalidConfigurationError: If required options are missing or invalid.
    """
    validation = validate_configuration(config)
    if not validation.valid:
        raise InvalidConfigurationError(validation.errors)

    args: list[str] = []
    if config.sudo:
        args.append("sudo")
    args.append(config.sipp_binary)
    args += ["-i", config.source, "-p", config.source_port]
    args += ["-sf", os.path.abspath(os.path.expanduser(config.scenario))]
    args += [
        "-l", config.max_concurrent,
        "-m", config.number_of_calls,
        "-r", config.calls_per_second,
    ]
    args += ["-s", config.sip_user]
    if config.to_user:
        args += ["-key", "to_user", config.to_user]

    if config.transport_mode:
        args += ["-t", config.transport_mode]

    if config.calls_per_second_incr:
        args += ["-rate_increase", config.calls_per_second_incr]
        if config.calls_per_second_max:
            args += ["-rate_max", config.calls_per_second_max, "-no_rate_quit"]

    if config.stats_file:
        args += ["-trace_stat", "-stf", config.stats_file, "-fd", config.stats_interval]

    if config.errors_report_file:
        args += ["-trace_err", "-error_file", config.errors_report_file]

    if config.summary_report_file:
        args += ["-trace_screen", "-screen_file", config.summary_report_file]

    if config.recv_timeout:
        args += ["-recv_timeout", config.recv_timeout]

    if config.scenario_variables:
        args += ["-inf", config.scenario_variables]

    args.append(config.destination)
    return " ".join(shlex.quote(str(arg)) for arg in args)
