"""CLI entry point for the SIPp runner.

Usage:
    sipp-runner run <config.yaml> [options]
    sipp-runner command <config.yaml>

Output is a single JSON object on stdout. Logs, and SIPp's own output when
--full-output is given, go to stderr.
"""

import json
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Optional

import click

from .config import parse_configuration
from .errors import InvalidConfigurationError, SippError
from .logger_config import setup_logger
from .reporting import JsonReporter, RunReport
from .runner import ExitOutcome, Runner

log = logging.getLogger(__name__)

LOG_LEVELS = ["debug", "info", "warning", "error"]


@click.group()
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default="info", show_default=True, help="Logging verbosity.")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None,
              help="Also write logs to this file.")
def cli(log_level: str, log_file: Optional[str]):
    """Run SIPp load tests and report their outcome."""
    setup_logger("sipp_runner", getattr(logging, log_level.upper()), log_file)


@cli.command("run")
@click.argument("config_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--stats-file", default=None, help="Write SIPp statistics to this CSV file.")
@click.option("--full-output", is_flag=True, default=False,
              help="Show SIPp's own output on the terminal.")
@click.option("--save-report", is_flag=True, default=False, help="Save a JSON run report.")
@click.option("--report-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory for saved reports (default: current directory).")
def run_command(
    config_file: Path,
    stats_file: Optional[str],
    full_output: bool,
    save_report: bool,
    report_dir: Optional[Path],
):
    """Run the SIPp test described by CONFIG_FILE."""
    config = _load_configuration(config_file)
    config = config.with_overrides(
        stats_file=stats_file,
        full_sipp_output=True if full_output else None,
    )

    interrupted = False

    def stop_sipp():
        try:
            runner.stop()
        except ProcessLookupError:
            # SIPp exited on its own before the signal reached it
            log.debug("SIPp process already gone")

    def handle_stop(signum, frame):
        nonlocal interrupted
        interrupted = True
        log.info(f"Received {signal.Signals(signum).name}, stopping SIPp")
        stop_sipp()

    def handle_start(pid):
        # A signal received before the PID was recorded had nothing to kill
        if interrupted:
            stop_sipp()

    runner = Runner(config, on_start=handle_start, sipp_stdout=sys.__stderr__)

    previous_handlers = {
        sig: signal.signal(sig, handle_stop) for sig in (signal.SIGINT, signal.SIGTERM)
    }

    start_time = time.time()
    command = ""
    error: Optional[str] = None
    try:
        command = runner.prepare_command()
        runner.run()
    except InvalidConfigurationError as e:
        output_error(str(e))
        sys.exit(1)
    except SippError as e:
        error = str(e)
    except OSError as e:
        output_error(f"Failed to start SIPp: {e}", sipp_command=command)
        sys.exit(1)
    finally:
        for sig, handler in previous_handlers.items():
            signal.signal(sig, handler)

    status = runner.last_status
    stats_path = None
    if config.stats_file:
        stats_path = str(Path(config.stats_file).expanduser().absolute())

    report = RunReport(
        command=command,
        outcome=status.outcome.value,
        returncode=status.returncode,
        success=status.outcome is ExitOutcome.SUCCESS,
        duration_ms=int((time.time() - start_time) * 1000),
        stats_file=stats_path,
        error=error,
    )

    reporter = JsonReporter()
    report_data = reporter.generate(report)
    report_path = None
    if save_report:
        target = (report_dir or Path(".")) / f"sipp_report_{config_file.stem}.json"
        report_path = str(reporter.save(report_data, target))
        log.info(f"Report saved: {report_path}")

    cli_output = reporter.generate_cli_output(report_data, report_path)
    click.echo(json.dumps(cli_output, ensure_ascii=False))

    if interrupted and status.outcome is ExitOutcome.TERMINATED_BY_SIGNAL:
        sys.exit(130)
    if not cli_output["success"]:
        sys.exit(1)


@cli.command("command")
@click.argument("config_file", type=click.Path(dir_okay=False, path_type=Path))
def command_command(config_file: Path):
    """Print the SIPp command line for CONFIG_FILE without running it."""
    config = _load_configuration(config_file)
    try:
        command = Runner(config).prepare_command()
    except InvalidConfigurationError as e:
        output_error(str(e), command="command")
        sys.exit(1)
    click.echo(json.dumps({
        "success": True,
        "command": "command",
        "data": {"sipp_command": command},
        "message": command,
    }, ensure_ascii=False))


def _load_configuration(config_file: Path):
    try:
        return parse_configuration(config_file)
    except (FileNotFoundError, ValueError) as e:
        output_error(f"Failed to load run configuration: {e}")
        sys.exit(1)


def output_error(message: str, command: str = "run", **extra):
    """Output error in the CLI JSON format."""
    output = {
        "success": False,
        "command": command,
        "data": extra or None,
        "message": message,
    }
    click.echo(json.dumps(output, ensure_ascii=False))


def main():
    """Main CLI entry point."""
    cli(prog_name="sipp-runner")


if __name__ == "__main__":
    main()
