"""JSON report generator for SIPp runs.

Generates structured JSON reports from run outcomes.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


@dataclass
class RunReport:
    """Outcome of a single SIPp run."""
    command: str
    outcome: str
    returncode: Optional[int] = None
    success: bool = False
    duration_ms: int = 0
    stats_file: Optional[str] = None
    error: Optional[str] = None
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


class JsonReporter:
    """Generates JSON reports from SIPp run results."""

    def generate(self, report: RunReport) -> dict[str, Any]:
        """Generate a report dictionary ready for JSON serialization."""
        return {
            "timestamp": report.timestamp,
            "command": report.command,
            "status": "passed" if report.success else "failed",
            "outcome": report.outcome,
            "returncode": report.returncode,
            "duration_ms": report.duration_ms,
            "stats_file": report.stats_file,
            "error": report.error,
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Args:
            report: Report dictionary.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path

    def generate_cli_output(
        self,
        report: dict[str, Any],
        report_path: Optional[str] = None,
    ) -> dict[str, Any]:
        """Wrap a report in the CLI output envelope.

        Args:
            report: Generated report dictionary.
            report_path: Path to saved report file.

        Returns:
            Dictionary with success, command, data and message keys.
        """
        success = report["status"] == "passed"
        if success:
            message = "Test completed successfully"
        elif report["outcome"] == "partial_failure":
            message = "Test completed successfully but some calls failed."
        else:
            message = f"SIPp run failed ({report['outcome']}): {report['error']}"

        data = dict(report)
        if report_path:
            data["report_path"] = report_path

        return {
            "success": success,
            "command": "run",
            "data": data,
            "message": message,
        }
