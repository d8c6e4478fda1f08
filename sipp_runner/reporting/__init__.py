"""Reporting module - JSON run reports."""

from .json_reporter import JsonReporter, RunReport

__all__ = ["JsonReporter", "RunReport"]
