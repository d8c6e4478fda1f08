"""Command module - SIPp command line assembly."""

from .builder import build_command

__all__ = ["build_command"]
