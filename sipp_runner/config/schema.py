"""Run configuration models.

Defines the immutable set of options a SIPp run is built from, plus the
validation result types shared with the validator.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Mapping, Optional

REQUIRED_OPTIONS = (
    "scenario",
    "source",
    "destination",
    "max_concurrent",
    "calls_per_second",
    "number_of_calls",
)

VALID_TRANSPORT_MODES = {
    "u1", "un", "ui", "t1", "tn", "l1", "ln", "c1", "cn", "s1", "sn",
}

DEFAULT_SOURCE_PORT = 8836
DEFAULT_SIP_USER = "1"
DEFAULT_STATS_INTERVAL = 1


@dataclass(frozen=True)
class RunConfiguration:
    """Options for one SIPp run. Immutable once built."""
    scenario: Optional[str] = None
    source: Optional[str] = None
    source_port: int = DEFAULT_SOURCE_PORT
    destination: Optional[str] = None
    sip_user: str = DEFAULT_SIP_USER
    to_user: Optional[str] = None
    transport_mode: Optional[str] = None
    max_concurrent: Optional[int] = None
    calls_per_second: Optional[int] = None
    calls_per_second_incr: Optional[int] = None
    calls_per_second_max: Optional[int] = None
    number_of_calls: Optional[int] = None
    scenario_variables: Optional[str] = None
    stats_file: Optional[str] = None
    stats_interval: int = DEFAULT_STATS_INTERVAL
    errors_report_file: Optional[str] = None
    summary_report_file: Optional[str] = None
    recv_timeout: Optional[int] = None
    full_sipp_output: bool = False
    sipp_binary: str = "sipp"
    sudo: bool = False
    unknown_options: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def option_names(cls) -> set[str]:
        return {f.name for f in fields(cls)} - {"unknown_options"}

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> "RunConfiguration":
        """Build a configuration from a mapping of option names.

        Keys may carry a leading colon (``:stats_file``). Unknown keys are
        kept by name in ``unknown_options`` and otherwise ignored.
        """
        known = cls.option_names()
        values: dict[str, Any] = {}
        unknown: list[str] = []
        for raw_key, value in mapping.items():
            key = str(raw_key).lstrip(":")
            if key in known:
                values[key] = value
            else:
                unknown.append(key)
        return cls(unknown_options=tuple(unknown), **values)

    def with_overrides(self, **overrides: Any) -> "RunConfiguration":
        """Return a copy with the given non-None options replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary of set options."""
        data = asdict(self)
        data.pop("unknown_options")
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class ValidationError:
    """A single validation error."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def __str__(self) -> str:
        if self.valid:
            msg = "Valid"
            if self.warnings:
                msg += f" ({self.warning_count} warnings)"
            return msg
        return f"Invalid: {self.error_count} errors, {self.warning_count} warnings"
