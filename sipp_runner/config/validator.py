"""Run configuration validator.

Checks that a RunConfiguration holds everything needed to build a SIPp
command line.
"""

from .schema import (
    REQUIRED_OPTIONS,
    VALID_TRANSPORT_MODES,
    RunConfiguration,
    ValidationError,
    ValidationResult,
)

_POSITIVE_OPTIONS = (
    "max_concurrent",
    "calls_per_second",
    "number_of_calls",
    "calls_per_second_incr",
    "calls_per_second_max",
    "stats_interval",
    "recv_timeout",
)


def validate_configuration(config: RunConfiguration) -> ValidationResult:
    """Validate a RunConfiguration.

    Checks:
    - Required options are present
    - Counts, rates and intervals are positive integers
    - Transport mode and rate scaling are consistent

    Args:
        config: Configuration to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    for name in REQUIRED_OPTIONS:
        if getattr(config, name) in (None, ""):
            errors.append(ValidationError(
                path=name,
                message=f"Must provide {name}!",
            ))

    _validate_numbers(config, errors)
    _validate_rate_scaling(config, errors, warnings)

    if config.transport_mode and config.transport_mode not in VALID_TRANSPORT_MODES:
        errors.append(ValidationError(
            path="transport_mode",
            message=f"Unknown transport mode: {config.transport_mode}",
        ))

    for name in config.unknown_options:
        warnings.append(ValidationError(
            path=name,
            message="Unknown option, ignored.",
            severity="warning",
        ))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_numbers(config: RunConfiguration, errors: list[ValidationError]) -> None:
    for name in _POSITIVE_OPTIONS:
        value = getattr(config, name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(ValidationError(
                path=name,
                message=f"'{name}' must be an integer, got {value!r}",
            ))
        elif value <= 0:
            errors.append(ValidationError(
                path=name,
                message=f"'{name}' must be positive, got {value}",
            ))


def _validate_rate_scaling(
    config: RunConfiguration,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    incr = config.calls_per_second_incr
    ceiling = config.calls_per_second_max
    rate = config.calls_per_second

    if incr is not None and ceiling is None:
        warnings.append(ValidationError(
            path="calls_per_second_max",
            message="Rate increment without a maximum rate; the rate grows until the test ends.",
            severity="warning",
        ))

    if (
        isinstance(ceiling, int) and isinstance(rate, int)
        and not isinstance(ceiling, bool) and ceiling < rate
    ):
        errors.append(ValidationError(
            path="calls_per_second_max",
            message=f"Maximum rate {ceiling} is below the starting rate {rate}",
        ))
