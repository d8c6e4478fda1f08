"""YAML run configuration parser.

Parses YAML run files into RunConfiguration objects. Only the run options
are read; scenario steps in the same file are left to the scenario tooling.
"""

from pathlib import Path
from typing import Union

import yaml

from .schema import RunConfiguration


def parse_configuration(file_path: Union[str, Path]) -> RunConfiguration:
    """Parse a YAML run file into a RunConfiguration.

    Args:
        file_path: Path to the YAML run file.

    Returns:
        Parsed RunConfiguration.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the YAML is empty or not a mapping.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Run configuration not found: {file_path}")

    if file_path.suffix not in (".yaml", ".yml"):
        raise ValueError(f"Expected .yaml or .yml file, got: {file_path.suffix}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        raise ValueError(f"Empty run configuration: {file_path}")

    return parse_configuration_data(data, source=str(file_path))


def parse_configuration_data(data: dict, source: str = "<inline>") -> RunConfiguration:
    """Parse a run configuration from an already loaded mapping."""
    if not isinstance(data, dict):
        raise ValueError(
            f"Run configuration must be a YAML mapping, got {type(data).__name__} ({source})"
        )
    return RunConfiguration.from_mapping(data)
