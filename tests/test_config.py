"""Tests for run configuration loading and validation."""

import dataclasses
from pathlib import Path

import pytest

from sipp_runner.config import (
    RunConfiguration,
    parse_configuration,
    parse_configuration_data,
    validate_configuration,
)

VALID = {
    "scenario": "/path/to/scenario.xml",
    "source": "127.0.0.1",
    "destination": "10.0.0.2",
    "max_concurrent": 5,
    "calls_per_second": 5,
    "number_of_calls": 20,
}


class TestRunConfiguration:
    def test_defaults(self):
        config = RunConfiguration()
        assert config.source_port == 8836
        assert config.sip_user == "1"
        assert config.stats_interval == 1
        assert config.full_sipp_output is False
        assert config.sipp_binary == "sipp"

    def test_from_mapping_accepts_symbol_keys(self):
        config = RunConfiguration.from_mapping({":stats_file": "stats.csv"})
        assert config.stats_file == "stats.csv"

    def test_from_mapping_records_unknown_keys(self):
        config = RunConfiguration.from_mapping({"source": "127.0.0.1", "steps": []})
        assert config.source == "127.0.0.1"
        assert config.unknown_options == ("steps",)

    def test_is_immutable(self):
        config = RunConfiguration()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.stats_file = "stats.csv"

    def test_with_overrides_skips_none(self):
        config = RunConfiguration(stats_file="a.csv")
        updated = config.with_overrides(stats_file=None, full_sipp_output=True)
        assert updated.stats_file == "a.csv"
        assert updated.full_sipp_output is True
        assert config.full_sipp_output is False

    def test_to_dict_drops_unset(self):
        data = RunConfiguration(source="127.0.0.1").to_dict()
        assert data["source"] == "127.0.0.1"
        assert "destination" not in data
        assert "unknown_options" not in data


class TestParser:
    def test_parse_yaml_file(self, tmp_path):
        path = tmp_path / "run.yml"
        path.write_text(
            "source: 127.0.0.1\n"
            "destination: 10.0.0.2\n"
            "max_concurrent: 10\n"
            "calls_per_second: 2\n"
            "number_of_calls: 100\n"
            "stats_file: stats.csv\n"
            "steps:\n"
            "  - invite\n"
            "  - hangup\n",
            encoding="utf-8",
        )

        config = parse_configuration(path)

        assert config.max_concurrent == 10
        assert config.stats_file == "stats.csv"
        assert config.unknown_options == ("steps",)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_configuration(tmp_path / "missing.yaml")

    def test_wrong_suffix(self, tmp_path):
        path = tmp_path / "run.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ValueError, match="Expected .yaml or .yml"):
            parse_configuration(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="Empty run configuration"):
            parse_configuration(path)

    def test_not_a_mapping(self):
        with pytest.raises(ValueError, match="must be a YAML mapping"):
            parse_configuration_data(["source", "destination"])


class TestValidator:
    def test_valid(self):
        result = validate_configuration(RunConfiguration.from_mapping(VALID))
        assert result.valid
        assert result.errors == []
        assert str(result) == "Valid"

    def test_missing_required(self):
        result = validate_configuration(RunConfiguration())
        assert not result.valid
        assert result.error_count == 6

    @pytest.mark.parametrize("name,value", [
        ("max_concurrent", 0),
        ("calls_per_second", -1),
        ("number_of_calls", "ten"),
        ("stats_interval", True),
    ])
    def test_rejects_bad_numbers(self, name, value):
        result = validate_configuration(RunConfiguration.from_mapping({**VALID, name: value}))
        assert [e.path for e in result.errors] == [name]

    def test_unknown_transport_mode(self):
        result = validate_configuration(
            RunConfiguration.from_mapping({**VALID, "transport_mode": "quic"})
        )
        assert [e.path for e in result.errors] == ["transport_mode"]

    def test_rate_max_below_rate(self):
        result = validate_configuration(RunConfiguration.from_mapping(
            {**VALID, "calls_per_second_incr": 1, "calls_per_second_max": 2}
        ))
        assert [e.path for e in result.errors] == ["calls_per_second_max"]

    def test_rate_increment_without_max_warns(self):
        result = validate_configuration(
            RunConfiguration.from_mapping({**VALID, "calls_per_second_incr": 1})
        )
        assert result.valid
        assert [w.path for w in result.warnings] == ["calls_per_second_max"]

    def test_unknown_option_warns(self):
        result = validate_configuration(RunConfiguration.from_mapping({**VALID, "steps": []}))
        assert result.valid
        assert result.warnings[0].path == "steps"
        assert str(result) == "Valid (1 warnings)"


def test_sample_run_file_is_valid():
    sample = Path(__file__).resolve().parents[1] / "scenarios" / "basic_uac.yml"

    config = parse_configuration(sample)
    result = validate_configuration(config)

    assert result.valid, result.errors
    assert result.warnings == []
    assert config.scenario.startswith("path/to/")
