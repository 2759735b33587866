"""Unit tests for configuration loading and flag parsing"""
import argparse
import logging

import pytest

from hwquery.config import (
    AppConfig,
    OutputConfig,
    ScheduleConfig,
    parse_count,
    parse_duration,
    unescape_delimiter,
)
from hwquery.errors import InvalidFlagValue
from hwquery.units import DataUnit


def make_args(**overrides):
    values = dict(delimiter=None, fmt=None, unit=None, count=None, interval=None, log_level=None)
    values.update(overrides)
    return argparse.Namespace(**values)


class TestParseDuration:

    @pytest.mark.parametrize("text,seconds", [
        ("1s", 1.0),
        ("500ms", 0.5),
        ("2m", 120.0),
        ("2min", 120.0),
        ("1h", 3600.0),
        ("1m30s", 90.0),
        ("1.5s", 1.5),
        ("3", 3.0),
        (0, 0.0),
        (2.5, 2.5),
    ])
    def test_valid_durations(self, text, seconds):
        assert parse_duration(text) == pytest.approx(seconds)

    @pytest.mark.parametrize("text", ["", "soon", "1x", "s1", "-1s", "-2",
                                      "inf", "nan", "1e400", float("inf")])
    def test_invalid_durations(self, text):
        with pytest.raises(InvalidFlagValue):
            parse_duration(text)


class TestParseCount:

    def test_positive_integers(self):
        assert parse_count("3") == 3
        assert parse_count(1) == 1

    @pytest.mark.parametrize("value", ["0", "-1", "two", "1.5", None, True])
    def test_rejected(self, value):
        with pytest.raises(InvalidFlagValue):
            parse_count(value)


class TestUnescapeDelimiter:

    def test_escape_sequences(self):
        assert unescape_delimiter("\\t") == "\t"
        assert unescape_delimiter("\\n") == "\n"
        assert unescape_delimiter(", ") == ", "

    def test_non_ascii_survives(self):
        assert unescape_delimiter(" → ") == " → "

    def test_broken_escape(self):
        with pytest.raises(InvalidFlagValue):
            unescape_delimiter("\\x4")


class TestAppConfig:

    def test_defaults(self):
        config = AppConfig()
        assert config.output_config() == OutputConfig("\n", None, DataUnit.BYTES)
        assert config.schedule_config() == ScheduleConfig(1, 0.0)
        assert config.logging_level() == logging.WARNING

    def test_missing_file_uses_defaults(self, tmp_path):
        assert AppConfig.from_file(tmp_path / "nope.yml") == AppConfig()

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("delimiter: ', '\nunit: MiB\ninterval: 2s\ncount: 4\nlog_level: debug\n")
        config = AppConfig.from_file(path)
        assert config.output_config().unit is DataUnit.MIB
        assert config.schedule_config() == ScheduleConfig(4, 2.0)
        assert config.logging_level() == logging.DEBUG

    def test_invalid_yaml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("unit: [unclosed\n")
        assert AppConfig.from_file(path) == AppConfig()

    def test_unknown_keys_fall_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("colour: blue\n")
        assert AppConfig.from_file(path) == AppConfig()

    def test_flags_override_file_values(self):
        config = AppConfig(delimiter=";", unit="kb", count=2)
        config.override_with_args(make_args(unit="gib", fmt="%total%"))
        assert config.delimiter == ";"
        assert config.unit == "gib"
        assert config.count == 2
        assert config.fmt == "%total%"

    def test_invalid_values_surface_on_conversion(self):
        with pytest.raises(InvalidFlagValue):
            AppConfig(unit="furlongs").output_config()
        with pytest.raises(InvalidFlagValue):
            AppConfig(interval="later").schedule_config()
        with pytest.raises(InvalidFlagValue):
            AppConfig(log_level="LOUD").logging_level()
