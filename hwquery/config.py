"""Configuration - YAML file settings overridden by command line flags"""
import argparse
import logging
import math
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from .errors import InvalidFlagValue
from .units import DataUnit, parse_unit

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser() / "hwquery" / "config.yml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "sec": 1.0, "m": 60.0, "min": 60.0, "h": 3600.0}
_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)\s*(ms|sec|s|min|m|h)")


def parse_duration(text: Union[str, int, float], flag: str = "--interval") -> float:
    """Parse `500ms`, `1s`, `2m`, `1h`, `1m30s` or a bare number of seconds."""
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        seconds = float(text)
    else:
        raw = str(text).strip().lower()
        try:
            seconds = float(raw)
        except ValueError:
            if not raw or _DURATION_PART.sub("", raw).strip():
                raise InvalidFlagValue(flag, text, "expected a duration such as 500ms, 1s or 2m") from None
            seconds = sum(float(n) * _DURATION_UNITS[u] for n, u in _DURATION_PART.findall(raw))
    if not math.isfinite(seconds):
        raise InvalidFlagValue(flag, text, "expected a finite duration")
    if seconds < 0:
        raise InvalidFlagValue(flag, text, "duration must not be negative")
    return seconds


def unescape_delimiter(text: str) -> str:
    """Turn backslash escapes (`\\t`, `\\n`, `\\x1f`, ...) into the characters they name."""
    try:
        return text.encode("latin-1", "backslashreplace").decode("unicode_escape")
    except UnicodeDecodeError as e:
        raise InvalidFlagValue("--delimiter", text, f"invalid escape sequence ({e.reason})") from None


def parse_count(value, flag: str = "--count") -> int:
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise InvalidFlagValue(flag, value, "expected a positive integer") from None
    if isinstance(value, bool) or count < 1 or str(count) != str(value).strip():
        raise InvalidFlagValue(flag, value, "expected a positive integer")
    return count


@dataclass(frozen=True)
class OutputConfig:
    delimiter: str = "\n"
    format_template: Optional[str] = None
    unit: DataUnit = DataUnit.BYTES


@dataclass(frozen=True)
class ScheduleConfig:
    repeat_count: int = 1
    interval: float = 0.0  # seconds


@dataclass
class AppConfig:
    """Raw settings from the config file and command line, validated on conversion"""
    delimiter: str = "\n"
    fmt: Optional[str] = None
    unit: str = "bytes"
    count: Union[int, str] = 1
    interval: Union[str, float] = 0
    log_level: str = "WARNING"

    @classmethod
    def from_file(cls, config_path: Path) -> "AppConfig":
        """Load configuration from YAML file"""
        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}, using defaults")
            return cls()

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            logger.debug(f"Loaded config from {config_path}: {data}")
            return cls(**data)
        except (OSError, yaml.YAMLError, TypeError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}, using defaults")
            return cls()

    def override_with_args(self, args: argparse.Namespace) -> "AppConfig":
        """Override config with command line arguments if provided"""
        self.delimiter = args.delimiter if args.delimiter is not None else self.delimiter
        self.fmt = args.fmt if args.fmt is not None else self.fmt
        self.unit = args.unit if args.unit is not None else self.unit
        self.count = args.count if args.count is not None else self.count
        self.interval = args.interval if args.interval is not None else self.interval
        self.log_level = args.log_level if args.log_level is not None else self.log_level
        return self

    def output_config(self) -> OutputConfig:
        return OutputConfig(
            delimiter=unescape_delimiter(str(self.delimiter)),
            format_template=self.fmt,
            unit=parse_unit(str(self.unit)),
        )

    def schedule_config(self) -> ScheduleConfig:
        return ScheduleConfig(repeat_count=parse_count(self.count), interval=parse_duration(self.interval))

    def logging_level(self) -> int:
        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise InvalidFlagValue("--log-level", self.log_level, f"expected one of: {', '.join(LOG_LEVELS)}")
        return getattr(logging, level)
