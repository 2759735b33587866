"""Data unit conversion for byte-valued metrics"""
from enum import Enum

from .errors import InvalidFlagValue


class DataUnit(Enum):
    BITS = "bits"
    BYTES = "bytes"
    KB = "kb"
    KIB = "kib"
    MB = "mb"
    MIB = "mib"
    GB = "gb"
    GIB = "gib"
    TB = "tb"
    TIB = "tib"

    def __str__(self) -> str:
        return self.value


# Bytes per unit
_SCALES = {
    DataUnit.BITS: 1 / 8,
    DataUnit.BYTES: 1,
    DataUnit.KB: 1000,
    DataUnit.KIB: 1024,
    DataUnit.MB: 1000 ** 2,
    DataUnit.MIB: 1024 ** 2,
    DataUnit.GB: 1000 ** 3,
    DataUnit.GIB: 1024 ** 3,
    DataUnit.TB: 1000 ** 4,
    DataUnit.TIB: 1024 ** 4,
}

# Units whose converted values are whole numbers
_INTEGRAL_UNITS = {DataUnit.BITS, DataUnit.BYTES}


def scale(unit: DataUnit) -> float:
    """Number of bytes in one `unit`."""
    return _SCALES[unit]


def convert(num_bytes: float, unit: DataUnit) -> float:
    """Convert a raw byte count into `unit`."""
    return num_bytes / _SCALES[unit]


def format_bytes(num_bytes: float, unit: DataUnit) -> str:
    """Convert and render a byte count: integers for bits/bytes, 2 decimals otherwise."""
    value = convert(num_bytes, unit)
    if unit in _INTEGRAL_UNITS:
        return str(int(round(value)))
    return f"{value:.2f}"


def parse_unit(text: str) -> DataUnit:
    """Parse a unit name case-insensitively (`GiB`, `kb`, `bytes`, ...)."""
    try:
        return DataUnit(text.strip().lower())
    except ValueError:
        choices = ", ".join(u.value for u in DataUnit)
        raise InvalidFlagValue("--unit", text, f"expected one of: {choices}") from None
