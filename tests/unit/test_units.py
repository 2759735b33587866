"""Unit tests for byte unit conversion"""
import pytest

from hwquery.errors import InvalidFlagValue
from hwquery.units import DataUnit, convert, format_bytes, parse_unit, scale


class TestConvert:
    """Scaling raw byte counts"""

    def test_decimal_and_binary_families(self):
        assert convert(1_500_000, DataUnit.KB) == 1500
        assert convert(1_048_576, DataUnit.MIB) == 1
        assert convert(5 * 1024 ** 3, DataUnit.GIB) == 5
        assert convert(2 * 1000 ** 4, DataUnit.TB) == 2

    def test_bits_are_eight_per_byte(self):
        assert convert(3, DataUnit.BITS) == 24

    @pytest.mark.parametrize("unit", list(DataUnit))
    def test_scaling_is_reversible(self, unit):
        """convert(bytes, unit) * scale(unit) gives back the byte count"""
        num_bytes = 123_456_789_012
        assert convert(num_bytes, unit) * scale(unit) == pytest.approx(num_bytes)


class TestFormatBytes:

    def test_bytes_render_as_integers(self):
        assert format_bytes(16_000_000_000, DataUnit.BYTES) == "16000000000"
        assert format_bytes(2, DataUnit.BITS) == "16"

    def test_scaled_units_use_two_decimals(self):
        assert format_bytes(16_000_000_000, DataUnit.GB) == "16.00"
        assert format_bytes(1536, DataUnit.KIB) == "1.50"

    def test_formatting_is_deterministic(self):
        assert format_bytes(7_777_777, DataUnit.MIB) == format_bytes(7_777_777, DataUnit.MIB)


class TestParseUnit:

    def test_case_insensitive(self):
        assert parse_unit("GiB") is DataUnit.GIB
        assert parse_unit(" kb ") is DataUnit.KB

    def test_unknown_unit_is_invalid_flag(self):
        with pytest.raises(InvalidFlagValue) as exc:
            parse_unit("parsecs")
        assert "parsecs" in str(exc.value)
        assert exc.value.exit_code == 2
