from decimal import Decimal

import pytest

from loan_revolver.errors import ErrorKind, InvalidInput
from loan_revolver.utils import decimal_from_str, parse_amount, parse_period_count, parse_rate


class TestDecimalFromStr:
    def test_separators(self):
        assert decimal_from_str("1,000,000") == Decimal("1000000")
        assert decimal_from_str(" 1_000 ") == Decimal("1000")

    def test_float(self):
        assert decimal_from_str(18.5) == Decimal("18.5")

    @pytest.mark.parametrize("value", ["abc", "", "nan", "inf", True])
    def test_invalid(self, value):
        with pytest.raises(InvalidInput) as excinfo:
            decimal_from_str(value)
        assert excinfo.value.kind is ErrorKind.INVALID_INPUT

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            decimal_from_str("twelve")


class TestParseAmount:
    def test_plain(self):
        assert parse_amount("1000000") == 1_000_000

    def test_exponent(self):
        assert parse_amount("1e6") == 1_000_000

    @pytest.mark.parametrize("value", ["1e2000000", "1e400", "12345678901234567", "-1e2000000"])
    def test_too_large(self, value):
        with pytest.raises(InvalidInput, match="too large"):
            parse_amount(value, "total_debt")

    def test_sixteen_digits(self):
        assert parse_amount("9999999999999999") == 9_999_999_999_999_999

    def test_zero_allowed(self):
        assert parse_amount("0") == 0

    def test_zero_rejected(self):
        with pytest.raises(InvalidInput, match="positive"):
            parse_amount("0", allow_zero=False)

    def test_fraction_rejected(self):
        with pytest.raises(InvalidInput, match="whole number"):
            parse_amount("100.5", "payment")

    def test_negative_rejected(self):
        with pytest.raises(InvalidInput, match="non-negative"):
            parse_amount("-10")


class TestParseRate:
    def test_percent_sign(self):
        assert parse_rate("18%") == 18.0

    def test_decimal(self):
        assert parse_rate("7.25") == 7.25

    def test_negative(self):
        with pytest.raises(InvalidInput):
            parse_rate("-1")


class TestParsePeriodCount:
    def test_positive(self):
        assert parse_period_count("60") == 60

    @pytest.mark.parametrize("value", ["0", "-2", "2.5", "x"])
    def test_invalid(self, value):
        with pytest.raises(InvalidInput):
            parse_period_count(value)
