"""
Test suite for amount module

Tests parsing, formatting and exact minor-unit arithmetic of Amount.
"""

import pytest
from decimal import Decimal

from core_payments.amount import Amount, MAX_UNITS
from core_payments.errors import InvalidAmount, NegativeAmount, PaymentsError


class TestAmountParsing:
    """Test conversion from feed text"""
    
    def test_parse_bare_point_forms(self):
        assert Amount.parse(".5").units == 5000
        assert Amount.parse("2.").units == 20000
    
    def test_parse_whole_and_fractional(self):
        """Test plain decimal text"""
        assert Amount.parse("1").units == 10000
        assert Amount.parse("1.5").units == 15000
        assert Amount.parse("3.14").units == 31400
        assert Amount.parse("0.0001").units == 1
        assert Amount.parse("494475.4876").units == 4944754876
    
    def test_parse_tolerates_whitespace_and_plus(self):
        assert Amount.parse("   17.64  ") == Amount.parse("17.64")
        assert Amount.parse("+2.5") == Amount(25000)
    
    def test_parse_rounds_half_up_to_four_digits(self):
        """Test rounding of extra fractional digits"""
        assert Amount.parse("5.72454").units == 57245
        assert Amount.parse("5.72455").units == 57246
        assert Amount.parse("5.7245462362").units == 57245
        assert Amount.parse("0.00005").units == 1
        assert Amount.parse("0.00004").units == 0
    
    def test_parse_negative_rejected(self):
        with pytest.raises(NegativeAmount):
            Amount.parse("-1")
        with pytest.raises(NegativeAmount):
            Amount.parse("-0.0001")
        
        # NegativeAmount is an InvalidAmount
        with pytest.raises(InvalidAmount):
            Amount.parse("-5.00")
    
    def test_negative_zero_is_zero(self):
        assert Amount.parse("-0").is_zero()
    
    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "abc",
        "1,5",
        "  13  122   . 99 , 5",
        "1./234",
        "NaN",
        "Infinity",
        "1_000",
        "\uff15",
        "1e3",
        "2E-2",
        "1.2.3",
        "+-1",
        "0x10",
    ])
    def test_parse_invalid_text(self, text):
        with pytest.raises(InvalidAmount):
            Amount.parse(text)
    
    def test_parse_non_string(self):
        with pytest.raises(InvalidAmount):
            Amount.parse(None)
    
    def test_parse_too_large(self):
        with pytest.raises(InvalidAmount):
            Amount.parse("99999999999999999999999999999999")
    
    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            Amount.parse("potato")
        with pytest.raises(PaymentsError):
            Amount.parse("potato")


class TestAmountFormatting:
    """Test rendering with exactly four fractional digits"""
    
    @pytest.mark.parametrize("text", [
        "0.0000", "1.0000", "1.5000", "3.1400", "494475.4876", "18446744073709.5516"
    ])
    def test_round_trip(self, text):
        assert Amount.parse(text).to_string() == text
    
    def test_short_input_is_padded(self):
        assert Amount.parse("1.5").to_string() == "1.5000"
        assert str(Amount.parse("2")) == "2.0000"
    
    def test_no_thousands_separator(self):
        assert Amount.parse("1234567.89").to_string() == "1234567.8900"
    
    def test_to_decimal(self):
        assert Amount.parse("3.14").to_decimal() == Decimal("3.14")
        assert Amount.from_decimal(Decimal("3.14")) == Amount(31400)


class TestAmountArithmetic:
    """Test exact arithmetic in minor units"""
    
    def test_addition_and_subtraction(self):
        big = Amount.parse("494475.4876")
        small = Amount.parse("96658.5182")
        assert (big - small).to_string() == "397816.9694"
        assert (big - small + small) == big
    
    def test_no_float_drift(self):
        total = Amount.zero()
        for _ in range(10):
            total = total + Amount.parse("0.1")
        assert total == Amount.parse("1")
    
    def test_subtraction_below_zero_raises(self):
        with pytest.raises(NegativeAmount):
            Amount.parse("1") - Amount.parse("2")
    
    def test_comparison(self):
        assert Amount.parse("1") < Amount.parse("1.0001")
        assert Amount.parse("2") >= Amount.parse("2.0000")
        assert Amount.parse("0").is_zero()
    
    def test_construction_limits(self):
        with pytest.raises(NegativeAmount):
            Amount(-1)
        with pytest.raises(InvalidAmount):
            Amount(MAX_UNITS + 1)
        with pytest.raises(InvalidAmount):
            Amount(1.5)
        assert Amount(MAX_UNITS).units == MAX_UNITS
    
    def test_overflow_on_add(self):
        with pytest.raises(InvalidAmount):
            Amount(MAX_UNITS) + Amount(1)
