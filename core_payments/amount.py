"""
Fixed-Point Amount Module

Monetary quantities with exactly four fractional digits, stored as an
integer count of minor units (1/10000 of a unit). NEVER uses float for
monetary values: text is parsed through Decimal and rounded once.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from dataclasses import dataclass
from typing import Union
import re

from .errors import InvalidAmount, NegativeAmount

PRECISION = 4
SCALE = 10 ** PRECISION
MAX_UNITS = 2 ** 64 - 1  # unsigned 64-bit minor units

_QUANTUM = Decimal(1).scaleb(-PRECISION)
# Plain decimal text: ASCII digits, optional sign and point, no exponent
_DECIMAL_TEXT = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)", re.ASCII)


@dataclass(frozen=True, order=True)
class Amount:
    """
    Immutable non-negative amount in minor units.
    Arithmetic is exact integer arithmetic on `units`.
    """
    units: int
    
    def __post_init__(self):
        if isinstance(self.units, bool) or not isinstance(self.units, int):
            raise InvalidAmount(f"Amount units must be an integer, got {self.units!r}")
        if self.units < 0:
            raise NegativeAmount(_format_units(self.units))
        if self.units > MAX_UNITS:
            raise InvalidAmount(f"Amount {_format_units(self.units)} exceeds the representable maximum")
    
    @classmethod
    def zero(cls) -> 'Amount':
        return cls(0)
    
    @classmethod
    def parse(cls, text: str) -> 'Amount':
        """
        Parse decimal text such as "1.5" or " 2.0000 ".

        More than four fractional digits are rounded half-up, so
        "0.00005" becomes 0.0001 and "0.00004" becomes 0.0000.

        Raises:
            NegativeAmount: If the value is below zero
            InvalidAmount: If the text is not a finite decimal number
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidAmount("Amount must be a non-empty string")
        
        clean_value = text.strip()
        if not _DECIMAL_TEXT.fullmatch(clean_value):
            raise InvalidAmount(f"Cannot convert '{text}' to an amount")
        try:
            value = Decimal(clean_value)
        except InvalidOperation:
            raise InvalidAmount(f"Cannot convert '{text}' to an amount") from None
        
        return cls.from_decimal(value)
    
    @classmethod
    def from_decimal(cls, value: Union[Decimal, int, str]) -> 'Amount':
        """Round a Decimal to four digits and convert to minor units"""
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        if not value.is_finite():
            raise InvalidAmount(f"Cannot convert '{value}' to an amount")
        if value.is_signed() and not value.is_zero():
            raise NegativeAmount(value)
        try:
            rounded = value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise InvalidAmount(f"Amount {value} exceeds the representable maximum") from None
        return cls(int(rounded.scaleb(PRECISION)))
    
    def to_decimal(self) -> Decimal:
        return Decimal(self.units).scaleb(-PRECISION)
    
    def to_string(self) -> str:
        """Render with exactly four fractional digits, no separators"""
        return _format_units(self.units)
    
    def __str__(self) -> str:
        return self.to_string()
    
    def __add__(self, other: 'Amount') -> 'Amount':
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.units + other.units)
    
    def __sub__(self, other: 'Amount') -> 'Amount':
        # Going below zero raises NegativeAmount; callers compare first
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.units - other.units)
    
    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.units == 0


def _format_units(units: int) -> str:
    sign = "-" if units < 0 else ""
    whole, frac = divmod(abs(units), SCALE)
    return f"{sign}{whole}.{frac:0{PRECISION}d}"
