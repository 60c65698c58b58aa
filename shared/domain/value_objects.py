"""
Common Value Objects

Value objects used across multiple domains:
- Money: Represents monetary amounts with currency
- DateRange: Represents a stay (check-in to check-out)
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True, order=True)
class Money:
    """
    Money value object

    Represents a non-negative amount with a currency code.
    Immutable and supports arithmetic operations.
    """
    amount: Decimal
    currency: str = 'EGP'

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))
        object.__setattr__(self, 'currency', self.currency.upper())
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if len(self.currency) != 3:
            raise ValueError(f"Unsupported currency: {self.currency}")

    @classmethod
    def zero(cls, currency: str = 'EGP') -> 'Money':
        return cls(Decimal('0'), currency)

    def _check_currency(self, other: 'Money') -> None:
        if not isinstance(other, Money):
            raise TypeError("Can only combine Money with Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot combine different currencies: {self.currency} and {other.currency}")

    def __add__(self, other: 'Money') -> 'Money':
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        self._check_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, factor: int) -> 'Money':
        if not isinstance(factor, (int, Decimal)):
            raise TypeError("Can only multiply Money by int or Decimal")
        return Money(self.amount * factor, self.currency)

    def minor_units(self) -> int:
        """Amount in cents/piastres, as payment gateways expect it."""
        return int((self.amount * 100).quantize(Decimal('1')))

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"


@dataclass(frozen=True)
class DateRange:
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def __len__(self) -> int:
        """Number of nights"""
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"
