"""Money and quantity rules shared by carts, orders and payments.

Prices are captured into order lines and payments, so ``Money`` is a frozen
dataclass compared by value. Quantities stay plain ints; the check that
they are positive lives in ``require_positive_quantity``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from shopcore.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount in one ISO-4217 currency.

    Decimal keeps line totals exact: 25.99 x 2 is 51.98, never 51.9799...
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")
        if len(self.currency) != 3 or not self.currency.isupper():
            raise ValidationError(f"Currency must be a 3-letter code, got {self.currency!r}")

    @staticmethod
    def of(amount: str | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build Money from user or storage input (strings preferred)."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0.00"), currency)

    @staticmethod
    def total(parts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
        """Sum *parts*; an empty iterable totals to zero in *currency*."""
        result = Money.zero(currency)
        for part in parts:
            result = result + part
        return result

    def __add__(self, other: Money) -> Money:
        self._same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, quantity: int) -> Money:
        # Only whole units are ever priced.
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"Can only multiply Money by int, got {type(quantity).__name__}")
        return Money(self.amount * quantity, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._same_currency(other)
        return self.amount < other.amount

    def __gt__(self, other: Money) -> bool:
        self._same_currency(other)
        return self.amount > other.amount

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def _same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")


def require_positive_quantity(quantity: int) -> int:
    """Return *quantity* unchanged, or raise if it is not a positive int."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(f"Quantity must be an integer, got {type(quantity).__name__}")
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than 0")
    return quantity
