"""Money value object and the rounding rule every price in the storefront follows."""

from decimal import ROUND_HALF_UP, Decimal

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String

from storefront.domain import storefront

BASE_CURRENCY = "USD"

VALID_CURRENCIES = frozenset({"USD", "BDT", "EUR", "GBP", "INR", "NPR", "CAD"})

_CENT = Decimal("0.01")


def round_money(value) -> float:
    """Round to two decimal places, halves away from zero.

    Goes through ``Decimal(str(value))`` so that 2.675 rounds to 2.68 instead
    of the binary-float 2.67.
    """
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


@storefront.value_object
class Money:
    """A monetary amount with its ISO 4217 currency."""

    amount: Float(required=True, min_value=0.0)
    currency: String(max_length=3, default=BASE_CURRENCY)

    @invariant.post
    def currency_must_be_supported(self):
        if self.currency not in VALID_CURRENCIES:
            raise ValidationError({"currency": [f"Unsupported currency: {self.currency}"]})

    @classmethod
    def usd(cls, amount) -> "Money":
        return cls(amount=round_money(amount), currency=BASE_CURRENCY)

    def to_document(self) -> dict:
        return {"amount": self.amount, "currency": self.currency}


def to_minor_units(amount) -> int:
    """Whole cents for a dollar amount: 19.99 becomes 1999."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
