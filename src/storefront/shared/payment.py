"""Payment vocabulary shared by the Checkout and Order payment entries."""

from enum import Enum

# Placeholder ids on an entry the gateway has not answered yet
UNASSIGNED = "0"


class PaymentSource(Enum):
    BKASH = "BKASH"
    STRIPE = "STRIPE"

    @classmethod
    def parse(cls, value) -> "PaymentSource | None":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return None


class PaymentType(Enum):
    PENDING = "PENDING"
    AUTHORIZATION = "AUTHORIZATION"


def payment_document(entry) -> dict:
    """Plain-dict rendering of a payment entry for responses and notifications."""
    document = {
        "source": entry.source,
        "type": entry.type,
        "payment_id": entry.payment_id,
        "transaction_id": entry.transaction_id,
        "amount_in_usd": entry.amount_in_usd.to_document(),
    }
    if entry.exchange_rate is not None:
        document["exchange_rate"] = {
            "currency": entry.exchange_rate.currency,
            "one_usd_equals": entry.exchange_rate.one_usd_equals,
        }
    if entry.amount_in_payment_currency is not None:
        document["amount_in_payment_currency"] = entry.amount_in_payment_currency.to_document()
    return document
