"""Domain events for the Checkout aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Checkout")
class CheckoutStarted:
    """A user turned their cart into a checkout."""

    __version__ = 1

    checkout_id = Identifier(required=True)
    user_email = String(required=True)
    shipping_method = String(required=True)
    total_price = Float(required=True)
    started_at = DateTime(required=True)


@storefront.event(part_of="Checkout")
class PaymentTokenIssued:
    """A wallet payment id was issued for the checkout."""

    __version__ = 1

    checkout_id = Identifier(required=True)
    payment_source = String(required=True)
    payment_id = String(required=True)
    amount_in_usd = Float(required=True)
    currency = String(required=True)
    amount_in_payment_currency = Float(required=True)


@storefront.event(part_of="Checkout")
class CardPaymentInitiated:
    """A card authorization is about to be requested for the checkout total."""

    __version__ = 1

    checkout_id = Identifier(required=True)
    amount_in_usd = Float(required=True)
    initiated_at = DateTime(required=True)
