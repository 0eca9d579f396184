"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderReceived:
    """A checkout was paid for and became an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_email = String(required=True)
    payment_source = String()
    payment_type = String()
    total_price = Float(required=True)
    received_at = DateTime(required=True)
