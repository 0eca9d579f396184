"""Order notifications sent to the customer."""

import structlog

from storefront.notification.channel import get_email_channel
from storefront.notification.channel.email_port import EmailDelivery
from storefront.notification.templates.order_received import OrderReceivedTemplate

logger = structlog.get_logger(__name__)


def order_received_context(order) -> dict:
    total = order.cart.get("total_price", {})
    address = order.mailing_address
    return {
        "order_id": str(order.id),
        "total": f"{total.get('amount', 0.0):.2f}",
        "currency": total.get("currency", "USD"),
        "items": [
            {
                "name": item.get("product", {}).get("name"),
                "quantity": item.get("quantity"),
                "price": f"{item.get('aggregated_price', 0.0):.2f}",
            }
            for item in order.cart.get("items", [])
        ],
        "ship_to": f"{address.street}, {address.city}, {address.country}" if address else "",
    }


def email_order_received(order) -> EmailDelivery:
    """Email the order summary to the customer. Returns the channel's delivery result."""
    message = OrderReceivedTemplate.render(order_received_context(order))
    result = get_email_channel().send(to=order.user_email, subject=message["subject"], body=message["body"])
    if not result.delivered:
        logger.warning(
            "Order received email not delivered",
            order_id=str(order.id),
            error=result.error,
        )
    return result
