"""Storefront bounded context: Checkout and Order placement.

Turns a customer's priced cart into a Checkout, collects payment
authorization against it, and finalizes the Checkout into an Order.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
