"""Payment gateway factory.

``PAYMENT_GATEWAY`` picks the adapter:
- ``fake`` (default) for development and testing
- ``stripe`` for production, keyed by ``STRIPE_API_KEY``
"""

import os

from storefront.payments.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway. Defaults to FakeGateway."""
    global _current_gateway
    if _current_gateway is None:
        adapter = os.environ.get("PAYMENT_GATEWAY", "fake")
        if adapter == "fake":
            from storefront.payments.gateway.fake_adapter import FakeGateway

            _current_gateway = FakeGateway()
        elif adapter == "stripe":
            from storefront.payments.gateway.stripe_adapter import StripeGateway

            _current_gateway = StripeGateway(api_key=os.environ.get("STRIPE_API_KEY", ""))
        else:
            raise ValueError(f"Unknown payment gateway: {adapter}")
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
