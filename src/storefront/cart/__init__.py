"""Cart subservice factory.

``CART_SERVICE`` selects the adapter; only the in-memory ``fake`` ships
with the storefront.
"""

import os

from storefront.cart.port import CartService

_current_cart_service: CartService | None = None


def get_cart_service() -> CartService:
    global _current_cart_service
    if _current_cart_service is None:
        adapter = os.environ.get("CART_SERVICE", "fake")
        if adapter == "fake":
            from storefront.cart.fake_service import FakeCartService

            _current_cart_service = FakeCartService()
        else:
            raise ValueError(f"Unknown cart service: {adapter}")
    return _current_cart_service


def set_cart_service(service: CartService) -> None:
    global _current_cart_service
    _current_cart_service = service


def reset_cart_service() -> None:
    global _current_cart_service
    _current_cart_service = None
