"""Cart subservice port.

The cart subservice owns the shopping cart and its line-item pricing.
Checkout only asks it for the current cart as a document::

    {
        "items": [
            {
                "id": "...",
                "quantity": 2,
                "product": {
                    "id": "...", "name": "...", "price": 25.0, "weight": 0.4,
                    "tariff": {"id": "...", "rates": {"Nepal": 10}},
                    "category": {"id": "...", "name": "..."},
                },
                "aggregated_price": 50.0,
            },
        ],
        "sub_total_price": {"amount": 100.0, "currency": "USD"},
        "total_weight": 0.8,
    }
"""

from abc import ABC, abstractmethod


class CartService(ABC):
    @abstractmethod
    def get_cart(self, user, allow_recalculation: bool = True, persist: bool = False) -> dict:
        """Return the user's current cart.

        With ``allow_recalculation`` the subservice may refresh item prices
        before answering; ``persist`` asks it to keep that refreshed state.
        Raises ``CartUnavailable`` when the cart cannot be produced.
        """
        ...
