"""In-memory cart subservice for development and testing.

Carts are seeded per user email with ``put_cart``. Every read recomputes line
totals from the current product prices, so changing a product price between
two reads shows up as a changed cart.
"""

import copy

from storefront.cart.port import CartService
from storefront.shared.errors import CartUnavailable
from storefront.shared.money import BASE_CURRENCY, round_money


class FakeCartService(CartService):
    def __init__(self) -> None:
        self.carts: dict[str, dict] = {}
        self.calls: list[dict] = []
        self.persisted: list[str] = []
        self.available: bool = True

    def configure(self, available: bool) -> None:
        self.available = available

    def put_cart(self, email: str, items: list[dict]) -> dict:
        self.carts[email] = {"items": copy.deepcopy(items)}
        return self.get_cart_for(email)

    def set_product_price(self, email: str, product_id, price: float) -> None:
        for item in self.carts[email]["items"]:
            if str(item["product"]["id"]) == str(product_id):
                item["product"]["price"] = price

    def get_cart(self, user, allow_recalculation: bool = True, persist: bool = False) -> dict:
        self.calls.append(
            {
                "method": "get_cart",
                "email": user.email,
                "allow_recalculation": allow_recalculation,
                "persist": persist,
            }
        )
        if not self.available:
            raise CartUnavailable("Cart service is unavailable")

        cart = self.get_cart_for(user.email, recalculate=allow_recalculation)
        if persist:
            self.carts[user.email] = copy.deepcopy(cart)
            self.persisted.append(user.email)
        return cart

    def get_cart_for(self, email: str, recalculate: bool = True) -> dict:
        stored = self.carts.get(email)
        if stored is None:
            return {
                "items": [],
                "sub_total_price": {"amount": 0.0, "currency": BASE_CURRENCY},
                "total_weight": 0.0,
            }

        cart = copy.deepcopy(stored)
        sub_total = 0.0
        total_weight = 0.0
        for item in cart["items"]:
            product = item["product"]
            if recalculate or "aggregated_price" not in item:
                item["aggregated_price"] = round_money(product["price"] * item["quantity"])
            sub_total += item["aggregated_price"]
            total_weight += product.get("weight", 0.0) * item["quantity"]

        cart["sub_total_price"] = {"amount": round_money(sub_total), "currency": BASE_CURRENCY}
        cart["total_weight"] = round(total_weight, 3)
        return cart

    def reset(self) -> None:
        self.carts.clear()
        self.calls.clear()
        self.persisted.clear()
        self.available = True
