"""Tests for final cart pricing."""

import pytest
from storefront.pricing.calculation import (
    calculate_final_price,
    calculate_item_tariff,
    calculate_shipping_price,
    tariff_rate_for,
)
from storefront.pricing.rules import FLAT_SHIPPING_PRICE
from storefront.shared.money import round_money


def _item(item_id, price, quantity, nepal_rate):
    return {
        "id": item_id,
        "quantity": quantity,
        "product": {
            "id": f"prod-{item_id}",
            "name": f"Product {item_id}",
            "price": price,
            "weight": 0.5,
            "tariff": {"id": f"tariff-{item_id}", "rates": {"Nepal": nepal_rate}},
            "category": {"id": "cat-1", "name": "General"},
        },
    }


class TestTariff:
    def test_rate_is_a_fraction_of_the_percentage(self):
        assert tariff_rate_for({"id": "t", "rates": {"Nepal": 12.5}}) == 0.125

    def test_missing_country_rate_counts_as_zero(self):
        assert tariff_rate_for({"id": "t", "rates": {"India": 20}}) == 0.0

    def test_item_tariff_is_rounded(self):
        item = {"aggregated_price": 33.33, "product": {"tariff": {"rates": {"Nepal": 7}}}}
        # 7% of 33.33 = 2.3331
        assert calculate_item_tariff(item) == 2.33


class TestShipping:
    @pytest.mark.parametrize("weight", [0.0, 0.4, 12.0, 250.0])
    def test_flat_regardless_of_weight(self, weight):
        assert calculate_shipping_price("Nepal", "standard", weight) == FLAT_SHIPPING_PRICE

    def test_flat_regardless_of_method(self):
        assert calculate_shipping_price("Nepal", "express", 1.0) == 15.0


class TestCalculateFinalPrice:
    def test_standard_cart(self, user, standard_cart):
        cart = calculate_final_price(user)

        assert cart["sub_total_price"] == {"amount": 100.0, "currency": "USD"}
        assert cart["tariff_price"] == {"amount": 5.0, "currency": "USD"}
        assert cart["service_charge"] == {"amount": 5.0, "currency": "USD"}
        assert cart["shipping_price"] == {"amount": 15.0, "currency": "USD"}
        assert cart["total_price"] == {"amount": 125.0, "currency": "USD"}

    def test_tariff_and_category_collapse_to_ids(self, user, standard_cart):
        cart = calculate_final_price(user)

        product = cart["items"][0]["product"]
        assert product["tariff"] == "tariff-apparel"
        assert product["category"] == "cat-outerwear"

    def test_persist_flag_reaches_cart_service(self, user, standard_cart, cart_service):
        calculate_final_price(user, persist=True)
        calculate_final_price(user)

        assert [call["persist"] for call in cart_service.calls] == [True, False]
        assert all(call["allow_recalculation"] for call in cart_service.calls)

    def test_empty_cart_pays_only_shipping(self, user):
        cart = calculate_final_price(user)

        assert cart["items"] == []
        assert cart["total_price"]["amount"] == 15.0

    @pytest.mark.parametrize(
        "items",
        [
            [_item("a", 19.99, 3, 13)],
            [_item("a", 0.01, 1, 50), _item("b", 0.0, 4, 10)],
            [_item("a", 1234.57, 2, 37.5), _item("b", 3.33, 3, 3.3), _item("c", 0.99, 7, 0)],
        ],
    )
    def test_total_is_sum_of_rounded_parts(self, user, cart_service, items):
        cart_service.put_cart(user.email, items)

        cart = calculate_final_price(user)

        expected = round_money(
            cart["sub_total_price"]["amount"]
            + cart["tariff_price"]["amount"]
            + cart["service_charge"]["amount"]
            + cart["shipping_price"]["amount"]
        )
        assert cart["total_price"]["amount"] == expected
        for key in ("sub_total_price", "tariff_price", "service_charge", "shipping_price", "total_price"):
            assert cart[key]["currency"] == "USD"
            assert cart[key]["amount"] == round_money(cart[key]["amount"])

    def test_cart_service_failure_propagates(self, user, cart_service):
        from storefront.shared.errors import CartUnavailable

        cart_service.configure(available=False)

        with pytest.raises(CartUnavailable):
            calculate_final_price(user)
