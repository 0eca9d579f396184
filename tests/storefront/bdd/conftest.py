"""Shared BDD fixtures and step definitions for checkout."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from storefront.checkout.checkout import Checkout
from storefront.checkout.service import CheckoutService
from storefront.customer.user import Address, User
from storefront.exchange.exchange_rate import ExchangeRate
from storefront.order.order import Order


@pytest.fixture()
def checkout_context():
    """Mutable state carried between steps of one scenario."""
    return {"items": []}


@pytest.fixture()
def checkout_service():
    return CheckoutService()


def _item(price, quantity, nepal_rate, index):
    return {
        "id": f"item-{index}",
        "quantity": quantity,
        "product": {
            "id": f"prod-{index}",
            "name": f"Product {index}",
            "price": price,
            "weight": 0.5,
            "tariff": {"id": f"tariff-{index}", "rates": {"Nepal": nepal_rate}},
            "category": {"id": "cat-general", "name": "General"},
        },
    }


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a shopper "{email}" with a saved address'), target_fixture="shopper")
def shopper_with_saved_address(email):
    repo = current_domain.repository_for(User)
    repo.add(
        User(
            email=email,
            name="Shopper",
            addresses=[Address(street="12 Lakeside Road", city="Pokhara", postal_code="33700", country="Nepal")],
        )
    )
    return repo.find_by_email(email)


@given(parsers.cfparse("their cart holds a ${price:f} item with a {rate:d}% Nepal tariff"))
def cart_holds_tariffed_item(shopper, cart_service, checkout_context, price, rate):
    items = checkout_context["items"]
    items.append(_item(price, 1, rate, len(items)))
    cart_service.put_cart(shopper.email, items)


@given(parsers.cfparse("their cart holds two ${price:f} items without tariff"))
def cart_holds_two_untariffed_items(shopper, cart_service, checkout_context, price):
    items = checkout_context["items"]
    items.append(_item(price, 2, 0, len(items)))
    cart_service.put_cart(shopper.email, items)


@given(parsers.cfparse("one US dollar is worth {rate:f} BDT"))
def usd_to_bdt_rate(rate):
    current_domain.repository_for(ExchangeRate).set_rate("BDT", rate)


@given(parsers.cfparse('the shopper started a checkout with "{shipping_method}" shipping'))
def checkout_started(shopper, checkout_service, checkout_context, shipping_method):
    response = checkout_service.create_checkout(str(shopper.addresses[0].id), shipping_method, shopper)
    assert response.is_successful, response.error_details
    checkout_context["checkout_id"] = response.response_data["id"]


@given(parsers.cfparse('the card gateway declines with "{reason}"'))
def card_gateway_declines(gateway, reason):
    gateway.configure(should_succeed=False, failure_reason=reason)


@given(parsers.cfparse("the ${old:f} item now costs ${new:f}"))
def product_price_changed(shopper, cart_service, checkout_context, old, new):
    item = next(i for i in checkout_context["items"] if i["product"]["price"] == old)
    cart_service.set_product_price(shopper.email, item["product"]["id"], new)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the request fails with status {status:d}"))
def request_fails_with_status(checkout_context, status):
    response = checkout_context["response"]
    assert response.status == "failed"
    assert response.http_status == status


@then("the order is received")
def order_is_received(checkout_context):
    response = checkout_context["response"]
    assert response.is_successful, response.error_details
    order = current_domain.repository_for(Order).get(response.response_data["order_id"])
    assert order.overall_status == "Received"
    checkout_context["order"] = order


@then("the checkout is gone")
def checkout_is_gone(checkout_context):
    assert current_domain.repository_for(Checkout).get_or_none(checkout_context["checkout_id"]) is None
