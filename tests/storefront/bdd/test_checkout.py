"""BDD tests for checkout."""

from protean.utils.globals import current_domain
from pytest_bdd import parsers, scenarios, then, when
from storefront.checkout.checkout import Checkout
from storefront.shared.money import round_money

scenarios("features/checkout.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper starts a checkout with "{shipping_method}" shipping'))
def shopper_starts_checkout(shopper, checkout_service, checkout_context, shipping_method):
    response = checkout_service.create_checkout(str(shopper.addresses[0].id), shipping_method, shopper)
    checkout_context["response"] = response
    if response.is_successful:
        checkout_context["checkout_id"] = response.response_data["id"]


@when(parsers.cfparse('the shopper pays by card with token "{token}"'))
def shopper_pays_by_card(shopper, checkout_service, checkout_context, token):
    checkout_context["response"] = checkout_service.complete_checkout_using_card(
        checkout_context["checkout_id"], token, shopper
    )


@when(parsers.cfparse('the shopper asks for a "{source}" payment token'))
def shopper_requests_payment_token(shopper, checkout_service, checkout_context, source):
    response = checkout_service.create_payment_token(checkout_context["checkout_id"], source, shopper)
    checkout_context["response"] = response
    if response.is_successful:
        checkout_context["payment"] = response.response_data["payment_info"][0]


@when("the wallet confirms the payment")
def wallet_confirms_payment(checkout_service, checkout_context):
    payment = checkout_context["payment"]
    checkout_context["response"] = checkout_service.complete_checkout(payment["source"], payment["payment_id"])


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the checkout succeeds")
def checkout_succeeds(checkout_context):
    response = checkout_context["response"]
    assert response.is_successful, response.error_details
    checkout_context["cart"] = response.response_data["cart"]


@then(parsers.cfparse("the {part} is {amount:f} USD"))
def cart_part_amount(checkout_context, part, amount):
    key = {
        "subtotal": "sub_total_price",
        "tariff": "tariff_price",
        "service charge": "service_charge",
        "shipping": "shipping_price",
        "total": "total_price",
    }[part]
    assert checkout_context["cart"][key] == {"amount": round_money(amount), "currency": "USD"}


@then(parsers.cfparse("the card was authorized for {amount:f} USD"))
def card_authorized_for(gateway, amount):
    assert [call["amount"] for call in gateway.calls] == [round_money(amount)]
    assert gateway.calls[0]["currency"] == "USD"


@then(parsers.cfparse('the order payment is "{source}" "{payment_type}"'))
def order_payment_is(checkout_context, source, payment_type):
    entries = checkout_context["order"].payment_info
    assert [(e.source, e.type) for e in entries] == [(source, payment_type)]


@then(parsers.cfparse('the checkout holds a pending "{source}" payment'))
def checkout_holds_pending_payment(checkout_context, source):
    checkout = current_domain.repository_for(Checkout).get(checkout_context["checkout_id"])
    assert [(e.source, e.type) for e in checkout.payment_info] == [(source, "PENDING")]


@then(parsers.cfparse("the wallet amount is {amount:f} BDT"))
def wallet_amount_is(checkout_context, amount):
    assert checkout_context["payment"]["amount_in_payment_currency"] == {"amount": round_money(amount), "currency": "BDT"}
