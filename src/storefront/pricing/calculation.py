"""Final price of a user's cart: subtotal plus tariff, service charge and shipping.

Every amount is rounded to cents before it is summed, and every amount is in
US dollars. The resulting document is the cart snapshot stored on Checkouts
and Orders, with each item's ``tariff`` and ``category`` reduced to their ids.
"""

import structlog

from storefront.cart import get_cart_service
from storefront.pricing.rules import (
    FLAT_SHIPPING_PRICE,
    PRICE_CURRENCY,
    SERVICE_CHARGE_RATE,
    TARIFF_COUNTRY,
)
from storefront.shared.documents import collapse_to_identifier, stringify_identifiers
from storefront.shared.money import round_money

logger = structlog.get_logger(__name__)


def _price(amount) -> dict:
    return {"amount": round_money(amount), "currency": PRICE_CURRENCY}


def tariff_rate_for(tariff, country: str = TARIFF_COUNTRY) -> float:
    """Tariff rate for ``country`` as a fraction; 10 (%) becomes 0.1."""
    if not isinstance(tariff, dict):
        return 0.0
    rate = (tariff.get("rates") or {}).get(country)
    if rate is None:
        logger.warning("No tariff rate for destination", tariff_id=tariff.get("id"), country=country)
        return 0.0
    return float(rate) / 100


def calculate_item_tariff(item: dict, country: str = TARIFF_COUNTRY) -> float:
    rate = tariff_rate_for(item.get("product", {}).get("tariff"), country)
    return round_money(rate * float(item.get("aggregated_price", 0.0)))


def calculate_shipping_price(country: str | None, shipping_method: str | None, weight: float | None) -> float:
    """Shipping cost for a parcel.

    A flat rate regardless of destination, method or weight.
    """
    # TODO: weight-tiered rates per shipping method once the carrier rate card is agreed
    return FLAT_SHIPPING_PRICE


def calculate_final_price(user, persist: bool = False, shipping_method: str | None = None) -> dict:
    """Return the user's cart priced for checkout.

    ``persist`` is forwarded to the cart subservice so that its own
    recalculation is stored. Errors from the subservice propagate.
    """
    cart = stringify_identifiers(get_cart_service().get_cart(user, allow_recalculation=True, persist=persist))

    tariff_total = 0.0
    items = []
    for item in cart.get("items", []):
        tariff_total += calculate_item_tariff(item)

        product = dict(item.get("product", {}))
        product["tariff"] = collapse_to_identifier(product.get("tariff"))
        product["category"] = collapse_to_identifier(product.get("category"))
        items.append({**item, "product": product})

    sub_total = round_money(cart.get("sub_total_price", {}).get("amount", 0.0))
    tariff_price = round_money(tariff_total)
    service_charge = round_money(sub_total * SERVICE_CHARGE_RATE)
    shipping_price = round_money(
        calculate_shipping_price(TARIFF_COUNTRY, shipping_method, cart.get("total_weight", 0.0))
    )
    total = round_money(sub_total + tariff_price + service_charge + shipping_price)

    cart["items"] = items
    cart["sub_total_price"] = _price(sub_total)
    cart["tariff_price"] = _price(tariff_price)
    cart["service_charge"] = _price(service_charge)
    cart["shipping_price"] = _price(shipping_price)
    cart["total_price"] = _price(total)

    logger.debug(
        "Cart priced",
        user_email=user.email,
        items=len(items),
        sub_total=sub_total,
        tariff=tariff_price,
        service_charge=service_charge,
        shipping=shipping_price,
        total=total,
    )
    return cart
