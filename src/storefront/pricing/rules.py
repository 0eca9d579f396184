"""Pricing rules applied on top of the cart subtotal."""

from storefront.shared.money import BASE_CURRENCY

PRICE_CURRENCY = BASE_CURRENCY

# Destination whose tariff rate applies to every item
TARIFF_COUNTRY = "Nepal"

SERVICE_CHARGE_RATE = 0.05

FLAT_SHIPPING_PRICE = 15.0

# Statement descriptors are limited to 22 characters by card networks
STATEMENT_PREFIX = "Shop Order"
STATEMENT_DESCRIPTOR_MAX_LENGTH = 22
