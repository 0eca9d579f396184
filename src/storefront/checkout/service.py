"""Checkout orchestration: cart to checkout to paid order.

Four entry points, each returning a ``ServiceResponse``:

- ``create_checkout``: price the cart and open the user's single checkout
- ``create_payment_token``: attach a wallet payment (bKash) to the checkout
- ``complete_checkout_using_card``: authorize a card and turn the checkout
  into an order
- ``complete_checkout``: wallet confirmation callback; turns the checkout
  holding that payment into an order

Repository writes here are not grouped into a unit of work. Each ``add``
commits on its own, so the pending card entry survives a failed gateway call.
The cost is a known gap: if the card is authorized but the order cannot be
saved, the hold and the checkout are left behind and only a log line
records it.
"""

import functools

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.checkout.checkout import Checkout
from storefront.customer.user import User
from storefront.exchange.exchange_rate import ExchangeRate
from storefront.notification.notifier import email_order_received
from storefront.order.order import Order
from storefront.payments.gateway import get_gateway
from storefront.pricing.calculation import calculate_final_price
from storefront.pricing.rules import PRICE_CURRENCY, STATEMENT_DESCRIPTOR_MAX_LENGTH, STATEMENT_PREFIX
from storefront.shared.documents import stringify_identifiers
from storefront.shared.errors import (
    CheckoutError,
    CheckoutNotAccessible,
    Conflict,
    ExchangeRateUnavailable,
    InternalError,
    InvalidInput,
    NotFound,
    PaymentDeclined,
    Unauthorized,
    UnsupportedPaymentSource,
)
from storefront.shared.payment import PaymentSource
from storefront.shared.responses import ServiceResponse
from storefront.shared.tokens import generate_random_token

logger = structlog.get_logger(__name__)

INVALID_CHECKOUT_INPUT = "Invalid address id or shipping preference"
CHECKOUT_NOT_ACCESSIBLE = "Either the requested checkout record does not exist or it does not belong to you"
CART_CHANGED = "something crucial about one of the items in the cart has changed. try again"
INVALID_PAYMENT_SOURCE = "Invalid payment source"

# Currency each wallet settles in
WALLET_CURRENCIES = {PaymentSource.BKASH: "BDT"}


def service_operation(name: str):
    """Turn whatever ``fn`` raises into a failed ``ServiceResponse``, logging it on the way."""

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            with structlog.contextvars.bound_contextvars(operation=name):
                try:
                    return fn(*args, **kwargs)
                except CheckoutError as exc:
                    logger.warning(
                        "Checkout operation failed",
                        error_type=type(exc).__name__,
                        error=exc.message,
                        http_status=exc.http_status,
                    )
                    return ServiceResponse.failed(exc.http_status, exc.message)
                except ValidationError as exc:
                    logger.warning("Checkout data rejected", error=exc.messages)
                    return ServiceResponse.failed(400, str(exc.messages))
                except ObjectNotFoundError as exc:
                    logger.warning("Checkout record missing", error=str(exc))
                    return ServiceResponse.failed(404, str(exc))
                except Exception as exc:
                    logger.exception("Unexpected checkout failure", error=str(exc))
                    return ServiceResponse.failed(500, str(exc))

        return wrapper

    return decorator


def statement_for(checkout_id) -> str:
    """``Shop Order 4f9a2c``: the prefix plus the last six characters of the checkout id."""
    return f"{STATEMENT_PREFIX} {str(checkout_id)[-6:]}"[:STATEMENT_DESCRIPTOR_MAX_LENGTH]


class CheckoutService:
    def __init__(self) -> None:
        self._token_issuers = {
            PaymentSource.BKASH: self._issue_wallet_payment,
        }

    # -------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------
    @property
    def users(self):
        return current_domain.repository_for(User)

    @property
    def checkouts(self):
        return current_domain.repository_for(Checkout)

    @property
    def orders(self):
        return current_domain.repository_for(Order)

    @property
    def exchange_rates(self):
        return current_domain.repository_for(ExchangeRate)

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    @service_operation("create_checkout")
    def create_checkout(self, address_id, shipping_method, user) -> ServiceResponse:
        if user is None:
            raise Unauthorized("Authentication required")

        address = user.find_address(address_id)
        if address is None or not shipping_method:
            raise InvalidInput(INVALID_CHECKOUT_INPUT)

        db_user = self.users.find_by_email(user.email)
        if db_user is None:
            raise Unauthorized("User not found")

        cart = calculate_final_price(db_user, persist=True, shipping_method=shipping_method)

        replaced = self.checkouts.remove_all_for_user(db_user.email)
        if replaced:
            logger.info("Replaced earlier checkouts", user_email=db_user.email, count=replaced)

        checkout = Checkout.start(db_user, address, shipping_method, cart)
        try:
            self.checkouts.add(checkout)
        except Exception as exc:
            logger.error("Checkout could not be saved", user_email=db_user.email, error=str(exc))
            raise InternalError("Checkout could not be saved") from exc

        logger.info(
            "Checkout created",
            checkout_id=str(checkout.id),
            user_email=db_user.email,
            total=checkout.total_in_usd,
        )
        return ServiceResponse.ok(checkout.to_document())

    @service_operation("create_payment_token")
    def create_payment_token(self, checkout_id, payment_source, user) -> ServiceResponse:
        if not checkout_id or not payment_source:
            raise InvalidInput("Missing checkout id or payment source")

        checkout = self._checkout_for(checkout_id, user)

        # First issued payment wins; repeat calls get the same entry back
        if checkout.has_payment:
            return ServiceResponse.ok(self._payment_summary(checkout))

        self._ensure_cart_unchanged(user, checkout)

        source = PaymentSource.parse(payment_source)
        issuer = self._token_issuers.get(source)
        if issuer is None:
            raise UnsupportedPaymentSource(INVALID_PAYMENT_SOURCE)

        entry = issuer(checkout, source)
        self.checkouts.add(checkout)

        logger.info(
            "Payment token issued",
            checkout_id=str(checkout.id),
            payment_source=source.value,
            payment_id=entry.payment_id,
        )
        return ServiceResponse.ok(self._payment_summary(checkout))

    @service_operation("complete_checkout_using_card")
    def complete_checkout_using_card(self, checkout_id, payment_token, user) -> ServiceResponse:
        if not checkout_id or not payment_token:
            raise InvalidInput("Missing checkout id or payment token")

        checkout = self._checkout_for(checkout_id, user)
        self._ensure_cart_unchanged(user, checkout)

        checkout.begin_card_payment()
        self.checkouts.add(checkout)

        amount = checkout.total_in_usd
        statement = statement_for(checkout.id)
        result = get_gateway().authorize_charge(
            amount=amount,
            currency=PRICE_CURRENCY,
            source=payment_token,
            metadata={"user_email": user.email},
            description=statement,
            statement_descriptor=statement,
        )
        if not result.success:
            logger.info(
                "Card authorization declined",
                checkout_id=str(checkout.id),
                reason=result.failure_reason,
            )
            raise PaymentDeclined(result.failure_reason or "Payment was declined")

        order = Order.from_checkout(checkout)
        order.record_card_authorization(result.gateway_charge_id, result.gateway_transaction_id)
        order.mark_received()
        self._place_order(checkout, order, charge_id=result.gateway_charge_id)

        return ServiceResponse.ok({"order_id": str(order.id)})

    @service_operation("complete_checkout")
    def complete_checkout(self, payment_source, payment_id) -> ServiceResponse:
        if not payment_source or not payment_id:
            raise InvalidInput("Missing payment source or payment id")

        source = PaymentSource.parse(payment_source)
        # Only wallets confirm payments through this callback
        if source not in WALLET_CURRENCIES:
            raise UnsupportedPaymentSource(INVALID_PAYMENT_SOURCE)

        # A consumed checkout is gone, so a redelivered callback stops here
        checkout = self.checkouts.find_by_payment(source.value, str(payment_id))
        if checkout is None:
            raise NotFound("No checkout is awaiting this payment")

        order = Order.from_checkout(checkout)
        order.mark_received()
        self._place_order(checkout, order, charge_id=str(payment_id))

        return ServiceResponse.ok({"order_id": str(order.id)})

    # -------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------
    def _checkout_for(self, checkout_id, user) -> Checkout:
        if user is None:
            raise Unauthorized("Authentication required")

        checkout = self.checkouts.find_for_user(checkout_id, user.email)
        if checkout is None:
            raise CheckoutNotAccessible(CHECKOUT_NOT_ACCESSIBLE)
        return checkout

    def _ensure_cart_unchanged(self, user, checkout: Checkout) -> None:
        fresh = calculate_final_price(user, persist=False, shipping_method=checkout.shipping_method)
        if stringify_identifiers(fresh) != stringify_identifiers(checkout.cart):
            logger.info(
                "Cart changed since checkout started",
                checkout_id=str(checkout.id),
                stored_total=checkout.cart.get("total_price"),
                fresh_total=fresh.get("total_price"),
            )
            raise Conflict(CART_CHANGED)

    def _issue_wallet_payment(self, checkout: Checkout, source: PaymentSource):
        currency = WALLET_CURRENCIES[source]
        rate = self.exchange_rates.find_by_currency(currency)
        if rate is None:
            raise ExchangeRateUnavailable(f"No exchange rate available for {currency}")

        return checkout.issue_wallet_payment(source, generate_random_token(), rate)

    def _place_order(self, checkout: Checkout, order: Order, charge_id: str | None) -> None:
        try:
            self.orders.add(order)
        except Exception as exc:
            # Payment is already authorized; nothing undoes it from here
            logger.critical(
                "Order could not be saved after payment authorization",
                checkout_id=str(checkout.id),
                charge_id=charge_id,
                error=str(exc),
            )
            raise InternalError("Order could not be saved") from exc

        self.checkouts.remove(checkout)
        logger.info(
            "Order received",
            order_id=str(order.id),
            user_email=order.user_email,
            total=order.total_in_usd,
        )
        self._notify(order)

    def _notify(self, order: Order) -> None:
        try:
            email_order_received(order)
        except Exception as exc:
            logger.error("Order received email failed", order_id=str(order.id), error=str(exc))

    @staticmethod
    def _payment_summary(checkout: Checkout) -> dict:
        return {
            "checkout_id": str(checkout.id),
            "payment_info": checkout.payment_documents(),
        }
