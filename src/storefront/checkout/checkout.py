"""Checkout aggregate: a user's in-progress purchase attempt.

A Checkout freezes the priced cart, the delivery address and the shipping
choice at the moment the user starts paying. Payment entries are attached
as the user picks a payment method. Once payment is confirmed the Checkout
is copied into an Order and deleted.

At most one Checkout exists per user; starting a new one replaces the old.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Dict, HasMany, String, ValueObject

from storefront.checkout.events import CardPaymentInitiated, CheckoutStarted, PaymentTokenIssued
from storefront.domain import storefront
from storefront.exchange.exchange_rate import ExchangeRateSnapshot
from storefront.shared.address import MailingAddress
from storefront.shared.audit import Actor, AuditLog
from storefront.shared.money import Money, round_money
from storefront.shared.payment import UNASSIGNED, PaymentSource, PaymentType, payment_document


class CheckoutStatus(Enum):
    RECEIVED = "Received"


@storefront.entity(part_of="Checkout")
class PaymentInfo:
    """One payment attempt against a checkout."""

    source = String(required=True, choices=PaymentSource, max_length=20)
    type = String(required=True, choices=PaymentType, max_length=20)
    payment_id = String(required=True, max_length=255, default=UNASSIGNED)
    transaction_id = String(required=True, max_length=255, default=UNASSIGNED)
    amount_in_usd = ValueObject(Money, required=True)
    exchange_rate = ValueObject(ExchangeRateSnapshot)
    amount_in_payment_currency = ValueObject(Money)

    def to_document(self) -> dict:
        return payment_document(self)


@storefront.aggregate
class Checkout:
    overall_status = String(choices=CheckoutStatus, default=CheckoutStatus.RECEIVED.value)
    user_email = String(required=True, max_length=254)
    cart = Dict(required=True)
    mailing_address = ValueObject(MailingAddress, required=True)
    shipping_method = String(required=True, max_length=50)
    payment_info = HasMany(PaymentInfo)
    audit_log = ValueObject(AuditLog)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def start(cls, user, address, shipping_method, cart, now=None):
        now = now or datetime.now(UTC)
        checkout = cls(
            overall_status=CheckoutStatus.RECEIVED.value,
            user_email=user.email,
            cart=cart,
            mailing_address=MailingAddress.from_address(address),
            shipping_method=shipping_method,
            audit_log=AuditLog.stamped(Actor.customer(user.email), now),
        )
        checkout.raise_(
            CheckoutStarted(
                checkout_id=str(checkout.id),
                user_email=checkout.user_email,
                shipping_method=shipping_method,
                total_price=checkout.total_in_usd,
                started_at=now,
            )
        )
        return checkout

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def total_in_usd(self) -> float:
        return round_money(self.cart["total_price"]["amount"])

    @property
    def has_payment(self) -> bool:
        """True once an authorized entry exists. A pending card attempt does not count."""
        return any(entry.type == PaymentType.AUTHORIZATION.value for entry in self.payment_info)

    def payment_documents(self) -> list[dict]:
        return [entry.to_document() for entry in self.payment_info]

    # -------------------------------------------------------------------
    # Payment attempts
    # -------------------------------------------------------------------
    def issue_wallet_payment(self, source: PaymentSource, payment_id: str, rate, now=None) -> PaymentInfo:
        """Attach an authorization entry for a wallet that settles in ``rate.currency``."""
        if self.has_payment:
            raise ValidationError({"payment_info": ["A payment has already been issued for this checkout"]})

        # Drop a pending card attempt left by a declined or failed charge
        for stale in list(self.payment_info):
            self.remove_payment_info(stale)

        amount_in_usd = self.total_in_usd
        converted = round_money(rate.convert(amount_in_usd))
        entry = PaymentInfo(
            source=source.value,
            type=PaymentType.AUTHORIZATION.value,
            payment_id=payment_id,
            transaction_id=UNASSIGNED,
            amount_in_usd=Money.usd(amount_in_usd),
            exchange_rate=ExchangeRateSnapshot(currency=rate.currency, one_usd_equals=rate.one_usd_equals),
            amount_in_payment_currency=Money(amount=converted, currency=rate.currency),
        )
        self.add_payment_info(entry)
        self.touch(now)

        self.raise_(
            PaymentTokenIssued(
                checkout_id=str(self.id),
                payment_source=source.value,
                payment_id=payment_id,
                amount_in_usd=amount_in_usd,
                currency=rate.currency,
                amount_in_payment_currency=converted,
            )
        )
        return entry

    def begin_card_payment(self, now=None) -> PaymentInfo:
        """Replace any earlier attempts with a single pending card entry for the total."""
        now = now or datetime.now(UTC)
        for entry in list(self.payment_info):
            self.remove_payment_info(entry)

        entry = PaymentInfo(
            source=PaymentSource.STRIPE.value,
            type=PaymentType.PENDING.value,
            payment_id=UNASSIGNED,
            transaction_id=UNASSIGNED,
            amount_in_usd=Money.usd(self.total_in_usd),
        )
        self.add_payment_info(entry)
        self.touch(now)

        self.raise_(
            CardPaymentInitiated(
                checkout_id=str(self.id),
                amount_in_usd=self.total_in_usd,
                initiated_at=now,
            )
        )
        return entry

    def touch(self, now=None) -> None:
        self.audit_log = self.audit_log.touched(now=now)

    def to_document(self) -> dict:
        return {
            "id": str(self.id),
            "overall_status": self.overall_status,
            "user_email": self.user_email,
            "cart": self.cart,
            "mailing_address": self.mailing_address.to_dict(),
            "shipping_method": self.shipping_method,
            "payment_info": self.payment_documents(),
            "audit_log": self.audit_log.to_dict() if self.audit_log else None,
        }
