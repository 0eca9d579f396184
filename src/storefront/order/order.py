"""Order aggregate: the durable record of a paid-for checkout.

An Order is a snapshot of the Checkout it came from and keeps the Checkout's
identity, so one checkout can never produce two differently-numbered orders.
"""

import copy
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Dict, HasMany, String, ValueObject

from storefront.domain import storefront
from storefront.exchange.exchange_rate import ExchangeRateSnapshot
from storefront.order.events import OrderReceived
from storefront.shared.address import MailingAddress
from storefront.shared.audit import Actor, AuditLog
from storefront.shared.money import Money, round_money
from storefront.shared.payment import UNASSIGNED, PaymentSource, PaymentType, payment_document


class OrderStatus(Enum):
    RECEIVED = "Received"


def _copied(value_object):
    if value_object is None:
        return None
    return type(value_object)(**value_object.to_dict())


@storefront.entity(part_of="Order")
class OrderPaymentInfo:
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
class Order:
    overall_status = String(choices=OrderStatus, default=OrderStatus.RECEIVED.value)
    user_email = String(required=True, max_length=254)
    cart = Dict(required=True)
    mailing_address = ValueObject(MailingAddress, required=True)
    shipping_method = String(required=True, max_length=50)
    payment_info = HasMany(OrderPaymentInfo)
    audit_log = ValueObject(AuditLog)

    @classmethod
    def from_checkout(cls, checkout, actor: Actor | None = None, now=None):
        """Copy ``checkout`` into a new Order in ``Received`` status with fresh audit stamps."""
        now = now or datetime.now(UTC)
        actor = actor or Actor.customer(checkout.user_email)

        order = cls(
            id=str(checkout.id),
            overall_status=OrderStatus.RECEIVED.value,
            user_email=checkout.user_email,
            cart=copy.deepcopy(checkout.cart),
            mailing_address=_copied(checkout.mailing_address),
            shipping_method=checkout.shipping_method,
            audit_log=AuditLog.stamped(actor, now),
        )
        for entry in checkout.payment_info:
            order.add_payment_info(
                OrderPaymentInfo(
                    source=entry.source,
                    type=entry.type,
                    payment_id=entry.payment_id,
                    transaction_id=entry.transaction_id,
                    amount_in_usd=_copied(entry.amount_in_usd),
                    exchange_rate=_copied(entry.exchange_rate),
                    amount_in_payment_currency=_copied(entry.amount_in_payment_currency),
                )
            )
        return order

    @property
    def total_in_usd(self) -> float:
        return round_money(self.cart["total_price"]["amount"])

    def record_card_authorization(self, charge_id: str, transaction_id: str | None) -> None:
        """Mark the single card entry authorized with the gateway's identifiers."""
        if len(self.payment_info) != 1:
            raise ValidationError({"payment_info": ["Exactly one payment entry is expected for a card payment"]})

        entry = self.payment_info[0]
        entry.type = PaymentType.AUTHORIZATION.value
        entry.payment_id = charge_id
        entry.transaction_id = transaction_id or UNASSIGNED

    def mark_received(self, now=None) -> None:
        now = now or datetime.now(UTC)
        self.overall_status = OrderStatus.RECEIVED.value
        self.audit_log = self.audit_log.touched(now=now)

        payment = self.payment_info[0] if self.payment_info else None
        self.raise_(
            OrderReceived(
                order_id=str(self.id),
                user_email=self.user_email,
                payment_source=payment.source if payment else None,
                payment_type=payment.type if payment else None,
                total_price=self.total_in_usd,
                received_at=now,
            )
        )

    def payment_documents(self) -> list[dict]:
        return [entry.to_document() for entry in self.payment_info]
