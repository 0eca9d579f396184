"""Stripe payment gateway adapter.

Places authorization holds with ``stripe.Charge.create(capture=False)``.
Amounts arrive in major units and are sent to Stripe in cents.
"""

import stripe
import structlog

from storefront.payments.gateway.port import ChargeResult, PaymentGateway
from storefront.shared.errors import PaymentGatewayError
from storefront.shared.money import to_minor_units

logger = structlog.get_logger(__name__)


class StripeGateway(PaymentGateway):
    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError("A Stripe API key is required")
        self.api_key = api_key

    def authorize_charge(
        self,
        amount: float,
        currency: str,
        source: str,
        metadata: dict,
        description: str,
        statement_descriptor: str,
    ) -> ChargeResult:
        try:
            charge = stripe.Charge.create(
                api_key=self.api_key,
                amount=to_minor_units(amount),
                currency=currency.lower(),
                source=source,
                capture=False,
                metadata=metadata,
                description=description,
                statement_descriptor=statement_descriptor,
            )
        except stripe.CardError as exc:
            logger.warning(
                "Stripe declined the card",
                code=exc.code,
                decline_code=getattr(exc, "decline_code", None),
            )
            return ChargeResult(
                success=False,
                gateway_status="declined",
                failure_reason=exc.user_message or str(exc),
            )
        except stripe.StripeError as exc:
            logger.error("Stripe request failed", error=str(exc), http_status=exc.http_status)
            raise PaymentGatewayError(f"Payment gateway error: {exc.user_message or exc}") from exc

        return ChargeResult(
            success=True,
            gateway_charge_id=charge.id,
            gateway_transaction_id=getattr(charge, "balance_transaction", None),
            gateway_status=charge.status,
        )
