"""Configurable fake payment gateway for development and testing.

Makes no external calls. Tests flip it between approving, declining and
erroring, and inspect ``calls`` to see what would have been sent.
"""

from uuid import uuid4

from storefront.payments.gateway.port import ChargeResult, PaymentGateway
from storefront.shared.errors import PaymentGatewayError


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Your card was declined."
        self.raise_error: bool = False
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Your card was declined.",
        raise_error: bool = False,
    ) -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_error = raise_error

    def authorize_charge(
        self,
        amount: float,
        currency: str,
        source: str,
        metadata: dict,
        description: str,
        statement_descriptor: str,
    ) -> ChargeResult:
        self.calls.append(
            {
                "method": "authorize_charge",
                "amount": amount,
                "currency": currency,
                "source": source,
                "metadata": metadata,
                "description": description,
                "statement_descriptor": statement_descriptor,
            }
        )

        if self.raise_error:
            raise PaymentGatewayError("Payment gateway is unreachable")

        if self.should_succeed:
            return ChargeResult(
                success=True,
                gateway_charge_id=f"ch_fake_{uuid4().hex[:16]}",
                gateway_transaction_id=f"txn_fake_{uuid4().hex[:16]}",
                gateway_status="succeeded",
            )
        return ChargeResult(
            success=False,
            gateway_status="failed",
            failure_reason=self.failure_reason,
        )

    def reset(self) -> None:
        self.configure()
        self.calls.clear()
