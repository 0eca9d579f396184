"""Payment gateway port.

Card payments are authorized at checkout and captured later, so the port
only places authorization holds.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChargeResult:
    """Outcome of an authorization request."""

    success: bool
    gateway_charge_id: str | None = None
    gateway_transaction_id: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    @abstractmethod
    def authorize_charge(
        self,
        amount: float,
        currency: str,
        source: str,
        metadata: dict,
        description: str,
        statement_descriptor: str,
    ) -> ChargeResult:
        """Place a hold of ``amount`` on the card behind ``source`` without capturing it.

        A declined card is reported as an unsuccessful ``ChargeResult``;
        transport and API failures raise ``PaymentGatewayError``.
        """
        ...
