"""Checkout failure taxonomy.

Each error carries the HTTP status the service envelope reports for it.
Anything raised from the orchestrator that is not one of these ends up as a
500 with the raw exception text.
"""


class CheckoutError(Exception):
    http_status = 400

    def __init__(self, message: str, http_status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if http_status is not None:
            self.http_status = http_status


class InvalidInput(CheckoutError):
    http_status = 400


class UnsupportedPaymentSource(InvalidInput):
    http_status = 400


class Unauthorized(CheckoutError):
    http_status = 401


class PaymentDeclined(CheckoutError):
    http_status = 402


class NotFound(CheckoutError):
    http_status = 404


class CheckoutNotAccessible(CheckoutError):
    """The checkout is missing or belongs to someone else. Both look the same to the caller."""

    http_status = 406


class Conflict(CheckoutError):
    http_status = 409


class InternalError(CheckoutError):
    http_status = 500


class PaymentGatewayError(CheckoutError):
    http_status = 502


class CartUnavailable(CheckoutError):
    http_status = 503


class ExchangeRateUnavailable(CheckoutError):
    http_status = 503
