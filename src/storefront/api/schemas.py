"""Pydantic request/response schemas for the Checkout API.

Request fields are optional at this layer: a missing value reaches the
checkout service and comes back as its own ``InvalidInput`` envelope
rather than a framework 422.
"""

from typing import Any

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class CreateCheckoutRequest(BaseModel):
    address_id: str | None = None
    shipping_method: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address_id": "0b7f3c9e-5d2a-4c8e-9a51-6f0d2e1b7a44",
                    "shipping_method": "standard",
                }
            ]
        }
    }


class CreatePaymentTokenRequest(BaseModel):
    payment_source: str | None = None


class CompleteWithCardRequest(BaseModel):
    payment_token: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"payment_token": "tok_visa"}]}}


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class ServiceEnvelope(BaseModel):
    http_status: int
    status: str
    response_data: Any | None = None
    error_details: str | None = None
