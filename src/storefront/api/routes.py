"""FastAPI routes for checkout."""

from fastapi import APIRouter, Depends, Header
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    CompleteWithCardRequest,
    CreateCheckoutRequest,
    CreatePaymentTokenRequest,
    ServiceEnvelope,
)
from storefront.checkout.service import CheckoutService
from storefront.customer.user import User
from storefront.shared.responses import ServiceResponse

router = APIRouter(prefix="/checkout", tags=["checkout"])


async def current_user(x_user_email: str | None = Header(default=None)) -> User | None:
    """Resolve the caller from the ``X-User-Email`` header set by the auth gateway."""
    if not x_user_email:
        return None
    return current_domain.repository_for(User).find_by_email(x_user_email)


def get_checkout_service() -> CheckoutService:
    return CheckoutService()


def _render(response: ServiceResponse) -> JSONResponse:
    return JSONResponse(status_code=response.http_status, content=jsonable_encoder(response.as_dict()))


@router.post("", response_model=ServiceEnvelope)
async def create_checkout(
    body: CreateCheckoutRequest,
    user: User | None = Depends(current_user),
    service: CheckoutService = Depends(get_checkout_service),
) -> JSONResponse:
    """Price the caller's cart and open a checkout for it."""
    return _render(service.create_checkout(body.address_id, body.shipping_method, user))


@router.post("/{checkout_id}/payment-token", response_model=ServiceEnvelope)
async def create_payment_token(
    checkout_id: str,
    body: CreatePaymentTokenRequest,
    user: User | None = Depends(current_user),
    service: CheckoutService = Depends(get_checkout_service),
) -> JSONResponse:
    """Issue a wallet payment id for the checkout."""
    return _render(service.create_payment_token(checkout_id, body.payment_source, user))


@router.post("/{checkout_id}/card", response_model=ServiceEnvelope)
async def complete_with_card(
    checkout_id: str,
    body: CompleteWithCardRequest,
    user: User | None = Depends(current_user),
    service: CheckoutService = Depends(get_checkout_service),
) -> JSONResponse:
    """Authorize the card behind ``payment_token`` and place the order."""
    return _render(service.complete_checkout_using_card(checkout_id, body.payment_token, user))


@router.post("/payments/{payment_source}/{payment_id}/complete", response_model=ServiceEnvelope)
async def complete_checkout(
    payment_source: str,
    payment_id: str,
    service: CheckoutService = Depends(get_checkout_service),
) -> JSONResponse:
    """Wallet provider callback confirming ``payment_id``."""
    return _render(service.complete_checkout(payment_source, payment_id))
