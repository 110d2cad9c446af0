"""
Checkout API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/api")


@router.post("/create-customer-and-subscribe-to-plan", response_model=schemas.CheckoutResponse)
async def create_customer_and_subscribe_to_plan(payload: schemas.SubscriptionRequest) -> schemas.CheckoutResponse:
    return await service.subscribe_to_plan(payload)


@router.post("/payment-succeeded", response_model=schemas.CheckoutResponse)
async def payment_succeeded(payload: schemas.PaymentSucceededRequest) -> schemas.CheckoutResponse:
    """
    Record a widget order after the browser confirmed its PaymentIntent.
    """
    return await service.payment_succeeded(payload)


@router.post("/admin/virtual-terminal-succeeded", response_model=schemas.TransactionResponse)
async def virtual_terminal_succeeded(
    payload: schemas.VirtualTerminalRequest,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> schemas.TransactionResponse:
    return await service.virtual_terminal_succeeded(payload)
