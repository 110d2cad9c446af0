"""
Admin sales endpoints. Every route requires a bearer token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(
    prefix="/api/admin",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


@router.post("/all-sales", response_model=schemas.OrderPage)
async def all_sales(payload: schemas.PageRequest) -> schemas.OrderPage:
    return await service.list_orders(payload, recurring=False)


@router.post("/all-subscriptions", response_model=schemas.OrderPage)
async def all_subscriptions(payload: schemas.PageRequest) -> schemas.OrderPage:
    return await service.list_orders(payload, recurring=True)


@router.get("/get-sale/{order_id}", response_model=schemas.Order)
async def get_sale(order_id: int) -> schemas.Order:
    return await service.get_sale(order_id)


@router.post("/refund", response_model=schemas.MessageResponse)
async def refund(payload: schemas.RefundRequest) -> schemas.MessageResponse:
    return await service.refund(payload)


@router.post("/cancel-subscription", response_model=schemas.MessageResponse)
async def cancel_subscription(payload: schemas.CancelSubscriptionRequest) -> schemas.MessageResponse:
    return await service.cancel_subscription(payload)
