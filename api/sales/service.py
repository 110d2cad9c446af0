"""
Sales business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException

from checkout import repository as checkout_repository
from core import cards, pagination

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_order(row: dict) -> schemas.Order:
    return schemas.Order(
        id=int(row["id"]),
        widget_id=int(row["widget_id"]),
        transaction_id=int(row["transaction_id"]),
        customer_id=int(row["customer_id"]),
        status_id=int(row["status_id"]),
        quantity=int(row["quantity"]),
        amount=int(row["amount"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        widget=schemas.OrderWidget(id=int(row["widget_id"]), name=str(row["widget_name"])),
        transaction=schemas.OrderTransaction(
            id=int(row["transaction_id"]),
            amount=int(row["transaction_amount"]),
            currency=str(row.get("currency") or ""),
            last_four=str(row.get("last_four") or ""),
            expiry_month=int(row.get("expiry_month") or 0),
            expiry_year=int(row.get("expiry_year") or 0),
            payment_intent=str(row.get("payment_intent") or ""),
            bank_return_code=str(row.get("bank_return_code") or ""),
        ),
        customer=schemas.OrderCustomer(
            id=int(row["customer_id"]),
            first_name=str(row.get("first_name") or ""),
            last_name=str(row.get("last_name") or ""),
            email=str(row.get("email") or ""),
        ),
    )


async def list_orders(payload: schemas.PageRequest, *, recurring: bool) -> schemas.OrderPage:
    try:
        total = await repository.count_orders(recurring=recurring)
        rows = await repository.list_orders(
            recurring=recurring,
            limit=payload.page_size,
            offset=pagination.page_offset(payload.page, payload.page_size),
        )
    except Exception as exc:
        logger.exception("order_list_failed recurring=%s page=%s", recurring, payload.page)
        raise HTTPException(status_code=400, detail="Could not load orders.") from exc

    return schemas.OrderPage(
        current_page=payload.page,
        page_size=payload.page_size,
        last_page=pagination.last_page(total, payload.page_size),
        total_records=total,
        orders=[_to_order(row) for row in rows],
    )


async def get_sale(order_id: int) -> schemas.Order:
    try:
        row = await repository.get_order_by_id(order_id)
    except Exception as exc:
        logger.exception("order_lookup_failed order_id=%s", order_id)
        raise HTTPException(status_code=400, detail=f"Could not load order {order_id}.") from exc
    if row is None:
        raise HTTPException(status_code=400, detail=f"Order {order_id} not found.")
    return _to_order(row)


async def _set_status(order_id: int, status_id: int, *, failure_detail: str) -> None:
    try:
        updated = await repository.update_order_status(order_id, status_id)
    except Exception as exc:
        logger.exception("order_status_update_failed order_id=%s status_id=%s", order_id, status_id)
        raise HTTPException(status_code=400, detail=failure_detail) from exc
    if not updated:
        logger.warning("order_status_update_missed order_id=%s status_id=%s", order_id, status_id)
        raise HTTPException(status_code=400, detail=failure_detail)


async def refund(payload: schemas.RefundRequest) -> schemas.MessageResponse:
    try:
        await cards.refund(payload.pi, payload.amount)
    except cards.CardError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc

    await _set_status(
        payload.id,
        checkout_repository.ORDER_STATUS_REFUNDED,
        failure_detail="the charge was refunded, but the database could not be updated",
    )
    logger.info("order_refunded order_id=%s amount=%s", payload.id, payload.amount)
    return schemas.MessageResponse(error=False, message="Charge Refunded")


async def cancel_subscription(payload: schemas.CancelSubscriptionRequest) -> schemas.MessageResponse:
    try:
        await cards.cancel_subscription(payload.pi)
    except cards.CardError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc

    await _set_status(
        payload.id,
        checkout_repository.ORDER_STATUS_CANCELLED,
        failure_detail="the subscription was cancelled, but the database could not be updated",
    )
    logger.info("subscription_cancelled order_id=%s subscription_id=%s", payload.id, payload.pi)
    return schemas.MessageResponse(error=False, message="Subscription Cancelled")
