"""
Catalog business logic.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException

from core import cards

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_widget(row: dict) -> schemas.Widget:
    return schemas.Widget(
        id=int(row["id"]),
        name=str(row["name"]),
        description=str(row.get("description") or ""),
        inventory_level=int(row.get("inventory_level") or 0),
        price=int(row["price"]),
        image=str(row.get("image") or ""),
        is_recurring=bool(row.get("is_recurring")),
        plan_id=str(row.get("plan_id") or ""),
    )


async def get_widget(widget_id: int) -> schemas.Widget:
    try:
        row = await repository.get_widget(widget_id)
    except Exception as exc:
        logger.exception("widget_lookup_failed widget_id=%s", widget_id)
        raise HTTPException(status_code=400, detail=f"Could not load widget {widget_id}.") from exc
    if row is None:
        raise HTTPException(status_code=400, detail=f"Widget {widget_id} not found.")
    return _to_widget(row)


def parse_amount(raw: str) -> int:
    try:
        amount = int((raw or "").strip())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Amount must be a whole number of cents.") from exc
    if amount <= 0:
        raise HTTPException(status_code=400, detail="Amount must be positive.")
    return amount


def _payment_intent_payload(pi: Any) -> dict:
    return {
        "id": pi.id,
        "client_secret": pi.client_secret,
        "amount": pi.amount,
        "currency": pi.currency,
        "status": pi.status,
    }


async def create_payment_intent(payload: schemas.PaymentIntentRequest) -> dict:
    amount = parse_amount(payload.amount)
    try:
        pi = await cards.charge(payload.currency, amount)
    except cards.CardError as exc:
        return {"ok": False, "message": exc.message, "content": ""}

    logger.info("payment_intent_created id=%s amount=%s currency=%s", pi.id, amount, payload.currency)
    return _payment_intent_payload(pi)
