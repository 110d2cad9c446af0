"""
Catalog API endpoints (public).
"""

from __future__ import annotations

from fastapi import APIRouter

from . import schemas, service

router = APIRouter(prefix="/api")


@router.get("/widget/{widget_id}", response_model=schemas.Widget)
async def get_widget(widget_id: int) -> schemas.Widget:
    return await service.get_widget(widget_id)


@router.post("/payment-intent")
async def payment_intent(payload: schemas.PaymentIntentRequest) -> dict:
    """
    Create a PaymentIntent. The browser confirms it with the client secret.
    """
    return await service.create_payment_intent(payload)
