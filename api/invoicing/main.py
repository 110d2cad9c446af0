"""
Invoice microservice.

Run alongside the main API, e.g.:
    uvicorn invoicing.main:app --port 5000
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

from fastapi import FastAPI, status
from pydantic import BaseModel, Field

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


class InvoiceOrder(BaseModel):
    id: int = Field(..., ge=1)
    widget_id: int = 0
    quantity: int = Field(default=1, ge=1)
    amount: int = Field(..., ge=0)
    product: str = Field(..., min_length=1)
    first_name: str = ""
    last_name: str = ""
    email: str = Field(..., min_length=3, max_length=320)
    created_at: datetime | None = None


class InvoiceResponse(BaseModel):
    error: bool = False
    message: str


app = FastAPI(title="invoice-service")


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post(
    "/invoice/create-and-send",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_and_send_invoice(order: InvoiceOrder) -> InvoiceResponse:
    logger.info(
        "invoice_created order_id=%s email=%s product=%s quantity=%s amount=%s",
        order.id,
        order.email,
        order.product,
        order.quantity,
        order.amount,
    )
    return InvoiceResponse(
        error=False,
        message=f"Invoice {order.id}.pdf created and sent to {order.email}",
    )
