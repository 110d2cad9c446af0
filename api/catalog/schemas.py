"""
Pydantic schemas for catalog endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Widget(BaseModel):
    id: int
    name: str
    description: str = ""
    inventory_level: int = 0
    price: int
    image: str = ""
    is_recurring: bool = False
    plan_id: str = ""


class PaymentIntentRequest(BaseModel):
    # Sent by the browser as a string of cents, e.g. "1000".
    amount: str = Field(..., min_length=1, max_length=12)
    currency: str = Field(default="usd", min_length=3, max_length=3)
