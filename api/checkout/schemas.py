"""
Checkout API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SubscriptionRequest(BaseModel):
    first_name: str = Field(..., min_length=2, max_length=255)
    last_name: str = Field(default="", max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    payment_method: str = Field(..., min_length=1)
    plan: str = Field(..., min_length=1)
    product_id: int = Field(..., ge=1)
    amount: int = Field(..., ge=0)
    currency: str = Field(default="usd", min_length=3, max_length=3)
    last_four: str = Field(default="", max_length=4)
    card_brand: str = Field(default="", max_length=50)
    expiry_month: int = Field(default=0, ge=0, le=12)
    expiry_year: int = Field(default=0, ge=0)


class PaymentSucceededRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(default="", max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    payment_intent: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1)
    product_id: int = Field(..., ge=1)
    quantity: int = Field(default=1, ge=1)
    amount: int = Field(..., ge=0)
    currency: str = Field(default="usd", min_length=3, max_length=3)


class VirtualTerminalRequest(BaseModel):
    amount: int = Field(..., ge=0)
    currency: str = Field(default="usd", min_length=3, max_length=3)
    first_name: str = Field(default="", max_length=255)
    last_name: str = Field(default="", max_length=255)
    email: str = Field(default="", max_length=320)
    payment_intent: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1)


class CheckoutResponse(BaseModel):
    ok: bool
    message: str
    order_id: int | None = None
    transaction_id: int | None = None


class TransactionResponse(BaseModel):
    id: int
    amount: int
    currency: str
    last_four: str
    expiry_month: int
    expiry_year: int
    payment_intent: str
    payment_method: str
    bank_return_code: str
    transaction_status_id: int
