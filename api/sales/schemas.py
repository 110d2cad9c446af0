"""
Sales API schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class PageRequest(BaseModel):
    page_size: int = Field(default=10, ge=1, le=100)
    page: int = Field(default=1, ge=1)


class OrderWidget(BaseModel):
    id: int
    name: str


class OrderTransaction(BaseModel):
    id: int
    amount: int
    currency: str
    last_four: str
    expiry_month: int
    expiry_year: int
    payment_intent: str
    bank_return_code: str


class OrderCustomer(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str


class Order(BaseModel):
    id: int
    widget_id: int
    transaction_id: int
    customer_id: int
    status_id: int
    quantity: int
    amount: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    widget: OrderWidget
    transaction: OrderTransaction
    customer: OrderCustomer


class OrderPage(BaseModel):
    current_page: int
    page_size: int
    last_page: int
    total_records: int
    orders: list[Order]


class RefundRequest(BaseModel):
    id: int = Field(..., ge=1)
    pi: str = Field(..., min_length=1)
    amount: int = Field(..., ge=1)
    currency: str = Field(default="usd", min_length=3, max_length=3)


class CancelSubscriptionRequest(BaseModel):
    id: int = Field(..., ge=1)
    pi: str = Field(..., min_length=1)
    currency: str = Field(default="usd", min_length=3, max_length=3)


class MessageResponse(BaseModel):
    error: bool = False
    message: str = ""
