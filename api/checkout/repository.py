"""
Customer / transaction / order inserts (raw SQL).

Each insert is its own statement on its own pooled connection. A checkout is
not wrapped in a DB transaction.
"""

from __future__ import annotations

from core import db

TRANSACTION_STATUS_PENDING = 1
TRANSACTION_STATUS_CLEARED = 2
TRANSACTION_STATUS_DECLINED = 3
TRANSACTION_STATUS_REFUNDED = 4
TRANSACTION_STATUS_PARTIALLY_REFUNDED = 5

ORDER_STATUS_CLEARED = 1
ORDER_STATUS_REFUNDED = 2
ORDER_STATUS_CANCELLED = 3


async def insert_customer(*, first_name: str, last_name: str, email: str) -> int:
    customer_id = await db.fetch_val(
        """
        INSERT INTO customers (first_name, last_name, email, created_at, updated_at)
        VALUES ($1, $2, $3, now(), now())
        RETURNING id
        """,
        first_name,
        last_name,
        email,
    )
    if customer_id is None:
        raise RuntimeError("Failed to insert customer.")
    return int(customer_id)


async def insert_transaction(
    *,
    amount: int,
    currency: str,
    last_four: str,
    bank_return_code: str,
    transaction_status_id: int,
    expiry_month: int,
    expiry_year: int,
    payment_intent: str,
    payment_method: str,
) -> int:
    transaction_id = await db.fetch_val(
        """
        INSERT INTO transactions (
            amount, currency, last_four, bank_return_code, transaction_status_id,
            expiry_month, expiry_year, payment_intent, payment_method,
            created_at, updated_at
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, now(), now())
        RETURNING id
        """,
        amount,
        currency,
        last_four,
        bank_return_code,
        transaction_status_id,
        expiry_month,
        expiry_year,
        payment_intent,
        payment_method,
    )
    if transaction_id is None:
        raise RuntimeError("Failed to insert transaction.")
    return int(transaction_id)


async def insert_order(
    *,
    widget_id: int,
    transaction_id: int,
    customer_id: int,
    status_id: int,
    quantity: int,
    amount: int,
) -> int:
    order_id = await db.fetch_val(
        """
        INSERT INTO orders (
            widget_id, transaction_id, customer_id, status_id, quantity, amount,
            created_at, updated_at
        )
        VALUES ($1, $2, $3, $4, $5, $6, now(), now())
        RETURNING id
        """,
        widget_id,
        transaction_id,
        customer_id,
        status_id,
        quantity,
        amount,
    )
    if order_id is None:
        raise RuntimeError("Failed to insert order.")
    return int(order_id)
