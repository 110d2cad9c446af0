"""
Order queries for the admin area (raw SQL).

Sales are orders for non-recurring widgets; subscriptions are orders for
recurring widgets.
"""

from __future__ import annotations

from core import db

_ORDER_COLUMNS = """
    o.id, o.widget_id, o.transaction_id, o.customer_id, o.status_id,
    o.quantity, o.amount, o.created_at, o.updated_at,
    w.name AS widget_name,
    t.amount AS transaction_amount, t.currency, t.last_four, t.expiry_month,
    t.expiry_year, t.payment_intent, t.bank_return_code,
    c.first_name, c.last_name, c.email
"""

_ORDER_JOINS = """
    FROM orders o
    JOIN widgets w ON w.id = o.widget_id
    JOIN transactions t ON t.id = o.transaction_id
    JOIN customers c ON c.id = o.customer_id
"""


async def count_orders(*, recurring: bool) -> int:
    total = await db.fetch_val(
        """
        SELECT count(o.id)
        FROM orders o
        JOIN widgets w ON w.id = o.widget_id
        WHERE w.is_recurring = $1
        """,
        recurring,
    )
    return int(total or 0)


async def list_orders(*, recurring: bool, limit: int, offset: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_ORDER_COLUMNS}
        {_ORDER_JOINS}
        WHERE w.is_recurring = $1
        ORDER BY o.created_at DESC, o.id DESC
        LIMIT $2
        OFFSET $3
        """,
        recurring,
        limit,
        offset,
    )


async def get_order_by_id(order_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_ORDER_COLUMNS}
        {_ORDER_JOINS}
        WHERE o.id = $1
        """,
        order_id,
    )


async def update_order_status(order_id: int, status_id: int) -> bool:
    result = await db.execute(
        """
        UPDATE orders
        SET status_id = $2, updated_at = now()
        WHERE id = $1
        """,
        order_id,
        status_id,
    )
    return db.affected_rows(result) > 0
