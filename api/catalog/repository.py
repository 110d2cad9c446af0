"""
Widget persistence (raw SQL).
"""

from __future__ import annotations

from core import db


async def get_widget(widget_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, description, inventory_level, price,
               coalesce(image, '') AS image, is_recurring,
               coalesce(plan_id, '') AS plan_id
        FROM widgets
        WHERE id = $1
        """,
        widget_id,
    )
