"""
Admin user persistence (raw SQL).
"""

from __future__ import annotations

from auth.repository import normalize_email
from core import db


async def list_users() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, first_name, last_name, email, created_at, updated_at
        FROM users
        ORDER BY last_name, first_name
        """
    )


async def get_user(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, first_name, last_name, email, created_at, updated_at
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def update_user(*, user_id: int, first_name: str, last_name: str, email: str) -> bool:
    result = await db.execute(
        """
        UPDATE users
        SET first_name = $2, last_name = $3, email = $4, updated_at = now()
        WHERE id = $1
        """,
        user_id,
        first_name,
        last_name,
        normalize_email(email),
    )
    return db.affected_rows(result) > 0


async def add_user(*, first_name: str, last_name: str, email: str, password_hash: str) -> int:
    user_id = await db.fetch_val(
        """
        INSERT INTO users (first_name, last_name, email, password, created_at, updated_at)
        VALUES ($1, $2, $3, $4, now(), now())
        RETURNING id
        """,
        first_name,
        last_name,
        normalize_email(email),
        password_hash,
    )
    if user_id is None:
        raise RuntimeError("Failed to create user.")
    return int(user_id)


async def delete_user(user_id: int) -> bool:
    async with db.transaction() as conn:
        await conn.execute(
            """
            DELETE FROM tokens
            WHERE user_id = $1
            """,
            user_id,
        )
        result = await conn.execute(
            """
            DELETE FROM users
            WHERE id = $1
            """,
            user_id,
        )
    return db.affected_rows(result) > 0
