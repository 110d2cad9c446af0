"""
Auth persistence helpers.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core import db


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, first_name, last_name, email, password, created_at, updated_at
        FROM users
        WHERE lower(email) = lower($1)
        """,
        normalize_email(email),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, first_name, last_name, email, password, created_at, updated_at
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def insert_token(
    *,
    user_id: int,
    name: str,
    email: str,
    token_hash: str,
    expiry: datetime,
) -> None:
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)

    # One live token per user: issuing a new one replaces the old.
    async with db.transaction() as conn:
        await conn.execute(
            """
            DELETE FROM tokens
            WHERE user_id = $1
            """,
            user_id,
        )
        await conn.execute(
            """
            INSERT INTO tokens (user_id, name, email, token_hash, expiry, created_at, updated_at)
            VALUES ($1, $2, $3, $4, $5, now(), now())
            """,
            user_id,
            name,
            email,
            token_hash,
            expiry,
        )


async def get_user_for_token(token_hash: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT u.id, u.first_name, u.last_name, u.email, u.created_at, u.updated_at
        FROM users u
        JOIN tokens t ON t.user_id = u.id
        WHERE t.token_hash = $1
          AND t.expiry > now()
        """,
        token_hash,
    )


async def update_password(user_id: int, password_hash: str) -> None:
    await db.execute(
        """
        UPDATE users
        SET password = $2, updated_at = now()
        WHERE id = $1
        """,
        user_id,
        password_hash,
    )
