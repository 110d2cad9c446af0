"""
User management business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException

from auth import repository as auth_repository
from auth import security

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_user_response(row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(row["id"]),
        first_name=str(row.get("first_name") or ""),
        last_name=str(row.get("last_name") or ""),
        email=str(row.get("email") or ""),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


async def all_users() -> list[schemas.UserResponse]:
    try:
        rows = await repository.list_users()
    except Exception as exc:
        logger.exception("user_list_failed")
        raise HTTPException(status_code=400, detail="Could not load users.") from exc
    return [_to_user_response(row) for row in rows]


async def one_user(user_id: int) -> schemas.UserResponse:
    try:
        row = await repository.get_user(user_id)
    except Exception as exc:
        logger.exception("user_lookup_failed user_id=%s", user_id)
        raise HTTPException(status_code=400, detail=f"Could not load user {user_id}.") from exc
    if row is None:
        raise HTTPException(status_code=400, detail=f"User {user_id} not found.")
    return _to_user_response(row)


def _hash_new_password(password: str) -> str:
    try:
        return security.hash_password(password)
    except security.AuthSecurityError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


async def edit_user(user_id: int, payload: schemas.EditUserRequest) -> schemas.MessageResponse:
    """
    user_id > 0 edits an existing user; 0 adds a new one.
    """
    if user_id <= 0 and not payload.password:
        raise HTTPException(status_code=400, detail="Password is required for a new user.")
    password_hash = _hash_new_password(payload.password) if payload.password else None

    try:
        if user_id > 0:
            updated = await repository.update_user(
                user_id=user_id,
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=payload.email,
            )
            if not updated:
                raise HTTPException(status_code=400, detail=f"User {user_id} not found.")
            if password_hash:
                await auth_repository.update_password(user_id, password_hash)
            logger.info("user_updated user_id=%s password_changed=%s", user_id, bool(password_hash))
        else:
            new_id = await repository.add_user(
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=payload.email,
                password_hash=password_hash,
            )
            logger.info("user_added user_id=%s", new_id)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("user_save_failed user_id=%s", user_id)
        raise HTTPException(status_code=400, detail="Could not save user.") from exc

    return schemas.MessageResponse(error=False)


async def delete_user(user_id: int) -> schemas.MessageResponse:
    try:
        deleted = await repository.delete_user(user_id)
    except Exception as exc:
        logger.exception("user_delete_failed user_id=%s", user_id)
        raise HTTPException(status_code=400, detail="Could not delete user.") from exc
    if not deleted:
        raise HTTPException(status_code=400, detail=f"User {user_id} not found.")

    logger.info("user_deleted user_id=%s", user_id)
    return schemas.MessageResponse(error=False)
