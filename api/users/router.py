"""
Admin user endpoints. Every route requires a bearer token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(
    prefix="/api/admin/all-users",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


@router.get("", response_model=list[schemas.UserResponse])
async def all_users() -> list[schemas.UserResponse]:
    return await service.all_users()


@router.get("/{user_id}", response_model=schemas.UserResponse)
async def one_user(user_id: int) -> schemas.UserResponse:
    return await service.one_user(user_id)


@router.post("/edit/{user_id}", response_model=schemas.MessageResponse)
async def edit_user(user_id: int, payload: schemas.EditUserRequest) -> schemas.MessageResponse:
    return await service.edit_user(user_id, payload)


@router.post("/delete/{user_id}", response_model=schemas.MessageResponse)
async def delete_user(user_id: int) -> schemas.MessageResponse:
    return await service.delete_user(user_id)
