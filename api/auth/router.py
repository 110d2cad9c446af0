"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from . import dependencies, schemas, service

router = APIRouter(prefix="/api")


@router.post("/authenticate", response_model=schemas.AuthTokenResponse)
async def authenticate(payload: schemas.CredentialsRequest) -> schemas.AuthTokenResponse:
    return await service.create_auth_token(payload)


@router.post("/is-authenticated", response_model=schemas.MessageResponse)
async def is_authenticated(
    current_user: dict = Depends(dependencies.get_current_user),
) -> schemas.MessageResponse:
    return schemas.MessageResponse(error=False, message=f"authenticated user {current_user['email']}")


@router.post("/forgot-password")
async def forgot_password(payload: schemas.ForgotPasswordRequest) -> JSONResponse:
    status_code, body = await service.send_password_reset_email(payload)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post(
    "/reset-password",
    response_model=schemas.MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def reset_password(payload: schemas.ResetPasswordRequest) -> schemas.MessageResponse:
    return await service.reset_password(payload)
