"""
Auth business logic.
"""

from __future__ import annotations

import logging
import os
from urllib.parse import urlencode

from fastapi import HTTPException, status

from core import mailer

from . import repository, schemas, security

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "invalid credentials"


def frontend_url() -> str:
    return os.environ.get("FRONTEND_URL", "http://localhost:4000").strip().rstrip("/") or "http://localhost:4000"


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=INVALID_CREDENTIALS,
    )


async def _find_user_by_email(email: str) -> dict | None:
    try:
        return await repository.get_user_by_email(email)
    except Exception as exc:
        logger.exception("user_lookup_failed email=%s", email)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Could not look up user.") from exc


async def create_auth_token(payload: schemas.CredentialsRequest) -> schemas.AuthTokenResponse:
    try:
        user_row = await repository.get_user_by_email(payload.email)
    except Exception as exc:
        logger.exception("user_lookup_failed email=%s", payload.email)
        raise _invalid_credentials() from exc
    if user_row is None:
        raise _invalid_credentials()

    if not security.verify_password(payload.password, str(user_row.get("password") or "")):
        raise _invalid_credentials()

    token = security.generate_token(int(user_row["id"]))
    try:
        await repository.insert_token(
            user_id=token.user_id,
            name=f"{user_row['last_name']} {user_row['first_name']}".strip(),
            email=str(user_row["email"]),
            token_hash=token.token_hash,
            expiry=token.expiry,
        )
    except Exception as exc:
        logger.exception("token_insert_failed user_id=%s", token.user_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Could not save token.") from exc

    logger.info("token_issued user_id=%s expiry=%s", token.user_id, token.expiry.isoformat())
    return schemas.AuthTokenResponse(
        message=f"token for {payload.email} created",
        authentication_token=schemas.TokenResponse(token=token.plaintext, expiry=token.expiry),
    )


async def get_user_from_token(plaintext_token: str) -> dict:
    if len(plaintext_token) != security.TOKEN_LENGTH:
        raise _invalid_credentials()

    try:
        user_row = await repository.get_user_for_token(security.hash_token(plaintext_token))
    except Exception as exc:
        logger.exception("token_lookup_failed")
        raise _invalid_credentials() from exc
    if user_row is None:
        raise _invalid_credentials()
    return user_row


async def send_password_reset_email(payload: schemas.ForgotPasswordRequest) -> tuple[int, schemas.MessageResponse]:
    """
    Returns (status_code, body). An unknown address is not an HTTP error.
    """
    user_row = await _find_user_by_email(payload.email)
    if user_row is None:
        return status.HTTP_202_ACCEPTED, schemas.MessageResponse(
            error=True,
            message="No matching email found on system",
        )

    token = security.build_password_reset_token(str(user_row["email"]))
    link = f"{frontend_url()}/reset-password?{urlencode({'token': token})}"

    try:
        await mailer.send_mail(
            to=str(user_row["email"]),
            subject="Password Reset Request",
            text_body=(
                "You requested a password reset.\n\n"
                f"Follow this link to choose a new password:\n{link}\n\n"
                f"The link expires in {security.password_reset_ttl_minutes()} minutes."
            ),
            html_body=(
                "<p>You requested a password reset.</p>"
                f'<p><a href="{link}">Reset your password</a></p>'
                f"<p>The link expires in {security.password_reset_ttl_minutes()} minutes.</p>"
            ),
        )
    except mailer.MailError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return status.HTTP_201_CREATED, schemas.MessageResponse(error=False)


async def reset_password(payload: schemas.ResetPasswordRequest) -> schemas.MessageResponse:
    try:
        email = security.read_password_reset_token(payload.token)
    except security.AuthSecurityError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    user_row = await _find_user_by_email(email)
    if user_row is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No matching user.")

    try:
        password_hash = security.hash_password(payload.password)
    except security.AuthSecurityError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        await repository.update_password(int(user_row["id"]), password_hash)
    except Exception as exc:
        logger.exception("password_update_failed user_id=%s", user_row["id"])
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Could not update password.") from exc
    logger.info("password_reset user_id=%s", user_row["id"])
    return schemas.MessageResponse(error=False, message="password changed")
