"""
Auth security helpers.

- passwords: bcrypt
- authentication tokens: 16 random bytes, base32 without padding (26 chars).
  Only the SHA-256 hash is stored.
- password reset tokens: Fernet (encrypted + signed + timestamped email)
"""

from __future__ import annotations

import base64
import hashlib
import os
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
from cryptography.fernet import Fernet, InvalidToken

TOKEN_LENGTH = 26
# bcrypt only looks at the first 72 bytes and newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72
SCOPE_AUTHENTICATION = "authentication"


class AuthSecurityError(RuntimeError):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def secret_key() -> str:
    # Local default keeps development simple.
    # In production, set SECRET_KEY in environment.
    return os.environ.get("SECRET_KEY", "dev-change-this-secret").strip() or "dev-change-this-secret"


def bcrypt_rounds() -> int:
    return _env_int("BCRYPT_ROUNDS", 12)


def auth_token_ttl_hours() -> int:
    return _env_int("AUTH_TOKEN_TTL_HOURS", 24)


def password_reset_ttl_minutes() -> int:
    return _env_int("PASSWORD_RESET_TTL_MIN", 60)


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    if len(password) > MAX_PASSWORD_BYTES:
        raise AuthSecurityError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=bcrypt_rounds())).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


@dataclass(frozen=True)
class AuthToken:
    plaintext: str
    token_hash: str
    user_id: int
    expiry: datetime
    scope: str


def hash_token(plaintext: str) -> str:
    token = (plaintext or "").encode("utf-8")
    if not token:
        raise AuthSecurityError("Token is empty.")
    return hashlib.sha256(token).hexdigest()


def generate_token(user_id: int, *, ttl: timedelta | None = None, scope: str = SCOPE_AUTHENTICATION) -> AuthToken:
    ttl = ttl if ttl is not None else timedelta(hours=auth_token_ttl_hours())
    plaintext = base64.b32encode(secrets.token_bytes(16)).decode("ascii").rstrip("=")
    return AuthToken(
        plaintext=plaintext,
        token_hash=hash_token(plaintext),
        user_id=user_id,
        expiry=datetime.now(timezone.utc) + ttl,
        scope=scope,
    )


def _fernet() -> Fernet:
    digest = hashlib.sha256(secret_key().encode("utf-8")).digest()
    return Fernet(base64.urlsafe_b64encode(digest))


def build_password_reset_token(email: str) -> str:
    return _fernet().encrypt((email or "").encode("utf-8")).decode("ascii")


def read_password_reset_token(token: str) -> str:
    """
    Return the email inside a reset token, or raise if it is forged or expired.
    """
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Reset token is empty.")
    try:
        email = _fernet().decrypt(raw.encode("ascii"), ttl=password_reset_ttl_minutes() * 60)
    except (InvalidToken, UnicodeEncodeError) as exc:
        raise AuthSecurityError("Invalid or expired reset token.") from exc
    return email.decode("utf-8")
