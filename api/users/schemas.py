"""
User API schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EditUserRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    # Empty on edit means "keep the current password".
    password: str = Field(default="", max_length=128)


class MessageResponse(BaseModel):
    error: bool = False
    message: str = ""
