"""Pydantic schemas for registration, login, and the resolved identity."""

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)

    field_messages: ClassVar[dict[str, str]] = {
        "username.missing": "Username is required",
        "username": "Username must be between 3 and 30 characters",
        "email": "Valid email is required",
        "password": "Password must be at least 6 characters",
    }


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    field_messages: ClassVar[dict[str, str]] = {
        "email": "Valid email is required",
        "password": "Password is required",
    }


class CurrentUser(BaseModel):
    """The authenticated identity. Never carries the password hash."""
    id: str
    username: str
    email: str
    created_at: datetime

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class UserSummary(BaseModel):
    id: str
    username: str
    email: str

    model_config = {"from_attributes": True}


class AuthPayload(BaseModel):
    user: UserSummary
    token: str
