"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class _LoginField(BaseModel):
    login: str = Field(..., min_length=1, max_length=320)

    # Runs before the length checks, so a blank login is rejected.
    @field_validator("login", mode="before")
    @classmethod
    def _strip_login(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class RegisterRequest(_LoginField):
    # bcrypt only looks at the first 72 bytes.
    password: str = Field(..., min_length=1, max_length=72)
    name: str = Field(..., min_length=1, max_length=200)


class LoginRequest(_LoginField):
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str


class UserResponse(BaseModel):
    id: int
    login: str
    name: str
