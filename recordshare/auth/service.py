"""
Auth business logic: registration, credential check, token issuance.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import HTTPException, status

from recordshare.core.errors import store_failure

from . import repository, schemas, security

BCRYPT_MAX_PASSWORD_BYTES = 72
INVALID_CREDENTIALS_MESSAGE = "Invalid login or password."


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        login=str(user_row["login"]),
        name=str(user_row["name"]),
    )


async def register(payload: schemas.RegisterRequest, *, logger: logging.Logger) -> schemas.UserResponse:
    if len(payload.password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password is too long.",
        )

    password_hash = security.hash_password(payload.password)
    try:
        user_row = await repository.create_user(
            login=payload.login,
            password_hash=password_hash,
            name=payload.name,
        )
    except asyncpg.UniqueViolationError as exc:
        logger.info("register_conflict login=%r", payload.login)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Login is already registered.",
        ) from exc
    except asyncpg.PostgresError as exc:
        raise store_failure(logger, "register", login=repr(payload.login)) from exc

    logger.info("user_registered user_id=%s", user_row["id"])
    return _to_user_response(user_row)


async def login(
    payload: schemas.LoginRequest,
    *,
    tokens: security.TokenService,
    logger: logging.Logger,
) -> schemas.TokenResponse:
    try:
        user_row = await repository.get_user_by_login(payload.login)
    except asyncpg.PostgresError as exc:
        raise store_failure(logger, "login", login=repr(payload.login)) from exc

    if user_row is None:
        logger.info("login_rejected login=%r reason=unknown_login", payload.login)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=INVALID_CREDENTIALS_MESSAGE,
        )

    if not security.verify_password(payload.password, str(user_row.get("password") or "")):
        logger.info("login_rejected login=%r reason=bad_password", payload.login)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=INVALID_CREDENTIALS_MESSAGE,
        )

    claims = tokens.claims_for(login=str(user_row["login"]), user_id=int(user_row["id"]))
    return schemas.TokenResponse(access_token=tokens.issue(claims))


async def me(user_id: int, *, logger: logging.Logger) -> schemas.UserResponse:
    try:
        user_row = await repository.get_user_by_id(user_id)
    except asyncpg.PostgresError as exc:
        raise store_failure(logger, "me", user_id=user_id) from exc

    if user_row is None:
        # A valid token for a user that no longer exists.
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden.",
        )
    return _to_user_response(user_row)
