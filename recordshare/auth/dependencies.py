"""
Auth dependencies for protected FastAPI routes.

`get_session` is the gate: the route body only runs once the caller's token
verified, and the caller's user id comes from the verified claims, never
from the request body.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

from fastapi import Depends, HTTPException, Request, status

from recordshare.core.logs import get_logger

from .security import SessionClaims, TokenError, TokenService

FORBIDDEN_MESSAGE = "Forbidden."


class MissingCredential(TokenError):
    pass


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def _extract_bearer_token(authorization: str | None) -> str | None:
    raw = (authorization or "").strip()
    if not raw:
        return None

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        return None

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        return None
    return token


def extract_token(request: Request) -> str:
    cookie_name = request.app.state.settings.auth_cookie_name
    token = (request.cookies.get(cookie_name) or "").strip()
    if token:
        return token

    token = _extract_bearer_token(request.headers.get("authorization"))
    if token:
        return token
    raise MissingCredential(f"No {cookie_name} cookie or bearer token.")


async def get_session(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
    logger: logging.Logger = Depends(get_logger),
) -> AsyncIterator[SessionClaims]:
    try:
        try:
            claims = tokens.verify(extract_token(request))
        except TokenError as exc:
            # Callers are not told why a token was refused.
            logger.info(
                "auth_rejected path=%s reason=%s detail=%s",
                request.url.path,
                type(exc).__name__,
                exc,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=FORBIDDEN_MESSAGE,
            ) from exc
        yield claims
    finally:
        await request.close()


async def get_current_user_id(claims: SessionClaims = Depends(get_session)) -> int:
    return claims.user_id
