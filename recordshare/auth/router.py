"""
Registration and login endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from recordshare.core.logs import get_logger

from . import schemas, service
from .dependencies import get_current_user_id, get_token_service
from .security import TokenService

router = APIRouter(prefix="/users")


@router.post("/register")
async def register(
    payload: schemas.RegisterRequest,
    logger: logging.Logger = Depends(get_logger),
) -> Response:
    await service.register(payload, logger=logger)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/auth", response_model=schemas.TokenResponse)
async def authenticate(
    payload: schemas.LoginRequest,
    request: Request,
    response: Response,
    tokens: TokenService = Depends(get_token_service),
    logger: logging.Logger = Depends(get_logger),
) -> schemas.TokenResponse:
    result = await service.login(payload, tokens=tokens, logger=logger)
    response.set_cookie(
        key=request.app.state.settings.auth_cookie_name,
        value=result.access_token,
        max_age=tokens.ttl_seconds,
        httponly=True,
        samesite="lax",
    )
    return result


@router.get("/me", response_model=schemas.UserResponse)
async def me(
    user_id: int = Depends(get_current_user_id),
    logger: logging.Logger = Depends(get_logger),
) -> schemas.UserResponse:
    return await service.me(user_id, logger=logger)
