"""
User listing endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from recordshare.auth.dependencies import get_current_user_id
from recordshare.core.db import BIGINT_MAX
from recordshare.core.logs import get_logger

from . import schemas, service

router = APIRouter(prefix="/users")


@router.get("/sharers", response_model=schemas.SharersPage)
async def list_sharers(
    limit: int = Query(..., ge=0, le=BIGINT_MAX),
    offset: int = Query(..., ge=0, le=BIGINT_MAX),
    user_id: int = Depends(get_current_user_id),
    logger: logging.Logger = Depends(get_logger),
) -> schemas.SharersPage:
    return await service.list_sharers(limit=limit, offset=offset, caller_id=user_id, logger=logger)
