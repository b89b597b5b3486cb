"""
Record API endpoints. Every route here sits behind the auth gate.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from recordshare.auth.dependencies import get_current_user_id
from recordshare.core.db import BIGINT_MAX
from recordshare.core.logs import get_logger

from . import schemas, service

router = APIRouter(prefix="/records")


@router.post("/new", status_code=status.HTTP_201_CREATED)
async def new_record(
    payload: schemas.NewRecordRequest,
    user_id: int = Depends(get_current_user_id),
    logger: logging.Logger = Depends(get_logger),
) -> Response:
    await service.create_record(payload, owner_id=user_id, logger=logger)
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/share")
async def share_record(
    payload: schemas.ShareRequest,
    user_id: int = Depends(get_current_user_id),
    logger: logging.Logger = Depends(get_logger),
) -> Response:
    await service.share(payload, owner_id=user_id, logger=logger)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/unshare")
async def unshare_record(
    payload: schemas.ShareRequest,
    user_id: int = Depends(get_current_user_id),
    logger: logging.Logger = Depends(get_logger),
) -> Response:
    await service.unshare(payload, owner_id=user_id, logger=logger)
    return Response(status_code=status.HTTP_200_OK)


@router.get("", response_model=schemas.RecordsPage)
async def list_records(
    limit: int = Query(..., ge=0, le=BIGINT_MAX),
    offset: int = Query(..., ge=0, le=BIGINT_MAX),
    sort_by: schemas.SortKey = Query(...),
    user_id: int = Depends(get_current_user_id),
    logger: logging.Logger = Depends(get_logger),
) -> schemas.RecordsPage:
    return await service.list_visible(
        user_id=user_id,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        logger=logger,
    )
