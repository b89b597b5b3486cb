"""
Record service: creation, sharing, and the visible-records listing.

Flow of a listing:
- the repository returns one already ordered and paginated row stream
- `aggregate.group_adjacent_rows` folds it into records with their recipients
- the page is built in full before anything is returned to the client
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import HTTPException, status

from recordshare.core.errors import store_failure

from . import aggregate, repository, schemas

NOT_OWNED_OR_NOT_FOUND_MESSAGE = "Record not found or not owned by caller."


def _not_owned_or_not_found() -> HTTPException:
    # Missing and foreign records look the same to the caller.
    return HTTPException(
        status_code=status.HTTP_406_NOT_ACCEPTABLE,
        detail=NOT_OWNED_OR_NOT_FOUND_MESSAGE,
    )


async def create_record(
    payload: schemas.NewRecordRequest,
    *,
    owner_id: int,
    logger: logging.Logger,
) -> dict:
    try:
        row = await repository.create_record(
            owner_id=owner_id,
            name=payload.name,
            content=payload.content.encode("utf-8"),
        )
    except asyncpg.PostgresError as exc:
        raise store_failure(logger, "create_record", owner_id=owner_id) from exc

    logger.info("record_created record_id=%s owner_id=%s", row["id"], owner_id)
    return row


async def share(
    payload: schemas.ShareRequest,
    *,
    owner_id: int,
    logger: logging.Logger,
) -> None:
    context = {"owner_id": owner_id, "record_id": payload.record_id, "recipient_id": payload.user_id}
    try:
        edge = await repository.share_record(
            owner_id=owner_id,
            record_id=payload.record_id,
            recipient_id=payload.user_id,
        )
    except asyncpg.UniqueViolationError as exc:
        logger.info("share_duplicate owner_id=%s record_id=%s recipient_id=%s", *context.values())
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Record is already shared with this user.",
        ) from exc
    except asyncpg.ForeignKeyViolationError as exc:
        logger.info("share_unknown_recipient owner_id=%s record_id=%s recipient_id=%s", *context.values())
        raise _not_owned_or_not_found() from exc
    except asyncpg.PostgresError as exc:
        raise store_failure(logger, "share", **context) from exc

    if edge is None:
        logger.info("share_rejected owner_id=%s record_id=%s recipient_id=%s", *context.values())
        raise _not_owned_or_not_found()

    logger.info("record_shared owner_id=%s record_id=%s recipient_id=%s", *context.values())


async def unshare(
    payload: schemas.ShareRequest,
    *,
    owner_id: int,
    logger: logging.Logger,
) -> None:
    context = {"owner_id": owner_id, "record_id": payload.record_id, "recipient_id": payload.user_id}
    try:
        edge = await repository.unshare_record(
            owner_id=owner_id,
            record_id=payload.record_id,
            recipient_id=payload.user_id,
        )
    except asyncpg.PostgresError as exc:
        raise store_failure(logger, "unshare", **context) from exc

    if edge is None:
        logger.info("unshare_rejected owner_id=%s record_id=%s recipient_id=%s", *context.values())
        raise _not_owned_or_not_found()

    logger.info("record_unshared owner_id=%s record_id=%s recipient_id=%s", *context.values())


async def list_visible(
    *,
    user_id: int,
    limit: int,
    offset: int,
    sort_by: str,
    logger: logging.Logger,
) -> schemas.RecordsPage:
    if sort_by not in repository.SORT_COLUMNS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid sort_by param.",
        )

    try:
        rows = await repository.fetch_visible_record_rows(
            user_id=user_id,
            limit=limit,
            offset=offset,
            sort_by=sort_by,
        )
    except asyncpg.PostgresError as exc:
        raise store_failure(logger, "list_records", user_id=user_id) from exc

    records = aggregate.group_adjacent_rows(rows)
    logger.debug("records_listed user_id=%s rows=%s records=%s", user_id, len(rows), len(records))

    # total_count is the size of this page, not of everything visible.
    page_count = len(records)
    return schemas.RecordsPage(
        total_count=page_count,
        records=[schemas.RecordItem(**record.as_dict()) for record in records],
    )
