"""
Sharer listing business logic.
"""

from __future__ import annotations

import logging

import asyncpg

from recordshare.core.errors import store_failure

from . import repository, schemas


async def list_sharers(
    *,
    limit: int,
    offset: int,
    caller_id: int,
    logger: logging.Logger,
) -> schemas.SharersPage:
    try:
        rows = await repository.list_sharers(limit=limit, offset=offset)
    except asyncpg.PostgresError as exc:
        raise store_failure(logger, "list_sharers", user_id=caller_id) from exc

    users = [
        schemas.Sharer(
            id=int(row["id"]),
            name=str(row["name"]),
            shared_records=int(row["shared_records"]),
        )
        for row in rows
    ]
    # Page-local count, same convention as the records listing.
    return schemas.SharersPage(total_count=len(users), users=users)
