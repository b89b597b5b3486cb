"""
Record and share-edge persistence (raw SQL).

Ownership checks are folded into the mutating statement itself, so a share
or unshare either happens for an owned record or touches nothing. There is
no separate read-then-write step that a concurrent request could slip into.
"""

from __future__ import annotations

from typing import Any

from recordshare.core import db

# sort_by value -> column of the `page` CTE the listing is ordered by.
SORT_COLUMNS = {
    "owner": "owner_name",
    "record": "record_name",
}


async def create_record(*, owner_id: int, name: str, content: bytes) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO records (name, content, owner_id)
        VALUES ($1, $2, $3)
        RETURNING id, name, owner_id
        """,
        name,
        content,
        owner_id,
    )
    if row is None:
        raise RuntimeError("Failed to create record.")
    return row


async def share_record(*, owner_id: int, record_id: int, recipient_id: int) -> dict[str, Any] | None:
    """
    Insert a share edge if `record_id` exists and belongs to `owner_id`.
    Returns the new edge, or None when nothing was inserted.
    """
    return await db.fetch_one(
        """
        INSERT INTO shared (record_id, "to")
        SELECT r.id, $3
        FROM records r
        WHERE r.id = $2
          AND r.owner_id = $1
        RETURNING record_id, "to" AS user_id
        """,
        owner_id,
        record_id,
        recipient_id,
    )


async def unshare_record(*, owner_id: int, record_id: int, recipient_id: int) -> dict[str, Any] | None:
    """
    Delete a share edge if the record belongs to `owner_id` and the edge exists.
    Returns the removed edge, or None when nothing was deleted.
    """
    return await db.fetch_one(
        """
        DELETE FROM shared s
        USING records r
        WHERE r.id = $2
          AND r.owner_id = $1
          AND s.record_id = r.id
          AND s."to" = $3
        RETURNING s.record_id, s."to" AS user_id
        """,
        owner_id,
        record_id,
        recipient_id,
    )


async def fetch_visible_record_rows(
    *,
    user_id: int,
    limit: int,
    offset: int,
    sort_by: str,
) -> list[dict[str, Any]]:
    """
    One row per (visible record, recipient) pair, records with no shares
    yielding a single row with NULL recipient columns.

    LIMIT/OFFSET apply to the distinct visible records (the `page` CTE)
    before recipients are joined in, so a page never cuts a record's
    recipient list in half. Rows of the same record are contiguous.
    """
    sort_column = SORT_COLUMNS[sort_by]
    return await db.fetch_all(
        f"""
        WITH page AS (
            SELECT
              r.id AS record_id,
              r.name AS record_name,
              (r.owner_id = $1) AS is_owner,
              o.id AS owner_id,
              o.name AS owner_name
            FROM records r
            JOIN users o ON o.id = r.owner_id
            WHERE r.owner_id = $1
               OR EXISTS (
                 SELECT 1
                 FROM shared v
                 WHERE v.record_id = r.id
                   AND v."to" = $1
               )
            ORDER BY is_owner DESC, {sort_column}, record_id
            LIMIT $2
            OFFSET $3
        )
        SELECT
          p.record_id,
          p.record_name,
          p.is_owner,
          p.owner_id,
          p.owner_name,
          u.id AS recipient_id,
          u.name AS recipient_name
        FROM page p
        LEFT JOIN shared s ON s.record_id = p.record_id
        LEFT JOIN users u ON u.id = s."to"
        ORDER BY p.is_owner DESC, p.{sort_column}, p.record_id, u.id
        """,
        user_id,
        limit,
        offset,
    )
