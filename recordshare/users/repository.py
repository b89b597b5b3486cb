"""
Sharer listing persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from recordshare.core import db


async def list_sharers(*, limit: int, offset: int) -> list[dict[str, Any]]:
    """
    Owners with at least one shared record, one row per owner.
    LIMIT/OFFSET page over owners, not over share edges.
    """
    return await db.fetch_all(
        """
        SELECT
          r.owner_id AS id,
          u.name,
          count(DISTINCT r.id) AS shared_records
        FROM shared s
        JOIN records r ON r.id = s.record_id
        JOIN users u ON u.id = r.owner_id
        GROUP BY r.owner_id, u.name
        ORDER BY r.owner_id
        LIMIT $1
        OFFSET $2
        """,
        limit,
        offset,
    )
