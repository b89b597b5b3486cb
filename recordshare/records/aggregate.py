"""
Fold the flat (record, owner, recipient) row stream into nested records.

`group_adjacent_rows` makes one forward pass and never looks back: it
trusts that all rows of a record arrive next to each other, which the
listing query guarantees by ordering on record id after the sort column.
Feeding it rows in any other order splits a record into several entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass(frozen=True)
class Recipient:
    id: int
    name: str


@dataclass
class VisibleRecord:
    id: int
    name: str
    is_owner: bool
    owner_id: int
    owner_name: str
    shared_to: list[Recipient] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "is_owner": self.is_owner,
            "owner_id": self.owner_id,
            "owner_name": self.owner_name,
            "shared_to": [{"id": r.id, "name": r.name} for r in self.shared_to],
        }


def _recipient(row: dict[str, Any]) -> Recipient | None:
    recipient_id = row.get("recipient_id")
    recipient_name = row.get("recipient_name")
    if recipient_id is None or recipient_name is None:
        return None
    return Recipient(id=int(recipient_id), name=str(recipient_name))


def group_adjacent_rows(rows: Iterable[dict[str, Any]]) -> list[VisibleRecord]:
    records: list[VisibleRecord] = []
    current: VisibleRecord | None = None

    for row in rows:
        record_id = int(row["record_id"])
        if current is None or current.id != record_id:
            current = VisibleRecord(
                id=record_id,
                name=str(row["record_name"]),
                is_owner=bool(row["is_owner"]),
                owner_id=int(row["owner_id"]),
                owner_name=str(row["owner_name"]),
            )
            records.append(current)

        recipient = _recipient(row)
        if recipient is not None:
            current.shared_to.append(recipient)

    return records
