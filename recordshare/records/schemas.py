"""
Pydantic schemas for record endpoints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from recordshare.core.db import BIGINT_MAX

SortKey = Literal["owner", "record"]


class NewRecordRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=500)
    # Accepted from clients, not stored.
    duration: int = Field(default=0, ge=0)
    content: str


class ShareRequest(BaseModel):
    record_id: int = Field(..., ge=-BIGINT_MAX - 1, le=BIGINT_MAX)
    user_id: int = Field(..., ge=-BIGINT_MAX - 1, le=BIGINT_MAX)


class SharedTo(BaseModel):
    id: int
    name: str


class RecordItem(BaseModel):
    id: int
    name: str
    is_owner: bool
    owner_id: int
    owner_name: str
    shared_to: list[SharedTo]


class RecordsPage(BaseModel):
    total_count: int
    records: list[RecordItem]
