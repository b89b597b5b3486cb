"""
Pydantic schemas for user listing endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class Sharer(BaseModel):
    id: int
    name: str
    shared_records: int


class SharersPage(BaseModel):
    total_count: int
    users: list[Sharer]
