"""
Auth persistence helpers.
"""

from __future__ import annotations

from recordshare.core import db


def normalize_login(login: str) -> str:
    return (login or "").strip()


async def create_user(*, login: str, password_hash: str, name: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO users (login, password, name)
        VALUES ($1, $2, $3)
        RETURNING id, login, name
        """,
        normalize_login(login),
        password_hash,
        name,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_login(login: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, login, password, name
        FROM users
        WHERE login = $1
        """,
        normalize_login(login),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, login, name
        FROM users
        WHERE id = $1
        """,
        user_id,
    )
