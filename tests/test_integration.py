"""End-to-end flow against a real Postgres.

Runs only when TEST_DATABASE_URL points at a disposable database: every
test truncates users, records and shared.
"""

import os

import pytest
import pytest_asyncio

from recordshare.core import db

TEST_DB_URL = os.environ.get("TEST_DATABASE_URL", "").strip()

pytestmark = pytest.mark.skipif(not TEST_DB_URL, reason="TEST_DATABASE_URL is not set")


@pytest_asyncio.fixture()
async def database():
    await db.init_pool(TEST_DB_URL, min_size=1, max_size=2)
    try:
        await db.apply_schema()
        await db.execute("TRUNCATE shared, records, users RESTART IDENTITY CASCADE")
        yield
    finally:
        await db.close_pool()


async def _login(client, login, password):
    resp = await client.post("/users/auth", json={"login": login, "password": password})
    assert resp.status_code == 200
    return resp.json()["access_token"]


@pytest_asyncio.fixture()
async def seeded(client, database):
    """David(1) and Richard(2) with three records and two shares."""
    await client.post("/users/register", json={"login": "david", "password": "pw1", "name": "David"})
    await client.post("/users/register", json={"login": "richard", "password": "pw2", "name": "Richard"})
    tokens = {
        "david": await _login(client, "david", "pw1"),
        "richard": await _login(client, "richard", "pw2"),
    }

    async def as_user(name, method, url, **kwargs):
        client.cookies.clear()
        client.cookies.set("access_token", tokens[name])
        return await client.request(method, url, **kwargs)

    assert (await as_user("david", "POST", "/records/new", json={"name": "Time", "content": "a"})).status_code == 201
    assert (
        await as_user("richard", "POST", "/records/new", json={"name": "Catch The Rainbow", "content": "b"})
    ).status_code == 201
    assert (await as_user("david", "POST", "/records/new", json={"name": "Hey You", "content": "c"})).status_code == 201

    assert (await as_user("david", "POST", "/records/share", json={"record_id": 1, "user_id": 2})).status_code == 200
    assert (await as_user("richard", "POST", "/records/share", json={"record_id": 2, "user_id": 1})).status_code == 200
    return as_user


async def _shared_edges():
    rows = await db.fetch_all('SELECT record_id, "to" FROM shared ORDER BY record_id, "to"')
    return [(r["record_id"], r["to"]) for r in rows]


@pytest.mark.asyncio
async def test_records_listing_for_david(seeded):
    resp = await seeded("david", "GET", "/records", params={"limit": 10, "offset": 0, "sort_by": "record"})
    assert resp.status_code == 200
    assert resp.json() == {
        "total_count": 3,
        "records": [
            {
                "id": 3,
                "name": "Hey You",
                "is_owner": True,
                "owner_id": 1,
                "owner_name": "David",
                "shared_to": [],
            },
            {
                "id": 1,
                "name": "Time",
                "is_owner": True,
                "owner_id": 1,
                "owner_name": "David",
                "shared_to": [{"id": 2, "name": "Richard"}],
            },
            {
                "id": 2,
                "name": "Catch The Rainbow",
                "is_owner": False,
                "owner_id": 2,
                "owner_name": "Richard",
                "shared_to": [{"id": 1, "name": "David"}],
            },
        ],
    }


@pytest.mark.asyncio
async def test_records_pagination_is_per_record(seeded):
    await seeded("david", "POST", "/records/share", json={"record_id": 3, "user_id": 2})

    resp = await seeded("david", "GET", "/records", params={"limit": 1, "offset": 1, "sort_by": "record"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_count"] == 1
    assert [r["name"] for r in body["records"]] == ["Time"]


@pytest.mark.asyncio
async def test_share_then_unshare_restores_edges(seeded):
    before = await _shared_edges()
    assert (await seeded("david", "POST", "/records/share", json={"record_id": 3, "user_id": 2})).status_code == 200
    assert (await seeded("david", "POST", "/records/unshare", json={"record_id": 3, "user_id": 2})).status_code == 200
    assert await _shared_edges() == before


@pytest.mark.asyncio
async def test_share_foreign_record_changes_nothing(seeded):
    before = await _shared_edges()
    resp = await seeded("richard", "POST", "/records/share", json={"record_id": 3, "user_id": 2})
    assert resp.status_code == 406
    assert await _shared_edges() == before


@pytest.mark.asyncio
async def test_share_duplicate_edge(seeded):
    resp = await seeded("david", "POST", "/records/share", json={"record_id": 1, "user_id": 2})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_sharers_listing(seeded):
    await seeded("david", "POST", "/records/share", json={"record_id": 3, "user_id": 2})

    resp = await seeded("richard", "GET", "/users/sharers", params={"limit": 10, "offset": 0})
    assert resp.status_code == 200
    assert resp.json() == {
        "total_count": 2,
        "users": [
            {"id": 1, "name": "David", "shared_records": 2},
            {"id": 2, "name": "Richard", "shared_records": 1},
        ],
    }


@pytest.mark.asyncio
async def test_records_listing_sorted_by_owner(seeded):
    await seeded("richard", "POST", "/records/new", json={"name": "Another Brick", "content": "d"})
    await seeded("richard", "POST", "/records/share", json={"record_id": 4, "user_id": 1})

    resp = await seeded("david", "GET", "/records", params={"limit": 10, "offset": 0, "sort_by": "owner"})
    assert resp.status_code == 200
    body = resp.json()
    # Owned first; within a group by owner name, then record id.
    assert [(r["id"], r["is_owner"], r["owner_name"]) for r in body["records"]] == [
        (1, True, "David"),
        (3, True, "David"),
        (2, False, "Richard"),
        (4, False, "Richard"),
    ]
