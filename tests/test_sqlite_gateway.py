# tests/test_sqlite_gateway.py
import sqlite3

import pytest


async def test_insert_returns_stored_row_with_assigned_id(database):
    row = await database.table("teams").insert({"subdomain": "acme"})

    assert row["id"] > 0
    assert row["subdomain"] == "acme"
    assert row["customer_id"] is None


async def test_find_one_and_find_filter_by_equality(database):
    teams = database.table("teams")
    await teams.insert({"subdomain": "acme"})
    await teams.insert({"subdomain": "globex", "customer_id": "cus_1"})

    assert (await teams.find_one({"subdomain": "globex"}))["customer_id"] == "cus_1"
    assert await teams.find_one({"subdomain": "initech"}) is None
    assert [row["subdomain"] for row in await teams.find({"customer_id": None})] == ["acme"]


async def test_update_returns_row_as_stored_after_the_write(database):
    teams = database.table("teams")
    created = await teams.insert({"subdomain": "acme"})

    updated = await teams.update({"id": created["id"]}, {"customer_id": "cus_9"})

    assert updated == {"id": created["id"], "subdomain": "acme", "customer_id": "cus_9"}


async def test_update_follows_rewritten_criteria_column(database):
    teams = database.table("teams")
    created = await teams.insert({"subdomain": "acme"})

    updated = await teams.update({"subdomain": "acme"}, {"subdomain": "acme-two"})

    assert updated["id"] == created["id"]
    assert updated["subdomain"] == "acme-two"


async def test_update_without_match_returns_none(database):
    assert await database.table("teams").update({"id": 404}, {"customer_id": "x"}) is None


async def test_unique_violation_is_raised_and_rolled_back(database):
    teams = database.table("teams")
    await teams.insert({"subdomain": "acme"})

    with pytest.raises(sqlite3.IntegrityError):
        await teams.insert({"subdomain": "acme"})

    assert len(await teams.find({})) == 1


async def test_raw_query_runs_parameterized_join(database):
    team = await database.table("teams").insert({"subdomain": "acme"})
    await database.table("users").insert({
        "email": "ada@acme.io", "team_id": team["id"], "created_at": "2024-01-01T00:00:00+00:00"
    })

    rows = await database.query(
        "SELECT teams.id FROM users LEFT JOIN teams ON users.team_id = teams.id "
        "WHERE teams.subdomain = ? AND users.email = ?",
        ("acme", "ada@acme.io")
    )

    assert rows == [{"id": team["id"]}]


@pytest.mark.parametrize("name", ["teams; DROP TABLE users", "1teams", "te-ams"])
async def test_table_names_must_be_identifiers(database, name):
    with pytest.raises(ValueError):
        database.table(name)


async def test_column_names_must_be_identifiers(database):
    with pytest.raises(ValueError):
        await database.table("teams").find_one({"subdomain = 'x' OR 1=1 --": "y"})


async def test_gateway_used_after_teardown_fails(tmp_path):
    from anymessage.storage.sqlite_gateway import SQLiteDatabase

    db = SQLiteDatabase(str(tmp_path / "closed.sqlite3"))
    await db.initialize()
    await db.teardown()

    with pytest.raises(RuntimeError):
        await db.query("SELECT 1")
