"""
Multi-statement writes share one connection and one transaction.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest

from auth import repository as auth_repository
from core import db
from users import repository as users_repository


class FakeConnection:
    def __init__(self, fail_on=None):
        self.events = []
        self.fail_on = fail_on

    @asynccontextmanager
    async def transaction(self):
        self.events.append("begin")
        try:
            yield
        except Exception:
            self.events.append("rollback")
            raise
        self.events.append("commit")

    async def execute(self, sql, *args):
        verb = " ".join(sql.split()[:2])
        if self.fail_on and verb.startswith(self.fail_on):
            raise ConnectionResetError("connection reset")
        self.events.append((verb, args))
        return f"{verb.split()[0]} 1"


class FakePool:
    def __init__(self, conn):
        self.conn = conn
        self.acquired = 0

    @asynccontextmanager
    async def acquire(self):
        self.acquired += 1
        yield self.conn


@pytest.fixture
def fake_pool(monkeypatch):
    def install(conn):
        pool = FakePool(conn)
        monkeypatch.setattr(db, "_pool", pool)
        return pool

    return install


@pytest.mark.asyncio
async def test_insert_token_replaces_old_token_in_one_transaction(fake_pool):
    conn = FakeConnection()
    pool = fake_pool(conn)
    expiry = datetime(2030, 1, 1, tzinfo=timezone.utc)

    await auth_repository.insert_token(
        user_id=1,
        name="User Admin",
        email="admin@example.com",
        token_hash="abc",
        expiry=expiry,
    )

    assert pool.acquired == 1
    assert conn.events == [
        "begin",
        ("DELETE FROM", (1,)),
        ("INSERT INTO", (1, "User Admin", "admin@example.com", "abc", expiry)),
        "commit",
    ]


@pytest.mark.asyncio
async def test_insert_token_failure_rolls_back_the_delete(fake_pool):
    conn = FakeConnection(fail_on="INSERT")
    fake_pool(conn)

    with pytest.raises(ConnectionResetError):
        await auth_repository.insert_token(
            user_id=1,
            name="User Admin",
            email="admin@example.com",
            token_hash="abc",
            expiry=datetime(2030, 1, 1),
        )

    assert conn.events == ["begin", ("DELETE FROM", (1,)), "rollback"]


@pytest.mark.asyncio
async def test_delete_user_removes_tokens_and_user_together(fake_pool):
    conn = FakeConnection()
    pool = fake_pool(conn)

    assert await users_repository.delete_user(3) is True

    assert pool.acquired == 1
    assert conn.events == ["begin", ("DELETE FROM", (3,)), ("DELETE FROM", (3,)), "commit"]


def test_pool_requires_init(monkeypatch):
    monkeypatch.setattr(db, "_pool", None)

    with pytest.raises(RuntimeError):
        db.pool()


def test_affected_rows():
    assert db.affected_rows("DELETE 3") == 3
    assert db.affected_rows("") == 0
