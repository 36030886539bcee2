"""Testes do MemoryTableStore."""

from __future__ import annotations

import pytest

from app.infra.stores import MemoryTableStore


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestMemoryTableStore:
    @pytest.mark.asyncio
    async def test_get_is_case_insensitive(self) -> None:
        store = MemoryTableStore("email")
        await store.put("john@gmail.com", {"email": "john@gmail.com"}, 60)

        assert await store.get("JOHN@Gmail.com") == {"email": "john@gmail.com"}

    @pytest.mark.asyncio
    async def test_put_replaces_existing_row(self) -> None:
        store = MemoryTableStore("email")
        await store.put("a@b.co", {"email": "a@b.co", "source": "one"}, 60)
        await store.put("A@B.CO", {"email": "a@b.co", "source": "two"}, 60)

        assert await store.find("a@b.co") == [{"email": "a@b.co", "source": "two"}]
        assert store.count() == 1

    @pytest.mark.asyncio
    async def test_append_never_overwrites(self) -> None:
        store = MemoryTableStore("original_email")
        await store.append({"original_email": "x@y.z", "status": "invalid"}, 60)
        await store.append({"original_email": "x@y.z", "status": "valid"}, 60)

        rows = await store.find("x@y.z")

        assert [row["status"] for row in rows] == ["invalid", "valid"]
        assert (await store.get("x@y.z"))["status"] == "valid"

    @pytest.mark.asyncio
    async def test_expired_rows_are_invisible(self) -> None:
        clock = FakeClock()
        store = MemoryTableStore("email", clock=clock)
        await store.put("a@b.co", {"email": "a@b.co"}, 10)

        clock.now += 10

        assert await store.get("a@b.co") is None
        assert await store.find("a@b.co") == []
        assert store.count() == 0

    @pytest.mark.asyncio
    async def test_returned_rows_are_copies(self) -> None:
        store = MemoryTableStore("email")
        await store.put("a@b.co", {"email": "a@b.co"}, 60)

        row = await store.get("a@b.co")
        row["email"] = "mutated"

        assert (await store.get("a@b.co"))["email"] == "a@b.co"

    @pytest.mark.asyncio
    async def test_missing_key(self) -> None:
        assert await MemoryTableStore("email").get("nobody@x.io") is None
