"""SQL Key-Value Store — verifies upsert, missing keys, and deletes against SQLite."""

from sqlalchemy import func, select

from lucid.models.kv_entry import KvEntry


async def test_missing_key_returns_none(store):
    assert await store.get("lucid_provider") is None


async def test_set_then_get(store):
    await store.set("lucid_user_name", "旅行者")
    assert await store.get("lucid_user_name") == "旅行者"


async def test_set_overwrites_single_row(store, test_db):
    await store.set("k", "one")
    await store.set("k", "two")
    assert await store.get("k") == "two"
    count = await test_db.scalar(select(func.count()).select_from(KvEntry))
    assert count == 1


async def test_delete_removes_key(store):
    await store.set("k", "v")
    await store.delete("k")
    assert await store.get("k") is None


async def test_delete_missing_key_is_noop(store):
    await store.delete("never-set")
    assert await store.get("never-set") is None
