"""Key-Value Store — SQL-backed implementation of the KeyValueStore protocol.

Invariants:
    - set() is an upsert: one row per key, last write wins
    - get() of a missing key returns None (never raises)
    - Each call commits its own change; callers hold no transaction open

Design Decisions:
    - Merge (select-then-add) over dialect-specific ON CONFLICT: same code on SQLite and Postgres
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from lucid.models.kv_entry import KvEntry

logger = logging.getLogger(__name__)


class SqlKeyValueStore:
    """KeyValueStore over the kv_entries table, bound to one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, key: str) -> str | None:
        result = await self.db.execute(
            select(KvEntry.value).where(KvEntry.key == key),
        )
        return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        entry = await self.db.get(KvEntry, key)
        if entry is None:
            self.db.add(KvEntry(key=key, value=value))
        else:
            entry.value = value
        await self.db.commit()

    async def delete(self, key: str) -> None:
        await self.db.execute(delete(KvEntry).where(KvEntry.key == key))
        await self.db.commit()
        logger.debug(f"Deleted key {key}")
