"""Journal — today's draft, AI analysis on submit, and the entry archive.

Invariants:
    - Today's draft lives under lucid_journal_<YYYY/M/D> as {content, analysis}
    - A draft that already carries an analysis was submitted: loading it clears it
    - Only a successful analysis archives a JournalEntry (newest first)
    - A failed analysis keeps the content as an unanalysed draft
    - An unreadable entry archive is never overwritten (submit raises DatabaseError)
"""

import asyncio
import json
import logging
import uuid
from typing import Callable

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from lucid.core.date_keys import now_millis, today_key
from lucid.core.domain_types import DateKey
from lucid.core.errors import DatabaseError, ValidationError
from lucid.core.records import JournalDraft, JournalEntry
from lucid.core.repository_protocols import KeyValueStore
from lucid.services.tarot_oracle import TarotOracle

logger = logging.getLogger(__name__)

JOURNAL_KEY_PREFIX = "lucid_journal_"
ENTRIES_KEY = "lucid_journal_entries"

_entries_adapter = TypeAdapter(list[JournalEntry])

# Serializes read-modify-write of ENTRIES_KEY within the process
_entries_lock = asyncio.Lock()


def journal_storage_key(day: DateKey) -> str:
    return f"{JOURNAL_KEY_PREFIX}{day}"


class JournalService:
    def __init__(
        self,
        store: KeyValueStore,
        oracle: TarotOracle,
        today: Callable[[], DateKey] = today_key,
    ):
        self.store = store
        self.oracle = oracle
        self.today = today

    async def load_draft(self) -> tuple[DateKey, JournalDraft]:
        """Today's draft to resume; a finished entry yields a blank page."""
        day = self.today()
        draft = await self._read_draft(day)
        if draft.analysis is not None:
            await self.store.delete(journal_storage_key(day))
            return day, JournalDraft()
        return day, draft

    async def save_draft(self, content: str) -> tuple[DateKey, JournalDraft]:
        day = self.today()
        draft = JournalDraft(content=content)
        if content:
            await self.store.set(journal_storage_key(day), draft.model_dump_json())
        else:
            await self.store.delete(journal_storage_key(day))
        return day, draft

    async def submit(
        self, content: str | None = None,
    ) -> tuple[DateKey, JournalDraft, JournalEntry | None]:
        """Analyse today's entry; content defaults to the saved draft."""
        day = self.today()
        if content is None:
            content = (await self._read_draft(day)).content
        if not content or not content.strip():
            raise ValidationError("Journal entry is empty", "content")

        analysis = await self.oracle.analyze_journal_entry(content)
        draft = JournalDraft(content=content, analysis=analysis)
        await self.store.set(journal_storage_key(day), draft.model_dump_json())
        if analysis is None:
            logger.warning("Journal analysis unavailable, draft kept", extra={"date_key": day})
            return day, draft, None

        entry = JournalEntry(
            id=str(uuid.uuid4()),
            date=now_millis(),
            content=content,
            ai_analysis=analysis,
        )
        async with _entries_lock:
            entries = await self._load_entries(for_write=True)
            await self.store.set(
                ENTRIES_KEY,
                json.dumps(
                    [e.model_dump(mode="json") for e in [entry, *entries]],
                    ensure_ascii=False,
                ),
            )
        logger.info("Journal entry archived", extra={"date_key": day})
        return day, draft, entry

    async def list_entries(self) -> list[JournalEntry]:
        return await self._load_entries()

    async def _load_entries(self, for_write: bool = False) -> list[JournalEntry]:
        raw = await self.store.get(ENTRIES_KEY)
        if not raw:
            return []
        try:
            return _entries_adapter.validate_json(raw)
        except PydanticValidationError as e:
            if for_write:
                logger.error(f"Journal archive unreadable, refusing to overwrite: {e}")
                raise DatabaseError("journal archive is unreadable", "write")
            logger.error(f"Journal archive unreadable, treating as empty: {e}")
            return []

    async def _read_draft(self, day: DateKey) -> JournalDraft:
        raw = await self.store.get(journal_storage_key(day))
        if not raw:
            return JournalDraft()
        try:
            return JournalDraft.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.error(f"Journal draft unreadable: {e}", extra={"date_key": day})
            return JournalDraft()
