"""Reading Archive — past reading sessions stored as one JSON list, newest first.

Invariants:
    - The whole archive lives under a single key (lucid_tarot_sessions)
    - add() prepends: index 0 is always the newest session
    - A corrupt archive reads as empty (logged) but is never overwritten:
      writes raise DatabaseError instead
    - Writes rewrite the full list under one process-wide lock, so concurrent
      updates to the same archive never drop each other
"""

import asyncio
import json
import logging
from typing import Callable

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from lucid.core.domain_types import Feedback
from lucid.core.errors import DatabaseError, ResourceNotFoundError
from lucid.core.records import ChatMessage, ReadingSession
from lucid.core.repository_protocols import KeyValueStore

logger = logging.getLogger(__name__)

SESSIONS_KEY = "lucid_tarot_sessions"

_sessions_adapter = TypeAdapter(list[ReadingSession])

# Serializes read-modify-write of SESSIONS_KEY within the process
_archive_lock = asyncio.Lock()


class ReadingArchive:
    def __init__(self, store: KeyValueStore):
        self.store = store

    async def list_sessions(self, search: str | None = None) -> list[ReadingSession]:
        """All sessions, optionally filtered by a case-insensitive substring."""
        sessions = await self._load()
        if not search or not search.strip():
            return sessions
        needle = search.strip().lower()
        return [
            s for s in sessions
            if needle in s.question.lower() or needle in s.interpretation.lower()
        ]

    async def get(self, session_id: str) -> ReadingSession:
        for s in await self._load():
            if s.id == session_id:
                return s
        raise ResourceNotFoundError("Reading", session_id)

    async def add(self, session: ReadingSession) -> None:
        async with _archive_lock:
            sessions = await self._load(for_write=True)
            await self._save([session, *sessions])
        logger.info("Reading archived", extra={"session_id": session.id})

    async def set_feedback(
        self, session_id: str, feedback: Feedback | None,
    ) -> ReadingSession:
        return await self._update(session_id, lambda s: {"feedback": feedback})

    async def append_chat(
        self, session_id: str, messages: list[ChatMessage],
    ) -> ReadingSession:
        return await self._update(
            session_id, lambda s: {"chat_history": [*s.chat_history, *messages]},
        )

    async def _update(
        self,
        session_id: str,
        changes: Callable[[ReadingSession], dict],
    ) -> ReadingSession:
        """Apply changes(current) to one session; the read sees every earlier write."""
        async with _archive_lock:
            sessions = await self._load(for_write=True)
            for i, s in enumerate(sessions):
                if s.id == session_id:
                    sessions[i] = s.model_copy(update=changes(s))
                    await self._save(sessions)
                    return sessions[i]
        raise ResourceNotFoundError("Reading", session_id)

    async def _load(self, for_write: bool = False) -> list[ReadingSession]:
        raw = await self.store.get(SESSIONS_KEY)
        if not raw:
            return []
        try:
            return _sessions_adapter.validate_json(raw)
        except PydanticValidationError as e:
            if for_write:
                logger.error(f"Reading archive unreadable, refusing to overwrite: {e}")
                raise DatabaseError("reading archive is unreadable", "write")
            logger.error(f"Reading archive unreadable, treating as empty: {e}")
            return []

    async def _save(self, sessions: list[ReadingSession]) -> None:
        await self.store.set(
            SESSIONS_KEY,
            json.dumps(
                [s.model_dump(mode="json") for s in sessions], ensure_ascii=False,
            ),
        )
