"""Journal — verifies draft save/resume, submit with analysis, and the entry archive.

Invariants:
    - Saving empty content removes today's draft
    - A submitted (analysed) draft loads back as a blank page
    - Successful analysis archives an entry, newest first
    - Failed analysis keeps the draft unanalysed and archives nothing
"""

import pytest

from lucid.core.domain_types import DateKey
from lucid.core.errors import DatabaseError, ProviderAPIError, ValidationError
from lucid.services.journal import ENTRIES_KEY, JournalService, journal_storage_key
from lucid.services.tarot_oracle import TarotOracle
from tests.services.fake_provider import FakeProvider

TODAY = DateKey("2026/10/19")

ANALYSIS_REPLY = (
    '{"emotionalState": ["calm"], "blocksIdentified": [], '
    '"highSelfTraits": ["patience"], "summary": "Settling.", '
    '"tomorrowsAdvice": "Rest."}'
)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def journal(store, provider):
    return JournalService(store, TarotOracle(provider, "Ann"), today=lambda: TODAY)


async def test_blank_draft_by_default(journal):
    day, draft = await journal.load_draft()
    assert day == TODAY
    assert draft.content == "" and draft.analysis is None


async def test_save_and_resume_draft(journal):
    await journal.save_draft("Dear diary")
    _, draft = await journal.load_draft()
    assert draft.content == "Dear diary"


async def test_saving_empty_content_clears_draft(journal, store):
    await journal.save_draft("something")
    await journal.save_draft("")
    assert await store.get(journal_storage_key(TODAY)) is None


async def test_submit_archives_analysed_entry(journal, provider):
    provider.queue(ANALYSIS_REPLY)
    await journal.save_draft("Long day, but calm.")

    day, draft, entry = await journal.submit()

    assert day == TODAY
    assert draft.analysis.summary == "Settling."
    assert entry.content == "Long day, but calm."
    assert entry.ai_analysis == draft.analysis
    assert "Long day, but calm." in provider.calls[0]["prompt"]
    assert await journal.list_entries() == [entry]


async def test_submitted_draft_loads_as_blank_page(journal, provider, store):
    provider.queue(ANALYSIS_REPLY)
    await journal.submit("Done for today")

    _, draft = await journal.load_draft()
    assert draft.content == ""
    assert await store.get(journal_storage_key(TODAY)) is None


async def test_entries_newest_first(journal, provider):
    provider.queue(ANALYSIS_REPLY, ANALYSIS_REPLY)
    _, _, first = await journal.submit("first")
    _, _, second = await journal.submit("second")
    assert [e.id for e in await journal.list_entries()] == [second.id, first.id]


async def test_failed_analysis_keeps_draft(journal, provider):
    provider.queue(ProviderAPIError("Gemini API Error: 503 - down", "server_error"))

    _, draft, entry = await journal.submit("Keep me")

    assert entry is None
    assert draft.analysis is None
    assert await journal.list_entries() == []
    _, resumed = await journal.load_draft()
    assert resumed.content == "Keep me"


async def test_empty_submit_rejected(journal, provider):
    with pytest.raises(ValidationError):
        await journal.submit("   ")
    with pytest.raises(ValidationError):
        await journal.submit()
    assert provider.calls == []


async def test_unreadable_entry_archive_is_kept(journal, provider, store):
    await store.set(ENTRIES_KEY, "[{broken")
    provider.queue(ANALYSIS_REPLY)

    assert await journal.list_entries() == []
    with pytest.raises(DatabaseError):
        await journal.submit("today")
    assert await store.get(ENTRIES_KEY) == "[{broken"
