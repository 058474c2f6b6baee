"""Journal Routes — today's draft, submit for analysis, past entries."""

from fastapi import APIRouter, Depends

from lucid.schemas.journal import (
    JournalDraftResponse, JournalDraftUpdate, JournalEntriesResponse,
    JournalSubmit, JournalSubmitResult,
)
from lucid.services.journal import JournalService
from lucid.api.dependencies import get_journal, require_api_key

router = APIRouter(prefix="/api/v1/journal", tags=["journal"])


@router.get("/draft", response_model=JournalDraftResponse)
async def get_draft(journal: JournalService = Depends(get_journal)):
    day, draft = await journal.load_draft()
    return JournalDraftResponse(date_key=day, draft=draft)


@router.put("/draft", response_model=JournalDraftResponse)
async def save_draft(
    body: JournalDraftUpdate, journal: JournalService = Depends(get_journal),
):
    day, draft = await journal.save_draft(body.content)
    return JournalDraftResponse(date_key=day, draft=draft)


@router.post(
    "/submit", response_model=JournalSubmitResult,
    dependencies=[Depends(require_api_key)],
)
async def submit_entry(
    body: JournalSubmit, journal: JournalService = Depends(get_journal),
):
    day, draft, entry = await journal.submit(body.content)
    return JournalSubmitResult(date_key=day, draft=draft, entry=entry)


@router.get("/entries", response_model=JournalEntriesResponse)
async def list_entries(journal: JournalService = Depends(get_journal)):
    return JournalEntriesResponse(entries=await journal.list_entries())
