"""Journal Schemas — today's draft and submission result."""

from pydantic import BaseModel, Field, field_validator

from lucid.core.records import JournalDraft, JournalEntry


class JournalDraftUpdate(BaseModel):
    content: str = Field(max_length=20_000)


class JournalDraftResponse(BaseModel):
    date_key: str
    draft: JournalDraft


class JournalSubmit(BaseModel):
    """Submit today's entry; content defaults to the saved draft when omitted."""
    content: str | None = Field(None, max_length=20_000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


class JournalSubmitResult(BaseModel):
    """analysis/entry are null when the model call failed; the draft is kept."""
    date_key: str
    draft: JournalDraft
    entry: JournalEntry | None = None


class JournalEntriesResponse(BaseModel):
    entries: list[JournalEntry]
