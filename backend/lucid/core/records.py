"""Domain Records — plain pydantic records persisted as JSON in the key-value store.

Invariants:
    - Records carry no behavior beyond field validation
    - Dates are epoch milliseconds (EpochMillis)
    - Optional fields default to None/empty so older stored JSON still loads
"""

from pydantic import BaseModel, Field

from lucid.core.domain_types import ChatRole, Feedback


class TarotCard(BaseModel):
    """One card; meaning/position are filled in once it has been drawn."""
    id: int | str | None = None
    name: str
    name_en: str  # image code, e.g. "ar00", "wa01"
    is_reversed: bool = False
    meaning: str | None = None
    position: str | None = None


class SpreadPosition(BaseModel):
    id: int
    name: str
    description: str
    x: int  # percentage 0-100
    y: int


class Spread(BaseModel):
    id: str
    name: str
    description: str
    card_count: int
    positions: list[SpreadPosition]


class ChatMessage(BaseModel):
    role: ChatRole
    text: str


class ReadingSession(BaseModel):
    """A completed question + draw + interpretation + follow-up chat."""
    id: str
    date: int
    question: str
    spread_id: str
    spread_name: str
    cards: list[TarotCard]
    interpretation: str
    chat_history: list[ChatMessage] = Field(default_factory=list)
    feedback: Feedback | None = None


class DailyPractice(BaseModel):
    energy_status: str
    todays_affirmation: str
    action_step: str


class DailyReading(BaseModel):
    cards: list[TarotCard]
    guidance: str


class DailyRecord(BaseModel):
    date: int
    reading: DailyReading
    practice: DailyPractice | None = None


class JournalAnalysis(BaseModel):
    emotional_state: list[str] = Field(default_factory=list)
    blocks_identified: list[str] = Field(default_factory=list)
    high_self_traits: list[str] = Field(default_factory=list)
    summary: str = ""
    tomorrows_advice: str = ""


class JournalDraft(BaseModel):
    """Today's scratchpad; an analysis means the entry was already submitted."""
    content: str = ""
    analysis: JournalAnalysis | None = None


class JournalEntry(BaseModel):
    id: str
    date: int
    content: str
    ai_analysis: JournalAnalysis | None = None
