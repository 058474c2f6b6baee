"""Reading Schemas — question, draw, feedback, and follow-up chat bodies.

Invariants:
    - Questions are stripped and non-empty (1-2000 chars)
    - Card indices are non-negative; duplicates and range are checked against the deck
    - FeedbackUpdate.feedback may be null (clears feedback)
"""

from pydantic import BaseModel, Field, field_validator

from lucid.core.domain_types import Element, Feedback
from lucid.core.records import ChatMessage, ReadingSession, Spread, TarotCard


def _strip_non_empty(v: str, field: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field} cannot be empty or whitespace")
    return v


class RecommendRequest(BaseModel):
    question: str = Field(min_length=1, max_length=2000)

    @field_validator("question")
    @classmethod
    def strip_question(cls, v: str) -> str:
        return _strip_non_empty(v, "question")


class RecommendResponse(BaseModel):
    spread_ids: list[str]


class DrawReadingRequest(BaseModel):
    """Draw and interpret a spread.

    indices: positions picked from the shuffled deck, one per spread position.
    element_indices: four_elements only; one pick per element deck.
    Omitted picks are drawn at random.
    """
    question: str = Field(min_length=1, max_length=2000)
    spread_id: str = Field(min_length=1, max_length=100)
    indices: list[int] | None = None
    element_indices: dict[Element, int] | None = None

    @field_validator("question")
    @classmethod
    def strip_question(cls, v: str) -> str:
        return _strip_non_empty(v, "question")

    @field_validator("indices")
    @classmethod
    def non_negative_indices(cls, v: list[int] | None) -> list[int] | None:
        if v is not None and any(i < 0 for i in v):
            raise ValueError("indices must be non-negative")
        return v


class FeedbackUpdate(BaseModel):
    feedback: Feedback | None = None


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=4000)

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str) -> str:
        return _strip_non_empty(v, "message")


class ChatResponse(BaseModel):
    reply: ChatMessage
    session: ReadingSession


class ReadingListResponse(BaseModel):
    sessions: list[ReadingSession]
    total: int


class SpreadListResponse(BaseModel):
    spreads: list[Spread]


class DeckCard(TarotCard):
    image_url: str


class DeckResponse(BaseModel):
    cards: list[DeckCard]
