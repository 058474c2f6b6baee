"""Daily Schemas — today's record and the three-card draw."""

from pydantic import BaseModel, Field, field_validator

from lucid.core.records import DailyRecord


class DailyDrawRequest(BaseModel):
    """Optional picks from the shuffled deck (body, mind, spirit); random when omitted."""
    indices: list[int] | None = Field(None, min_length=3, max_length=3)

    @field_validator("indices")
    @classmethod
    def non_negative_indices(cls, v: list[int] | None) -> list[int] | None:
        if v is not None and any(i < 0 for i in v):
            raise ValueError("indices must be non-negative")
        return v


class DailyResponse(BaseModel):
    date_key: str
    record: DailyRecord | None = None
