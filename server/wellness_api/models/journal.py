"""Journal data models."""
from pydantic import Field, field_validator
from typing import Optional, Literal

from .base import CamelModel, validate_day

JournalCategory = Literal["reflection", "gratitude", "goals", "challenges", "memories", "dreams"]
JournalMood = Literal["positive", "neutral", "negative"]


class JournalInput(CamelModel):
    """Journal entry as submitted by the client."""

    date: str
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=10000)
    tags: list[str] = Field(default_factory=list)
    mood: Optional[JournalMood] = None
    category: JournalCategory = "reflection"
    is_private: bool = False
    attachments: list[str] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, value):
        return validate_day(value)


class JournalEntry(JournalInput):
    """Stored journal entry with derived reading metrics."""

    id: str
    word_count: int = Field(default=0, ge=0)
    reading_time: int = Field(default=0, ge=0)
    created_at: str
    updated_at: str
