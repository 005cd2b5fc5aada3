"""Mood tracking data models."""
from pydantic import Field, field_validator
from typing import Optional, Literal

from .base import CamelModel, validate_day

MoodType = Literal["excellent", "good", "neutral", "poor", "terrible"]


class MoodInput(CamelModel):
    """Mood check-in as submitted by the client."""

    date: str
    mood_type: MoodType
    intensity: int = Field(ge=1, le=10)
    energy: Optional[int] = Field(default=5, ge=1, le=10)
    stress: Optional[int] = Field(default=5, ge=1, le=10)
    sleep: Optional[int] = Field(default=7, ge=1, le=10)
    note: str = Field(default="", max_length=1000)
    tags: list[str] = Field(default_factory=list)
    triggers: list[str] = Field(default_factory=list)
    activities: list[str] = Field(default_factory=list)
    location: Optional[str] = Field(default=None, max_length=100)
    weather: Optional[str] = Field(default=None, max_length=50)

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, value):
        return validate_day(value)


class MoodEntry(MoodInput):
    """Stored mood check-in."""

    id: str
    created_at: str
    updated_at: str
