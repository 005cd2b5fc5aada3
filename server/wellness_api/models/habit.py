"""Habit tracking data models."""
from pydantic import Field, field_validator
from typing import Literal

from .base import CamelModel, validate_day

HabitCategory = Literal["health", "mindfulness", "productivity", "social", "learning"]
HabitFrequency = Literal["daily", "weekly", "monthly"]


class HabitCompletion(CamelModel):
    """Completion mark for one calendar day."""

    date: str
    completed: bool = False
    note: str = Field(default="", max_length=500)

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, value):
        return validate_day(value)


class HabitInput(CamelModel):
    """Habit as submitted by the client."""

    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=500)
    category: HabitCategory
    frequency: HabitFrequency = "daily"
    target_count: int = Field(default=1, ge=1)
    is_active: bool = True


class HabitEntry(HabitInput):
    """Stored habit with its streak counters and completion history."""

    id: str
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    completions: list[HabitCompletion] = Field(default_factory=list)
    created_at: str
    updated_at: str


class HabitToggle(CamelModel):
    """Request body for toggling a day's completion."""

    date: str
    note: str = Field(default="", max_length=500)

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, value):
        return validate_day(value)
