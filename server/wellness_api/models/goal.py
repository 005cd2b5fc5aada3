"""Goal data models."""
from pydantic import Field, field_validator
from typing import Optional, Literal

from .base import CamelModel, validate_day

GoalCategory = Literal["mental-health", "physical-health", "relationships", "career", "personal-growth"]
GoalPriority = Literal["low", "medium", "high"]
GoalStatus = Literal["not-started", "in-progress", "completed", "paused"]


class Milestone(CamelModel):
    """Checkpoint on the way to a goal."""

    id: Optional[str] = None
    title: str = Field(min_length=1, max_length=200)
    completed: bool = False
    completed_at: Optional[str] = None


class GoalInput(CamelModel):
    """Goal as submitted by the client."""

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    category: GoalCategory
    priority: GoalPriority = "medium"
    status: GoalStatus = "not-started"
    target_date: str
    progress: int = Field(default=0, ge=0, le=100)
    milestones: list[Milestone] = Field(default_factory=list)

    @field_validator("target_date", mode="before")
    @classmethod
    def check_target_date(cls, value):
        return validate_day(value)


class GoalEntry(GoalInput):
    """Stored goal."""

    id: str
    created_at: str
    updated_at: str
