"""Wellness tip data models."""
from pydantic import Field
from typing import Literal

from .base import CamelModel

TipCategory = Literal[
    "mindfulness", "exercise", "sleep", "nutrition", "social", "stress", "productivity", "creativity"
]
TipDifficulty = Literal["easy", "medium", "hard"]


class TipInput(CamelModel):
    """Wellness tip as submitted by an editor."""

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=2000)
    category: TipCategory
    difficulty: TipDifficulty = "easy"
    duration: str = Field(min_length=1)
    featured: bool = False
    rating: float = Field(default=4.0, ge=1, le=5)
    benefits: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)
    is_active: bool = True


class Tip(TipInput):
    """Stored wellness tip."""

    id: str
    completions: int = Field(default=0, ge=0)
    created_at: str
    updated_at: str
