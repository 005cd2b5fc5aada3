"""
Pytest fixtures for MindScope tests.
"""
import pytest
from datetime import date, timedelta
from dotenv import load_dotenv
from fastapi.testclient import TestClient

from server.wellness_api.config import Settings
from server.wellness_api.database import db_manager
from server.wellness_api.models import (
    GoalEntry,
    HabitCompletion,
    HabitEntry,
    JournalEntry,
    MoodEntry,
)

# Load environment variables
load_dotenv()

# Fixed reference day for engine tests
TODAY = date(2025, 3, 15)
STAMP = "2025-03-15T12:00:00+00:00"


# ============================================================================
# Record factories
# ============================================================================


def make_mood(mood_type="good", day=TODAY, intensity=5, energy=5, stress=5, **extra) -> MoodEntry:
    """Build a stored mood check-in with sensible defaults."""
    if isinstance(day, date):
        day = day.isoformat()
    return MoodEntry(
        id=extra.pop("id", f"mood-{mood_type}-{day}"),
        date=day,
        mood_type=mood_type,
        intensity=intensity,
        energy=energy,
        stress=stress,
        created_at=STAMP,
        updated_at=STAMP,
        **extra,
    )


def make_journal(word_count=100, category="reflection", day=TODAY, **extra) -> JournalEntry:
    if isinstance(day, date):
        day = day.isoformat()
    return JournalEntry(
        id=extra.pop("id", "journal-1"),
        date=day,
        title="Entry",
        content="Some words",
        category=category,
        word_count=word_count,
        created_at=STAMP,
        updated_at=STAMP,
        **extra,
    )


def make_goal(status="in-progress", progress=0, **extra) -> GoalEntry:
    return GoalEntry(
        id=extra.pop("id", "goal-1"),
        title=extra.pop("title", "Goal"),
        description="Something worth doing",
        category="personal-growth",
        status=status,
        target_date="2025-12-31",
        progress=progress,
        created_at=STAMP,
        updated_at=STAMP,
        **extra,
    )


def make_habit(completed_days=(), today=TODAY, **extra) -> HabitEntry:
    """Build a habit completed on each of ``completed_days`` days ago."""
    completions = [
        HabitCompletion(date=(today - timedelta(days=offset)).isoformat(), completed=True)
        for offset in completed_days
    ]
    return HabitEntry(
        id=extra.pop("id", "habit-1"),
        name=extra.pop("name", "Drink water"),
        description="Eight glasses",
        category="health",
        completions=extra.pop("completions", completions),
        created_at=STAMP,
        updated_at=STAMP,
        **extra,
    )


# ============================================================================
# API fixtures
# ============================================================================


@pytest.fixture
def temp_database(tmp_path, monkeypatch):
    """Point the shared database manager at a fresh SQLite file."""
    monkeypatch.setattr(db_manager, "settings", Settings(data_path=str(tmp_path)))
    db_manager.init_schema()
    return tmp_path / db_manager.settings.database_name


@pytest.fixture
def client(temp_database):
    """TestClient bound to the temporary database."""
    from server.wellness_api.main import app

    with TestClient(app) as test_client:
        yield test_client
