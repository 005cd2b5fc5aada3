"""Habit streak bookkeeping.

The longest streak only ever grows: it is raised to the current streak
whenever that is larger and never recomputed from the full history, so
un-marking a past day leaves a previously recorded best untouched.
"""
import logging
from datetime import date
from typing import Iterable

from ..models.habit import HabitCompletion, HabitEntry
from ..models.base import utc_now_iso

logger = logging.getLogger(__name__)


def calculate_current_streak(completions: Iterable[HabitCompletion], today: date) -> int:
    """
    Count consecutive completed days ending today.

    The i-th most recent completed mark must fall exactly i days before
    today; the first gap ends the streak.
    """
    completed_days = sorted(
        (date.fromisoformat(c.date) for c in completions if c.completed),
        reverse=True,
    )

    streak = 0
    for i, day in enumerate(completed_days):
        if (today - day).days != i:
            break
        streak += 1
    return streak


def apply_streak(habit: HabitEntry, today: date) -> HabitEntry:
    """Return a copy of ``habit`` with refreshed streak counters."""
    streak = calculate_current_streak(habit.completions, today)
    return habit.model_copy(
        update={
            "current_streak": streak,
            "longest_streak": max(habit.longest_streak, streak),
        }
    )


def toggle_completion(habit: HabitEntry, day: str, note: str, today: date) -> HabitEntry:
    """
    Flip the completion mark for ``day``, adding a completed one if absent,
    then refresh the streak counters.
    """
    completions = [c.model_copy() for c in habit.completions]
    existing = next((c for c in completions if c.date == day), None)

    if existing is not None:
        existing.completed = not existing.completed
        existing.note = note
    else:
        completions.append(HabitCompletion(date=day, completed=True, note=note))

    updated = apply_streak(
        habit.model_copy(update={"completions": completions, "updated_at": utc_now_iso()}),
        today,
    )
    logger.info(
        f"[HABITS] {habit.name}: {day} toggled, streak={updated.current_streak} "
        f"longest={updated.longest_streak}"
    )
    return updated
