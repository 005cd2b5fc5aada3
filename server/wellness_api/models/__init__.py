"""Pydantic models for wellness records and API responses."""
from .mood import MoodInput, MoodEntry
from .journal import JournalInput, JournalEntry
from .goal import Milestone, GoalInput, GoalEntry
from .habit import HabitCompletion, HabitInput, HabitEntry, HabitToggle
from .tip import TipInput, Tip
from .analytics import (
    MoodStats,
    JournalStats,
    GoalStats,
    HabitStat,
    WeeklyMoodPoint,
    MoodDistributionBucket,
    MoodTrend,
    Insight,
    DashboardSummary,
    DashboardAnalytics,
    MoodTrendsReport,
)

__all__ = [
    "MoodInput",
    "MoodEntry",
    "JournalInput",
    "JournalEntry",
    "Milestone",
    "GoalInput",
    "GoalEntry",
    "HabitCompletion",
    "HabitInput",
    "HabitEntry",
    "HabitToggle",
    "TipInput",
    "Tip",
    "MoodStats",
    "JournalStats",
    "GoalStats",
    "HabitStat",
    "WeeklyMoodPoint",
    "MoodDistributionBucket",
    "MoodTrend",
    "Insight",
    "DashboardSummary",
    "DashboardAnalytics",
    "MoodTrendsReport",
]
