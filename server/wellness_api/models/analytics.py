"""Analytics result models produced by the stats engine."""
from pydantic import Field
from typing import Literal

from .base import FrozenCamelModel

TrendDirection = Literal["insufficient_data", "improving", "declining", "stable"]
InsightImportance = Literal["low", "medium", "high"]
InsightType = Literal["mood-pattern", "journal-theme", "goal-progress", "habit-streak"]


class MoodStats(FrozenCamelModel):
    """Averages over a set of mood check-ins."""

    average_mood: float = 0
    average_intensity: float = 0
    average_energy: float = 0
    average_stress: float = 0
    total_entries: int = 0


class JournalStats(FrozenCamelModel):
    """Writing volume and category usage."""

    total_entries: int = 0
    total_words: int = 0
    average_words: int = 0
    categories_used: int = 0
    categories: list[str] = Field(default_factory=list)


class GoalStats(FrozenCamelModel):
    """Goal counts by status."""

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0
    paused: int = 0
    average_progress: int = 0


class HabitStat(FrozenCamelModel):
    """Streak and 30-day completion figures for one habit."""

    id: str
    name: str
    current_streak: int
    longest_streak: int
    recent_completion_rate: int = Field(ge=0, le=100)
    recent_completions: int


class WeeklyMoodPoint(FrozenCamelModel):
    """Per-day mood averages for the weekly chart."""

    label: str
    mood: float
    intensity: float
    energy: float
    stress: float


class MoodDistributionBucket(FrozenCamelModel):
    """Share of check-ins for one mood category."""

    category: str
    count: int
    percentage: int


class MoodTrend(FrozenCamelModel):
    """Week-over-week mood direction."""

    trend: TrendDirection
    change: float = 0


class Insight(FrozenCamelModel):
    """Rule-generated observation shown on the dashboard."""

    type: InsightType
    title: str
    description: str
    importance: InsightImportance


class DashboardSummary(FrozenCamelModel):
    """Headline counters for the dashboard."""

    total_moods: int
    total_journals: int
    total_goals: int
    total_habits: int
    average_mood: float
    total_words: int
    completed_goals: int
    active_habits: int


class DashboardAnalytics(FrozenCamelModel):
    """Everything the analytics dashboard renders."""

    summary: DashboardSummary
    mood_stats: MoodStats
    journal_stats: JournalStats
    goal_stats: GoalStats
    habit_stats: list[HabitStat]
    insights: list[Insight]
    weekly_mood_data: list[WeeklyMoodPoint]
    mood_distribution: list[MoodDistributionBucket]


class MoodTrendsReport(FrozenCamelModel):
    """Mood chart data plus the week-over-week trend."""

    weekly_data: list[WeeklyMoodPoint]
    distribution: list[MoodDistributionBucket]
    trends: MoodTrend
    total_entries: int
