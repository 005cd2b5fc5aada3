"""Wellness statistics and rule-based insights.

Every function here is a pure transformation of already-loaded records.
Callers pass ``now`` explicitly; calendar days are UTC days, so a naive
datetime is read as UTC and an aware one is converted first.
"""
import logging
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence, Union

from ..models.mood import MoodInput
from ..models.journal import JournalEntry
from ..models.goal import GoalInput
from ..models.habit import HabitCompletion, HabitEntry
from ..models.analytics import (
    DashboardAnalytics,
    DashboardSummary,
    GoalStats,
    HabitStat,
    Insight,
    JournalStats,
    MoodDistributionBucket,
    MoodStats,
    MoodTrend,
    MoodTrendsReport,
    WeeklyMoodPoint,
)

logger = logging.getLogger(__name__)

MOOD_VALUES = {
    "excellent": 5,
    "good": 4,
    "neutral": 3,
    "poor": 2,
    "terrible": 1,
}

# Display order of the distribution chart
DISTRIBUTION_ORDER = ["Excellent", "Good", "Neutral", "Poor", "Terrible"]

DEFAULT_ENERGY = 5
DEFAULT_STRESS = 5

WEEKLY_SERIES_DAYS = 7
TREND_WINDOW = 7
TREND_THRESHOLD = 0.3
HABIT_WINDOW_DAYS = 30
HABIT_CHAMPION_RATIO = 0.8
MAX_INSIGHTS = 5

Now = Union[date, datetime]


# ============================================================================
# Helpers
# ============================================================================


def to_day(now: Now) -> date:
    """Reduce a reference timestamp to its UTC calendar day."""
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.date()
    return now


def round_half_up(value: float, places: int = 0) -> float:
    """Round like a calculator: halves go away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value: float) -> int:
    return int(round_half_up(value))


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0


def mood_value(mood: MoodInput) -> int:
    """Ordinal 1-5 for a check-in. Unknown mood types raise KeyError."""
    return MOOD_VALUES[mood.mood_type]


def _energy(mood: MoodInput) -> int:
    return mood.energy or DEFAULT_ENERGY


def _stress(mood: MoodInput) -> int:
    return mood.stress or DEFAULT_STRESS


def _recent_completions(completions: Iterable[HabitCompletion], today: date) -> list[HabitCompletion]:
    """Completed marks inside the 30 calendar days ending today."""
    window_start = today - timedelta(days=HABIT_WINDOW_DAYS - 1)
    return [
        c for c in completions
        if c.completed and window_start <= date.fromisoformat(c.date) <= today
    ]


# ============================================================================
# Per-domain statistics
# ============================================================================


def compute_mood_stats(moods: Sequence[MoodInput]) -> MoodStats:
    """Average mood, intensity, energy and stress to one decimal."""
    if not moods:
        return MoodStats()

    return MoodStats(
        average_mood=round_half_up(_mean([mood_value(m) for m in moods]), 1),
        average_intensity=round_half_up(_mean([m.intensity for m in moods]), 1),
        average_energy=round_half_up(_mean([_energy(m) for m in moods]), 1),
        average_stress=round_half_up(_mean([_stress(m) for m in moods]), 1),
        total_entries=len(moods),
    )


def compute_journal_stats(journals: Sequence[JournalEntry]) -> JournalStats:
    total_words = sum(j.word_count for j in journals)
    # dict keeps first-seen order while deduplicating
    categories = list(dict.fromkeys(j.category for j in journals))

    return JournalStats(
        total_entries=len(journals),
        total_words=total_words,
        average_words=round_int(total_words / len(journals)) if journals else 0,
        categories_used=len(categories),
        categories=categories,
    )


def compute_goal_stats(goals: Sequence[GoalInput]) -> GoalStats:
    def count(status: str) -> int:
        return sum(1 for g in goals if g.status == status)

    return GoalStats(
        total=len(goals),
        completed=count("completed"),
        in_progress=count("in-progress"),
        not_started=count("not-started"),
        paused=count("paused"),
        average_progress=round_int(_mean([g.progress for g in goals])),
    )


def compute_habit_stats(habits: Sequence[HabitEntry], now: Now) -> list[HabitStat]:
    """
    Streak and 30-day completion figures for each habit.

    The rate always divides by the full 30-day window, not by the habit's
    age, so habits of different ages compare on the same scale.
    """
    today = to_day(now)
    stats = []
    for habit in habits:
        recent = _recent_completions(habit.completions, today)
        rate = round_int(len(recent) / HABIT_WINDOW_DAYS * 100)
        stats.append(
            HabitStat(
                id=habit.id,
                name=habit.name,
                current_streak=habit.current_streak,
                longest_streak=habit.longest_streak,
                # duplicate marks for one day can push the count past 30
                recent_completion_rate=min(rate, 100),
                recent_completions=len(recent),
            )
        )
    return stats


# ============================================================================
# Mood charts
# ============================================================================


def compute_weekly_mood_series(moods: Sequence[MoodInput], now: Now) -> list[WeeklyMoodPoint]:
    """Seven daily points, oldest first, ending with today."""
    today = to_day(now)
    points = []
    for offset in range(WEEKLY_SERIES_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_key = day.isoformat()
        day_moods = [m for m in moods if m.date == day_key]

        points.append(
            WeeklyMoodPoint(
                label=f"{day:%b} {day.day}",
                mood=round_half_up(_mean([mood_value(m) for m in day_moods]), 1),
                intensity=round_half_up(_mean([m.intensity for m in day_moods]), 1),
                energy=round_half_up(_mean([_energy(m) for m in day_moods]), 1),
                stress=round_half_up(_mean([_stress(m) for m in day_moods]), 1),
            )
        )
    return points


def compute_mood_distribution(moods: Sequence[MoodInput]) -> list[MoodDistributionBucket]:
    """
    Count and share of each mood category in fixed display order.

    Percentages are rounded per bucket and may not sum to exactly 100.
    """
    counts = dict.fromkeys(DISTRIBUTION_ORDER, 0)
    for mood in moods:
        label = mood.mood_type[:1].upper() + mood.mood_type[1:]
        if label not in counts:
            raise KeyError(f"Unknown mood type: {mood.mood_type}")
        counts[label] += 1

    total = len(moods)
    return [
        MoodDistributionBucket(
            category=label,
            count=count,
            percentage=round_int(count / total * 100) if total else 0,
        )
        for label, count in counts.items()
    ]


def compute_mood_trend(moods: Sequence[MoodInput]) -> MoodTrend:
    """
    Compare the last seven check-ins with the seven before them.

    ``moods`` must be ordered oldest first. A change of exactly +/-0.3
    counts as stable.
    """
    if len(moods) < TREND_WINDOW * 2:
        return MoodTrend(trend="insufficient_data", change=0)

    recent_week = moods[-TREND_WINDOW:]
    previous_week = moods[-TREND_WINDOW * 2:-TREND_WINDOW]

    recent_avg = _mean([mood_value(m) for m in recent_week])
    previous_avg = _mean([mood_value(m) for m in previous_week])
    change = round_half_up(recent_avg - previous_avg, 2)

    trend = "stable"
    if change > TREND_THRESHOLD:
        trend = "improving"
    elif change < -TREND_THRESHOLD:
        trend = "declining"

    return MoodTrend(trend=trend, change=change)


# ============================================================================
# Insights
# ============================================================================


def _mood_insight(moods: Sequence[MoodInput]) -> Insight | None:
    if not moods:
        return Insight(
            type="mood-pattern",
            title="Start Your Wellness Journey",
            description=(
                "Begin by tracking your mood daily. This simple habit can provide "
                "valuable insights into your emotional patterns."
            ),
            importance="high",
        )
    if len(moods) >= 7 and _mean([mood_value(m) for m in moods]) >= 4:
        return Insight(
            type="mood-pattern",
            title="Positive Mood Trend",
            description=(
                "Your mood has been consistently positive! Keep up the great work "
                "with whatever strategies are working for you."
            ),
            importance="low",
        )
    return None


def _journal_insight(journals: Sequence[JournalEntry]) -> Insight | None:
    if not journals:
        return Insight(
            type="journal-theme",
            title="Try Journaling",
            description=(
                "Writing down your thoughts can be incredibly therapeutic. "
                "Start with just 5 minutes a day."
            ),
            importance="medium",
        )
    if len(journals) >= 10:
        return Insight(
            type="journal-theme",
            title="Excellent Journaling Habit",
            description=(
                f"You've written {len(journals)} thoughtful entries. "
                "Your reflection journey is inspiring!"
            ),
            importance="low",
        )
    return None


def _goal_insight(goals: Sequence[GoalInput]) -> Insight | None:
    if goals and all(g.status == "completed" for g in goals):
        return Insight(
            type="goal-progress",
            title="Goal Master",
            description="You've completed all your goals! You're truly mastering your life objectives.",
            importance="low",
        )
    return None


def _habit_insight(habits: Sequence[HabitEntry], today: date) -> Insight | None:
    champions = [
        h for h in habits
        if len(_recent_completions(h.completions, today)) / HABIT_WINDOW_DAYS >= HABIT_CHAMPION_RATIO
    ]
    if not champions:
        return None

    noun = "habit" if len(champions) == 1 else "habits"
    return Insight(
        type="habit-streak",
        title="Habit Champion",
        description=f"You're maintaining excellent consistency with {len(champions)} {noun}!",
        importance="low",
    )


def generate_insights(
    moods: Sequence[MoodInput],
    journals: Sequence[JournalEntry],
    goals: Sequence[GoalInput],
    habits: Sequence[HabitEntry],
    now: Now,
) -> list[Insight]:
    """Evaluate the insight rules in order and keep the first five."""
    today = to_day(now)
    candidates = [
        _mood_insight(moods),
        _journal_insight(journals),
        _goal_insight(goals),
        _habit_insight(habits, today),
    ]
    insights = [i for i in candidates if i is not None]
    return insights[:MAX_INSIGHTS]


# ============================================================================
# Report builders
# ============================================================================


def build_dashboard(
    moods: Sequence[MoodInput],
    journals: Sequence[JournalEntry],
    goals: Sequence[GoalInput],
    habits: Sequence[HabitEntry],
    now: Now,
) -> DashboardAnalytics:
    """Assemble the dashboard payload from already-filtered records."""
    mood_stats = compute_mood_stats(moods)
    journal_stats = compute_journal_stats(journals)
    goal_stats = compute_goal_stats(goals)
    habit_stats = compute_habit_stats(habits, now)
    insights = generate_insights(moods, journals, goals, habits, now)

    logger.debug(
        f"[ANALYTICS] Dashboard built from {len(moods)} moods, {len(journals)} journals, "
        f"{len(goals)} goals, {len(habits)} habits"
    )

    return DashboardAnalytics(
        summary=DashboardSummary(
            total_moods=len(moods),
            total_journals=len(journals),
            total_goals=len(goals),
            total_habits=len(habits),
            average_mood=mood_stats.average_mood,
            total_words=journal_stats.total_words,
            completed_goals=goal_stats.completed,
            active_habits=sum(1 for h in habits if h.is_active),
        ),
        mood_stats=mood_stats,
        journal_stats=journal_stats,
        goal_stats=goal_stats,
        habit_stats=habit_stats,
        insights=insights,
        weekly_mood_data=compute_weekly_mood_series(moods, now),
        mood_distribution=compute_mood_distribution(moods),
    )


def build_mood_trends(moods: Sequence[MoodInput], now: Now) -> MoodTrendsReport:
    """Mood chart data; ``moods`` must be ordered oldest first."""
    return MoodTrendsReport(
        weekly_data=compute_weekly_mood_series(moods, now),
        distribution=compute_mood_distribution(moods),
        trends=compute_mood_trend(moods),
        total_entries=len(moods),
    )
