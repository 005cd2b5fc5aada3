"""Habit tracking API routes."""
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query

from ..models.base import utc_now_iso
from ..models.habit import HabitCategory, HabitCompletion, HabitEntry, HabitInput, HabitToggle
from ..database import db_manager
from ..services.stats_engine import to_day
from ..services.streaks import toggle_completion
from .common import build_where, from_json, new_id, not_found, paginated, success, to_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/habits", tags=["Habits"])


def _row_to_habit(row) -> HabitEntry:
    """Convert SQLite row to HabitEntry model."""
    return HabitEntry(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        category=row["category"],
        frequency=row["frequency"],
        target_count=int(row["target_count"] or 1),
        current_streak=int(row["current_streak"] or 0),
        longest_streak=int(row["longest_streak"] or 0),
        completions=[HabitCompletion(**c) for c in from_json(row["completions"])],
        is_active=bool(row["is_active"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _habit_params(habit: HabitEntry) -> tuple:
    return (
        habit.name,
        habit.description,
        habit.category,
        habit.frequency,
        habit.target_count,
        habit.current_streak,
        habit.longest_streak,
        to_json(habit.completions),
        int(habit.is_active),
    )


def _save(conn, habit: HabitEntry) -> None:
    conn.execute(
        """
        UPDATE habits SET
            name = ?, description = ?, category = ?, frequency = ?, target_count = ?,
            current_streak = ?, longest_streak = ?, completions = ?, is_active = ?,
            updated_at = ?
        WHERE id = ?
        """,
        (*_habit_params(habit), habit.updated_at, habit.id),
    )


def fetch_active_habits() -> list[HabitEntry]:
    with db_manager.connection() as conn:
        rows = conn.execute(
            "SELECT * FROM habits WHERE is_active = 1 ORDER BY created_at DESC"
        ).fetchall()
    return [_row_to_habit(row) for row in rows]


def _get_or_404(conn, habit_id: str) -> HabitEntry:
    row = conn.execute("SELECT * FROM habits WHERE id = ?", (habit_id,)).fetchone()
    if row is None:
        raise not_found("Habit")
    return _row_to_habit(row)


@router.get("")
async def get_habits(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=200),
    category: Optional[HabitCategory] = None,
    is_active: bool = Query(default=True, alias="isActive"),
):
    """List habits, most recently created first."""
    clauses, params = ["is_active = ?"], [int(is_active)]
    if category:
        clauses.append("category = ?")
        params.append(category)
    where = build_where(clauses)

    with db_manager.connection() as conn:
        total = conn.execute(f"SELECT COUNT(*) AS cnt FROM habits {where}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"SELECT * FROM habits {where} ORDER BY created_at DESC LIMIT ? OFFSET ?",
            (*params, limit, (page - 1) * limit),
        ).fetchall()

    return paginated([_row_to_habit(row) for row in rows], total, page, limit)


@router.get("/{habit_id}")
async def get_habit(habit_id: str):
    with db_manager.connection() as conn:
        habit = _get_or_404(conn, habit_id)
    return success(habit)


@router.post("", status_code=201)
async def create_habit(payload: HabitInput):
    now = utc_now_iso()
    habit = HabitEntry(**payload.model_dump(), id=new_id(), created_at=now, updated_at=now)

    with db_manager.connection() as conn:
        conn.execute(
            """
            INSERT INTO habits (
                name, description, category, frequency, target_count,
                current_streak, longest_streak, completions, is_active,
                id, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (*_habit_params(habit), habit.id, habit.created_at, habit.updated_at),
        )

    logger.info(f"[HABITS] Created {habit.id} '{habit.name}'")
    return success(habit, "Habit created successfully")


@router.put("/{habit_id}")
async def update_habit(habit_id: str, payload: HabitInput):
    """Update habit details; streaks and completion history are kept."""
    with db_manager.connection() as conn:
        existing = _get_or_404(conn, habit_id)
        habit = existing.model_copy(update={**payload.model_dump(), "updated_at": utc_now_iso()})
        _save(conn, habit)

    logger.info(f"[HABITS] Updated {habit.id}")
    return success(habit, "Habit updated successfully")


@router.patch("/{habit_id}/toggle")
async def toggle_habit_completion(habit_id: str, payload: HabitToggle):
    """Mark or un-mark a day and recalculate the streak."""
    today = to_day(datetime.now(timezone.utc))

    with db_manager.connection() as conn:
        habit = _get_or_404(conn, habit_id)
        habit = toggle_completion(habit, payload.date, payload.note, today)
        _save(conn, habit)

    return success(habit, "Habit completion updated successfully")


@router.delete("/{habit_id}")
async def delete_habit(habit_id: str):
    with db_manager.connection() as conn:
        cursor = conn.execute("DELETE FROM habits WHERE id = ?", (habit_id,))
        if cursor.rowcount == 0:
            raise not_found("Habit")

    logger.info(f"[HABITS] Deleted {habit_id}")
    return success(message="Habit deleted successfully")
