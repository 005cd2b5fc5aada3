"""Mood tracking API routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Query

from ..models.base import utc_now_iso
from ..models.mood import MoodEntry, MoodInput, MoodType
from ..database import db_manager
from .common import build_where, day_param, from_json, new_id, not_found, paginated, success, to_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/moods", tags=["Moods"])


def _row_to_mood(row) -> MoodEntry:
    """Convert SQLite row to MoodEntry model."""
    return MoodEntry(
        id=row["id"],
        date=row["date"],
        mood_type=row["mood_type"],
        intensity=int(row["intensity"]),
        energy=row["energy"],
        stress=row["stress"],
        sleep=row["sleep"],
        note=row["note"] or "",
        tags=from_json(row["tags"]),
        triggers=from_json(row["triggers"]),
        activities=from_json(row["activities"]),
        location=row["location"],
        weather=row["weather"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _mood_params(mood: MoodInput) -> tuple:
    return (
        mood.date,
        mood.mood_type,
        mood.intensity,
        mood.energy,
        mood.stress,
        mood.sleep,
        mood.note,
        to_json(mood.tags),
        to_json(mood.triggers),
        to_json(mood.activities),
        mood.location,
        mood.weather,
    )


def fetch_moods(start_date: str | None = None, ascending: bool = False) -> list[MoodEntry]:
    """All moods on or after ``start_date``, ordered by date."""
    order = "ASC" if ascending else "DESC"
    clauses, params = [], []
    if start_date:
        clauses.append("date >= ?")
        params.append(start_date)

    with db_manager.connection() as conn:
        rows = conn.execute(
            f"SELECT * FROM moods {build_where(clauses)} ORDER BY date {order}, created_at {order}",
            params,
        ).fetchall()
    return [_row_to_mood(row) for row in rows]


def _get_or_404(conn, mood_id: str) -> MoodEntry:
    row = conn.execute("SELECT * FROM moods WHERE id = ?", (mood_id,)).fetchone()
    if row is None:
        raise not_found("Mood")
    return _row_to_mood(row)


@router.get("")
async def get_moods(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
    mood_type: Optional[MoodType] = Query(default=None, alias="moodType"),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
):
    """List mood check-ins, newest first."""
    clauses, params = [], []
    if mood_type:
        clauses.append("mood_type = ?")
        params.append(mood_type)
    if start_date:
        clauses.append("date >= ?")
        params.append(day_param(start_date, "startDate"))
    if end_date:
        clauses.append("date <= ?")
        params.append(day_param(end_date, "endDate"))
    where = build_where(clauses)

    with db_manager.connection() as conn:
        total = conn.execute(f"SELECT COUNT(*) AS cnt FROM moods {where}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"""
            SELECT * FROM moods {where}
            ORDER BY date DESC, created_at DESC
            LIMIT ? OFFSET ?
            """,
            (*params, limit, (page - 1) * limit),
        ).fetchall()

    return paginated([_row_to_mood(row) for row in rows], total, page, limit)


@router.get("/{mood_id}")
async def get_mood(mood_id: str):
    with db_manager.connection() as conn:
        mood = _get_or_404(conn, mood_id)
    return success(mood)


@router.post("", status_code=201)
async def create_mood(payload: MoodInput):
    now = utc_now_iso()
    mood = MoodEntry(**payload.model_dump(), id=new_id(), created_at=now, updated_at=now)

    with db_manager.connection() as conn:
        conn.execute(
            """
            INSERT INTO moods (
                date, mood_type, intensity, energy, stress, sleep, note,
                tags, triggers, activities, location, weather,
                id, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (*_mood_params(mood), mood.id, mood.created_at, mood.updated_at),
        )

    logger.info(f"[MOODS] Created {mood.id} ({mood.mood_type} on {mood.date})")
    return success(mood, "Mood created successfully")


@router.put("/{mood_id}")
async def update_mood(mood_id: str, payload: MoodInput):
    with db_manager.connection() as conn:
        existing = _get_or_404(conn, mood_id)
        mood = MoodEntry(
            **payload.model_dump(),
            id=existing.id,
            created_at=existing.created_at,
            updated_at=utc_now_iso(),
        )
        conn.execute(
            """
            UPDATE moods SET
                date = ?, mood_type = ?, intensity = ?, energy = ?, stress = ?,
                sleep = ?, note = ?, tags = ?, triggers = ?, activities = ?,
                location = ?, weather = ?, updated_at = ?
            WHERE id = ?
            """,
            (*_mood_params(mood), mood.updated_at, mood.id),
        )

    logger.info(f"[MOODS] Updated {mood.id}")
    return success(mood, "Mood updated successfully")


@router.delete("/{mood_id}")
async def delete_mood(mood_id: str):
    with db_manager.connection() as conn:
        cursor = conn.execute("DELETE FROM moods WHERE id = ?", (mood_id,))
        if cursor.rowcount == 0:
            raise not_found("Mood")

    logger.info(f"[MOODS] Deleted {mood_id}")
    return success(message="Mood deleted successfully")
