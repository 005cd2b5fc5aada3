"""Wellness tips API routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Query

from ..models.base import utc_now_iso
from ..models.tip import Tip, TipCategory, TipDifficulty, TipInput
from ..database import db_manager
from .common import build_where, from_json, like_pattern, new_id, not_found, paginated, success, to_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tips", tags=["Wellness Tips"])


def _row_to_tip(row) -> Tip:
    """Convert SQLite row to Tip model."""
    return Tip(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        category=row["category"],
        difficulty=row["difficulty"],
        duration=row["duration"],
        featured=bool(row["featured"]),
        rating=float(row["rating"]),
        completions=int(row["completions"] or 0),
        benefits=from_json(row["benefits"]),
        instructions=from_json(row["instructions"]),
        resources=from_json(row["resources"]),
        is_active=bool(row["is_active"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _tip_params(tip: Tip) -> tuple:
    return (
        tip.title,
        tip.content,
        tip.category,
        tip.difficulty,
        tip.duration,
        int(tip.featured),
        tip.rating,
        to_json(tip.benefits),
        to_json(tip.instructions),
        to_json(tip.resources),
        int(tip.is_active),
    )


def _get_or_404(conn, tip_id: str) -> Tip:
    row = conn.execute("SELECT * FROM tips WHERE id = ?", (tip_id,)).fetchone()
    if row is None:
        raise not_found("Tip")
    return _row_to_tip(row)


@router.get("")
async def get_tips(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=200),
    category: Optional[TipCategory] = None,
    difficulty: Optional[TipDifficulty] = None,
    featured: Optional[bool] = None,
    search: Optional[str] = Query(default=None, max_length=200),
):
    """List active tips; featured and highly rated first."""
    clauses, params = ["is_active = 1"], []
    if category:
        clauses.append("category = ?")
        params.append(category)
    if difficulty:
        clauses.append("difficulty = ?")
        params.append(difficulty)
    if featured is not None:
        clauses.append("featured = ?")
        params.append(int(featured))
    if search:
        clauses.append("(title LIKE ? ESCAPE '\\' OR content LIKE ? ESCAPE '\\')")
        pattern = like_pattern(search)
        params.extend([pattern, pattern])
    where = build_where(clauses)

    with db_manager.connection() as conn:
        total = conn.execute(f"SELECT COUNT(*) AS cnt FROM tips {where}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"""
            SELECT * FROM tips {where}
            ORDER BY featured DESC, rating DESC, created_at DESC
            LIMIT ? OFFSET ?
            """,
            (*params, limit, (page - 1) * limit),
        ).fetchall()

    return paginated([_row_to_tip(row) for row in rows], total, page, limit)


@router.get("/{tip_id}")
async def get_tip(tip_id: str):
    with db_manager.connection() as conn:
        tip = _get_or_404(conn, tip_id)
    return success(tip)


@router.post("", status_code=201)
async def create_tip(payload: TipInput):
    now = utc_now_iso()
    tip = Tip(**payload.model_dump(), id=new_id(), created_at=now, updated_at=now)

    with db_manager.connection() as conn:
        conn.execute(
            """
            INSERT INTO tips (
                title, content, category, difficulty, duration, featured, rating,
                benefits, instructions, resources, is_active,
                id, completions, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (*_tip_params(tip), tip.id, tip.completions, tip.created_at, tip.updated_at),
        )

    logger.info(f"[TIPS] Created {tip.id} '{tip.title}'")
    return success(tip, "Tip created successfully")


@router.put("/{tip_id}")
async def update_tip(tip_id: str, payload: TipInput):
    with db_manager.connection() as conn:
        existing = _get_or_404(conn, tip_id)
        tip = existing.model_copy(update={**payload.model_dump(), "updated_at": utc_now_iso()})
        conn.execute(
            """
            UPDATE tips SET
                title = ?, content = ?, category = ?, difficulty = ?, duration = ?,
                featured = ?, rating = ?, benefits = ?, instructions = ?, resources = ?,
                is_active = ?, updated_at = ?
            WHERE id = ?
            """,
            (*_tip_params(tip), tip.updated_at, tip.id),
        )

    logger.info(f"[TIPS] Updated {tip.id}")
    return success(tip, "Tip updated successfully")


@router.patch("/{tip_id}/complete")
async def complete_tip(tip_id: str):
    """Record that someone tried the tip."""
    with db_manager.connection() as conn:
        _get_or_404(conn, tip_id)
        conn.execute(
            "UPDATE tips SET completions = completions + 1, updated_at = ? WHERE id = ?",
            (utc_now_iso(), tip_id),
        )
        tip = _get_or_404(conn, tip_id)

    return success(tip, "Tip completion recorded")


@router.delete("/{tip_id}")
async def delete_tip(tip_id: str):
    with db_manager.connection() as conn:
        cursor = conn.execute("DELETE FROM tips WHERE id = ?", (tip_id,))
        if cursor.rowcount == 0:
            raise not_found("Tip")

    logger.info(f"[TIPS] Deleted {tip_id}")
    return success(message="Tip deleted successfully")
