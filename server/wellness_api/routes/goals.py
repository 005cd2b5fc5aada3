"""Goal API routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Query

from ..models.base import utc_now_iso
from ..models.goal import GoalCategory, GoalEntry, GoalInput, GoalPriority, GoalStatus, Milestone
from ..database import db_manager
from ..services.goals import apply_milestones, assign_milestone_ids, toggle_milestone
from .common import build_where, from_json, new_id, not_found, paginated, success, to_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/goals", tags=["Goals"])


def _row_to_goal(row) -> GoalEntry:
    """Convert SQLite row to GoalEntry model."""
    return GoalEntry(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        category=row["category"],
        priority=row["priority"],
        status=row["status"],
        target_date=row["target_date"],
        progress=int(row["progress"] or 0),
        milestones=[Milestone(**m) for m in from_json(row["milestones"])],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _prepare(payload: GoalInput, **fields) -> GoalEntry:
    goal = apply_milestones(assign_milestone_ids(payload))
    return GoalEntry(**goal.model_dump(), **fields)


def _goal_params(goal: GoalEntry) -> tuple:
    return (
        goal.title,
        goal.description,
        goal.category,
        goal.priority,
        goal.status,
        goal.target_date,
        goal.progress,
        to_json(goal.milestones),
    )


def _save(conn, goal: GoalEntry) -> None:
    conn.execute(
        """
        UPDATE goals SET
            title = ?, description = ?, category = ?, priority = ?, status = ?,
            target_date = ?, progress = ?, milestones = ?, updated_at = ?
        WHERE id = ?
        """,
        (*_goal_params(goal), goal.updated_at, goal.id),
    )


def fetch_goals() -> list[GoalEntry]:
    with db_manager.connection() as conn:
        rows = conn.execute("SELECT * FROM goals ORDER BY created_at DESC").fetchall()
    return [_row_to_goal(row) for row in rows]


def _get_or_404(conn, goal_id: str) -> GoalEntry:
    row = conn.execute("SELECT * FROM goals WHERE id = ?", (goal_id,)).fetchone()
    if row is None:
        raise not_found("Goal")
    return _row_to_goal(row)


@router.get("")
async def get_goals(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=200),
    status: Optional[GoalStatus] = None,
    category: Optional[GoalCategory] = None,
    priority: Optional[GoalPriority] = None,
):
    """List goals, most recently created first."""
    clauses, params = [], []
    for column, value in (("status", status), ("category", category), ("priority", priority)):
        if value:
            clauses.append(f"{column} = ?")
            params.append(value)
    where = build_where(clauses)

    with db_manager.connection() as conn:
        total = conn.execute(f"SELECT COUNT(*) AS cnt FROM goals {where}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"SELECT * FROM goals {where} ORDER BY created_at DESC LIMIT ? OFFSET ?",
            (*params, limit, (page - 1) * limit),
        ).fetchall()

    return paginated([_row_to_goal(row) for row in rows], total, page, limit)


@router.get("/{goal_id}")
async def get_goal(goal_id: str):
    with db_manager.connection() as conn:
        goal = _get_or_404(conn, goal_id)
    return success(goal)


@router.post("", status_code=201)
async def create_goal(payload: GoalInput):
    now = utc_now_iso()
    goal = _prepare(payload, id=new_id(), created_at=now, updated_at=now)

    with db_manager.connection() as conn:
        conn.execute(
            """
            INSERT INTO goals (
                title, description, category, priority, status, target_date,
                progress, milestones, id, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (*_goal_params(goal), goal.id, goal.created_at, goal.updated_at),
        )

    logger.info(f"[GOALS] Created {goal.id} '{goal.title}'")
    return success(goal, "Goal created successfully")


@router.put("/{goal_id}")
async def update_goal(goal_id: str, payload: GoalInput):
    with db_manager.connection() as conn:
        existing = _get_or_404(conn, goal_id)
        goal = _prepare(
            payload,
            id=existing.id,
            created_at=existing.created_at,
            updated_at=utc_now_iso(),
        )
        _save(conn, goal)

    logger.info(f"[GOALS] Updated {goal.id}")
    return success(goal, "Goal updated successfully")


@router.patch("/{goal_id}/milestones/{milestone_id}")
async def toggle_goal_milestone(goal_id: str, milestone_id: str):
    """Flip a milestone's completion; progress and status follow."""
    with db_manager.connection() as conn:
        goal = _get_or_404(conn, goal_id)
        try:
            goal = toggle_milestone(goal, milestone_id)
        except LookupError:
            raise not_found("Milestone")
        _save(conn, goal)

    logger.info(f"[GOALS] Milestone {milestone_id} toggled, progress={goal.progress}")
    return success(goal, "Milestone updated successfully")


@router.delete("/{goal_id}")
async def delete_goal(goal_id: str):
    with db_manager.connection() as conn:
        cursor = conn.execute("DELETE FROM goals WHERE id = ?", (goal_id,))
        if cursor.rowcount == 0:
            raise not_found("Goal")

    logger.info(f"[GOALS] Deleted {goal_id}")
    return success(message="Goal deleted successfully")
