"""Milestone-driven goal progress."""
import logging
import uuid
from typing import Sequence

from ..models.goal import GoalEntry, GoalInput, Milestone
from ..models.base import utc_now_iso
from .stats_engine import round_int

logger = logging.getLogger(__name__)


def milestone_progress(milestones: Sequence[Milestone]) -> int:
    """Percentage of completed milestones, 0 when there are none."""
    if not milestones:
        return 0
    completed = sum(1 for m in milestones if m.completed)
    return round_int(completed / len(milestones) * 100)


def assign_milestone_ids(goal: GoalInput) -> GoalInput:
    """Give every milestone without an id a fresh one."""
    milestones = [
        m if m.id else m.model_copy(update={"id": uuid.uuid4().hex})
        for m in goal.milestones
    ]
    return goal.model_copy(update={"milestones": milestones})


def apply_milestones(goal: GoalInput) -> GoalInput:
    """
    Derive progress from milestones and auto-complete the goal once every
    milestone is done. Goals without milestones keep their own progress.
    """
    if not goal.milestones:
        return goal

    update = {"progress": milestone_progress(goal.milestones)}
    if all(m.completed for m in goal.milestones) and goal.status != "completed":
        update["status"] = "completed"
        logger.info(f"[GOALS] '{goal.title}' completed via milestones")
    return goal.model_copy(update=update)


def toggle_milestone(goal: GoalEntry, milestone_id: str, now: str | None = None) -> GoalEntry:
    """
    Flip one milestone's completion and re-derive the goal's progress.

    Raises LookupError when the goal has no milestone with that id.
    """
    now = now or utc_now_iso()
    milestones = []
    found = False
    for m in goal.milestones:
        if m.id == milestone_id:
            found = True
            completed = not m.completed
            m = m.model_copy(update={"completed": completed, "completed_at": now if completed else None})
        milestones.append(m)

    if not found:
        raise LookupError(f"Milestone {milestone_id} not found")

    return apply_milestones(goal.model_copy(update={"milestones": milestones, "updated_at": now}))
