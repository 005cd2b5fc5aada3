"""Journal API routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Query

from ..models.base import utc_now_iso
from ..models.journal import JournalCategory, JournalEntry, JournalInput, JournalMood
from ..database import db_manager
from ..services.journals import count_words, reading_time
from .common import build_where, from_json, like_pattern, new_id, not_found, paginated, success, to_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/journals", tags=["Journal"])


def _row_to_journal(row) -> JournalEntry:
    """Convert SQLite row to JournalEntry model."""
    return JournalEntry(
        id=row["id"],
        date=row["date"],
        title=row["title"],
        content=row["content"],
        tags=from_json(row["tags"]),
        mood=row["mood"],
        category=row["category"],
        is_private=bool(row["is_private"]),
        word_count=int(row["word_count"] or 0),
        reading_time=int(row["reading_time"] or 0),
        attachments=from_json(row["attachments"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _with_metrics(payload: JournalInput, **fields) -> JournalEntry:
    """Build a stored entry, computing word count and reading time from content."""
    words = count_words(payload.content)
    return JournalEntry(
        **payload.model_dump(),
        word_count=words,
        reading_time=reading_time(words),
        **fields,
    )


def _journal_params(journal: JournalEntry) -> tuple:
    return (
        journal.date,
        journal.title,
        journal.content,
        to_json(journal.tags),
        journal.mood,
        journal.category,
        int(journal.is_private),
        journal.word_count,
        journal.reading_time,
        to_json(journal.attachments),
    )


def fetch_journals(start_date: str | None = None) -> list[JournalEntry]:
    """All journal entries on or after ``start_date``, newest first."""
    clauses, params = [], []
    if start_date:
        clauses.append("date >= ?")
        params.append(start_date)

    with db_manager.connection() as conn:
        rows = conn.execute(
            f"SELECT * FROM journals {build_where(clauses)} ORDER BY date DESC, created_at DESC",
            params,
        ).fetchall()
    return [_row_to_journal(row) for row in rows]


def _get_or_404(conn, journal_id: str) -> JournalEntry:
    row = conn.execute("SELECT * FROM journals WHERE id = ?", (journal_id,)).fetchone()
    if row is None:
        raise not_found("Journal entry")
    return _row_to_journal(row)


@router.get("")
async def get_journals(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=200),
    category: Optional[JournalCategory] = None,
    mood: Optional[JournalMood] = None,
    search: Optional[str] = Query(default=None, max_length=200),
):
    """List journal entries, newest first, with optional text search."""
    clauses, params = [], []
    if category:
        clauses.append("category = ?")
        params.append(category)
    if mood:
        clauses.append("mood = ?")
        params.append(mood)
    if search:
        # LIKE is case-insensitive for ASCII; tags are matched inside their JSON text
        clauses.append(
            "(title LIKE ? ESCAPE '\\' OR content LIKE ? ESCAPE '\\' OR tags LIKE ? ESCAPE '\\')"
        )
        pattern = like_pattern(search)
        params.extend([pattern, pattern, pattern])
    where = build_where(clauses)

    with db_manager.connection() as conn:
        total = conn.execute(f"SELECT COUNT(*) AS cnt FROM journals {where}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"""
            SELECT * FROM journals {where}
            ORDER BY date DESC, created_at DESC
            LIMIT ? OFFSET ?
            """,
            (*params, limit, (page - 1) * limit),
        ).fetchall()

    return paginated([_row_to_journal(row) for row in rows], total, page, limit)


@router.get("/{journal_id}")
async def get_journal(journal_id: str):
    with db_manager.connection() as conn:
        journal = _get_or_404(conn, journal_id)
    return success(journal)


@router.post("", status_code=201)
async def create_journal(payload: JournalInput):
    now = utc_now_iso()
    journal = _with_metrics(payload, id=new_id(), created_at=now, updated_at=now)

    with db_manager.connection() as conn:
        conn.execute(
            """
            INSERT INTO journals (
                date, title, content, tags, mood, category, is_private,
                word_count, reading_time, attachments, id, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (*_journal_params(journal), journal.id, journal.created_at, journal.updated_at),
        )

    logger.info(f"[JOURNAL] Created {journal.id} ({journal.word_count} words)")
    return success(journal, "Journal entry created successfully")


@router.put("/{journal_id}")
async def update_journal(journal_id: str, payload: JournalInput):
    with db_manager.connection() as conn:
        existing = _get_or_404(conn, journal_id)
        journal = _with_metrics(
            payload,
            id=existing.id,
            created_at=existing.created_at,
            updated_at=utc_now_iso(),
        )
        conn.execute(
            """
            UPDATE journals SET
                date = ?, title = ?, content = ?, tags = ?, mood = ?, category = ?,
                is_private = ?, word_count = ?, reading_time = ?, attachments = ?,
                updated_at = ?
            WHERE id = ?
            """,
            (*_journal_params(journal), journal.updated_at, journal.id),
        )

    logger.info(f"[JOURNAL] Updated {journal.id}")
    return success(journal, "Journal entry updated successfully")


@router.delete("/{journal_id}")
async def delete_journal(journal_id: str):
    with db_manager.connection() as conn:
        cursor = conn.execute("DELETE FROM journals WHERE id = ?", (journal_id,))
        if cursor.rowcount == 0:
            raise not_found("Journal entry")

    logger.info(f"[JOURNAL] Deleted {journal_id}")
    return success(message="Journal entry deleted successfully")
