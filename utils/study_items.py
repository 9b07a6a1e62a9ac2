"""Study item operations exposed as tools.

Every operation is scoped to the caller's user id, issues at most one SQL
statement, and returns a JSON-ready result. Failures inside an operation come
back as ``{"error": ..., "success": False}`` instead of raising.
"""
from __future__ import annotations

import functools
import logging
import sqlite3
import uuid
from typing import Any, Callable, List, Mapping, Optional

from models.study_item import (
    LearningStats,
    PerformanceUpdate,
    RecallStrength,
    ReviewQuery,
    StudyItem,
    StudyItemCreate,
    StudyItemSearch,
    UserScope,
)
from utils.scheduler import calculate_next_review
from utils.search import filter_items
from utils.stats import compute_learning_stats
from utils.tags import dump_tags
from utils.timestamps import now_ts, parse_iso_timestamp

logger = logging.getLogger(__name__)

NOT_FOUND_ERROR = "Study item not found"


def error_payload(message: str) -> dict:
    return {"error": message, "success": False}


def structured_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn any exception raised by an operation into an error payload."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as exc:
            logger.exception("%s failed", func.__name__)
            return error_payload(str(exc))

    return wrapper


def generate_id() -> str:
    return str(uuid.uuid4())


@structured_errors
def create_study_item(
    conn: sqlite3.Connection,
    payload: StudyItemCreate,
    intervals: Optional[Mapping[str, float]] = None,
    now: Optional[int] = None,
) -> dict:
    """Insert a new item scheduled as if weakly recalled."""
    now = now_ts() if now is None else now
    item_id = generate_id()
    next_review = calculate_next_review(RecallStrength.WEAK.value, intervals, now=now)
    conn.execute(
        """
        INSERT INTO study_items (
            id, user_id, type, content, level, tags,
            recall_strength, next_review, notes, created_at, updated_at
        )
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            item_id,
            payload.user_id,
            payload.type,
            payload.content,
            payload.level.value,
            dump_tags(payload.tags),
            RecallStrength.WEAK.value,
            next_review,
            payload.notes,
            now,
            now,
        ),
    )
    conn.commit()
    logger.info("Created study item %s for user %s", item_id, payload.user_id)
    return {"id": item_id, "success": True}


@structured_errors
def update_study_performance(
    conn: sqlite3.Connection,
    payload: PerformanceUpdate,
    intervals: Optional[Mapping[str, float]] = None,
    now: Optional[int] = None,
) -> dict:
    """Record a recall result and reschedule the item.

    Only the row matching both id and user id is touched; no match is
    reported as not found.
    """
    now = now_ts() if now is None else now
    strength = payload.recall_strength.value
    next_review = calculate_next_review(strength, intervals, now=now)
    cursor = conn.execute(
        """
        UPDATE study_items
        SET recall_strength = ?, last_reviewed = ?, next_review = ?, updated_at = ?
        WHERE id = ? AND user_id = ?
        """,
        (strength, now, next_review, now, payload.id, payload.user_id),
    )
    conn.commit()
    if cursor.rowcount == 0:
        logger.info("No study item %s for user %s", payload.id, payload.user_id)
        return error_payload(NOT_FOUND_ERROR)
    logger.info(
        "Study item %s recalled %s, next review at %s", payload.id, strength, next_review
    )
    return {"success": True}


@structured_errors
def search_study_items(conn: sqlite3.Connection, payload: StudyItemSearch) -> List[dict]:
    filters = ["user_id = ?"]
    params: List[object] = [payload.user_id]
    if payload.type:
        filters.append("type = ?")
        params.append(payload.type)
    if payload.level:
        filters.append("level = ?")
        params.append(payload.level.value)
    where_clause = " AND ".join(filters)
    rows = conn.execute(
        f"SELECT * FROM study_items WHERE {where_clause} ORDER BY updated_at DESC",
        params,
    ).fetchall()
    items = filter_items(
        [StudyItem.from_row(row) for row in rows],
        content=payload.content,
        tags=payload.tags,
    )
    logger.debug("Search for user %s matched %d of %d items", payload.user_id, len(items), len(rows))
    return [item.to_payload() for item in items]


@structured_errors
def get_items_for_review(
    conn: sqlite3.Connection,
    payload: ReviewQuery,
    now: Optional[int] = None,
) -> List[dict]:
    """Items whose next review is at or before `dueBefore` (default: now), most overdue first."""
    threshold = parse_iso_timestamp(payload.due_before)
    if threshold is None:
        threshold = now_ts() if now is None else now
    filters = ["user_id = ?", "next_review <= ?"]
    params: List[object] = [payload.user_id, threshold]
    if payload.recall_strength:
        filters.append("recall_strength = ?")
        params.append(payload.recall_strength.value)
    where_clause = " AND ".join(filters)
    rows = conn.execute(
        f"SELECT * FROM study_items WHERE {where_clause} ORDER BY next_review ASC",
        params,
    ).fetchall()
    logger.debug("%d items due for user %s at %s", len(rows), payload.user_id, threshold)
    return [StudyItem.from_row(row).to_payload() for row in rows]


@structured_errors
def get_study_types(conn: sqlite3.Connection, payload: UserScope) -> List[str]:
    rows = conn.execute(
        "SELECT DISTINCT type FROM study_items WHERE user_id = ?",
        (payload.user_id,),
    ).fetchall()
    return [row["type"] for row in rows]


@structured_errors
def get_learning_stats(
    conn: sqlite3.Connection,
    payload: UserScope,
    now: Optional[int] = None,
) -> dict:
    rows = conn.execute(
        "SELECT * FROM study_items WHERE user_id = ?",
        (payload.user_id,),
    ).fetchall()
    now = now_ts() if now is None else now
    stats: LearningStats = compute_learning_stats(
        (StudyItem.from_row(row) for row in rows), now
    )
    return stats.to_payload()
