from __future__ import annotations

from typing import Iterable

from models.study_item import LearningStats, StudyItem

REVIEWED_WINDOW_SECONDS = 86400


def compute_learning_stats(items: Iterable[StudyItem], now: int) -> LearningStats:
    """Aggregate counts for a user's items against a single sampled `now`.

    `reviewedToday` is a sliding 24h window, not a calendar day.
    """
    stats = LearningStats()
    window_start = now - REVIEWED_WINDOW_SECONDS
    for item in items:
        stats.total += 1
        strength = item.recall_strength.value
        stats.by_recall_strength[strength] = stats.by_recall_strength.get(strength, 0) + 1
        level = item.level.value
        stats.by_level[level] = stats.by_level.get(level, 0) + 1
        stats.by_type[item.type] = stats.by_type.get(item.type, 0) + 1
        if item.next_review <= now:
            stats.due_for_review += 1
        if item.last_reviewed is not None and item.last_reviewed >= window_start:
            stats.reviewed_today += 1
    return stats
