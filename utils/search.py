from __future__ import annotations

from typing import List, Optional, Sequence

from models.study_item import StudyItem
from utils.tags import shares_any_tag


def content_matches(content: str, query: str) -> bool:
    """Case-insensitive substring match."""
    return query.casefold() in content.casefold()


def filter_items(
    items: Sequence[StudyItem],
    content: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
) -> List[StudyItem]:
    """Apply the in-memory search filters, preserving the storage order.

    An empty `content` or `tags` means no filtering on that field. Tags match
    when the item shares at least one of them.
    """
    results = list(items)
    if content:
        results = [item for item in results if content_matches(item.content, content)]
    if tags:
        results = [item for item in results if shares_any_tag(item.tags, tags)]
    return results
