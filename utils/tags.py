from __future__ import annotations

import json
from typing import Iterable, List, Optional


def dump_tags(tags: Optional[Iterable[str]]) -> str:
    """Encode a tag sequence for the JSON `tags` column, keeping order."""
    return json.dumps(list(tags or []))


def load_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    decoded = json.loads(raw)
    if not isinstance(decoded, list):
        return []
    return [str(tag) for tag in decoded]


def shares_any_tag(item_tags: Iterable[str], wanted: Iterable[str]) -> bool:
    """True when the two tag collections intersect."""
    return not set(item_tags).isdisjoint(wanted)
