from __future__ import annotations

import math
import time
from datetime import datetime, timezone
from typing import Optional


def now_ts() -> int:
    """Current wall-clock time in whole seconds since the epoch."""
    return int(time.time())


def parse_iso_timestamp(raw: Optional[str]) -> Optional[int]:
    """Parse an ISO-8601 date or datetime into whole epoch seconds.

    Returns None for None/blank input. Values without an offset are read as UTC.
    Raises ValueError for anything unparseable.
    """
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    if cleaned.endswith(("Z", "z")):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        raise ValueError(f"Invalid ISO-8601 date: {raw!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return math.floor(parsed.timestamp())
