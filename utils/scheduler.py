from typing import Dict, Mapping, Optional

from utils.timestamps import now_ts

SECONDS_PER_HOUR = 3600

DEFAULT_INTERVALS: Dict[str, float] = {
    "weak": 1,
    "medium": 24,
    "strong": 72,
}

def calculate_next_review(
    recall_strength: str,
    intervals: Optional[Mapping[str, float]] = None,
    now: Optional[int] = None,
) -> int:
    """Return the next review time (epoch seconds) for a recall strength.

    `intervals` maps weak/medium/strong to hours. `now` lets callers pass a
    clock sampled once for the whole operation.
    """
    table = intervals or DEFAULT_INTERVALS
    if recall_strength not in table:
        raise ValueError(f"Unknown recall strength: {recall_strength!r}")
    anchor = now_ts() if now is None else now
    return anchor + int(table[recall_strength] * SECONDS_PER_HOUR)

def intervals_from_config(config: Mapping) -> Dict[str, float]:
    """Build the weak/medium/strong hours table from loaded config."""
    sr_cfg = config.get("spaced_repetition", {})
    return {
        strength: sr_cfg.get(f"{strength}_interval_hours", default_hours)
        for strength, default_hours in DEFAULT_INTERVALS.items()
    }
