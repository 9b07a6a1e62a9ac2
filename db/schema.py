# SQL schema for RecallCoach database

SCHEMA_VERSION = 1

LEVELS = ("A1", "A2", "B1", "B2", "C1", "C2", "easy", "medium", "hard")
RECALL_STRENGTHS = ("weak", "medium", "strong")


def _sql_in(values) -> str:
    return ", ".join(f"'{value}'" for value in values)


SCHEMA_SQL = f"""
-- Study items (one row per learnable unit)
CREATE TABLE IF NOT EXISTS study_items (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    type TEXT NOT NULL,
    content TEXT NOT NULL,
    level TEXT NOT NULL CHECK(level IN ({_sql_in(LEVELS)})),
    tags TEXT NOT NULL DEFAULT '[]',
    recall_strength TEXT NOT NULL DEFAULT 'weak' CHECK(recall_strength IN ({_sql_in(RECALL_STRENGTHS)})),
    last_reviewed INTEGER,
    next_review INTEGER NOT NULL,
    notes TEXT,
    created_at INTEGER NOT NULL DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    updated_at INTEGER NOT NULL DEFAULT (CAST(strftime('%s', 'now') AS INTEGER))
);
"""

# Indexes for per-user listing and per-user due-queue scans
INDEXES_SQL = """
CREATE INDEX IF NOT EXISTS user_id_idx ON study_items (user_id);
CREATE INDEX IF NOT EXISTS next_review_idx ON study_items (next_review);
CREATE INDEX IF NOT EXISTS type_idx ON study_items (type);
CREATE INDEX IF NOT EXISTS level_idx ON study_items (level);
CREATE INDEX IF NOT EXISTS user_next_review_idx ON study_items (user_id, next_review);
"""
