import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from .schema import SCHEMA_SQL, INDEXES_SQL, SCHEMA_VERSION

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".recallcoach"
DB_PATH = CONFIG_DIR / "recallcoach.db"

def init_db():
    """Create the study_items table and indexes, then stamp PRAGMA user_version."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    with get_conn() as conn:
        conn.executescript(SCHEMA_SQL)
        conn.executescript(INDEXES_SQL)
        if get_schema_version(conn) != SCHEMA_VERSION:
            conn.execute(f"PRAGMA user_version = {int(SCHEMA_VERSION)}")
        conn.commit()
    logger.info("Database ready at %s (schema v%s)", DB_PATH, SCHEMA_VERSION)

def get_schema_version(conn: sqlite3.Connection) -> int:
    return int(conn.execute("PRAGMA user_version").fetchone()[0])

def get_schema_version_from_db() -> int:
    """Schema version of the on-disk database, 0 when it has not been created yet."""
    if not DB_PATH.exists():
        return 0
    with get_conn() as conn:
        return get_schema_version(conn)

@contextmanager
def get_conn(db_path: Optional[Path] = None):
    """Open a study-items connection with sqlite3.Row rows; closed on exit."""
    conn = sqlite3.connect(db_path or DB_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()

def get_db():
    """FastAPI dependency that yields a DB connection and closes it afterwards."""
    with get_conn() as conn:
        yield conn
