import sqlite3
from pathlib import Path

SCHEMA_DIR = Path(__file__).resolve().parent / "schema"


def connect(db_path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path, check_same_thread=False, timeout=5)
    # WAL keeps readers from blocking the writer.
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA foreign_keys=ON;")
    return conn


def init_db(db_path: str, schema: str) -> None:
    """Create the database file if needed and apply ``schema/<schema>.sql``."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    schema_path = SCHEMA_DIR / f"{schema}.sql"
    conn = connect(db_path)
    try:
        # Schema scripts are idempotent, so existing DBs are left intact.
        with open(schema_path, "r", encoding="utf-8") as handle:
            conn.executescript(handle.read())
        conn.commit()
    finally:
        conn.close()
