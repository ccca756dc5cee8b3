"""
SQLite foundation for the incident log - connection handling, schema and health checks.
"""

import sqlite3
import time
from contextlib import contextmanager
from typing import Generator, Iterable, Dict, Any

from .config import get_db_path, ensure_db_directory, DB_CONNECT_RETRIES, DB_CONNECT_DELAY_SEC
from util.logging import logger


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get a SQLite database connection."""
    ensure_db_directory()
    conn = sqlite3.connect(get_db_path())
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def init_db():
    """Initialize the database with required tables."""
    with get_db() as conn:
        cursor = conn.cursor()

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS incidents (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                source_ip TEXT NOT NULL,
                severity TEXT NOT NULL CHECK (severity IN ('low', 'medium', 'high', 'critical')),
                type TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'open'
                    CHECK (status IN ('open', 'investigating', 'resolved', 'closed')),
                description TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        # Create indexes for performance
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_incidents_timestamp ON incidents(timestamp DESC)')

        conn.commit()


def seed_db(rows: Iterable[Dict[str, Any]]) -> int:
    """Insert sample incidents. Returns the number of rows inserted."""
    inserted = 0
    with get_db() as conn:
        cursor = conn.cursor()
        for row in rows:
            cursor.execute(
                "INSERT INTO incidents (timestamp, source_ip, severity, type, status, description) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    row["timestamp"],
                    row["source_ip"],
                    row["severity"],
                    row["type"],
                    row.get("status") or "open",
                    row.get("description"),
                ),
            )
            inserted += 1
        conn.commit()
    return inserted


def health_check():
    """Check database health."""
    try:
        with get_db() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table';")
            table_names = [row[0] for row in cursor.fetchall()]
            return 'incidents' in table_names
    except sqlite3.Error:
        return False


def check_connection(retries: int = DB_CONNECT_RETRIES, delay: float = DB_CONNECT_DELAY_SEC) -> bool:
    """Check that the database is reachable, retrying with a fixed delay between attempts."""
    for attempt in range(1, retries + 1):
        try:
            with get_db() as conn:
                conn.execute("SELECT 1")
            logger.info(f"SQLite connected successfully to database: {get_db_path()}")
            return True
        except sqlite3.Error as e:
            logger.error(f"SQLite connection attempt {attempt}/{retries} failed: {e}")
            if attempt < retries:
                logger.info(f"Retrying in {delay} seconds...")
                time.sleep(delay)

    logger.error("All SQLite connection attempts failed")
    return False
