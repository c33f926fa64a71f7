"""
SQLite layer for the tracker.

The app keeps a tiny schema on disk so data survives restarts. Nothing here
derives streaks: completion rows are read back and handed to metrics.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Optional

from you_first.config import get_settings
from you_first.dates import iso_day
from you_first.models import KINDS

logger = logging.getLogger(__name__)


def _resolve(db_path: Optional[str]) -> str:
    return db_path or get_settings().db_path


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


@contextmanager
def connect(db_path: Optional[str] = None):
    path = _resolve(db_path)
    _ensure_parent_dir(path)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: Optional[str] = None) -> None:
    """
    Create tables if they don't exist yet.
    """
    with connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS trackables (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                kind TEXT NOT NULL DEFAULT 'habit',     -- habit | rule | goal
                category TEXT NOT NULL DEFAULT 'mind',
                description TEXT DEFAULT '',
                created_at TEXT NOT NULL                -- YYYY-MM-DD
            )
            """
        )
        # No UNIQUE(trackable_id, day): several rows per day are allowed and
        # OR-ed together when read back.
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS completion_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                trackable_id INTEGER NOT NULL,
                day TEXT NOT NULL,                      -- YYYY-MM-DD
                completed INTEGER NOT NULL DEFAULT 1,
                note TEXT DEFAULT '',
                FOREIGN KEY (trackable_id) REFERENCES trackables(id) ON DELETE CASCADE
            )
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_completion_logs_day ON completion_logs (trackable_id, day)"
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )


# --- Trackables ---------------------------------------------------------------

def list_trackables(kind: Optional[str] = None, db_path: Optional[str] = None):
    query = "SELECT id, name, kind, category, description, created_at FROM trackables"
    params: tuple = ()
    if kind:
        query += " WHERE kind = ?"
        params = (kind,)
    with connect(db_path) as conn:
        rows = conn.execute(query + " ORDER BY name", params).fetchall()
    return [dict(r) for r in rows]


def get_trackable(trackable_id: int, db_path: Optional[str] = None):
    with connect(db_path) as conn:
        row = conn.execute(
            "SELECT id, name, kind, category, description, created_at FROM trackables WHERE id = ?",
            (trackable_id,),
        ).fetchone()
    return dict(row) if row else None


def create_trackable(
    name: str,
    created_at,
    kind: str = "habit",
    category: str = "mind",
    description: str = "",
    db_path: Optional[str] = None,
) -> int:
    if kind not in KINDS:
        raise ValueError(f"Unknown kind {kind!r}, expected one of {KINDS}")
    with connect(db_path) as conn:
        cur = conn.execute(
            """
            INSERT INTO trackables (name, kind, category, description, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (name.strip(), kind, category, description.strip(), iso_day(created_at)),
        )
        trackable_id = cur.lastrowid
    logger.info("Created %s %s (%r)", kind, trackable_id, name)
    return trackable_id


def delete_trackable(trackable_id: int, db_path: Optional[str] = None) -> None:
    with connect(db_path) as conn:
        conn.execute("DELETE FROM completion_logs WHERE trackable_id = ?", (trackable_id,))
        conn.execute("DELETE FROM trackables WHERE id = ?", (trackable_id,))
    logger.info("Deleted trackable %s", trackable_id)


# --- Completion logs ----------------------------------------------------------

def log_completion(
    trackable_id: int,
    day,
    completed: bool = True,
    note: str = "",
    db_path: Optional[str] = None,
) -> None:
    """
    Append a completion row. Existing rows for the day are left alone.
    """
    with connect(db_path) as conn:
        conn.execute(
            "INSERT INTO completion_logs (trackable_id, day, completed, note) VALUES (?, ?, ?, ?)",
            (trackable_id, iso_day(day), 1 if completed else 0, note.strip()),
        )


def toggle_completion(trackable_id: int, day, db_path: Optional[str] = None) -> bool:
    """
    Flip the day's state for a trackable and return the new state.

    With no row for the day, a completed row is inserted. Otherwise every
    row of the day gets the flipped value so the day reads back the same
    way it was written.
    """
    key = iso_day(day)
    with connect(db_path) as conn:
        rows = conn.execute(
            "SELECT completed FROM completion_logs WHERE trackable_id = ? AND day = ?",
            (trackable_id, key),
        ).fetchall()
        if not rows:
            new_state = True
            conn.execute(
                "INSERT INTO completion_logs (trackable_id, day, completed) VALUES (?, ?, 1)",
                (trackable_id, key),
            )
        else:
            new_state = not any(int(r["completed"]) for r in rows)
            conn.execute(
                "UPDATE completion_logs SET completed = ? WHERE trackable_id = ? AND day = ?",
                (1 if new_state else 0, trackable_id, key),
            )
    logger.info("Toggled trackable %s on %s -> %s", trackable_id, key, new_state)
    return new_state


def list_logs_for_trackable(trackable_id: int, db_path: Optional[str] = None):
    with connect(db_path) as conn:
        rows = conn.execute(
            "SELECT trackable_id, day, completed, note FROM completion_logs WHERE trackable_id = ? ORDER BY day",
            (trackable_id,),
        ).fetchall()
    return [dict(r) for r in rows]


def list_logs_between(start_day, end_day, db_path: Optional[str] = None):
    """
    Return all completion rows where start_day <= day <= end_day (inclusive).
    """
    with connect(db_path) as conn:
        rows = conn.execute(
            """
            SELECT trackable_id, day, completed, note
              FROM completion_logs
             WHERE day >= ? AND day <= ?
            """,
            (iso_day(start_day), iso_day(end_day)),
        ).fetchall()
    return [dict(r) for r in rows]


def list_logs(db_path: Optional[str] = None):
    with connect(db_path) as conn:
        rows = conn.execute("SELECT trackable_id, day, completed, note FROM completion_logs").fetchall()
    return [dict(r) for r in rows]


# --- Settings ----------------------------------------------------------------

def get_setting(key: str, default: str = "", db_path: Optional[str] = None) -> str:
    with connect(db_path) as conn:
        row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
    return str(row["value"]) if row else default


def set_setting(key: str, value: str, db_path: Optional[str] = None) -> None:
    with connect(db_path) as conn:
        conn.execute(
            """
            INSERT INTO settings (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
            (key, str(value)),
        )
