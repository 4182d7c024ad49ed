"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager (``get_cursor``) and
``init_db`` which applies pending migrations on application start.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import json
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from .config import settings


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS formula_groups (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            owner_id TEXT,
            name TEXT NOT NULL,
            subject TEXT,
            tags TEXT,
            description TEXT,
            slug TEXT,
            is_active INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS formulas (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            group_id INTEGER,
            name TEXT NOT NULL,
            expression TEXT NOT NULL,
            description TEXT,
            variables TEXT,
            meta TEXT,
            difficulty TEXT NOT NULL DEFAULT 'basic',
            is_active INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(group_id) REFERENCES formula_groups(id)
        );

        CREATE TABLE IF NOT EXISTS formula_examples (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            formula_id INTEGER NOT NULL,
            title TEXT,
            problem TEXT NOT NULL,
            solution TEXT NOT NULL,
            data TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(formula_id) REFERENCES formulas(id)
        );

        CREATE TABLE IF NOT EXISTS user_formula_states (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL,
            formula_id INTEGER NOT NULL,
            is_favorite INTEGER NOT NULL DEFAULT 0,
            note TEXT,
            familiarity TEXT NOT NULL DEFAULT 'new',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(formula_id) REFERENCES formulas(id)
        );
        """,
    ),
    # Migration 2: lookup indices and the (user, formula) uniqueness
    # constraint the state upsert conflicts on
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_formula_groups_owner_id ON formula_groups(owner_id);
        CREATE INDEX IF NOT EXISTS idx_formulas_group_id ON formulas(group_id);
        CREATE INDEX IF NOT EXISTS idx_formula_examples_formula_id ON formula_examples(formula_id);
        CREATE UNIQUE INDEX IF NOT EXISTS uq_user_formula_states_user_formula
            ON user_formula_states(user_id, formula_id);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # formula_finder_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is switched on for every connection
    because SQLite disables it by default.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def utcnow() -> str:
    """Current instant as an ISO-8601 UTC string, the stored timestamp format."""
    return datetime.now(timezone.utc).isoformat()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies every migration in
    ``MIGRATIONS`` with a higher version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version


def update_row(cursor: sqlite3.Cursor, table: str, row_id: int, changes: dict) -> None:
    """Set the given columns of one row and refresh its ``updated_at``.

    Column names come from schema field names, never from raw client
    input, so they are safe to interpolate.
    """
    assignments = [f"{column} = ?" for column in changes]
    assignments.append("updated_at = ?")
    values = [*changes.values(), utcnow(), row_id]
    cursor.execute(
        f"UPDATE {table} SET {', '.join(assignments)} WHERE id = ?",
        tuple(values),
    )


def dump_json(value):
    """Serialise a JSON column value; ``None`` stays SQL ``NULL``."""
    return json.dumps(value) if value is not None else None


def load_json(text):
    return json.loads(text) if text else None
