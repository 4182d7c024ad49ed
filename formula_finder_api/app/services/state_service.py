"""
Service layer for per-user formula state.

A state row records whether a user marked a formula as favorite, a
personal note and how familiar the user feels with it.  Rows are
created lazily on the first interaction.

At most one row exists per (user, formula).  The unique index created
by migration 2 backs this, and ``upsert_state`` is a single
``INSERT ... ON CONFLICT DO UPDATE`` statement, so concurrent upserts
for the same pair cannot create duplicates.
"""

import logging
import sqlite3
from typing import List

from ..core.db import get_connection, utcnow
from ..core.errors import NotFoundError
from ..schemas.state import StateRead, StateUpsert


logger = logging.getLogger(__name__)

DEFAULT_IS_FAVORITE = False
DEFAULT_FAMILIARITY = "new"


class StateService:
    """Service class for user formula state."""

    @classmethod
    async def upsert_state(cls, formula_id: int, data: StateUpsert, user_id: str) -> StateRead:
        """Create or patch the caller's state for a formula.

        On insert, omitted fields take their defaults (not a favorite,
        familiarity ``new``).  On update, only the fields present in
        ``data`` change; ``updated_at`` is always refreshed.
        """
        changes = data.changes()
        if "is_favorite" in changes:
            changes["is_favorite"] = int(changes["is_favorite"])
        now = utcnow()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            formula = cursor.execute(
                "SELECT id FROM formulas WHERE id = ?", (formula_id,)
            ).fetchone()
            if formula is None:
                raise NotFoundError("Formula not found.")
            assignments = [f"{column} = excluded.{column}" for column in changes]
            assignments.append("updated_at = excluded.updated_at")
            cursor.execute(
                f"""
                INSERT INTO user_formula_states
                    (user_id, formula_id, is_favorite, note, familiarity, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(user_id, formula_id) DO UPDATE SET {', '.join(assignments)}
                """,
                (
                    user_id,
                    formula_id,
                    changes.get("is_favorite", int(DEFAULT_IS_FAVORITE)),
                    changes.get("note"),
                    changes.get("familiarity", DEFAULT_FAMILIARITY),
                    now,
                    now,
                ),
            )
            conn.commit()
            logger.info("User %s saved state for formula %s: %s", user_id, formula_id, sorted(changes))
            row = cursor.execute(
                "SELECT * FROM user_formula_states WHERE user_id = ? AND formula_id = ?",
                (user_id, formula_id),
            ).fetchone()
            return cls._row_to_state_read(row)
        finally:
            conn.close()

    @classmethod
    async def list_states(cls, user_id: str, favorites_only: bool = False) -> List[StateRead]:
        """Return the caller's state rows, optionally favorites only."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            query = "SELECT * FROM user_formula_states WHERE user_id = ?"
            if favorites_only:
                query += " AND is_favorite = 1"
            query += " ORDER BY id ASC"
            rows = cursor.execute(query, (user_id,)).fetchall()
            return [cls._row_to_state_read(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def _row_to_state_read(row: sqlite3.Row) -> StateRead:
        return StateRead(
            id=row["id"],
            user_id=row["user_id"],
            formula_id=row["formula_id"],
            is_favorite=bool(row["is_favorite"]),
            note=row["note"],
            familiarity=row["familiarity"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
