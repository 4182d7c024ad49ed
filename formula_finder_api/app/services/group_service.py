"""
Service layer for formula groups.

Groups are created by a signed-in user who becomes their owner.  Only
the owner may update a group; groups without an owner are shared and
may be updated by anybody signed in.  Groups are never deleted, they
are deactivated by setting ``is_active`` to false.
"""

import logging
import sqlite3
from typing import List

from ..core.db import get_connection, update_row, utcnow
from ..schemas.group import GroupCreate, GroupRead, GroupUpdate
from .ownership import ResourceRef, authorize


class GroupService:
    """Service class for managing formula groups."""

    @classmethod
    async def create_group(cls, data: GroupCreate, user_id: str) -> GroupRead:
        """Insert a new group owned by ``user_id`` and return it."""
        logger = logging.getLogger(__name__)
        now = utcnow()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO formula_groups
                    (owner_id, name, subject, tags, description, slug, is_active, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    data.name,
                    data.subject,
                    data.tags,
                    data.description,
                    data.slug,
                    int(data.is_active if data.is_active is not None else True),
                    now,
                    now,
                ),
            )
            group_id = cursor.lastrowid
            conn.commit()
            logger.info("User %s created formula group %s", user_id, group_id)
            return cls._fetch(cursor, group_id)
        finally:
            conn.close()

    @classmethod
    async def update_group(cls, group_id: int, data: GroupUpdate, user_id: str) -> GroupRead:
        """Apply a partial update to a group the caller may use.

        Raises ``NotFoundError`` or ``ForbiddenError`` before anything
        is written.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            await authorize(cursor, ResourceRef("group", group_id), user_id)
            changes = data.changes()
            if "is_active" in changes:
                changes["is_active"] = int(changes["is_active"])
            update_row(cursor, "formula_groups", group_id, changes)
            conn.commit()
            logger.info("User %s updated formula group %s: %s", user_id, group_id, sorted(changes))
            return cls._fetch(cursor, group_id)
        finally:
            conn.close()

    @classmethod
    async def list_my_groups(cls, user_id: str, include_inactive: bool = False) -> List[GroupRead]:
        """Return the groups owned by ``user_id``, active ones only by default."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            query = "SELECT * FROM formula_groups WHERE owner_id = ?"
            if not include_inactive:
                query += " AND is_active = 1"
            query += " ORDER BY id ASC"
            rows = cursor.execute(query, (user_id,)).fetchall()
            return [cls._row_to_group_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    def _fetch(cls, cursor: sqlite3.Cursor, group_id: int) -> GroupRead:
        row = cursor.execute(
            "SELECT * FROM formula_groups WHERE id = ?", (group_id,)
        ).fetchone()
        return cls._row_to_group_read(row)

    @staticmethod
    def _row_to_group_read(row: sqlite3.Row) -> GroupRead:
        return GroupRead(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            subject=row["subject"],
            tags=row["tags"],
            description=row["description"],
            slug=row["slug"],
            is_active=bool(row["is_active"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
