"""
Service layer for formulas.

Formulas optionally belong to a group.  Write access to a formula is
derived from its group (see ``ownership``); formulas outside any group
may be edited by every signed-in user.  Listing is a shared catalog
view and is not scoped to the caller.

``variables`` and ``meta`` are stored as JSON text.  Formulas are never
deleted; archiving sets ``is_active`` to false.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from ..core.db import dump_json, get_connection, load_json, update_row, utcnow
from ..schemas.formula import Difficulty, FormulaCreate, FormulaRead, FormulaUpdate
from .ownership import ResourceRef, authorize


logger = logging.getLogger(__name__)


class FormulaService:
    """Service class for managing formulas."""

    @classmethod
    async def create_formula(cls, data: FormulaCreate, user_id: str) -> FormulaRead:
        """Insert a formula, checking access to its group first.

        When the group check fails nothing is inserted.
        """
        now = utcnow()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if data.group_id is not None:
                await authorize(cursor, ResourceRef("group", data.group_id), user_id)
            variables = (
                [v.model_dump(exclude_none=True) for v in data.variables]
                if data.variables is not None
                else None
            )
            cursor.execute(
                """
                INSERT INTO formulas
                    (group_id, name, expression, description, variables, meta,
                     difficulty, is_active, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data.group_id,
                    data.name,
                    data.expression,
                    data.description,
                    dump_json(variables),
                    dump_json(data.meta),
                    data.difficulty,
                    int(data.is_active if data.is_active is not None else True),
                    now,
                    now,
                ),
            )
            formula_id = cursor.lastrowid
            conn.commit()
            logger.info("User %s created formula %s in group %s", user_id, formula_id, data.group_id)
            return cls._fetch(cursor, formula_id)
        finally:
            conn.close()

    @classmethod
    async def update_formula(cls, formula_id: int, data: FormulaUpdate, user_id: str) -> FormulaRead:
        """Apply a partial update to a formula.

        Edit rights are checked on the formula's current group first.
        When the update moves the formula (``group_id`` present), access
        to the destination group is checked as well.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            await authorize(cursor, ResourceRef("formula", formula_id), user_id)
            changes = data.changes()
            if "group_id" in changes:
                await authorize(cursor, ResourceRef("group", changes["group_id"]), user_id)
            if "variables" in changes:
                changes["variables"] = dump_json(
                    [v.model_dump(exclude_none=True) for v in data.variables]
                )
            if "meta" in changes:
                changes["meta"] = dump_json(changes["meta"])
            if "is_active" in changes:
                changes["is_active"] = int(changes["is_active"])
            update_row(cursor, "formulas", formula_id, changes)
            conn.commit()
            logger.info("User %s updated formula %s: %s", user_id, formula_id, sorted(changes))
            return cls._fetch(cursor, formula_id)
        finally:
            conn.close()

    @classmethod
    async def archive_formula(cls, formula_id: int, user_id: str) -> FormulaRead:
        """Deactivate a formula.  Archiving an archived formula only bumps ``updated_at``."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            await authorize(cursor, ResourceRef("formula", formula_id), user_id)
            update_row(cursor, "formulas", formula_id, {"is_active": 0})
            conn.commit()
            logger.info("User %s archived formula %s", user_id, formula_id)
            return cls._fetch(cursor, formula_id)
        finally:
            conn.close()

    @classmethod
    async def list_formulas(
        cls,
        group_id: Optional[int] = None,
        difficulty: Optional[Difficulty] = None,
        include_inactive: bool = False,
    ) -> List[FormulaRead]:
        """Return every formula matching the filters, active ones only by default."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            query = "SELECT * FROM formulas"
            params: list = []
            where_clauses: list[str] = []
            if group_id is not None:
                where_clauses.append("group_id = ?")
                params.append(group_id)
            if difficulty:
                where_clauses.append("difficulty = ?")
                params.append(difficulty)
            if not include_inactive:
                where_clauses.append("is_active = 1")
            if where_clauses:
                query += " WHERE " + " AND ".join(where_clauses)
            query += " ORDER BY id ASC"
            rows = cursor.execute(query, tuple(params)).fetchall()
            return [cls._row_to_formula_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    def _fetch(cls, cursor: sqlite3.Cursor, formula_id: int) -> FormulaRead:
        row = cursor.execute("SELECT * FROM formulas WHERE id = ?", (formula_id,)).fetchone()
        return cls._row_to_formula_read(row)

    @staticmethod
    def _row_to_formula_read(row: sqlite3.Row) -> FormulaRead:
        return FormulaRead(
            id=row["id"],
            group_id=row["group_id"],
            name=row["name"],
            expression=row["expression"],
            description=row["description"],
            variables=load_json(row["variables"]),
            meta=load_json(row["meta"]),
            difficulty=row["difficulty"],
            is_active=bool(row["is_active"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
