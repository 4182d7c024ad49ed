"""
Service layer for worked examples.

Creating an example requires edit rights on its formula.  Examples are
shared knowledge: any signed-in user may list the examples of any
formula.
"""

import logging
import sqlite3
from typing import List

from ..core.db import dump_json, get_connection, load_json, utcnow
from ..schemas.example import ExampleCreate, ExampleRead
from .ownership import ResourceRef, authorize


class ExampleService:
    """Service class for formula examples."""

    @classmethod
    async def create_example(cls, formula_id: int, data: ExampleCreate, user_id: str) -> ExampleRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            await authorize(cursor, ResourceRef("formula", formula_id), user_id)
            cursor.execute(
                """
                INSERT INTO formula_examples (formula_id, title, problem, solution, data, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (formula_id, data.title, data.problem, data.solution, dump_json(data.data), utcnow()),
            )
            example_id = cursor.lastrowid
            conn.commit()
            logger.info("User %s added example %s to formula %s", user_id, example_id, formula_id)
            row = cursor.execute(
                "SELECT * FROM formula_examples WHERE id = ?", (example_id,)
            ).fetchone()
            return cls._row_to_example_read(row)
        finally:
            conn.close()

    @classmethod
    async def list_examples(cls, formula_id: int) -> List[ExampleRead]:
        """Return all examples of a formula in creation order."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            rows = cursor.execute(
                "SELECT * FROM formula_examples WHERE formula_id = ? ORDER BY id ASC",
                (formula_id,),
            ).fetchall()
            return [cls._row_to_example_read(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def _row_to_example_read(row: sqlite3.Row) -> ExampleRead:
        return ExampleRead(
            id=row["id"],
            formula_id=row["formula_id"],
            title=row["title"],
            problem=row["problem"],
            solution=row["solution"],
            data=load_json(row["data"]),
            created_at=row["created_at"],
        )
