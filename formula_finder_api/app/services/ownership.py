"""
Ownership resolution for nested records.

Mutation rights are never stored on formulas or examples.  They are
derived from the owner of the group the record (transitively) belongs
to:

* a group with an owner may only be used by that owner;
* a group without an owner is shared with every authenticated user;
* a formula outside any group is editable by every authenticated user;
* a formula inside a group is editable by whoever may use the group;
* an example is editable by whoever may edit its formula.

Each resource kind registers one async resolver with
:func:`authorizable`.  A resolver fetches the row, raises
``NotFoundError`` or ``ForbiddenError``, and returns the row when access
is granted.  Resolvers for child records delegate to :func:`authorize`
with a reference to their parent, so new kinds plug into the same chain.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Awaitable, Callable, Dict, NamedTuple

from ..core.errors import ForbiddenError, NotFoundError


logger = logging.getLogger(__name__)

Resolver = Callable[[sqlite3.Cursor, int, str], Awaitable[sqlite3.Row]]

_RESOLVERS: Dict[str, Resolver] = {}


class ResourceRef(NamedTuple):
    """Reference to a stored record: its kind and primary key."""

    kind: str
    id: int


def authorizable(kind: str) -> Callable[[Resolver], Resolver]:
    """Register the decorated coroutine as the resolver for ``kind``."""

    def decorator(func: Resolver) -> Resolver:
        _RESOLVERS[kind] = func
        return func

    return decorator


async def authorize(cursor: sqlite3.Cursor, ref: ResourceRef, user_id: str) -> sqlite3.Row:
    """Return the referenced row if ``user_id`` may mutate it.

    Raises ``NotFoundError`` when the row (or a parent in its chain)
    does not exist and ``ForbiddenError`` when an owning group belongs
    to someone else.
    """
    try:
        resolver = _RESOLVERS[ref.kind]
    except KeyError:
        raise LookupError(f"No resolver registered for resource kind {ref.kind!r}") from None
    return await resolver(cursor, ref.id, user_id)


@authorizable("group")
async def resolve_group_ownership(cursor: sqlite3.Cursor, group_id: int, user_id: str) -> sqlite3.Row:
    row = cursor.execute(
        "SELECT * FROM formula_groups WHERE id = ?", (group_id,)
    ).fetchone()
    if row is None:
        raise NotFoundError("Formula group not found.")
    if row["owner_id"] and row["owner_id"] != user_id:
        logger.warning("User %s denied access to group %s", user_id, group_id)
        raise ForbiddenError("You do not have access to this group.")
    return row


@authorizable("formula")
async def resolve_formula_editability(cursor: sqlite3.Cursor, formula_id: int, user_id: str) -> sqlite3.Row:
    row = cursor.execute(
        "SELECT * FROM formulas WHERE id = ?", (formula_id,)
    ).fetchone()
    if row is None:
        raise NotFoundError("Formula not found.")
    if row["group_id"] is not None:
        await authorize(cursor, ResourceRef("group", row["group_id"]), user_id)
    return row


@authorizable("example")
async def resolve_example_editability(cursor: sqlite3.Cursor, example_id: int, user_id: str) -> sqlite3.Row:
    row = cursor.execute(
        "SELECT * FROM formula_examples WHERE id = ?", (example_id,)
    ).fetchone()
    if row is None:
        raise NotFoundError("Formula example not found.")
    await authorize(cursor, ResourceRef("formula", row["formula_id"]), user_id)
    return row
