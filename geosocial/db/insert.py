"""
Conflict-ignoring inserts for relation tables (likes, saves, follows)
"""
from typing import Any, Dict, Sequence
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

def insert_if_absent(
    db: AsyncSession,
    model: Any,
    values: Dict[str, Any],
    conflict_columns: Sequence[str],
):
    """Build an INSERT that silently skips rows violating the given unique key.

    Both supported dialects implement ON CONFLICT DO NOTHING, so two concurrent
    requests for the same key leave exactly one row behind.
    """
    dialect = db.bind.dialect.name

    if dialect == "postgresql":
        stmt = postgresql.insert(model)
    elif dialect == "sqlite":
        stmt = sqlite.insert(model)
    else:
        raise NotImplementedError(f"insert_if_absent is not supported on {dialect}")

    return stmt.values(**values).on_conflict_do_nothing(index_elements=list(conflict_columns))
