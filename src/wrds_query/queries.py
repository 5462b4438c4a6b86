"""
Raw SQL execution and simple table retrieval.

Nothing here quotes or validates its input: library, table, column and
filter strings are pasted into the SQL as given.
"""

import logging
from typing import Any, Optional, Sequence, Union

from .db.scoped import accepts_settings
from .result import QueryResult, execute

logger = logging.getLogger(__name__)


@accepts_settings
def raw_sql(conn, query: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
    """
    Run ``query`` verbatim and return the result by column.

    Args:
        conn: Open connection or ConnectionSettings.
        query: SQL text.
        params: Optional values for ``%s`` placeholders.
    """
    return execute(conn, query, params)


def build_select(
    library: str,
    table: str,
    columns: Optional[Sequence[str]] = None,
    where: Optional[Union[str, Sequence[str]]] = None,
    limit: Optional[int] = 10,
    offset: Optional[int] = 0,
) -> str:
    """
    Build ``SELECT ... FROM library.table`` with optional filters.

    ``where`` may be one condition or a sequence of conditions joined with
    AND. ``limit=None`` fetches the whole table; an offset of None or 0 adds
    no OFFSET clause.
    """
    colstring = "*" if columns is None else ", ".join(columns)
    query = f"SELECT {colstring} FROM {library}.{table}"

    if where is not None:
        if not isinstance(where, str):
            where = " AND ".join(where)
        query += f" WHERE {where}"

    if limit is not None:
        query += f" LIMIT {limit}"

    if offset:
        query += f" OFFSET {offset}"

    return query


@accepts_settings
def get_table(
    conn,
    library: str,
    table: str,
    columns: Optional[Sequence[str]] = None,
    where: Optional[Union[str, Sequence[str]]] = None,
    limit: Optional[int] = 10,
    offset: Optional[int] = 0,
) -> QueryResult:
    """Fetch rows of ``library.table``; by default the first 10."""
    query = build_select(library, table, columns=columns, where=where, limit=limit, offset=offset)
    if limit is None:
        logger.info(f"Fetching all rows of {library}.{table}")
    return execute(conn, query)
