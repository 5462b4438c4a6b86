"""
Column-oriented query results.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class QueryResult(Dict[str, List[Any]]):
    """Mapping of column name to the list of that column's values.

    All value lists have the same length. A query that matched no rows keeps
    its column keys with empty lists.
    """

    @classmethod
    def from_rows(cls, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> "QueryResult":
        """Build from row tuples. Repeated column names get a numeric suffix (``date``, ``date_1``)."""
        names = _unique_names(columns)
        result = cls((name, []) for name in names)
        for row in rows:
            for name, value in zip(names, row):
                result[name].append(value)
        return result

    @property
    def columns(self) -> List[str]:
        return list(self.keys())

    @property
    def row_count(self) -> int:
        for values in self.values():
            return len(values)
        return 0

    def rows(self) -> List[Tuple[Any, ...]]:
        """Row-oriented view as a list of tuples."""
        return list(zip(*self.values())) if self else []

    def records(self) -> List[Dict[str, Any]]:
        """Row-oriented view as a list of dicts."""
        columns = self.columns
        return [dict(zip(columns, row)) for row in self.rows()]

    def column(self, index: int) -> List[Any]:
        """Values of the column at ``index``."""
        return self[self.columns[index]]


def _unique_names(columns: Sequence[str]) -> List[str]:
    taken = set(columns)
    seen = set()
    names = []
    for name in columns:
        if name in seen:
            suffix = 1
            while f"{name}_{suffix}" in taken:
                suffix += 1
            renamed = f"{name}_{suffix}"
            logger.debug(f"Duplicate result column {name!r} renamed to {renamed!r}")
            taken.add(renamed)
            name = renamed
        seen.add(name)
        names.append(name)
    return names


def execute(conn, query: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
    """
    Execute a query on an open connection and collect the result by column.

    Args:
        conn: Open psycopg connection.
        query: SQL string, sent as-is when ``params`` is None.
        params: Optional values for ``%s`` placeholders.

    Returns:
        QueryResult, empty when the statement returns no result set.
    """
    logger.debug(f"Executing query: {query.strip()}")
    with conn.cursor() as cur:
        cur.execute(query, params)
        if cur.description is None:
            return QueryResult()
        columns = [col.name for col in cur.description]
        result = QueryResult.from_rows(columns, cur.fetchall())
    logger.debug(f"Fetched {result.row_count} rows")
    return result
