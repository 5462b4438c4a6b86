"""wrds-query: convenience client for the WRDS PostgreSQL data warehouse."""

from .config import ConnectionSettings, settings, load_settings
from .db import connect, build_conninfo, with_connection
from .exceptions import WRDSError, ParseError, ConnectionError, QueryError
from .result import QueryResult
from .explorer import (
    list_libraries,
    list_tables,
    describe_table,
    get_row_count,
    get_library_schema,
    rearrange_libraries,
)
from .queries import raw_sql, get_table, build_select

__version__ = "0.1.0"

__all__ = [
    "ConnectionSettings",
    "settings",
    "load_settings",
    "connect",
    "build_conninfo",
    "with_connection",
    "WRDSError",
    "ParseError",
    "ConnectionError",
    "QueryError",
    "QueryResult",
    "list_libraries",
    "list_tables",
    "describe_table",
    "get_row_count",
    "get_library_schema",
    "rearrange_libraries",
    "raw_sql",
    "get_table",
    "build_select",
]
