"""
Library, table and column introspection for WRDS.

WRDS publishes each product twice: as SAS-style "libraries" (schemas that
hold only views, e.g. ``crsp``) and as the Postgres schemas holding the real
tables (e.g. ``crsp_a_stock``). The functions here list both and pair them
up by name.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from psycopg.types.string import TextLoader

from .db.scoped import accepts_settings
from .exceptions import ParseError
from .render import DATA_DICTIONARY_URL, render_description, render_libraries, render_tables
from .result import QueryResult, execute

logger = logging.getLogger(__name__)

LIBRARY_SCHEMA_QUERY = """
WITH pgobjs AS (
    -- objects we care about - tables, views, foreign tables, partitioned tables
    SELECT oid, relnamespace, relkind
    FROM pg_class
    WHERE relkind = ANY (ARRAY['r'::"char", 'v'::"char", 'f'::"char", 'p'::"char"])
),
schemas AS (
    -- schemas we have usage on that represent products
    SELECT nspname AS schemaname,
        pg_namespace.oid,
        array_agg(DISTINCT relkind) AS relkind_a
    FROM pg_namespace
    JOIN pgobjs ON pg_namespace.oid = relnamespace
    WHERE nspname !~ '(^pg_)|(_old$)|(_new$)|(information_schema)'
        AND has_schema_privilege(nspname, 'USAGE') = TRUE
    GROUP BY nspname, pg_namespace.oid
)
SELECT schemaname, relkind_a
FROM schemas
WHERE relkind_a != ARRAY['v'::"char"] -- any schema except only views
UNION
-- schemas w/ views (aka "friendly names") that reference accessible product tables
SELECT nv.schemaname, nv.relkind_a
FROM schemas nv
JOIN pgobjs v ON nv.oid = v.relnamespace AND v.relkind = 'v'::"char"
JOIN pg_depend dv ON v.oid = dv.refobjid AND dv.refclassid = 'pg_class'::regclass::oid
    AND dv.classid = 'pg_rewrite'::regclass::oid AND dv.deptype = 'i'::"char"
JOIN pg_depend dt ON dv.objid = dt.objid AND dv.refobjid <> dt.refobjid
    AND dt.classid = 'pg_rewrite'::regclass::oid
    AND dt.refclassid = 'pg_class'::regclass::oid
JOIN pgobjs t ON dt.refobjid = t.oid
    AND (t.relkind = ANY (ARRAY['r'::"char", 'v'::"char", 'f'::"char", 'p'::"char"]))
JOIN schemas nt ON t.relnamespace = nt.oid
GROUP BY nv.schemaname, nv.relkind_a
ORDER BY 1
"""

LIST_TABLES_QUERY = """
SELECT DISTINCT table_name
FROM information_schema.columns
WHERE table_schema = %s
ORDER BY table_name
"""

CHILD_TABLES_QUERY = """
SELECT DISTINCT table_schema, table_name
FROM information_schema.columns
WHERE table_schema = ANY(%s)
ORDER BY table_name
"""

PLAN_ROWS_PATTERN = re.compile(r'"Plan Rows": (\d+),')


def table_url(schema: str, table: str) -> str:
    return f"{DATA_DICTIONARY_URL}{schema}/{table}"


@accepts_settings
def get_library_schema(conn) -> QueryResult:
    """Schemas usable by the current role with the relation kinds each holds."""
    return execute(conn, LIBRARY_SCHEMA_QUERY)


def rearrange_libraries(
    schemanames: Iterable[str],
    relkinds: Iterable[Sequence[str]],
) -> Tuple[List[str], List[Tuple[str, Optional[str]]]]:
    """
    Pair SAS libraries with the Postgres schemas that back them.

    Schemas must come sorted by name. A schema holding views starts a new
    library; each following non-view schema whose name starts with that
    library's name is recorded as one of its children. A library with no
    children is recorded as ``(library, None)`` once the next library starts.
    Anything else is skipped.

    This relies on WRDS naming children after their library; the database
    does not enforce it.

    Returns:
        ``(views, mapping)``: library names in scan order and
        ``(library, schema)`` pairs.
    """
    mapping: List[Tuple[str, Optional[str]]] = []
    views: List[str] = []
    parent: Optional[str] = None
    n_children = -1

    for name, kinds in zip(schemanames, relkinds):
        if "v" in kinds:
            if n_children == 0:
                mapping.append((parent, None))
            parent = name
            views.append(name)
            n_children = 0
        elif parent is not None and name.startswith(parent):
            mapping.append((parent, name))
            n_children += 1

    return views, mapping


def _libraries(conn) -> Tuple[List[str], List[Tuple[str, Optional[str]]]]:
    data = get_library_schema(conn)
    return rearrange_libraries(data["schemaname"], data["relkind_a"])


@accepts_settings
def list_libraries(conn, print: bool = True, sas_only: bool = False) -> List[str]:
    """
    List the libraries available to the current user.

    Returns the SAS library names when printing or when ``sas_only`` is set,
    and every schema name otherwise.
    """
    data = get_library_schema(conn)

    if print or sas_only:
        views, mapping = rearrange_libraries(data["schemaname"], data["relkind_a"])
        if print:
            render_libraries(mapping)
        return views

    return list(data["schemaname"])


@accepts_settings
def list_tables(conn, library: str, print: bool = True, verify_links: bool = True) -> List[str]:
    """
    List the tables of ``library``.

    When printing, each table is shown with its data dictionary URL. For a
    SAS library with ``verify_links`` the URL points at the backing schema,
    and tables not found in any backing schema are left out of the printout.
    The returned list is the same either way.
    """
    tables = list(execute(conn, LIST_TABLES_QUERY, (library,))["table_name"])

    if print:
        shown, urls = _table_links(conn, library, tables, verify_links)
        render_tables(shown, urls)

    return tables


def _table_links(
    conn, library: str, tables: List[str], verify_links: bool
) -> Tuple[List[str], List[Optional[str]]]:
    if not verify_links:
        return tables, [table_url(library, table) for table in tables]

    views, mapping = _libraries(conn)
    if library not in views:
        return tables, [table_url(library, table) for table in tables]

    children = [child for parent, child in mapping if parent == library and child is not None]
    if not children:
        logger.info(f"No backing schema found for library {library}")
        return tables, [None] * len(tables)

    known = set(tables)
    lookup = execute(conn, CHILD_TABLES_QUERY, (children,))
    shown: List[str] = []
    urls: List[Optional[str]] = []
    for schema, table in zip(lookup["table_schema"], lookup["table_name"]):
        if table in known:
            shown.append(table)
            urls.append(table_url(schema, table))
    return shown, urls


@accepts_settings
def describe_table(
    conn,
    library: str,
    table: str,
    print: bool = True,
    properties: Sequence[str] = ("is_nullable", "data_type"),
) -> List[str]:
    """
    Describe the columns of ``library.table``.

    Args:
        conn: Open connection or ConnectionSettings.
        library: Schema name.
        table: Table name.
        print: Print the description with an estimated row count.
        properties: Extra ``information_schema.columns`` fields to select.

    Returns:
        Column names in ordinal order.
    """
    fields = ["column_name"] + [p for p in properties if p != "column_name"]
    query = f"""
SELECT {", ".join(fields)}
FROM information_schema.columns
WHERE table_schema = %s
AND table_name = %s
ORDER BY ordinal_position
"""
    data = execute(conn, query, (library, table))

    if print:
        nrows = get_row_count(conn, library, table)
        render_description(library, table, data, nrows)

    return list(data["column_name"])


def extract_plan_rows(plan: str) -> int:
    """Pull the planner's row estimate out of ``EXPLAIN (FORMAT json)`` text."""
    match = PLAN_ROWS_PATTERN.search(plan)
    if match is None:
        raise ParseError("No 'Plan Rows' entry in EXPLAIN output", plan=plan)
    return int(match.group(1))


@accepts_settings
def get_row_count(conn, library: str, table: str) -> int:
    """Estimated row count of ``library.table`` from the query planner."""
    query = f"EXPLAIN (FORMAT 'json') SELECT 1 FROM {library}.{table}"
    logger.debug(f"Executing query: {query}")
    with conn.cursor() as cur:
        # Keep the plan as server text rather than decoded JSON
        cur.adapters.register_loader("json", TextLoader)
        cur.execute(query)
        plan = cur.fetchone()[0]
    return extract_plan_rows(plan)
