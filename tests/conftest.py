"""Shared fixtures: a scripted stand-in for a psycopg connection."""

from collections import namedtuple
import psycopg
import pytest
from psycopg.adapt import AdaptersMap

Column = namedtuple("Column", ["name"])


class FakeCursor:
    """Cursor returning result sets scripted on its FakeConnection."""
    
    def __init__(self, conn):
        self.conn = conn
        self.adapters = AdaptersMap(psycopg.adapters)
        self.description = None
        self._rows = []
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc_value, exc_traceback):
        return False
    
    def execute(self, query, params=None):
        self.conn.executed.append((query, params))
        for fragment, outcome in self.conn.results:
            if fragment in query:
                if isinstance(outcome, Exception):
                    raise outcome
                columns, rows = outcome
                self.description = [Column(name) for name in columns]
                self._rows = list(rows)
                return
        self.description = None
        self._rows = []
    
    def fetchall(self):
        return list(self._rows)
    
    def fetchone(self):
        return self._rows[0] if self._rows else None


class FakeConnection:
    """Records executed statements; answers the first scripted fragment found in the SQL."""
    
    def __init__(self):
        self.results = []
        self.executed = []
        self.cursors = []
        self.closed = False
    
    def script(self, fragment, columns=None, rows=(), error=None):
        self.results.append((fragment, error if error is not None else (columns, rows)))
        return self
    
    def cursor(self):
        cur = FakeCursor(self)
        self.cursors.append(cur)
        return cur
    
    def close(self):
        self.closed = True
    
    @property
    def queries(self):
        return [query for query, _ in self.executed]


# Schemas as the library query returns them: sorted by name, with relkinds.
LIBRARY_ROWS = [
    ("comp", ["v"]),
    ("comp_global", ["r"]),
    ("crsp", ["v"]),
    ("crsp_a_indexes", ["r"]),
    ("crsp_a_stock", ["r"]),
    ("other", ["r"]),
]


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep rich from wrapping long URLs in captured output."""
    monkeypatch.setenv("COLUMNS", "250")


@pytest.fixture
def fake_conn():
    return FakeConnection()


@pytest.fixture
def wrds_conn():
    """Connection scripted with a small WRDS-like catalogue."""
    conn = FakeConnection()
    conn.script("pg_namespace", ["schemaname", "relkind_a"], LIBRARY_ROWS)
    conn.script("SELECT DISTINCT table_schema, table_name", ["table_schema", "table_name"], [
        ("crsp_a_indexes", "dsi"),
        ("crsp_a_stock", "dsf"),
        ("crsp_a_stock", "msf"),
        ("crsp_a_stock", "stocknames"),
    ])
    conn.script("SELECT DISTINCT table_name", ["table_name"], [("dsf",), ("dsi",), ("msf",), ("msi",)])
    conn.script("ORDER BY ordinal_position", ["column_name", "is_nullable", "data_type"], [
        ("permno", "YES", "double precision"),
        ("date", "YES", "date"),
        ("ret", "YES", "double precision"),
    ])
    conn.script("EXPLAIN", ["QUERY PLAN"], [(
        '[\n  {\n    "Plan": {\n      "Node Type": "Seq Scan",\n'
        '      "Plan Rows": 4982156,\n      "Plan Width": 0\n    }\n  }\n]',
    )])
    return conn


@pytest.fixture
def patch_connect(monkeypatch):
    """Make every settings-driven call open the given FakeConnection."""
    
    def _patch(conn):
        opened = []
        
        def fake_connect(settings=None, **kwargs):
            opened.append(settings)
            return conn
        
        monkeypatch.setattr("wrds_query.db.connector.connect", fake_connect)
        return opened
    
    return _patch


@pytest.fixture
def new_conn():
    """Factory for additional FakeConnections within one test."""
    return FakeConnection
