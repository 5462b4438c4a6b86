"""Tests for raw SQL and table retrieval."""

import psycopg
import pytest

from wrds_query.config.schema import ConnectionSettings
from wrds_query.queries import build_select, get_table, raw_sql


class TestBuildSelect:
    """Tests for SELECT statement building."""
    
    def test_default(self):
        query = build_select("crsp_a_stock", "msf")
        assert query == "SELECT * FROM crsp_a_stock.msf LIMIT 10"
        assert "OFFSET" not in query
    
    def test_columns(self):
        query = build_select("crsp_a_stock", "msf", columns=["permno", "ret"])
        assert query.startswith("SELECT permno, ret FROM crsp_a_stock.msf")
    
    def test_no_limit(self):
        query = build_select("crsp_a_stock", "msf", limit=None)
        assert query == "SELECT * FROM crsp_a_stock.msf"
    
    def test_offset(self):
        query = build_select("crsp_a_stock", "msf", limit=5, offset=20)
        assert query.endswith(" LIMIT 5 OFFSET 20")
    
    def test_no_offset(self):
        assert "OFFSET" not in build_select("crsp_a_stock", "msf", offset=None)
    
    def test_where_string(self):
        query = build_select("crsp_a_stock", "msf", where="permno = 10001")
        assert query == "SELECT * FROM crsp_a_stock.msf WHERE permno = 10001 LIMIT 10"
    
    def test_where_sequence(self):
        query = build_select(
            "crsp_a_stock", "msf",
            where=["permno = 10001", "date >= '2020-01-01'"],
            limit=None,
        )
        assert query == "SELECT * FROM crsp_a_stock.msf WHERE permno = 10001 AND date >= '2020-01-01'"


class TestGetTable:
    """Tests for get_table."""
    
    def test_executes_built_query(self, fake_conn):
        fake_conn.script("FROM crsp_a_stock.msf", ["permno", "ret"], [(10001, 0.05)])
        
        result = get_table(fake_conn, "crsp_a_stock", "msf", columns=["permno", "ret"], limit=1)
        
        assert result == {"permno": [10001], "ret": [0.05]}
        assert fake_conn.executed == [("SELECT permno, ret FROM crsp_a_stock.msf LIMIT 1", None)]
    
    def test_settings_form(self, fake_conn, patch_connect):
        fake_conn.script("FROM crsp_a_stock.msf", ["permno"], [(10001,), (10002,)])
        patch_connect(fake_conn)
        
        result = get_table(ConnectionSettings(username="jdoe"), "crsp_a_stock", "msf", limit=None)
        
        assert result["permno"] == [10001, 10002]
        assert fake_conn.queries == ["SELECT * FROM crsp_a_stock.msf"]
        assert fake_conn.closed


class TestRawSql:
    """Tests for raw_sql."""
    
    def test_all_rows_verbatim(self, fake_conn):
        query = "select permno, permco, date from crsp_a_stock.mse where ticker = 'MSFT'"
        fake_conn.script("crsp_a_stock.mse", ["permno", "permco", "date"], [
            (10107, 8048, "1986-03-13"),
            (10107, 8048, "1986-03-14"),
        ])
        
        result = raw_sql(fake_conn, query)
        
        assert fake_conn.executed == [(query, None)]
        assert result.row_count == 2
        assert result["permco"] == [8048, 8048]
    
    def test_zero_rows(self, fake_conn):
        fake_conn.script("crsp_a_stock.mse", ["permno", "date"], [])
        
        result = raw_sql(fake_conn, "select permno, date from crsp_a_stock.mse where false")
        
        assert result == {"permno": [], "date": []}
    
    def test_params(self, fake_conn):
        fake_conn.script("crsp_a_stock.mse", ["permno"], [(10107,)])
        
        raw_sql(fake_conn, "select permno from crsp_a_stock.mse where ticker = %s", ["MSFT"])
        
        assert fake_conn.executed[0][1] == ["MSFT"]
    
    def test_server_error_propagates(self, fake_conn):
        fake_conn.script("nope", error=psycopg.errors.SyntaxError('syntax error at or near "nope"'))
        
        with pytest.raises(psycopg.errors.SyntaxError):
            raw_sql(fake_conn, "nope")
        assert not fake_conn.closed
