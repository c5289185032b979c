"""Tests for PostgreSQL statement persistence without a live database."""

import pytest

from ledger_cashflow.core.engine import CashFlowEngine
from ledger_cashflow.models import LedgerRow
from ledger_cashflow.storage import postgres_store
from ledger_cashflow.storage.postgres_store import PostgresStore


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params=None):
        self.conn.executed.append((" ".join(sql.split()), params))

    def fetchall(self):
        return self.conn.rows


class FakeConnection:
    def __init__(self):
        self.executed = []
        self.rows = []
        self.commits = 0
        self.closed = False

    def cursor(self, cursor_factory=None):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def close(self):
        self.closed = True


@pytest.fixture
def connection(monkeypatch):
    conn = FakeConnection()
    monkeypatch.setattr(postgres_store.psycopg2, "connect", lambda **kwargs: conn)
    return conn


@pytest.fixture
def batches(monkeypatch):
    written = []

    def fake_execute_values(cur, sql, rows, page_size=100):
        written.append(list(rows))

    monkeypatch.setattr(postgres_store, "execute_values", fake_execute_values)
    return written


@pytest.fixture
def statement():
    rows = [
        LedgerRow(account_name="Accounts Receivable", variance=-700026),
        LedgerRow(account_name="Computer Equipment", variance=12000),
        LedgerRow(account_name="Total Bank", current_amount=23482127, prior_amount=28226280),
    ]
    return CashFlowEngine().generate_statement(rows, [{"description": "Net Income", "amount": -4767895}])


class TestPostgresStore:
    def test_statement_rows(self, statement):
        rows = PostgresStore._statement_rows("k", statement)
        assert rows[0] == ("k", "operating", 1, "Net loss", -4767895.0, "main_item", "Income Statement")
        header = rows[1]
        assert header[4] is None
        assert header[6] is None
        sections = {row[1] for row in rows}
        assert sections == {"operating", "investing"}
        assert len(rows) == len(statement.operating) + len(statement.investing)

    def test_write_statement(self, connection, batches, statement):
        with PostgresStore({"dbname": "ledger", "user": "app"}, schema="finance") as store:
            written = store.write_statement("acme-2025Q2", statement, metadata={"company": "Acme"})

        assert written == len(batches[0])
        assert connection.closed
        statements = [sql for sql, _ in connection.executed]
        assert any("CREATE TABLE IF NOT EXISTS finance.cash_flow_statements" in sql for sql in statements)
        assert any(sql.startswith("DELETE FROM finance.cash_flow_statement_lines") for sql in statements)

        upsert_params = next(params for sql, params in connection.executed if "ON CONFLICT (statement_key)" in sql)
        assert upsert_params[0] == "acme-2025Q2"
        assert upsert_params[8] == statement.reconciliation_delta

    def test_list_statements(self, connection):
        connection.rows = [{"statement_key": "a"}, {"statement_key": "b"}]
        store = PostgresStore({"dbname": "ledger", "user": "app"})
        assert store.list_statements(limit=2) == [{"statement_key": "a"}, {"statement_key": "b"}]
        sql, params = connection.executed[-1]
        assert "ORDER BY updated_at DESC" in sql
        assert params == (2,)
