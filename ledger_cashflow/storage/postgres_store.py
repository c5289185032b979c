"""PostgreSQL persistence for generated cash flow statements."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import pandas as pd
import psycopg2
from psycopg2.extensions import connection as PGConnection
from psycopg2.extras import Json, RealDictCursor, execute_values

from ledger_cashflow.models import CashFlowStatement, Section

logger = logging.getLogger(__name__)


@dataclass
class PostgresConfig:
    """Connection configuration for PostgreSQL."""

    dbname: str
    user: str
    host: str = "localhost"
    port: str = "5432"
    password: str | None = None


class PostgresStore:
    """Writes cash flow statements and their line items into PostgreSQL."""

    def __init__(self, config: Dict[str, str], schema: str = "public"):
        self.config = PostgresConfig(**config)
        self.schema = schema
        self.conn: PGConnection | None = None

    def __enter__(self) -> "PostgresStore":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def connect(self) -> None:
        if self.conn is not None:
            return
        kwargs = {
            "dbname": self.config.dbname,
            "user": self.config.user,
            "host": self.config.host,
            "port": self.config.port,
        }
        if self.config.password:
            kwargs["password"] = self.config.password
        self.conn = psycopg2.connect(**kwargs)
        self.conn.autocommit = False

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def _ensure_conn(self) -> PGConnection:
        if self.conn is None:
            self.connect()
        assert self.conn is not None
        return self.conn

    def ensure_schema(self) -> None:
        conn = self._ensure_conn()
        with conn.cursor() as cur:
            cur.execute(f"CREATE SCHEMA IF NOT EXISTS {self.schema};")
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self.schema}.cash_flow_statements (
                    statement_key TEXT PRIMARY KEY,
                    operating_total DOUBLE PRECISION,
                    investing_total DOUBLE PRECISION,
                    financing_total DOUBLE PRECISION,
                    net_change_in_cash DOUBLE PRECISION,
                    beginning_cash DOUBLE PRECISION,
                    ending_cash_computed DOUBLE PRECISION,
                    ending_cash_reported DOUBLE PRECISION,
                    reconciliation_delta DOUBLE PRECISION,
                    statement_json JSONB NOT NULL,
                    metadata_json JSONB,
                    inserted_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                );
                """
            )
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self.schema}.cash_flow_statement_lines (
                    statement_key TEXT NOT NULL
                        REFERENCES {self.schema}.cash_flow_statements (statement_key)
                        ON DELETE CASCADE,
                    section TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    description TEXT NOT NULL,
                    amount DOUBLE PRECISION,
                    kind TEXT NOT NULL,
                    source TEXT,
                    PRIMARY KEY (statement_key, section, position)
                );
                """
            )
        conn.commit()

    def write_statement(
        self,
        statement_key: str,
        statement: CashFlowStatement,
        metadata: Optional[Dict[str, object]] = None,
    ) -> int:
        """
        Upsert one statement and replace its line rows.

        Args:
            statement_key: Identifier of the statement (e.g. company and period)
            statement: Statement to store
            metadata: Extra JSON stored alongside the statement

        Returns:
            Number of line rows written
        """
        conn = self._ensure_conn()
        self.ensure_schema()

        summary = (
            statement_key,
            self._to_float(statement.operating_total),
            self._to_float(statement.investing_total),
            self._to_float(statement.financing_total),
            self._to_float(statement.net_change_in_cash),
            self._to_float(statement.beginning_cash),
            self._to_float(statement.ending_cash_computed),
            self._to_float(statement.ending_cash_reported),
            self._to_float(statement.reconciliation_delta),
            Json(statement.model_dump(mode="json")),
            Json(metadata or {}),
        )

        summary_sql = f"""
            INSERT INTO {self.schema}.cash_flow_statements (
                statement_key, operating_total, investing_total, financing_total,
                net_change_in_cash, beginning_cash, ending_cash_computed,
                ending_cash_reported, reconciliation_delta, statement_json, metadata_json
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT (statement_key) DO UPDATE SET
                operating_total = EXCLUDED.operating_total,
                investing_total = EXCLUDED.investing_total,
                financing_total = EXCLUDED.financing_total,
                net_change_in_cash = EXCLUDED.net_change_in_cash,
                beginning_cash = EXCLUDED.beginning_cash,
                ending_cash_computed = EXCLUDED.ending_cash_computed,
                ending_cash_reported = EXCLUDED.ending_cash_reported,
                reconciliation_delta = EXCLUDED.reconciliation_delta,
                statement_json = EXCLUDED.statement_json,
                metadata_json = EXCLUDED.metadata_json,
                updated_at = NOW();
        """

        line_rows = self._statement_rows(statement_key, statement)

        with conn.cursor() as cur:
            cur.execute(summary_sql, summary)
            cur.execute(
                f"DELETE FROM {self.schema}.cash_flow_statement_lines WHERE statement_key = %s;",
                (statement_key,),
            )
            if line_rows:
                execute_values(
                    cur,
                    f"""
                    INSERT INTO {self.schema}.cash_flow_statement_lines (
                        statement_key, section, position, description, amount, kind, source
                    ) VALUES %s
                    """,
                    line_rows,
                    page_size=1000,
                )
        conn.commit()
        logger.info("Stored statement %s with %d lines", statement_key, len(line_rows))
        return len(line_rows)

    def list_statements(self, limit: int = 20) -> List[Dict[str, object]]:
        """Most recently updated statement summaries, newest first."""
        conn = self._ensure_conn()
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                f"""
                SELECT statement_key, net_change_in_cash, beginning_cash,
                       ending_cash_computed, ending_cash_reported,
                       reconciliation_delta, updated_at
                FROM {self.schema}.cash_flow_statements
                ORDER BY updated_at DESC
                LIMIT %s;
                """,
                (limit,),
            )
            return [dict(row) for row in cur.fetchall()]

    @staticmethod
    def _statement_rows(statement_key: str, statement: CashFlowStatement) -> List[tuple]:
        rows = []
        for section in Section:
            for position, line in enumerate(statement.section_lines(section), start=1):
                rows.append(
                    (
                        statement_key,
                        section.value,
                        position,
                        line.description,
                        PostgresStore._to_float(line.amount),
                        line.kind.value,
                        PostgresStore._to_str(line.source),
                    )
                )
        return rows

    @staticmethod
    def _to_float(value):
        if value is None or pd.isna(value):
            return None
        return float(value)

    @staticmethod
    def _to_str(value):
        if value is None or pd.isna(value) or value == "":
            return None
        return str(value)
