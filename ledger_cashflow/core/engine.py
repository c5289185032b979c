"""Main engine for generating indirect-method cash flow statements."""

import logging
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Union

from ledger_cashflow.config import EngineSettings
from ledger_cashflow.core.aggregator import VarianceAggregator
from ledger_cashflow.core.assembler import StatementAssembler
from ledger_cashflow.core.classifier import AccountClassifier, RuleTable, load_rule_table
from ledger_cashflow.core.income_extractor import extract_income
from ledger_cashflow.core.reconciler import reconcile
from ledger_cashflow.export import write_csv, write_excel
from ledger_cashflow.models import CashFlowStatement, IncomeRow, LedgerRow, LineKind, Section
from ledger_cashflow.parsers import BalanceSheetParser, IncomeStatementParser
from ledger_cashflow.storage.postgres_store import PostgresStore

logger = logging.getLogger(__name__)

LedgerRowInput = Union[LedgerRow, Mapping]
IncomeRowInput = Union[IncomeRow, Mapping]


class CashFlowEngine:
    """
    Turns comparative balance sheet and income statement rows into a cash
    flow statement.

    The engine only holds immutable configuration; every call builds its own
    aggregation state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        rule_table: Optional[RuleTable] = None,
    ):
        """
        Initialize the engine.

        Args:
            settings: Engine settings; defaults when omitted
            rule_table: Explicit rule table, overriding settings.rule_table
        """
        self.settings = settings or EngineSettings()
        self.rule_table = rule_table or load_rule_table(self.settings.rule_table)
        self.classifier = AccountClassifier(self.rule_table)
        self.assembler = StatementAssembler(
            combine_interest_dividend=self.settings.combine_interest_dividend
        )

    def generate_statement(
        self,
        balance_sheet_rows: Iterable[LedgerRowInput],
        income_rows: Iterable[IncomeRowInput],
    ) -> CashFlowStatement:
        """
        Generate a cash flow statement from tokenized export rows.

        Args:
            balance_sheet_rows: Comparative balance sheet rows in export order
            income_rows: Income statement rows in export order

        Returns:
            Assembled and reconciled CashFlowStatement
        """
        income = extract_income(income_rows)

        aggregator = VarianceAggregator(
            self.classifier, cash_total_markers=self.settings.cash_total_markers
        )
        aggregator.add_rows(balance_sheet_rows)

        sections = self.assembler.assemble(income, aggregator.totals())
        recon = reconcile(
            aggregator.beginning_cash,
            sections["net_change_in_cash"],
            aggregator.ending_cash_reported,
        )

        statement = CashFlowStatement(
            operating=sections["operating"],
            investing=sections["investing"],
            financing=sections["financing"],
            net_change_in_cash=recon.net_change_in_cash,
            beginning_cash=recon.beginning_cash,
            ending_cash_computed=recon.ending_cash_computed,
            ending_cash_reported=recon.ending_cash_reported,
            reconciliation_delta=recon.reconciliation_delta,
        )

        logger.info(
            "Generated statement from %d balance sheet rows (%d aggregated): net change %.2f, delta %.2f",
            aggregator.rows_seen,
            aggregator.rows_aggregated,
            statement.net_change_in_cash,
            statement.reconciliation_delta,
        )
        if not recon.within(self.settings.reconciliation_tolerance):
            logger.warning(
                "Statement does not reconcile: computed ending cash %.2f vs reported %.2f",
                statement.ending_cash_computed,
                statement.ending_cash_reported,
            )
        return statement

    def generate_from_files(
        self, balance_sheet_path: Path, income_statement_path: Path
    ) -> CashFlowStatement:
        """
        Tokenize two CSV exports and generate the statement.

        Args:
            balance_sheet_path: Comparative balance sheet CSV
            income_statement_path: Income statement CSV

        Returns:
            CashFlowStatement
        """
        balance_sheet = BalanceSheetParser(balance_sheet_path)
        income_statement = IncomeStatementParser(income_statement_path)
        return self.generate_statement(balance_sheet.get_rows(), income_statement.get_rows())

    def review_statement(self, statement: CashFlowStatement) -> Dict[str, object]:
        """
        Summarize a statement for manual review.

        Returns:
            Dictionary with status ('pass' or 'warn'), reconciliation figures,
            section totals and line counts
        """
        tolerance = self.settings.reconciliation_tolerance
        reconciled = statement.is_reconciled(tolerance)
        sections = {}
        for section in Section:
            lines = statement.section_lines(section)
            sections[section.value] = {
                "total": statement.section_total(section),
                "line_count": sum(
                    1 for line in lines if line.amount is not None and line.kind != LineKind.TOTAL
                ),
            }
        return {
            "status": "pass" if reconciled else "warn",
            "reconciled": reconciled,
            "tolerance": tolerance,
            "reconciliation_delta": statement.reconciliation_delta,
            "beginning_cash": statement.beginning_cash,
            "ending_cash_computed": statement.ending_cash_computed,
            "ending_cash_reported": statement.ending_cash_reported,
            "net_change_in_cash": statement.net_change_in_cash,
            "sections": sections,
        }

    def export_statement(
        self,
        statement: CashFlowStatement,
        output_path: Path,
        company_name: str = "",
        period_description: str = "",
    ) -> Path:
        """
        Write a statement to CSV or Excel, chosen by the file suffix.

        Args:
            statement: Statement to write
            output_path: Target .csv or .xlsx path
            company_name: Title block company line
            period_description: Title block period line

        Returns:
            Path of the written file
        """
        output_path = Path(output_path)
        if output_path.suffix.lower() in (".xlsx", ".xlsm"):
            return write_excel(statement, output_path, company_name, period_description)
        return write_csv(statement, output_path, company_name, period_description)

    def persist_statement(
        self,
        statement_key: str,
        statement: CashFlowStatement,
        db_config: Dict[str, str],
        schema: str = "public",
        metadata: Optional[Dict[str, object]] = None,
    ) -> Dict[str, object]:
        """
        Store a generated statement in PostgreSQL.

        Args:
            statement_key: Caller-chosen identifier (e.g. company and period)
            statement: Statement to store
            db_config: PostgresConfig fields
            schema: Target schema
            metadata: Extra JSON metadata stored with the statement

        Returns:
            Write summary with the key, line rows written and review status
        """
        review = self.review_statement(statement)
        with PostgresStore(db_config, schema=schema) as store:
            rows_written = store.write_statement(
                statement_key, statement, metadata={**(metadata or {}), "review": review}
            )
        return {
            "statement_key": statement_key,
            "rows_written": rows_written,
            "status": review["status"],
        }


def generate_statement(
    balance_sheet_rows: Iterable[LedgerRowInput],
    income_rows: Iterable[IncomeRowInput],
    settings: Optional[EngineSettings] = None,
) -> CashFlowStatement:
    """Generate a statement with a one-off engine."""
    return CashFlowEngine(settings=settings).generate_statement(balance_sheet_rows, income_rows)
