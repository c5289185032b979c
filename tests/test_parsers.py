"""Tests for the ledger export parsers."""

from pathlib import Path

import pandas as pd
import pytest

from ledger_cashflow.models import IncomeRow, LedgerRow
from ledger_cashflow.parsers import BalanceSheetParser, IncomeStatementParser
from ledger_cashflow.parsers.csv_records import find_header_index, resolve_columns

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


class TestBalanceSheetParser:
    """Tests for balance sheet parser."""

    @pytest.fixture
    def parser(self):
        """Create parser instance."""
        return BalanceSheetParser(FIXTURES_DIR / "balance_sheet.csv")

    def test_parser_initialization(self, parser):
        assert parser.data is not None
        assert len(parser.data) > 0

    def test_get_all_rows(self, parser):
        rows = parser.get_all_rows()
        assert isinstance(rows, pd.DataFrame)
        assert list(rows.columns) == BalanceSheetParser.COLUMNS

    def test_headings_and_subtotals_dropped(self, parser):
        names = parser.data["account_name"].tolist()
        assert names == [
            "Operating Checking",
            "Total Bank",
            "Accounts Receivable - Trade",
            "Accounts Payable",
            "Retained Earnings",
            "Net Income",
        ]

    def test_section_headings_become_account_types(self, parser):
        types = dict(zip(parser.data["account_name"], parser.data["account_type"]))
        assert types["Accounts Receivable - Trade"] == "Asset"
        assert types["Accounts Payable"] == "Liability"
        assert types["Retained Earnings"] == "Equity"

    def test_get_rows(self, parser):
        rows = parser.get_rows()
        assert all(isinstance(row, LedgerRow) for row in rows)
        receivable = rows[2]
        assert receivable.current_amount == 1299974.0
        assert receivable.prior_amount == 2000000.0
        assert receivable.variance == -700026.0

    def test_find_row(self, parser):
        row = parser.find_row("total bank")
        assert row is not None
        assert row["prior_amount"] == 28226280.0
        assert parser.find_row("no such account") is None

    def test_validate_integrity(self, parser):
        issues = parser.validate_integrity()
        assert issues == {"missing_values": [], "warnings": []}

    def test_keep_subtotals(self):
        parser = BalanceSheetParser(FIXTURES_DIR / "balance_sheet.csv", keep_subtotals=True)
        assert "Total Accounts Receivable" in parser.data["account_name"].tolist()

    def test_snake_case_columns(self, tmp_path):
        path = tmp_path / "bs.csv"
        path.write_text(
            "account_name,account_type,current_amount,prior_amount,variance\n"
            "Accounts Payable,Liability,500,400,\n"
            "Total Cash,Asset,90,100,-10\n",
            encoding="utf-8",
        )
        parser = BalanceSheetParser(path)
        rows = parser.get_rows()
        assert rows[0].account_type == "Liability"
        assert rows[0].variance == 100.0
        issues = parser.validate_integrity()
        assert issues["missing_values"] == []
        assert "derived from current - prior" in issues["warnings"][0]

    def test_headerless_file_uses_positions(self, tmp_path):
        path = tmp_path / "bs.csv"
        path.write_text("Deferred Revenue,300,200,100\n", encoding="utf-8")
        rows = BalanceSheetParser(path).get_rows()
        assert rows[0].account_name == "Deferred Revenue"
        assert rows[0].variance == 100.0

    def test_missing_cash_row_reported(self, tmp_path):
        path = tmp_path / "bs.csv"
        path.write_text("Financial Row,Amount,Comparison Amount,Variance\nAccounts Payable,5,4,1\n", encoding="utf-8")
        issues = BalanceSheetParser(path).validate_integrity()
        assert issues["missing_values"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "bs.csv"
        path.write_text("", encoding="utf-8")
        parser = BalanceSheetParser(path)
        assert parser.get_rows() == []
        assert parser.validate_integrity()["missing_values"] == ["No account rows found"]


class TestIncomeStatementParser:
    """Tests for income statement parser."""

    @pytest.fixture
    def parser(self):
        """Create parser instance."""
        return IncomeStatementParser(FIXTURES_DIR / "income_statement.csv")

    def test_rows_without_amount_skipped(self, parser):
        descriptions = parser.data["description"].tolist()
        assert "Ordinary Income/Expense" not in descriptions
        assert "Income" not in descriptions
        assert len(descriptions) == 7

    def test_get_rows(self, parser):
        rows = parser.get_rows()
        assert all(isinstance(row, IncomeRow) for row in rows)
        assert rows[-1] == IncomeRow(description="Net Income", amount=-4767895)

    def test_looks_like_income_statement(self, parser):
        assert parser.looks_like_income_statement()

    def test_balance_sheet_is_not_income_statement(self, tmp_path):
        path = tmp_path / "not_income.csv"
        path.write_text("Description,Amount,Prior\nAccounts Payable,5,4\n", encoding="utf-8")
        assert not IncomeStatementParser(path).looks_like_income_statement()

    def test_plain_header(self, tmp_path):
        path = tmp_path / "is.csv"
        path.write_text("description,amount\nNet Income,\"(1,250)\"\n", encoding="utf-8")
        rows = IncomeStatementParser(path).get_rows()
        assert rows == [IncomeRow(description="Net Income", amount=-1250)]


class TestCsvRecords:
    """Tests for shared record helpers."""

    def test_find_header_after_title_block(self):
        records = [["Acme"], ["Balance Sheet"], [], ["Financial Row", "Amount"]]
        assert find_header_index(records, ["account"]) == 3

    def test_no_header(self):
        assert find_header_index([["Cash", "1"]], ["account"]) is None

    def test_resolve_columns(self):
        columns = resolve_columns(
            ["Financial Row", "Amount", "Comparison Amount"],
            {"current": ["amount"], "prior": ["comparison amount"], "variance": ["variance"]},
        )
        assert columns == {"current": 1, "prior": 2, "variance": None}
