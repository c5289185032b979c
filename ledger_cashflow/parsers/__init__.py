"""Parsers for ledger CSV exports."""

from .balance_sheet_parser import BalanceSheetParser
from .income_statement_parser import IncomeStatementParser

__all__ = [
    "BalanceSheetParser",
    "IncomeStatementParser",
]
