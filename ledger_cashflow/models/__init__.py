"""Data models for ledger rows, classifications and statements."""

from .ledger_entities import (
    LedgerRow,
    IncomeRow,
    IncomeData,
)
from .statement_models import (
    Section,
    LineKind,
    Cash,
    Skip,
    Categorized,
    Classification,
    CASH,
    SKIP,
    StatementLine,
    CashFlowStatement,
    SOURCE_INCOME_STATEMENT,
    SOURCE_BALANCE_SHEET,
    SOURCE_FORMULA,
)

__all__ = [
    "LedgerRow",
    "IncomeRow",
    "IncomeData",
    "Section",
    "LineKind",
    "Cash",
    "Skip",
    "Categorized",
    "Classification",
    "CASH",
    "SKIP",
    "StatementLine",
    "CashFlowStatement",
    "SOURCE_INCOME_STATEMENT",
    "SOURCE_BALANCE_SHEET",
    "SOURCE_FORMULA",
]
