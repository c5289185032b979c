"""Indirect-method cash flow statements from comparative ledger exports."""

from .config import EngineSettings, load_settings
from .core import CashFlowEngine, generate_statement
from .models import CashFlowStatement, IncomeRow, LedgerRow

__version__ = "0.1.0"

__all__ = [
    "EngineSettings",
    "load_settings",
    "CashFlowEngine",
    "generate_statement",
    "CashFlowStatement",
    "IncomeRow",
    "LedgerRow",
]
