"""Core classification, aggregation and statement assembly."""

from .classifier import (
    AccountClassifier,
    ClassificationRule,
    RuleTable,
    RuleTableError,
    classify,
    load_rule_table,
)
from .income_extractor import extract_income
from .aggregator import VarianceAggregator, adjust_variance
from .assembler import StatementAssembler
from .reconciler import Reconciliation, reconcile
from .engine import CashFlowEngine, generate_statement

__all__ = [
    "AccountClassifier",
    "ClassificationRule",
    "RuleTable",
    "RuleTableError",
    "classify",
    "load_rule_table",
    "extract_income",
    "VarianceAggregator",
    "adjust_variance",
    "StatementAssembler",
    "Reconciliation",
    "reconcile",
    "CashFlowEngine",
    "generate_statement",
]
