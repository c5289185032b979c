"""Tests for variance aggregation and the sign policy."""

import logging
from types import MappingProxyType

import pytest

from ledger_cashflow.core.aggregator import ASSET_LINE_ITEMS, VarianceAggregator, adjust_variance
from ledger_cashflow.core.classifier import AccountClassifier, load_rule_table
from ledger_cashflow.models import LedgerRow, Section


@pytest.fixture
def classifier():
    return AccountClassifier(load_rule_table("default"))


@pytest.fixture
def aggregator(classifier):
    return VarianceAggregator(classifier)


class TestAdjustVariance:
    """Tests for the sign policy."""

    @pytest.mark.parametrize("line_item", sorted(ASSET_LINE_ITEMS))
    def test_asset_items_negate(self, line_item):
        assert adjust_variance(line_item, 500.0) == -500.0
        assert adjust_variance(line_item, -500.0) == 500.0

    def test_depreciation_is_absolute(self):
        assert adjust_variance("Depreciation and amortization expense", -1200.0) == 1200.0
        assert adjust_variance("Depreciation and amortization expense", 1200.0) == 1200.0

    @pytest.mark.parametrize(
        "line_item",
        ["Accounts payable", "Deferred revenue", "Proceeds from stock issuance", "Other equity transactions"],
    )
    def test_liability_and_equity_items_unchanged(self, line_item):
        assert adjust_variance(line_item, -300.0) == -300.0


class TestVarianceAggregator:
    """Tests for VarianceAggregator."""

    def test_accumulates_per_line_item(self, aggregator):
        aggregator.add_rows(
            [
                LedgerRow(account_name="Accounts Receivable - Trade", variance=1000),
                LedgerRow(account_name="Accounts Receivable - Other", variance=-250),
                LedgerRow(account_name="Accounts Payable", variance=400),
                LedgerRow(account_name="Accumulated Depreciation", variance=-90),
                LedgerRow(account_name="Total Bank", current_amount=10, prior_amount=5),
            ]
        )
        assert aggregator.amount(Section.OPERATING, "Accounts receivable") == -750.0
        assert aggregator.amount(Section.OPERATING, "Accounts payable") == 400.0
        assert aggregator.amount(Section.OPERATING, "Depreciation and amortization expense") == 90.0
        assert aggregator.rows_seen == 5
        assert aggregator.rows_aggregated == 4

    def test_cash_total_row_sets_cash_balances(self, aggregator):
        aggregator.add_row(
            {
                "account_name": "Total Bank",
                "current_amount": "23,482,127",
                "prior_amount": "28,226,280",
                "variance": "(4,744,153)",
            }
        )
        assert aggregator.beginning_cash == 28226280.0
        assert aggregator.ending_cash_reported == 23482127.0
        assert aggregator.cash_total_found
        assert aggregator.totals() == {}

    def test_last_cash_total_row_wins(self, aggregator):
        aggregator.add_rows(
            [
                LedgerRow(account_name="Total Bank", current_amount=1, prior_amount=2),
                LedgerRow(account_name="Total Cash and Equivalents", current_amount=30, prior_amount=40),
            ]
        )
        assert aggregator.beginning_cash == 40.0
        assert aggregator.ending_cash_reported == 30.0

    def test_zero_variance_rows_ignored(self, aggregator):
        aggregator.add_row(LedgerRow(account_name="Accounts Payable", current_amount=5, prior_amount=5))
        assert aggregator.totals() == {}
        assert aggregator.rows_aggregated == 0

    def test_skipped_and_cash_rows_not_aggregated(self, aggregator):
        aggregator.add_rows(
            [
                LedgerRow(account_name="Operating Bank Account", variance=50),
                LedgerRow(account_name="Retained Earnings", variance=70),
                LedgerRow(account_name="", variance=10),
            ]
        )
        assert aggregator.totals() == {}

    def test_variance_derived_when_missing(self, aggregator):
        aggregator.add_row({"account_name": "Prepaid Rent", "current_amount": "300", "prior_amount": "100"})
        assert aggregator.amount(Section.OPERATING, "Prepaid expenses and other assets") == -200.0

    def test_variance_derived_for_read_only_mapping(self, aggregator):
        row = MappingProxyType({"account_name": "Accounts Payable", "current_amount": 500, "prior_amount": 200})
        aggregator.add_row(row)
        assert aggregator.amount(Section.OPERATING, "Accounts payable") == 300.0

    def test_nan_variance_is_derived(self, aggregator):
        aggregator.add_row(
            {
                "account_name": "Accounts Payable",
                "current_amount": 500,
                "prior_amount": 200,
                "variance": float("nan"),
            }
        )
        assert aggregator.amount(Section.OPERATING, "Accounts payable") == 300.0

    def test_missing_cash_row_warns(self, aggregator, caplog):
        with caplog.at_level(logging.WARNING, logger="ledger_cashflow.core.aggregator"):
            aggregator.add_rows([LedgerRow(account_name="Accounts Payable", variance=1)])
        assert not aggregator.cash_total_found
        assert aggregator.beginning_cash == 0.0
        assert "No cash total row" in caplog.text

    def test_custom_cash_markers(self, classifier):
        aggregator = VarianceAggregator(classifier, cash_total_markers=["Total Checking"])
        aggregator.add_rows([LedgerRow(account_name="Total Checking", current_amount=8, prior_amount=3)])
        assert aggregator.beginning_cash == 3.0
        assert aggregator.ending_cash_reported == 8.0

    def test_fresh_state_per_instance(self, classifier):
        first = VarianceAggregator(classifier).add_rows([LedgerRow(account_name="Accounts Payable", variance=5)])
        second = VarianceAggregator(classifier)
        assert first.totals() != second.totals()
        assert second.totals() == {}
