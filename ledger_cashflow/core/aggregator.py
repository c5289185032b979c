"""Accumulation of sign-adjusted balance sheet variances per line item."""

import logging
from collections import defaultdict
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from ledger_cashflow.core.classifier import AccountClassifier
from ledger_cashflow.models import Cash, Categorized, LedgerRow, Section, Skip

logger = logging.getLogger(__name__)

LineItemKey = Tuple[Section, str]
LineItemAggregate = Dict[LineItemKey, float]

DEPRECIATION_LINE_ITEM = "Depreciation and amortization expense"

# an increase in any of these balances is a use of cash
ASSET_LINE_ITEMS = frozenset(
    {
        "Accounts receivable",
        "Prepaid expenses and other assets",
        "Other assets",
        "Purchases of property and equipment",
    }
)

DEFAULT_CASH_TOTAL_MARKERS = ("total bank", "total cash")


def adjust_variance(line_item: str, variance: float) -> float:
    """Apply the cash-impact sign policy for one line item."""
    if line_item == DEPRECIATION_LINE_ITEM:
        return abs(variance)
    if line_item in ASSET_LINE_ITEMS:
        return -variance
    return variance


class VarianceAggregator:
    """
    Accumulates balance sheet variances into cash flow line items.

    One aggregator serves one statement; build a fresh instance per call.
    """

    def __init__(
        self,
        classifier: AccountClassifier,
        cash_total_markers: Optional[Sequence[str]] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            classifier: Classifier used to route each row
            cash_total_markers: Account name fragments identifying the row that
                carries total cash for both periods
        """
        self.classifier = classifier
        markers = cash_total_markers if cash_total_markers is not None else DEFAULT_CASH_TOTAL_MARKERS
        self.cash_total_markers = tuple(m.lower() for m in markers)
        self._totals: Dict[LineItemKey, float] = defaultdict(float)
        self.beginning_cash = 0.0
        self.ending_cash_reported = 0.0
        self.cash_total_found = False
        self.rows_seen = 0
        self.rows_aggregated = 0

    def _is_cash_total_row(self, row: LedgerRow) -> bool:
        name = row.account_name.lower()
        return any(marker in name for marker in self.cash_total_markers)

    def add_row(self, row: Union[LedgerRow, Mapping]) -> None:
        """Fold one balance sheet row into the aggregate."""
        if not isinstance(row, LedgerRow):
            row = LedgerRow.model_validate(row)
        self.rows_seen += 1

        if self._is_cash_total_row(row):
            self.beginning_cash = row.prior_amount
            self.ending_cash_reported = row.current_amount
            self.cash_total_found = True

        if row.variance == 0:
            return

        classification = self.classifier.classify(row.account_name, row.account_type)
        if isinstance(classification, (Cash, Skip)):
            return
        if isinstance(classification, Categorized):
            key = (classification.section, classification.line_item)
            self._totals[key] += adjust_variance(classification.line_item, row.variance)
            self.rows_aggregated += 1
            return
        raise TypeError(f"Unhandled classification: {classification!r}")

    def add_rows(self, rows: Iterable[Union[LedgerRow, Mapping]]) -> "VarianceAggregator":
        for row in rows:
            self.add_row(row)
        if not self.cash_total_found:
            logger.warning(
                "No cash total row matching %s; beginning and reported cash default to 0",
                list(self.cash_total_markers),
            )
        return self

    def totals(self) -> LineItemAggregate:
        """Snapshot of the accumulated amounts keyed by (section, line item)."""
        return dict(self._totals)

    def amount(self, section: Section, line_item: str) -> float:
        return self._totals.get((section, line_item), 0.0)
