"""Extraction of net income and non-cash income figures from income statement rows."""

import logging
from typing import Iterable, Mapping, Union

from ledger_cashflow.models import IncomeData, IncomeRow

logger = logging.getLogger(__name__)

NET_INCOME_MARKER = "net income"
INTEREST_INCOME_MARKER = "interest income"
DIVIDEND_INCOME_MARKER = "dividend income"


def extract_income(rows: Iterable[Union[IncomeRow, Mapping]]) -> IncomeData:
    """
    Scan income statement rows for the figures the operating section needs.

    Each marker is matched case-insensitively against the row description.
    When several rows match the same marker, the last one in row order wins.

    Args:
        rows: Income statement rows in export order

    Returns:
        IncomeData with net, interest and dividend income (0 when absent)
    """
    net_income = 0.0
    interest_income = 0.0
    dividend_income = 0.0

    for raw in rows:
        row = raw if isinstance(raw, IncomeRow) else IncomeRow.model_validate(raw)
        description = row.description.lower()

        if NET_INCOME_MARKER in description:
            net_income = row.amount
        if INTEREST_INCOME_MARKER in description:
            interest_income = row.amount
        if DIVIDEND_INCOME_MARKER in description:
            dividend_income = row.amount

    logger.debug(
        "Extracted income: net=%s interest=%s dividend=%s",
        net_income,
        interest_income,
        dividend_income,
    )
    return IncomeData(
        net_income=net_income,
        interest_income=interest_income,
        dividend_income=dividend_income,
    )
