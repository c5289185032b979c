"""Assembly of ordered cash flow statement sections from aggregated figures."""

import logging
from typing import Dict, List, Tuple

from ledger_cashflow.core.aggregator import DEPRECIATION_LINE_ITEM, LineItemAggregate
from ledger_cashflow.models import (
    SOURCE_BALANCE_SHEET,
    SOURCE_FORMULA,
    SOURCE_INCOME_STATEMENT,
    IncomeData,
    LineKind,
    Section,
    StatementLine,
)

logger = logging.getLogger(__name__)

WORKING_CAPITAL_ORDER = [
    "Accounts receivable",
    "Prepaid expenses and other assets",
    "Other assets",
    "Accounts payable",
    "Accrued expenses and other liabilities",
    "Deferred revenue",
]
INVESTING_ORDER = ["Purchases of property and equipment"]
FINANCING_ORDER = ["Proceeds from stock issuance", "Other equity transactions"]

ZERO_TOLERANCE = 1e-9


def _is_zero(value: float) -> bool:
    return abs(value) < ZERO_TOLERANCE


def total_label(section: Section, total: float) -> str:
    verb = "used in" if total < 0 else "provided by"
    return f"Net cash {verb} {section.value} activities"


def _section_items(
    aggregate: LineItemAggregate, section: Section, canonical: List[str], exclude: Tuple[str, ...] = ()
) -> List[Tuple[str, float]]:
    """Non-zero line items of a section: canonical order first, then others by name."""
    amounts: Dict[str, float] = {
        line_item: amount
        for (item_section, line_item), amount in aggregate.items()
        if item_section == section and line_item not in exclude
    }
    ordered = [name for name in canonical if name in amounts]
    extras = sorted(name for name in amounts if name not in canonical)
    if extras:
        logger.debug("Non-canonical %s line items appended: %s", section.value, extras)
    return [(name, amounts[name]) for name in ordered + extras if not _is_zero(amounts[name])]


def _with_total(section: Section, lines: List[StatementLine]) -> Tuple[List[StatementLine], float]:
    total = sum(line.amount for line in lines if line.amount is not None)
    lines.append(
        StatementLine(
            description=total_label(section, total),
            amount=total,
            kind=LineKind.TOTAL,
            source=SOURCE_FORMULA,
        )
    )
    return lines, total


class StatementAssembler:
    """Builds the three statement sections in canonical line order."""

    def __init__(self, combine_interest_dividend: bool = True):
        """
        Initialize the assembler.

        Args:
            combine_interest_dividend: Emit interest and dividend income as one
                adjustment line rather than two
        """
        self.combine_interest_dividend = combine_interest_dividend

    def _income_adjustments(self, income: IncomeData) -> List[StatementLine]:
        if self.combine_interest_dividend:
            combined = income.interest_income + income.dividend_income
            if combined > 0:
                return [
                    StatementLine(
                        description="Interest and dividend income received",
                        amount=-combined,
                        kind=LineKind.ADJUSTMENT,
                    )
                ]
            return []

        lines = []
        for label, amount in (
            ("Interest income received", income.interest_income),
            ("Dividend income received", income.dividend_income),
        ):
            if amount > 0:
                lines.append(StatementLine(description=label, amount=-amount, kind=LineKind.ADJUSTMENT))
        return lines

    def build_operating(
        self, income: IncomeData, aggregate: LineItemAggregate
    ) -> Tuple[List[StatementLine], float]:
        net_label = "Net loss" if income.net_income < 0 else "Net income"
        lines = [
            StatementLine(
                description=net_label,
                amount=income.net_income,
                kind=LineKind.MAIN_ITEM,
                source=SOURCE_INCOME_STATEMENT,
            ),
            StatementLine(
                description=(
                    f"Adjustments to reconcile {net_label.lower()} "
                    "to cash from operating activities:"
                ),
                amount=None,
                kind=LineKind.HEADER,
            ),
        ]

        depreciation = aggregate.get((Section.OPERATING, DEPRECIATION_LINE_ITEM), 0.0)
        if not _is_zero(depreciation):
            lines.append(
                StatementLine(
                    description=DEPRECIATION_LINE_ITEM,
                    amount=depreciation,
                    kind=LineKind.ADJUSTMENT,
                    source=SOURCE_INCOME_STATEMENT,
                )
            )

        lines.extend(self._income_adjustments(income))

        lines.append(
            StatementLine(
                description="Changes in operating assets and liabilities:",
                amount=None,
                kind=LineKind.HEADER,
            )
        )
        for line_item, amount in _section_items(
            aggregate, Section.OPERATING, WORKING_CAPITAL_ORDER, exclude=(DEPRECIATION_LINE_ITEM,)
        ):
            lines.append(
                StatementLine(
                    description=line_item,
                    amount=amount,
                    kind=LineKind.WORKING_CAPITAL,
                    source=SOURCE_BALANCE_SHEET,
                )
            )

        return _with_total(Section.OPERATING, lines)

    def build_section(
        self, section: Section, aggregate: LineItemAggregate, canonical: List[str]
    ) -> Tuple[List[StatementLine], float]:
        """Investing/financing style section; empty with no total when nothing moved."""
        lines = [
            StatementLine(
                description=line_item,
                amount=amount,
                kind=LineKind.MAIN_ITEM,
                source=SOURCE_BALANCE_SHEET,
            )
            for line_item, amount in _section_items(aggregate, section, canonical)
        ]
        if not lines:
            return [], 0.0
        return _with_total(section, lines)

    def assemble(
        self, income: IncomeData, aggregate: LineItemAggregate
    ) -> Dict[str, object]:
        """
        Build all sections and the net change in cash.

        Returns:
            Dictionary with 'operating', 'investing', 'financing' line lists and
            'net_change_in_cash'
        """
        operating, operating_total = self.build_operating(income, aggregate)
        investing, investing_total = self.build_section(Section.INVESTING, aggregate, INVESTING_ORDER)
        financing, financing_total = self.build_section(Section.FINANCING, aggregate, FINANCING_ORDER)

        return {
            "operating": operating,
            "investing": investing,
            "financing": financing,
            "net_change_in_cash": operating_total + investing_total + financing_total,
        }
