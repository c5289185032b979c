"""Rendering of cash flow statements to display tables, CSV and Excel."""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from ledger_cashflow.amounts import format_amount
from ledger_cashflow.models import SOURCE_BALANCE_SHEET, SOURCE_FORMULA, CashFlowStatement, Section

logger = logging.getLogger(__name__)

STATEMENT_TITLE = "CONDENSED CONSOLIDATED STATEMENTS OF CASH FLOWS"
UNAUDITED = "(unaudited)"
CSV_HEADER = ["Description", "Amount", "Source"]
SOURCE_CHECK = "Formula (to check)"

FRAME_COLUMNS = ["description", "amount", "formatted_amount", "source", "kind", "section"]


def _row(description: str, amount, source: str = "", kind: str = "", section: str = "") -> Dict:
    return {
        "description": description,
        "amount": amount,
        "formatted_amount": format_amount(amount),
        "source": source,
        "kind": kind,
        "section": section,
    }


def statement_to_frame(statement: CashFlowStatement) -> pd.DataFrame:
    """
    Flatten a statement into display rows.

    The operating section is always shown; investing and financing headings
    only when the section has lines.

    Args:
        statement: Statement to flatten

    Returns:
        DataFrame with description, amount, formatted_amount, source, kind and
        section columns
    """
    rows: List[Dict] = []
    for section in Section:
        lines = statement.section_lines(section)
        if section != Section.OPERATING and not lines:
            continue
        rows.append(
            _row(f"Cash flows from {section.value} activities", None, kind="section_heading", section=section.value)
        )
        for line in lines:
            rows.append(_row(line.description, line.amount, line.source, line.kind.value, section.value))

    direction = "decrease" if statement.net_change_in_cash < 0 else "increase"
    rows.append(
        _row(
            f"Net {direction} in cash and cash equivalents",
            statement.net_change_in_cash,
            SOURCE_FORMULA,
            kind="summary",
        )
    )
    rows.append(
        _row(
            "Cash and cash equivalents at beginning of period",
            statement.beginning_cash,
            SOURCE_BALANCE_SHEET,
            kind="summary",
        )
    )
    rows.append(
        _row(
            "Cash and cash equivalents at end of period",
            statement.ending_cash_computed,
            SOURCE_FORMULA,
            kind="summary",
        )
    )
    rows.append(
        _row(
            "Cash and cash equivalents at end of period (reported)",
            statement.ending_cash_reported,
            SOURCE_BALANCE_SHEET,
            kind="check",
        )
    )
    rows.append(
        _row(
            "Reconciliation difference",
            statement.reconciliation_delta,
            SOURCE_CHECK,
            kind="check",
        )
    )
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def render_csv(statement: CashFlowStatement, company_name: str = "", period_description: str = "") -> str:
    """
    Render a statement as CSV text with a report title block.

    Args:
        statement: Statement to render
        company_name: First title line
        period_description: Period title line (e.g. 'Three months ended June 30, 2025')

    Returns:
        CSV document as a string
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for title in (company_name, STATEMENT_TITLE, UNAUDITED, period_description):
        if title:
            writer.writerow([title])
    writer.writerow([])

    display = statement_to_frame(statement)[["description", "formatted_amount", "source"]].set_axis(
        CSV_HEADER, axis=1
    )
    display.to_csv(buffer, index=False, lineterminator="\n")
    return buffer.getvalue()


def write_csv(
    statement: CashFlowStatement,
    output_path: Path,
    company_name: str = "",
    period_description: str = "",
) -> Path:
    """Write the rendered CSV to disk, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_csv(statement, company_name, period_description), encoding="utf-8")
    logger.info("Wrote cash flow statement CSV to %s", output_path)
    return output_path


def write_excel(
    statement: CashFlowStatement,
    output_path: Path,
    company_name: str = "",
    period_description: str = "",
) -> Path:
    """
    Write the statement to an Excel workbook.

    The first sheet holds the display rows; a second sheet holds the
    reconciliation figures.

    Args:
        statement: Statement to write
        output_path: Target .xlsx path
        company_name: Stored in the summary sheet
        period_description: Stored in the summary sheet

    Returns:
        Path of the written workbook
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    frame = statement_to_frame(statement)
    display = frame[["description", "amount", "source"]].rename(
        columns={"description": "Description", "amount": "Amount", "source": "Source"}
    )
    summary = pd.DataFrame(
        [
            ("Company", company_name),
            ("Period", period_description),
            ("Beginning cash", statement.beginning_cash),
            ("Net change in cash", statement.net_change_in_cash),
            ("Ending cash (computed)", statement.ending_cash_computed),
            ("Ending cash (reported)", statement.ending_cash_reported),
            ("Reconciliation difference", statement.reconciliation_delta),
        ],
        columns=["Field", "Value"],
    )

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        display.to_excel(writer, sheet_name="Cash Flows", index=False)
        summary.to_excel(writer, sheet_name="Reconciliation", index=False)

    logger.info("Wrote cash flow statement workbook to %s", output_path)
    return output_path
