"""Parser for comparative balance sheet CSV exports."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ledger_cashflow.amounts import parse_amount
from ledger_cashflow.models import LedgerRow
from ledger_cashflow.parsers.csv_records import cell, find_header_index, read_records, resolve_columns

logger = logging.getLogger(__name__)


class BalanceSheetParser:
    """
    Parses comparative balance sheet exports into ledger rows.

    Accepts both the ledger system's report layout (title block, a
    "Financial Row" header, ASSETS/LIABILITIES/EQUITY headings) and plain
    CSVs with snake_case column names.
    """

    COLUMNS = ["line", "account_name", "account_type", "current_amount", "prior_amount", "variance"]

    HEADER_NAMES = ["account", "account name", "account_name"]

    COLUMN_ALIASES = {
        "account_name": ["financial row", "account", "account name", "account_name"],
        "account_type": ["account type", "account_type", "type"],
        "current_amount": ["current_amount", "current amount", "amount", "current"],
        "prior_amount": ["prior_amount", "prior amount", "comparison amount", "prior"],
        "variance": ["variance", "change"],
    }

    POSITIONAL_COLUMNS = {
        "account_name": 0,
        "current_amount": 1,
        "prior_amount": 2,
        "variance": 3,
    }

    SECTION_HEADINGS = [
        ("ASSETS", "Asset"),
        ("LIABILITIES", "Liability"),
        ("EQUITY", "Equity"),
    ]

    def __init__(
        self,
        file_path: Path,
        keep_subtotals: bool = False,
        cash_total_markers: Sequence[str] = ("total bank", "total cash"),
    ):
        """
        Initialize parser with balance sheet file path.

        Args:
            file_path: Path to the balance sheet CSV
            keep_subtotals: Keep "Total ..." rows other than the cash total
            cash_total_markers: Name fragments of the cash total row, which is
                always kept
        """
        self.file_path = Path(file_path)
        self.keep_subtotals = keep_subtotals
        self.cash_total_markers = [m.lower() for m in cash_total_markers]
        self.data = None
        self._parse()

    def _resolve_columns(self, header: Optional[List[str]]) -> Dict[str, Optional[int]]:
        columns = resolve_columns(header, self.COLUMN_ALIASES) if header else {}
        width = len(header) if header else None
        for field, position in self.POSITIONAL_COLUMNS.items():
            if columns.get(field) is None and (width is None or position < width):
                columns[field] = position
        columns.setdefault("account_type", None)
        return columns

    def _is_subtotal(self, name: str) -> bool:
        lowered = name.lower()
        if not lowered.startswith("total"):
            return False
        return not any(marker in lowered for marker in self.cash_total_markers)

    def _parse(self):
        """Load and tokenize the balance sheet file."""
        records = read_records(self.file_path)
        header_index = find_header_index(records, self.HEADER_NAMES)
        header = records[header_index] if header_index is not None else None
        columns = self._resolve_columns(header)
        start = header_index + 1 if header_index is not None else 0

        rows = []
        section_type = ""
        for offset, record in enumerate(records[start:]):
            name = cell(record, columns["account_name"])
            if not name:
                continue

            tokens = {
                field: cell(record, columns[field])
                for field in ("current_amount", "prior_amount", "variance")
            }
            if not any(tokens.values()):
                upper = name.upper()
                for heading, account_type in self.SECTION_HEADINGS:
                    if heading in upper:
                        section_type = account_type
                        break
                continue

            if not self.keep_subtotals and self._is_subtotal(name):
                continue

            explicit_type = cell(record, columns["account_type"])
            rows.append(
                {
                    "line": start + offset + 1,
                    "account_name": name,
                    "account_type": explicit_type or section_type,
                    "current_amount": parse_amount(tokens["current_amount"]),
                    "prior_amount": parse_amount(tokens["prior_amount"]),
                    "variance": parse_amount(tokens["variance"]) if tokens["variance"] else None,
                }
            )

        self.data = pd.DataFrame(rows, columns=self.COLUMNS)
        logger.debug("Parsed %d balance sheet rows from %s", len(self.data), self.file_path)

    def get_all_rows(self) -> pd.DataFrame:
        """
        Get all tokenized rows.

        Returns:
            DataFrame with one row per account line
        """
        return self.data.copy()

    def get_rows(self) -> List[LedgerRow]:
        """
        Get rows as LedgerRow models in file order.

        Returns:
            List of LedgerRow
        """
        rows = []
        for record in self.data.to_dict("records"):
            record.pop("line", None)
            rows.append(LedgerRow.model_validate(record))
        return rows

    def find_row(self, marker: str) -> Optional[Dict]:
        """
        Get the last row whose account name contains a marker.

        Args:
            marker: Case-insensitive name fragment (e.g. 'total bank')

        Returns:
            Dictionary with the row or None
        """
        mask = self.data["account_name"].str.lower().str.contains(marker.lower(), regex=False)
        matches = self.data[mask]
        if matches.empty:
            return None
        return matches.iloc[-1].to_dict()

    def validate_integrity(self) -> Dict[str, List[str]]:
        """
        Validate the tokenized rows and report issues.

        Returns:
            Dictionary with validation results
        """
        issues = {
            "missing_values": [],
            "warnings": [],
        }

        if self.data.empty:
            issues["missing_values"].append("No account rows found")
            return issues

        if not any(self.find_row(m) for m in self.cash_total_markers):
            issues["missing_values"].append(
                f"No cash total row matching {self.cash_total_markers}"
            )

        derived = self.data["variance"].isna()
        if derived.any():
            issues["warnings"].append(
                f"{int(derived.sum())} rows have no variance; derived from current - prior"
            )

        explicit = self.data[~derived]
        expected = explicit["current_amount"] - explicit["prior_amount"]
        mismatched = explicit[(expected - explicit["variance"]).abs() > 0.005]
        if not mismatched.empty:
            issues["warnings"].append(
                f"{len(mismatched)} rows have a variance that differs from current - prior"
            )

        return issues
