"""Parser for two-column income statement CSV exports."""

from pathlib import Path
from typing import List

import pandas as pd

from ledger_cashflow.amounts import parse_amount
from ledger_cashflow.models import IncomeRow
from ledger_cashflow.parsers.csv_records import find_header_index, read_records


class IncomeStatementParser:
    """
    Parses income statement exports (description, amount) into income rows.

    Title lines and heading rows without an amount are dropped.
    """

    COLUMNS = ["line", "description", "amount"]

    HEADER_NAMES = ["description", "account"]

    INDICATORS = [
        "income statement",
        "net income",
        "gross profit",
        "total - income",
        "interest income",
        "dividend income",
    ]

    def __init__(self, file_path: Path):
        """
        Initialize parser with income statement file path.

        Args:
            file_path: Path to the income statement CSV
        """
        self.file_path = Path(file_path)
        self.data = None
        self._column_counts: List[int] = []
        self._parse()

    def _parse(self):
        """Load and tokenize the income statement file."""
        records = read_records(self.file_path)
        header_index = find_header_index(records, self.HEADER_NAMES)
        start = header_index + 1 if header_index is not None else 0

        rows = []
        for offset, record in enumerate(records[start:]):
            if len(record) < 2:
                continue
            description, token = record[0], record[1]
            if not description or not token:
                continue
            self._column_counts.append(len(record))
            rows.append(
                {
                    "line": start + offset + 1,
                    "description": description,
                    "amount": parse_amount(token),
                }
            )

        self.data = pd.DataFrame(rows, columns=self.COLUMNS)

    def get_all_rows(self) -> pd.DataFrame:
        """
        Get all tokenized rows.

        Returns:
            DataFrame with description and amount columns
        """
        return self.data.copy()

    def get_rows(self) -> List[IncomeRow]:
        """
        Get rows as IncomeRow models in file order.

        Returns:
            List of IncomeRow
        """
        return [
            IncomeRow(description=record["description"], amount=record["amount"])
            for record in self.data.to_dict("records")
        ]

    def looks_like_income_statement(self) -> bool:
        """Heuristic format check: indicator phrases or a strict two-column shape."""
        if self.data.empty:
            return False
        descriptions = self.data["description"].str.lower()
        has_indicator = any(
            descriptions.str.contains(indicator, regex=False).any() for indicator in self.INDICATORS
        )
        two_columns = all(count == 2 for count in self._column_counts)
        return has_indicator or two_columns
