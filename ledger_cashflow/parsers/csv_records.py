"""Raw record reading shared by the export parsers."""

import csv
from pathlib import Path
from typing import Dict, List, Optional, Sequence

# Ledger exports open with a title block of ragged rows before the column
# header, which pandas cannot infer a width for, so rows are read as records.


def read_records(file_path: Path) -> List[List[str]]:
    """Read every CSV row as a list of stripped cells (BOM tolerant)."""
    with open(file_path, "r", encoding="utf-8-sig", newline="") as f:
        return [[cell.strip() for cell in row] for row in csv.reader(f)]


FINANCIAL_ROW_MARKER = "financial row"


def find_header_index(
    records: Sequence[Sequence[str]], header_names: Sequence[str], max_scan: int = 15
) -> Optional[int]:
    """
    Locate the column header row among the leading rows.

    Args:
        records: Raw CSV records
        header_names: Lowercase first-cell values that mark a header row;
            a first cell containing "financial row" always does
        max_scan: How many leading rows to inspect

    Returns:
        Row index of the header, or None
    """
    for index, record in enumerate(records[:max_scan]):
        if not record:
            continue
        first = record[0].strip().lower()
        if FINANCIAL_ROW_MARKER in first or first in header_names:
            return index
    return None


def resolve_columns(header: Sequence[str], aliases: Dict[str, Sequence[str]]) -> Dict[str, Optional[int]]:
    """Map canonical field names to header positions using lowercase aliases."""
    normalized = [h.strip().lower() for h in header]
    columns: Dict[str, Optional[int]] = {}
    for field, names in aliases.items():
        columns[field] = next((normalized.index(n) for n in names if n in normalized), None)
    return columns


def cell(record: Sequence[str], index: Optional[int]) -> str:
    if index is None or index >= len(record):
        return ""
    return record[index]
