"""Generate a cash flow statement from balance sheet and income statement CSV exports."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pydantic import ValidationError

from ledger_cashflow.config import load_settings
from ledger_cashflow.core.classifier import RuleTableError
from ledger_cashflow.core.engine import CashFlowEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate an indirect-method cash flow statement.")
    parser.add_argument("--balance-sheet", required=True, help="Comparative balance sheet CSV")
    parser.add_argument("--income-statement", required=True, help="Income statement CSV")
    parser.add_argument(
        "--out",
        default=None,
        help="Output path; .xlsx writes a workbook, anything else CSV (default: cash_flow_statement.csv)",
    )
    parser.add_argument("--rules", default=None, help="Rule table: default, legacy or a YAML path")
    parser.add_argument("--settings", default=None, help="YAML settings file")
    parser.add_argument("--tolerance", type=float, default=None, help="Reconciliation tolerance")
    parser.add_argument("--company", default="", help="Company name for the title block")
    parser.add_argument("--period", default="", help="Period description for the title block")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when the statement does not reconcile",
    )
    parser.add_argument("--verbose", action="store_true", help="Log per-row classification")
    return parser


def main() -> int:
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    for path in (args.balance_sheet, args.income_statement):
        if not Path(path).exists():
            raise SystemExit(f"Input file not found: {path}")

    try:
        settings = load_settings(args.settings)
        overrides = {}
        if args.rules:
            overrides["rule_table"] = args.rules
        if args.tolerance is not None:
            overrides["reconciliation_tolerance"] = args.tolerance
        if overrides:
            settings = settings.model_validate({**settings.model_dump(), **overrides})
        engine = CashFlowEngine(settings=settings)
    except (OSError, ValidationError, RuleTableError) as exc:
        raise SystemExit(f"Invalid configuration: {exc}")

    statement = engine.generate_from_files(Path(args.balance_sheet), Path(args.income_statement))

    out_path = Path(args.out) if args.out else Path("cash_flow_statement.csv")
    engine.export_statement(statement, out_path, company_name=args.company, period_description=args.period)

    review = engine.review_statement(statement)
    print(json.dumps(review, indent=2))
    print(f"Wrote statement to {out_path}")

    if args.strict and not review["reconciled"]:
        print(
            f"Statement does not reconcile: delta {statement.reconciliation_delta:,.2f} "
            f"exceeds tolerance {review['tolerance']}",
            file=sys.stderr,
        )
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
