"""Example usage of the ledger cash flow statement engine."""

from pathlib import Path

from ledger_cashflow.amounts import format_amount
from ledger_cashflow.core.classifier import classify
from ledger_cashflow.core.engine import CashFlowEngine
from ledger_cashflow.export import render_csv
from ledger_cashflow.models import IncomeRow, LedgerRow
from ledger_cashflow.parsers import BalanceSheetParser

FIXTURES_DIR = Path(__file__).parent / 'tests' / 'fixtures'


def main():
    engine = CashFlowEngine()

    print("=" * 60)
    print("Ledger Cash Flow Statement Engine - Examples")
    print("=" * 60)

    # Example 1: Classify account names
    print("\n[Example 1] Classify balance sheet accounts")
    print("-" * 60)
    for name in ["Total Bank - JPM Checking", "Accounts Receivable - Trade",
                 "Unbilled Receivables", "Additional Paid-In Capital", "Retained Earnings"]:
        print(f"{name:35s} -> {classify(name)!r}")

    # Example 2: Generate a statement from in-memory rows
    print("\n[Example 2] Generate a statement from rows")
    print("-" * 60)
    rows = [
        LedgerRow(account_name="Accounts Receivable", variance=-700026),
        LedgerRow(account_name="Total Bank", current_amount=23482127,
                  prior_amount=28226280, variance=-4744153),
    ]
    income = [
        IncomeRow(description="Interest Income", amount=200000),
        IncomeRow(description="Dividend Income", amount=49149),
        IncomeRow(description="Net Income", amount=-4767895),
    ]
    statement = engine.generate_statement(rows, income)
    for line in statement.operating:
        amount = format_amount(line.amount)
        print(f"  {line.description:70s} {amount:>14s}")

    # Example 3: Review the reconciliation
    print("\n[Example 3] Review reconciliation")
    print("-" * 60)
    review = engine.review_statement(statement)
    print(f"Status: {review['status']}")
    print(f"Beginning cash: {format_amount(review['beginning_cash'])}")
    print(f"Ending cash (computed): {format_amount(review['ending_cash_computed'])}")
    print(f"Ending cash (reported): {format_amount(review['ending_cash_reported'])}")
    print(f"Delta: {format_amount(review['reconciliation_delta'])}")

    # Example 4: Parse an export and inspect its integrity
    print("\n[Example 4] Parse a comparative balance sheet export")
    print("-" * 60)
    parser = BalanceSheetParser(FIXTURES_DIR / 'balance_sheet.csv')
    print(parser.get_all_rows()[['account_name', 'account_type', 'variance']])
    print(f"Integrity: {parser.validate_integrity()}")

    # Example 5: Generate from files and render CSV
    print("\n[Example 5] Generate from export files")
    print("-" * 60)
    statement = engine.generate_from_files(
        FIXTURES_DIR / 'balance_sheet.csv', FIXTURES_DIR / 'income_statement.csv'
    )
    print(render_csv(statement, "Acme Analytics Inc.", "Three months ended June 30, 2025"))

    print("\n" + "=" * 60)
    print("Examples completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
