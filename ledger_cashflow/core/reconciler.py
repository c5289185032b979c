"""Reconciliation of computed ending cash against the reported balance."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Reconciliation:
    """Cash roll-forward figures for one statement."""

    beginning_cash: float
    net_change_in_cash: float
    ending_cash_computed: float
    ending_cash_reported: float
    reconciliation_delta: float

    def within(self, tolerance: float) -> bool:
        return abs(self.reconciliation_delta) <= tolerance


def reconcile(beginning_cash: float, net_change_in_cash: float, ending_cash_reported: float) -> Reconciliation:
    """
    Roll beginning cash forward by the net change and compare to the reported balance.

    A non-zero delta means the source rows are incomplete or an account was
    not classified; it is reported, never raised.
    """
    ending_cash_computed = beginning_cash + net_change_in_cash
    return Reconciliation(
        beginning_cash=beginning_cash,
        net_change_in_cash=net_change_in_cash,
        ending_cash_computed=ending_cash_computed,
        ending_cash_reported=ending_cash_reported,
        reconciliation_delta=ending_cash_computed - ending_cash_reported,
    )
