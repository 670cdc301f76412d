"""
Per-year cash-flow aggregation for NetWorthLab.

Every function here is a pure function of (snapshot, year): it sums the
active budget lines of one year into a surplus or deficit. Years are
independent of each other, so the series helper may evaluate them in any
order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass

import pandas as pd

from .registry import strategy_for
from .snapshot import Snapshot

CASHFLOW_COLUMNS = [
    "annual_income",
    "annual_expenses",
    "asset_contributions",
    "liability_payments",
    "budget_surplus",
]


@dataclass(frozen=True)
class CashFlowYear:
    """Aggregated budget of a single year."""

    year: int
    annual_income: float
    annual_expenses: float
    asset_contributions: float
    liability_payments: float

    @property
    def budget_surplus(self) -> float:
        return (
            self.annual_income
            - self.annual_expenses
            - self.asset_contributions
            - self.liability_payments
        )

    def as_dict(self) -> dict[str, float]:
        data = asdict(self)
        data["budget_surplus"] = self.budget_surplus
        return data


def annual_income(snapshot: Snapshot, year: int) -> float:
    """Sum of ``value * 12 * (1 + growth/100) ** (year - start)`` over active incomes."""
    return float(sum(strategy_for(i).amount_in(i, year) for i in snapshot.incomes))


def annual_expenses(snapshot: Snapshot, year: int) -> float:
    """Same as annual_income, over expenses."""
    return float(sum(strategy_for(e).amount_in(e, year) for e in snapshot.expenses))


def asset_contributions(snapshot: Snapshot, year: int) -> float:
    """
    Annual contributions paid from the budget into active assets.

    Contributions drawn from another asset (a resolved ``from_account`` whose
    source is active this year) do not touch the budget. The liquid account's
    own contribution counts like any other; the account is not credited with it.
    """
    return float(
        sum(
            asset.annual_contribution
            for asset in snapshot.assets
            if asset.is_active(year) and snapshot.funding_source(asset, year) is None
        )
    )


def liability_payments(snapshot: Snapshot, year: int) -> float:
    """Annual payments on liabilities still within their term, paid from the budget."""
    return float(
        sum(
            liability.annual_payment
            for liability in snapshot.liabilities
            if liability.is_paying(year)
            and snapshot.funding_source(liability, year) is None
        )
    )


def aggregate_year(snapshot: Snapshot, year: int) -> CashFlowYear:
    """Aggregate every budget line of ``year``."""
    return CashFlowYear(
        year=int(year),
        annual_income=annual_income(snapshot, year),
        annual_expenses=annual_expenses(snapshot, year),
        asset_contributions=asset_contributions(snapshot, year),
        liability_payments=liability_payments(snapshot, year),
    )


def budget_surplus(snapshot: Snapshot, year: int) -> float:
    """Income minus expenses, contributions and payments for ``year``."""
    return aggregate_year(snapshot, year).budget_surplus


def aggregate_series(snapshot: Snapshot, years: Iterable[int]) -> pd.DataFrame:
    """
    Aggregate a sequence of years into a frame indexed by year.

    Returns:
        DataFrame with the CASHFLOW_COLUMNS
    """
    rows = [aggregate_year(snapshot, int(y)).as_dict() for y in years]
    frame = pd.DataFrame(rows, columns=["year", *CASHFLOW_COLUMNS])
    return frame.set_index("year")
