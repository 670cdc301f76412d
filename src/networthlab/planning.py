"""
Planning views derived from a snapshot.

These helpers build the secondary tables a planner shows next to the
net-worth chart: the goal schedule, the budget breakdown ("money map") of a
single year, and the balance sheet grouped by type. Like the projection they
are pure functions of their inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from networthlab.core.context import ProjectionContext, ProjectionParams
from networthlab.core.kinds import AssetType, GoalType, LiabilityType
from networthlab.core.registry import strategy_for
from networthlab.core.snapshot import Snapshot


def goal_schedule(snapshot: Snapshot, params: ProjectionParams) -> pd.DataFrame:
    """
    Per-year goal totals with a breakdown by goal type.

    Covers one year before ``params.start_year`` through the last goal
    occurrence (or the start year when there are no goals); years without
    goals are zero-filled. Values are present values when ``params.show_npv``
    is set and inflated future values otherwise. Unlike the projection, the
    schedule is not clipped to the projection horizon.

    Returns:
        DataFrame indexed by year with one column per GoalType value and a
        ``total`` column
    """
    ctx = ProjectionContext.create(snapshot, params)
    withdrawal = {g.id: strategy_for(g) for g in snapshot.goals}

    last_year = max(
        (y for g in snapshot.goals for y in g.occurrence_years()),
        default=params.start_year,
    )
    years = range(params.start_year - 1, max(last_year, params.start_year) + 1)
    frame = pd.DataFrame(
        0.0,
        index=pd.Index(list(years), name="year"),
        columns=[t.value for t in GoalType],
    )

    for goal in snapshot.goals:
        for year in goal.occurrence_years():
            if year in frame.index:
                frame.at[year, goal.type.value] += withdrawal[goal.id].withdrawal_in(
                    goal, year, ctx
                )

    frame["total"] = frame.sum(axis=1)
    return frame


@dataclass(frozen=True)
class BudgetBreakdown:
    """
    Flow-diagram payload of one year's budget.

    Nodes are laid out in three columns: income sources (plus a deficit node
    when outflows exceed income), the combined budget, and the outflows (plus
    a surplus node when income exceeds outflows). Every link carries an
    annual amount, so the inflows and outflows of the budget node balance.

    Attributes:
        year: Budget year
        nodes: ``{"id", "name", "group", "value"}`` dicts
        links: ``{"source", "target", "value"}`` dicts, by node index
        surplus: Income minus all budget outflows (negative for a deficit)
    """

    year: int
    nodes: list[dict] = field(default_factory=list)
    links: list[dict] = field(default_factory=list)
    surplus: float = 0.0

    @property
    def label(self) -> str:
        amount = f"{abs(self.surplus):,.0f}"
        if self.surplus > 0:
            return f"Annual Budget Surplus: {amount}"
        if self.surplus < 0:
            return f"Annual Budget Deficit: {amount}"
        return f"Balanced Annual Budget: {amount}"

    def as_dict(self) -> dict:
        return {
            "year": self.year,
            "surplus": self.surplus,
            "label": self.label,
            "nodes": self.nodes,
            "links": self.links,
        }


def budget_breakdown(snapshot: Snapshot, year: int) -> BudgetBreakdown:
    """
    Break the budget of ``year`` into income sources and outflows.

    Only lines active in ``year`` with a positive amount appear. Outflows
    paid from a funding asset instead of the budget are left out.
    """
    incomes = [
        (i.id, i.name, strategy_for(i).amount_in(i, year)) for i in snapshot.incomes
    ]
    outflows = [
        (e.id, e.name, "expense", strategy_for(e).amount_in(e, year))
        for e in snapshot.expenses
    ]
    outflows += [
        (a.id, a.name, "asset", a.annual_contribution)
        for a in snapshot.assets
        if a.is_active(year) and snapshot.funding_source(a, year) is None
    ]
    outflows += [
        (li.id, li.name, "liability", li.annual_payment)
        for li in snapshot.liabilities
        if li.is_paying(year) and snapshot.funding_source(li, year) is None
    ]

    incomes = [row for row in incomes if row[2] > 0]
    outflows = [row for row in outflows if row[3] > 0]
    total_in = sum(amount for *_, amount in incomes)
    total_out = sum(amount for *_, amount in outflows)
    surplus = total_in - total_out

    nodes: list[dict] = []
    links: list[dict] = []

    def add_node(node_id: str, name: str, group: str, value: float) -> int:
        nodes.append({"id": node_id, "name": name, "group": group, "value": value})
        return len(nodes) - 1

    sources = [add_node(i_id, name, "income", amount) for i_id, name, amount in incomes]
    if surplus < 0:
        sources.append(add_node("budget-deficit", "Budget Deficit", "deficit", -surplus))

    budget = add_node("total-budget", "Total Budget", "budget", max(total_in, total_out))
    for src in sources:
        links.append({"source": src, "target": budget, "value": nodes[src]["value"]})

    for o_id, name, group, amount in outflows:
        target = add_node(o_id, name, group, amount)
        links.append({"source": budget, "target": target, "value": amount})
    if surplus > 0:
        target = add_node("budget-surplus", "Budget Surplus", "surplus", surplus)
        links.append({"source": budget, "target": target, "value": surplus})

    return BudgetBreakdown(year=int(year), nodes=nodes, links=links, surplus=surplus)


@dataclass(frozen=True)
class BalanceSheet:
    """Asset and liability values grouped by type, with the resulting net worth."""

    assets: pd.Series
    liabilities: pd.Series

    @property
    def total_assets(self) -> float:
        return float(self.assets.sum())

    @property
    def total_liabilities(self) -> float:
        return float(self.liabilities.sum())

    @property
    def net_worth(self) -> float:
        return self.total_assets - self.total_liabilities

    def as_dict(self) -> dict:
        return {
            "assets": {k: float(v) for k, v in self.assets.items()},
            "liabilities": {k: float(v) for k, v in self.liabilities.items()},
            "total_assets": self.total_assets,
            "total_liabilities": self.total_liabilities,
            "net_worth": self.net_worth,
        }


def balance_sheet(snapshot: Snapshot, year: int | None = None) -> BalanceSheet:
    """
    Group asset and liability values by type.

    Without ``year`` the stated principal values are used, as entered. With
    ``year`` each asset active in that year is valued with its closed-form
    growth and each started liability at its outstanding balance (funding
    draws are not applied). Liabilities are reported as positive amounts.
    """
    assets = pd.Series(0.0, index=[t.value for t in AssetType], name="assets")
    liabilities = pd.Series(
        0.0, index=[t.value for t in LiabilityType], name="liabilities"
    )

    for asset in snapshot.assets:
        if year is None or snapshot.is_liquid(asset):
            value = asset.value
        elif asset.is_active(year):
            value = strategy_for(asset).value_at(asset, year)
        else:
            value = 0.0
        assets[asset.type.value] += value

    for liability in snapshot.liabilities:
        if year is None:
            value = liability.value
        else:
            value = abs(strategy_for(liability).balance_at(liability, year))
        liabilities[liability.type.value] += value

    return BalanceSheet(assets=assets, liabilities=liabilities)
