"""
Projection engine for NetWorthLab.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .cashflow import aggregate_series
from .context import ProjectionContext, ProjectionParams
from .entities import Asset
from .events import Event
from .registry import strategy_for
from .results import EntityOutput, ProjectionResults, assemble_totals
from .snapshot import Snapshot

logger = logging.getLogger(__name__)


def project(snapshot: Snapshot, params: ProjectionParams) -> ProjectionResults:
    """
    Project a plan snapshot into a year-by-year net-worth series.

    This is the single entry point of the engine. It is a pure function of
    its arguments: the snapshot is never mutated and no shared state is read,
    so calling it twice with equal inputs yields equal results.

    Steps:
    1. Simulate every non-liquid asset, liability, income, expense and goal
       with the strategy registered for its kind
    2. Debit funded outflows from their source assets
    3. Aggregate the yearly budget (income - expenses - contributions - payments)
    4. Scan the years in order to build the liquid-account balance
    5. Assemble totals and wrap everything in ProjectionResults

    Args:
        snapshot: Immutable bundle of plan records
        params: Start year, horizon, NPV switch and inflation rate

    Returns:
        ProjectionResults with nominal per-entity outputs and (optionally
        discounted) totals

    **Example:**
        ```python
        from networthlab import Income, Expense, Snapshot, ProjectionParams, project

        snapshot = Snapshot(
            incomes=[Income(name="Salary", value=10_000, start_year=2025)],
            expenses=[Expense(name="Living", value=6_000, start_year=2025)],
        )
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=1))
        results.liquid.tolist()
        # [48000.0, 96000.0]
        ```
    """
    ctx = ProjectionContext.create(snapshot, params)
    years = ctx.years
    T = len(years)

    outputs: dict[str, EntityOutput] = {}
    for record in (
        *snapshot.projected_assets(),
        *snapshot.liabilities,
        *snapshot.incomes,
        *snapshot.expenses,
        *snapshot.goals,
    ):
        outputs[record.id] = strategy_for(record).simulate(record, ctx)

    _apply_funding_draws(snapshot, ctx, outputs)

    cashflow = aggregate_series(snapshot, years)
    liquid = _liquid_balance(snapshot, ctx, outputs, cashflow["budget_surplus"].to_numpy())

    nominal = assemble_totals(years, outputs, snapshot, liquid, cashflow)

    logger.debug(
        "Projected %d records over %d years (%s..%s)",
        len(outputs),
        T,
        params.start_year,
        params.end_year,
    )
    return ProjectionResults(
        params=params,
        snapshot=snapshot,
        years=years,
        outputs=outputs,
        nominal_totals=nominal,
    )


def _apply_funding_draws(
    snapshot: Snapshot, ctx: ProjectionContext, outputs: dict[str, EntityOutput]
) -> None:
    """
    Reduce every funding asset by the outflows it pays on behalf of others.

    Draws are taken only in years where the source is active; the cumulative
    draws compound at the source's growth rate, and the source's maturity
    lump shrinks by the compounded draws at its end year.
    """
    years = ctx.years
    T = len(years)

    for source_id in sorted(set(snapshot.funding_sources.values())):
        source = snapshot.get(source_id)
        assert isinstance(source, Asset)
        source_active = np.array([source.is_active(int(y)) for y in years], dtype=bool)

        draws = np.zeros(T)
        for record in snapshot.funded_by(source_id):
            draws += np.where(source_active, outputs[record.id]["outflow"], 0.0)
        if not draws.any():
            continue

        growth = 1.0 + source.annual_growth_rate / 100.0
        reduction = np.zeros(T)
        running = 0.0
        for i in range(T):
            running = running * growth + draws[i]
            reduction[i] = running

        out = outputs[source_id]
        out["balance"] = np.where(out["active"], out["balance"] - reduction, 0.0)

        if source.end_year is not None and years[0] <= source.end_year < years[-1]:
            booked = int(source.end_year + 1 - years[0])
            out["maturity"][booked] -= reduction[booked - 1]

        overdrawn = np.nonzero(out["active"] & (out["balance"] < 0))[0]
        if len(overdrawn):
            year = int(years[overdrawn[0]])
            logger.warning(
                "Asset '%s' is overdrawn in %s by the outflows it funds", source_id, year
            )
            out["events"].append(
                Event(
                    year,
                    "overdrawn",
                    f"{source.name} cannot cover the outflows it funds",
                    {"asset_id": source_id, "balance": float(out["balance"][overdrawn[0]])},
                )
            )


def _liquid_balance(
    snapshot: Snapshot,
    ctx: ProjectionContext,
    outputs: dict[str, EntityOutput],
    surplus: np.ndarray,
) -> np.ndarray:
    """
    Ordered scan of the liquid-account balance.

    liquid[Y] = stored value + sum(surplus[..Y]) + sum(maturity lumps[..Y])
    - sum(goal withdrawals[..Y])
    """
    T = len(ctx.years)
    maturity = np.zeros(T)
    for asset in snapshot.projected_assets():
        maturity += outputs[asset.id].get("maturity", np.zeros(T))
    withdrawals = np.zeros(T)
    for goal in snapshot.goals:
        withdrawals += outputs[goal.id].get("withdrawal", np.zeros(T))

    opening = float(snapshot.liquid_account.value)
    return opening + np.cumsum(surplus + maturity - withdrawals)


@dataclass
class Projection:
    """
    A named projection run: a snapshot together with its parameters.

    Attributes:
        snapshot: The plan records to project
        params: Projection parameters
        name: Optional label used in logs and CLI output
    """

    snapshot: Snapshot
    params: ProjectionParams
    name: str = "projection"

    def run(self) -> ProjectionResults:
        """Run the projection; equivalent to ``project(self.snapshot, self.params)``."""
        logger.info(
            "Running %s from %s for %s years (npv=%s)",
            self.name,
            self.params.start_year,
            self.params.num_periods,
            self.params.show_npv,
        )
        return project(self.snapshot, self.params)
