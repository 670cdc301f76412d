"""
Results and output structures for NetWorthLab.

Holds the per-entity output contract shared by all strategies, the
net-worth assembler, the NPV normaliser, and the ``ProjectionResults`` view
that turns a projection into chart-ready records.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NotRequired, TypedDict

import numpy as np
import pandas as pd

from .events import Event

if TYPE_CHECKING:
    from .context import ProjectionParams
    from .snapshot import Snapshot

GOAL_PREFIX = "goal"

MONETARY_COLUMNS = [
    "annual_income",
    "annual_expenses",
    "asset_contributions",
    "liability_payments",
    "budget_surplus",
    "maturity_proceeds",
    "goal_withdrawals",
    "liquid",
    "total_assets",
    "total_liabilities",
    "net_worth",
]


class EntityOutput(TypedDict):
    """
    Standard output structure for every entity strategy.

    Attributes:
        active: Years in which the entity is displayed (asset started and not
            matured, liability started, goal occurring, flow active)
        balance: Yearly balance; >= 0 for assets, <= 0 for liabilities
        inflow: Yearly amount added to the budget (incomes)
        outflow: Yearly amount taken from the budget (expenses, contributions,
            liability payments)
        maturity: Lump sum an asset returns to the liquid account, booked in
            the year it is received
        withdrawal: Yearly goal withdrawal from the liquid account (>= 0)
        events: Year-stamped events describing key occurrences

    Note:
        All arrays share the projection's length. Values are nominal; NPV
        discounting happens only at assembly time.
    """

    active: np.ndarray
    balance: NotRequired[np.ndarray]
    inflow: NotRequired[np.ndarray]
    outflow: NotRequired[np.ndarray]
    maturity: NotRequired[np.ndarray]
    withdrawal: NotRequired[np.ndarray]
    events: list[Event]


def _sum_field(
    outputs: dict[str, EntityOutput], ids: list[str], key: str, length: int
) -> np.ndarray:
    total = np.zeros(length)
    for entity_id in ids:
        arr = outputs[entity_id].get(key)
        if arr is not None:
            total += arr
    return total


def assemble_totals(
    years: np.ndarray,
    outputs: dict[str, EntityOutput],
    snapshot: Snapshot,
    liquid: np.ndarray,
    cashflow: pd.DataFrame,
) -> pd.DataFrame:
    """
    Combine per-entity balances into the nominal net-worth frame.

    - total_assets = liquid + sum of displayed non-liquid asset balances
    - total_liabilities = sum of liability balances (already <= 0)
    - net_worth = total_assets + total_liabilities

    Args:
        years: Projection year index
        outputs: Per-entity strategy outputs keyed by id
        snapshot: The projected snapshot (for family membership)
        liquid: Liquid-account balance per year
        cashflow: Aggregated budget frame indexed by year

    Returns:
        DataFrame indexed by year with the MONETARY_COLUMNS
    """
    T = len(years)
    asset_ids = [a.id for a in snapshot.projected_assets()]
    liability_ids = [li.id for li in snapshot.liabilities]
    goal_ids = [g.id for g in snapshot.goals]

    total_assets = liquid + _sum_field(outputs, asset_ids, "balance", T)
    total_liabilities = _sum_field(outputs, liability_ids, "balance", T)

    frame = cashflow.copy()
    frame["maturity_proceeds"] = _sum_field(outputs, asset_ids, "maturity", T)
    frame["goal_withdrawals"] = _sum_field(outputs, goal_ids, "withdrawal", T)
    frame["liquid"] = liquid
    frame["total_assets"] = total_assets
    frame["total_liabilities"] = total_liabilities
    frame["net_worth"] = total_assets + total_liabilities
    frame.index.name = "year"
    return frame[MONETARY_COLUMNS]


def apply_npv(frame: pd.DataFrame, params: ProjectionParams) -> pd.DataFrame:
    """
    Discount a year-indexed frame to start-year money.

    Every column is multiplied by ``1 / (1 + inflation/100) ** (Y - start)``
    except goal columns, whose values were already resolved to present or
    future value when the withdrawal was computed. With ``show_npv`` off
    the frame is returned unchanged (as a copy).
    """
    out = frame.copy()
    if not params.show_npv:
        return out
    factors = pd.Series(params.npv_factors(), index=params.years())
    factors = factors.reindex(out.index)
    for col in out.columns:
        if str(col).startswith(GOAL_PREFIX):
            continue
        out[col] = out[col] * factors
    return out


class ProjectionResults:
    """
    Outcome of a projection, with chart-ready and tabular views.

    The nominal per-entity outputs are kept untouched; NPV discounting is
    applied when a view is built.

    Attributes:
        params: The projection parameters
        snapshot: The projected snapshot
        years: Projection year index
        outputs: Per-entity nominal outputs keyed by id
        totals: Year-indexed frame of budget, liquid and net-worth columns,
            already discounted when params.show_npv is set
    """

    def __init__(
        self,
        params: ProjectionParams,
        snapshot: Snapshot,
        years: np.ndarray,
        outputs: dict[str, EntityOutput],
        nominal_totals: pd.DataFrame,
    ):
        self.params = params
        self.snapshot = snapshot
        self.years = years
        self.outputs = outputs
        self._nominal = nominal_totals
        self.totals = apply_npv(nominal_totals, params)

    def __len__(self) -> int:
        return len(self.years)

    @property
    def nominal_totals(self) -> pd.DataFrame:
        return self._nominal.copy()

    @property
    def net_worth(self) -> pd.Series:
        return self.totals["net_worth"]

    @property
    def liquid(self) -> pd.Series:
        return self.totals["liquid"]

    def entity_frame(self) -> pd.DataFrame:
        """
        Per-entity series in chart column names, NaN where a field is absent.

        Columns: ``asset_<id>`` (liquid account first), ``liability_<id>``,
        ``goal_<id>`` (negative withdrawals).
        """
        factors = self.params.npv_factors()
        liquid_id = self.snapshot.liquid_account_id
        columns: dict[str, np.ndarray] = {
            f"asset_{liquid_id}": self._nominal["liquid"].to_numpy() * factors
        }

        for asset in self.snapshot.projected_assets():
            out = self.outputs[asset.id]
            columns[f"asset_{asset.id}"] = np.where(
                out["active"], out["balance"] * factors, np.nan
            )
        for liability in self.snapshot.liabilities:
            out = self.outputs[liability.id]
            columns[f"liability_{liability.id}"] = np.where(
                out["active"], out["balance"] * factors, np.nan
            )
        for goal in self.snapshot.goals:
            out = self.outputs[goal.id]
            columns[f"{GOAL_PREFIX}_{goal.id}"] = np.where(
                out["active"], -out["withdrawal"], np.nan
            )

        frame = pd.DataFrame(columns, index=pd.Index(self.years, name="year"))
        return frame

    def records(self) -> list[dict[str, float | int]]:
        """
        Ordered per-year records for a charting layer.

        Each record maps ``date`` to the year and ``netWorth``,
        ``totalAssets``, ``totalLiabilities``, ``asset_<id>``,
        ``liability_<id>`` and ``goal_<id>`` to numbers. Entity fields are
        sparse: they appear only in the years the entity is displayed.
        """
        entities = self.entity_frame()
        rows: list[dict[str, float | int]] = []
        for year in self.years:
            y = int(year)
            row: dict[str, float | int] = {"date": y}
            for col, value in entities.loc[y].items():
                if not pd.isna(value):
                    row[col] = float(value)
            row["totalAssets"] = float(self.totals.at[y, "total_assets"])
            row["totalLiabilities"] = float(self.totals.at[y, "total_liabilities"])
            row["netWorth"] = float(self.totals.at[y, "net_worth"])
            rows.append(row)
        return rows

    def events(self) -> list[Event]:
        """All entity events, ordered by year."""
        collected = [ev for out in self.outputs.values() for ev in out["events"]]
        return sorted(collected, key=lambda ev: ev.year)

    def summary(self) -> dict:
        """Lightweight summary for API/CLI usage."""
        net_worth = self.totals["net_worth"]
        liquid = self.totals["liquid"]
        return {
            "start_year": self.params.start_year,
            "end_year": self.params.end_year,
            "show_npv": self.params.show_npv,
            "inflation_rate": self.params.inflation_rate,
            "final_net_worth": float(net_worth.iloc[-1]),
            "peak_net_worth": float(net_worth.max()),
            "peak_year": int(net_worth.idxmax()),
            "min_liquid": float(liquid.min()),
            "min_liquid_year": int(liquid.idxmin()),
            "goal_count": len(self.snapshot.goals),
        }
