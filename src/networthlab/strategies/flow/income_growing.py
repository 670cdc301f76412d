"""
Growing monthly income flow strategy.
"""

from __future__ import annotations

import numpy as np

from networthlab.core.context import ProjectionContext
from networthlab.core.entities import Expense, Income
from networthlab.core.events import Event
from networthlab.core.interfaces import IFlowStrategy
from networthlab.core.results import EntityOutput
from networthlab.core.utils import active_mask, growth_factor


class FlowIncomeGrowing(IFlowStrategy):
    """
    Monthly income with annual compound growth (kind: 'f.income').

    The annual amount in year Y is ``value * 12 * (1 + growth/100) ** (Y - start_year)``
    while ``start_year <= Y <= end_year`` and zero otherwise. Growth is
    anchored on the flow's own start year, not on the projection start.
    """

    field = "inflow"

    def amount_in(self, flow: Income | Expense, year: int) -> float:
        if not flow.is_active(year):
            return 0.0
        return float(
            flow.value * 12 * growth_factor(flow.annual_growth_rate, year - flow.start_year)
        )

    def simulate(self, flow: Income | Expense, ctx: ProjectionContext) -> EntityOutput:
        years = ctx.years
        active = active_mask(years, flow.start_year, flow.end_year)
        t = np.clip(years - flow.start_year, 0, None)
        amounts = np.where(
            active, flow.value * 12 * growth_factor(flow.annual_growth_rate, t), 0.0
        )

        events: list[Event] = []
        if len(years) and years[0] < flow.start_year <= years[-1]:
            events.append(
                Event(
                    flow.start_year,
                    f"{flow.family}_start",
                    f"{flow.name} starts at {flow.value * 12:,.2f} per year",
                    {"id": flow.id},
                )
            )
        if flow.end_year is not None and years[0] <= flow.end_year < years[-1]:
            events.append(
                Event(
                    flow.end_year + 1,
                    f"{flow.family}_end",
                    f"{flow.name} ended",
                    {"id": flow.id},
                )
            )

        output = EntityOutput(active=active, events=events)
        output[self.field] = amounts
        return output
