"""
Goal withdrawal strategy.
"""

from __future__ import annotations

import numpy as np

from networthlab.core.context import ProjectionContext
from networthlab.core.entities import Goal
from networthlab.core.events import Event
from networthlab.core.interfaces import IWithdrawalStrategy
from networthlab.core.results import EntityOutput
from networthlab.core.utils import growth_factor


class FlowGoalWithdrawal(IWithdrawalStrategy):
    """
    Withdraws a goal's value from the liquid account in every occurrence year
    (kind: 'g.withdrawal').

    The goal value is a present-value amount. In nominal mode it is inflated
    to the occurrence year with ``(1 + inflation/100) ** (year - projection_start)``;
    in NPV mode it is withdrawn as-is. Occurrences outside the projection
    range are ignored.
    """

    def withdrawal_in(self, goal: Goal, year: int, ctx: ProjectionContext) -> float:
        if year not in goal.occurrence_years():
            return 0.0
        if ctx.params.show_npv:
            return float(goal.value)
        return float(
            goal.value
            * growth_factor(ctx.params.inflation_rate, year - ctx.start_year)
        )

    def simulate(self, goal: Goal, ctx: ProjectionContext) -> EntityOutput:
        years = ctx.years
        T = len(years)
        active = np.zeros(T, dtype=bool)
        withdrawal = np.zeros(T)
        events: list[Event] = []

        for year in goal.occurrence_years():
            if not T or year < years[0] or year > years[-1]:
                continue
            idx = int(year - years[0])
            active[idx] = True
            withdrawal[idx] = self.withdrawal_in(goal, year, ctx)
            events.append(
                Event(
                    year,
                    "goal",
                    f"{goal.name}: {withdrawal[idx]:,.2f} withdrawn",
                    {"goal_id": goal.id, "type": goal.type.value},
                )
            )

        return EntityOutput(active=active, withdrawal=withdrawal, events=events)
