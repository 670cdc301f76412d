"""
Compound-growth asset valuation strategy.
"""

from __future__ import annotations

import numpy as np

from networthlab.core.context import ProjectionContext
from networthlab.core.entities import Asset
from networthlab.core.events import Event
from networthlab.core.interfaces import IValuationStrategy
from networthlab.core.results import EntityOutput
from networthlab.core.utils import active_mask, annuity_future_value, growth_factor


class ValuationCompound(IValuationStrategy):
    """
    Compound-growth valuation for every non-liquid asset type.

    The balance after ``t = year - start_year`` years is the principal
    compounded at the annual growth rate plus the future value of the annual
    contributions (monthly_contribution * 12) paid in so far:

        value(t) = P * (1 + r)^t + C * ((1 + r)^t - 1) / r      (r != 0)
        value(t) = P + C * t                                   (r == 0)

    Maturity:
        When ``end_year`` is set, the asset is displayed up to and including
        its end year. Its value at ``end_year`` is returned to the liquid
        account as a one-time lump sum booked in ``end_year + 1`` (or in the
        first projected year if it matured before the projection started),
        and the asset disappears from total assets from then on.
    """

    def value_at(self, asset: Asset, year: int) -> float:
        """Closed-form balance in ``year``; 0 before the asset starts."""
        if year < asset.start_year:
            return 0.0
        t = year - asset.start_year
        return float(
            asset.value * growth_factor(asset.annual_growth_rate, t)
            + annuity_future_value(t, asset.annual_growth_rate, asset.annual_contribution)
        )

    def maturity_value(self, asset: Asset) -> float | None:
        """Value converted into cash at maturity, or None if it never matures."""
        if asset.end_year is None or asset.end_year < asset.start_year:
            return None
        return self.value_at(asset, asset.end_year)

    def simulate(self, asset: Asset, ctx: ProjectionContext) -> EntityOutput:
        """
        Project the asset over the projection years.

        Args:
            asset: The asset record
            ctx: The projection context

        Returns:
            EntityOutput with balance (0 where not displayed), contributions
            as outflow, and the maturity lump sum
        """
        years = ctx.years
        T = len(years)
        active = active_mask(years, asset.start_year, asset.end_year)

        t = np.clip(years - asset.start_year, 0, None)
        raw = asset.value * growth_factor(
            asset.annual_growth_rate, t
        ) + annuity_future_value(t, asset.annual_growth_rate, asset.annual_contribution)

        balance = np.where(active, raw, 0.0)
        outflow = np.where(active, asset.annual_contribution, 0.0)
        maturity = np.zeros(T)
        events: list[Event] = []

        lump = self.maturity_value(asset)
        if lump is not None and T:
            booked_year = max(asset.end_year + 1, ctx.start_year)
            if booked_year <= years[-1]:
                idx = int(booked_year - years[0])
                maturity[idx] = lump
                events.append(
                    Event(
                        booked_year,
                        "maturity",
                        f"{asset.name} matured; {lump:,.2f} moved to the liquid account",
                        {"asset_id": asset.id, "end_year": asset.end_year, "value": lump},
                    )
                )

        return EntityOutput(
            active=active,
            balance=balance,
            outflow=outflow,
            maturity=maturity,
            events=events,
        )
