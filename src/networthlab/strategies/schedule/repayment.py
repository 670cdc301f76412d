"""
Compound-interest liability schedule with fixed repayments.
"""

from __future__ import annotations

import numpy as np

from networthlab.core.context import ProjectionContext
from networthlab.core.entities import Liability
from networthlab.core.events import Event
from networthlab.core.interfaces import IScheduleStrategy
from networthlab.core.results import EntityOutput
from networthlab.core.utils import annuity_future_value, growth_factor


class ScheduleCompoundRepayment(IScheduleStrategy):
    """
    Liability schedule for every liability type (Mortgage, Loan, Credit Card, Other).

    The principal accrues interest annually while fixed annual repayments
    (monthly_payment * 12) are made for ``term_in_months / 12`` years:

        tp = min(t, term_years)
        balance(t) = P * (1 + i)^t - R * ((1 + i)^tp - 1) / i * (1 + i)^(t - tp)

    with the ``R * tp`` limit for a zero rate. After the term no further
    payments are made but interest keeps accruing on what remains.

    Note:
        The displayed balance is always ``-|balance|``. Over-repayment that
        would drive the raw balance below zero still shows as a debt.
    """

    def balance_at(self, liability: Liability, year: int) -> float:
        """Raw outstanding balance in ``year``; 0 before the liability starts."""
        if year < liability.start_year:
            return 0.0
        return float(self._raw_balance(liability, np.asarray(year - liability.start_year)))

    def _raw_balance(self, liability: Liability, t: np.ndarray) -> np.ndarray:
        rate = liability.interest_rate
        tp = np.minimum(t, liability.term_years)
        repaid = annuity_future_value(tp, rate, liability.annual_payment)
        return liability.value * growth_factor(rate, t) - repaid * growth_factor(
            rate, t - tp
        )

    def simulate(self, liability: Liability, ctx: ProjectionContext) -> EntityOutput:
        """
        Project the liability over the projection years.

        Returns:
            EntityOutput with the sign-normalised balance and the payments
            made from the budget (or funding account) as outflow
        """
        years = ctx.years
        active = years >= liability.start_year
        paying = active & (years <= liability.payment_end_year)

        t = np.clip(years - liability.start_year, 0, None).astype(float)
        raw = self._raw_balance(liability, t)

        balance = np.where(active, -np.abs(raw), 0.0)
        outflow = np.where(paying, liability.annual_payment, 0.0)

        events: list[Event] = []
        if liability.term_in_months > 0:
            after_term = np.where(active & ~paying)[0]
            if len(after_term) and liability.payment_end_year >= years[0]:
                idx = int(after_term[0])
                events.append(
                    Event(
                        int(years[idx]),
                        "term_end",
                        f"{liability.name}: term ended, {abs(raw[idx]):,.2f} outstanding",
                        {"liability_id": liability.id, "balance": float(raw[idx])},
                    )
                )
        overpaid = np.where(active & (raw < 0))[0]
        if len(overpaid):
            idx = int(overpaid[0])
            events.append(
                Event(
                    int(years[idx]),
                    "overpaid",
                    f"{liability.name}: repayments exceed the balance",
                    {"liability_id": liability.id, "balance": float(raw[idx])},
                )
            )

        return EntityOutput(
            active=active,
            balance=balance,
            outflow=outflow,
            events=events,
        )
