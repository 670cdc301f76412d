"""
Tests for the compound-interest repayment schedule.
"""

import numpy as np
import pytest
from networthlab.core.context import ProjectionContext, ProjectionParams
from networthlab.core.entities import Liability
from networthlab.core.snapshot import Snapshot
from networthlab.strategies import ScheduleCompoundRepayment


def _loan(**kwargs) -> Liability:
    params = dict(
        id="loan", name="Loan", type="Loan", value=100_000, start_year=2025,
        interest_rate=10, term_in_months=24, monthly_payment=1_000,
    )
    params.update(kwargs)
    return Liability(**params)


def _simulate(liability: Liability, num_periods: int = 3):
    ctx = ProjectionContext.create(
        Snapshot(liabilities=[liability]),
        ProjectionParams(start_year=2025, num_periods=num_periods),
    )
    return ScheduleCompoundRepayment().simulate(liability, ctx)


class TestBalance:
    def test_repayment_then_interest_only(self):
        loan = _loan()
        strategy = ScheduleCompoundRepayment()
        balances = [strategy.balance_at(loan, y) for y in range(2025, 2029)]
        assert balances == pytest.approx([100_000, 98_000, 95_800, 105_380])

    def test_fractional_term(self):
        loan = _loan(interest_rate=0, value=10_000, term_in_months=18, monthly_payment=100)
        # 1.5 years of 1200 repaid by 2027
        assert ScheduleCompoundRepayment().balance_at(loan, 2027) == pytest.approx(8_200)

    def test_zero_before_start(self):
        assert ScheduleCompoundRepayment().balance_at(_loan(), 2024) == 0.0

    def test_no_payment_accrues_interest(self):
        loan = _loan(monthly_payment=0, term_in_months=0)
        assert ScheduleCompoundRepayment().balance_at(loan, 2027) == pytest.approx(121_000)

    def test_rate_below_total_loss_stays_finite(self):
        loan = _loan(interest_rate=-150, term_in_months=18, monthly_payment=100)
        out = _simulate(loan, num_periods=4)
        assert np.isfinite(out["balance"]).all()
        assert out["balance"][2:].tolist() == pytest.approx([0.0, 0.0, 0.0])


class TestSimulate:
    def test_displayed_balance_is_negative(self):
        out = _simulate(_loan())
        assert out["balance"].tolist() == pytest.approx([-100_000, -98_000, -95_800, -105_380])
        assert out["active"].all()

    def test_payment_window(self):
        out = _simulate(_loan(), num_periods=4)
        assert out["outflow"].tolist() == pytest.approx([12_000, 12_000, 12_000, 0, 0])

    def test_term_end_event(self):
        out = _simulate(_loan())
        kinds = [(ev.year, ev.kind) for ev in out["events"]]
        assert kinds == [(2028, "term_end")]

    def test_overpayment_still_shows_as_debt(self):
        loan = _loan(interest_rate=0, value=10_000, term_in_months=24, monthly_payment=1_000)
        out = _simulate(loan)
        assert out["balance"].tolist() == pytest.approx([-10_000, -2_000, -14_000, -14_000])
        overpaid = [ev for ev in out["events"] if ev.kind == "overpaid"]
        assert overpaid[0].year == 2026

    def test_not_started(self):
        out = _simulate(_loan(start_year=2027))
        assert out["active"].tolist() == [False, False, True, True]
        assert out["balance"][:2].tolist() == [0.0, 0.0]
