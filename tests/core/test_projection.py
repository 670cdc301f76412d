"""
Tests for the projection engine: liquid scan, maturity, goals and NPV.
"""

import numpy as np
import pytest
from networthlab.core.context import ProjectionParams
from networthlab.core.entities import Asset, Expense, Goal, Income, Liability
from networthlab.core.errors import ProjectionError
from networthlab.core.projection import Projection, project
from networthlab.core.snapshot import Snapshot


def _liquid(value: float = 0.0) -> Asset:
    return Asset(
        id="current-account", name="Current Account", type="Cash", value=value, start_year=2025
    )


class TestEndToEnd:
    def test_surplus_accumulates_in_liquid_account(self):
        snapshot = Snapshot(
            incomes=[Income(name="Salary", value=10_000, start_year=2025)],
            expenses=[Expense(name="Living", value=6_000, start_year=2025)],
            assets=[_liquid()],
        )
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=1))

        assert results.liquid.tolist() == pytest.approx([48_000, 96_000])
        records = results.records()
        assert [r["date"] for r in records] == [2025, 2026]
        assert records[0]["asset_current-account"] == pytest.approx(48_000)
        assert records[1]["netWorth"] == pytest.approx(96_000)
        assert records[1]["totalAssets"] == pytest.approx(96_000)
        assert records[1]["totalLiabilities"] == 0.0

    def test_default_horizon(self):
        snapshot = Snapshot(assets=[_liquid(1_000)])
        results = project(snapshot, ProjectionParams(start_year=2025))
        assert len(results) == 31
        assert results.years[-1] == 2055
        assert results.net_worth.tolist() == pytest.approx([1_000] * 31)

    def test_deficit_drains_liquid_account(self):
        snapshot = Snapshot(
            expenses=[Expense(name="Rent", value=1_000, start_year=2025)],
            assets=[_liquid(20_000)],
        )
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=2))
        assert results.liquid.tolist() == pytest.approx([8_000, -4_000, -16_000])

    def test_liquid_account_contribution_leaves_budget(self):
        snapshot = Snapshot(
            incomes=[Income(name="Salary", value=1_000, start_year=2025)],
            assets=[
                Asset(
                    id="current-account", name="Current Account", type="Cash",
                    value=0, start_year=2025, monthly_contribution=100,
                )
            ],
        )
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=1))
        assert results.totals["asset_contributions"].tolist() == pytest.approx([1_200, 1_200])
        assert results.liquid.tolist() == pytest.approx([10_800, 21_600])

    def test_negative_periods_rejected(self):
        with pytest.raises(ProjectionError, match="num_periods"):
            ProjectionParams(start_year=2025, num_periods=-1)

    @pytest.mark.parametrize("field, value", [("num_periods", 2.7), ("start_year", 2025.5)])
    def test_fractional_years_rejected(self, field, value):
        kwargs = {"start_year": 2025, "num_periods": 3, field: value}
        with pytest.raises(ProjectionError, match=f"{field}.*whole number"):
            ProjectionParams(**kwargs)

    def test_whole_float_periods_accepted(self):
        params = ProjectionParams(start_year=2025.0, num_periods=3.0)
        assert params.num_periods == 3
        assert params.end_year == 2028

    def test_total_loss_inflation_rejected(self):
        with pytest.raises(ProjectionError, match="inflation_rate"):
            ProjectionParams(start_year=2025, num_periods=3, inflation_rate=-100)

    def test_projection_is_pure(self):
        snapshot = Snapshot(
            incomes=[Income(name="Salary", value=10_000, start_year=2025)],
            assets=[_liquid(), Asset(name="ETF", value=1_000, start_year=2025, annual_growth_rate=8)],
            goals=[Goal(name="Trip", value=5_000, start_year=2026)],
        )
        params = ProjectionParams(start_year=2025, num_periods=5)
        first = project(snapshot, params).records()
        second = Projection(snapshot, params).run().records()
        assert first == second
        assert snapshot.assets[1].value == 1_000


class TestAssets:
    def test_asset_compounds_with_contributions(self):
        etf = Asset(
            id="etf", name="ETF", type="Investment", value=10_000, start_year=2025,
            monthly_contribution=100, annual_growth_rate=10,
        )
        snapshot = Snapshot(assets=[_liquid(), etf])
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=2))
        records = results.records()

        assert records[0]["asset_etf"] == pytest.approx(10_000)
        assert records[1]["asset_etf"] == pytest.approx(11_000 + 1_200)
        assert records[2]["asset_etf"] == pytest.approx(12_100 + 1_200 * 2.1)
        # Contributions come out of the budget
        assert results.liquid.tolist() == pytest.approx([-1_200, -2_400, -3_600])

    def test_asset_not_shown_before_start(self):
        later = Asset(id="later", name="Later", value=500, start_year=2027)
        snapshot = Snapshot(assets=[_liquid(), later])
        records = project(snapshot, ProjectionParams(start_year=2025, num_periods=3)).records()
        assert "asset_later" not in records[0]
        assert "asset_later" not in records[1]
        assert records[2]["asset_later"] == pytest.approx(500)
        assert records[2]["totalAssets"] == pytest.approx(500)

    def test_maturity_conversion_conserves_value(self):
        bond = Asset(
            id="bond", name="Bond", type="Investment", value=100_000, start_year=2025,
            end_year=2027, annual_growth_rate=5,
        )
        snapshot = Snapshot(assets=[_liquid(), bond])
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=5))
        records = results.records()

        assert records[2]["asset_bond"] == pytest.approx(110_250)
        assert "asset_bond" not in records[3]
        assert records[3]["asset_current-account"] == pytest.approx(110_250)
        assert records[2]["netWorth"] == pytest.approx(records[3]["netWorth"])
        assert results.totals.loc[2028, "maturity_proceeds"] == pytest.approx(110_250)
        assert [ev.kind for ev in results.events()] == ["maturity"]

    def test_asset_matured_before_start_paid_in_first_year(self):
        old = Asset(id="old", name="Old Policy", value=1_000, start_year=2020, end_year=2022)
        snapshot = Snapshot(assets=[_liquid(), old])
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=2))
        assert results.liquid.tolist() == pytest.approx([1_000, 1_000, 1_000])

    def test_maturity_after_horizon_not_booked(self):
        bond = Asset(id="bond", name="Bond", value=1_000, start_year=2025, end_year=2030)
        snapshot = Snapshot(assets=[_liquid(), bond])
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=3))
        assert results.totals["maturity_proceeds"].sum() == 0.0


class TestLiabilities:
    def test_liability_balance_and_sign(self):
        loan = Liability(
            id="loan", name="Loan", type="Loan", value=100_000, start_year=2025,
            interest_rate=10, term_in_months=24, monthly_payment=1_000,
        )
        snapshot = Snapshot(assets=[_liquid()], liabilities=[loan])
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=3))
        balances = [r["liability_loan"] for r in results.records()]

        assert balances == pytest.approx([-100_000, -98_000, -95_800, -105_380])
        assert results.totals["total_liabilities"].tolist() == pytest.approx(balances)
        # Payments while start <= year <= start + term / 12
        assert results.totals["liability_payments"].tolist() == pytest.approx(
            [12_000, 12_000, 12_000, 0]
        )

    def test_liability_shown_from_start_year(self):
        loan = Liability(id="loan", name="Loan", value=1_000, start_year=2026)
        snapshot = Snapshot(assets=[_liquid()], liabilities=[loan])
        records = project(snapshot, ProjectionParams(start_year=2025, num_periods=2)).records()
        assert "liability_loan" not in records[0]
        assert records[1]["liability_loan"] == pytest.approx(-1_000)

    def test_zero_rate_liability_repays_linearly(self):
        card = Liability(
            id="card", name="Card", type="Credit Card", value=12_000, start_year=2025,
            term_in_months=12, monthly_payment=1_000,
        )
        snapshot = Snapshot(assets=[_liquid()], liabilities=[card])
        records = project(snapshot, ProjectionParams(start_year=2025, num_periods=2)).records()
        assert [r["liability_card"] for r in records] == pytest.approx([-12_000, 0, 0])


class TestGoals:
    def _snapshot(self) -> Snapshot:
        car = Goal(id="car", name="Car", type="Asset", value=10_000, start_year=2030, recurrence=5, num_occurrences=3)
        return Snapshot(assets=[_liquid()], goals=[car])

    def test_recurring_goal_inflated(self):
        results = project(
            self._snapshot(), ProjectionParams(start_year=2025, num_periods=20, inflation_rate=5)
        )
        records = {r["date"]: r for r in results.records()}
        goal_years = [y for y, r in records.items() if "goal_car" in r]

        assert goal_years == [2030, 2035, 2040]
        assert records[2030]["goal_car"] == pytest.approx(-10_000 * 1.05**5)
        assert records[2040]["goal_car"] == pytest.approx(-10_000 * 1.05**15)
        expected = -(10_000 * (1.05**5 + 1.05**10 + 1.05**15))
        assert records[2045]["asset_current-account"] == pytest.approx(expected)
        # The withdrawal lands in its own year
        assert records[2029]["asset_current-account"] == 0.0
        assert records[2030]["asset_current-account"] == pytest.approx(-10_000 * 1.05**5)

    def test_goal_values_not_discounted_in_npv_mode(self):
        results = project(
            self._snapshot(),
            ProjectionParams(start_year=2025, num_periods=20, show_npv=True, inflation_rate=5),
        )
        records = {r["date"]: r for r in results.records()}
        assert records[2030]["goal_car"] == pytest.approx(-10_000)
        assert records[2035]["goal_car"] == pytest.approx(-10_000)
        assert records[2030]["asset_current-account"] == pytest.approx(-10_000 / 1.05**5)

    def test_occurrences_outside_range_ignored(self):
        results = project(self._snapshot(), ProjectionParams(start_year=2025, num_periods=7))
        assert results.totals["goal_withdrawals"].sum() == pytest.approx(10_000 * 1.05**5)


class TestNPV:
    def _snapshot(self) -> Snapshot:
        return Snapshot(
            incomes=[Income(name="Salary", value=100, start_year=2025)],
            assets=[_liquid(1_000)],
        )

    def test_npv_discounts_every_monetary_field(self):
        params = ProjectionParams(start_year=2025, num_periods=2, show_npv=True, inflation_rate=10)
        results = project(self._snapshot(), params)
        assert results.liquid.tolist() == pytest.approx([2_200, 3_400 / 1.1, 4_600 / 1.21])
        assert results.totals["annual_income"].tolist() == pytest.approx(
            [1_200, 1_200 / 1.1, 1_200 / 1.21]
        )
        assert results.nominal_totals["liquid"].tolist() == pytest.approx([2_200, 3_400, 4_600])

    def test_start_year_unchanged_by_npv(self):
        nominal = project(self._snapshot(), ProjectionParams(start_year=2025, num_periods=4))
        discounted = project(
            self._snapshot(), ProjectionParams(start_year=2025, num_periods=4, show_npv=True)
        )
        assert discounted.records()[0] == nominal.records()[0]
        np.testing.assert_allclose(
            discounted.net_worth.to_numpy(),
            nominal.net_worth.to_numpy() / 1.05 ** np.arange(5),
        )


class TestFunding:
    def test_funded_contribution_drawn_from_source(self):
        savings = Asset(
            id="savings", name="Savings", type="Investment", value=100_000,
            start_year=2025, annual_growth_rate=10,
        )
        ra = Asset(
            id="ra", name="RA", type="Retirement Savings", value=0, start_year=2025,
            monthly_contribution=1_000, from_account="savings",
        )
        snapshot = Snapshot(assets=[_liquid(), savings, ra])
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=1))
        records = results.records()

        assert records[0]["asset_savings"] == pytest.approx(100_000 - 12_000)
        assert records[1]["asset_savings"] == pytest.approx(110_000 - 25_200)
        assert records[1]["asset_ra"] == pytest.approx(12_000)
        assert results.liquid.tolist() == pytest.approx([0, 0])

    def test_funded_source_maturity_reduced(self):
        savings = Asset(
            id="savings", name="Savings", value=50_000, start_year=2025, end_year=2026,
        )
        loan = Liability(
            id="loan", name="Loan", value=10_000, start_year=2025, term_in_months=120,
            monthly_payment=100, from_account="savings",
        )
        snapshot = Snapshot(assets=[_liquid(), savings], liabilities=[loan])
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=3))

        # Two years of payments drawn from savings, then the budget pays
        assert results.totals.loc[2027, "maturity_proceeds"] == pytest.approx(50_000 - 2_400)
        assert results.totals["liability_payments"].tolist() == pytest.approx([0, 0, 1_200, 1_200])
        assert results.liquid.tolist() == pytest.approx([0, 0, 47_600 - 1_200, 47_600 - 2_400])

    def test_overdrawn_source_reported(self):
        savings = Asset(id="savings", name="Savings", value=1_000, start_year=2025)
        ra = Asset(
            id="ra", name="RA", value=0, start_year=2025, monthly_contribution=1_000,
            from_account="savings",
        )
        snapshot = Snapshot(assets=[_liquid(), savings, ra])
        results = project(snapshot, ProjectionParams(start_year=2025, num_periods=1))
        overdrawn = [ev for ev in results.events() if ev.kind == "overdrawn"]
        assert len(overdrawn) == 1
        assert overdrawn[0].year == 2025


class TestSummary:
    def test_summary(self):
        snapshot = Snapshot(
            expenses=[Expense(name="Rent", value=1_000, start_year=2027)],
            incomes=[Income(name="Salary", value=500, start_year=2025)],
            assets=[_liquid()],
        )
        summary = project(snapshot, ProjectionParams(start_year=2025, num_periods=4)).summary()
        # liquid: 6000, 12000, 6000, 0, -6000
        assert summary["start_year"] == 2025
        assert summary["end_year"] == 2029
        assert summary["peak_year"] == 2026
        assert summary["peak_net_worth"] == pytest.approx(12_000)
        assert summary["final_net_worth"] == pytest.approx(-6_000)
        assert summary["min_liquid_year"] == 2029
        assert summary["goal_count"] == 0
