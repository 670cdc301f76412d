import json

import pytest
import yaml
from networthlab.core.catalog_loader import (
    CatalogError,
    load_plan,
    load_projection_params,
    load_snapshot,
    read_document,
)
from networthlab.core.errors import ConfigError
from networthlab.core.kinds import AssetType, LiabilityType

PLAN = {
    "defaults": {"startYear": 2025},
    "incomes": [{"id": "salary", "name": "Salary", "value": 10000, "annualGrowthRate": 5}],
    "expenses": [{"name": "Living Expenses", "value": "6,000"}],
    "assets": [
        {"id": "current-account", "name": "Current Account", "type": "Cash", "value": 1000},
        {"id": "ra", "name": "RA", "type": "retirement_savings", "value": 5000, "fromAccount": "etf"},
        {"id": "etf", "name": "ETF", "type": "Investment", "value": 20000, "endYear": 2030},
    ],
    "liabilities": [
        {
            "id": "bond",
            "name": "Home Loan",
            "type": "Mortgage",
            "value": 900000,
            "interestRate": 11.5,
            "termInMonths": 240,
            "monthlyPayment": 9600,
        }
    ],
    "goals": [{"name": "Car", "type": "Asset", "value": 300000, "startYear": 2031, "recurrence": 5}],
}


def _write(tmp_path, name, data):
    path = tmp_path / name
    if name.endswith(".json"):
        path.write_text(json.dumps(data), encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestReadDocument:
    def test_mapping_is_copied(self):
        data, label = read_document(PLAN)
        assert label == "<mapping>"
        data["incomes"].clear()
        assert PLAN["incomes"]

    @pytest.mark.parametrize("name", ["plan.yaml", "plan.yml", "plan.json"])
    def test_formats(self, tmp_path, name):
        data, label = read_document(_write(tmp_path, name, PLAN))
        assert label == name
        assert data["incomes"][0]["id"] == "salary"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_document(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "plan.toml"
        path.write_text("x = 1", encoding="utf-8")
        with pytest.raises(CatalogError, match="Unsupported plan format"):
            read_document(path)

    def test_parse_error(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="plan.json: could not parse"):
            read_document(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "plan.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(CatalogError, match="mapping"):
            read_document(path)


class TestLoadSnapshot:
    def test_full_plan(self, tmp_path):
        snapshot = load_snapshot(_write(tmp_path, "plan.yaml", PLAN))

        assert [a.id for a in snapshot.assets] == ["current-account", "ra", "etf"]
        assert snapshot.liquid_account_id == "current-account"
        assert snapshot.assets[1].type is AssetType.RETIREMENT_SAVINGS
        assert snapshot.liabilities[0].type is LiabilityType.MORTGAGE
        assert snapshot.liabilities[0].term_in_months == 240
        assert snapshot.expenses[0].id == "living_expenses"
        assert snapshot.expenses[0].value == 6000.0
        assert snapshot.funding_sources == {"ra": "etf"}

    def test_defaults_merged(self):
        snapshot = load_snapshot(PLAN)
        assert snapshot.incomes[0].start_year == 2025
        assert snapshot.assets[2].start_year == 2025
        # Explicit values win over defaults
        assert snapshot.goals[0].start_year == 2031

    def test_snake_case_keys(self):
        snapshot = load_snapshot(
            {
                "assets": [
                    {"name": "Cash", "type": "Cash", "value": 5, "start_year": 2025, "annual_growth_rate": 2}
                ],
                "liquid_account": "cash",
            }
        )
        assert snapshot.liquid_account_id == "cash"
        assert snapshot.assets[0].annual_growth_rate == 2.0

    def test_empty_document(self):
        snapshot = load_snapshot({})
        assert snapshot.liquid_account.value == 0.0
        assert len(snapshot.assets) == 1

    def test_unknown_field_is_located(self):
        plan = {"incomes": [{"name": "Salary", "value": 1, "startYear": 2025, "colour": "red"}]}
        with pytest.raises(CatalogError, match=r"<mapping>::incomes\[0\]: unknown fields \['colour'\]"):
            load_snapshot(plan)

    def test_missing_required_field(self):
        plan = {"assets": [{"name": "Cash", "value": 1}]}
        with pytest.raises(CatalogError, match="'start_year' is required"):
            load_snapshot(plan)

    def test_bad_enum_is_located(self, tmp_path):
        plan = {
            "defaults": {"startYear": 2025},
            "assets": [
                {"name": "Cash", "type": "Cash", "value": 1},
                {"name": "Boat", "type": "Yacht", "value": 1},
            ],
        }
        with pytest.raises(CatalogError, match=r"plan.yaml::assets\[1\].type"):
            load_snapshot(_write(tmp_path, "plan.yaml", plan))

    @pytest.mark.parametrize("value", [True, "abc", [1]])
    def test_bad_number(self, value):
        plan = {"incomes": [{"name": "Salary", "value": value, "startYear": 2025}]}
        with pytest.raises(CatalogError, match=r"incomes\[0\].value"):
            load_snapshot(plan)

    def test_fractional_year_rejected(self):
        plan = {"incomes": [{"name": "Salary", "value": 1, "startYear": 2025.5}]}
        with pytest.raises(CatalogError, match="whole number"):
            load_snapshot(plan)

    def test_collection_must_be_list(self):
        with pytest.raises(CatalogError, match="<mapping>::goals: expected a list"):
            load_snapshot({"goals": {"name": "Car"}})

    def test_duplicate_ids_across_collections(self):
        plan = {
            "defaults": {"startYear": 2025},
            "incomes": [{"id": "x", "name": "Salary", "value": 1}],
            "expenses": [{"id": "x", "name": "Rent", "value": 1}],
        }
        with pytest.raises(ConfigError, match="<mapping>: Duplicate id 'x'"):
            load_snapshot(plan)

    def test_unknown_liquid_account(self):
        with pytest.raises(ConfigError, match="not an asset id"):
            load_snapshot({"liquid_account": "nope"})


class TestProjectionParams:
    def test_section(self):
        params = load_projection_params(PLAN | {"projection": {"startYear": 2026, "numPeriods": 10, "showNpv": True, "inflationRate": "6.5"}})
        assert params.start_year == 2026
        assert params.end_year == 2036
        assert params.show_npv is True
        assert params.inflation_rate == 6.5

    def test_defaults(self):
        params = load_projection_params({}, start_year=2030)
        assert params.start_year == 2030
        assert params.num_periods == 30
        assert params.show_npv is False
        assert params.inflation_rate == 5.0

    def test_unknown_key(self):
        with pytest.raises(CatalogError, match="unknown keys"):
            load_projection_params({"projection": {"horizon": 3}}, start_year=2025)

    def test_negative_periods(self):
        with pytest.raises(CatalogError, match="num_periods"):
            load_projection_params({"projection": {"numPeriods": -2}}, start_year=2025)

    def test_non_bool_npv(self):
        with pytest.raises(CatalogError, match="show_npv"):
            load_projection_params({"projection": {"showNpv": "yes"}}, start_year=2025)


class TestLoadPlan:
    def test_start_year_from_records(self):
        plan = {k: v for k, v in PLAN.items()}
        snapshot, params = load_plan(plan)
        assert params.start_year == 2025
        assert len(snapshot.goals) == 1

    def test_projection_section_wins(self, tmp_path):
        path = _write(tmp_path, "plan.json", PLAN | {"projection": {"startYear": 2027}})
        _, params = load_plan(path)
        assert params.start_year == 2027
