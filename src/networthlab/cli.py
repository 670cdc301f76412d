"""
Command-line interface for NetWorthLab.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from networthlab import __version__
from networthlab.core.catalog_loader import CatalogError, load_plan
from networthlab.core.errors import ConfigError, ProjectionError
from networthlab.core.projection import Projection
from networthlab.retirement import RetirementInputs, drawdown_table, required_capital


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy scalars and arrays and pandas frames."""

    def default(self, obj):
        import numpy as np
        import pandas as pd

        if isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, pd.DataFrame):
            return obj.reset_index().to_dict("records")
        elif isinstance(obj, pd.Series):
            return obj.to_dict()
        return super().default(obj)


def _dump(data, path: str | None = None) -> None:
    """Write data as JSON to ``path``, or to stdout when no path is given."""
    if path:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, cls=NumpyEncoder)
        return
    json.dump(data, sys.stdout, indent=2, cls=NumpyEncoder)
    sys.stdout.write("\n")


EXAMPLE_PLAN = {
    "defaults": {"startYear": 2025},
    "projection": {"startYear": 2025, "numPeriods": 30, "showNpv": False, "inflationRate": 5},
    "incomes": [
        {"id": "salary", "name": "Salary", "value": 45000, "annualGrowthRate": 6},
    ],
    "expenses": [
        {"id": "living", "name": "Living Expenses", "value": 18000, "annualGrowthRate": 5},
        {"id": "school", "name": "School Fees", "value": 4000, "annualGrowthRate": 7, "endYear": 2036},
    ],
    "assets": [
        {"id": "current-account", "name": "Current Account", "type": "Cash", "value": 25000},
        {
            "id": "emergency-fund",
            "name": "Emergency Fund",
            "type": "Cash",
            "value": 60000,
            "monthlyContribution": 1000,
            "annualGrowthRate": 7,
            "endYear": 2029,
        },
        {
            "id": "house",
            "name": "House",
            "type": "Fixed Appreciating",
            "value": 2500000,
            "annualGrowthRate": 4,
        },
        {
            "id": "retirement-annuity",
            "name": "Retirement Annuity",
            "type": "Retirement Savings",
            "value": 800000,
            "monthlyContribution": 5000,
            "annualGrowthRate": 9,
        },
    ],
    "liabilities": [
        {
            "id": "home-loan",
            "name": "Home Loan",
            "type": "Mortgage",
            "value": 1800000,
            "interestRate": 11.75,
            "termInMonths": 240,
            "monthlyPayment": 19500,
        },
        {
            "id": "car-loan",
            "name": "Car Loan",
            "type": "Loan",
            "value": 250000,
            "interestRate": 12,
            "termInMonths": 60,
            "monthlyPayment": 5600,
        },
    ],
    "goals": [
        {"id": "new-car", "name": "New Car", "type": "Asset", "value": 400000, "startYear": 2031, "recurrence": 6, "numOccurrences": 3},
        {"id": "overseas-trip", "name": "Overseas Trip", "type": "Expense", "value": 80000, "startYear": 2027, "recurrence": 3, "numOccurrences": 5},
    ],
}


def cmd_example(_) -> int:
    """Print a working plan document."""
    _dump(EXAMPLE_PLAN)
    return 0


def cmd_project(args) -> int:
    """Project a plan document and export the results as JSON."""
    try:
        snapshot, params = load_plan(args.input)

        overrides = {}
        if args.start_year is not None:
            overrides["start_year"] = args.start_year
        if args.periods is not None:
            overrides["num_periods"] = args.periods
        if args.inflation is not None:
            overrides["inflation_rate"] = args.inflation
        if args.npv:
            overrides["show_npv"] = True
        params = replace(params, **overrides)

        results = Projection(snapshot, params, name=args.input).run()

        if args.format == "records":
            payload = results.records()
        elif args.format == "totals":
            payload = results.totals
        else:
            payload = results.summary()
            payload["events"] = [ev._asdict() for ev in results.events()]
        _dump(payload, args.output)

        if args.output:
            print(f"Results saved to {args.output}")
        return 0

    except (CatalogError, ConfigError, ProjectionError, FileNotFoundError) as e:
        print(f"Error projecting plan: {e}", file=sys.stderr)
        return 1


def cmd_validate(args) -> int:
    """Validate a plan document."""
    try:
        snapshot, params = load_plan(args.input)
    except (CatalogError, ConfigError, ProjectionError, FileNotFoundError) as e:
        if args.format == "json":
            _dump({"is_valid": False, "exit_code": 1, "error": str(e)})
        else:
            print(f"Validation failed: {e}", file=sys.stderr)
        return 1

    report = {
        "is_valid": True,
        "exit_code": 0,
        "counts": {
            "incomes": len(snapshot.incomes),
            "expenses": len(snapshot.expenses),
            "assets": len(snapshot.assets),
            "liabilities": len(snapshot.liabilities),
            "goals": len(snapshot.goals),
        },
        "liquid_account": snapshot.liquid_account_id,
        "funding": dict(snapshot.funding_sources),
        "projection": {
            "start_year": params.start_year,
            "end_year": params.end_year,
            "show_npv": params.show_npv,
            "inflation_rate": params.inflation_rate,
        },
    }
    if args.format == "json":
        _dump(report)
    else:
        counts = ", ".join(f"{n} {k}" for k, n in report["counts"].items())
        print(f"Plan is valid: {counts}")
        print(f"  Liquid account: {snapshot.liquid_account_id}")
        for record_id, source_id in snapshot.funding_sources.items():
            print(f"  {record_id} funded from {source_id}")
        print(f"  Projection: {params.start_year}..{params.end_year}")
    return 0


def cmd_retirement(args) -> int:
    """Compute the capital required for a living annuity."""
    try:
        inputs = RetirementInputs(
            current_age=args.current_age,
            retirement_age=args.retirement_age,
            num_years_required=args.years,
            monthly_withdrawal=args.monthly_withdrawal,
            interest_rate=args.interest_rate,
            inflation_rate=args.inflation_rate,
            lumpsum_remaining=args.lumpsum,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    payload = required_capital(inputs).as_dict()
    if args.table:
        payload["drawdown"] = drawdown_table(inputs)
    _dump(payload)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="networth", description="NetWorthLab - Net-worth projection engine"
    )

    # Version argument
    parser.add_argument(
        "--version", action="version", version=f"NetWorthLab {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log progress to stderr"
    )

    subparsers = parser.add_subparsers(
        dest="cmd", required=True, help="Available commands"
    )

    # Example command
    example_parser = subparsers.add_parser(
        "example", help="Print a working plan document (JSON)"
    )
    example_parser.set_defaults(func=cmd_example)

    # Project command
    project_parser = subparsers.add_parser(
        "project", help="Project a plan document and export JSON results"
    )
    project_parser.add_argument(
        "-i", "--input", required=True, help="Input plan file (YAML or JSON)"
    )
    project_parser.add_argument(
        "-o", "--output", help="Output JSON file (default: stdout)"
    )
    project_parser.add_argument(
        "--start-year", type=int, help="First projected year"
    )
    project_parser.add_argument(
        "--periods", type=int, help="Number of years projected after the start year"
    )
    project_parser.add_argument(
        "--inflation", type=float, help="Annual inflation rate in percent"
    )
    project_parser.add_argument(
        "--npv", action="store_true", help="Discount results to start-year money"
    )
    project_parser.add_argument(
        "--format",
        choices=["summary", "records", "totals"],
        default="summary",
        help="Output shape (default: summary)",
    )
    project_parser.set_defaults(func=cmd_project)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a plan document")
    validate_parser.add_argument(
        "-i", "--input", required=True, help="Input plan file (YAML or JSON)"
    )
    validate_parser.add_argument(
        "--format", choices=["human", "json"], default="human", help="Output format"
    )
    validate_parser.set_defaults(func=cmd_validate)

    # Retirement command
    defaults = RetirementInputs()
    retirement_parser = subparsers.add_parser(
        "retirement", help="Capital required at retirement for a living annuity"
    )
    retirement_parser.add_argument("--current-age", type=int, default=defaults.current_age)
    retirement_parser.add_argument(
        "--retirement-age", type=int, default=defaults.retirement_age
    )
    retirement_parser.add_argument(
        "--years", type=int, default=defaults.num_years_required,
        help="Number of years the annuity must pay out",
    )
    retirement_parser.add_argument(
        "--monthly-withdrawal", type=float, default=defaults.monthly_withdrawal
    )
    retirement_parser.add_argument(
        "--interest-rate", type=float, default=defaults.interest_rate
    )
    retirement_parser.add_argument(
        "--inflation-rate", type=float, default=defaults.inflation_rate
    )
    retirement_parser.add_argument(
        "--lumpsum", type=float, default=defaults.lumpsum_remaining,
        help="Capital to be left over at the end",
    )
    retirement_parser.add_argument(
        "--table", action="store_true", help="Include the drawdown table"
    )
    retirement_parser.set_defaults(func=cmd_retirement)

    # Parse arguments and execute
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
