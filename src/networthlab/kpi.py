"""
KPI calculation utilities for net-worth projections.

This module provides standalone functions for computing key performance indicators
from the year-indexed totals frame of a projection (``ProjectionResults.totals``).
All functions return pandas Series or scalars and leave the input untouched.
"""

from __future__ import annotations

import numpy as np
import pandas as pd


def savings_rate(
    df: pd.DataFrame,
    income_col: str = "annual_income",
    surplus_col: str = "budget_surplus",
) -> pd.Series:
    """
    Calculate the savings rate per year.

    Savings rate = budget_surplus / annual_income

    Args:
        df: Totals frame of a projection
        income_col: Column name for income
        surplus_col: Column name for the budget surplus

    Returns:
        Series with savings rate (NaN where income <= 0)
    """
    income = df[income_col]
    surplus = df[surplus_col]

    rate = np.where(
        income > 0,
        surplus / income.where(income > 0, 1.0),
        np.nan,
    )

    return pd.Series(rate, index=df.index, name="savings_rate")


def liquidity_runway(
    df: pd.DataFrame,
    liquid_col: str = "liquid",
    expenses_col: str = "annual_expenses",
) -> pd.Series:
    """
    Calculate liquidity runway in years.

    Liquidity runway = liquid balance / annual expenses

    Returns:
        Series with runway in years (inf where there are no expenses)
    """
    liquid = df[liquid_col]
    expenses = df[expenses_col]

    runway = np.where(
        expenses > 0,
        liquid / expenses.where(expenses > 0, 1.0),
        np.inf,  # Infinite runway if nothing is spent
    )

    return pd.Series(runway, index=df.index, name="liquidity_runway_years")


def debt_to_assets(
    df: pd.DataFrame,
    assets_col: str = "total_assets",
    liabilities_col: str = "total_liabilities",
) -> pd.Series:
    """
    Calculate the debt-to-assets ratio.

    Liabilities are stored as negative balances; the ratio is positive.

    Returns:
        Series with the ratio (NaN where total assets <= 0)
    """
    assets = df[assets_col]
    debt = -df[liabilities_col]

    ratio = np.where(assets > 0, debt / assets.where(assets > 0, 1.0), np.nan)
    return pd.Series(ratio, index=df.index, name="debt_to_assets")


def max_drawdown(series_or_df: pd.Series | pd.DataFrame) -> pd.Series:
    """
    Calculate maximum drawdown from peak.

    For a Series, returns the maximum drawdown.
    For a DataFrame, returns maximum drawdown per column.
    Drawdowns are relative to the running peak and only measured while the
    peak is positive.

    Args:
        series_or_df: Series or DataFrame with values to analyze

    Returns:
        Series with maximum drawdown values (<= 0)
    """
    if isinstance(series_or_df, pd.Series):
        return pd.Series(
            [_drawdown(series_or_df)],
            index=[series_or_df.name or "value"],
            name="max_drawdown",
        )

    results = {}
    for col in series_or_df.columns:
        if pd.api.types.is_numeric_dtype(series_or_df[col]):
            results[col] = _drawdown(series_or_df[col])
        else:
            results[col] = np.nan

    return pd.Series(results, name="max_drawdown")


def _drawdown(series: pd.Series) -> float:
    running_max = series.expanding().max()
    drawdown = (series - running_max) / running_max.where(running_max > 0)
    worst = drawdown.min()
    return 0.0 if pd.isna(worst) else float(worst)


def breakeven_year(
    scenario_df: pd.DataFrame,
    baseline_df: pd.DataFrame,
    net_worth_col: str = "net_worth",
) -> int | None:
    """
    Find the first year in which a scenario's net worth matches or beats a baseline.

    Both frames are aligned on their year index; years present in only one
    of them are ignored.

    Returns:
        The breakeven year, or None if the scenario never catches up
    """
    merged = pd.concat(
        [
            scenario_df[net_worth_col].rename("scenario"),
            baseline_df[net_worth_col].rename("baseline"),
        ],
        axis=1,
        join="inner",
    )
    if merged.empty:
        return None

    ahead = merged["scenario"] - merged["baseline"] >= 0
    if not ahead.any():
        return None
    return int(merged.index[np.where(ahead)[0][0]])
