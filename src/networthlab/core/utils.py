"""
Utility functions for NetWorthLab.

Year indices, activity windows, and the closed-form growth formulas shared by
every strategy. All rates are expressed in percent, as entered by the user.
"""

from __future__ import annotations

import re

import numpy as np

_SLUG_RE = re.compile(r"[^0-9a-z]+")


def slugify_name(name: str) -> str:
    """
    Derive an entity id from its display name.

    "Cash Reserve" -> "cash_reserve", "Car (2019)" -> "car_2019".
    """
    return _SLUG_RE.sub("_", str(name).strip().lower()).strip("_")


def year_range(start_year: int, num_periods: int) -> np.ndarray:
    """
    Generate the projection's year index.

    The range is inclusive of both ends, so ``num_periods`` years are
    projected after the start year and ``num_periods + 1`` rows are produced.

    **Example:**
        ```python
        from networthlab.core.utils import year_range

        year_range(2025, 3)
        # array([2025, 2026, 2027, 2028])
        ```
    """
    return np.arange(int(start_year), int(start_year) + int(num_periods) + 1)


def active_mask(
    years: np.ndarray, start_year: int | None, end_year: int | None
) -> np.ndarray:
    """
    Boolean mask of the years in which a record is active.

    Both bounds are inclusive; ``None`` leaves that side unbounded.

    **Example:**
        ```python
        years = year_range(2025, 10)
        mask = active_mask(years, 2030, 2032)
        years[mask]
        # array([2030, 2031, 2032])
        ```
    """
    years = np.asarray(years)
    mask = np.ones(years.shape, dtype=bool)
    if start_year is not None:
        mask &= years >= start_year
    if end_year is not None:
        mask &= years <= end_year
    return mask


def _rate(rate_pct: float) -> float:
    # Losses stop at -100%.
    return max(float(rate_pct) / 100.0, -1.0)


def growth_factor(rate_pct: float, t):
    """
    Compound growth factor ``(1 + rate/100) ** t`` for scalar or array ``t``.

    Rates below -100% are treated as -100% (everything lost after one year).
    """
    return np.power(1.0 + _rate(rate_pct), t)


def annuity_future_value(t, rate_pct: float, annual_amount: float):
    """
    Future value of ``annual_amount`` paid once per year for ``t`` years.

    Uses the growing-annuity closed form ``C * ((1+r)^t - 1) / r``. A zero rate
    takes the limit ``C * t`` so no division by zero can occur.

    Args:
        t: Elapsed years (scalar or numpy array, may be fractional)
        rate_pct: Annual growth rate in percent
        annual_amount: Amount paid in per year

    Returns:
        Scalar or array with the same shape as ``t``
    """
    r = _rate(rate_pct)
    if r == 0.0:
        return float(annual_amount) * np.asarray(t, dtype=float)
    return float(annual_amount) * (np.power(1.0 + r, t) - 1.0) / r


def discount_factor(inflation_pct: float, elapsed):
    """Present-value multiplier ``1 / (1 + inflation/100) ** elapsed``."""
    return 1.0 / np.power(1.0 + float(inflation_pct) / 100.0, elapsed)
