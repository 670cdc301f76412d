"""
Context classes for NetWorthLab projections.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from .errors import ProjectionError
from .utils import discount_factor, year_range

if TYPE_CHECKING:
    from .snapshot import Snapshot

DEFAULT_INFLATION_RATE = 5.0
DEFAULT_NUM_PERIODS = 30


@dataclass(frozen=True)
class ProjectionParams:
    """
    Parameters of a single projection run.

    Attributes:
        start_year: First projected year
        num_periods: Years projected after the start year (num_periods + 1 rows)
        show_npv: Discount every monetary field to start-year money
        inflation_rate: Annual inflation in percent, used for discounting and
            for inflating goal values in future-value mode
    """

    start_year: int
    num_periods: int = DEFAULT_NUM_PERIODS
    show_npv: bool = False
    inflation_rate: float = DEFAULT_INFLATION_RATE

    def __post_init__(self) -> None:
        for name in ("start_year", "num_periods"):
            value = getattr(self, name)
            if isinstance(value, bool) or not float(value).is_integer():
                raise ProjectionError(name, value, "must be a whole number")
        if int(self.num_periods) < 0:
            raise ProjectionError(
                "num_periods", self.num_periods, "must be zero or positive"
            )
        if float(self.inflation_rate) <= -100.0:
            raise ProjectionError(
                "inflation_rate", self.inflation_rate, "must be above -100%"
            )
        object.__setattr__(self, "start_year", int(self.start_year))
        object.__setattr__(self, "num_periods", int(self.num_periods))
        object.__setattr__(self, "inflation_rate", float(self.inflation_rate))

    @property
    def end_year(self) -> int:
        return self.start_year + self.num_periods

    def years(self) -> np.ndarray:
        return year_range(self.start_year, self.num_periods)

    def npv_factors(self) -> np.ndarray:
        """Per-year multiplier applied in NPV mode (all ones otherwise)."""
        years = self.years()
        if not self.show_npv:
            return np.ones(len(years))
        return discount_factor(self.inflation_rate, years - self.start_year)


@dataclass
class ProjectionContext:
    """
    Context object passed to all strategies during a projection.

    Attributes:
        years: Array of projected years (int), inclusive of both ends
        params: The projection parameters
        snapshot: The immutable plan snapshot, for cross-references such as
            funding sources
    """

    years: np.ndarray
    params: ProjectionParams
    snapshot: Snapshot

    @classmethod
    def create(cls, snapshot: Snapshot, params: ProjectionParams) -> ProjectionContext:
        return cls(years=params.years(), params=params, snapshot=snapshot)

    @property
    def start_year(self) -> int:
        return self.params.start_year
