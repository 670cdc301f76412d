"""
Entity records for NetWorthLab financial plans.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import ClassVar

from .errors import ConfigError
from .kinds import AssetType, GoalType, K, LiabilityType, coerce_enum
from .utils import slugify_name


@dataclass(frozen=True, kw_only=True)
class PlanRecord:
    """
    Base class for every record of a financial plan.

    Records are immutable value objects supplied by an external store. The
    engine reads them and never creates, edits or deletes them.

    Attributes:
        name: Human-readable name shown in tables and chart legends
        id: Opaque identifier, unique across the plan
        description: Free-form note, not used by the engine
        family: Record family ('income', 'expense', 'asset', 'liability', 'goal')

    Note:
        When an id is not provided it is derived from the name by lowercasing
        and replacing non-alphanumeric runs with underscores
        (e.g. "Cash Reserve" -> "cash_reserve").
    """

    family: ClassVar[str] = ""

    name: str
    id: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            if not self.name:
                raise ConfigError(
                    f"{type(self).__name__} must define either an id or a name"
                )
            normalized = slugify_name(self.name)
            if not normalized:
                raise ConfigError(
                    f"{type(self).__name__} name '{self.name}' cannot be converted into a valid id"
                )
            object.__setattr__(self, "id", normalized)

    @property
    def kind(self) -> str:
        """Discriminator used to look up the record's strategy."""
        raise NotImplementedError


@dataclass(frozen=True, kw_only=True)
class _GrowingFlow(PlanRecord):
    """A monthly amount that is active for a window of years and grows annually."""

    value: float
    start_year: int
    end_year: int | None = None
    annual_growth_rate: float = 0.0

    def is_active(self, year: int) -> bool:
        """Active iff start_year <= year <= end_year (end_year None = unbounded)."""
        return self.start_year <= year and (self.end_year is None or year <= self.end_year)


@dataclass(frozen=True, kw_only=True)
class Income(_GrowingFlow):
    """
    A recurring income stream (salary, rental income, pension).

    Examples:
        Salary: Income(name="Salary", value=45_000, start_year=2025, annual_growth_rate=6)
    """

    family: ClassVar[str] = K.FAMILY_INCOME

    @property
    def kind(self) -> str:
        return K.F_INCOME


@dataclass(frozen=True, kw_only=True)
class Expense(_GrowingFlow):
    """A recurring expense (rent, groceries, school fees)."""

    family: ClassVar[str] = K.FAMILY_EXPENSE

    @property
    def kind(self) -> str:
        return K.F_EXPENSE


@dataclass(frozen=True, kw_only=True)
class Asset(PlanRecord):
    """
    An asset that compounds at its growth rate and receives monthly contributions.

    Attributes:
        type: Asset category (Cash, Investment, ...)
        value: Principal value at start_year
        start_year: First year the asset exists
        end_year: Maturity year; the year after it the compounded value is
            converted into cash (None = never matures)
        monthly_contribution: Amount paid in every month while active
        annual_growth_rate: Annual growth rate in percent
        from_account: Optional id of the asset funding the contributions
    """

    family: ClassVar[str] = K.FAMILY_ASSET

    type: AssetType = AssetType.OTHER
    value: float
    start_year: int
    end_year: int | None = None
    monthly_contribution: float = 0.0
    annual_growth_rate: float = 0.0
    from_account: str | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "type", coerce_enum(AssetType, self.type))

    @property
    def kind(self) -> str:
        return self.type.value

    def is_active(self, year: int) -> bool:
        """Started and not yet matured."""
        return self.start_year <= year and (self.end_year is None or year <= self.end_year)

    @property
    def annual_contribution(self) -> float:
        return self.monthly_contribution * 12


@dataclass(frozen=True, kw_only=True)
class Liability(PlanRecord):
    """
    A debt that accrues interest and is repaid by a fixed monthly payment.

    Payments stop once term_in_months has elapsed; interest keeps accruing on
    whatever balance remains.
    """

    family: ClassVar[str] = K.FAMILY_LIABILITY

    type: LiabilityType = LiabilityType.OTHER
    value: float
    start_year: int
    interest_rate: float = 0.0
    term_in_months: float = 0
    monthly_payment: float = 0.0
    from_account: str | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "type", coerce_enum(LiabilityType, self.type))

    @property
    def kind(self) -> str:
        return self.type.value

    @property
    def annual_payment(self) -> float:
        return self.monthly_payment * 12

    @property
    def term_years(self) -> float:
        return self.term_in_months / 12

    @property
    def payment_end_year(self) -> float:
        """Last (possibly fractional) year in which payments are still made."""
        return self.start_year + self.term_years

    def is_active(self, year: int) -> bool:
        return self.start_year <= year

    def is_paying(self, year: int) -> bool:
        return self.start_year <= year <= self.payment_end_year


@dataclass(frozen=True, kw_only=True)
class Goal(PlanRecord):
    """
    A planned withdrawal from the liquid account, optionally recurring.

    The value is a present-value amount; it occurs num_occurrences times at
    start_year, start_year + recurrence, start_year + 2 * recurrence, ...
    """

    family: ClassVar[str] = K.FAMILY_GOAL

    type: GoalType = GoalType.EXPENSE
    value: float
    start_year: int
    recurrence: int = 1
    num_occurrences: int = 1
    funded: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "type", coerce_enum(GoalType, self.type))
        if self.recurrence <= 0 and self.num_occurrences > 1:
            warnings.warn(
                f"Goal '{self.id}' repeats {self.num_occurrences} times with recurrence "
                f"{self.recurrence}; it will occur once in {self.start_year}",
                category=UserWarning,
                stacklevel=3,
            )

    @property
    def kind(self) -> str:
        return K.G_WITHDRAWAL

    def occurrence_years(self) -> list[int]:
        """Years in which the goal withdraws its value."""
        if self.num_occurrences <= 0:
            return []
        if self.recurrence <= 0:
            return [self.start_year]
        return [
            self.start_year + i * self.recurrence for i in range(self.num_occurrences)
        ]
