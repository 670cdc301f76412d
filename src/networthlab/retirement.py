"""
Living-annuity retirement calculator.

Answers "how much capital do I need at retirement?" for a living annuity
that pays a fixed real withdrawal for a number of years and leaves a lump
sum behind, and tabulates the annuity's drawdown year by year.

All rates are in percent. The annuity grows at the real rate
``(interest_rate - inflation_rate) / 100``; amounts are quoted in today's
money and inflated to nominal values where noted.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from networthlab.core.errors import ConfigError
from networthlab.core.utils import annuity_future_value, growth_factor


@dataclass(frozen=True)
class RetirementInputs:
    """
    Inputs of the retirement calculator.

    Attributes:
        current_age: Age today
        retirement_age: Age at which withdrawals start
        num_years_required: Number of years the annuity must pay out
        monthly_withdrawal: Desired monthly withdrawal in today's money
        interest_rate: Nominal annual return of the annuity (%)
        inflation_rate: Annual inflation (%)
        lumpsum_remaining: Capital to be left over at the end
    """

    current_age: int = 50
    retirement_age: int = 65
    num_years_required: int = 20
    monthly_withdrawal: float = 10_000.0
    interest_rate: float = 7.0
    inflation_rate: float = 5.0
    lumpsum_remaining: float = 700_000.0

    def __post_init__(self) -> None:
        if self.retirement_age < self.current_age:
            raise ConfigError(
                f"retirement_age ({self.retirement_age}) is before current_age ({self.current_age})"
            )
        if self.num_years_required < 0:
            raise ConfigError("num_years_required must be zero or positive")
        if self.real_rate_pct <= -100.0:
            raise ConfigError(
                f"interest_rate - inflation_rate ({self.real_rate_pct}%) must be above -100%"
            )

    @property
    def years_till_retirement(self) -> int:
        return self.retirement_age - self.current_age

    @property
    def real_rate_pct(self) -> float:
        return self.interest_rate - self.inflation_rate

    @property
    def annual_withdrawal(self) -> float:
        return self.monthly_withdrawal * 12


@dataclass(frozen=True)
class RetirementResult:
    """Capital required at retirement, in today's money and in nominal terms."""

    inputs: RetirementInputs
    present_value: float
    future_value: float

    def as_dict(self) -> dict:
        return {
            "years_till_retirement": self.inputs.years_till_retirement,
            "real_rate_pct": self.inputs.real_rate_pct,
            "annual_withdrawal": self.inputs.annual_withdrawal,
            "present_value": self.present_value,
            "future_value": self.future_value,
        }


def annuity_present_value(annual_amount: float, rate_pct: float, years: float) -> float:
    """
    Present value of ``annual_amount`` paid for ``years`` years.

    ``A * (1 - (1 + r) ** -n) / r``, with the ``A * n`` limit at a zero rate.
    """
    r = rate_pct / 100.0
    if r == 0.0:
        return float(annual_amount * years)
    return float(annual_amount * (1.0 - (1.0 + r) ** -years) / r)


def required_capital(inputs: RetirementInputs) -> RetirementResult:
    """
    Capital needed at retirement to fund the withdrawals and the remaining lump sum.

    PV = A * (1 - (1 + rr) ** -n) / rr + lump / (1 + rr) ** years_till_retirement
    FV = PV * (1 + inflation) ** years_till_retirement

    **Example:**
        ```python
        result = required_capital(RetirementInputs())
        round(result.present_value, -4)
        # 2480000.0
        ```
    """
    rr = inputs.real_rate_pct
    present_value = annuity_present_value(
        inputs.annual_withdrawal, rr, inputs.num_years_required
    ) + inputs.lumpsum_remaining / float(
        growth_factor(rr, inputs.years_till_retirement)
    )
    future_value = present_value * float(
        growth_factor(inputs.inflation_rate, inputs.years_till_retirement)
    )
    return RetirementResult(
        inputs=inputs, present_value=present_value, future_value=future_value
    )


def drawdown_table(inputs: RetirementInputs) -> pd.DataFrame:
    """
    Year-by-year drawdown of the annuity from retirement age onwards.

    For ``i = 0 .. num_years_required`` (age = retirement_age + i):
    - desired_withdrawal = A * (1 + inflation) ** (age - current_age)
    - annuity_value = (PV * (1 + rr) ** i - FV_annuity(A, rr, i))
      * (1 + inflation) ** (age - current_age)

    Returns:
        DataFrame indexed by age with ``desired_withdrawal`` and ``annuity_value``
    """
    rr = inputs.real_rate_pct
    principal = required_capital(inputs).present_value
    i = np.arange(inputs.num_years_required + 1)
    ages = inputs.retirement_age + i
    inflate = growth_factor(inputs.inflation_rate, ages - inputs.current_age)

    real_value = principal * growth_factor(rr, i) - annuity_future_value(
        i, rr, inputs.annual_withdrawal
    )
    return pd.DataFrame(
        {
            "desired_withdrawal": inputs.annual_withdrawal * inflate,
            "annuity_value": real_value * inflate,
        },
        index=pd.Index(ages, name="age"),
    )
