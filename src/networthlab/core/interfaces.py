"""
Strategy interface protocols for NetWorthLab.
Defines the contracts that all strategies must satisfy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .context import ProjectionContext
from .results import EntityOutput

if TYPE_CHECKING:
    # Only imported for type checking to avoid runtime cycles
    from .entities import Asset, Expense, Goal, Income, Liability


@runtime_checkable
class IValuationStrategy(Protocol):
    """
    Contract for ASSET valuation strategies (family='asset').
    Responsibilities: produce the asset's balance over time and the cash it
    returns to the liquid account when it matures.
    """

    def value_at(self, asset: Asset, year: int) -> float:
        """Closed-form balance of the asset in ``year`` (ignoring funding draws)."""
        ...

    def simulate(self, asset: Asset, ctx: ProjectionContext) -> EntityOutput:
        """
        Run the full-period projection for this asset.

        Returns:
            EntityOutput with fields:
              - balance:  np.ndarray[T] (0 where not displayed)
              - active:   np.ndarray[T] bool
              - outflow:  np.ndarray[T] contributions paid in
              - maturity: np.ndarray[T] lump sum booked into the liquid account
              - events:   list[Event]
        """
        ...


@runtime_checkable
class IScheduleStrategy(Protocol):
    """
    Contract for LIABILITY schedule strategies (family='liability').
    Responsibilities: produce the (sign-normalised) balance and payment schedule.
    """

    def balance_at(self, liability: Liability, year: int) -> float:
        """Raw outstanding balance in ``year`` before sign normalisation."""
        ...

    def simulate(self, liability: Liability, ctx: ProjectionContext) -> EntityOutput:
        """
        Run the full-period schedule.

        Returns:
            EntityOutput (same schema). balance is always <= 0.
        """
        ...


@runtime_checkable
class IFlowStrategy(Protocol):
    """
    Contract for BUDGET flow strategies (families 'income' and 'expense').
    Responsibilities: the annual amount a flow adds to or takes from the budget.
    """

    def amount_in(self, flow: Income | Expense, year: int) -> float:
        """Annual amount in ``year`` (0 when inactive, always >= 0)."""
        ...

    def simulate(self, flow: Income | Expense, ctx: ProjectionContext) -> EntityOutput:
        """Annual amounts over the projection in the ``inflow``/``outflow`` field."""
        ...


@runtime_checkable
class IWithdrawalStrategy(Protocol):
    """
    Contract for GOAL strategies (family='goal').
    Responsibilities: the amount a goal withdraws from the liquid account.
    """

    def withdrawal_in(
        self, goal: Goal, year: int, ctx: ProjectionContext
    ) -> float:
        """Effective withdrawal in ``year`` (0 outside occurrence years)."""
        ...

    def simulate(self, goal: Goal, ctx: ProjectionContext) -> EntityOutput:
        """Withdrawals over the projection in the ``withdrawal`` field."""
        ...


__all__ = [
    "IValuationStrategy",
    "IScheduleStrategy",
    "IFlowStrategy",
    "IWithdrawalStrategy",
]
