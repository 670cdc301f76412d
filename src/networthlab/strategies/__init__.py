"""
Strategy implementations for NetWorthLab.

This module contains the concrete strategies that project each record of a
plan, looked up by the record's 'kind' discriminator.

Strategy Categories:
- Valuation Strategies: asset balances, contributions and maturity proceeds
- Schedule Strategies: liability balances and repayments
- Flow Strategies: incomes, expenses and goal withdrawals

Registry System:
The module registers all default strategies in the global registries when it
is imported.
"""

from .flow import FlowExpenseGrowing, FlowGoalWithdrawal, FlowIncomeGrowing
from .registry import register_defaults
from .schedule import ScheduleCompoundRepayment
from .valuation import ValuationCompound

# Register all default strategies when module is imported
register_defaults()

__all__ = [
    # Valuation strategies
    "ValuationCompound",
    # Schedule strategies
    "ScheduleCompoundRepayment",
    # Flow strategies
    "FlowIncomeGrowing",
    "FlowExpenseGrowing",
    "FlowGoalWithdrawal",
    # Registry
    "register_defaults",
]
