"""
Strategy registry setup for NetWorthLab.
"""

from networthlab.core.kinds import AssetType, K, LiabilityType
from networthlab.core.registry import (
    FlowRegistry,
    ScheduleRegistry,
    ValuationRegistry,
    WithdrawalRegistry,
)

# Flow strategies
from .flow.expense_growing import FlowExpenseGrowing
from .flow.goal_withdrawal import FlowGoalWithdrawal
from .flow.income_growing import FlowIncomeGrowing

# Schedule strategies
from .schedule.repayment import ScheduleCompoundRepayment

# Valuation strategies
from .valuation.compound import ValuationCompound


def register_defaults():
    """
    Register all default strategy implementations in the global registries.

    Registered Strategies:
        Assets:
            - every AssetType ('Cash', 'Investment', ...): compound growth
              with contributions and maturity

        Liabilities:
            - every LiabilityType ('Mortgage', 'Loan', ...): compound
              interest with fixed repayments

        Flows:
            - 'f.income': growing monthly income
            - 'f.expense': growing monthly expense

        Goals:
            - 'g.withdrawal': (recurring) withdrawal from the liquid account

    Note:
        This function is automatically called when the module is imported.
        Additional strategies can be registered by writing to the registry
        dictionaries directly.
    """
    valuation = ValuationCompound()
    for asset_type in AssetType:
        ValuationRegistry[asset_type.value] = valuation

    schedule = ScheduleCompoundRepayment()
    for liability_type in LiabilityType:
        ScheduleRegistry[liability_type.value] = schedule

    FlowRegistry[K.F_INCOME] = FlowIncomeGrowing()
    FlowRegistry[K.F_EXPENSE] = FlowExpenseGrowing()

    WithdrawalRegistry[K.G_WITHDRAWAL] = FlowGoalWithdrawal()
