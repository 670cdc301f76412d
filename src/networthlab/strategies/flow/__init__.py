"""
Flow strategies for budget lines and goals.
"""

from .expense_growing import FlowExpenseGrowing
from .goal_withdrawal import FlowGoalWithdrawal
from .income_growing import FlowIncomeGrowing

__all__ = [
    "FlowIncomeGrowing",
    "FlowExpenseGrowing",
    "FlowGoalWithdrawal",
]
