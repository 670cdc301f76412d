"""
Schedule strategies for liabilities.
"""

from .repayment import ScheduleCompoundRepayment

__all__ = [
    "ScheduleCompoundRepayment",
]
