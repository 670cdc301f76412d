"""
Growing monthly expense flow strategy.
"""

from __future__ import annotations

from .income_growing import FlowIncomeGrowing


class FlowExpenseGrowing(FlowIncomeGrowing):
    """
    Monthly expense with annual compound growth (kind: 'f.expense').

    Same arithmetic as FlowIncomeGrowing; the annual amounts are reported as
    ``outflow`` instead of ``inflow``.
    """

    field = "outflow"
