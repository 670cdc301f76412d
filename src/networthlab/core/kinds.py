"""
NetWorthLab kind constants (entity families and their user-facing types).
"""

from __future__ import annotations

from enum import Enum


class AssetType(str, Enum):
    """Asset categories offered by the planner."""

    CASH = "Cash"
    FIXED_APPRECIATING = "Fixed Appreciating"
    FIXED_DEPRECIATING = "Fixed Depreciating"
    INVESTMENT = "Investment"
    RETIREMENT_SAVINGS = "Retirement Savings"
    OTHER = "Other"


class LiabilityType(str, Enum):
    """Liability categories offered by the planner."""

    MORTGAGE = "Mortgage"
    LOAN = "Loan"
    CREDIT_CARD = "Credit Card"
    OTHER = "Other"


class GoalType(str, Enum):
    """Goal categories offered by the planner."""

    RETIREMENT = "Retirement"
    ASSET = "Asset"
    EXPENSE = "Expense"


class K:
    # === Flows (budget lines) ===
    F_INCOME = "f.income"  # Salary, rental income, pensions
    F_EXPENSE = "f.expense"  # Living costs, subscriptions, school fees

    # === Goals (withdrawals from the liquid account) ===
    G_WITHDRAWAL = "g.withdrawal"

    # === Families (records carry one of these as their 'family') ===
    FAMILY_INCOME = "income"
    FAMILY_EXPENSE = "expense"
    FAMILY_ASSET = "asset"
    FAMILY_LIABILITY = "liability"
    FAMILY_GOAL = "goal"


def coerce_enum(enum_cls: type[Enum], raw) -> Enum:
    """
    Resolve a user-supplied label into an enum member.

    Accepts the member itself, its value ("Credit Card"), or its name in any
    case with spaces, dashes or underscores ("credit_card", "CREDIT-CARD").

    Raises:
        ValueError: If the label matches no member
    """
    if isinstance(raw, enum_cls):
        return raw
    text = str(raw).strip()
    for member in enum_cls:
        if text == member.value:
            return member
    key = text.upper().replace("-", "_").replace(" ", "_")
    if key in enum_cls.__members__:
        return enum_cls[key]
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"Unknown {enum_cls.__name__} '{raw}' (allowed: {allowed})")
