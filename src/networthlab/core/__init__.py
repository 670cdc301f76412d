"""
Core module for NetWorthLab.

This module contains the record types, the snapshot, the per-year cash-flow
aggregator, the projection engine and its results.
"""

from .cashflow import (
    CashFlowYear,
    aggregate_series,
    aggregate_year,
    annual_expenses,
    annual_income,
    asset_contributions,
    budget_surplus,
    liability_payments,
)
from .catalog_loader import CatalogError, load_plan, load_projection_params, load_snapshot
from .context import ProjectionContext, ProjectionParams
from .entities import Asset, Expense, Goal, Income, Liability, PlanRecord
from .errors import ConfigError, ProjectionError
from .events import Event
from .interfaces import (
    IFlowStrategy,
    IScheduleStrategy,
    IValuationStrategy,
    IWithdrawalStrategy,
)
from .kinds import AssetType, GoalType, K, LiabilityType
from .projection import Projection, project
from .registry import (
    FlowRegistry,
    ScheduleRegistry,
    ValuationRegistry,
    WithdrawalRegistry,
    strategy_for,
)
from .results import EntityOutput, ProjectionResults, apply_npv, assemble_totals
from .snapshot import Snapshot
from .utils import (
    active_mask,
    annuity_future_value,
    discount_factor,
    growth_factor,
    year_range,
)

__all__ = [
    # Errors
    "ConfigError",
    "ProjectionError",
    "CatalogError",
    # Records
    "PlanRecord",
    "Income",
    "Expense",
    "Asset",
    "Liability",
    "Goal",
    "AssetType",
    "LiabilityType",
    "GoalType",
    "K",
    "Snapshot",
    # Intake
    "load_snapshot",
    "load_projection_params",
    "load_plan",
    # Cash flow
    "CashFlowYear",
    "annual_income",
    "annual_expenses",
    "asset_contributions",
    "liability_payments",
    "budget_surplus",
    "aggregate_year",
    "aggregate_series",
    # Context
    "ProjectionParams",
    "ProjectionContext",
    # Projection
    "Projection",
    "project",
    # Events and Results
    "Event",
    "EntityOutput",
    "ProjectionResults",
    "assemble_totals",
    "apply_npv",
    # Interfaces
    "IValuationStrategy",
    "IScheduleStrategy",
    "IFlowStrategy",
    "IWithdrawalStrategy",
    # Registries
    "ValuationRegistry",
    "ScheduleRegistry",
    "FlowRegistry",
    "WithdrawalRegistry",
    "strategy_for",
    # Utilities
    "year_range",
    "active_mask",
    "growth_factor",
    "annuity_future_value",
    "discount_factor",
]
