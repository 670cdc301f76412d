"""
NetWorthLab - Year-stepped Net-Worth Projections for Personal Financial Plans

NetWorthLab turns a personal financial plan (incomes, expenses, assets,
liabilities and goals) into a deterministic year-by-year net-worth series,
optionally discounted to present value.

Key Features:
- **Pure Engine**: A projection is a function of (snapshot, params); no shared state
- **Strategy Pattern**: Each record is projected by the strategy registered for its kind
- **Liquid Account**: Budget surpluses, matured assets and goals flow through one cash account
- **NPV Mode**: Discount every monetary series to start-year money
- **Planning Views**: Goal schedule, budget breakdown, balance sheet, retirement calculator

Architecture Overview:
- **Records**: Frozen dataclasses for Income, Expense, Asset, Liability and Goal
- **Snapshot**: Immutable bundle of records with liquid-account and funding resolution
- **Cash-flow Aggregator**: Per-year income, expenses, contributions and payments
- **Strategies**: Valuation, schedule, flow and withdrawal strategies by kind
- **Projection**: Ordered scan of the liquid account and net-worth assembly

Quick Start:
    ```python
    from networthlab import Asset, Expense, Income, ProjectionParams, Snapshot, project

    snapshot = Snapshot(
        incomes=[Income(name="Salary", value=10_000, start_year=2025)],
        expenses=[Expense(name="Living", value=6_000, start_year=2025)],
        assets=[Asset(id="current-account", name="Current Account", type="Cash",
                      value=0, start_year=2025)],
    )
    results = project(snapshot, ProjectionParams(start_year=2025, num_periods=30))
    results.records()[0]
    # {'date': 2025, 'asset_current-account': 48000.0, 'totalAssets': 48000.0, ...}
    ```
"""

# Version information
__version__ = "0.1.0"
__description__ = "Year-stepped net-worth projections for personal financial plans"

# Registers default strategies
import networthlab.strategies

from .core import (
    Asset,
    AssetType,
    CashFlowYear,
    CatalogError,
    ConfigError,
    EntityOutput,
    Event,
    Expense,
    FlowRegistry,
    Goal,
    GoalType,
    IFlowStrategy,
    Income,
    IScheduleStrategy,
    IValuationStrategy,
    IWithdrawalStrategy,
    K,
    Liability,
    LiabilityType,
    Projection,
    ProjectionContext,
    ProjectionError,
    ProjectionParams,
    ProjectionResults,
    ScheduleRegistry,
    Snapshot,
    ValuationRegistry,
    WithdrawalRegistry,
    aggregate_series,
    aggregate_year,
    apply_npv,
    load_plan,
    load_projection_params,
    load_snapshot,
    project,
)

__all__ = [
    # Records
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
    # Engine
    "CashFlowYear",
    "aggregate_year",
    "aggregate_series",
    "ProjectionParams",
    "ProjectionContext",
    "Projection",
    "project",
    "ProjectionResults",
    "EntityOutput",
    "Event",
    "apply_npv",
    # Strategy interfaces and registries
    "IValuationStrategy",
    "IScheduleStrategy",
    "IFlowStrategy",
    "IWithdrawalStrategy",
    "ValuationRegistry",
    "ScheduleRegistry",
    "FlowRegistry",
    "WithdrawalRegistry",
    # Errors
    "ConfigError",
    "ProjectionError",
    "CatalogError",
    # Version
    "__version__",
]
