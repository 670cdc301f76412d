"""
Global strategy registries for NetWorthLab.

Registries map a record's ``kind`` discriminator to the strategy object that
projects it. They are populated by ``networthlab.strategies.register_defaults``
when the strategies package is imported.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import ConfigError
from .kinds import K

if TYPE_CHECKING:
    from .entities import PlanRecord
    from .interfaces import (
        IFlowStrategy,
        IScheduleStrategy,
        IValuationStrategy,
        IWithdrawalStrategy,
    )

# Global registries mapping kind strings to strategy implementations
ValuationRegistry: dict[str, IValuationStrategy] = {}
ScheduleRegistry: dict[str, IScheduleStrategy] = {}
FlowRegistry: dict[str, IFlowStrategy] = {}
WithdrawalRegistry: dict[str, IWithdrawalStrategy] = {}

_FAMILY_REGISTRIES = {
    K.FAMILY_ASSET: ("valuation", ValuationRegistry),
    K.FAMILY_LIABILITY: ("schedule", ScheduleRegistry),
    K.FAMILY_INCOME: ("flow", FlowRegistry),
    K.FAMILY_EXPENSE: ("flow", FlowRegistry),
    K.FAMILY_GOAL: ("withdrawal", WithdrawalRegistry),
}


def strategy_for(record: PlanRecord):
    """
    Look up the strategy that projects ``record``.

    Raises:
        ConfigError: If the record's family or kind has no registered strategy
    """
    try:
        label, registry = _FAMILY_REGISTRIES[record.family]
    except KeyError:
        raise ConfigError(f"Unknown record family: {record.family!r}") from None
    if record.kind not in registry:
        raise ConfigError(
            f"Unknown {label} strategy: {record.kind} (record '{record.id}')"
        )
    return registry[record.kind]
