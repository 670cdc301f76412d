"""
Immutable snapshot of a financial plan, with lookup and funding resolution.

Provides the unified view of all records that the projection engine consumes
on every invocation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from functools import cached_property

from .entities import Asset, Expense, Goal, Income, Liability, PlanRecord
from .errors import ConfigError
from .kinds import AssetType

logger = logging.getLogger(__name__)

DEFAULT_LIQUID_ACCOUNT_ID = "current-account"


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only bundle of every record in a financial plan.

    The snapshot is the explicit input of a projection: the engine never
    reads shared state, so a projection is a pure function of
    (snapshot, params).

    **Liquid account resolution** (when ``liquid_account_id`` is None):
    1. an asset with id ``"current-account"``
    2. otherwise the first asset of type Cash
    3. otherwise a zero-valued Cash asset named "Current Account" is added,
       under the first free id of ``"current-account"``, ``"current-account-2"``, ...

    **Example Usage:**
        ```python
        from networthlab.core.entities import Asset, Income
        from networthlab.core.snapshot import Snapshot

        snapshot = Snapshot(
            incomes=[Income(name="Salary", value=10_000, start_year=2025)],
            assets=[Asset(id="current-account", name="Current Account",
                          type="Cash", value=0, start_year=2025)],
        )
        snapshot.liquid_account.name
        # 'Current Account'
        ```

    Raises:
        ConfigError: On duplicate ids, or when an explicit liquid account id
            does not name an asset
    """

    incomes: tuple[Income, ...] = ()
    expenses: tuple[Expense, ...] = ()
    assets: tuple[Asset, ...] = ()
    liabilities: tuple[Liability, ...] = ()
    goals: tuple[Goal, ...] = ()
    liquid_account_id: str | None = None

    def __post_init__(self) -> None:
        for name in ("incomes", "expenses", "assets", "liabilities", "goals"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

        self._check_unique_ids()
        object.__setattr__(self, "liquid_account_id", self._resolve_liquid_account())

    def _check_unique_ids(self) -> None:
        seen: dict[str, str] = {}
        for record in self.records():
            if record.id in seen:
                raise ConfigError(
                    f"Duplicate id '{record.id}' ({seen[record.id]} and {record.family})"
                )
            seen[record.id] = record.family

    def _resolve_liquid_account(self) -> str:
        if self.liquid_account_id is not None:
            if not any(a.id == self.liquid_account_id for a in self.assets):
                raise ConfigError(
                    f"Liquid account '{self.liquid_account_id}' is not an asset id"
                )
            return self.liquid_account_id

        for asset in self.assets:
            if asset.id == DEFAULT_LIQUID_ACCOUNT_ID:
                return asset.id
        for asset in self.assets:
            if asset.type is AssetType.CASH:
                return asset.id

        taken = {r.id for r in self.records()}
        new_id = DEFAULT_LIQUID_ACCOUNT_ID
        suffix = 2
        while new_id in taken:
            new_id = f"{DEFAULT_LIQUID_ACCOUNT_ID}-{suffix}"
            suffix += 1

        start_years = [r.start_year for r in self.records()]
        synthesized = Asset(
            id=new_id,
            name="Current Account",
            type=AssetType.CASH,
            value=0.0,
            start_year=min(start_years) if start_years else 0,
        )
        logger.warning(
            "No liquid account in snapshot; adding empty '%s'", synthesized.id
        )
        object.__setattr__(self, "assets", (synthesized, *self.assets))
        return synthesized.id

    # --- Lookup ---------------------------------------------------------------
    def records(self) -> Iterator[PlanRecord]:
        """Iterate every record, collection by collection."""
        yield from self.incomes
        yield from self.expenses
        yield from self.assets
        yield from self.liabilities
        yield from self.goals

    def get(self, record_id: str) -> PlanRecord | None:
        return self._by_id.get(record_id)

    @cached_property
    def _by_id(self) -> dict[str, PlanRecord]:
        return {record.id: record for record in self.records()}

    @property
    def liquid_account(self) -> Asset:
        return self._by_id[self.liquid_account_id]

    def is_liquid(self, record: PlanRecord) -> bool:
        return record.id == self.liquid_account_id

    def projected_assets(self) -> tuple[Asset, ...]:
        """Assets that carry their own balance (everything but the liquid account)."""
        return tuple(a for a in self.assets if a.id != self.liquid_account_id)

    # --- Funding ------------------------------------------------------------
    @cached_property
    def funding_sources(self) -> dict[str, str]:
        """
        Map of entity id -> id of the asset funding its outflows.

        Only valid single-level references are kept. References to missing
        ids, to liabilities, to the entity itself or to the liquid account
        fall back to the budget, as do references that close a cycle.
        """
        refs: dict[str, str] = {
            r.id: r.from_account
            for r in (*self.assets, *self.liabilities)
            if r.from_account and r.id != self.liquid_account_id
        }
        asset_ids = {a.id for a in self.assets}

        sources: dict[str, str] = {}
        for record_id, source_id in refs.items():
            if source_id == record_id or source_id == self.liquid_account_id:
                continue
            if source_id not in asset_ids:
                logger.warning(
                    "'%s' is funded from unknown asset '%s'; using the budget",
                    record_id,
                    source_id,
                )
                continue
            cycle = self._funding_cycle(record_id, refs)
            if cycle:
                logger.warning(
                    "Funding cycle %s; '%s' is treated as unfunded",
                    " -> ".join(cycle),
                    record_id,
                )
                continue
            sources[record_id] = source_id
        return sources

    @staticmethod
    def _funding_cycle(start_id: str, refs: dict[str, str]) -> list[str]:
        path = [start_id]
        seen = {start_id}
        current = refs.get(start_id)
        while current is not None:
            path.append(current)
            if current == start_id:
                return path
            if current in seen:
                return []
            seen.add(current)
            current = refs.get(current)
        return []

    def funding_source(self, record: PlanRecord, year: int) -> Asset | None:
        """
        The asset that pays this record's outflow in ``year``, if any.

        A source only pays while it is active itself; otherwise the outflow
        falls back to the budget.
        """
        source_id = self.funding_sources.get(record.id)
        if source_id is None:
            return None
        source = self._by_id[source_id]
        return source if source.is_active(year) else None

    def funded_by(self, source_id: str) -> list[Asset | Liability]:
        """Records whose outflows are drawn from ``source_id``."""
        return [
            r
            for r in (*self.assets, *self.liabilities)
            if self.funding_sources.get(r.id) == source_id
        ]
