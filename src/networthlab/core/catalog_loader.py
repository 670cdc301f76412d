"""Utilities for loading plan snapshots from YAML/JSON sources."""

from __future__ import annotations

import json
import re
from copy import deepcopy
from dataclasses import MISSING, fields
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from .context import DEFAULT_INFLATION_RATE, DEFAULT_NUM_PERIODS, ProjectionParams
from .entities import Asset, Expense, Goal, Income, Liability, PlanRecord
from .errors import ConfigError, ProjectionError
from .kinds import AssetType, GoalType, LiabilityType, coerce_enum
from .snapshot import Snapshot

__all__ = [
    "CatalogError",
    "COLLECTIONS",
    "load_plan",
    "load_projection_params",
    "load_snapshot",
    "read_document",
]

COLLECTIONS: dict[str, type[PlanRecord]] = {
    "incomes": Income,
    "expenses": Expense,
    "assets": Asset,
    "liabilities": Liability,
    "goals": Goal,
}

_ENUM_FIELDS = {
    Asset: AssetType,
    Liability: LiabilityType,
    Goal: GoalType,
}

_YEAR_FIELDS = {"start_year", "end_year"}
_INT_FIELDS = {"recurrence", "num_occurrences"}
_BOOL_FIELDS = {"funded"}
_STR_FIELDS = {"id", "name", "description", "from_account"}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


class CatalogError(ValueError):
    """Raised when a plan document cannot be parsed or validated."""


def read_document(source: str | Path | dict[str, Any]) -> tuple[dict[str, Any], str]:
    """
    Read a plan document into a mapping.

    Args:
        source: A mapping, or a path to a ``.json``, ``.yaml`` or ``.yml`` file

    Returns:
        Tuple of (mapping, label) where label names the source in error messages

    Raises:
        FileNotFoundError: If a path does not exist
        CatalogError: If the file format is unsupported or the root is not a mapping
    """
    if isinstance(source, dict):
        return deepcopy(source), "<mapping>"

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(path)

    fmt = path.suffix.lstrip(".").lower()
    text = path.read_text(encoding="utf-8")
    try:
        if fmt in {"yaml", "yml", ""}:
            data = yaml.safe_load(text)
        elif fmt == "json":
            data = json.loads(text)
        else:
            raise CatalogError(f"Unsupported plan format '{fmt}' for {path}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise CatalogError(f"{path.name}: could not parse document ({exc})") from exc

    if not isinstance(data, dict):
        raise CatalogError(f"Plan root must be a mapping (source={path})")
    return data, path.name


def load_snapshot(source: str | Path | dict[str, Any]) -> Snapshot:
    """
    Parse a plan document into an immutable Snapshot.

    The document holds one list per collection (``incomes``, ``expenses``,
    ``assets``, ``liabilities``, ``goals``), an optional ``defaults`` mapping
    merged into every entity that accepts its keys, and an optional
    ``liquid_account`` id. Keys may be written in snake_case or camelCase.

    **Example:**
        ```yaml
        defaults:
          startYear: 2025
        incomes:
          - name: Salary
            value: 10000
        assets:
          - id: current-account
            name: Current Account
            type: Cash
            value: 0
        ```

    Raises:
        CatalogError: On malformed documents, with the offending location
            (e.g. ``plan.yaml::assets[2].type``)
        ConfigError: On duplicate ids across the plan
    """
    mapping, label = read_document(source)
    return _snapshot_from(mapping, label)


def _snapshot_from(mapping: dict[str, Any], label: str) -> Snapshot:
    defaults = _normalize_keys(
        _ensure_dict(mapping.get("defaults"), f"{label}::defaults"),
        f"{label}::defaults",
    )

    collections: dict[str, list[PlanRecord]] = {}
    for key, cls in COLLECTIONS.items():
        entries = _ensure_list(mapping.get(key), f"{label}::{key}")
        collections[key] = [
            _build_record(cls, entry, defaults, f"{label}::{key}[{idx}]")
            for idx, entry in enumerate(entries)
        ]

    liquid_id = mapping.get("liquid_account", mapping.get("liquidAccount"))
    if liquid_id is not None and (not isinstance(liquid_id, str) or not liquid_id.strip()):
        raise CatalogError(f"{label}::liquid_account: expected non-empty string")

    try:
        return Snapshot(**collections, liquid_account_id=liquid_id)
    except ConfigError as exc:
        raise ConfigError(f"{label}: {exc}") from exc


def load_projection_params(
    source: str | Path | dict[str, Any], *, start_year: int | None = None
) -> ProjectionParams:
    """
    Parse the optional ``projection`` section of a plan document.

    Missing keys fall back to the engine defaults (30 periods, 5% inflation,
    nominal values). The start year falls back to ``start_year`` and then to
    the current calendar year.
    """
    mapping, label = read_document(source)
    return _params_from(mapping, label, start_year)


def _params_from(
    mapping: dict[str, Any], label: str, start_year: int | None
) -> ProjectionParams:
    ctx = f"{label}::projection"
    section = _normalize_keys(_ensure_dict(mapping.get("projection"), ctx), ctx)

    unknown = set(section) - {"start_year", "num_periods", "show_npv", "inflation_rate"}
    if unknown:
        raise CatalogError(f"{ctx}: unknown keys {sorted(unknown)}")

    year = section.get("start_year", start_year)
    try:
        return ProjectionParams(
            start_year=_coerce_int(year, f"{ctx}.start_year")
            if year is not None
            else date.today().year,
            num_periods=_coerce_int(
                section.get("num_periods", DEFAULT_NUM_PERIODS), f"{ctx}.num_periods"
            ),
            show_npv=_coerce_bool(section.get("show_npv", False), f"{ctx}.show_npv"),
            inflation_rate=_coerce_number(
                section.get("inflation_rate", DEFAULT_INFLATION_RATE),
                f"{ctx}.inflation_rate",
            ),
        )
    except ProjectionError as exc:
        raise CatalogError(f"{ctx}: {exc}") from exc


def load_plan(
    source: str | Path | dict[str, Any],
) -> tuple[Snapshot, ProjectionParams]:
    """Load both the snapshot and its projection parameters from one document."""
    mapping, label = read_document(source)
    snapshot = _snapshot_from(mapping, label)
    start_years = [r.start_year for r in snapshot.records() if r.start_year]
    params = _params_from(
        mapping, label, min(start_years) if start_years else None
    )
    return snapshot, params


def _build_record(
    cls: type[PlanRecord], entry: Any, defaults: dict[str, Any], ctx: str
) -> PlanRecord:
    data = _normalize_keys(_ensure_dict(entry, ctx), ctx)
    allowed = {f.name for f in fields(cls) if f.init}

    unknown = set(data) - allowed
    if unknown:
        raise CatalogError(f"{ctx}: unknown fields {sorted(unknown)}")

    merged = {k: v for k, v in defaults.items() if k in allowed}
    merged.update(data)

    for f in fields(cls):
        if f.init and f.default is MISSING and f.name not in merged:
            raise CatalogError(f"{ctx}: '{f.name}' is required")

    kwargs: dict[str, Any] = {}
    for key, value in merged.items():
        kwargs[key] = _coerce_field(cls, key, value, f"{ctx}.{key}")

    try:
        return cls(**kwargs)
    except ConfigError as exc:
        raise CatalogError(f"{ctx}: {exc}") from exc


def _coerce_field(cls: type[PlanRecord], key: str, value: Any, ctx: str) -> Any:
    if key == "type":
        try:
            return coerce_enum(_ENUM_FIELDS[cls], value)
        except ValueError as exc:
            raise CatalogError(f"{ctx}: {exc}") from exc
    if key in _YEAR_FIELDS:
        if key == "end_year" and value in (None, ""):
            return None
        return _coerce_int(value, ctx)
    if key in _INT_FIELDS:
        return _coerce_int(value, ctx)
    if key in _BOOL_FIELDS:
        return _coerce_bool(value, ctx)
    if key in _STR_FIELDS:
        if value in (None, "") and key != "name":
            return None if key == "from_account" else ""
        return _coerce_str(value, ctx)
    return _coerce_number(value, ctx)


def _normalize_keys(data: dict[str, Any], ctx: str) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in data.items():
        if not isinstance(key, str):
            raise CatalogError(f"{ctx}: keys must be strings, got {key!r}")
        snake = _CAMEL_RE.sub("_", key).lower()
        if snake in out:
            raise CatalogError(f"{ctx}: '{key}' given twice")
        out[snake] = value
    return out


def _coerce_number(value: Any, ctx: str) -> float:
    if isinstance(value, bool):  # Avoid bool being treated as a number
        raise CatalogError(f"{ctx}: expected a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.replace(",", ""))
        except ValueError as exc:
            raise CatalogError(f"{ctx}: invalid number '{value}'") from exc
    raise CatalogError(f"{ctx}: expected a number")


def _coerce_int(value: Any, ctx: str) -> int:
    number = _coerce_number(value, ctx)
    if not number.is_integer():
        raise CatalogError(f"{ctx}: expected a whole number, got {value!r}")
    return int(number)


def _coerce_bool(value: Any, ctx: str) -> bool:
    if isinstance(value, bool):
        return value
    raise CatalogError(f"{ctx}: expected a boolean")


def _coerce_str(value: Any, ctx: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise CatalogError(f"{ctx}: expected non-empty string")
    return value


def _ensure_dict(value: Any, ctx: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise CatalogError(f"{ctx}: expected a mapping")
    return deepcopy(value)


def _ensure_list(value: Any, ctx: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise CatalogError(f"{ctx}: expected a list")
    return list(value)
