"""
Error classes for NetWorthLab.

This module defines the exception classes raised at the edges of the engine:
while a snapshot is assembled and while projection parameters are checked.
The projection arithmetic itself never raises for data within the documented
entity types.
"""

from __future__ import annotations


class ConfigError(Exception):
    """
    Configuration error during snapshot assembly or strategy wiring.

    **Common Causes:**
    - Duplicate entity ids across the plan
    - An entity kind with no registered strategy
    - A liquid account id that does not name an asset

    **Example Usage:**
        ```python
        from networthlab.core.errors import ConfigError
        from networthlab.core.snapshot import Snapshot

        try:
            Snapshot(assets=(cash, cash))
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass


class ProjectionError(Exception):
    """
    Raised when projection parameters cannot describe a year range.

    Attributes:
        field: Name of the offending parameter
        value: The rejected value
    """

    def __init__(self, field: str, value, message: str):
        self.field = field
        self.value = value
        super().__init__(f"[projection.{field}={value!r}] {message}")
