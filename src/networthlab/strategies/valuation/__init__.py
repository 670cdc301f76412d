"""
Valuation strategies for assets.
"""

from .compound import ValuationCompound

__all__ = [
    "ValuationCompound",
]
