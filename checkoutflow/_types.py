"""
Core types for checkoutflow.

Re-exports from kungfu + identity wrappers shared by every module.
"""

from __future__ import annotations

from dataclasses import dataclass

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Lazy Computation Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Lazy[T, E] = LazyCoroResult[T, E]
"""Lazy async computation that may fail (one network round-trip)."""

# ═══════════════════════════════════════════════════════════════════════════════
# Identities
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ItemId:
    """Cart line identity (product + variant)."""

    value: str


@dataclass(frozen=True, slots=True)
class ProductId:
    value: str


@dataclass(frozen=True, slots=True)
class AddressId:
    value: str


@dataclass(frozen=True, slots=True)
class OrderId:
    value: str


# ═══════════════════════════════════════════════════════════════════════════════
# Navigation
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Redirect:
    """Where the client navigates next, e.g. /cart."""

    target: str


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Type aliases
    "Lazy",
    # Identities
    "ItemId",
    "ProductId",
    "AddressId",
    "OrderId",
    # Navigation
    "Redirect",
)
