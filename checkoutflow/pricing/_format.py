"""Rupiah formatting for summaries and messages."""

from __future__ import annotations


def format_idr(amount: int) -> str:
    """format_idr(150000) -> 'Rp 150.000'"""
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,}".replace(",", ".")
    return f"{sign}Rp {grouped}"


__all__ = ("format_idr",)
