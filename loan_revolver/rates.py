"""Interest rate conversions and per-period interest accrual.

Two conversions are provided. The simple monthly rate (annual rate split evenly
over twelve months) is the one applied when simulating a plan. The compound
monthly rate is shown next to a plan for information only and is truncated,
not rounded, to two decimal places of a percent.
"""

from __future__ import annotations

import math


def annual_to_monthly_simple(rate: float) -> float:
    """Return the monthly rate as a fraction, e.g. ``18.0`` -> ``0.015``."""
    return rate / 12 / 100


def annual_to_monthly_compound(rate: float) -> float:
    """Return the compound-equivalent monthly rate as a percentage.

    The value is the rate that compounds to ``rate`` over twelve months,
    truncated to two decimals: ``annual_to_monthly_compound(24.0) == 1.8``.
    """
    raw = (1 + rate / 100) ** (1 / 12) - 1
    return math.floor(raw * 10000) / 100


def period_interest(balance: int, monthly_rate: float) -> int:
    """Interest accrued on ``balance`` for one period, truncated to a whole unit."""
    return math.floor(balance * monthly_rate)
