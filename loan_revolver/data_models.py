"""Data models for the loan revolver.

This module defines the dataclasses produced by the calculation engine: a
single ``Period`` of the repayment schedule and the ``LoanPlan`` that collects
all periods with their aggregates. Both are frozen; a plan is built in one
pass by :func:`loan_revolver.engine.generate_plan` and never changed
afterwards. ``PlanMode`` names the two ways a plan can be requested.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .errors import UnsupportedMode


class PlanMode(str, Enum):
    """How the fixed payment of a plan is determined.

    ``BY_AMOUNT`` takes the payment as given. ``BY_COUNT`` solves for the
    payment that retires the debt in a given number of periods.
    """

    BY_AMOUNT = "by-amount"
    BY_COUNT = "by-count"

    @classmethod
    def parse(cls, value: object) -> "PlanMode":
        """Return the mode named by ``value``.

        Accepts a ``PlanMode``, its value (``"by-amount"``) or its letter
        (``"a"`` / ``"c"``), case-insensitively.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in _MODE_LETTERS:
            return _MODE_LETTERS[text]
        try:
            return cls(text)
        except ValueError:
            raise UnsupportedMode(value) from None


_MODE_LETTERS = {"a": PlanMode.BY_AMOUNT, "c": PlanMode.BY_COUNT}


@dataclass(frozen=True)
class Period:
    """One row of the repayment schedule.

    Attributes
    ----------
    index: int
        0-based ordinal. Period 0 is the state before any payment.
    balance_before: int
        Outstanding balance at the start of the period.
    balance_after: int
        Outstanding balance once this period's payment is applied.
    payment: int
        Amount actually paid this period. The last payment is reduced to
        exactly what is owed.
    principal_paid: int
        ``payment - interest_accrued``.
    interest_accrued: int
        Interest added to the balance this period.
    next_interest_accrued: int
        Interest the following period will accrue on ``balance_after``.
    """

    index: int
    balance_before: int
    balance_after: int
    payment: int
    principal_paid: int
    interest_accrued: int
    next_interest_accrued: int


@dataclass(frozen=True)
class LoanPlan:
    """A complete repayment plan and its totals.

    ``monthly_simple_rate`` and ``monthly_compound_rate`` are display values in
    percent; only the simple rate is used to simulate the schedule.
    """

    total_debt: int
    annual_rate: float
    monthly_simple_rate: float
    monthly_compound_rate: float
    periods: Tuple[Period, ...]
    total_paid: int
    total_interest: int
    period_count: int

    @property
    def payment(self) -> Optional[int]:
        """The regular (first) payment, or ``None`` for an empty debt."""
        if len(self.periods) < 2:
            return None
        return self.periods[1].payment

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["periods"] = [asdict(p) for p in self.periods]
        return data

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)
