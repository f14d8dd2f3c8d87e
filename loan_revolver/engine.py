"""Core calculation engine for the loan revolver.

This module builds repayment plans for a revolving loan: interest accrues
monthly on the outstanding balance and a fixed payment is applied each period
until the balance reaches zero. A plan is requested either with the payment
amount (:func:`plan_by_amount`) or with a target number of periods, in which
case the level payment is solved first (:func:`plan_by_count`).

Three numeric policies are applied and kept apart on purpose:

* interest per period is truncated to a whole unit (``rates.period_interest``);
* the compound monthly rate shown with a plan is truncated to two decimals;
* the solved payment is rounded to the nearest whole unit, halves away from
  zero.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Union

from .data_models import LoanPlan, Period, PlanMode
from .errors import InsufficientPayment, InvalidInput
from .rates import annual_to_monthly_compound, annual_to_monthly_simple, period_interest

logger = logging.getLogger(__name__)

# Largest whole amount a float holds exactly.
MAX_AMOUNT = 2**53


def _check_amount(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidInput(f"{name} must be non-negative, got {value}")
    if value > MAX_AMOUNT:
        raise InvalidInput(f"{name} must not exceed {MAX_AMOUNT}, got {value}")
    return value


def _check_rate(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"annual_rate must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise InvalidInput(f"annual_rate must be a non-negative finite number, got {value}")
    return float(value)


def _first_interest(total_debt: int, monthly_rate: float) -> int:
    # Balances only shrink after the first period, so this bounds every product.
    try:
        product = total_debt * monthly_rate
    except OverflowError:
        product = math.inf
    if not math.isfinite(product):
        raise InvalidInput(
            f"total_debt {total_debt} at monthly rate {monthly_rate} is out of range"
        )
    return period_interest(total_debt, monthly_rate)


def _round_half_up(value: float) -> int:
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def generate_plan(total_debt: int, annual_rate: float, payment: int) -> LoanPlan:
    """Simulate the repayment of ``total_debt`` with a fixed ``payment``.

    Parameters
    ----------
    total_debt: int
        Principal borrowed, in whole currency units.
    annual_rate: float
        Nominal annual interest rate in percent (``18.0`` means 18 %).
    payment: int
        Amount paid each period. The final payment is reduced to exactly the
        remaining balance plus interest.

    Returns
    -------
    LoanPlan
        The schedule, starting with period 0 (no payment yet), and its totals.

    Raises
    ------
    InsufficientPayment
        If ``payment`` does not exceed the interest of the first period; the
        balance would never decrease.
    InvalidInput
        If an argument is negative, of the wrong type, or too large to
        simulate with float rates.
    """
    total_debt = _check_amount(total_debt, "total_debt")
    payment = _check_amount(payment, "payment")
    annual_rate = _check_rate(annual_rate)
    monthly_rate = annual_to_monthly_simple(annual_rate)

    next_interest = _first_interest(total_debt, monthly_rate)
    # A zero debt is already retired; any payment will do.
    if total_debt > 0 and next_interest >= payment:
        raise InsufficientPayment(payment, next_interest)

    periods: List[Period] = [
        Period(
            index=0,
            balance_before=total_debt,
            balance_after=total_debt,
            payment=0,
            principal_paid=0,
            interest_accrued=0,
            next_interest_accrued=next_interest,
        )
    ]

    balance = total_debt
    while balance > 0:
        interest = next_interest
        accrued_balance = balance + interest
        amount = payment
        remaining = accrued_balance - amount
        if remaining <= 0:
            # Last period: pay exactly what is owed.
            amount = accrued_balance
            remaining = 0
        next_interest = period_interest(remaining, monthly_rate)
        periods.append(
            Period(
                index=len(periods),
                balance_before=balance,
                balance_after=remaining,
                payment=amount,
                principal_paid=amount - interest,
                interest_accrued=interest,
                next_interest_accrued=next_interest,
            )
        )
        balance = remaining

    plan = LoanPlan(
        total_debt=total_debt,
        annual_rate=annual_rate,
        monthly_simple_rate=annual_rate / 12,
        monthly_compound_rate=annual_to_monthly_compound(annual_rate),
        periods=tuple(periods),
        total_paid=sum(p.payment for p in periods),
        total_interest=sum(p.interest_accrued for p in periods),
        period_count=len(periods) - 1,
    )
    logger.debug(
        "Generated plan: debt=%d rate=%s payment=%d periods=%d interest=%d",
        total_debt,
        annual_rate,
        payment,
        plan.period_count,
        plan.total_interest,
    )
    return plan


def plan_by_amount(total_debt: int, annual_rate: float, payment: int) -> LoanPlan:
    """Plan with a given fixed payment. Same as :func:`generate_plan`."""
    return generate_plan(total_debt, annual_rate, payment)


def solve_payment(total_debt: int, annual_rate: float, period_count: int) -> int:
    """Return the level payment that retires ``total_debt`` in ``period_count`` periods.

    The formula is:

        payment = P * (r * (1 + r)^n) / ((1 + r)^n - 1)

    where ``P`` is the debt, ``r`` the simple monthly rate and ``n`` the
    number of periods, rounded to the nearest whole unit. When the rate is
    zero the payment simplifies to ``P / n``.
    """
    total_debt = _check_amount(total_debt, "total_debt")
    annual_rate = _check_rate(annual_rate)
    if isinstance(period_count, bool) or not isinstance(period_count, int) or period_count <= 0:
        raise InvalidInput(f"period_count must be a positive integer, got {period_count!r}")

    rate = annual_to_monthly_simple(annual_rate)
    first_interest = _first_interest(total_debt, rate)
    if total_debt == 0:
        return 0
    try:
        factor = (1 + rate) ** period_count
    except OverflowError:
        factor = math.inf
    if factor == 1:
        return _round_half_up(total_debt / period_count)
    raw = total_debt * rate * factor / (factor - 1)
    if not math.isfinite(raw):
        # (1 + r)^n left float range: no level payment can be represented.
        raise InsufficientPayment(0, first_interest)
    payment = _round_half_up(raw)
    logger.debug("Solved payment %d for debt=%d rate=%s n=%d", payment, total_debt, annual_rate, period_count)
    return payment


def plan_by_count(total_debt: int, annual_rate: float, period_count: int) -> LoanPlan:
    """Plan whose payment is solved for ``period_count`` periods.

    Because the solved payment is rounded, the resulting plan may end one
    period earlier or later than requested.
    """
    payment = solve_payment(total_debt, annual_rate, period_count)
    plan = generate_plan(total_debt, annual_rate, payment)
    if total_debt and plan.period_count != period_count:
        logger.info(
            "Solved payment %d retires the debt in %d periods instead of %d",
            payment,
            plan.period_count,
            period_count,
        )
    return plan


def build_plan(
    mode: Union[PlanMode, str],
    total_debt: int,
    annual_rate: float,
    value: int,
) -> LoanPlan:
    """Dispatch to :func:`plan_by_amount` or :func:`plan_by_count`.

    ``value`` is the payment for ``by-amount`` and the number of periods for
    ``by-count``. Raises ``UnsupportedMode`` for an unknown ``mode``.
    """
    if PlanMode.parse(mode) is PlanMode.BY_COUNT:
        return plan_by_count(total_debt, annual_rate, value)
    return plan_by_amount(total_debt, annual_rate, value)
