"""Output helpers for the loan revolver.

This module provides simple functions to render repayment plans and
comparisons in a tabular text format. Output goes through ``click.echo`` so
the CLI and its tests capture it the same way.
"""

from __future__ import annotations

from typing import Iterable

import click

from .data_models import LoanPlan, Period


def print_summary(plan: LoanPlan) -> None:
    """Print the totals of a plan in a human‑readable format."""
    click.echo("Summary")
    click.echo("-" * 72)
    click.echo(f"Total debt         : {plan.total_debt}")
    click.echo(f"Annual rate        : {plan.annual_rate:.2f}%")
    click.echo(f"Monthly rate       : {plan.monthly_simple_rate:.4g}%")
    click.echo(f"Monthly (compound) : {plan.monthly_compound_rate:.2f}%")
    if plan.payment is not None:
        click.echo(f"Payment            : {plan.payment}")
    click.echo(f"Total interest     : {plan.total_interest}")
    click.echo(f"Total paid         : {plan.total_paid}")
    click.echo(f"Periods            : {plan.period_count}")
    click.echo("-" * 72)


def print_schedule(periods: Iterable[Period]) -> None:
    """Print the schedule as a simple tab separated table."""
    headers = [
        "Period",
        "StartBal",
        "Interest",
        "Payment",
        "Principal",
        "EndBal",
    ]
    click.echo("\t".join(headers))
    for period in periods:
        row = [
            period.index,
            period.balance_before,
            period.interest_accrued,
            period.payment,
            period.principal_paid,
            period.balance_after,
        ]
        click.echo("\t".join(str(v) for v in row))


def print_comparison(first: LoanPlan, second: LoanPlan) -> None:
    """Print two plans side by side.

    The difference column is ``second - first``; a negative value means the
    second scenario is cheaper or shorter.
    """
    click.echo("Comparison")
    click.echo("=" * 72)
    click.echo(f"{'Metric':20s} {'Scenario1':>15s} {'Scenario2':>15s} {'Difference':>15s}")
    for key in ("payment", "total_paid", "total_interest", "period_count"):
        v1 = getattr(first, key) or 0
        v2 = getattr(second, key) or 0
        click.echo(f"{key:20s} {v1:15d} {v2:15d} {v2 - v1:15d}")
    click.echo("=" * 72)
