"""Command‑line interface for the loan revolver.

This module uses the ``click`` library to implement a multi‑command interface.
Users can print a plan as JSON, view it as a table, export it to JSON/CSV
files or compare two repayment scenarios for the same debt.

Example::

    loan-revolver plan a 1000000 18 100000
    loan-revolver a 1000000 18 100000      # same, ``plan`` is the default
    loan-revolver schedule c 1000000 18 24 --output plan.csv
"""

from __future__ import annotations

import csv
import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import click

from .data_models import LoanPlan, PlanMode
from .engine import build_plan
from .errors import InvalidInput, LoanRevolverError
from .formatter import print_comparison, print_schedule, print_summary
from .utils import parse_amount, parse_period_count, parse_rate

logger = logging.getLogger(__name__)

MAX_ROWS = 120


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn calculator errors into click errors (message on stderr, exit 1)."""
    try:
        yield
    except LoanRevolverError as exc:
        logger.debug("Request failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc


def plan_from_args(mode: str, total_debt: str, annual_rate: str, value: str) -> LoanPlan:
    """Parse raw command-line text and compute the requested plan."""
    plan_mode = PlanMode.parse(mode)
    debt = parse_amount(total_debt, "total_debt", allow_zero=False)
    rate = parse_rate(annual_rate)
    if plan_mode is PlanMode.BY_COUNT:
        amount = parse_period_count(value)
    else:
        amount = parse_amount(value, "payment", allow_zero=False)
    return build_plan(plan_mode, debt, rate, amount)


def parse_scenario(value: str) -> Tuple[str, str]:
    """Split a ``MODE:VALUE`` scenario string, e.g. ``"a:50000"``."""
    parts = value.split(":")
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise InvalidInput(f"Scenario must be in MODE:VALUE format; got {value!r}")
    return parts[0].strip(), parts[1].strip()


def export_to_json(path: Path, plan: LoanPlan) -> None:
    """Export the plan to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(plan.to_dict(), f, indent=2)


def export_to_csv(path: Path, plan: LoanPlan) -> None:
    """Export the schedule to a CSV file."""
    header = [
        "Period",
        "Balance_Before",
        "Interest",
        "Payment",
        "Principal",
        "Balance_After",
        "Next_Interest",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for p in plan.periods:
            writer.writerow(
                [
                    p.index,
                    p.balance_before,
                    p.interest_accrued,
                    p.payment,
                    p.principal_paid,
                    p.balance_after,
                    p.next_interest_accrued,
                ]
            )


class PlanGroup(click.Group):
    """Group that runs ``plan`` when the first argument is not a command name.

    This keeps the short form ``loan-revolver a 1000000 18 100000`` working.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        for i, arg in enumerate(args):
            if arg.startswith("-"):
                continue
            if arg not in self.commands:
                args = [*args[:i], "plan", *args[i:]]
            break
        return super().parse_args(ctx, args)


@click.group(cls=PlanGroup)
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details to stderr")
def cli(verbose: bool) -> None:
    """A command‑line calculator for revolving loan repayment plans.

    MODE is ``a`` (fixed payment amount) or ``c`` (fixed number of periods).
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("mode")
@click.argument("total_debt")
@click.argument("annual_rate")
@click.argument("amount_or_count")
@click.option("--indent", type=int, default=None, help="Indent the JSON output")
def plan(mode: str, total_debt: str, annual_rate: str, amount_or_count: str, indent: Optional[int]) -> None:
    """Print the repayment plan as JSON."""
    with reported_errors():
        result = plan_from_args(mode, total_debt, annual_rate, amount_or_count)
    click.echo(result.to_json(indent=indent))


@cli.command()
@click.argument("mode")
@click.argument("total_debt")
@click.argument("annual_rate")
@click.argument("amount_or_count")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(mode: str, total_debt: str, annual_rate: str, amount_or_count: str, output: Optional[str]) -> None:
    """Compute and print the full repayment schedule."""
    with reported_errors():
        result = plan_from_args(mode, total_debt, annual_rate, amount_or_count)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
        return

    print_summary(result)
    if len(result.periods) > MAX_ROWS:
        click.echo(f"Schedule has {len(result.periods)} rows; showing first {MAX_ROWS} rows.")
    print_schedule(result.periods[:MAX_ROWS])


@cli.command()
@click.argument("total_debt")
@click.argument("annual_rate")
@click.option("--first", "first", required=True, help="First scenario in MODE:VALUE format, e.g. a:50000")
@click.option("--second", "second", required=True, help="Second scenario in MODE:VALUE format, e.g. c:24")
def compare(total_debt: str, annual_rate: str, first: str, second: str) -> None:
    """Compare two repayment scenarios for the same debt.

        loan-revolver compare 1000000 18 --first a:50000 --second c:12
    """
    with reported_errors():
        mode1, value1 = parse_scenario(first)
        mode2, value2 = parse_scenario(second)
        plan1 = plan_from_args(mode1, total_debt, annual_rate, value1)
        plan2 = plan_from_args(mode2, total_debt, annual_rate, value2)
    print_comparison(plan1, plan2)


if __name__ == "__main__":
    cli()
