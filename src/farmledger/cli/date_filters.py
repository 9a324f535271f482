"""CLI helpers for date range resolution."""

from datetime import date

import click

from farmledger.cli.arguments import parse_date_arg
from farmledger.utils.date_parser import get_date_range

PERIOD_OPTIONS = (
    ("--this-week", "this-week", "Current week up to today"),
    ("--this-month", "this-month", "Current month up to today"),
    ("--this-year", "this-year", "Current year up to today"),
    ("--last-week", "last-week", "Previous week"),
    ("--last-month", "last-month", "Previous month"),
    ("--last-year", "last-year", "Previous year"),
)


def period_options(func):
    """Add --start-date/--end-date and the period flags to a command."""
    for flag, _, help_text in reversed(PERIOD_OPTIONS):
        func = click.option(flag, is_flag=True, help=help_text)(func)
    func = click.option(
        "--end-date", help="End date (YYYY-MM-DD or relative like 'today')"
    )(func)
    func = click.option(
        "--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')"
    )(func)
    return func


def collect_period_flags(params: dict) -> dict[str, bool]:
    """Map a command's period flag parameters to period names."""
    return {
        period: bool(params.get(flag.lstrip("-").replace("-", "_")))
        for flag, period, _ in PERIOD_OPTIONS
    }


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve a date range from one period flag or explicit dates."""
    chosen = [period for period, is_set in period_flags.items() if is_set]

    if len(chosen) > 1:
        click.echo("Error: Only one period option can be specified at a time.", err=True)
        ctx.exit(1)

    if chosen and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if chosen:
        return get_date_range(chosen[0])

    start = parse_date_arg(ctx, start_date, "start date")
    end = parse_date_arg(ctx, end_date, "end date")
    if start is None and end is None and default_range is not None:
        return default_range
    return start, end
