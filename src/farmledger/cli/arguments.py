"""Parsing of free-form CLI arguments into domain values."""

from datetime import date
from decimal import Decimal

import click

from farmledger.cli.error_handling import handle_domain_error
from farmledger.utils.amount_parser import parse_amount
from farmledger.utils.date_parser import parse_date


def parse_date_arg(ctx: click.Context, value: str | None, label: str = "date") -> date | None:
    """Parse a date option, exiting with an error message if it is invalid."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        handle_domain_error(ctx, ValueError(f"Invalid {label}: {e}"))


def parse_amount_arg(ctx: click.Context, value: str | None, label: str = "amount") -> Decimal | None:
    """Parse an amount option, exiting with an error message if it is invalid."""
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        handle_domain_error(ctx, ValueError(f"Invalid {label}: {e}"))
