"""Dashboard and farm overview commands."""

from datetime import date

import click
from farmledger.cli.arguments import parse_date_arg
from farmledger.domain import aggregation
from farmledger.domain.entities import ChangeIndicator, ChangeKind, EventKind, TransactionKind
from farmledger.domain.report import format_currency, format_date
from farmledger.domain.summary import SummaryService


def describe_change(indicator: ChangeIndicator) -> str:
    """Short text for a month-over-month change indicator."""
    if indicator.kind == ChangeKind.NEW_ACTIVITY:
        return "new this month"
    if indicator.kind == ChangeKind.NONE:
        return "no change"
    direction = "up" if indicator.kind == ChangeKind.UP else "down"
    return f"{direction} {indicator.percent}% vs last month"


def _echo_upcoming(events, today: date) -> None:
    click.echo("\nUpcoming:")
    if not events:
        click.echo("  Nothing scheduled.")
        return
    for event in events:
        if event.kind == EventKind.HARVEST:
            days = (event.date - today).days
            when = "today" if days == 0 else f"in {days} day(s)"
            click.echo(f"  Harvest {event.title} ({format_date(event.date)}, {when})")
        else:
            click.echo(f"  To-do: {event.title}")


@click.command("dashboard")
@click.option("--as-of", help="Reference date (default: today)")
@click.pass_context
def dashboard(ctx, as_of: str | None):
    """Show this month's figures, recent transactions and upcoming work."""
    service = SummaryService(ctx.obj["db"])
    today = parse_date_arg(ctx, as_of, "as-of date") or date.today()

    snapshot = service.get_snapshot()
    currency = snapshot.settings.currency
    metrics = service.dashboard(today, snapshot=snapshot)

    click.echo(f"\n{snapshot.settings.farm_name} - {today.strftime('%B %Y')}")
    click.echo("=" * 60)
    click.echo(
        f"{'Income':<12} {format_currency(metrics.this_month.income, currency):>16}"
        f"  ({describe_change(metrics.income_change)})"
    )
    click.echo(
        f"{'Expenses':<12} {format_currency(metrics.this_month.expenses, currency):>16}"
        f"  ({describe_change(metrics.expense_change)})"
    )
    click.echo(f"{'Net profit':<12} {format_currency(metrics.net_profit, currency):>16}")

    click.echo("\nRecent transactions:")
    recent = aggregation.recent_transactions(snapshot.transactions)
    if not recent:
        click.echo("  No transactions yet.")
    for txn in recent:
        sign = "+" if txn.kind == TransactionKind.INCOME else "-"
        click.echo(
            f"  {format_date(txn.date)}  {txn.category:<18} "
            f"{sign}{format_currency(txn.amount, currency):>14}  {txn.description}"
        )

    _echo_upcoming(service.upcoming(today, snapshot=snapshot), today)


@click.command("overview")
@click.option("--as-of", help="Reference date (default: today)")
@click.pass_context
def overview(ctx, as_of: str | None):
    """Show record counts and rolling 30 and 7 day totals."""
    service = SummaryService(ctx.obj["db"])
    today = parse_date_arg(ctx, as_of, "as-of date") or date.today()

    snapshot = service.get_snapshot()
    currency = snapshot.settings.currency
    result = service.overview(today, snapshot=snapshot)
    stats = result.stats

    click.echo(f"\n{snapshot.settings.farm_name} overview")
    click.echo("=" * 60)
    click.echo(
        f"Crops:        {stats.total_crops} total, {stats.active_crops} active, "
        f"{stats.harvested_crops} harvested, {stats.crops_ready_to_harvest} ready to harvest"
    )
    click.echo(f"Equipment:    {stats.total_equipment}")
    click.echo(f"Tasks:        {stats.total_tasks} total, {stats.pending_tasks} pending")
    click.echo(f"Transactions: {stats.total_transactions}")

    for label, totals in (("Last 30 days", result.last_30_days), ("Last 7 days", result.last_7_days)):
        click.echo(
            f"\n{label}: income {format_currency(totals.income, currency)}, "
            f"expenses {format_currency(totals.expenses, currency)}, "
            f"net {format_currency(totals.net, currency)}"
        )

    _echo_upcoming(result.upcoming, today)


def register_commands(cli):
    """Register dashboard commands with main CLI."""
    cli.add_command(dashboard)
    cli.add_command(overview)
