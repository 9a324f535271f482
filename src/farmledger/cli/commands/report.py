"""Report, summary and export commands."""

from datetime import date
from pathlib import Path

import click
from farmledger.cli.arguments import parse_date_arg
from farmledger.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from farmledger.constants import MONTHLY_FLOW_MONTHS
from farmledger.domain import report as formatter
from farmledger.domain.entities import TransactionKind
from farmledger.domain.report import format_currency
from farmledger.domain.summary import SummaryService

SECTIONS = ("flow", "income", "expenses", "crops", "maintenance")

LINE_ENDINGS = {"lf": "\n", "crlf": "\r\n"}


def _require_range(ctx, start_date, end_date, periods) -> tuple[date, date]:
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(periods),
    )
    if start is None or end is None:
        click.echo("Error: Both a start and an end date are required (or a period option).", err=True)
        ctx.exit(1)
    return start, end


def _echo_categories(title: str, series: list[dict], currency: str) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * 60)
    if not series:
        click.echo("No data for this year.")
        return
    for item in series:
        click.echo(f"{item['name']:<30} {format_currency(item['value'], currency):>16} {item['share']:>6}%")


@click.command("report")
@click.option("--as-of", help="Reference date for the monthly flow (default: today)")
@click.option("--year", type=int, help="Year for the category breakdowns (default: year of --as-of)")
@click.option("--months", type=int, default=MONTHLY_FLOW_MONTHS, show_default=True, help="Months of monthly flow")
@click.option("--section", type=click.Choice(SECTIONS), multiple=True, help="Only show these sections")
@click.pass_context
def report_command(ctx, as_of: str | None, year: int | None, months: int, section: tuple[str, ...]):
    """Show financial reports.

    Monthly flow, income and expenses by category, crop performance and
    equipment maintenance costs.

    Examples:
        farmledger report
        farmledger report --year 2024 --section income --section expenses
    """
    service = SummaryService(ctx.obj["db"])
    today = parse_date_arg(ctx, as_of, "as-of date") or date.today()
    year = year or today.year
    sections = set(section or SECTIONS)

    snapshot = service.get_snapshot()
    currency = snapshot.settings.currency

    if "flow" in sections:
        click.echo(f"\nMonthly Financial Flow (last {months} months)")
        click.echo("-" * 60)
        click.echo(f"{'Month':<8} {'Income':>16} {'Expenses':>16} {'Net':>16}")
        for point in formatter.monthly_chart_series(service.monthly_flow(today, months, snapshot=snapshot)):
            net = point["income"] - point["expenses"]
            click.echo(
                f"{point['name']:<8} {format_currency(point['income'], currency):>16} "
                f"{format_currency(point['expenses'], currency):>16} {format_currency(net, currency):>16}"
            )

    if "income" in sections:
        breakdown = service.category_breakdown(TransactionKind.INCOME, year, snapshot=snapshot)
        _echo_categories(f"Income by Category ({year})", formatter.category_chart_series(breakdown), currency)

    if "expenses" in sections:
        breakdown = service.category_breakdown(TransactionKind.EXPENSE, year, snapshot=snapshot)
        _echo_categories(f"Expenses by Category ({year})", formatter.category_chart_series(breakdown), currency)

    if "crops" in sections:
        click.echo("\nCrop Performance")
        click.echo("-" * 60)
        series = formatter.crop_chart_series(service.crop_performance(snapshot=snapshot))
        if not series:
            click.echo("No crops recorded.")
        for item in series:
            click.echo(
                f"{item['name']:<24} income {format_currency(item['income'], currency)}, "
                f"expenses {format_currency(item['expenses'], currency)}, "
                f"profit {format_currency(item['profit'], currency)}"
            )

    if "maintenance" in sections:
        click.echo("\nMaintenance Costs")
        click.echo("-" * 60)
        costs = service.maintenance_costs(snapshot=snapshot)
        if not costs:
            click.echo("No maintenance costs recorded.")
        for item in costs:
            click.echo(
                f"{item.equipment_name:<24} {format_currency(item.total_cost, currency):>16}"
                f"  ({item.log_count} log(s))"
            )


@click.command("summary")
@period_options
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the document to a file")
@click.pass_context
def summary_command(ctx, start_date, end_date, output, **periods):
    """Print a summary document for a period.

    Examples:
        farmledger summary --start-date 2024-01-01 --end-date 2024-06-30
        farmledger summary --last-year -o summary.txt
    """
    start, end = _require_range(ctx, start_date, end_date, periods)
    document = SummaryService(ctx.obj["db"]).build_printable_document(start, end)

    if output is None:
        click.echo(document, nl=False)
        return
    Path(output).write_text(document, encoding="utf-8")
    click.echo(f"Wrote summary to {output}")


@click.command("export")
@period_options
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file (default: farm_summary_<start>_to_<end>.csv)")
@click.option("--line-ending", type=click.Choice(sorted(LINE_ENDINGS)), default="lf", show_default=True)
@click.pass_context
def export_command(ctx, start_date, end_date, output, line_ending, **periods):
    """Export transactions, crops and equipment for a period as CSV.

    Examples:
        farmledger export --start-date 2024-01-01 --end-date 2024-12-31
        farmledger export --this-year --line-ending crlf -o ledger.csv
    """
    start, end = _require_range(ctx, start_date, end_date, periods)
    content = SummaryService(ctx.obj["db"]).build_export(
        start, end, line_ending=LINE_ENDINGS[line_ending]
    )

    path = Path(output or f"farm_summary_{start.isoformat()}_to_{end.isoformat()}.csv")
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(content)
    click.echo(f"Exported {start.isoformat()} to {end.isoformat()} to {path}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_command, name="report")
    cli.add_command(summary_command, name="summary")
    cli.add_command(export_command, name="export")
