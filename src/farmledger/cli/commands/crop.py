"""Crop management commands."""

from datetime import date

import click
from farmledger.cli.arguments import parse_amount_arg, parse_date_arg
from farmledger.cli.error_handling import handle_domain_error
from farmledger.domain import aggregation
from farmledger.domain.crop import CropService
from farmledger.domain.entities import AreaUnit
from farmledger.domain.report import format_currency, format_date, format_quantity
from farmledger.domain.transaction import TransactionService

AREA_UNITS = [unit.value for unit in AreaUnit]


@click.group()
def crop_group():
    """Manage crops."""
    pass


@crop_group.command("add")
@click.argument("name")
@click.option("--planted", required=True, help="Planting date (YYYY-MM-DD or relative like 'today')")
@click.option("--harvest-estimate", required=True, help="Estimated harvest date")
@click.option("--area", required=True, help="Planted area (e.g., 50 or 12.5)")
@click.option("--unit", type=click.Choice(AREA_UNITS), default="acres", show_default=True)
@click.option("--notes", help="Free-text notes")
@click.pass_context
def add_crop(
    ctx,
    name: str,
    planted: str,
    harvest_estimate: str,
    area: str,
    unit: str,
    notes: str | None,
):
    """Add a crop.

    Examples:
        farmledger crop add "Wheat - Field A" --planted 2024-03-01 --harvest-estimate 2024-07-15 --area 50
        farmledger crop add "Maize" --planted today --harvest-estimate 2024-10-01 --area 4 --unit hectares
    """
    service = CropService(ctx.obj["db"])
    planting_date = parse_date_arg(ctx, planted, "planting date")
    estimate = parse_date_arg(ctx, harvest_estimate, "estimated harvest date")
    crop_area = parse_amount_arg(ctx, area, "area")

    try:
        crop_id = service.create_crop(
            name=name,
            planting_date=planting_date,
            estimated_harvest_date=estimate,
            area=crop_area,
            area_unit=AreaUnit(unit),
            notes=notes,
        )
        click.echo(f"Created crop '{name.strip()}' (ID: {crop_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@crop_group.command("list")
@click.option("--as-of", help="Reference date for status (default: today)")
@click.pass_context
def list_crops(ctx, as_of: str | None):
    """List crops with their status."""
    service = CropService(ctx.obj["db"])
    today = parse_date_arg(ctx, as_of, "as-of date") or date.today()

    crops = service.list_crops()
    if not crops:
        click.echo("No crops found.")
        return

    click.echo(f"\n{'ID':>4}  {'Name':<28} {'Planted':<12} {'Harvest':<16} {'Area':<16} Status")
    click.echo("-" * 92)
    for item in crops:
        status = aggregation.crop_status(item, today)
        harvest = format_date(item.actual_harvest_date or item.estimated_harvest_date)
        if item.actual_harvest_date is None:
            harvest = f"est. {harvest}"
        area = f"{format_quantity(item.area)} {item.area_unit.value}"
        click.echo(
            f"{item.id:>4}  {item.name:<28} {format_date(item.planting_date):<12} "
            f"{harvest:<16} {area:<16} {status.value}"
        )


@crop_group.command("show")
@click.argument("crop_id", type=int)
@click.option("--as-of", help="Reference date for status (default: today)")
@click.pass_context
def show_crop(ctx, crop_id: int, as_of: str | None):
    """Show a crop with its linked income and expenses."""
    db = ctx.obj["db"]
    service = CropService(db)
    today = parse_date_arg(ctx, as_of, "as-of date") or date.today()

    item = service.get_crop(crop_id)
    if item is None:
        click.echo(f"Error: Crop {crop_id} not found", err=True)
        ctx.exit(1)

    currency = db.get_settings().currency
    linked = TransactionService(db).list_transactions(crop_id=crop_id)
    profitability = aggregation.crop_profitability(item, linked)
    days = aggregation.days_to_harvest(item, today)

    click.echo(f"\n{item.name} (ID: {item.id})")
    click.echo("-" * 60)
    click.echo(f"Status:           {aggregation.crop_status(item, today).value}")
    click.echo(f"Area:             {format_quantity(item.area)} {item.area_unit.value}")
    click.echo(f"Planted:          {format_date(item.planting_date)}")
    click.echo(f"Est. harvest:     {format_date(item.estimated_harvest_date)}")
    if item.actual_harvest_date is not None:
        click.echo(f"Harvested:        {format_date(item.actual_harvest_date)}")
    elif days is not None:
        click.echo(f"Days to harvest:  {days}")
    if item.yield_amount is not None:
        click.echo(f"Yield:            {format_quantity(item.yield_amount)} {item.yield_unit or ''}".rstrip())
    if item.notes:
        click.echo(f"Notes:            {item.notes}")
    click.echo(f"Income:           {format_currency(profitability.income, currency)}")
    click.echo(f"Expenses:         {format_currency(profitability.expenses, currency)}")
    click.echo(f"Profit:           {format_currency(profitability.profit, currency)}")


@crop_group.command("update")
@click.argument("crop_id", type=int)
@click.option("--name", help="New crop name")
@click.option("--planted", help="New planting date")
@click.option("--harvest-estimate", help="New estimated harvest date")
@click.option("--area", help="New planted area")
@click.option("--unit", type=click.Choice(AREA_UNITS), help="New area unit")
@click.option("--notes", help="New notes, or empty string to clear")
@click.option("--clear-harvest", is_flag=True, help="Remove the recorded harvest date")
@click.option("--clear-yield", is_flag=True, help="Remove the recorded yield")
@click.pass_context
def update_crop(
    ctx,
    crop_id: int,
    name: str | None,
    planted: str | None,
    harvest_estimate: str | None,
    area: str | None,
    unit: str | None,
    notes: str | None,
    clear_harvest: bool,
    clear_yield: bool,
) -> None:
    """Update a crop.

    Updates only the fields that are provided.

    Examples:
        farmledger crop update 1 --area 55
        farmledger crop update 1 --clear-harvest --clear-yield
    """
    service = CropService(ctx.obj["db"])

    try:
        service.update_crop(
            crop_id,
            name=name,
            planting_date=parse_date_arg(ctx, planted, "planting date"),
            estimated_harvest_date=parse_date_arg(ctx, harvest_estimate, "estimated harvest date"),
            area=parse_amount_arg(ctx, area, "area"),
            area_unit=AreaUnit(unit) if unit else None,
            notes=notes,
            clear_harvest=clear_harvest,
            clear_yield=clear_yield,
        )
        click.echo(f"Updated crop {crop_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@crop_group.command("harvest")
@click.argument("crop_id", type=int)
@click.option("--date", "harvest_date", default="today", show_default=True, help="Harvest date")
@click.option("--yield", "yield_amount", help="Harvested amount (e.g., 2500)")
@click.option("--yield-unit", help="Unit for the yield (e.g., bushels, tons)")
@click.pass_context
def harvest_crop(
    ctx,
    crop_id: int,
    harvest_date: str,
    yield_amount: str | None,
    yield_unit: str | None,
) -> None:
    """Record a crop's harvest.

    Examples:
        farmledger crop harvest 1 --date 2024-07-20 --yield 2500 --yield-unit bushels
    """
    service = CropService(ctx.obj["db"])

    try:
        service.record_harvest(
            crop_id,
            harvest_date=parse_date_arg(ctx, harvest_date, "harvest date"),
            yield_amount=parse_amount_arg(ctx, yield_amount, "yield"),
            yield_unit=yield_unit,
        )
        click.echo(f"Recorded harvest for crop {crop_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@crop_group.command("delete")
@click.argument("crop_id", type=int)
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_crop(ctx, crop_id: int, yes: bool) -> None:
    """Delete a crop.

    Transactions linked to the crop are kept and show as unlinked.
    """
    service = CropService(ctx.obj["db"])

    item = service.get_crop(crop_id)
    if item is None:
        click.echo(f"Error: Crop {crop_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete crop '{item.name}' (ID: {crop_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_crop(crop_id)
        click.echo(f"Deleted crop '{item.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register crop commands with main CLI."""
    cli.add_command(crop_group, name="crop")
