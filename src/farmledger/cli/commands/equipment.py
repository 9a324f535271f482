"""Equipment and maintenance commands."""

import click
from farmledger.cli.arguments import parse_amount_arg, parse_date_arg
from farmledger.cli.error_handling import handle_domain_error
from farmledger.domain.equipment import EquipmentService
from farmledger.domain.report import format_currency, format_date


@click.group()
def equipment_group():
    """Manage equipment and maintenance logs."""
    pass


@equipment_group.command("add")
@click.argument("name")
@click.option("--purchased", required=True, help="Purchase date")
@click.option("--model", help="Make or model")
@click.option("--notes", help="Free-text notes")
@click.pass_context
def add_equipment(ctx, name: str, purchased: str, model: str | None, notes: str | None):
    """Add a piece of equipment.

    Examples:
        farmledger equipment add "Tractor" --purchased 2020-04-01 --model "John Deere 5075E"
    """
    service = EquipmentService(ctx.obj["db"])
    purchase_date = parse_date_arg(ctx, purchased, "purchase date")

    try:
        equipment_id = service.create_equipment(
            name=name, purchase_date=purchase_date, model=model, notes=notes
        )
        click.echo(f"Created equipment '{name.strip()}' (ID: {equipment_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@equipment_group.command("list")
@click.pass_context
def list_equipment(ctx):
    """List equipment with maintenance totals."""
    db = ctx.obj["db"]
    service = EquipmentService(db)

    equipment = service.list_equipment()
    if not equipment:
        click.echo("No equipment found.")
        return

    currency = db.get_settings().currency
    click.echo(f"\n{'ID':>4}  {'Name':<24} {'Model':<20} {'Purchased':<10}  {'Logs':>4} {'Maintenance':>14}")
    click.echo("-" * 84)
    for item in equipment:
        summary = service.get_maintenance_summary(item.id)
        click.echo(
            f"{item.id:>4}  {item.name:<24} {item.model or '':<20} "
            f"{format_date(item.purchase_date):<10}  {summary.log_count:>4} "
            f"{format_currency(summary.total_cost, currency):>14}"
        )


@equipment_group.command("show")
@click.argument("equipment_id", type=int)
@click.pass_context
def show_equipment(ctx, equipment_id: int):
    """Show equipment with its maintenance history."""
    db = ctx.obj["db"]
    service = EquipmentService(db)

    try:
        summary = service.get_maintenance_summary(equipment_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    item = service.get_equipment(equipment_id)
    currency = db.get_settings().currency

    click.echo(f"\n{item.name} (ID: {item.id})")
    click.echo("-" * 60)
    if item.model:
        click.echo(f"Model:        {item.model}")
    click.echo(f"Purchased:    {format_date(item.purchase_date)}")
    if item.notes:
        click.echo(f"Notes:        {item.notes}")
    click.echo(f"Maintenance:  {format_currency(summary.total_cost, currency)} over {summary.log_count} log(s)")
    if summary.most_recent_log is not None:
        recent = summary.most_recent_log
        click.echo(f"Last service: {format_date(recent.date)} - {recent.description}")

    if item.maintenance_logs:
        click.echo("\nMaintenance logs:")
        for log in item.maintenance_logs:
            click.echo(
                f"  {log.id:>4}  {format_date(log.date)}  "
                f"{format_currency(log.cost, currency):>12}  {log.description}"
            )


@equipment_group.command("update")
@click.argument("equipment_id", type=int)
@click.option("--name", help="New name")
@click.option("--purchased", help="New purchase date")
@click.option("--model", help="New model, or empty string to clear")
@click.option("--notes", help="New notes, or empty string to clear")
@click.pass_context
def update_equipment(
    ctx,
    equipment_id: int,
    name: str | None,
    purchased: str | None,
    model: str | None,
    notes: str | None,
) -> None:
    """Update equipment. Only the fields provided are changed."""
    service = EquipmentService(ctx.obj["db"])

    try:
        service.update_equipment(
            equipment_id,
            name=name,
            purchase_date=parse_date_arg(ctx, purchased, "purchase date"),
            model=model,
            notes=notes,
        )
        click.echo(f"Updated equipment {equipment_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@equipment_group.command("delete")
@click.argument("equipment_id", type=int)
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_equipment(ctx, equipment_id: int, yes: bool) -> None:
    """Delete equipment and all of its maintenance logs."""
    service = EquipmentService(ctx.obj["db"])

    item = service.get_equipment(equipment_id)
    if item is None:
        click.echo(f"Error: Equipment {equipment_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Delete '{item.name}' and {len(item.maintenance_logs)} maintenance log(s)?"
    ):
        click.echo("Deletion cancelled.")
        return

    service.delete_equipment(equipment_id)
    click.echo(f"Deleted equipment '{item.name}'")


@equipment_group.command("log")
@click.argument("equipment_id", type=int)
@click.argument("description")
@click.option("--cost", required=True, help="Maintenance cost")
@click.option("--date", "log_date", default="today", show_default=True, help="Date of the work")
@click.pass_context
def add_log(ctx, equipment_id: int, description: str, cost: str, log_date: str) -> None:
    """Record maintenance work on a piece of equipment.

    Examples:
        farmledger equipment log 1 "Oil change" --cost 50 --date 2024-02-01
    """
    service = EquipmentService(ctx.obj["db"])
    parsed_cost = parse_amount_arg(ctx, cost, "cost")
    parsed_date = parse_date_arg(ctx, log_date)

    try:
        log_id = service.add_maintenance_log(
            equipment_id, date=parsed_date, description=description, cost=parsed_cost
        )
        click.echo(f"Added maintenance log {log_id} to equipment {equipment_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@equipment_group.command("delete-log")
@click.argument("equipment_id", type=int)
@click.argument("log_id", type=int)
@click.pass_context
def delete_log(ctx, equipment_id: int, log_id: int) -> None:
    """Delete a maintenance log from a piece of equipment."""
    service = EquipmentService(ctx.obj["db"])

    try:
        service.delete_maintenance_log(equipment_id, log_id)
        click.echo(f"Deleted maintenance log {log_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register equipment commands with main CLI."""
    cli.add_command(equipment_group, name="equipment")
