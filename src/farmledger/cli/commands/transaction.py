"""Transaction management commands."""

import click
from farmledger.cli.arguments import parse_amount_arg, parse_date_arg
from farmledger.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from farmledger.cli.error_handling import handle_domain_error
from farmledger.domain.entities import TransactionKind
from farmledger.domain.report import format_currency, format_date
from farmledger.domain.transaction import TransactionService

KINDS = [kind.value for kind in TransactionKind]


@click.group()
def transaction_group():
    """Manage income and expense transactions."""
    pass


@transaction_group.command("add")
@click.argument("kind", type=click.Choice(KINDS))
@click.argument("amount")
@click.option("--category", required=True, help="Category (see 'farmledger settings show')")
@click.option("--date", "txn_date", default="today", show_default=True, help="Transaction date")
@click.option("--description", default="", help="Transaction description")
@click.option("--crop", "crop_id", type=int, help="ID of the crop this transaction belongs to")
@click.pass_context
def add_transaction(
    ctx,
    kind: str,
    amount: str,
    category: str,
    txn_date: str,
    description: str,
    crop_id: int | None,
):
    """Record income or an expense.

    Examples:
        farmledger transaction add income 1000 --category "Crop Sale" --crop 1
        farmledger transaction add expense 200 --category Seeds --date 2024-01-10
    """
    service = TransactionService(ctx.obj["db"])
    parsed_amount = parse_amount_arg(ctx, amount)
    parsed_date = parse_date_arg(ctx, txn_date)

    try:
        transaction_id = service.create_transaction(
            kind=TransactionKind(kind),
            amount=parsed_amount,
            date=parsed_date,
            category=category,
            description=description,
            crop_id=crop_id,
        )
        click.echo(f"Created {kind} transaction {transaction_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@period_options
@click.option("--kind", type=click.Choice(KINDS), help="Only income or only expenses")
@click.option("--crop", "crop_id", type=int, help="Only transactions linked to this crop")
@click.pass_context
def list_transactions(ctx, start_date, end_date, kind, crop_id, **periods):
    """List transactions, newest first.

    Examples:
        farmledger transaction list --this-month
        farmledger transaction list --kind expense --start-date 2024-01-01
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(periods),
    )

    transactions = service.list_transactions(
        kind=TransactionKind(kind) if kind else None,
        start_date=start,
        end_date=end,
        crop_id=crop_id,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    currency = db.get_settings().currency
    crop_names = {item.id: item.name for item in db.list_crops()}

    click.echo(f"\n{'ID':>4}  {'Date':<10}  {'Kind':<7}  {'Category':<18} {'Amount':>14}  Description")
    click.echo("-" * 90)
    for txn in transactions:
        description = txn.description
        if txn.crop_id is not None and txn.crop_id in crop_names:
            description = f"{description} [{crop_names[txn.crop_id]}]".strip()
        click.echo(
            f"{txn.id:>4}  {format_date(txn.date):<10}  {txn.kind.value:<7}  "
            f"{txn.category:<18} {format_currency(txn.amount, currency):>14}  {description}"
        )


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--date", "txn_date", help="New date")
@click.option("--description", help="New description")
@click.option("--category", help="New category (must match the transaction kind)")
@click.option("--crop", help="Crop ID to link, or empty string to unlink")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    amount: str | None,
    txn_date: str | None,
    description: str | None,
    category: str | None,
    crop: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Use --crop "" to unlink the crop.

    Examples:
        farmledger transaction update 3 --amount 250
        farmledger transaction update 3 --crop ""
    """
    service = TransactionService(ctx.obj["db"])

    crop_id = None
    clear_crop = False
    if crop is not None:
        if crop == "":
            clear_crop = True
        elif crop.isdigit():
            crop_id = int(crop)
        else:
            click.echo(f"Error: Invalid crop ID '{crop}'", err=True)
            ctx.exit(1)

    try:
        service.update_transaction(
            transaction_id,
            amount=parse_amount_arg(ctx, amount),
            date=parse_date_arg(ctx, txn_date),
            description=description,
            category=category,
            crop_id=crop_id,
            clear_crop=clear_crop,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int) -> None:
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"])

    try:
        service.delete_transaction(transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
