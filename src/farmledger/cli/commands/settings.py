"""Farm settings commands."""

import click
from farmledger.cli.error_handling import handle_domain_error
from farmledger.domain.entities import TransactionKind
from farmledger.domain.report import CURRENCY_SYMBOLS
from farmledger.domain.settings import SettingsService

KINDS = [kind.value for kind in TransactionKind]


@click.group()
def settings_group():
    """Manage farm name, currency and categories."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show the current settings."""
    settings = SettingsService(ctx.obj["db"]).get_settings()

    click.echo(f"\nFarm name: {settings.farm_name}")
    click.echo(f"Currency:  {settings.currency}")
    click.echo("\nIncome categories:")
    for name in settings.income_categories:
        click.echo(f"  - {name}")
    click.echo("\nExpense categories:")
    for name in settings.expense_categories:
        click.echo(f"  - {name}")


@settings_group.command("farm-name")
@click.argument("name")
@click.pass_context
def set_farm_name(ctx, name: str):
    """Rename the farm."""
    try:
        SettingsService(ctx.obj["db"]).update_farm_name(name)
        click.echo(f"Farm name set to '{name.strip()}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@settings_group.command("currency")
@click.argument("code")
@click.pass_context
def set_currency(ctx, code: str):
    """Set the display currency (e.g., USD, EUR, KES).

    Amounts are not converted, only displayed with the new currency.
    """
    try:
        SettingsService(ctx.obj["db"]).update_currency(code)
        code = code.strip().upper()
        click.echo(f"Currency set to {code}")
        if code not in CURRENCY_SYMBOLS:
            click.echo(f"Note: no symbol is known for {code}; amounts will be prefixed with the code")
    except ValueError as e:
        handle_domain_error(ctx, e)


@settings_group.command("add-category")
@click.argument("kind", type=click.Choice(KINDS))
@click.argument("name")
@click.pass_context
def add_category(ctx, kind: str, name: str):
    """Add an income or expense category.

    Examples:
        farmledger settings add-category expense "Veterinary"
    """
    try:
        SettingsService(ctx.obj["db"]).add_category(TransactionKind(kind), name)
        click.echo(f"Added {kind} category '{name.strip()}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@settings_group.command("remove-category")
@click.argument("kind", type=click.Choice(KINDS))
@click.argument("name")
@click.pass_context
def remove_category(ctx, kind: str, name: str):
    """Remove an income or expense category.

    Existing transactions keep the category name.
    """
    try:
        SettingsService(ctx.obj["db"]).remove_category(TransactionKind(kind), name)
        click.echo(f"Removed {kind} category '{name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
