"""Main CLI entry point."""

import logging

import click
from farmledger.database.factories import create_sqlite_database

from farmledger.cli.commands import (
    crop,
    transaction,
    equipment,
    todo,
    settings,
    notification,
    dashboard,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to the ledger file (overrides FARMLEDGER_DB_PATH environment variable)",
    envvar="FARMLEDGER_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug messages to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Farmledger - Farm record keeping.

    Track crops, income and expenses, equipment maintenance and farm tasks,
    and produce dashboards, reports and exports from them.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Only open the ledger when a command runs, not for --help
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


crop.register_commands(cli)
transaction.register_commands(cli)
equipment.register_commands(cli)
todo.register_commands(cli)
settings.register_commands(cli)
notification.register_commands(cli)
dashboard.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
