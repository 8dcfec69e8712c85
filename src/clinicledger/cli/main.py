"""Main CLI entry point."""

import logging

import click

from clinicledger.database.factories import DB_PATH_ENV, create_sqlite_database

# Import and register all commands at module level
from clinicledger.cli.commands import (
    account,
    balance,
    category,
    fund,
    house_security,
    ledger,
    report,
)

LOG_LEVEL_ENV = "CLINICLEDGER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar=LOG_LEVEL_ENV,
    help=f"Logging level (overrides {LOG_LEVEL_ENV} environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Clinicledger - hospital fund ledgers.

    Keep the Medicine, Operation and Hospital accounts: fund movements,
    income and expenses with running balances, monthly reports and the
    House Security ledger.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
balance.register_commands(cli)
fund.register_commands(cli)
account.register_commands(cli)
ledger.register_commands(cli)
report.register_commands(cli)
category.register_commands(cli)
house_security.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
