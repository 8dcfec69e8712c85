"""Balance command."""

import click

from clinicledger.cli.date_filters import parse_cli_date
from clinicledger.cli.error_handling import handle_domain_error
from clinicledger.cli.formatting import domain_option, format_amount
from clinicledger.domain.errors import DomainError
from clinicledger.domain.ledger import LedgerService


@click.command("balance")
@domain_option
@click.option("--as-of", help="Only count entries dated on or before this date")
@click.pass_context
def show_balance(ctx, domain: str, as_of: str | None):
    """Show the current balance of a fund.

    Examples:
        clinicledger balance --domain medicine
        clinicledger balance --domain operation --as-of 2025-06-30
    """
    service = LedgerService(ctx.obj["db"], domain)
    on_date = parse_cli_date(ctx, as_of, "as-of date")

    try:
        if on_date is None:
            balance = service.get_balance()
            click.echo(f"{service.domain.label} balance: {format_amount(balance)}")
        else:
            balance = service.balance_as_of(on_date)
            click.echo(f"{service.domain.label} balance as of {on_date}: {format_amount(balance)}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register balance command with main CLI."""
    cli.add_command(show_balance)
