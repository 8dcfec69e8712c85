"""House Security ledger command."""

import click

from clinicledger.cli.date_filters import period_flags, period_options, resolve_cli_date_range
from clinicledger.cli.error_handling import handle_domain_error
from clinicledger.cli.formatting import print_ledger_page
from clinicledger.domain.derived import house_security_ledger
from clinicledger.domain.domains import HOUSE_SECURITY
from clinicledger.domain.errors import DomainError
from clinicledger.domain.query import LedgerFilter


@click.command("house-security")
@period_options
@click.option("--description", help="Only entries whose description contains this text")
@click.option("--list-descriptions", is_flag=True, help="List known descriptions and exit")
@click.option("--page", default=1, show_default=True, type=int, help="Page number")
@click.option("--page-size", default=50, show_default=True, type=int, help="Rows per page")
@click.option("--snapshot", type=int, help="Snapshot ID from an earlier page")
@click.pass_context
def house_security(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
    description: str | None,
    list_descriptions: bool,
    page: int,
    page_size: int,
    snapshot: int | None,
):
    """Show the House Security ledger.

    Lists the hospital account's "House Security" expenses with their
    accumulated total.
    """
    service = house_security_ledger(ctx.obj["db"])

    if list_descriptions:
        descriptions = service.descriptions()
        if not descriptions:
            click.echo("No House Security entries found.")
        for text in descriptions:
            click.echo(text)
        return

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags(this_month, this_year, last_month, last_year),
    )
    try:
        result = service.ledger(
            LedgerFilter(date_from=start, date_to=end, description=description),
            page=page,
            page_size=page_size,
            snapshot_id=snapshot,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    print_ledger_page(result, HOUSE_SECURITY.label)


def register_commands(cli):
    """Register house-security command with main CLI."""
    cli.add_command(house_security)
