"""Ledger view command."""

import click

from clinicledger.cli.date_filters import period_flags, period_options, resolve_cli_date_range
from clinicledger.cli.error_handling import handle_domain_error
from clinicledger.cli.formatting import domain_option, print_ledger_page
from clinicledger.domain.entities import EntryType
from clinicledger.domain.errors import DomainError
from clinicledger.domain.ledger import LedgerService
from clinicledger.domain.query import LedgerFilter


@click.command("ledger")
@domain_option
@period_options
@click.option("--description", help="Only entries whose description contains this text")
@click.option("--category", help="Only entries with exactly this category")
@click.option("--search", help="Search transaction number, description and category")
@click.option(
    "--type",
    "entry_types",
    multiple=True,
    type=click.Choice([t.value for t in EntryType], case_sensitive=False),
    help="Only these entry types (repeatable)",
)
@click.option("--opening", is_flag=True, help="Start from the balance before the start date")
@click.option("--page", default=1, show_default=True, type=int, help="Page number")
@click.option("--page-size", default=50, show_default=True, type=int, help="Rows per page")
@click.option("--snapshot", type=int, help="Snapshot ID from an earlier page")
@click.pass_context
def show_ledger(
    ctx,
    domain: str,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
    description: str | None,
    category: str | None,
    search: str | None,
    entry_types: tuple[str, ...],
    opening: bool,
    page: int,
    page_size: int,
    snapshot: int | None,
):
    """Show the running-balance ledger of a fund.

    Examples:
        clinicledger ledger --domain medicine --this-month
        clinicledger ledger --domain hospital --search "security" --page 2 --snapshot 41
    """
    service = LedgerService(ctx.obj["db"], domain)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags(this_month, this_year, last_month, last_year),
    )
    ledger_filter = LedgerFilter(
        date_from=start,
        date_to=end,
        description=description,
        category=category,
        search=search,
        entry_types=tuple(EntryType(t.lower()) for t in entry_types) or None,
    )

    try:
        result = service.ledger(
            ledger_filter, page=page, page_size=page_size, snapshot_id=snapshot, include_opening=opening
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    print_ledger_page(result, f"{service.domain.label} ledger")


def register_commands(cli):
    """Register ledger command with main CLI."""
    cli.add_command(show_ledger)
