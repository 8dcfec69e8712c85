"""Fund movement commands."""

import click

from clinicledger.cli.date_filters import period_flags, period_options, resolve_cli_date_range
from clinicledger.cli.error_handling import handle_domain_error
from clinicledger.cli.formatting import domain_option, format_amount, print_ledger_page
from clinicledger.domain.errors import DomainError
from clinicledger.domain.ledger import LedgerService
from clinicledger.domain.query import LedgerFilter


def fund_movement_options(func):
    options = [
        domain_option,
        click.option("--amount", required=True, help="Amount (e.g., 1000 or 1,250.50)"),
        click.option("--purpose", required=True, help="Purpose or investor name"),
        click.option("--description", help="Description"),
        click.option("--date", "txn_date", default="today", show_default=True, help="Transaction date"),
        click.option("--actor", help="Who recorded the movement"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
def fund_group():
    """Record and view fund (capital) movements."""
    pass


@fund_group.command("in")
@fund_movement_options
@click.pass_context
def fund_in(ctx, domain: str, amount: str, purpose: str, description: str | None, txn_date: str, actor: str | None):
    """Add capital to a fund.

    Examples:
        clinicledger fund in --domain medicine --amount 50000 --purpose "Owner investment"
    """
    service = LedgerService(ctx.obj["db"], domain)
    try:
        txn = service.add_fund(amount, purpose, description, txn_date, actor)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded fund in {txn.transaction_no}")
    click.echo(f"  Amount: {format_amount(txn.amount)}")
    click.echo(f"  Balance: {format_amount(service.get_balance())}")


@fund_group.command("out")
@fund_movement_options
@click.pass_context
def fund_out(ctx, domain: str, amount: str, purpose: str, description: str | None, txn_date: str, actor: str | None):
    """Withdraw capital from a fund.

    Fails without recording anything when the amount exceeds the balance.
    """
    service = LedgerService(ctx.obj["db"], domain)
    try:
        txn = service.withdraw_fund(amount, purpose, description, txn_date, actor)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded fund out {txn.transaction_no}")
    click.echo(f"  Amount: {format_amount(txn.amount)}")
    click.echo(f"  Balance: {format_amount(service.get_balance())}")


@fund_group.command("ledger")
@domain_option
@click.option("--purpose", help="Only movements with this purpose (investor name)")
@period_options
@click.option("--page", default=1, show_default=True, type=int, help="Page number")
@click.option("--page-size", default=50, show_default=True, type=int, help="Rows per page")
@click.option("--snapshot", type=int, help="Snapshot ID from an earlier page")
@click.option("--list-purposes", is_flag=True, help="List known purposes and exit")
@click.pass_context
def fund_ledger(
    ctx,
    domain: str,
    purpose: str | None,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
    page: int,
    page_size: int,
    snapshot: int | None,
    list_purposes: bool,
):
    """Show the running balance of fund movements."""
    service = LedgerService(ctx.obj["db"], domain)

    if list_purposes:
        purposes = service.fund_purposes()
        if not purposes:
            click.echo("No fund movements found.")
        for name in purposes:
            click.echo(name)
        return

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags(this_month, this_year, last_month, last_year),
    )
    try:
        result = service.fund_ledger(
            LedgerFilter(date_from=start, date_to=end, purpose=purpose),
            page=page,
            page_size=page_size,
            snapshot_id=snapshot,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    print_ledger_page(result, f"{service.domain.label} fund ledger")


@fund_group.command("history")
@domain_option
@click.option("--limit", default=20, show_default=True, type=int, help="Number of movements to show")
@click.pass_context
def fund_history(ctx, domain: str, limit: int):
    """Show the latest fund movements, newest first."""
    service = LedgerService(ctx.obj["db"], domain)
    movements = service.fund_history(limit)
    if not movements:
        click.echo("No fund movements found.")
        return

    click.echo(f"\n{service.domain.label} fund history:")
    click.echo("-" * 90)
    click.echo(f"{'Date':<12} {'Transaction':<22} {'Type':<10} {'Amount':>14} {'Purpose':<30}")
    click.echo("-" * 90)
    for txn in movements:
        click.echo(
            f"{str(txn.transaction_date):<12} {txn.transaction_no:<22} {txn.entry_type.value:<10} "
            f"{format_amount(txn.amount):>14} {(txn.purpose or '')[:30]:<30}"
        )


def register_commands(cli):
    """Register fund commands with main CLI."""
    cli.add_command(fund_group, name="fund")
