"""Income and expense posting commands."""

import click

from clinicledger.cli.error_handling import handle_domain_error
from clinicledger.cli.formatting import domain_option, format_amount
from clinicledger.domain.errors import DomainError
from clinicledger.domain.ledger import LedgerService


def _echo_posted(service: LedgerService, txn) -> None:
    click.echo(f"Recorded {txn.entry_type.value} {txn.transaction_no}")
    click.echo(f"  Date: {txn.transaction_date}")
    click.echo(f"  Amount: {format_amount(txn.amount)}")
    click.echo(f"  Category: {txn.category}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    click.echo(f"  Balance: {format_amount(service.get_balance())}")


@click.group()
def expense_group():
    """Record expenses."""
    pass


@expense_group.command("add")
@domain_option
@click.option("--amount", required=True, help="Amount (e.g., 1200 or 1,250.50)")
@click.option("--category", help="Category name (created when new)")
@click.option("--category-id", type=int, help="Existing category ID (overrides --category)")
@click.option("--description", help="Description")
@click.option("--date", "txn_date", default="today", show_default=True, help="Transaction date")
@click.option("--actor", help="Who recorded the expense")
@click.pass_context
def add_expense(
    ctx,
    domain: str,
    amount: str,
    category: str | None,
    category_id: int | None,
    description: str | None,
    txn_date: str,
    actor: str | None,
):
    """Record an expense against a fund.

    Examples:
        clinicledger expense add --domain hospital --amount 1200 --category "House Security"
        clinicledger expense add --domain medicine --amount 500 --category-id 3 --date yesterday
    """
    service = LedgerService(ctx.obj["db"], domain)
    try:
        txn = service.add_expense(amount, category, description, txn_date, actor, category_id=category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_posted(service, txn)


@click.group()
def income_group():
    """Record income."""
    pass


@income_group.command("add")
@domain_option
@click.option("--amount", required=True, help="Amount (e.g., 1200 or 1,250.50)")
@click.option("--category", required=True, help="Income category label")
@click.option("--description", help="Description")
@click.option("--date", "txn_date", default="today", show_default=True, help="Transaction date")
@click.option("--actor", help="Who recorded the income")
@click.option("--reference-type", help="Type of the originating record (e.g. sale)")
@click.option("--reference-id", type=int, help="ID of the originating record")
@click.pass_context
def add_income(
    ctx,
    domain: str,
    amount: str,
    category: str,
    description: str | None,
    txn_date: str,
    actor: str | None,
    reference_type: str | None,
    reference_id: int | None,
):
    """Record income into a fund."""
    service = LedgerService(ctx.obj["db"], domain)
    try:
        txn = service.add_income(
            amount,
            category,
            description,
            txn_date,
            actor,
            reference_type=reference_type,
            reference_id=reference_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_posted(service, txn)


def register_commands(cli):
    """Register income and expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
    cli.add_command(income_group, name="income")
