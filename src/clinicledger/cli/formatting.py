"""Shared CLI options and output formatting."""

from decimal import Decimal

import click

from clinicledger.domain.domains import DOMAINS
from clinicledger.domain.entities import LedgerPage

domain_option = click.option(
    "--domain",
    "-d",
    required=True,
    type=click.Choice(sorted(DOMAINS), case_sensitive=False),
    help="Fund domain (medicine, operation or hospital)",
)


def format_amount(amount: Decimal) -> str:
    """Format an amount with thousands separators, e.g. 1,234.50."""
    return f"{amount:,.2f}"


def print_ledger_page(page: LedgerPage, title: str) -> None:
    """Print ledger rows with running balance and totals."""
    if page.total_rows == 0:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{title} (page {page.page} of {page.page_count}, snapshot {page.snapshot_id}):")
    click.echo("-" * 110)
    click.echo(
        f"{'Date':<12} {'Transaction':<22} {'Description':<30} {'Previous':>14} {'Amount':>14} {'Balance':>14}"
    )
    click.echo("-" * 110)
    if page.opening_balance:
        click.echo(f"{'':<12} {'Opening balance':<22} {'':<30} {'':>14} {'':>14} {format_amount(page.opening_balance):>14}")

    for row in page.rows:
        description = (row.description or row.category or row.purpose or "")[:30]
        click.echo(
            f"{str(row.transaction_date):<12} {row.transaction_no or '':<22} {description:<30} "
            f"{format_amount(row.previous_balance):>14} {format_amount(row.signed_amount):>14} "
            f"{format_amount(row.balance):>14}"
        )

    totals = page.totals
    click.echo("-" * 110)
    click.echo(
        f"{'TOTAL':<12} In: {format_amount(totals.total_in)} | Out: {format_amount(totals.total_out)} | "
        f"Net: {format_amount(totals.net_movement)} | Balance: {format_amount(totals.final_balance)} | "
        f"Count: {totals.row_count}"
    )
    if page.has_next:
        click.echo(f"More rows: use --page {page.page + 1} --snapshot {page.snapshot_id}")
