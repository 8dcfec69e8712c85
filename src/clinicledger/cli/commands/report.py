"""Report commands."""

from datetime import date

import click

from clinicledger.cli.date_filters import parse_cli_date
from clinicledger.cli.error_handling import handle_domain_error
from clinicledger.cli.formatting import domain_option, format_amount
from clinicledger.domain.entities import CategoryTotal
from clinicledger.domain.errors import DomainError
from clinicledger.domain.reports import ReportService

year_option = click.option("--year", type=int, help="Year (defaults to the current year)")
month_option = click.option("--month", type=click.IntRange(1, 12), help="Month 1-12 (defaults to the current month)")
as_of_option = click.option("--as-of", help="Reference date (defaults to today)")


def _period(year: int | None, month: int | None) -> tuple[int, int]:
    today = date.today()
    return year or today.year, month or today.month


def _print_category_totals(totals: list[CategoryTotal]) -> None:
    click.echo("-" * 70)
    click.echo(f"{'Category':<40} {'Amount':>18} {'Count':>8}")
    click.echo("-" * 70)
    for total in totals:
        click.echo(f"{total.category[:40]:<40} {format_amount(total.amount):>18} {total.count:>8}")


@click.group()
def report_group():
    """Period reports and analytics."""
    pass


@report_group.command("monthly")
@domain_option
@year_option
@month_option
@click.pass_context
def monthly(ctx, domain: str, year: int | None, month: int | None):
    """Monthly income, expense and balance report."""
    service = ReportService(ctx.obj["db"], domain)
    year, month = _period(year, month)
    try:
        report = service.monthly_report(year, month)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{service.domain.label} report for {year:04d}-{month:02d}:")
    click.echo("-" * 40)
    click.echo(f"{'Opening balance':<20} {format_amount(report.opening):>18}")
    click.echo(f"{'Income':<20} {format_amount(report.income):>18}")
    click.echo(f"{'Expense':<20} {format_amount(report.expense):>18}")
    click.echo(f"{'Net':<20} {format_amount(report.net):>18}")
    click.echo(f"{'Fund in':<20} {format_amount(report.fund_in):>18}")
    click.echo(f"{'Fund out':<20} {format_amount(report.fund_out):>18}")
    click.echo(f"{'Closing balance':<20} {format_amount(report.closing):>18}")
    click.echo(f"{'Transactions':<20} {report.count:>18}")


@report_group.command("categories")
@domain_option
@year_option
@month_option
@click.option(
    "--type",
    "entry_type",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    default="expense",
    show_default=True,
    help="Entry type to break down",
)
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice(["name", "amount"], case_sensitive=False),
    default="name",
    show_default=True,
    help="Sort by category name or by amount (highest first)",
)
@click.pass_context
def categories(ctx, domain: str, year: int | None, month: int | None, entry_type: str, sort_by: str):
    """Per-category totals for a month."""
    service = ReportService(ctx.obj["db"], domain)
    year, month = _period(year, month)
    try:
        totals = service.category_breakdown(year, month, entry_type.lower(), sort_by.lower())
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not totals:
        click.echo(f"No {entry_type.lower()} entries for {year:04d}-{month:02d}.")
        return
    click.echo(f"\n{service.domain.label} {entry_type.lower()} by category, {year:04d}-{month:02d}:")
    _print_category_totals(totals)


@report_group.command("trend")
@domain_option
@click.option("--months", default=6, show_default=True, type=int, help="Number of months")
@as_of_option
@click.pass_context
def trend(ctx, domain: str, months: int, as_of: str | None):
    """Income and expense per month, oldest first."""
    service = ReportService(ctx.obj["db"], domain)
    as_of_date = parse_cli_date(ctx, as_of, "as-of date") or date.today()
    try:
        points = service.trend(months, as_of_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{service.domain.label} trend:")
    click.echo("-" * 50)
    click.echo(f"{'Month':<10} {'Income':>18} {'Expense':>18}")
    click.echo("-" * 50)
    for point in points:
        click.echo(f"{point.period_key:<10} {format_amount(point.income):>18} {format_amount(point.expense):>18}")


@report_group.command("daily")
@domain_option
@click.option("--day", default="today", show_default=True, help="Day to report on")
@click.pass_context
def daily(ctx, domain: str, day: str):
    """Income and expense for a single day."""
    service = ReportService(ctx.obj["db"], domain)
    report_day = parse_cli_date(ctx, day, "day")
    report = service.daily_report(report_day)

    click.echo(f"\n{service.domain.label} report for {report.day}:")
    click.echo(f"  Income: {format_amount(report.income)}")
    click.echo(f"  Expense: {format_amount(report.expense)}")
    click.echo(f"  Net: {format_amount(report.net)}")
    click.echo(f"  Transactions: {report.count}")


@report_group.command("balance-sheet")
@domain_option
@as_of_option
@click.pass_context
def balance_sheet(ctx, domain: str, as_of: str | None):
    """Totals, balance and purchase/sale figures."""
    service = ReportService(ctx.obj["db"], domain)
    as_of_date = parse_cli_date(ctx, as_of, "as-of date") or date.today()
    sheet = service.balance_sheet(as_of_date)

    click.echo(f"\n{service.domain.label} balance sheet as of {as_of_date}:")
    click.echo("-" * 45)
    lines = [
        ("Balance", sheet.balance),
        ("Total income", sheet.total_income),
        ("Total expense", sheet.total_expense),
        ("Total fund in", sheet.total_fund_in),
        ("Total fund out", sheet.total_fund_out),
    ]
    if service.domain.purchase_category or service.domain.sale_category:
        lines += [
            ("Total purchases", sheet.total_purchases),
            ("Total sales", sheet.total_sales),
            ("Trading profit", sheet.trading_profit),
            ("Purchases this month", sheet.current_month_purchases),
            ("Sales this month", sheet.current_month_sales),
        ]
    for label, amount in lines:
        click.echo(f"{label:<25} {format_amount(amount):>18}")


@report_group.command("analytics")
@domain_option
@year_option
@month_option
@as_of_option
@click.pass_context
def analytics(ctx, domain: str, year: int | None, month: int | None, as_of: str | None):
    """Dashboard analytics: trend, purchase vs. sales, top expenses."""
    service = ReportService(ctx.obj["db"], domain)
    year, month = _period(year, month)
    as_of_date = parse_cli_date(ctx, as_of, "as-of date") or date.today()
    try:
        result = service.analytics(year, month, as_of_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{service.domain.label} analytics:")
    click.echo("\nMonthly trend:")
    for point in result.monthly_trend:
        click.echo(
            f"  {point.period_key:<10} income {format_amount(point.income):>16}  "
            f"expense {format_amount(point.expense):>16}"
        )
    if service.domain.purchase_category or service.domain.sale_category:
        click.echo("\nPurchases vs. sales:")
        for point in result.purchase_vs_sales:
            click.echo(
                f"  {point.period_key:<10} purchases {format_amount(point.purchases):>16}  "
                f"sales {format_amount(point.sales):>16}"
            )
        click.echo(f"\nProfit margin: {result.profit_margin}%")
    click.echo(f"\nTop expense categories for {year:04d}-{month:02d}:")
    if result.top_expense_categories:
        _print_category_totals(list(result.top_expense_categories))
    else:
        click.echo("  None")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
