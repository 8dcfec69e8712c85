"""CLI helpers for date parsing and date range resolution."""

from datetime import date

import click

from clinicledger.utils.date_parser import get_date_range, parse_date


def period_options(func):
    """Attach --start-date/--end-date and the period flags to a command."""
    options = [
        click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')"),
        click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')"),
        click.option("--this-month", is_flag=True, help="Filter to current month"),
        click.option("--this-year", is_flag=True, help="Filter to current year"),
        click.option("--last-month", is_flag=True, help="Filter to previous month"),
        click.option("--last-year", is_flag=True, help="Filter to previous year"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def parse_cli_date(ctx: click.Context, value: str | None, label: str = "date") -> date | None:
    """Parse an optional date option, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --last-month, --last-year) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period)
                break
    else:
        start = parse_cli_date(ctx, start_date, "start date")
        end = parse_cli_date(ctx, end_date, "end date")

        if start is None and end is None and default_range is not None:
            start, end = default_range

    return start, end


def period_flags(this_month: bool, this_year: bool, last_month: bool, last_year: bool) -> dict[str, bool]:
    return {
        "this-month": this_month,
        "this-year": this_year,
        "last-month": last_month,
        "last-year": last_year,
    }
