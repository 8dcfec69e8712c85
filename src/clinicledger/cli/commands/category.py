"""Expense category management commands."""

import click

from clinicledger.cli.error_handling import handle_domain_error
from clinicledger.cli.formatting import domain_option
from clinicledger.domain.category import CategoryService
from clinicledger.domain.errors import DomainError


@click.group()
def category_group():
    """Manage expense categories."""
    pass


@category_group.command("list")
@domain_option
@click.option("--active-only", is_flag=True, help="Hide inactive categories")
@click.pass_context
def list_categories(ctx, domain: str, active_only: bool):
    """List categories with their transaction counts."""
    service = CategoryService(ctx.obj["db"], domain)
    categories = service.list_categories_with_counts(active_only=active_only)
    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"\n{service.domain.label} categories:")
    click.echo("-" * 70)
    click.echo(f"{'ID':<6} {'Name':<40} {'Status':<10} {'Count':>8}")
    click.echo("-" * 70)
    for category, count in categories:
        status = "active" if category.is_active else "inactive"
        click.echo(f"{category.id:<6} {category.name[:40]:<40} {status:<10} {count:>8}")


@category_group.command("create")
@domain_option
@click.argument("name")
@click.pass_context
def create_category(ctx, domain: str, name: str):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"], domain)
    try:
        category = service.create_category(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{category.name}' (ID: {category.id})")


@category_group.command("rename")
@domain_option
@click.argument("category_id", type=int)
@click.argument("name")
@click.pass_context
def rename_category(ctx, domain: str, category_id: int, name: str):
    """Rename a category. Recorded transactions keep their label."""
    service = CategoryService(ctx.obj["db"], domain)
    try:
        category = service.rename_category(category_id, name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed category {category.id} to '{category.name}'")


@category_group.command("activate")
@domain_option
@click.argument("category_id", type=int)
@click.pass_context
def activate_category(ctx, domain: str, category_id: int):
    """Allow new expenses in a category."""
    service = CategoryService(ctx.obj["db"], domain)
    try:
        category = service.set_active(category_id, True)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Activated category '{category.name}'")


@category_group.command("deactivate")
@domain_option
@click.argument("category_id", type=int)
@click.pass_context
def deactivate_category(ctx, domain: str, category_id: int):
    """Stop new expenses in a category."""
    service = CategoryService(ctx.obj["db"], domain)
    try:
        category = service.set_active(category_id, False)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated category '{category.name}'")


@category_group.command("delete")
@domain_option
@click.argument("category_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_category(ctx, domain: str, category_id: int, yes: bool):
    """Delete a category that no transaction uses."""
    service = CategoryService(ctx.obj["db"], domain)
    try:
        category = service.require_category(category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete category '{category.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_category(category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category '{category.name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
