"""Category management commands."""

import click
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.domain.category import CategoryService
from ledgerlens.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories of the workspace."""
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories(ctx.obj["workspace_id"])
    if not categories:
        click.echo("No categories found. Run 'init' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        marker = "" if cat.is_default else " (custom)"
        click.echo(f"  {cat.name} (ID: {cat.id}){marker}")


@category_group.command("show")
@click.argument("category_id", type=int)
@click.option("--bank", "bank_id", help="Only show patterns for this bank")
@click.pass_context
def show_category(ctx, category_id: int, bank_id: str | None):
    """Show a category and its patterns."""
    service = CategoryService(ctx.obj["db"])
    try:
        category, patterns = service.get_category_with_patterns(category_id, ctx.obj["workspace_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if bank_id is not None:
        patterns = [p for p in patterns if p.bank_id == bank_id]

    click.echo(f"\n{category.name} (ID: {category.id})")
    if category.color or category.icon:
        click.echo(f"  Color: {category.color or '-'}  Icon: {category.icon or '-'}")
    if not patterns:
        click.echo("  No patterns")
        return
    click.echo("  Patterns:")
    for p in patterns:
        click.echo(f"    [{p.id}] {p.bank_id}: {p.pattern} (priority {p.priority})")


@category_group.command("create")
@click.argument("name")
@click.option("--color", help="Display color (e.g. #22c55e)")
@click.option("--icon", help="Display icon name")
@click.pass_context
def create_category(ctx, name: str, color: str | None, icon: str | None):
    """Create a custom category."""
    service = CategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(ctx.obj["workspace_id"], name, color=color, icon=icon)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created category '{name.strip()}' (ID: {category_id})")


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.pass_context
def delete_category(ctx, category_id: int):
    """Delete a category and its patterns."""
    service = CategoryService(ctx.obj["db"])
    try:
        service.delete_category(category_id, ctx.obj["workspace_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted category {category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
