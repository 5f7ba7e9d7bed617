"""Category pattern commands."""

import click
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.domain.category import CategoryService
from ledgerlens.domain.errors import DomainError


@click.group()
def pattern_group():
    """Manage description patterns that assign categories."""
    pass


@pattern_group.command("add")
@click.argument("category_id", type=int)
@click.argument("pattern")
@click.option("--bank", "bank_id", required=True, help="Bank ID the pattern applies to")
@click.option("--priority", type=int, default=0, show_default=True, help="Rank (0 wins over higher values)")
@click.pass_context
def add_pattern(ctx, category_id: int, pattern: str, bank_id: str, priority: int):
    """Add a pattern and recategorize matching transactions.

    Prefix PATTERN with 'regex:' for a regular expression or with '!' to
    exclude matching descriptions from the category.
    """
    service = CategoryService(ctx.obj["db"])
    try:
        pattern_id, recategorized = service.create_pattern(
            category_id, ctx.obj["workspace_id"], bank_id, pattern, priority
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created pattern {pattern_id}; recategorized {recategorized} transaction(s)")


@pattern_group.command("quick-add")
@click.argument("category_id", type=int)
@click.argument("pattern")
@click.option("--bank", "bank_id", required=True, help="Bank ID the pattern applies to")
@click.pass_context
def quick_add_pattern(ctx, category_id: int, pattern: str, bank_id: str):
    """Add a top-priority pattern without recategorizing."""
    service = CategoryService(ctx.obj["db"])
    try:
        pattern_id = service.create_quick_pattern(
            category_id, ctx.obj["workspace_id"], bank_id, pattern
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created pattern {pattern_id}")


@pattern_group.command("delete")
@click.argument("category_id", type=int)
@click.argument("pattern_id", type=int)
@click.pass_context
def delete_pattern(ctx, category_id: int, pattern_id: int):
    """Delete a pattern. Categorized transactions keep their category."""
    service = CategoryService(ctx.obj["db"])
    try:
        service.delete_pattern(category_id, pattern_id, ctx.obj["workspace_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted pattern {pattern_id}")


@pattern_group.command("check")
@click.argument("pattern")
@click.option("--bank", "bank_id", required=True, help="Bank ID to check")
@click.pass_context
def check_pattern(ctx, pattern: str, bank_id: str):
    """Check whether a pattern text is already in use."""
    service = CategoryService(ctx.obj["db"])
    exists, category_name = service.check_pattern_exists(ctx.obj["workspace_id"], bank_id, pattern)
    if exists:
        click.echo(f"Pattern '{pattern}' exists in category \"{category_name}\"")
    else:
        click.echo(f"Pattern '{pattern}' is available")


def register_commands(cli):
    """Register pattern commands with main CLI."""
    cli.add_command(pattern_group, name="pattern")
