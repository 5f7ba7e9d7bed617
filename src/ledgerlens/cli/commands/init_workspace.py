"""Workspace initialization command."""

import click
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.domain.category import SUPPORTED_LOCALES, CategoryService
from ledgerlens.domain.errors import DomainError
from ledgerlens.domain.workspace import WorkspaceService


@click.command("init")
@click.option("--name", default="Personal", show_default=True, help="Workspace name")
@click.option(
    "--locale",
    type=click.Choice(SUPPORTED_LOCALES),
    default="en",
    show_default=True,
    help="Language of the default category names",
)
@click.pass_context
def init_workspace(ctx, name: str, locale: str):
    """Create a workspace with default categories and bank patterns."""
    db = ctx.obj["db"]
    workspace_service = WorkspaceService(db)
    category_service = CategoryService(db)

    try:
        workspace_id = workspace_service.create_workspace(name)
        created = category_service.seed_workspace(workspace_id, locale=locale)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created workspace '{name}' (ID: {workspace_id}) with {created} categories")


def register_commands(cli):
    """Register init command with main CLI."""
    cli.add_command(init_workspace)
