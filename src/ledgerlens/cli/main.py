"""Main CLI entry point."""

import logging

import click
from ledgerlens.cli.error_handling import handle_domain_error, handle_unexpected_error
from ledgerlens.database.factories import create_sqlite_database
from ledgerlens.domain.errors import DomainError

# Import and register all commands at module level
from ledgerlens.cli.commands import (
    banks,
    category,
    init_workspace,
    ledger,
    pattern,
    recurring,
    transaction,
    upload,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LedgerLensGroup(click.Group):
    """Command group that turns uncaught failures into a generic error."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except (click.exceptions.Exit, click.exceptions.Abort, click.ClickException):
            raise
        except DomainError as e:
            handle_domain_error(ctx, e)
        except Exception as e:
            handle_unexpected_error(ctx, e)


@click.group(cls=LedgerLensGroup)
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERLENS_DB_PATH environment variable)",
    envvar="LEDGERLENS_DB_PATH",
)
@click.option(
    "--workspace",
    "workspace_id",
    type=int,
    default=1,
    show_default=True,
    envvar="LEDGERLENS_WORKSPACE",
    help="Workspace ID to operate on",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERLENS_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, workspace_id: int, log_level: str):
    """ledgerlens - Bank statement intelligence.

    Import PDF bank statements, categorize their transactions with
    per-bank patterns and detect recurring payments.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["workspace_id"] = workspace_id

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init_workspace.register_commands(cli)
banks.register_commands(cli)
upload.register_commands(cli)
ledger.register_commands(cli)
category.register_commands(cli)
pattern.register_commands(cli)
transaction.register_commands(cli)
recurring.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
