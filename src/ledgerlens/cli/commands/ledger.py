"""Ledger management commands."""

import click
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.domain.errors import DomainError
from ledgerlens.domain.upload import UploadService


@click.group()
def ledger_group():
    """Manage imported statements."""
    pass


@ledger_group.command("list")
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum ledgers to show")
@click.option("--offset", type=int, default=0, show_default=True, help="Ledgers to skip")
@click.pass_context
def list_ledgers(ctx, limit: int, offset: int):
    """List imported statements, newest first."""
    service = UploadService(ctx.obj["db"])
    ledgers, total = service.list_ledgers(ctx.obj["workspace_id"], limit=limit, offset=offset)

    if not ledgers:
        click.echo("No ledgers found. Use 'upload' to import a statement.")
        return

    click.echo(f"\nLedgers ({len(ledgers)} of {total}):")
    for item in ledgers:
        period = f"{item.period_start or '?'} to {item.period_end or '?'}"
        click.echo(
            f"  {item.id}: {item.filename} [{item.bank_id}] {period}, "
            f"{item.transaction_count} transactions"
        )


@ledger_group.command("delete")
@click.argument("ledger_id", type=int)
@click.pass_context
def delete_ledger(ctx, ledger_id: int):
    """Delete a ledger and its transactions."""
    service = UploadService(ctx.obj["db"])
    try:
        service.delete_ledger(ledger_id, ctx.obj["workspace_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted ledger {ledger_id}")


def register_commands(cli):
    """Register ledger commands with main CLI."""
    cli.add_command(ledger_group, name="ledger")
