"""Statement upload command."""

from pathlib import Path

import click
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import format_signed_amount
from ledgerlens.domain.errors import DomainError
from ledgerlens.domain.upload import UploadService
from ledgerlens.parsers.registry import supported_bank_ids


@click.command("upload")
@click.argument("pdf_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--bank", "bank_id", required=True, help=f"Bank ID ({', '.join(supported_bank_ids())})")
@click.option("--verbose", "-v", is_flag=True, help="List every imported transaction")
@click.pass_context
def upload(ctx, pdf_file: str, bank_id: str, verbose: bool):
    """Import a PDF bank statement."""
    db = ctx.obj["db"]
    service = UploadService(db)
    path = Path(pdf_file)

    try:
        result = service.process_upload(
            path.read_bytes(), path.name, bank_id, ctx.obj["workspace_id"]
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nImported {result.filename} into ledger {result.ledger_id}:")
    click.echo(f"  Bank: {result.bank_id}")
    if result.period_start or result.period_end:
        click.echo(f"  Period: {result.period_start or '?'} to {result.period_end or '?'}")
    click.echo(f"  Transactions: {result.transaction_count}")
    if result.replaced_ledger_id is not None:
        click.echo(f"  Replaced earlier upload (ledger {result.replaced_ledger_id})")

    review = sum(1 for item in result.transactions if item.transaction.needs_review)
    if review:
        click.echo(f"  Needing review: {review}")

    if verbose:
        click.echo("")
        for item in result.transactions:
            txn = item.transaction
            amount = format_signed_amount(txn.amount, txn.direction)
            category = item.category_name or "-"
            click.echo(f"  {txn.date}  {amount:>12}  {category:<16} {txn.description}")


def register_commands(cli):
    """Register upload command with main CLI."""
    cli.add_command(upload)
