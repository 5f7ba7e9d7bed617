"""Transaction commands."""

import click
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import format_signed_amount
from ledgerlens.domain.category import CategoryService
from ledgerlens.domain.entities import TransactionDirection
from ledgerlens.domain.errors import DomainError
from ledgerlens.domain.transaction import TransactionService


@click.group()
def transaction_group():
    """Browse and categorize transactions."""
    pass


@transaction_group.command("list")
@click.option("--ledger", "ledger_id", type=int, help="Ledger ID")
@click.option("--category", "category_id", type=int, help="Category ID")
@click.option("--uncategorized", is_flag=True, help="Only show transactions without a category")
@click.option("--review", is_flag=True, help="Only show transactions flagged for review")
@click.option("--year", type=int, help="Only show transactions from this year")
@click.option("--month", type=click.IntRange(1, 12), help="Only show this month of --year")
@click.option(
    "--direction",
    type=click.Choice([d.value for d in TransactionDirection]),
    help="Only show income or expenses",
)
@click.option("--search", help="Only show descriptions containing this text")
@click.pass_context
def list_transactions(
    ctx,
    ledger_id: int | None,
    category_id: int | None,
    uncategorized: bool,
    review: bool,
    year: int | None,
    month: int | None,
    direction: str | None,
    search: str | None,
):
    """List transactions with optional filters."""
    db = ctx.obj["db"]
    workspace_id = ctx.obj["workspace_id"]
    service = TransactionService(db)

    try:
        if review:
            transactions = service.list_needing_review(workspace_id)
        else:
            transactions = service.list_transactions(
                workspace_id,
                ledger_id=ledger_id,
                category_id=category_id,
                uncategorized=uncategorized,
                year=year,
                month=month,
                direction=TransactionDirection(direction) if direction else None,
                search=search,
            )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No transactions found.")
        return

    categories = {c.id: c.name for c in CategoryService(db).list_categories(workspace_id)}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    for txn in transactions:
        amount = format_signed_amount(txn.amount, txn.direction)
        category = categories.get(txn.category_id, "Uncategorized")
        flags = ""
        if txn.is_manual:
            flags += " [manual]"
        if txn.needs_review:
            flags += " [review]"
        click.echo(f"  {txn.id:>5}  {txn.date}  {amount:>12}  {category:<16} {txn.description}{flags}")


@transaction_group.command("categorize")
@click.argument("transaction_id", type=int)
@click.argument("category_id", type=int)
@click.pass_context
def categorize(ctx, transaction_id: int, category_id: int):
    """Set a transaction's category by hand.

    Manually categorized transactions are never changed by pattern sweeps.
    """
    service = TransactionService(ctx.obj["db"])
    try:
        service.set_category(transaction_id, category_id, ctx.obj["workspace_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Transaction {transaction_id} categorized")


@transaction_group.command("clear-manual")
@click.argument("transaction_id", type=int)
@click.pass_context
def clear_manual(ctx, transaction_id: int):
    """Let pattern sweeps categorize a transaction again."""
    service = TransactionService(ctx.obj["db"])
    try:
        service.clear_manual(transaction_id, ctx.obj["workspace_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Transaction {transaction_id} is no longer manually categorized")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a single transaction from its ledger."""
    service = TransactionService(ctx.obj["db"])
    workspace_id = ctx.obj["workspace_id"]
    try:
        service.get_transaction(transaction_id, workspace_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id, workspace_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
