"""Recurring pattern commands."""

import click
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import format_amount, format_signed_amount
from ledgerlens.domain.entities import RecurringPattern
from ledgerlens.domain.errors import DomainError
from ledgerlens.domain.recurring import RecurringService


def _describe(pattern: RecurringPattern) -> str:
    state = "active" if pattern.is_active else "inactive"
    return (
        f"  {pattern.id}: {pattern.description_pattern} - {pattern.frequency.value} {pattern.direction.value}, "
        f"avg {format_amount(pattern.avg_amount)}, {pattern.occurrence_count} occurrences ({state})"
    )


@click.group()
def recurring_group():
    """Detect and manage recurring transactions."""
    pass


@recurring_group.command("detect")
@click.pass_context
def detect(ctx):
    """Scan the workspace for recurring transactions."""
    service = RecurringService(ctx.obj["db"])
    result = service.detect(ctx.obj["workspace_id"])
    click.echo(f"Detected {result.detected} new recurring pattern(s)")
    for pattern in result.patterns:
        click.echo(_describe(pattern))


@recurring_group.command("list")
@click.option("--active", "active_only", is_flag=True, help="Only show active patterns")
@click.pass_context
def list_patterns(ctx, active_only: bool):
    """List recurring patterns."""
    service = RecurringService(ctx.obj["db"])
    patterns = service.list_patterns(ctx.obj["workspace_id"], active_only=active_only)
    if not patterns:
        click.echo("No recurring patterns found. Run 'recurring detect' first.")
        return
    click.echo("\nRecurring patterns:")
    for pattern in patterns:
        click.echo(_describe(pattern))


@recurring_group.command("summary")
@click.pass_context
def summary(ctx):
    """Show the estimated monthly cost of active recurring patterns."""
    service = RecurringService(ctx.obj["db"])
    result = service.get_summary(ctx.obj["workspace_id"])
    click.echo(f"Active patterns: {result.total_active}")
    click.echo(f"Estimated monthly cost: {format_amount(result.estimated_monthly_cost)}")


def _set_active(ctx, pattern_id: int, is_active: bool) -> None:
    service = RecurringService(ctx.obj["db"])
    try:
        service.set_active(pattern_id, ctx.obj["workspace_id"], is_active)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Recurring pattern {pattern_id} {'activated' if is_active else 'deactivated'}")


@recurring_group.command("activate")
@click.argument("pattern_id", type=int)
@click.pass_context
def activate(ctx, pattern_id: int):
    """Include a pattern in the summary."""
    _set_active(ctx, pattern_id, True)


@recurring_group.command("deactivate")
@click.argument("pattern_id", type=int)
@click.pass_context
def deactivate(ctx, pattern_id: int):
    """Exclude a pattern from the summary."""
    _set_active(ctx, pattern_id, False)


@recurring_group.command("delete")
@click.argument("pattern_id", type=int)
@click.pass_context
def delete(ctx, pattern_id: int):
    """Delete a pattern, keeping its transactions."""
    service = RecurringService(ctx.obj["db"])
    try:
        service.delete_pattern(pattern_id, ctx.obj["workspace_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted recurring pattern {pattern_id}")


@recurring_group.command("show")
@click.argument("pattern_id", type=int)
@click.pass_context
def show(ctx, pattern_id: int):
    """Show a pattern and its transactions."""
    service = RecurringService(ctx.obj["db"])
    workspace_id = ctx.obj["workspace_id"]
    try:
        pattern = service.get_pattern(pattern_id, workspace_id)
        transactions = service.get_pattern_transactions(pattern_id, workspace_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(_describe(pattern))
    for txn in transactions:
        amount = format_signed_amount(txn.amount, txn.direction)
        click.echo(f"    {txn.date}  {amount:>12}  {txn.description}")


def register_commands(cli):
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
