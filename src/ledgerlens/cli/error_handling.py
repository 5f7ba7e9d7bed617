"""CLI error handling helpers."""

import logging

import click

from ledgerlens.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error with its code and exit with failure."""
    code = getattr(error, "code", DomainError.code)
    click.echo(f"Error [{code}]: {error}", err=True)
    ctx.exit(1)


def handle_unexpected_error(ctx: click.Context, error: Exception) -> None:
    """Log an unexpected failure and exit without exposing its details."""
    logger.exception("Unexpected error in command %s", ctx.info_name, exc_info=error)
    click.echo("Error: internal error", err=True)
    ctx.exit(1)
