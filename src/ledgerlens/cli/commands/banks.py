"""Supported bank listing command."""

import click
from ledgerlens.parsers.registry import list_banks


@click.command("banks")
def banks():
    """List banks whose statements can be imported."""
    click.echo(f"{'ID':<12} {'Name':<16} {'Country':<8} Currency")
    click.echo("-" * 46)
    for bank in list_banks():
        click.echo(f"{bank['id']:<12} {bank['name']:<16} {bank['country']:<8} {bank['currency']}")


def register_commands(cli):
    """Register banks command with main CLI."""
    cli.add_command(banks)
