"""Output formatting helpers shared by CLI commands."""

from decimal import Decimal

from ledgerlens.domain.entities import TransactionDirection


def format_amount(amount: Decimal) -> str:
    return f"{amount:,.2f}"


def format_signed_amount(amount: Decimal, direction: TransactionDirection) -> str:
    """Show income with a plus sign and expenses with a minus sign."""
    sign = "+" if direction == TransactionDirection.INCOME else "-"
    return f"{sign}{format_amount(amount)}"
