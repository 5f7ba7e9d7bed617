"""Building blocks shared by the per-bank statement parsers."""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Optional

from ledgerlens.domain.entities import (
    BankConfig,
    ParsedTransaction,
    ParseResult,
    TransactionDirection,
)
from ledgerlens.parsers.pdf_text import ensure_pdf, extract_text_lines
from ledgerlens.utils.file_hash import generate_file_hash

logger = logging.getLogger(__name__)

# (period_start, period_end, transactions) read from a statement's text lines
LineParseResult = tuple[Optional[str], Optional[str], list[ParsedTransaction]]


@dataclass(frozen=True)
class BankParserDefinition:
    """Everything the application knows about one supported bank.

    Attributes:
        config: Static bank metadata
        parse: Turns raw PDF bytes into a ParseResult
        category_patterns: Seed keyword patterns per default category name,
            in priority order
        transaction_patterns: Regexes naming the kinds of movement found on
            the bank's statements (card purchase, transfer in, ...)
    """

    config: BankConfig
    parse: Callable[[bytes], ParseResult]
    category_patterns: dict[str, list[str]]
    transaction_patterns: dict[str, re.Pattern] = field(default_factory=dict)


@dataclass(frozen=True)
class DirectionMarkers:
    """Lower-case description fragments that identify incoming money."""

    transfer: tuple[str, ...]
    preposition: tuple[str, ...]
    credit: tuple[str, ...] = ()
    payer: tuple[str, ...] = ()


@dataclass(frozen=True)
class AmountColumns:
    """Amount and balance read from the numeric columns of a line.

    ``direction`` is None when the layout itself does not say which way the
    money moved (the merged single amount column).
    """

    amount: Decimal
    balance: Decimal
    direction: Optional[TransactionDirection] = None
    needs_review: bool = False


def classify_direction(description: str, markers: DirectionMarkers) -> TransactionDirection:
    """Decide income vs expense from a transaction description.

    A line is income when it is a received transfer (transfer marker together
    with the "from" preposition), or carries a credit marker, or names a payer.
    """
    text = f" {description.lower()} "
    is_transfer = any(marker in text for marker in markers.transfer)
    has_preposition = any(marker in text for marker in markers.preposition)
    has_credit = any(marker in text for marker in markers.credit)
    has_payer = any(marker in text for marker in markers.payer)

    if (is_transfer and has_preposition) or has_credit or has_payer:
        return TransactionDirection.INCOME
    return TransactionDirection.EXPENSE


def split_amount_columns(values: list[Decimal]) -> Optional[AmountColumns]:
    """Assign the numeric tokens of a transaction line to columns.

    Two tokens are (amount, balance). Three tokens are (debit, credit,
    balance); an empty (zero) debit or credit collapses the line to the
    two-column case. When both debit and credit are populated the transaction
    amount is ambiguous: the debit is used and the line is flagged for review.
    Lines with more than three tokens keep the last two as (amount, balance).

    Returns:
        AmountColumns, or None if the line has fewer than two numeric tokens
    """
    if len(values) < 2:
        return None

    if len(values) == 3:
        debit, credit, balance = values
        if debit and credit:
            return AmountColumns(
                amount=abs(debit),
                balance=balance,
                direction=TransactionDirection.EXPENSE,
                needs_review=True,
            )
        if credit:
            return AmountColumns(abs(credit), balance, TransactionDirection.INCOME)
        return AmountColumns(abs(debit), balance, TransactionDirection.EXPENSE)

    return AmountColumns(amount=abs(values[-2]), balance=values[-1])


def parse_statement(
    data: bytes, parse_lines: Callable[[list[str]], LineParseResult], bank_id: str
) -> ParseResult:
    """Run the common PDF pipeline around a bank-specific line parser.

    Raises:
        InvalidDocumentError: If the buffer is empty, not a PDF or unreadable
    """
    ensure_pdf(data)
    file_hash = generate_file_hash(data)
    lines = extract_text_lines(data)
    period_start, period_end, transactions = parse_lines(lines)

    if not transactions:
        logger.warning(
            "%s statement produced no transactions from %d lines", bank_id, len(lines)
        )
    else:
        logger.info("%s statement parsed: %d transactions", bank_id, len(transactions))

    return ParseResult(
        file_hash=file_hash,
        period_start=period_start,
        period_end=period_end,
        transactions=transactions,
    )
