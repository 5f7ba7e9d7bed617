"""Parser for CGD (Caixa Geral de Depósitos, Portugal) PDF statements.

Transaction lines start with two dash placeholders followed by an ISO date,
and end with a signed amount and the running balance::

    - - 2024-11-15 COMPRA CONTINENTE LISBOA -45,20 1.154,80

Positive amounts are income, negative amounts are expenses.
"""

import logging
import re
from typing import Optional

from ledgerlens.domain.entities import (
    BankConfig,
    DecimalFormat,
    ParsedTransaction,
    ParseResult,
    TransactionDirection,
)
from ledgerlens.parsers.base import BankParserDefinition, LineParseResult, parse_statement
from ledgerlens.utils.amount_parser import parse_decimal
from ledgerlens.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

CONFIG = BankConfig(
    id="cgd",
    display_name="CGD",
    country="PT",
    currency="EUR",
    date_format="YYYY-MM-DD",
    decimal_format=DecimalFormat.EUROPEAN,
)

PERIOD_RE = re.compile(r"Per[ií]odo\s+(\d{4}-\d{2}-\d{2})\s+a\s+(\d{4}-\d{2}-\d{2})", re.IGNORECASE)
LINE_DATE_RE = re.compile(r"^-\s+-\s+(\d{4}-\d{2}-\d{2})\s+")
# European decimal with exactly two decimal places, optionally signed
AMOUNT_RE = re.compile(r"-?[\d.]+,\d{2}")

TRANSACTION_PATTERNS = {
    "CARD_PURCHASE": re.compile(r"^COMPRA\s+", re.IGNORECASE),
    "DIRECT_DEBIT": re.compile(r"^MAPFRE|^MEO\s+SERV|^KUBOO", re.IGNORECASE),
    "TRANSFER_IN": re.compile(r"^TFI\s+|^TRF\s+|^CREDIT\s+VOUCHER", re.IGNORECASE),
    "TRANSFER_OUT": re.compile(r"^Trf\s+Mbway", re.IGNORECASE),
    "BILL_PAYMENT": re.compile(r"^PAGAMENTO\s+TSU|^IRC$|^Multi\s+Imposto", re.IGNORECASE),
    "STANDING_ORDER": re.compile(r"^ORD\s+", re.IGNORECASE),
    "BANK_FEE": re.compile(r"^MANUT\s+CONTA|^IMPOSTO\s+SELO|^\d+[,.]\d+\s+COM\s+S[BI]", re.IGNORECASE),
}

CATEGORY_PATTERNS = {
    "Groceries": ["Continente", "Pingo Doce", "Lidl", "Aldi", "Mercadona", "Intermarche", "Mini Preco"],
    "Fuel": ["BP", "Galp", "Repsol", "Cepsa", "Disa", "Petrogal"],
    "Health": ["Hospital", "Farmacia", "Clinica", "Dentista", "Psicologi", "Medis"],
    "Fitness": ["Solinca", "Decathlon", "Ginasio", "Fitness", "Holmes Place"],
    "Entertainment": ["Netflix", "Spotify", "Disney", "HBO", "Cinemas", "Fnac"],
    "Dining": [
        "McDonald", "KFC", "Burger", "Pizza", "Uber Eats", "Restaurante", "Cafe",
        "Telepizza", "H3", "Poke House", "Pans Company", "Nashi Sushi",
    ],
    "Shopping": ["Amazon EU", "Amazon Payments", "Zara", "Primark", "Worten", "IKEA"],
    "Utilities": ["MEO SERV", "NOS", "Vodafone", "EDP", "Galp Energia", "Agua", "Digi Portugal"],
    "Housing": ["Condominio", "Renda", "Hipoteca"],
    "Insurance": ["Mapfre", "Fidelidade", "Allianz", "Tranquilidade", "Ageas", "Seguro"],
    "Transfers": ["Trf Mbway", r"regex:^TFI\s+", r"regex:^TRF\s+"],
    "Fees": ["Manut Conta", "Imposto Selo", r"regex:\d+[,.]\d+\s+COM\s+S[BI]"],
    "Cash": ["Levantamento"],
}


def parse_transaction_line(line: str) -> Optional[ParsedTransaction]:
    """Parse one CGD movement line, or return None if it is not one."""
    date_match = LINE_DATE_RE.match(line)
    if date_match is None:
        return None

    amounts = list(AMOUNT_RE.finditer(line))
    if len(amounts) < 2:
        return None

    # Last = balance, second to last = signed amount
    amount_match = amounts[-2]
    balance_match = amounts[-1]
    signed_amount = parse_decimal(amount_match.group(0), CONFIG.decimal_format)
    balance = parse_decimal(balance_match.group(0), CONFIG.decimal_format)

    description = " ".join(line[date_match.end():amount_match.start()].split())
    if not description:
        return None

    date = parse_statement_date(date_match.group(1))
    direction = TransactionDirection.INCOME if signed_amount > 0 else TransactionDirection.EXPENSE

    return ParsedTransaction(
        date=date,
        description=description,
        amount=abs(signed_amount),
        balance=balance,
        direction=direction,
        raw_text=line,
        value_date=date,
    )


def parse_lines(lines: list[str]) -> LineParseResult:
    """Read the statement period and transactions from extracted text lines."""
    text = "\n".join(lines)

    period_start: Optional[str] = None
    period_end: Optional[str] = None
    period_match = PERIOD_RE.search(text)
    if period_match:
        period_start = parse_statement_date(period_match.group(1))
        period_end = parse_statement_date(period_match.group(2))

    transactions = []
    for line in lines:
        if not LINE_DATE_RE.match(line):
            continue
        transaction = parse_transaction_line(line)
        if transaction is None:
            logger.debug("Skipped unparseable line: %s", line)
            continue
        transactions.append(transaction)

    return period_start, period_end, transactions


def parse_cgd_pdf(data: bytes) -> ParseResult:
    """Parse a CGD PDF statement."""
    return parse_statement(data, parse_lines, CONFIG.id)


CGD = BankParserDefinition(
    config=CONFIG,
    parse=parse_cgd_pdf,
    category_patterns=CATEGORY_PATTERNS,
    transaction_patterns=TRANSACTION_PATTERNS,
)
