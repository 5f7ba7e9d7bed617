"""Parser for Novo Banco (Portugal) "Extrato Integrado" PDF statements.

Transactions are listed under "MOVIMENTOS DE CONTA" headers as lines of the
form::

    15.11.24 15.11.24 Compra Cartao Lidl Lisboa 24,30 1.210,26

i.e. movement date, optional value date, description, then either a single
amount column followed by the running balance, or separate debit and credit
columns followed by the balance. Numbers use the European format (1.234,56).
"""

import logging
import re
from decimal import Decimal
from typing import Optional

from ledgerlens.domain.entities import (
    BankConfig,
    DecimalFormat,
    ParsedTransaction,
    ParseResult,
    TransactionDirection,
)
from ledgerlens.parsers.base import (
    BankParserDefinition,
    DirectionMarkers,
    LineParseResult,
    classify_direction,
    parse_statement,
    split_amount_columns,
)
from ledgerlens.utils.amount_parser import parse_decimal
from ledgerlens.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

CONFIG = BankConfig(
    id="novo_banco",
    display_name="Novo Banco",
    country="PT",
    currency="EUR",
    date_format="DD.MM.YY",
    decimal_format=DecimalFormat.EUROPEAN,
)

PERIOD_RE = re.compile(r"de\s+(\d{2}\.\d{2}\.\d{4})\s+a\s+(\d{2}\.\d{2}\.\d{4})", re.IGNORECASE)
AMOUNT_RE = re.compile(r"-?\s?[\d.]+,\d{2}")
AMOUNT_TOKEN_RE = re.compile(r"^-?[\d.]+,\d{2}$")
LINE_DATE_RE = re.compile(r"^(\d{2}\.\d{2}\.\d{2})\s+")
SHORT_DATE_RE = re.compile(r"^\d{2}\.\d{2}\.\d{2}$")

SECTION_START = "MOVIMENTOS DE CONTA"
OPENING_BALANCE = "SALDO ANTERIOR"

# Column headers and single-word layout artifacts inside the movements table
HEADER_FRAGMENTS = ("Data Descritivo", "Débito Crédito", "Saldo (Euros)")
LAYOUT_ARTIFACTS = {
    "Data",
    "Valor",
    "Online",
    "Banco",
    "Digital",
    "-",
    "DN",
    "Computador",
    "por",
    "Processado",
}

DIRECTION_MARKERS = DirectionMarkers(
    transfer=("trf", "transferência", "transferencia"),
    preposition=(" de ",),
    credit=("reembolso", "devolução", "devolucao", "estorno"),
    payer=("ordenante",),
)

TRANSACTION_PATTERNS = {
    "CARD_PURCHASE": re.compile(r"^Compra\s+(Mb\s+)?Cartão|^Compra\s+Mbway", re.IGNORECASE),
    "DIRECT_DEBIT": re.compile(r"^Cobrança\s+Sdd", re.IGNORECASE),
    "TRANSFER_IN": re.compile(r"^Trf\s+(Imediata\s+)?Sepa\+?\s+De|^Trf\s+Cred\s+Sepa", re.IGNORECASE),
    "TRANSFER_OUT": re.compile(r"^Trf\s+(Imediata\s+)?Sepa\+?\s+App|^Trf\s+Cred\s+Intrab", re.IGNORECASE),
    "ATM": re.compile(r"^Levantamento\s+Mb\s+Cartão", re.IGNORECASE),
    "BILL_PAYMENT": re.compile(r"^Pag\s+Serv", re.IGNORECASE),
    "LOAN_PAYMENT": re.compile(r"^Pagamento\s+Prestação", re.IGNORECASE),
    "STANDING_ORDER": re.compile(r"^Ordem\s+Permanente", re.IGNORECASE),
    "BANK_FEE": re.compile(r"^Manutencao\s+Conta|^Imposto\s+Do\s+Selo", re.IGNORECASE),
}

CATEGORY_PATTERNS = {
    "Groceries": ["Pingo Doce", "Lidl", "Continente", "Aldi", "Mercadona", "Intermarche", "Frutaria"],
    "Fuel": ["BP", "Disa", "Petrogal", "Galp", "Repsol", "Cepsa"],
    "Health": ["Hospital", "Psicologi", "Medis", "Farmacia", "Clinica", "Dentista"],
    "Fitness": ["Solinca", "Decathlon", "Taekwon", "Ginasio", "Fitness", "Holmes Place"],
    "Entertainment": ["Cinemas", "Fnac", "Netflix", "Spotify", "Disney", "HBO", "Amazon Prime"],
    "Dining": ["McDonald", "Leitaria", "Restaurante", "Cafe", "Pizza", "Burger", "KFC", "Telepizza"],
    "Shopping": ["Zara", "Tiger", "Primark", "H&M", "Worten", "Media Markt", "IKEA"],
    "Utilities": ["Digi Portugal", "Simas", "EDP", "Galp Energia", "NOS", "MEO", "Vodafone", "Agua"],
    "Housing": ["Condominio", "Renda", "Prestação", "Habitação", "Hipoteca"],
    "Insurance": ["Seguro", "Mapfre", "Fidelidade", "Allianz", "Tranquilidade", "Ageas"],
    "Transfers": ["Transferência Conta Serviço", "Trf Cred Intrab"],
    "Fees": ["Manutencao Conta", "Imposto Do Selo", "Comissão", "Taxa"],
    "Cash": ["Levantamento"],
}


def _normalize_space(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def _is_section_end(line: str) -> bool:
    return (
        "SALDO CONTABILÍSTICO" in line
        or ("TOTAL" in line and "MOVIMENTOS" not in line)
        or ("MOVIMENTOS DE" in line and SECTION_START not in line)
    )


def _is_layout_noise(line: str) -> bool:
    return line in LAYOUT_ARTIFACTS or any(fragment in line for fragment in HEADER_FRAGMENTS)


def _extract_description(parts: list[str], start: int) -> str:
    words = []
    for index in range(start, len(parts)):
        part = parts[index]
        if AMOUNT_TOKEN_RE.match(part):
            break
        # A sign printed apart from its digits ("- 12,30")
        if part == "-" and index + 1 < len(parts) and AMOUNT_TOKEN_RE.match(parts[index + 1]):
            break
        words.append(part)
    return " ".join(words).strip()


def parse_transaction_line(
    line: str, previous_balance: Optional[Decimal]
) -> Optional[ParsedTransaction]:
    """Parse one dated line of the movements table.

    Args:
        line: Raw text line starting with a DD.MM.YY date
        previous_balance: Running balance before this line, if known

    Returns:
        ParsedTransaction, or None if the line does not hold a transaction
    """
    parts = line.split()
    if len(parts) < 4:
        return None

    date = parse_statement_date(parts[0])
    has_value_date = bool(SHORT_DATE_RE.match(parts[1]))
    value_date = parse_statement_date(parts[1]) if has_value_date else date

    amounts = [parse_decimal(token, CONFIG.decimal_format) for token in AMOUNT_RE.findall(line)]
    columns = split_amount_columns(amounts)
    if columns is None:
        return None

    description = _extract_description(parts, 2 if has_value_date else 1)
    if not description:
        return None

    if columns.direction is not None:
        direction = columns.direction
    elif previous_balance is not None:
        direction = (
            TransactionDirection.INCOME
            if columns.balance > previous_balance
            else TransactionDirection.EXPENSE
        )
    else:
        direction = classify_direction(description, DIRECTION_MARKERS)

    if columns.needs_review:
        logger.warning("Both debit and credit populated, flagged for review: %s", line)

    return ParsedTransaction(
        date=date,
        description=description,
        amount=columns.amount,
        balance=columns.balance,
        direction=direction,
        raw_text=line,
        value_date=value_date,
        needs_review=columns.needs_review,
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

    transactions: list[ParsedTransaction] = []
    in_section = False
    previous_balance: Optional[Decimal] = None

    for line in lines:
        normalized = _normalize_space(line)
        if not normalized:
            continue

        if SECTION_START in normalized:
            in_section = True
            continue

        starts_with_date = LINE_DATE_RE.match(line) is not None

        if not starts_with_date and _is_section_end(normalized):
            in_section = False
            continue

        if not in_section or _is_layout_noise(normalized):
            continue

        if OPENING_BALANCE in normalized:
            amounts = AMOUNT_RE.findall(line)
            if amounts:
                previous_balance = parse_decimal(amounts[-1], CONFIG.decimal_format)
            continue

        if not starts_with_date:
            continue

        transaction = parse_transaction_line(line, previous_balance)
        if transaction is None:
            logger.debug("Skipped unparseable line: %s", line)
            continue

        transactions.append(transaction)
        previous_balance = transaction.balance

    return period_start, period_end, transactions


def parse_novo_banco_pdf(data: bytes) -> ParseResult:
    """Parse a Novo Banco PDF statement."""
    return parse_statement(data, parse_lines, CONFIG.id)


NOVO_BANCO = BankParserDefinition(
    config=CONFIG,
    parse=parse_novo_banco_pdf,
    category_patterns=CATEGORY_PATTERNS,
    transaction_patterns=TRANSACTION_PATTERNS,
)
