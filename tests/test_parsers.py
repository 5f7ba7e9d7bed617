"""Tests for the per-bank statement parsers."""

from decimal import Decimal

import pytest

from conftest import CGD_LINES, NOVO_BANCO_LINES
from ledgerlens.domain.entities import TransactionDirection
from ledgerlens.domain.errors import InvalidDocumentError
from ledgerlens.parsers import base, cgd, novo_banco, pdf_text
from ledgerlens.parsers.base import (
    DirectionMarkers,
    classify_direction,
    split_amount_columns,
)
from ledgerlens.parsers.pdf_text import ensure_pdf, extract_text_lines
from ledgerlens.utils.file_hash import generate_file_hash

INCOME = TransactionDirection.INCOME
EXPENSE = TransactionDirection.EXPENSE


# Amount columns
def test_split_two_columns():
    columns = split_amount_columns([Decimal("24.30"), Decimal("1210.26")])
    assert columns.amount == Decimal("24.30")
    assert columns.balance == Decimal("1210.26")
    assert columns.direction is None
    assert not columns.needs_review


def test_split_three_columns_debit():
    columns = split_amount_columns([Decimal("10.00"), Decimal("0"), Decimal("90.00")])
    assert columns.amount == Decimal("10.00")
    assert columns.direction == EXPENSE


def test_split_three_columns_credit():
    columns = split_amount_columns([Decimal("0"), Decimal("50.00"), Decimal("150.00")])
    assert columns.amount == Decimal("50.00")
    assert columns.direction == INCOME


def test_split_three_columns_both_populated_flags_review():
    columns = split_amount_columns([Decimal("10.00"), Decimal("20.00"), Decimal("90.00")])
    assert columns.needs_review
    assert columns.amount == Decimal("10.00")
    assert columns.direction == EXPENSE


def test_split_too_few_values():
    assert split_amount_columns([Decimal("10.00")]) is None
    assert split_amount_columns([]) is None


# Direction heuristic
MARKERS = novo_banco.DIRECTION_MARKERS


@pytest.mark.parametrize(
    "description,expected",
    [
        ("Trf Sepa+ De Joao Silva", INCOME),
        ("Trf Imediata App Para Maria", EXPENSE),
        ("Reembolso Seguro", INCOME),
        ("Ordenante Empresa Lda", INCOME),
        ("Compra Cartao Lidl", EXPENSE),
        # Preposition alone is not income
        ("Compra Casa De Pasto", EXPENSE),
    ],
)
def test_classify_direction(description, expected):
    assert classify_direction(description, MARKERS) == expected


def test_classify_direction_groups_transfer_with_preposition():
    """A credit marker alone is enough; a transfer marker alone is not."""
    markers = DirectionMarkers(transfer=("trf",), preposition=(" de ",), credit=("estorno",))
    assert classify_direction("Trf Para Conta", markers) == EXPENSE
    assert classify_direction("Estorno Compra", markers) == INCOME
    assert classify_direction("TRF DE ANA", markers) == INCOME


# PDF guards
@pytest.mark.parametrize("data", [b"", b"hello world", b"PK\x03\x04zipfile"])
def test_non_pdf_rejected(data):
    with pytest.raises(InvalidDocumentError):
        ensure_pdf(data)


def test_corrupt_pdf_rejected():
    with pytest.raises(InvalidDocumentError):
        extract_text_lines(b"%PDF-1.4\nthis is not really a pdf")


@pytest.mark.parametrize("parse", [novo_banco.parse_novo_banco_pdf, cgd.parse_cgd_pdf])
def test_parsers_reject_non_pdf(parse):
    with pytest.raises(InvalidDocumentError):
        parse(b"")
    with pytest.raises(InvalidDocumentError):
        parse(b"plain text")


def test_parse_statement_checks_pdf_once(monkeypatch, cgd_pdf):
    calls = []
    original = base.ensure_pdf

    def counting_ensure_pdf(data):
        calls.append(len(data))
        return original(data)

    monkeypatch.setattr(base, "ensure_pdf", counting_ensure_pdf)
    monkeypatch.setattr(pdf_text, "ensure_pdf", counting_ensure_pdf)

    result = cgd.parse_cgd_pdf(cgd_pdf)

    assert len(result.transactions) == 3
    assert calls == [len(cgd_pdf)]


def test_extract_text_lines_reading_order(statement_pdf):
    lines = extract_text_lines(statement_pdf(["first line", "second line here", "third"]))
    assert lines == ["first line", "second line here", "third"]


# Novo Banco
def test_novo_banco_lines():
    period_start, period_end, transactions = novo_banco.parse_lines(NOVO_BANCO_LINES)

    assert period_start == "2024-11-01"
    assert period_end == "2024-11-30"
    assert [t.date for t in transactions] == ["2024-11-02", "2024-11-05", "2024-11-12"]
    assert [t.description for t in transactions] == [
        "Compra Cartao Lidl Lisboa",
        "Trf Sepa+ De Joao Silva",
        "Netflix Com",
    ]
    assert [t.signed_amount for t in transactions] == [
        Decimal("-24.30"),
        Decimal("500.00"),
        Decimal("-13.99"),
    ]
    assert transactions[0].balance == Decimal("1210.26")


def test_novo_banco_ignores_lines_outside_section():
    lines = [
        "02.11.24 02.11.24 Antes Da Seccao 10,00 100,00",
        "MOVIMENTOS DE CONTA",
        "03.11.24 03.11.24 Compra Pingo Doce 5,00 95,00",
        "SALDO CONTABILISTICO",
        "TOTAL 5,00",
        "04.11.24 04.11.24 Depois Da Seccao 1,00 94,00",
    ]
    _, _, transactions = novo_banco.parse_lines(lines)
    assert [t.description for t in transactions] == ["Compra Pingo Doce"]


def test_novo_banco_description_containing_total_keeps_section_open():
    lines = [
        "MOVIMENTOS DE CONTA",
        "03.11.24 03.11.24 Compra TotalEnergies 40,00 60,00",
        "04.11.24 04.11.24 Compra Lidl 10,00 50,00",
    ]
    _, _, transactions = novo_banco.parse_lines(lines)
    assert len(transactions) == 2


def test_novo_banco_balance_decides_direction():
    lines = [
        "MOVIMENTOS DE CONTA",
        "SALDO ANTERIOR 100,00",
        "03.11.24 03.11.24 Pagamento Recebido 50,00 150,00",
        "04.11.24 04.11.24 Pagamento Enviado 20,00 130,00",
    ]
    _, _, transactions = novo_banco.parse_lines(lines)
    assert [t.direction for t in transactions] == [INCOME, EXPENSE]


def test_novo_banco_heuristic_without_opening_balance():
    lines = [
        "MOVIMENTOS DE CONTA",
        "03.11.24 03.11.24 Trf Sepa+ De Ana Costa 50,00 150,00",
    ]
    _, _, transactions = novo_banco.parse_lines(lines)
    assert transactions[0].direction == INCOME


def test_novo_banco_three_columns_both_populated():
    lines = [
        "MOVIMENTOS DE CONTA",
        "SALDO ANTERIOR 100,00",
        "03.11.24 03.11.24 Movimento Ambiguo 10,00 20,00 110,00",
    ]
    _, _, transactions = novo_banco.parse_lines(lines)
    txn = transactions[0]
    assert txn.needs_review
    assert txn.amount == Decimal("10.00")
    assert txn.direction == EXPENSE


def test_novo_banco_skips_lines_without_amounts():
    lines = [
        "MOVIMENTOS DE CONTA",
        "03.11.24 03.11.24 Linha Sem Valores",
        "04.11.24 04.11.24 Compra Lidl 10,00 50,00",
    ]
    _, _, transactions = novo_banco.parse_lines(lines)
    assert [t.description for t in transactions] == ["Compra Lidl"]


def test_novo_banco_pdf_round_trip(novo_banco_pdf):
    result = novo_banco.parse_novo_banco_pdf(novo_banco_pdf)

    assert result.file_hash == generate_file_hash(novo_banco_pdf)
    assert result.period_start == "2024-11-01"
    assert result.period_end == "2024-11-30"
    assert len(result.transactions) == 3
    assert [t.date for t in result.transactions] == ["2024-11-02", "2024-11-05", "2024-11-12"]
    assert [t.signed_amount for t in result.transactions] == [
        Decimal("-24.30"),
        Decimal("500.00"),
        Decimal("-13.99"),
    ]


# CGD
def test_cgd_line():
    txn = cgd.parse_transaction_line("- - 2024-11-15 COMPRA CONTINENTE LISBOA -45,20 1.154,80")
    assert txn.date == "2024-11-15"
    assert txn.description == "COMPRA CONTINENTE LISBOA"
    assert txn.amount == Decimal("45.20")
    assert txn.direction == EXPENSE
    assert txn.balance == Decimal("1154.80")


def test_cgd_line_requires_amount_and_balance():
    assert cgd.parse_transaction_line("- - 2024-11-15 COMPRA 45,20") is None
    assert cgd.parse_transaction_line("2024-11-15 COMPRA -45,20 100,00") is None


def test_cgd_lines():
    period_start, period_end, transactions = cgd.parse_lines(CGD_LINES)
    assert (period_start, period_end) == ("2024-11-01", "2024-11-30")
    assert [t.signed_amount for t in transactions] == [
        Decimal("-45.20"),
        Decimal("1500.00"),
        Decimal("-10.99"),
    ]


def test_cgd_pdf_round_trip(cgd_pdf):
    result = cgd.parse_cgd_pdf(cgd_pdf)

    assert len(result.file_hash) == 64
    assert result.period_start == "2024-11-01"
    assert [t.date for t in result.transactions] == ["2024-11-15", "2024-11-20", "2024-11-25"]
    assert [t.description for t in result.transactions] == [
        "COMPRA CONTINENTE LISBOA",
        "TRF SALARIO EMPRESA",
        "COMPRA SPOTIFY",
    ]
    assert [t.signed_amount for t in result.transactions] == [
        Decimal("-45.20"),
        Decimal("1500.00"),
        Decimal("-10.99"),
    ]


def test_pdf_without_transactions(statement_pdf):
    result = cgd.parse_cgd_pdf(statement_pdf(["Nothing to see here"]))
    assert result.transactions == []
    assert result.period_start is None
