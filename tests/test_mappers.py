"""Tests for ORM to domain mappers."""

from datetime import datetime
from decimal import Decimal

from ledgerlens.database import mappers
from ledgerlens.database.models import (
    CategoryPattern as ORMCategoryPattern,
    Ledger as ORMLedger,
    RecurringPattern as ORMRecurringPattern,
    Transaction as ORMTransaction,
)
from ledgerlens.domain.entities import RecurringFrequency, TransactionDirection

CREATED = datetime(2024, 11, 1, 12, 0)


def test_transaction_to_domain():
    orm = ORMTransaction(
        id=5,
        ledger_id=2,
        date="2024-11-02",
        description="Compra Lidl",
        amount=Decimal("24.30"),
        balance=None,
        direction="expense",
        raw_text="02.11.24 Compra Lidl 24,30",
        value_date="2024-11-02",
        category_id=None,
        is_manual=0,
        needs_review=1,
        recurring_pattern_id=None,
        created_at=CREATED,
    )

    txn = mappers.transaction_to_domain(orm, bank_id="novo_banco")

    assert txn.direction == TransactionDirection.EXPENSE
    assert txn.amount == Decimal("24.30")
    assert txn.balance is None
    assert txn.is_manual is False
    assert txn.needs_review is True
    assert txn.bank_id == "novo_banco"


def test_amount_float_becomes_decimal():
    orm = ORMRecurringPattern(
        id=1,
        workspace_id=1,
        description_pattern="NETFLIX",
        frequency="monthly",
        avg_amount=13.99,
        occurrence_count=4,
        is_active=True,
        created_at=CREATED,
        direction="income",
    )

    pattern = mappers.recurring_pattern_to_domain(orm)

    assert pattern.avg_amount == Decimal("13.99")
    assert pattern.frequency == RecurringFrequency.MONTHLY
    assert pattern.direction == TransactionDirection.INCOME


def test_category_pattern_to_domain_carries_category_name():
    orm = ORMCategoryPattern(id=3, category_id=7, bank_id="cgd", pattern="Lidl", priority=1, created_at=CREATED)
    pattern = mappers.category_pattern_to_domain(orm, "Groceries")
    assert pattern.category_name == "Groceries"
    assert pattern.priority == 1


def test_ledger_to_domain_count():
    orm = ORMLedger(
        id=1,
        workspace_id=1,
        filename="nov.pdf",
        bank_id="cgd",
        file_hash="a" * 64,
        period_start=None,
        period_end=None,
        uploaded_at=CREATED,
    )
    assert mappers.ledger_to_domain(orm, 12).transaction_count == 12
