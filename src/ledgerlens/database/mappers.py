"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the database schema changes.
"""

from decimal import Decimal
from typing import Optional

from ledgerlens.domain import entities as domain
from ledgerlens.database.models import (
    Workspace as ORMWorkspace,
    Category as ORMCategory,
    CategoryPattern as ORMCategoryPattern,
    Ledger as ORMLedger,
    Transaction as ORMTransaction,
    RecurringPattern as ORMRecurringPattern,
)


def _to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


def workspace_to_domain(orm_workspace: ORMWorkspace) -> domain.Workspace:
    """Convert SQLAlchemy Workspace model to domain Workspace entity."""
    return domain.Workspace(
        id=orm_workspace.id,
        name=orm_workspace.name,
        created_at=orm_workspace.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        workspace_id=orm_category.workspace_id,
        name=orm_category.name,
        color=orm_category.color,
        icon=orm_category.icon,
        is_default=bool(orm_category.is_default),
        created_at=orm_category.created_at,
    )


def category_pattern_to_domain(
    orm_pattern: ORMCategoryPattern, category_name: Optional[str] = None
) -> domain.CategoryPattern:
    """Convert SQLAlchemy CategoryPattern model to domain CategoryPattern entity."""
    return domain.CategoryPattern(
        id=orm_pattern.id,
        category_id=orm_pattern.category_id,
        bank_id=orm_pattern.bank_id,
        pattern=orm_pattern.pattern,
        priority=orm_pattern.priority,
        created_at=orm_pattern.created_at,
        category_name=category_name,
    )


def ledger_to_domain(orm_ledger: ORMLedger, transaction_count: int = 0) -> domain.Ledger:
    """Convert SQLAlchemy Ledger model to domain Ledger entity."""
    return domain.Ledger(
        id=orm_ledger.id,
        workspace_id=orm_ledger.workspace_id,
        filename=orm_ledger.filename,
        bank_id=orm_ledger.bank_id,
        file_hash=orm_ledger.file_hash,
        period_start=orm_ledger.period_start,
        period_end=orm_ledger.period_end,
        uploaded_at=orm_ledger.uploaded_at,
        transaction_count=transaction_count,
    )


def transaction_to_domain(
    orm_transaction: ORMTransaction, bank_id: Optional[str] = None
) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        ledger_id=orm_transaction.ledger_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=_to_decimal(orm_transaction.amount),
        balance=_to_decimal(orm_transaction.balance),
        direction=domain.TransactionDirection(orm_transaction.direction),
        raw_text=orm_transaction.raw_text,
        value_date=orm_transaction.value_date,
        category_id=orm_transaction.category_id,
        is_manual=bool(orm_transaction.is_manual),
        needs_review=bool(orm_transaction.needs_review),
        recurring_pattern_id=orm_transaction.recurring_pattern_id,
        created_at=orm_transaction.created_at,
        bank_id=bank_id,
    )


def recurring_pattern_to_domain(orm_pattern: ORMRecurringPattern) -> domain.RecurringPattern:
    """Convert SQLAlchemy RecurringPattern model to domain RecurringPattern entity."""
    return domain.RecurringPattern(
        id=orm_pattern.id,
        workspace_id=orm_pattern.workspace_id,
        description_pattern=orm_pattern.description_pattern,
        frequency=domain.RecurringFrequency(orm_pattern.frequency),
        avg_amount=_to_decimal(orm_pattern.avg_amount),
        occurrence_count=orm_pattern.occurrence_count,
        is_active=bool(orm_pattern.is_active),
        created_at=orm_pattern.created_at,
        direction=domain.TransactionDirection(orm_pattern.direction),
    )
