"""Domain model entities for ledgerlens.

These are pure data classes representing business concepts, independent of
database schema. Parsers produce ParsedTransaction/ParseResult; the database
layer maps its rows onto the persisted entities below.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class DecimalFormat(str, Enum):
    """Separator convention used by a bank's statements."""

    EUROPEAN = "european"  # 1.234,56
    STANDARD = "standard"  # 1,234.56


class TransactionDirection(str, Enum):
    """Whether money entered or left the account."""

    INCOME = "income"
    EXPENSE = "expense"


class RecurringFrequency(str, Enum):
    """Cadence of a recurring pattern."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class BankConfig:
    """Static metadata for a supported bank."""

    id: str
    display_name: str
    country: str
    currency: str
    date_format: str
    decimal_format: DecimalFormat


@dataclass(frozen=True)
class ParsedTransaction:
    """Transaction line read from a statement, before persistence.

    ``amount`` is always a non-negative magnitude; ``direction`` carries the
    sign.
    """

    date: str
    description: str
    amount: Decimal
    balance: Optional[Decimal]
    direction: TransactionDirection
    raw_text: str
    value_date: Optional[str] = None
    needs_review: bool = False

    @property
    def is_income(self) -> bool:
        return self.direction == TransactionDirection.INCOME

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.is_income else -self.amount


@dataclass(frozen=True)
class ParseResult:
    """Output of a statement parser."""

    file_hash: str
    period_start: Optional[str]
    period_end: Optional[str]
    transactions: list[ParsedTransaction] = field(default_factory=list)


@dataclass(frozen=True)
class SuggestedTransaction:
    """Parsed transaction paired with the category suggested for it."""

    transaction: ParsedTransaction
    category_id: Optional[int]
    category_name: Optional[str]


@dataclass(frozen=True)
class Workspace:
    """Workspace domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    workspace_id: int
    name: str
    color: Optional[str]
    icon: Optional[str]
    is_default: bool
    created_at: datetime


@dataclass(frozen=True)
class CategoryPattern:
    """Keyword/regex rule mapping descriptions of one bank to a category.

    Lower ``priority`` values take precedence; 0 is the highest rank.
    """

    id: int
    category_id: int
    bank_id: str
    pattern: str
    priority: int
    created_at: datetime
    category_name: Optional[str] = None


@dataclass(frozen=True)
class Ledger:
    """One imported bank statement."""

    id: int
    workspace_id: int
    filename: str
    bank_id: str
    file_hash: str
    period_start: Optional[str]
    period_end: Optional[str]
    uploaded_at: datetime
    transaction_count: int = 0


@dataclass(frozen=True)
class Transaction:
    """Persisted transaction domain entity."""

    id: int
    ledger_id: int
    date: str
    description: str
    amount: Decimal
    balance: Optional[Decimal]
    direction: TransactionDirection
    raw_text: Optional[str]
    value_date: Optional[str]
    category_id: Optional[int]
    is_manual: bool
    needs_review: bool
    recurring_pattern_id: Optional[int]
    created_at: datetime
    bank_id: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.direction == TransactionDirection.INCOME


@dataclass(frozen=True)
class RecurringPattern:
    """Detected group of transactions repeating on a regular cadence."""

    id: int
    workspace_id: int
    description_pattern: str
    frequency: RecurringFrequency
    avg_amount: Decimal
    occurrence_count: int
    is_active: bool
    created_at: datetime
    direction: TransactionDirection = TransactionDirection.EXPENSE


@dataclass(frozen=True)
class RecurringSummary:
    """Aggregate over a workspace's active recurring patterns."""

    total_active: int
    estimated_monthly_cost: Decimal


@dataclass(frozen=True)
class UploadResult:
    """Outcome of processing one uploaded statement."""

    ledger_id: int
    filename: str
    bank_id: str
    transaction_count: int
    transactions: list[SuggestedTransaction]
    period_start: Optional[str]
    period_end: Optional[str]
    replaced_ledger_id: Optional[int] = None


@dataclass(frozen=True)
class RecategorizeResult:
    """Counts reported by a recategorization sweep."""

    total_checked: int
    recategorized: int


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of a recurring pattern detection run."""

    detected: int
    patterns: list[RecurringPattern]
