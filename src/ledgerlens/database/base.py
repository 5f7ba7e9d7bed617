"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from decimal import Decimal
from typing import Iterable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerlens.domain.entities import (
    Workspace,
    Category,
    CategoryPattern,
    Ledger,
    Transaction,
    RecurringPattern,
    ParsedTransaction,
    RecurringFrequency,
    TransactionDirection,
)


class Database(ABC):
    """Abstract database interface for ledgerlens."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group several writes into one all-or-nothing unit.

        Writes made inside the block are committed together when it exits
        normally and rolled back when it raises. Nested blocks join the
        outermost one.
        """
        pass

    # Workspace operations
    @abstractmethod
    def create_workspace(self, name: str) -> int:
        """Create a workspace. Returns workspace ID."""
        pass

    @abstractmethod
    def get_workspace(self, workspace_id: int) -> Optional[Workspace]:
        """Get workspace by ID."""
        pass

    @abstractmethod
    def list_workspaces(self) -> list[Workspace]:
        """List all workspaces."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        workspace_id: int,
        name: str,
        color: Optional[str] = None,
        icon: Optional[str] = None,
        is_default: bool = False,
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, workspace_id: int, name: str) -> Optional[Category]:
        """Get a workspace category by its exact name."""
        pass

    @abstractmethod
    def list_categories(self, workspace_id: int) -> list[Category]:
        """List categories of a workspace, defaults first then by name."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> None:
        """Update category fields that are not None."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category, its patterns, and its links from transactions."""
        pass

    # Category pattern operations
    @abstractmethod
    def create_category_pattern(
        self, category_id: int, bank_id: str, pattern: str, priority: int = 0
    ) -> int:
        """Create a category pattern. Returns pattern ID."""
        pass

    @abstractmethod
    def get_category_pattern(self, pattern_id: int) -> Optional[CategoryPattern]:
        """Get category pattern by ID."""
        pass

    @abstractmethod
    def find_category_pattern(
        self, workspace_id: int, bank_id: str, pattern: str
    ) -> Optional[CategoryPattern]:
        """Find a pattern by exact text among all categories of a workspace."""
        pass

    @abstractmethod
    def list_category_patterns(
        self, workspace_id: int, bank_id: Optional[str] = None, category_id: Optional[int] = None
    ) -> list[CategoryPattern]:
        """List workspace patterns ordered by priority then ID.

        Args:
            workspace_id: Workspace ID
            bank_id: Optional bank filter
            category_id: Optional category filter
        """
        pass

    @abstractmethod
    def delete_category_pattern(self, pattern_id: int) -> None:
        """Delete a category pattern."""
        pass

    # Ledger operations
    @abstractmethod
    def create_ledger(
        self,
        workspace_id: int,
        filename: str,
        bank_id: str,
        file_hash: str,
        period_start: Optional[str] = None,
        period_end: Optional[str] = None,
    ) -> int:
        """Create a ledger. Returns ledger ID."""
        pass

    @abstractmethod
    def get_ledger(self, ledger_id: int) -> Optional[Ledger]:
        """Get ledger by ID."""
        pass

    @abstractmethod
    def find_ledger_by_hash(self, workspace_id: int, file_hash: str) -> Optional[Ledger]:
        """Find the ledger imported from a file with this hash in a workspace."""
        pass

    @abstractmethod
    def list_ledgers(self, workspace_id: int, limit: int = 50, offset: int = 0) -> list[Ledger]:
        """List ledgers of a workspace, newest first, with transaction counts."""
        pass

    @abstractmethod
    def count_ledgers(self, workspace_id: int) -> int:
        """Count ledgers of a workspace."""
        pass

    @abstractmethod
    def delete_ledger(self, ledger_id: int) -> None:
        """Delete a ledger and its transactions."""
        pass

    # Transaction operations
    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a single transaction."""
        pass

    @abstractmethod
    def create_transaction(
        self,
        ledger_id: int,
        transaction: ParsedTransaction,
        category_id: Optional[int] = None,
        is_manual: bool = False,
    ) -> int:
        """Persist a parsed transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def get_transaction_workspace_id(self, transaction_id: int) -> Optional[int]:
        """Get the workspace a transaction belongs to."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        workspace_id: int,
        ledger_id: Optional[int] = None,
        bank_id: Optional[str] = None,
        category_id: Optional[int] = None,
        uncategorized: bool = False,
        is_manual: Optional[bool] = None,
        needs_review: Optional[bool] = None,
        recurring_pattern_id: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        direction: Optional[TransactionDirection] = None,
        search: Optional[str] = None,
    ) -> list[Transaction]:
        """List workspace transactions ordered by date then ID.

        Args:
            workspace_id: Workspace ID
            ledger_id: Optional ledger filter
            bank_id: Optional bank filter (bank of the transaction's ledger)
            category_id: Optional category filter
            uncategorized: If True, only return transactions without a category
            is_manual: Optional filter on the manual categorization flag
            needs_review: Optional filter on the review flag
            recurring_pattern_id: Optional recurring pattern filter
            start_date: Optional inclusive ISO lower bound on the date
            end_date: Optional exclusive ISO upper bound on the date
            direction: Optional income/expense filter
            search: Optional case-insensitive substring of the description
        """
        pass

    @abstractmethod
    def update_transaction_category(
        self, transaction_id: int, category_id: Optional[int], is_manual: Optional[bool] = None
    ) -> None:
        """Update transaction category, and the manual flag when given."""
        pass

    @abstractmethod
    def set_transaction_manual(self, transaction_id: int, is_manual: bool) -> None:
        """Set or clear the manual categorization flag."""
        pass

    @abstractmethod
    def link_transactions_to_recurring_pattern(
        self, transaction_ids: Iterable[int], pattern_id: Optional[int]
    ) -> None:
        """Point transactions at a recurring pattern (None unlinks)."""
        pass

    # Recurring pattern operations
    @abstractmethod
    def create_recurring_pattern(
        self,
        workspace_id: int,
        description_pattern: str,
        frequency: RecurringFrequency,
        avg_amount: Decimal,
        occurrence_count: int,
        is_active: bool = True,
        direction: TransactionDirection = TransactionDirection.EXPENSE,
    ) -> int:
        """Create a recurring pattern. Returns pattern ID."""
        pass

    @abstractmethod
    def get_recurring_pattern(self, pattern_id: int) -> Optional[RecurringPattern]:
        """Get recurring pattern by ID."""
        pass

    @abstractmethod
    def find_recurring_pattern(
        self,
        workspace_id: int,
        description_pattern: str,
        frequency: RecurringFrequency,
        direction: TransactionDirection,
    ) -> Optional[RecurringPattern]:
        """Find a workspace recurring pattern by description, frequency and direction."""
        pass

    @abstractmethod
    def list_recurring_patterns(
        self, workspace_id: int, active_only: bool = False
    ) -> list[RecurringPattern]:
        """List recurring patterns, most occurrences first."""
        pass

    @abstractmethod
    def update_recurring_pattern(
        self,
        pattern_id: int,
        description_pattern: Optional[str] = None,
        frequency: Optional[RecurringFrequency] = None,
        avg_amount: Optional[Decimal] = None,
        occurrence_count: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Update recurring pattern fields that are not None."""
        pass

    @abstractmethod
    def delete_recurring_pattern(self, pattern_id: int) -> None:
        """Delete a recurring pattern, unlinking (not deleting) its transactions."""
        pass
