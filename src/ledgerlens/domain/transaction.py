"""Transaction domain service."""

from typing import Optional

from ledgerlens.database.base import Database
from ledgerlens.domain.entities import Transaction, TransactionDirection
from ledgerlens.domain.errors import (
    CategoryNotFoundError,
    TransactionNotFoundError,
    ValidationError,
    category_not_found,
    transaction_not_found,
)
from ledgerlens.utils.date_parser import period_range


class TransactionService:
    """Service for browsing transactions and applying user categorization."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_transaction(self, transaction_id: int, workspace_id: int) -> Transaction:
        """Get a workspace transaction.

        Raises:
            TransactionNotFoundError: If it doesn't exist in the workspace
        """
        if self.db.get_transaction_workspace_id(transaction_id) != workspace_id:
            raise TransactionNotFoundError(transaction_not_found(transaction_id))
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        workspace_id: int,
        ledger_id: Optional[int] = None,
        category_id: Optional[int] = None,
        uncategorized: bool = False,
        year: Optional[int] = None,
        month: Optional[int] = None,
        direction: Optional[TransactionDirection] = None,
        search: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            workspace_id: Workspace ID
            ledger_id: Optional ledger ID to filter by
            category_id: Optional category ID to filter by
            uncategorized: If True, only return transactions without a category
            year: Optional calendar year of the transaction date
            month: Optional month (1-12) within ``year``
            direction: Optional income/expense filter
            search: Optional case-insensitive text the description must contain

        Returns:
            List of Transaction entities ordered by date

        Raises:
            ValidationError: If month is given without a year or is out of range
        """
        start_date = end_date = None
        if month is not None:
            if year is None:
                raise ValidationError("A month filter needs a year")
            if not 1 <= month <= 12:
                raise ValidationError(f"Month must be between 1 and 12, got {month}")
        if year is not None:
            start_date, end_date = period_range(year, month)

        return self.db.list_transactions(
            workspace_id,
            ledger_id=ledger_id,
            category_id=category_id,
            uncategorized=uncategorized,
            start_date=start_date,
            end_date=end_date,
            direction=direction,
            search=search.strip() if search else None,
        )

    def list_needing_review(self, workspace_id: int) -> list[Transaction]:
        """List transactions whose amount columns were ambiguous."""
        return self.db.list_transactions(workspace_id, needs_review=True)

    def set_category(
        self, transaction_id: int, category_id: Optional[int], workspace_id: int
    ) -> None:
        """Categorize a transaction by hand.

        The transaction is marked manual, so pattern sweeps leave it alone
        until the flag is cleared.

        Raises:
            TransactionNotFoundError: If the transaction is not in the workspace
            CategoryNotFoundError: If the category is not in the workspace
        """
        self.get_transaction(transaction_id, workspace_id)
        if category_id is not None:
            category = self.db.get_category(category_id)
            if category is None or category.workspace_id != workspace_id:
                raise CategoryNotFoundError(category_not_found(category_id))
        self.db.update_transaction_category(transaction_id, category_id, is_manual=True)

    def clear_manual(self, transaction_id: int, workspace_id: int) -> None:
        """Drop the manual flag, keeping the current category."""
        self.get_transaction(transaction_id, workspace_id)
        self.db.set_transaction_manual(transaction_id, False)

    def delete_transaction(self, transaction_id: int, workspace_id: int) -> None:
        """Delete one transaction from its ledger.

        Raises:
            TransactionNotFoundError: If the transaction is not in the workspace
        """
        self.get_transaction(transaction_id, workspace_id)
        self.db.delete_transaction(transaction_id)
