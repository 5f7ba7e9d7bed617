"""Upload orchestration: parse a statement, suggest categories, store the ledger."""

import logging
from typing import Optional

from ledgerlens.database.base import Database
from ledgerlens.domain.category import CategoryService, default_category_names
from ledgerlens.domain.entities import (
    Ledger,
    ParsedTransaction,
    SuggestedTransaction,
    UploadResult,
)
from ledgerlens.domain.errors import (
    LedgerNotFoundError,
    UnsupportedBankError,
    WorkspaceNotFoundError,
    ledger_not_found,
    unsupported_bank,
    workspace_not_found,
)
from ledgerlens.parsers.registry import get_parser, supported_bank_ids

logger = logging.getLogger(__name__)

INCOME_CATEGORY = "Income"
FALLBACK_CATEGORY = "Other"


class UploadService:
    """Service for importing bank statement PDFs into ledgers."""

    def __init__(self, db: Database):
        """Initialize upload service.

        Args:
            db: Database instance
        """
        self.db = db
        self.category_service = CategoryService(db)

    def _find_default_category(self, workspace_id: int, name: str) -> Optional[tuple[int, str]]:
        for candidate in default_category_names(name):
            category = self.db.get_category_by_name(workspace_id, candidate)
            if category is not None:
                return category.id, category.name
        return None

    def apply_category_suggestions(
        self, transactions: list[ParsedTransaction], bank_id: str, workspace_id: int
    ) -> list[SuggestedTransaction]:
        """Pair each parsed transaction with a suggested category.

        Income goes to the workspace's income category. Expenses take the
        winning pattern's category, or the fallback category when no pattern
        matches. Either default category may be missing, leaving the
        suggestion empty.
        """
        matcher = self.category_service.get_matcher(bank_id, workspace_id)
        income = self._find_default_category(workspace_id, INCOME_CATEGORY)
        fallback = self._find_default_category(workspace_id, FALLBACK_CATEGORY)

        suggested = []
        for txn in transactions:
            choice: Optional[tuple[int, str]] = None
            if txn.is_income and income is not None:
                choice = income
            else:
                match = matcher.suggest_category(txn.description)
                if match is not None:
                    choice = (match.category_id, match.category_name)
                else:
                    choice = fallback

            category_id, category_name = choice if choice is not None else (None, None)
            suggested.append(SuggestedTransaction(txn, category_id, category_name))
        return suggested

    def process_upload(
        self, data: bytes, filename: str, bank_id: str, workspace_id: int
    ) -> UploadResult:
        """Parse a statement and store it as a ledger.

        Uploading a file whose hash already exists in the workspace replaces
        the earlier ledger and its transactions. The replacement, the new
        ledger and its transactions are written as one atomic unit.

        Args:
            data: Raw PDF bytes
            filename: Original file name
            bank_id: Registered bank ID
            workspace_id: Target workspace

        Returns:
            UploadResult with the stored ledger and the suggested categories

        Raises:
            UnsupportedBankError: If the bank has no registered parser
            WorkspaceNotFoundError: If the workspace doesn't exist
            InvalidDocumentError: If the file is not a readable PDF
        """
        parser = get_parser(bank_id)
        if parser is None:
            raise UnsupportedBankError(unsupported_bank(bank_id, supported_bank_ids()))
        if self.db.get_workspace(workspace_id) is None:
            raise WorkspaceNotFoundError(workspace_not_found(workspace_id))

        parsed = parser(data)
        suggested = self.apply_category_suggestions(parsed.transactions, bank_id, workspace_id)

        replaced_ledger_id = None
        with self.db.atomic():
            existing = self.db.find_ledger_by_hash(workspace_id, parsed.file_hash)
            if existing is not None:
                replaced_ledger_id = existing.id
                self.db.delete_ledger(existing.id)

            ledger_id = self.db.create_ledger(
                workspace_id,
                filename,
                bank_id,
                parsed.file_hash,
                period_start=parsed.period_start,
                period_end=parsed.period_end,
            )
            for item in suggested:
                self.db.create_transaction(
                    ledger_id, item.transaction, category_id=item.category_id, is_manual=False
                )

        if replaced_ledger_id is not None:
            logger.info(
                "Re-upload of %s replaced ledger %d with ledger %d",
                filename,
                replaced_ledger_id,
                ledger_id,
            )
        logger.info("Stored %d transactions from %s in ledger %d", len(suggested), filename, ledger_id)

        return UploadResult(
            ledger_id=ledger_id,
            filename=filename,
            bank_id=bank_id,
            transaction_count=len(suggested),
            transactions=suggested,
            period_start=parsed.period_start,
            period_end=parsed.period_end,
            replaced_ledger_id=replaced_ledger_id,
        )

    def list_ledgers(
        self, workspace_id: int, limit: int = 50, offset: int = 0
    ) -> tuple[list[Ledger], int]:
        """List ledgers newest first.

        Returns:
            (page of ledgers, total ledger count)
        """
        return (
            self.db.list_ledgers(workspace_id, limit=limit, offset=offset),
            self.db.count_ledgers(workspace_id),
        )

    def get_ledger(self, ledger_id: int, workspace_id: int) -> Ledger:
        ledger = self.db.get_ledger(ledger_id)
        if ledger is None or ledger.workspace_id != workspace_id:
            raise LedgerNotFoundError(ledger_not_found(ledger_id))
        return ledger

    def get_ledger_workspace_id(self, ledger_id: int) -> int:
        """Get the workspace that owns a ledger.

        Raises:
            LedgerNotFoundError: If the ledger doesn't exist
        """
        ledger = self.db.get_ledger(ledger_id)
        if ledger is None:
            raise LedgerNotFoundError(ledger_not_found(ledger_id))
        return ledger.workspace_id

    def delete_ledger(self, ledger_id: int, workspace_id: int) -> None:
        """Delete a ledger and its transactions.

        Raises:
            LedgerNotFoundError: If the ledger is not in the workspace
        """
        self.get_ledger(ledger_id, workspace_id)
        self.db.delete_ledger(ledger_id)
