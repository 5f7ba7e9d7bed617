"""Shared domain error messages and error types."""

from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``code`` is a stable
    identifier callers can branch on.
    """

    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    code = "NOT_FOUND"


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""

    code = "CONFLICT"


class UnsupportedBankError(ValidationError):
    """No parser is registered for the requested bank."""

    code = "UNSUPPORTED_BANK"


class InvalidDocumentError(ValidationError):
    """Uploaded file is not a readable PDF statement."""

    code = "INVALID_DOCUMENT"


class DuplicatePatternError(ConflictError):
    """Pattern text already exists for the bank within the workspace."""

    code = "DUPLICATE_PATTERN"


class PatternNotFoundError(NotFoundError):
    code = "PATTERN_NOT_FOUND"


class LedgerNotFoundError(NotFoundError):
    code = "LEDGER_NOT_FOUND"


class CategoryNotFoundError(NotFoundError):
    code = "CATEGORY_NOT_FOUND"


class TransactionNotFoundError(NotFoundError):
    code = "TRANSACTION_NOT_FOUND"


class RecurringPatternNotFoundError(NotFoundError):
    code = "RECURRING_PATTERN_NOT_FOUND"


class WorkspaceNotFoundError(NotFoundError):
    code = "WORKSPACE_NOT_FOUND"


def unsupported_bank(bank_id: str, supported: Iterable[str]) -> str:
    """Return message for a bank without a registered parser."""
    return f"Unsupported bank: {bank_id}. Supported banks: {', '.join(supported)}"


def workspace_not_found(workspace_id: int) -> str:
    """Return message for missing workspace."""
    return f"Workspace {workspace_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def ledger_not_found(ledger_id: int) -> str:
    """Return message for missing ledger."""
    return f"Ledger {ledger_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def pattern_not_found(pattern_id: int) -> str:
    """Return message for missing category pattern."""
    return f"Pattern {pattern_id} not found"


def recurring_pattern_not_found(pattern_id: int) -> str:
    """Return message for missing recurring pattern."""
    return f"Recurring pattern {pattern_id} not found"


def duplicate_pattern(pattern: str, category_name: str) -> str:
    """Return message when a pattern text is already used in the workspace."""
    return f"Pattern '{pattern}' already exists in category \"{category_name}\""


def duplicate_category(name: str) -> str:
    """Return message for duplicate category name."""
    return f"Category '{name}' already exists in this workspace"
