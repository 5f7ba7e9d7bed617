"""Category domain service: categories, patterns, suggestion and recategorization."""

import logging
from typing import Optional

from ledgerlens.database.base import Database
from ledgerlens.domain.entities import Category, CategoryPattern, RecategorizeResult
from ledgerlens.domain.errors import (
    CategoryNotFoundError,
    ConflictError,
    DuplicatePatternError,
    PatternNotFoundError,
    UnsupportedBankError,
    ValidationError,
    WorkspaceNotFoundError,
    category_not_found,
    duplicate_category,
    duplicate_pattern,
    pattern_not_found,
    unsupported_bank,
    workspace_not_found,
)
from ledgerlens.domain.matcher import CategoryMatcher, pattern_matches
from ledgerlens.parsers.registry import BANK_CATEGORY_PATTERNS, is_supported, supported_bank_ids

logger = logging.getLogger(__name__)

SUPPORTED_LOCALES = ("en", "pt")

# (name, color, icon, Portuguese name)
DEFAULT_CATEGORIES = [
    ("Uncategorized", "#a1a1aa", "help-circle", "Sem Categoria"),
    ("Groceries", "#22c55e", "shopping-cart", "Mercearia"),
    ("Fuel", "#f97316", "fuel", "Combustível"),
    ("Health", "#ef4444", "heart", "Saúde"),
    ("Fitness", "#8b5cf6", "dumbbell", "Fitness"),
    ("Entertainment", "#ec4899", "film", "Entretenimento"),
    ("Dining", "#f59e0b", "utensils", "Restauração"),
    ("Shopping", "#6366f1", "bag", "Compras"),
    ("Utilities", "#14b8a6", "zap", "Serviços"),
    ("Housing", "#0ea5e9", "home", "Habitação"),
    ("Insurance", "#64748b", "shield", "Seguros"),
    ("Income", "#10b981", "trending-up", "Receitas"),
    ("Transfers", "#3b82f6", "repeat", "Transferências"),
    ("Fees", "#94a3b8", "percent", "Taxas"),
    ("Cash", "#78716c", "banknote", "Dinheiro"),
    ("Other", "#a1a1aa", "more-horizontal", "Outros"),
]

_TRANSLATIONS = {name: {"en": name, "pt": pt_name} for name, _, _, pt_name in DEFAULT_CATEGORIES}


def localized_name(name: str, locale: str = "en") -> str:
    """Translate a default category name, leaving unknown names as they are."""
    return _TRANSLATIONS.get(name, {}).get(locale, name)


def default_category_names(name: str) -> tuple[str, ...]:
    """All names a default category may have been seeded under."""
    translations = _TRANSLATIONS.get(name)
    if translations is None:
        return (name,)
    return tuple(dict.fromkeys(translations.values()))


class CategoryService:
    """Service for managing categories and their description patterns."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    # Categories
    def _require_workspace(self, workspace_id: int) -> None:
        if self.db.get_workspace(workspace_id) is None:
            raise WorkspaceNotFoundError(workspace_not_found(workspace_id))

    def _require_category(self, category_id: int, workspace_id: int) -> Category:
        category = self.db.get_category(category_id)
        if category is None or category.workspace_id != workspace_id:
            raise CategoryNotFoundError(category_not_found(category_id))
        return category

    def create_category(
        self,
        workspace_id: int,
        name: str,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> int:
        """Create a user category.

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the workspace already has a category with this name
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name must not be empty")
        self._require_workspace(workspace_id)
        if self.db.get_category_by_name(workspace_id, name) is not None:
            raise ConflictError(duplicate_category(name))
        return self.db.create_category(workspace_id, name, color=color, icon=icon)

    def get_category(self, category_id: int, workspace_id: int) -> Category:
        """Get a workspace category.

        Raises:
            CategoryNotFoundError: If it doesn't exist in the workspace
        """
        return self._require_category(category_id, workspace_id)

    def get_category_by_name(self, workspace_id: int, name: str) -> Optional[Category]:
        return self.db.get_category_by_name(workspace_id, name)

    def list_categories(self, workspace_id: int) -> list[Category]:
        return self.db.list_categories(workspace_id)

    def get_category_with_patterns(
        self, category_id: int, workspace_id: int
    ) -> tuple[Category, list[CategoryPattern]]:
        """Get a category together with its patterns across all banks."""
        category = self._require_category(category_id, workspace_id)
        patterns = self.db.list_category_patterns(workspace_id, category_id=category_id)
        return category, patterns

    def update_category(
        self,
        category_id: int,
        workspace_id: int,
        name: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> None:
        """Rename or restyle a category."""
        self._require_category(category_id, workspace_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Category name must not be empty")
            existing = self.db.get_category_by_name(workspace_id, name)
            if existing is not None and existing.id != category_id:
                raise ConflictError(duplicate_category(name))
        self.db.update_category(category_id, name=name, color=color, icon=icon)

    def delete_category(self, category_id: int, workspace_id: int) -> None:
        """Delete a category; its patterns go with it and its transactions become uncategorized."""
        self._require_category(category_id, workspace_id)
        self.db.delete_category(category_id)

    # Patterns
    def get_matcher(self, bank_id: str, workspace_id: int) -> CategoryMatcher:
        """Build a matcher over the workspace's patterns for one bank."""
        return CategoryMatcher(self.db.list_category_patterns(workspace_id, bank_id=bank_id))

    def suggest_category(self, description: str, bank_id: str, workspace_id: int) -> Optional[int]:
        """Suggest a category ID for a description, or None if no pattern matches."""
        return self.get_matcher(bank_id, workspace_id).suggest_category_id(description)

    def check_pattern_exists(
        self, workspace_id: int, bank_id: str, pattern: str
    ) -> tuple[bool, Optional[str]]:
        """Check whether a pattern text is taken for a bank in the workspace.

        Returns:
            (exists, name of the owning category or None)
        """
        existing = self.db.find_category_pattern(workspace_id, bank_id, pattern.strip())
        if existing is None:
            return False, None
        return True, existing.category_name

    def _validate_new_pattern(
        self, category_id: int, workspace_id: int, bank_id: str, pattern: str, priority: int
    ) -> str:
        pattern = pattern.strip()
        if not pattern:
            raise ValidationError("Pattern must not be empty")
        if priority < 0:
            raise ValidationError("Pattern priority must not be negative")
        if not is_supported(bank_id):
            raise UnsupportedBankError(unsupported_bank(bank_id, supported_bank_ids()))
        self._require_category(category_id, workspace_id)

        existing = self.db.find_category_pattern(workspace_id, bank_id, pattern)
        if existing is not None:
            raise DuplicatePatternError(duplicate_pattern(pattern, existing.category_name or ""))
        return pattern

    def create_pattern(
        self,
        category_id: int,
        workspace_id: int,
        bank_id: str,
        pattern: str,
        priority: int = 0,
    ) -> tuple[int, int]:
        """Add a pattern to a category and recategorize matching transactions.

        The insert and the sweep form one atomic unit.

        Returns:
            (pattern_id, number of transactions recategorized)

        Raises:
            ValidationError: If the pattern is empty or the priority negative
            UnsupportedBankError: If the bank has no registered parser
            CategoryNotFoundError: If the category is not in the workspace
            DuplicatePatternError: If the pattern text is taken for this bank
        """
        pattern = self._validate_new_pattern(category_id, workspace_id, bank_id, pattern, priority)

        with self.db.atomic():
            pattern_id = self.db.create_category_pattern(category_id, bank_id, pattern, priority)
            result = self._sweep(bank_id, workspace_id, category_id, pattern)

        logger.info(
            "Pattern %r added to category %d: %d of %d transactions recategorized",
            pattern,
            category_id,
            result.recategorized,
            result.total_checked,
        )
        return pattern_id, result.recategorized

    def create_quick_pattern(
        self, category_id: int, workspace_id: int, bank_id: str, pattern: str
    ) -> int:
        """Add a top-priority pattern from the upload review flow, without a sweep."""
        pattern = self._validate_new_pattern(category_id, workspace_id, bank_id, pattern, 0)
        return self.db.create_category_pattern(category_id, bank_id, pattern, priority=0)

    def delete_pattern(self, category_id: int, pattern_id: int, workspace_id: int) -> None:
        """Delete a pattern. Already categorized transactions keep their category.

        Raises:
            PatternNotFoundError: If the pattern doesn't belong to the category
        """
        self._require_category(category_id, workspace_id)
        existing = self.db.get_category_pattern(pattern_id)
        if existing is None or existing.category_id != category_id:
            raise PatternNotFoundError(pattern_not_found(pattern_id))
        self.db.delete_category_pattern(pattern_id)

    def recategorize(self, bank_id: str, workspace_id: int, category_id: int) -> RecategorizeResult:
        """Reassign non-manual transactions the matcher now resolves to a category."""
        self._require_category(category_id, workspace_id)
        with self.db.atomic():
            return self._sweep(bank_id, workspace_id, category_id)

    def _sweep(
        self,
        bank_id: str,
        workspace_id: int,
        category_id: int,
        new_pattern: Optional[str] = None,
    ) -> RecategorizeResult:
        matcher = self.get_matcher(bank_id, workspace_id)
        candidates = self.db.list_transactions(workspace_id, bank_id=bank_id, is_manual=False)

        recategorized = 0
        for txn in candidates:
            if new_pattern is not None and not pattern_matches(new_pattern, txn.description):
                continue
            if matcher.suggest_category_id(txn.description) != category_id:
                continue
            if txn.category_id == category_id:
                continue
            self.db.update_transaction_category(txn.id, category_id)
            recategorized += 1

        return RecategorizeResult(total_checked=len(candidates), recategorized=recategorized)

    # Seeding
    def seed_workspace(self, workspace_id: int, locale: str = "en") -> int:
        """Create the default categories and every bank's seed patterns.

        Patterns are inserted in list order with priority equal to their index
        within the bank's list for that category.

        Returns:
            Number of categories created

        Raises:
            ValidationError: If the locale is not supported
            ConflictError: If the workspace already has categories
        """
        if locale not in SUPPORTED_LOCALES:
            raise ValidationError(
                f"Unsupported locale: {locale}. Supported locales: {', '.join(SUPPORTED_LOCALES)}"
            )
        self._require_workspace(workspace_id)
        if self.db.list_categories(workspace_id):
            raise ConflictError(f"Workspace {workspace_id} already has categories")

        with self.db.atomic():
            category_ids: dict[str, int] = {}
            for name, color, icon, _ in DEFAULT_CATEGORIES:
                category_ids[name] = self.db.create_category(
                    workspace_id,
                    localized_name(name, locale),
                    color=color,
                    icon=icon,
                    is_default=True,
                )

            pattern_count = 0
            for bank_id, category_patterns in BANK_CATEGORY_PATTERNS.items():
                for name, patterns in category_patterns.items():
                    for index, pattern in enumerate(patterns):
                        self.db.create_category_pattern(
                            category_ids[name], bank_id, pattern, priority=index
                        )
                        pattern_count += 1

        logger.info(
            "Seeded workspace %d with %d categories and %d patterns",
            workspace_id,
            len(category_ids),
            pattern_count,
        )
        return len(category_ids)
