"""Recurring transaction detection and recurring pattern management."""

import logging
import re
import statistics
from collections import defaultdict
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ledgerlens.database.base import Database
from ledgerlens.domain.entities import (
    DetectionResult,
    RecurringFrequency,
    RecurringPattern,
    RecurringSummary,
    Transaction,
    TransactionDirection,
)
from ledgerlens.domain.errors import (
    RecurringPatternNotFoundError,
    ValidationError,
    recurring_pattern_not_found,
)
from ledgerlens.utils.date_parser import to_date

logger = logging.getLogger(__name__)

MIN_OCCURRENCES = 2

# Accepted range of the mean gap in days, and the nominal gap per frequency
FREQUENCY_BANDS = {
    RecurringFrequency.WEEKLY: (5, 9),
    RecurringFrequency.MONTHLY: (25, 35),
    RecurringFrequency.YEARLY: (350, 380),
}
NOMINAL_INTERVALS = {
    RecurringFrequency.WEEKLY: 7,
    RecurringFrequency.MONTHLY: 30,
    RecurringFrequency.YEARLY: 365,
}
# Gap standard deviation may not exceed this share of the nominal gap
INTERVAL_STD_RATIO = 0.3
# Coefficient of variation (population std / mean) of member amounts
MAX_AMOUNT_CV = 0.2

MONTHLY_FACTORS = {
    RecurringFrequency.WEEKLY: Decimal("4.33"),
    RecurringFrequency.MONTHLY: Decimal("1"),
    RecurringFrequency.YEARLY: Decimal("1") / Decimal("12"),
}

CENTS = Decimal("0.01")

_DATE_PATTERNS = (
    re.compile(r"\d{2}/\d{2}/\d{4}"),
    re.compile(r"\d{4}-\d{2}-\d{2}"),
    re.compile(r"\d{2}\.\d{2}\.\d{2}(?:\d{2})?"),
)
_LONG_NUMBER_RE = re.compile(r"\b\d{6,}\b")
_PUNCTUATION_RE = re.compile(r"[^\w\s&]")
_TRAILING_NUMBERS_RE = re.compile(r"(?:\s+\d+)+$")


def normalize_description(text: str) -> str:
    """Reduce a description to the key recurring transactions share.

    Upper-cases, removes dates, reference numbers, punctuation other than
    '&' and trailing numeric tokens, and collapses whitespace.
    """
    key = text.upper()
    for pattern in _DATE_PATTERNS:
        key = pattern.sub(" ", key)
    key = _LONG_NUMBER_RE.sub(" ", key)
    key = _PUNCTUATION_RE.sub(" ", key)
    key = " ".join(key.split())
    key = _TRAILING_NUMBERS_RE.sub("", key)
    return key.strip()


def classify_frequency(intervals: list[int]) -> Optional[RecurringFrequency]:
    """Classify day gaps as weekly, monthly or yearly, or None if irregular."""
    if not intervals:
        return None

    mean_gap = statistics.fmean(intervals)
    for frequency, (low, high) in FREQUENCY_BANDS.items():
        if low <= mean_gap <= high:
            spread = statistics.pstdev(intervals)
            if spread <= INTERVAL_STD_RATIO * NOMINAL_INTERVALS[frequency]:
                return frequency
            return None
    return None


def amounts_consistent(amounts: list[Decimal]) -> bool:
    """Check that amounts vary little enough to be one recurring charge."""
    values = [float(a) for a in amounts]
    mean_amount = statistics.fmean(values)
    if mean_amount <= 0:
        return False
    return statistics.pstdev(values) / mean_amount <= MAX_AMOUNT_CV


def monthly_cost(pattern: RecurringPattern) -> Decimal:
    """Monthly equivalent of a pattern's average amount."""
    return pattern.avg_amount * MONTHLY_FACTORS[pattern.frequency]


@dataclass(frozen=True)
class _Candidate:
    description_pattern: str
    frequency: RecurringFrequency
    direction: TransactionDirection
    avg_amount: Decimal
    transaction_ids: list[int]


def _analyze_group(
    key: str, direction: TransactionDirection, transactions: list[Transaction]
) -> Optional[_Candidate]:
    dated = sorted(
        ((to_date(txn.date), txn) for txn in transactions if to_date(txn.date) is not None),
        key=lambda item: item[0],
    )
    if len(dated) < MIN_OCCURRENCES:
        return None

    intervals = [(later[0] - earlier[0]).days for earlier, later in zip(dated, dated[1:])]
    frequency = classify_frequency(intervals)
    if frequency is None:
        return None

    amounts = [txn.amount for _, txn in dated]
    if not amounts_consistent(amounts):
        logger.debug("Group %r rejected: amounts vary too much", key)
        return None

    avg_amount = (sum(amounts, Decimal("0")) / len(amounts)).quantize(CENTS, rounding=ROUND_HALF_UP)
    return _Candidate(
        description_pattern=key,
        frequency=frequency,
        direction=direction,
        avg_amount=avg_amount,
        transaction_ids=[txn.id for _, txn in dated],
    )


class RecurringService:
    """Service for detecting and managing recurring transaction patterns."""

    def __init__(self, db: Database):
        """Initialize recurring service.

        Args:
            db: Database instance
        """
        self.db = db

    def find_candidates(self, workspace_id: int) -> list[_Candidate]:
        """Group workspace transactions and return the groups that recur."""
        groups: dict[tuple[str, TransactionDirection], list[Transaction]] = defaultdict(list)
        for txn in self.db.list_transactions(workspace_id):
            key = normalize_description(txn.description)
            if key:
                groups[(key, txn.direction)].append(txn)

        candidates = []
        for (key, direction), members in groups.items():
            if len(members) < MIN_OCCURRENCES:
                continue
            candidate = _analyze_group(key, direction, members)
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def detect(self, workspace_id: int) -> DetectionResult:
        """Detect recurring patterns and store them.

        Existing patterns with the same description, frequency and direction are
        refreshed instead of duplicated. Member transactions are linked to
        their pattern. The whole run is one atomic unit.

        Returns:
            DetectionResult with the number of new patterns and every
            pattern accepted in this run
        """
        candidates = self.find_candidates(workspace_id)

        detected = 0
        pattern_ids = []
        with self.db.atomic():
            for candidate in candidates:
                existing = self.db.find_recurring_pattern(
                    workspace_id,
                    candidate.description_pattern,
                    candidate.frequency,
                    candidate.direction,
                )
                if existing is not None:
                    pattern_id = existing.id
                    self.db.update_recurring_pattern(
                        pattern_id,
                        avg_amount=candidate.avg_amount,
                        occurrence_count=len(candidate.transaction_ids),
                    )
                else:
                    pattern_id = self.db.create_recurring_pattern(
                        workspace_id,
                        candidate.description_pattern,
                        candidate.frequency,
                        candidate.avg_amount,
                        len(candidate.transaction_ids),
                        direction=candidate.direction,
                    )
                    detected += 1

                self.db.link_transactions_to_recurring_pattern(candidate.transaction_ids, pattern_id)
                pattern_ids.append(pattern_id)

        logger.info(
            "Recurring detection for workspace %d: %d accepted, %d new",
            workspace_id,
            len(pattern_ids),
            detected,
        )
        patterns = [self.db.get_recurring_pattern(pattern_id) for pattern_id in pattern_ids]
        return DetectionResult(detected=detected, patterns=patterns)

    def _require_pattern(self, pattern_id: int, workspace_id: int) -> RecurringPattern:
        pattern = self.db.get_recurring_pattern(pattern_id)
        if pattern is None or pattern.workspace_id != workspace_id:
            raise RecurringPatternNotFoundError(recurring_pattern_not_found(pattern_id))
        return pattern

    def get_pattern(self, pattern_id: int, workspace_id: int) -> RecurringPattern:
        return self._require_pattern(pattern_id, workspace_id)

    def list_patterns(self, workspace_id: int, active_only: bool = False) -> list[RecurringPattern]:
        return self.db.list_recurring_patterns(workspace_id, active_only=active_only)

    def set_active(self, pattern_id: int, workspace_id: int, is_active: bool) -> None:
        self._require_pattern(pattern_id, workspace_id)
        self.db.update_recurring_pattern(pattern_id, is_active=is_active)

    def update_pattern(
        self,
        pattern_id: int,
        workspace_id: int,
        description_pattern: Optional[str] = None,
        frequency: Optional[RecurringFrequency] = None,
        avg_amount: Optional[Decimal] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Edit the descriptive fields of a pattern.

        Raises:
            RecurringPatternNotFoundError: If the pattern is not in the workspace
            ValidationError: If the description is empty or the amount not positive
        """
        self._require_pattern(pattern_id, workspace_id)
        if description_pattern is not None:
            description_pattern = description_pattern.strip()
            if not description_pattern:
                raise ValidationError("Description pattern must not be empty")
        if avg_amount is not None and avg_amount <= 0:
            raise ValidationError("Average amount must be positive")
        self.db.update_recurring_pattern(
            pattern_id,
            description_pattern=description_pattern,
            frequency=frequency,
            avg_amount=avg_amount,
            is_active=is_active,
        )

    def delete_pattern(self, pattern_id: int, workspace_id: int) -> None:
        """Delete a pattern. Its transactions are unlinked, not deleted."""
        self._require_pattern(pattern_id, workspace_id)
        self.db.delete_recurring_pattern(pattern_id)

    def get_pattern_transactions(self, pattern_id: int, workspace_id: int) -> list[Transaction]:
        self._require_pattern(pattern_id, workspace_id)
        return self.db.list_transactions(workspace_id, recurring_pattern_id=pattern_id)

    def get_summary(self, workspace_id: int) -> RecurringSummary:
        """Count active patterns and estimate what they cost per month."""
        active = self.db.list_recurring_patterns(workspace_id, active_only=True)
        total = sum((monthly_cost(p) for p in active), Decimal("0"))
        return RecurringSummary(
            total_active=len(active),
            estimated_monthly_cost=total.quantize(CENTS, rounding=ROUND_HALF_UP),
        )
