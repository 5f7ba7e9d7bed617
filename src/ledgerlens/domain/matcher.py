"""Keyword/regex matching of transaction descriptions against category patterns."""

import logging
import re
from typing import Iterable, Optional

from ledgerlens.domain.entities import CategoryPattern

logger = logging.getLogger(__name__)

REGEX_PREFIX = "regex:"
EXCLUDE_PREFIX = "!"


def _compile(text: str) -> Optional[re.Pattern]:
    try:
        return re.compile(text, re.IGNORECASE)
    except re.error as e:
        logger.debug("Ignoring invalid pattern regex %r: %s", text, e)
        return None


def pattern_matches(pattern: str, description: str) -> bool:
    """Check whether a single pattern text matches a description.

    Plain patterns are case-insensitive substrings. A ``regex:`` prefix makes
    the rest a case-insensitive regular expression; an invalid expression
    never matches. A leading ``!`` is ignored here (see CategoryMatcher).
    """
    if pattern.startswith(EXCLUDE_PREFIX):
        pattern = pattern[len(EXCLUDE_PREFIX):]
    if not pattern:
        return False

    if pattern.startswith(REGEX_PREFIX):
        regex = _compile(pattern[len(REGEX_PREFIX):])
        return regex is not None and regex.search(description) is not None

    return pattern.lower() in description.lower()


class CategoryMatcher:
    """Resolves descriptions to categories using one bank's pattern rows.

    Patterns are tried in rank order (priority ascending, then ID ascending).
    The first matching pattern wins unless an exclusion pattern (``!`` prefix)
    of the same category also matches the description.
    """

    def __init__(self, patterns: Iterable[CategoryPattern]):
        ordered = sorted(patterns, key=lambda p: (p.priority, p.id))
        self.include = [p for p in ordered if not p.pattern.startswith(EXCLUDE_PREFIX)]
        self.exclude = [p for p in ordered if p.pattern.startswith(EXCLUDE_PREFIX)]

    def _excluded_categories(self, description: str) -> set[int]:
        return {p.category_id for p in self.exclude if pattern_matches(p.pattern, description)}

    def suggest_category(self, description: str) -> Optional[CategoryPattern]:
        """Return the winning pattern for a description, or None."""
        if not description:
            return None

        excluded = self._excluded_categories(description) if self.exclude else set()
        for candidate in self.include:
            if candidate.category_id in excluded:
                continue
            if pattern_matches(candidate.pattern, description):
                return candidate
        return None

    def suggest_category_id(self, description: str) -> Optional[int]:
        match = self.suggest_category(description)
        return match.category_id if match is not None else None
