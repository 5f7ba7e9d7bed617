"""Registry of supported banks and their statement parsers.

Built once at import time from the statically registered definitions. The
registry is also the source of truth for category pattern seeding and for the
bank listing shown to users.
"""

from typing import Any, Callable, Optional

from ledgerlens.domain.entities import BankConfig, ParseResult
from ledgerlens.parsers.base import BankParserDefinition
from ledgerlens.parsers.cgd import CGD
from ledgerlens.parsers.novo_banco import NOVO_BANCO

DEFINITIONS: tuple[BankParserDefinition, ...] = (
    NOVO_BANCO,
    CGD,
)

_REGISTRY: dict[str, BankParserDefinition] = {d.config.id: d for d in DEFINITIONS}

BANK_CONFIGS: dict[str, BankConfig] = {bank_id: d.config for bank_id, d in _REGISTRY.items()}

BANK_CATEGORY_PATTERNS: dict[str, dict[str, list[str]]] = {
    bank_id: d.category_patterns for bank_id, d in _REGISTRY.items()
}


def get_definition(bank_id: str) -> Optional[BankParserDefinition]:
    """Get the full definition for a bank, or None if unsupported."""
    return _REGISTRY.get(bank_id)


def get_parser(bank_id: str) -> Optional[Callable[[bytes], ParseResult]]:
    """Get the parse function for a bank, or None if unsupported."""
    definition = _REGISTRY.get(bank_id)
    if definition is None:
        return None
    return definition.parse


def is_supported(bank_id: str) -> bool:
    """Check whether a bank has a registered parser."""
    return bank_id in _REGISTRY


def supported_bank_ids() -> list[str]:
    """List registered bank IDs in registration order."""
    return list(_REGISTRY)


def list_banks() -> list[dict[str, Any]]:
    """List supported banks for bank selection.

    Returns:
        List of dicts with id, name, country and currency
    """
    return [
        {
            "id": d.config.id,
            "name": d.config.display_name,
            "country": d.config.country,
            "currency": d.config.currency,
        }
        for d in DEFINITIONS
    ]


def classify_transaction_type(bank_id: str, description: str) -> Optional[str]:
    """Name the kind of movement a description represents for a bank.

    Returns:
        Key of the first matching transaction pattern (e.g. "CARD_PURCHASE"),
        or None if the bank is unknown or nothing matches
    """
    definition = _REGISTRY.get(bank_id)
    if definition is None:
        return None
    for name, regex in definition.transaction_patterns.items():
        if regex.search(description):
            return name
    return None
