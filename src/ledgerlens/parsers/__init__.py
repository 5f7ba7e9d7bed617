"""Bank statement parsers for ledgerlens."""

from ledgerlens.parsers.registry import (
    get_definition,
    get_parser,
    list_banks,
    supported_bank_ids,
)

__all__ = ["get_definition", "get_parser", "list_banks", "supported_bank_ids"]
