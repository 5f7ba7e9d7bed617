"""Utility functions for ledgerlens."""

from ledgerlens.utils.date_parser import parse_statement_date, to_date
from ledgerlens.utils.amount_parser import parse_decimal
from ledgerlens.utils.file_hash import generate_file_hash

__all__ = ["parse_statement_date", "to_date", "parse_decimal", "generate_file_hash"]
