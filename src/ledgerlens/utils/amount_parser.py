"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

# Values of BankConfig.decimal_format
EUROPEAN = "european"
STANDARD = "standard"


def parse_decimal(value: Optional[str], decimal_format: str = EUROPEAN) -> Decimal:
    """Parse a locale-formatted amount string into a Decimal.

    Handles:
    - "1.234,56" / "-1.234,56" (european)
    - "1,234.56" / "-1,234.56" (standard)
    - "- 12,30" (sign separated from the digits by whitespace)

    Statement fields are often blank or garbled, so this never raises:
    empty and malformed input both yield ``Decimal("0")``.

    Args:
        value: Amount string as printed on the statement
        decimal_format: Separator convention of the statement ("european"
            or "standard")

    Returns:
        Decimal amount
    """
    if value is None or not value.strip():
        return Decimal("0")

    # Remove whitespace, including between a leading sign and the digits
    normalized = re.sub(r"\s+", "", value)

    if decimal_format == EUROPEAN:
        normalized = normalized.replace(".", "").replace(",", ".")
    else:
        normalized = normalized.replace(",", "")

    try:
        amount = Decimal(normalized)
    except InvalidOperation:
        return Decimal("0")

    if not amount.is_finite():
        return Decimal("0")
    return amount
