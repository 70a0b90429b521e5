"""
Income/expense classification by account number.

The chart of accounts encodes the kind of an account in its leading digits:
accounts starting with 5 or 91 are income, everything else is expense.
Aggregation, drill-down and the overview all classify through this module.
"""
import re
from typing import Any, Optional

INCOME_PREFIXES = ("5", "91")

# Clearing prefixes left out of the headline overview totals
OVERVIEW_EXCLUDED_INCOME_PREFIX = "91"
OVERVIEW_EXCLUDED_EXPENSE_PREFIX = "92"

_LEADING_DIGITS = re.compile(r"^\s*([0-9]+)")


def extract_leading_prefix(identifier: Optional[Any]) -> str:
    """
    Return the leading run of ASCII digits of an identifier.

    "6900100 - Büromaterial" -> "6900100", "(none)" -> "".

    Args:
        identifier: Account or account group identifier

    Returns:
        Digit prefix, or an empty string when there is none
    """
    if identifier is None:
        return ""
    match = _LEADING_DIGITS.match(str(identifier))
    return match.group(1) if match else ""


def leading_number(identifier: Optional[Any]) -> Optional[int]:
    """Numeric value of the leading prefix, or None if it has none."""
    prefix = extract_leading_prefix(identifier)
    return int(prefix) if prefix else None


def has_prefix(account: Optional[Any], prefix: str) -> bool:
    """True if the account's leading digits start with ``prefix``."""
    return extract_leading_prefix(account).startswith(prefix)


def is_income(account: Optional[Any]) -> bool:
    """
    Decide whether a transaction on ``account`` is income.

    Accounts without a numeric prefix are expense.
    """
    return extract_leading_prefix(account).startswith(INCOME_PREFIXES)
