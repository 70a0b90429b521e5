"""
Ledger parsing from the JSON export into Transaction rows.
Column names vary between exports (Jahr/jahr/year, ...), so each
canonical field is resolved through a list of accepted aliases.
"""
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from core.exceptions import LedgerFormatError
from core.logger import setup_logger
from core.numbers import parse_amount
from core.schema import NO_ACCOUNT_GROUP, Transaction

logger = setup_logger(__name__)

# First alias with a value wins
FIELD_ALIASES: Dict[str, List[str]] = {
    "year": ["jahr", "Jahr", "JAHR", "year", "Year"],
    "group": ["gruppe", "Gruppe", "GRUPPE", "group", "Group"],
    "group_level1": [
        "gruppe_ebene1", "Gruppe_Ebene1", "gruppeEbene1", "GruppeEbene1",
        "gruppe1", "Gruppe1", "group_level1", "groupLevel1",
    ],
    "account_group": ["kontogruppe", "Kontogruppe", "KONTOGRUPPE", "account_group", "accountGroup"],
    "account": ["sachkonto", "Sachkonto", "SACHKONTO", "account", "Account"],
    "amount": ["betrag", "Betrag", "BETRAG", "amount", "Amount"],
}

REQUIRED_FIELDS = ("group", "account_group", "account", "amount")


def safe_get_value(row: pd.Series, key: str, default: Any = None) -> Any:
    """
    Safely get value from pandas Series, handling NaN and None.

    Args:
        row: pandas Series
        key: Column key
        default: Default value if missing or NaN

    Returns:
        Value or default
    """
    value = row.get(key, default)
    if value is None:
        return default
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return default
    return value


def resolve_field(row: pd.Series, field: str) -> Any:
    """Return the first non-empty value among the aliases of ``field``."""
    for alias in FIELD_ALIASES[field]:
        value = safe_get_value(row, alias)
        if value is not None and str(value).strip() != "":
            return value
    return None


def as_text(value: Any) -> Optional[str]:
    """Coerce a cell to a trimmed string; 2024.0 becomes "2024"."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def normalize_transaction(row: pd.Series) -> Transaction:
    """
    Normalize a single ledger row.

    Args:
        row: pandas Series with the raw export columns

    Returns:
        Transaction with a parsed amount and defaulted keys
    """
    return Transaction(
        year=as_text(resolve_field(row, "year")),
        group=as_text(resolve_field(row, "group")) or "",
        group_level1=as_text(resolve_field(row, "group_level1")),
        account_group=as_text(resolve_field(row, "account_group")) or NO_ACCOUNT_GROUP,
        account=as_text(resolve_field(row, "account")) or "",
        amount=parse_amount(resolve_field(row, "amount")),
    )


def records_to_dataframe(records: Any) -> pd.DataFrame:
    """
    Build a DataFrame from the decoded JSON payload.

    Raises:
        LedgerFormatError: If the payload is not an array of objects
    """
    if not isinstance(records, list):
        raise LedgerFormatError(
            "Ledger must be a JSON array",
            details={"received_type": type(records).__name__}
        )

    bad_entries = [i for i, rec in enumerate(records) if not isinstance(rec, dict)]
    if bad_entries:
        raise LedgerFormatError(
            "Ledger entries must be JSON objects",
            details={"invalid_indices": bad_entries[:10], "invalid_count": len(bad_entries)}
        )

    # dtype=object keeps ints and strings as they were decoded
    df = pd.DataFrame(records, dtype=object)
    return df.dropna(how="all")


def validate_ledger(df: pd.DataFrame) -> Dict[str, Any]:
    """
    Check which canonical fields the export provides and return statistics.

    Args:
        df: Raw ledger DataFrame

    Returns:
        Dictionary with validation statistics
    """
    columns = set(df.columns)
    missing_fields = [
        field for field, aliases in FIELD_ALIASES.items()
        if not columns.intersection(aliases)
    ]
    amount_columns = [c for c in FIELD_ALIASES["amount"] if c in columns]
    empty_amounts = 0
    if amount_columns:
        empty_amounts = int(df[amount_columns].isna().all(axis=1).sum())

    stats = {
        "total_rows": len(df),
        "columns_found": len(df.columns),
        "missing_fields": missing_fields,
        "empty_amount": empty_amounts,
    }

    missing_required = [f for f in missing_fields if f in REQUIRED_FIELDS]
    if len(df) and missing_required:
        logger.warning(f"Ledger has no column for required fields: {missing_required}")
    logger.info(f"Ledger validation stats: {stats}")

    return stats


def parse_ledger_records(records: Any) -> Tuple[List[Transaction], Dict[str, Any]]:
    """
    Parse the decoded JSON ledger into transactions.

    Args:
        records: Decoded JSON payload, expected to be a list of objects

    Returns:
        Tuple of (Transaction rows in source order, validation statistics)

    Raises:
        LedgerFormatError: If the payload is structurally invalid
    """
    df = records_to_dataframe(records)
    stats = validate_ledger(df)
    return dataframe_to_transactions(df), stats


def dataframe_to_transactions(df: pd.DataFrame) -> List[Transaction]:
    """Normalize every DataFrame row into a Transaction."""
    transactions = [normalize_transaction(row) for _, row in df.iterrows()]
    logger.info(f"Parsed {len(transactions)} ledger rows")
    return transactions
