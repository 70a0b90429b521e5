"""
Expense/income aggregation per account group and per account.

Sign convention: income is booked as negative amounts, so income rows
contribute ``-amount`` to the income total and expense rows contribute
``+amount`` to the expense total. Balance is expense minus income.
"""
from typing import Callable, Dict, List, Sequence, Tuple

from core.classify import is_income, leading_number
from core.filters import locale_sort_key
from core.logger import setup_logger
from core.schema import NO_ACCOUNT_GROUP, Aggregate, Transaction

logger = setup_logger(__name__)


def group_sort_key(key: str) -> Tuple[int, int, Tuple[str, str]]:
    """
    Sort key for account group and account identifiers.

    Numeric prefixes ascending first, keys without a prefix after them,
    locale order for everything else.
    """
    number = leading_number(key)
    if number is None:
        return (1, 0, locale_sort_key(key))
    return (0, number, locale_sort_key(key))


def _aggregate(
    rows: Sequence[Transaction],
    key_of: Callable[[Transaction], str],
) -> List[Aggregate]:
    totals: Dict[str, Dict[str, float]] = {}

    for txn in rows:
        key = key_of(txn) or NO_ACCOUNT_GROUP
        bucket = totals.setdefault(
            key, {"expense_total": 0.0, "income_total": 0.0, "balance": 0.0}
        )

        if is_income(txn.account):
            bucket["income_total"] += -txn.amount
        else:
            bucket["expense_total"] += txn.amount

        bucket["balance"] = bucket["expense_total"] - bucket["income_total"]

    return [
        Aggregate(key=key, **totals[key])
        for key in sorted(totals, key=group_sort_key)
    ]


def aggregate_by_account_group(rows: Sequence[Transaction]) -> List[Aggregate]:
    """
    Aggregate rows per account group (Kontogruppe).

    Args:
        rows: Filtered transactions

    Returns:
        One Aggregate per distinct account group, sorted by group_sort_key
    """
    aggregates = _aggregate(rows, lambda txn: txn.account_group)
    logger.debug(f"Aggregated {len(rows)} rows into {len(aggregates)} account groups")
    return aggregates


def aggregate_by_account(rows: Sequence[Transaction]) -> List[Aggregate]:
    """
    Aggregate rows per account (Sachkonto) for the drill-down view.

    Expects rows already restricted to a single account group.
    """
    aggregates = _aggregate(rows, lambda txn: txn.account)
    logger.debug(f"Aggregated {len(rows)} rows into {len(aggregates)} accounts")
    return aggregates
