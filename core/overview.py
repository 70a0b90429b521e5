"""
Ledger-wide overview totals.

The overview leaves out clearing accounts: income on 91... accounts and
expense on 92... accounts. That makes it narrower than the per-group
aggregation, so it is computed in its own pass over the rows.
"""
from typing import Dict, Sequence

from core.classify import (
    OVERVIEW_EXCLUDED_EXPENSE_PREFIX,
    OVERVIEW_EXCLUDED_INCOME_PREFIX,
    has_prefix,
    is_income,
)
from core.logger import setup_logger
from core.schema import Overview, Transaction

logger = setup_logger(__name__)


def compute_overview(rows: Sequence[Transaction]) -> Overview:
    """
    Compute headline income, expense and result.

    Args:
        rows: Filtered transactions

    Returns:
        Overview with result = expense_total - income_total
    """
    income_total = 0.0
    expense_total = 0.0
    excluded = 0

    for txn in rows:
        if is_income(txn.account):
            if has_prefix(txn.account, OVERVIEW_EXCLUDED_INCOME_PREFIX):
                excluded += 1
                continue
            income_total += -txn.amount
        else:
            if has_prefix(txn.account, OVERVIEW_EXCLUDED_EXPENSE_PREFIX):
                excluded += 1
                continue
            expense_total += txn.amount

    overview = Overview(
        income_total=income_total,
        expense_total=expense_total,
        result=expense_total - income_total,
    )
    logger.debug(
        f"Overview over {len(rows)} rows ({excluded} clearing rows excluded): "
        f"income={income_total:.2f} expense={expense_total:.2f} result={overview.result:.2f}"
    )
    return overview


def overview_bar_widths(overview: Overview) -> Dict[str, float]:
    """
    Bar widths in percent for the overview panel.

    Each value is scaled against the largest absolute value of income,
    expense and result (at least 1), clamped to 0..100.
    """
    values = {
        "income": overview.income_total,
        "expense": overview.expense_total,
        "result": overview.result,
    }
    max_abs = max([abs(v) for v in values.values()] + [1.0])
    return {
        name: max(0.0, min(100.0, abs(value) / max_abs * 100))
        for name, value in values.items()
    }
