"""
Unit tests for per account group and per account aggregation.
"""
import pytest

from core.aggregation import aggregate_by_account, aggregate_by_account_group, group_sort_key
from core.classify import is_income
from core.schema import NO_ACCOUNT_GROUP, Transaction


def test_income_and_expense_per_group():
    """Test the sign convention on a single group."""
    rows = [
        Transaction(account_group="1 - A", account="6900100", amount=100),
        Transaction(account_group="1 - A", account="5100000", amount=-50),
    ]
    [agg] = aggregate_by_account_group(rows)

    assert agg.key == "1 - A"
    assert agg.expense_total == 100
    assert agg.income_total == 50
    assert agg.balance == 50


def test_negative_expense_reduces_expense_total():
    """Test credits on expense accounts are netted, not moved to income."""
    rows = [
        Transaction(account_group="14 - Sach", account="6850000", amount=200),
        Transaction(account_group="14 - Sach", account="6850000", amount=-45.5),
    ]
    [agg] = aggregate_by_account_group(rows)
    assert agg.expense_total == pytest.approx(154.5)
    assert agg.income_total == 0


def test_clearing_income_is_kept_per_group(rows):
    """Test 91... accounts count as income in the group table."""
    aggregates = {agg.key: agg for agg in aggregate_by_account_group(rows)}
    clearing = aggregates["9 - Verrechnung"]
    assert clearing.income_total == 300
    assert clearing.expense_total == 300
    assert clearing.balance == 0


def test_totals_match_classified_sums(rows):
    """Test group totals add up to the classified row sums."""
    aggregates = aggregate_by_account_group(rows)

    income_rows = [r.amount for r in rows if is_income(r.account)]
    expense_rows = [r.amount for r in rows if not is_income(r.account)]

    assert sum(a.income_total for a in aggregates) == pytest.approx(-sum(income_rows))
    assert sum(a.expense_total for a in aggregates) == pytest.approx(sum(expense_rows))
    for agg in aggregates:
        assert agg.balance == pytest.approx(agg.expense_total - agg.income_total)


def test_sort_order_numeric_then_text():
    """Test numeric prefixes sort ascending and unnumbered groups go last."""
    rows = [
        Transaction(account_group="10 - X", account="6000000", amount=1),
        Transaction(account_group="2 - Y", account="6000000", amount=1),
        Transaction(account_group=NO_ACCOUNT_GROUP, account="6000000", amount=1),
    ]
    keys = [agg.key for agg in aggregate_by_account_group(rows)]
    assert keys == ["2 - Y", "10 - X", "(none)"]


def test_sort_order_text_keys_locale_aware():
    keys = ["Zuschüsse", "Ämter", "3 - C", "abgaben"]
    assert sorted(keys, key=group_sort_key) == ["3 - C", "abgaben", "Ämter", "Zuschüsse"]


def test_missing_account_group_uses_sentinel():
    rows = [Transaction(account="6000000", amount=5)]
    [agg] = aggregate_by_account_group(rows)
    assert agg.key == NO_ACCOUNT_GROUP


def test_empty_input():
    assert aggregate_by_account_group([]) == []
    assert aggregate_by_account([]) == []


def test_aggregation_is_idempotent(rows):
    """Test repeated calls don't accumulate state."""
    first = aggregate_by_account_group(rows)
    second = aggregate_by_account_group(rows)
    assert first == second


def test_aggregate_by_account(rows):
    """Test drill-down groups by account with the same sign rule."""
    in_group = [r for r in rows if r.account_group == "9 - Verrechnung"]
    aggregates = aggregate_by_account(in_group)

    assert [a.key for a in aggregates] == ["9100000 - Umlage Ertrag", "9200000 - Umlage Aufwand"]
    assert aggregates[0].income_total == 300
    assert aggregates[0].expense_total == 0
    assert aggregates[0].balance == -300
    assert aggregates[1].expense_total == 300
