"""
Unit tests for the ledger-wide overview.
"""
import pytest

from core.aggregation import aggregate_by_account_group
from core.overview import compute_overview, overview_bar_widths
from core.schema import Overview, Transaction


def test_empty_input():
    overview = compute_overview([])
    assert overview == Overview(income_total=0, expense_total=0, result=0)
    assert overview.label == "balanced"


def test_clearing_prefixes_are_excluded(rows):
    """Test 91 income and 92 expense are left out of the headline totals."""
    overview = compute_overview(rows)

    assert overview.income_total == 1500
    assert overview.expense_total == 1000 + 250 + 900
    assert overview.result == pytest.approx(2150 - 1500)


def test_clearing_income_still_in_group_aggregates():
    rows = [Transaction(account_group="9 - V", account="9100000", amount=-80)]

    assert compute_overview(rows).income_total == 0
    [agg] = aggregate_by_account_group(rows)
    assert agg.income_total == 80


def test_surplus_label():
    overview = compute_overview([
        Transaction(account="5100000", amount=-500),
        Transaction(account="6900100", amount=200),
    ])
    assert overview.result == -300
    assert overview.label == "surplus"
    assert overview.display_result == 300


def test_deficit_label():
    overview = compute_overview([
        Transaction(account="5100000", amount=-100),
        Transaction(account="6900100", amount=250),
    ])
    assert overview.label == "deficit"
    assert overview.display_result == 150


def test_rounding_noise_counts_as_balanced():
    overview = compute_overview([
        Transaction(account="5100000", amount=-0.3),
        Transaction(account="6900100", amount=0.1),
        Transaction(account="6900100", amount=0.2),
    ])
    assert overview.label == "balanced"
    assert overview.display_result == 0


@pytest.mark.parametrize("result, label", [
    (-0.004, "balanced"),
    (0.004, "balanced"),
    (-0.006, "surplus"),
    (0.006, "deficit"),
])
def test_balanced_tolerance_is_half_a_cent(result, label):
    overview = Overview(income_total=0, expense_total=0, result=result)
    assert overview.label == label


def test_overview_serializes_label():
    data = Overview(income_total=10, expense_total=5, result=-5).model_dump()
    assert data["label"] == "surplus"
    assert data["display_result"] == 5


def test_bar_widths_scale_to_largest_value():
    widths = overview_bar_widths(Overview(income_total=50, expense_total=200, result=150))
    assert widths == {"income": 25.0, "expense": 100.0, "result": 75.0}


def test_bar_widths_for_empty_overview():
    widths = overview_bar_widths(Overview())
    assert widths == {"income": 0.0, "expense": 0.0, "result": 0.0}
