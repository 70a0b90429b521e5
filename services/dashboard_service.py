"""
Dashboard service.
Owns the session state and runs the filter/aggregate pipeline on demand.
"""
import re
from typing import Any, Dict, Iterable, List, Optional

from core.aggregation import aggregate_by_account, aggregate_by_account_group
from core.config import get_settings
from core.exporters import create_output_filename, export_dashboard_to_excel
from core.filters import apply_filters, filter_options, unique_sorted
from core.logger import setup_logger
from core.overview import compute_overview, overview_bar_widths
from core.parsing import parse_ledger_records
from core.schema import (
    ALL_GROUPS,
    Aggregate,
    FilterSelection,
    GroupFilter,
    SpecificGroup,
    Transaction,
)
from core.source import load_ledger_source

logger = setup_logger(__name__)

YEAR_PATTERN = re.compile(r"[0-9]+")


class DashboardSession:
    """Current dataset, filter selection and expanded account group."""

    def __init__(self, rows: Optional[List[Transaction]] = None):
        self.rows: List[Transaction] = list(rows or [])
        self.selection = FilterSelection()
        self.expanded_group: Optional[str] = None
        self.source: Optional[str] = None
        self.stats: Dict[str, Any] = {}

    @property
    def loaded(self) -> bool:
        return self.source is not None


def to_group_filter(name: Optional[str]) -> GroupFilter:
    """Map an optional super-group name from the UI to a GroupFilter."""
    if name is None or not str(name).strip():
        return ALL_GROUPS
    return SpecificGroup(name=str(name))


def most_recent_year(years: List[str]) -> Optional[str]:
    """Latest numeric year, falling back to the last label in order."""
    numeric = [y for y in years if YEAR_PATTERN.fullmatch(y)]
    if numeric:
        return max(numeric, key=int)
    return years[-1] if years else None


def pie_slices(aggregates: List[Aggregate], field: str) -> List[Dict[str, Any]]:
    """Positive values of ``field`` per key, for a share-of-total pie."""
    return [
        {"label": agg.key, "value": getattr(agg, field)}
        for agg in aggregates
        if getattr(agg, field) > 0
    ]


def bar_series(aggregates: List[Aggregate]) -> Dict[str, List[Any]]:
    """Horizontal bar chart series in table order."""
    return {
        "labels": [agg.key for agg in aggregates],
        "income": [agg.income_total for agg in aggregates],
        "expense": [agg.expense_total for agg in aggregates],
    }


class DashboardService:
    """Service running the budget dashboard pipeline for a session."""

    def __init__(self):
        """Initialize dashboard service."""
        self.settings = get_settings()

    def load(self, session: DashboardSession, source: Optional[str] = None) -> Dict[str, Any]:
        """
        Load and parse the ledger into ``session``.

        Resets the filters; the year defaults to the most recent one
        present in the data.

        Args:
            session: Session to fill
            source: Ledger path or URL (defaults to DATA_SOURCE)

        Returns:
            Validation statistics
        """
        source = source or self.settings.data_source
        logger.info(f"Loading ledger: {source}")

        records = load_ledger_source(source)
        rows, stats = parse_ledger_records(records)

        years = unique_sorted(r.year for r in rows)
        latest_year = most_recent_year(years)

        session.rows = rows
        session.selection = FilterSelection(year=latest_year)
        session.expanded_group = None
        session.source = source
        session.stats = {**stats, "parsed_rows": len(rows)}

        logger.info(f"Loaded {len(rows)} rows, {len(years)} years (selected: {latest_year})")
        return session.stats

    def select(
        self,
        session: DashboardSession,
        year: Optional[str] = None,
        group_level1: Optional[str] = None,
        groups: Iterable[str] = (),
    ) -> FilterSelection:
        """Replace the filter selection of ``session``."""
        session.selection = FilterSelection(
            year=str(year) if year is not None and str(year).strip() else None,
            group_level1=to_group_filter(group_level1),
            groups=frozenset(str(g) for g in groups),
        )
        logger.debug(f"Selection changed: {session.selection}")
        return session.selection

    def toggle_account_group(self, session: DashboardSession, key: str) -> Optional[str]:
        """
        Expand the drill-down of an account group, or collapse it if it is
        already expanded.

        Returns:
            The expanded group after the toggle, or None
        """
        session.expanded_group = None if session.expanded_group == key else key
        return session.expanded_group

    def _expanded_detail(
        self,
        session: DashboardSession,
        filtered: List[Transaction],
    ) -> List[Aggregate]:
        if session.expanded_group is None:
            return []
        in_group = [r for r in filtered if r.account_group == session.expanded_group]
        return aggregate_by_account(in_group)

    def build_view(self, session: DashboardSession) -> Dict[str, Any]:
        """
        Recompute everything the dashboard shows for the current selection.

        Args:
            session: Dashboard session

        Returns:
            Dictionary with overview, aggregates, detail, charts and options
        """
        filtered = apply_filters(session.rows, session.selection)

        overview = compute_overview(filtered)
        aggregates = aggregate_by_account_group(filtered)

        detail = self._expanded_detail(session, filtered)

        status = f"Rows: {len(filtered)} | Account groups: {len(aggregates)}"
        logger.info(status)

        return {
            "selection": session.selection.model_dump(mode="json"),
            "options": filter_options(session.rows, session.selection),
            "status": status,
            "row_count": len(filtered),
            "overview": {
                **overview.model_dump(),
                "bar_widths": overview_bar_widths(overview),
            },
            "aggregates": [agg.model_dump() for agg in aggregates],
            "expanded_group": session.expanded_group,
            "detail": [agg.model_dump() for agg in detail],
            "charts": {
                "bar": bar_series(aggregates),
                "pie_expense": pie_slices(aggregates, "expense_total"),
                "pie_income": pie_slices(aggregates, "income_total"),
            },
        }

    def export(self, session: DashboardSession, base_path: Optional[str] = None) -> str:
        """
        Export the current view to Excel.

        Returns:
            Path of the written workbook
        """
        filtered = apply_filters(session.rows, session.selection)
        aggregates = aggregate_by_account_group(filtered)
        overview = compute_overview(filtered)

        detail = self._expanded_detail(session, filtered)

        output_path = create_output_filename("budget", base_path or self.settings.temp_storage_path)
        return export_dashboard_to_excel(aggregates, overview, output_path, detail=detail)
