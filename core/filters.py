"""
Row filtering by year, super-group and organizational group.

Stages run in order year -> group_level1 -> group; each one narrows the
output of the previous stage, so the net effect is a conjunction of all
active filters.
"""
import unicodedata
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from core.logger import setup_logger
from core.schema import AllGroups, FilterSelection, GroupFilter, Transaction

logger = setup_logger(__name__)


def locale_sort_key(text: Any) -> Tuple[str, str]:
    """
    Sort key approximating German collation.

    Accents and umlauts sort with their base letter and case is ignored;
    the raw string breaks remaining ties so the order is total.
    """
    raw = str(text)
    decomposed = unicodedata.normalize("NFKD", raw)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, raw


def unique_sorted(values: Iterable[Any]) -> List[str]:
    """Distinct non-blank values as strings, in locale order."""
    distinct = {
        str(v) for v in values
        if v is not None and str(v).strip() != ""
    }
    return sorted(distinct, key=locale_sort_key)


def filter_by_group(
    rows: Sequence[Transaction],
    selected_groups: Iterable[Any],
) -> Sequence[Transaction]:
    """
    Keep rows whose group is one of ``selected_groups``.

    An empty selection means no filter and returns ``rows`` unchanged.
    """
    selected = {str(g) for g in selected_groups}
    if not selected:
        return rows
    return [r for r in rows if str(r.group) in selected]


def filter_by_year(rows: Sequence[Transaction], year: Optional[Any]) -> Sequence[Transaction]:
    """Keep rows of one year; ``None`` disables the stage."""
    if year is None:
        return rows
    wanted = str(year)
    return [r for r in rows if r.year is not None and str(r.year) == wanted]


def filter_by_group_level1(
    rows: Sequence[Transaction],
    group_filter: GroupFilter,
) -> Sequence[Transaction]:
    """Keep rows of one super-group unless the filter is AllGroups."""
    if isinstance(group_filter, AllGroups):
        return rows
    return [r for r in rows if r.group_level1 == group_filter.name]


def apply_filters(rows: Sequence[Transaction], selection: FilterSelection) -> Sequence[Transaction]:
    """
    Apply every active filter of ``selection`` to ``rows``.

    Args:
        rows: Full ledger
        selection: Active filter selection

    Returns:
        Rows matching all active filters
    """
    filtered = filter_by_year(rows, selection.year)
    filtered = filter_by_group_level1(filtered, selection.group_level1)
    filtered = filter_by_group(filtered, selection.groups)

    logger.debug(f"Filtered rows: {len(rows)} -> {len(filtered)} ({selection})")
    return filtered


def filter_options(rows: Sequence[Transaction], selection: FilterSelection) -> Dict[str, List[str]]:
    """
    Option lists for the filter controls.

    Each list only offers values reachable under the stages above it:
    super-groups within the selected year, groups within year and
    super-group.
    """
    in_year = filter_by_year(rows, selection.year)
    in_level1 = filter_by_group_level1(in_year, selection.group_level1)

    return {
        "years": unique_sorted(r.year for r in rows),
        "group_level1": unique_sorted(r.group_level1 for r in in_year),
        "groups": unique_sorted(r.group for r in in_level1),
    }
