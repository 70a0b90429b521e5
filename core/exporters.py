"""
Excel export of the aggregated dashboard.
Writes the account group table, the optional drill-down and the overview.
"""
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pandas as pd

from core.config import get_settings
from core.exceptions import ExportError
from core.logger import setup_logger
from core.schema import Aggregate, Overview

logger = setup_logger(__name__)

CURRENCY_FORMAT = '#,##0.00 "€"'

RESULT_LABELS = {
    "surplus": "Überschuss",
    "deficit": "Fehlbetrag",
    "balanced": "Ausgeglichen",
}


def aggregates_to_dataframe(aggregates: List[Aggregate], key_title: str) -> pd.DataFrame:
    """Table layout used by the dashboard: key, Aufwendungen, Erträge, Saldo."""
    return pd.DataFrame(
        [
            {
                key_title: agg.key,
                "Aufwendungen": agg.expense_total,
                "Erträge": agg.income_total,
                "Saldo": agg.balance,
            }
            for agg in aggregates
        ],
        columns=[key_title, "Aufwendungen", "Erträge", "Saldo"],
    )


def overview_to_dataframe(overview: Overview) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"Position": "Erträge gesamt (ohne 91)", "Betrag": overview.income_total},
            {"Position": "Aufwendungen gesamt (ohne 92)", "Betrag": overview.expense_total},
            {"Position": f"Ergebnis: {RESULT_LABELS[overview.label]}", "Betrag": overview.display_result},
        ],
        columns=["Position", "Betrag"],
    )


def _write_sheet(writer: pd.ExcelWriter, df: pd.DataFrame, sheet_name: str) -> None:
    df.to_excel(writer, sheet_name=sheet_name, index=False)

    workbook = writer.book
    worksheet = writer.sheets[sheet_name]
    money_format = workbook.add_format({"num_format": CURRENCY_FORMAT})

    # First column holds labels, the rest are amounts
    label_width = max([len(str(v)) for v in df.iloc[:, 0]] + [len(str(df.columns[0]))])
    worksheet.set_column(0, 0, min(label_width + 2, 60))
    worksheet.set_column(1, len(df.columns) - 1, 18, money_format)


def export_dashboard_to_excel(
    aggregates: List[Aggregate],
    overview: Overview,
    output_path: str,
    detail: Optional[List[Aggregate]] = None,
) -> str:
    """
    Export the dashboard figures to an Excel workbook.

    Args:
        aggregates: Per account group aggregates
        overview: Ledger-wide overview
        output_path: Output file path
        detail: Per account aggregates of the expanded group, if any

    Returns:
        Path to created file

    Raises:
        ExportError: If writing the workbook fails
    """
    logger.info(f"Exporting {len(aggregates)} account groups to {output_path}")

    try:
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
            _write_sheet(writer, aggregates_to_dataframe(aggregates, "Kontogruppe"), "Kontogruppen")
            if detail:
                _write_sheet(writer, aggregates_to_dataframe(detail, "Sachkonto"), "Sachkonten")
            _write_sheet(writer, overview_to_dataframe(overview), "Übersicht")

        logger.info(f"Successfully exported to {output_path}")
        return output_path

    except Exception as e:
        logger.error(f"Failed to export Excel: {e}")
        raise ExportError(
            "Failed to export to Excel",
            details={"output_path": output_path, "error": str(e)}
        )


def create_output_filename(prefix: str = "budget", base_path: Optional[str] = None) -> str:
    """
    Create timestamped output filename.

    Args:
        prefix: File name prefix
        base_path: Base directory path (defaults to configured temp storage)

    Returns:
        Full output file path
    """
    if base_path is None:
        base_path = get_settings().temp_storage_path

    Path(base_path).mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
    filename = f"{prefix}_dashboard_{timestamp}.xlsx"

    return str(Path(base_path) / filename)
