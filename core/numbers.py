"""
Amount parsing and formatting for German-locale ledger exports.
Amounts arrive as "1.234,56" (thousands dot, decimal comma).
"""
import math
from typing import Any

import pandas as pd

from core.logger import setup_logger

logger = setup_logger(__name__)


def parse_amount(raw: Any) -> float:
    """
    Convert a locale-formatted amount into a float.

    "1.234,56" -> 1234.56, "-400,00" -> -400.0. Missing, empty, unparsable
    or non-finite values all become 0.0; nothing is raised.

    Args:
        raw: Raw amount value (string, number, None)

    Returns:
        Parsed amount
    """
    if raw is None or isinstance(raw, bool):
        return 0.0

    # JSON numbers are already numeric; the dot-stripping below would turn 400.5 into 4005
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else 0.0

    if pd.api.types.is_scalar(raw) and pd.isna(raw):
        return 0.0

    text = str(raw).strip()
    if not text:
        return 0.0

    # Only the first comma is the decimal separator
    normalized = text.replace(".", "").replace(",", ".", 1)

    # float() accepts digit-group underscores, which the export never uses
    if "_" in normalized:
        logger.debug(f"Unparsable amount '{raw}', using 0")
        return 0.0

    try:
        value = float(normalized)
    except ValueError:
        logger.debug(f"Unparsable amount '{raw}', using 0")
        return 0.0

    return value if math.isfinite(value) else 0.0


def format_eur(value: float) -> str:
    """Render an amount as de-DE currency, e.g. 1234.5 -> "1.234,50 €"."""
    if value is None or not math.isfinite(value):
        value = 0.0
    grouped = f"{abs(value):,.2f}"
    german = grouped.replace(",", "\x00").replace(".", ",").replace("\x00", ".")
    sign = "-" if round(value, 2) < 0 else ""
    return f"{sign}{german} €"
