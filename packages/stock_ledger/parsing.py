"""Cell-level normalization helpers shared by the sheet adapters.

All helpers take a raw grid cell (``str``, number, date, or ``None``) and
return a normalized value, or ``None`` when the cell cannot be interpreted.
They never raise for bad input; callers decide whether a ``None`` skips the
row (dates, sale amounts) or falls back to a default (purchase values).
"""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from .ingest.workbook import CellValue

# Largest accepted decimal exponent. Day sums run in the default decimal
# context, where an exponent like 1e1000000 overflows.
MAX_AMOUNT_DIGITS = 15


def cell_text(value: CellValue) -> str:
    """Render a cell as text without trimming.

    Integral floats lose their ``.0`` so numeric document numbers read the
    same as they were typed (``123.0`` -> ``"123"``).
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat()
    return str(value)


def is_blank(value: CellValue) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_dotted_date(value: CellValue) -> date | None:
    """Parse a ``DD.MM.YYYY`` cell into a calendar date.

    Cells already typed as dates by the decoder are taken as-is. Strings must
    split into exactly three digit runs on ``.``; impossible calendar dates
    (``31.02.2024``) yield ``None``.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    parts = value.strip().split(".")
    if len(parts) != 3:
        return None
    day, month, year = (p.strip() for p in parts)
    if not (day.isdigit() and month.isdigit() and year.isdigit()):
        return None
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def _in_range(d: Decimal) -> bool:
    return d.is_finite() and d.adjusted() <= MAX_AMOUNT_DIGITS


def parse_amount(value: CellValue) -> Decimal | None:
    """Parse a monetary cell, accepting ``,`` as the decimal separator.

    Native numbers are used directly. Strings are trimmed and every ``,`` is
    replaced by ``.`` before conversion; digit-group underscores are not a
    spreadsheet notation and make the cell invalid. Non-finite results and
    magnitudes of ``10**16`` or more are rejected.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        d = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        d = Decimal(str(value))
    elif isinstance(value, str):
        s = value.strip().replace(",", ".")
        if not s or "_" in s:
            return None
        try:
            d = Decimal(s)
        except InvalidOperation:
            return None
    else:
        return None
    return d if _in_range(d) else None


__all__ = ["cell_text", "is_blank", "parse_amount", "parse_dotted_date"]
