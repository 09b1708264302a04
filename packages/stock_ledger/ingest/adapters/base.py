"""Shared result type and skip bookkeeping for the sheet adapters."""

from __future__ import annotations

from dataclasses import dataclass, field

from ...logging_setup import get_logger
from ...models import RowDiagnostic, Transaction

logger = get_logger("stock_ledger.ingest.adapters")


@dataclass(slots=True)
class SheetParseResult:
    """Transactions parsed from one sheet plus the rows that were skipped."""

    sheet: str
    transactions: list[Transaction] = field(default_factory=list)
    diagnostics: list[RowDiagnostic] = field(default_factory=list)

    def skip(self, row: int, reason: str, **values: object) -> None:
        """Record a recoverable row problem and log it at WARNING."""

        rendered = {k: "" if v is None else str(v) for k, v in values.items()}
        details = ", ".join(f"{k}={v!r}" for k, v in rendered.items())
        logger.warning(
            "Skipping row: %s (%s)", reason, details, extra={"sheet": self.sheet, "row": row}
        )
        self.diagnostics.append(RowDiagnostic(sheet=self.sheet, row=row, reason=reason, values=rendered))


__all__ = ["SheetParseResult"]
