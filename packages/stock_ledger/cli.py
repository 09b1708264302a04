"""CLI for the ``stock_ledger`` package.

Typer-based console interface over :mod:`stock_ledger.api`. Environment
variables (``STOCK_LEDGER_INITIAL_VALUE``, ``STOCK_LEDGER_COMPANY``,
``STOCK_LEDGER_LOG_LEVEL``) are loaded from a local ``.env`` using
``python-dotenv`` before any command runs; explicit options win.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .errors import LedgerInputError
from .logging_setup import configure_logging
from .models import ExtractedLedger

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Reconcile a merchandise-entry export and a receipt-ledger export into "
        "a daily running stock balance."
    ),
)

EntriesOption = Annotated[
    Path | None,
    typer.Option("--entries", help="Merchandise-entry export (.xlsx, .xlsm or .csv).", dir_okay=False),
]
SalesOption = Annotated[
    Path | None,
    typer.Option("--sales", help="Receipt-ledger export (.xlsx, .xlsm or .csv).", dir_okay=False),
]
InitialValueOption = Annotated[
    str,
    typer.Option(
        "--initial-value",
        envvar="STOCK_LEDGER_INITIAL_VALUE",
        help="Opening stock balance; ',' is accepted as decimal separator.",
    ),
]
CompanyOption = Annotated[
    str,
    typer.Option("--company", envvar="STOCK_LEDGER_COMPANY", help="Company name shown on reports."),
]


def _parse_initial_value(raw: str) -> Decimal:
    from .parsing import parse_amount

    value = parse_amount(raw)
    if value is None:
        raise typer.BadParameter(f"not a number: {raw!r}", param_hint="--initial-value")
    return value


def _fmt(value: Decimal) -> str:
    return f"{value:,.2f}"


def _load(entries: Path | None, sales: Path | None, initial_value: str) -> ExtractedLedger:
    """Run the extraction, mapping input failures to ``Error: ...`` and exit 1."""

    from .api import extract_ledger

    if entries is None and sales is None:
        typer.echo("Error: provide at least one of --entries or --sales.", err=True)
        raise typer.Exit(1)

    opening = _parse_initial_value(initial_value)
    try:
        return extract_ledger(entries, sales, opening)
    except FileNotFoundError as e:
        typer.echo(f"Error: File not found: {e.filename}", err=True)
    except PermissionError as e:
        typer.echo(f"Error: Permission denied: {e.filename}", err=True)
    except LedgerInputError as e:
        typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(1)


def _summary_table(ledger: ExtractedLedger, company: str) -> Table:
    title = "Raport de gestiune" + (f" - {company}" if company else "")
    table = Table(title=title)
    table.add_column("Data")
    table.add_column("Sold precedent", justify="right")
    table.add_column("Intrari", justify="right")
    table.add_column("Vanzari", justify="right")
    table.add_column("Sold final", justify="right")
    for day in ledger.processed_entries:
        table.add_row(
            day.date.isoformat(),
            _fmt(day.initial_value),
            _fmt(day.total_value),
            _fmt(day.total_sales),
            _fmt(day.final_value),
        )
    return table


@app.command("reconcile")
def reconcile_cmd(
    entries: EntriesOption = None,
    sales: SalesOption = None,
    initial_value: InitialValueOption = "0",
    company: CompanyOption = "",
    output: Annotated[
        Path | None,
        typer.Option("--output", help="Write the full ledger as JSON to this file.", dir_okay=False),
    ] = None,
) -> None:
    """Build the daily ledger and print a per-day balance summary."""

    ledger = _load(entries, sales, initial_value)

    console = Console()
    console.print(_summary_table(ledger, company))
    if ledger.diagnostics:
        console.print(f"{len(ledger.diagnostics)} rows skipped (see log for details)")

    if output is not None:
        output.write_text(ledger.model_dump_json(indent=2), encoding="utf-8")
        console.print(f"Ledger written to {output}")


@app.command("daily-reports")
def daily_reports_cmd(
    out_dir: Annotated[
        Path,
        typer.Option("--out-dir", help="Directory receiving one JSON report per day.", file_okay=False),
    ],
    entries: EntriesOption = None,
    sales: SalesOption = None,
    initial_value: InitialValueOption = "0",
    company: CompanyOption = "",
) -> None:
    """Write one ``Raport_YYYY-MM-DD.json`` daily report per ledger day."""

    from .reporting import build_daily_reports, report_filename

    ledger = _load(entries, sales, initial_value)
    out_dir.mkdir(parents=True, exist_ok=True)
    reports = build_daily_reports(ledger, company)
    for report in reports:
        target = out_dir / f"{report_filename(report.date)}.json"
        target.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    typer.echo(f"Wrote {len(reports)} daily reports to {out_dir}")


@app.callback()
def _root() -> None:
    """Load ``.env`` from the working directory and configure logging once."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


if __name__ == "__main__":  # pragma: no cover
    app()
