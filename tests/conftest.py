"""Pytest configuration for test isolation.

The package lives under ``packages/`` (workspace layout), so it is put on
``sys.path`` here to make the suite runnable without an editable install.

The CLI configures the package logger once per process and reads defaults
from the environment (optionally via a ``.env`` in the working directory).
An autouse fixture undoes both after every test so one test's logging setup
or environment never leaks into the next.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
if str(_PKG_DIR) not in sys.path:
    sys.path.insert(0, str(_PKG_DIR))

from stock_ledger.logging_setup import reset_logging  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    for var in ("STOCK_LEDGER_INITIAL_VALUE", "STOCK_LEDGER_COMPANY", "STOCK_LEDGER_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    # Keep a stray .env in the repo root out of CLI runs.
    monkeypatch.chdir(tmp_path)
    yield
    reset_logging()
