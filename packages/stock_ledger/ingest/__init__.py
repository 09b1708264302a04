"""Spreadsheet ingestion: grid loading, header/column resolution, adapters."""
