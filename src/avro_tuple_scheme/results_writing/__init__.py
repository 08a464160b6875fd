"""Results writing exports."""

from .row_workbook_writer import ROWS_SHEET_NAME, SCHEMA_SHEET_NAME, write_rows_workbook

__all__ = ["ROWS_SHEET_NAME", "SCHEMA_SHEET_NAME", "write_rows_workbook"]
