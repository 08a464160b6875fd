"""Excel export of decoded tuples."""

from __future__ import annotations

import base64
import hashlib
import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from avro_tuple_scheme.container_io.json_rows import row_to_json
from avro_tuple_scheme.scheme.tuple_scheme import TupleScheme

ROWS_SHEET_NAME = "Rows"
SCHEMA_SHEET_NAME = "Schema"


def write_rows_workbook(
    rows: Iterable[Sequence[Any]],
    scheme: TupleScheme,
    output_path: Path | str,
) -> int:
    """Write tuples to a workbook with one column per declared field.

    Nested arrays and maps are written as JSON text, binary values as base64.

    Returns:
      Number of data rows written.
    """
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = ROWS_SHEET_NAME

    field_names = scheme.field_names
    for column_index, name in enumerate(field_names, start=1):
        header = sheet.cell(row=1, column=column_index, value=name)
        header.style = "Headline 4"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )

    row_count = 0
    for row_index, row in enumerate(rows, start=2):
        document = row_to_json(row, scheme.fields)
        for column_index, name in enumerate(field_names, start=1):
            sheet.cell(row=row_index, column=column_index, value=_cell_value(document[name]))
        row_count += 1
    sheet.freeze_panes = "A2"

    _write_schema_sheet(workbook, scheme)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    return row_count


def _cell_value(value: Any) -> Any:
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


def _write_schema_sheet(workbook: Workbook, scheme: TupleScheme) -> None:
    sheet = workbook.create_sheet(SCHEMA_SHEET_NAME)
    schema_text = json.dumps(scheme.avro_schema, indent=2)
    schema_hash = hashlib.sha256(schema_text.encode("utf-8")).hexdigest()
    entries = [
        ("fields", ", ".join(scheme.field_names)),
        ("types", ", ".join(field_type.value for field_type in scheme.fields.types)),
        ("schema_hash", schema_hash),
        ("schema_text", schema_text),
    ]
    for row_index, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row_index, column=1, value=key)
        sheet.cell(row=row_index, column=2, value=value)
