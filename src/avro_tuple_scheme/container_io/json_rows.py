"""JSON-lines rendering of tuples."""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import IO, Any

from avro_tuple_scheme.record_conversion.tuple_models import FlatTuple
from avro_tuple_scheme.schema_management.field_spec import FieldSpec, LogicalField
from avro_tuple_scheme.schema_management.schema_errors import SchemaMismatchError
from avro_tuple_scheme.schema_management.type_catalog import FieldType


def row_to_json(row: Sequence[Any], fields: FieldSpec) -> dict[str, Any]:
    """Render a tuple as a JSON object keyed by field name.

    Arrays become JSON arrays, flattened maps become JSON objects and binary
    values become base64 text.
    """
    if len(row) != len(fields):
        raise SchemaMismatchError(
            f"Tuple has {len(row)} values but {len(fields)} fields are declared."
        )
    document: dict[str, Any] = {}
    for field in fields:
        value = row[field.position]
        if field.field_type is FieldType.ARRAY:
            items = _nested_values(value, field)
            document[field.name] = [_scalar_to_json(item, field) for item in items]
        elif field.field_type is FieldType.MAP:
            entries = _nested_values(value, field)
            if len(entries) % 2:
                raise SchemaMismatchError(
                    f"Field {field.name} map tuple must hold key/value pairs, "
                    f"got {len(entries)} entries."
                )
            document[field.name] = {
                str(entries[index]): _scalar_to_json(entries[index + 1], field)
                for index in range(0, len(entries), 2)
            }
        else:
            document[field.name] = _scalar_to_json(value, field)
    return document


def row_from_json(document: Mapping[str, Any], fields: FieldSpec) -> FlatTuple:
    """Parse a JSON object produced by :func:`row_to_json` back into a tuple."""
    if not isinstance(document, Mapping):
        raise SchemaMismatchError("JSON row must be an object.")
    values: list[Any] = []
    for field in fields:
        if field.name not in document:
            raise SchemaMismatchError(f"JSON row is missing field {field.name}.")
        raw = document[field.name]
        if field.field_type is FieldType.ARRAY:
            if not isinstance(raw, list):
                raise SchemaMismatchError(f"Field {field.name} must be a JSON array.")
            values.append(tuple(_scalar_from_json(item, field) for item in raw))
        elif field.field_type is FieldType.MAP:
            if not isinstance(raw, Mapping):
                raise SchemaMismatchError(f"Field {field.name} must be a JSON object.")
            flattened: list[Any] = []
            for key, item in raw.items():
                flattened.extend((str(key), _scalar_from_json(item, field)))
            values.append(tuple(flattened))
        else:
            values.append(_scalar_from_json(raw, field))
    return tuple(values)


def dump_json_lines(rows: Iterable[Sequence[Any]], fields: FieldSpec, stream: IO[str]) -> int:
    """Write one JSON object per row and return the number of rows written."""
    count = 0
    for row in rows:
        stream.write(json.dumps(row_to_json(row, fields), ensure_ascii=False))
        stream.write("\n")
        count += 1
    return count


def load_json_lines(stream: IO[str], fields: FieldSpec) -> Iterator[FlatTuple]:
    """Yield tuples parsed from a JSON-lines stream, skipping blank lines."""
    for line_number, line in enumerate(stream, start=1):
        if not line.strip():
            continue
        try:
            document = json.loads(line)
        except json.JSONDecodeError as exc:
            raise SchemaMismatchError(f"Invalid JSON on line {line_number}: {exc}") from exc
        yield row_from_json(document, fields)


def _binary_slot(field: LogicalField) -> bool:
    slot_type = field.element_type or field.field_type
    return slot_type is FieldType.BYTES


def _scalar_to_json(value: Any, field: LogicalField) -> Any:
    if _binary_slot(field) and isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


def _scalar_from_json(value: Any, field: LogicalField) -> Any:
    if _binary_slot(field) and isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise SchemaMismatchError(
                f"Field {field.name} must hold base64 encoded binary data."
            ) from exc
    return value


def _nested_values(value: Any, field: LogicalField) -> Sequence[Any]:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        raise SchemaMismatchError(
            f"Field {field.name} expects a nested tuple for its {field.field_type.value}, "
            f"got {type(value).__name__}."
        )
    return value
