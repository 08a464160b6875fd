"""Flat tuple to Avro runtime record conversion."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from avro_tuple_scheme.schema_management.field_spec import FieldSpec, LogicalField
from avro_tuple_scheme.schema_management.schema_errors import SchemaMismatchError
from avro_tuple_scheme.schema_management.type_catalog import FieldType

_BINARY_TYPES = (bytes, bytearray, memoryview)


def encode_record(row: Sequence[Any], fields: FieldSpec) -> dict[str, Any]:
    """Build a fresh Avro datum from positional tuple values.

    Raises:
      SchemaMismatchError: If the row arity differs from the declared field
        count or a value does not fit its declared type.
    """
    if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
        raise SchemaMismatchError(f"Tuple must be a sequence, got {type(row).__name__}.")
    if len(row) != len(fields):
        raise SchemaMismatchError(
            f"Tuple has {len(row)} values but {len(fields)} fields are declared."
        )
    datum: dict[str, Any] = {}
    for field in fields:
        datum[field.name] = _encode_field(row[field.position], field)
    return datum


def _encode_field(value: Any, field: LogicalField) -> Any:
    if field.element_type is None:
        return encode_primitive(value, field.field_type, field.name)
    entries = _require_nested_sequence(value, field)
    if field.field_type is FieldType.ARRAY:
        return [encode_primitive(item, field.element_type, field.name) for item in entries]
    return _encode_map(entries, field.element_type, field)


def _encode_map(
    entries: Sequence[Any], value_type: FieldType, field: LogicalField
) -> dict[str, Any]:
    if len(entries) % 2:
        raise SchemaMismatchError(
            f"Field {field.name} map tuple must hold key/value pairs, "
            f"got {len(entries)} entries."
        )
    converted: dict[str, Any] = {}
    # the tuple entries are key followed by value
    for index in range(0, len(entries), 2):
        key = entries[index]
        if isinstance(key, _BINARY_TYPES):
            key = _decode_text(key, field.name)
        if not isinstance(key, str):
            raise SchemaMismatchError(
                f"Field {field.name} map keys must be text, got {type(key).__name__}."
            )
        converted[key] = encode_primitive(entries[index + 1], value_type, field.name)
    return converted


def _require_nested_sequence(value: Any, field: LogicalField) -> Sequence[Any]:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        raise SchemaMismatchError(
            f"Field {field.name} expects a nested tuple for its {field.field_type.value}, "
            f"got {type(value).__name__}."
        )
    return value


def encode_primitive(value: Any, field_type: FieldType, field_name: str = "") -> Any:
    """Convert a tuple value to the Avro value expected for ``field_type``."""
    if value is None:
        return None
    if field_type is FieldType.STRING:
        if isinstance(value, _BINARY_TYPES):
            return _decode_text(value, field_name)
        if not isinstance(value, str):
            raise SchemaMismatchError(
                f"Field {field_name} expects text, got {type(value).__name__}."
            )
        return value
    if field_type is FieldType.BYTES:
        if not isinstance(value, _BINARY_TYPES):
            raise SchemaMismatchError(
                f"Field {field_name} expects binary data, got {type(value).__name__}."
            )
        return bytes(value)
    return value


def _decode_text(value: bytes | bytearray | memoryview, field_name: str) -> str:
    try:
        return bytes(value).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SchemaMismatchError(f"Field {field_name} holds invalid UTF-8 text.") from exc
