"""Avro runtime record to flat tuple conversion."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from avro_tuple_scheme.schema_management.field_spec import FieldSpec, LogicalField
from avro_tuple_scheme.schema_management.schema_errors import SchemaMismatchError
from avro_tuple_scheme.schema_management.type_catalog import FieldType

from .tuple_models import FlatTuple

_MISSING = object()


def decode_record(record: Mapping[str, Any], fields: FieldSpec) -> FlatTuple:
    """Unpack one Avro datum into tuple values, one per declared field.

    Top-level values are looked up by field name. Arrays become nested tuples;
    maps become nested ``(key, value, key, value, ...)`` tuples in the order
    the runtime mapping yields its entries.
    """
    if not isinstance(record, Mapping):
        raise SchemaMismatchError(
            f"Avro record must be a mapping, got {type(record).__name__}."
        )
    result: list[Any] = []
    for field in fields:
        value = record.get(field.name, _MISSING)
        if value is _MISSING:
            raise SchemaMismatchError(f"Avro record is missing field {field.name}.")
        result.append(_decode_field(value, field))
    return tuple(result)


def _decode_field(value: Any, field: LogicalField) -> Any:
    if field.field_type is FieldType.ARRAY:
        return _decode_array(value, field)
    if field.field_type is FieldType.MAP:
        return _decode_map(value, field)
    return decode_primitive(value)


def _decode_array(value: Any, field: LogicalField) -> FlatTuple:
    # Arrays are carried as nested tuples.
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        raise SchemaMismatchError(
            f"Field {field.name} expects an array, got {type(value).__name__}."
        )
    return tuple(decode_primitive(item) for item in value)


def _decode_map(value: Any, field: LogicalField) -> FlatTuple:
    if not isinstance(value, Mapping):
        raise SchemaMismatchError(
            f"Field {field.name} expects a map, got {type(value).__name__}."
        )
    flattened: list[Any] = []
    for key, item in value.items():
        flattened.append(str(key))
        flattened.append(decode_primitive(item))
    return tuple(flattened)


def decode_primitive(value: Any) -> Any:
    """Convert a scalar Avro value to its tuple representation."""
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value
