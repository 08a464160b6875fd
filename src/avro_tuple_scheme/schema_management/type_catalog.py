"""Declared field types and their Avro schema kinds."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from .schema_errors import UnsupportedTypeError


class FieldType(str, Enum):
    """Type slot values accepted in a flat field declaration."""

    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    BYTES = "bytes"
    ARRAY = "array"
    MAP = "map"

    @property
    def is_container(self) -> bool:
        """Whether this slot consumes the following slot as its element type."""
        return self in CONTAINER_TYPES

    @classmethod
    def from_declaration(cls, value: Any) -> FieldType:
        """Resolve a declared type (member, value or alias) to a FieldType."""
        if isinstance(value, FieldType):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            resolved = _TYPE_ALIASES.get(normalized)
            if resolved is not None:
                return resolved
            try:
                return cls(normalized)
            except ValueError:
                pass
        raise UnsupportedTypeError(value)


class SchemaKind(str, Enum):
    """Avro schema type names produced by the catalog."""

    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    BYTES = "bytes"
    ARRAY = "array"
    MAP = "map"
    RECORD = "record"


CONTAINER_TYPES: frozenset[FieldType] = frozenset({FieldType.ARRAY, FieldType.MAP})

ELEMENT_TYPES: frozenset[FieldType] = frozenset(
    {
        FieldType.BOOLEAN,
        FieldType.INT,
        FieldType.LONG,
        FieldType.FLOAT,
        FieldType.DOUBLE,
        FieldType.STRING,
        FieldType.BYTES,
    }
)

_TYPE_ALIASES: Mapping[str, FieldType] = MappingProxyType(
    {
        "bool": FieldType.BOOLEAN,
        "integer32": FieldType.INT,
        "integer64": FieldType.LONG,
        "float32": FieldType.FLOAT,
        "float64": FieldType.DOUBLE,
        "text": FieldType.STRING,
        "binary": FieldType.BYTES,
        "list": FieldType.ARRAY,
    }
)

TYPE_CATALOG: Mapping[FieldType, SchemaKind] = MappingProxyType(
    {
        FieldType.INT: SchemaKind.INT,
        FieldType.LONG: SchemaKind.LONG,
        FieldType.BOOLEAN: SchemaKind.BOOLEAN,
        FieldType.DOUBLE: SchemaKind.DOUBLE,
        FieldType.FLOAT: SchemaKind.FLOAT,
        FieldType.STRING: SchemaKind.STRING,
        FieldType.BYTES: SchemaKind.BYTES,
        FieldType.ARRAY: SchemaKind.ARRAY,
        FieldType.MAP: SchemaKind.MAP,
    }
)


def to_schema_kind(field_type: Any) -> SchemaKind:
    """Return the Avro schema kind for a declared field type."""
    resolved = FieldType.from_declaration(field_type)
    kind = TYPE_CATALOG.get(resolved)
    if kind is None:
        raise UnsupportedTypeError(field_type)
    return kind
