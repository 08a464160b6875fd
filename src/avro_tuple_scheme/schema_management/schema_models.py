"""Derived Avro schema tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .type_catalog import SchemaKind

RECORD_DOC = "auto generated"


@dataclass(frozen=True)
class PrimitiveNode:
    """Scalar Avro type."""

    kind: SchemaKind

    def to_avro(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class ArrayNode:
    """Avro array of a scalar element type."""

    items: SchemaNode

    def to_avro(self) -> dict[str, Any]:
        return {"type": SchemaKind.ARRAY.value, "items": self.items.to_avro()}


@dataclass(frozen=True)
class MapNode:
    """Avro map with text keys and a scalar value type."""

    values: SchemaNode

    def to_avro(self) -> dict[str, Any]:
        return {"type": SchemaKind.MAP.value, "values": self.values.to_avro()}


@dataclass(frozen=True)
class RecordField:
    """Named field of a record node."""

    name: str
    node: SchemaNode

    def to_avro(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.node.to_avro(), "doc": ""}


@dataclass(frozen=True)
class RecordNode:
    """Named Avro record; nested anonymous records are not allowed by Avro."""

    name: str
    fields: tuple[RecordField, ...]
    doc: str = RECORD_DOC

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def to_avro(self) -> dict[str, Any]:
        return {
            "type": SchemaKind.RECORD.value,
            "name": self.name,
            "doc": self.doc,
            "fields": [field.to_avro() for field in self.fields],
        }


SchemaNode = PrimitiveNode | ArrayNode | MapNode | RecordNode
