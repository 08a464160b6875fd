"""Derive a nested Avro schema from a flat field declaration."""

from __future__ import annotations

import logging

from .field_spec import FieldSpec, LogicalField
from .schema_errors import ConfigurationError
from .schema_models import ArrayNode, MapNode, PrimitiveNode, RecordField, RecordNode, SchemaNode
from .type_catalog import FieldType, SchemaKind, to_schema_kind

_LOGGER = logging.getLogger(__name__)

RECORD_NAME_PREFIX = "Schema_"
_NON_PRIMITIVE_KINDS = frozenset({SchemaKind.ARRAY, SchemaKind.MAP, SchemaKind.RECORD})


def build_schema(fields: FieldSpec, depth: int = 0) -> RecordNode:
    """Create a named record whose fields follow the declaration order.

    Args:
      fields: Validated flat field declaration.
      depth: Nesting depth embedded in the synthetic record name.

    Returns:
      The derived record node.

    Raises:
      UnsupportedTypeError: If a declared type has no catalog entry.
    """
    record_fields = tuple(
        RecordField(name=field.name, node=_build_field_node(field)) for field in fields
    )
    record = RecordNode(name=f"{RECORD_NAME_PREFIX}{depth}", fields=record_fields)
    _LOGGER.debug("Derived schema %s with fields %s", record.name, record.field_names)
    return record


def _build_field_node(field: LogicalField) -> SchemaNode:
    if field.element_type is None:
        return _build_primitive_node(field.field_type)

    element = _build_primitive_node(field.element_type)
    if field.field_type is FieldType.ARRAY:
        return ArrayNode(items=element)
    return MapNode(values=element)


def _build_primitive_node(field_type: FieldType) -> PrimitiveNode:
    kind = to_schema_kind(field_type)
    if kind in _NON_PRIMITIVE_KINDS:
        raise ConfigurationError(f"Only primitive types are allowed here, got {field_type.value}.")
    return PrimitiveNode(kind=kind)
