"""Schema management exports."""

from .field_spec import (
    FieldSpec,
    LogicalField,
    count_logical_fields,
    walk_logical_fields,
    walk_type_slots,
)
from .schema_builder import build_schema
from .schema_errors import (
    ConfigurationError,
    ContainerIOError,
    SchemaMismatchError,
    SchemeError,
    UnsupportedTypeError,
)
from .schema_models import ArrayNode, MapNode, PrimitiveNode, RecordField, RecordNode, SchemaNode
from .type_catalog import TYPE_CATALOG, FieldType, SchemaKind, to_schema_kind

__all__ = [
    "ArrayNode",
    "ConfigurationError",
    "ContainerIOError",
    "FieldSpec",
    "FieldType",
    "LogicalField",
    "MapNode",
    "PrimitiveNode",
    "RecordField",
    "RecordNode",
    "SchemaKind",
    "SchemaMismatchError",
    "SchemaNode",
    "SchemeError",
    "TYPE_CATALOG",
    "UnsupportedTypeError",
    "build_schema",
    "count_logical_fields",
    "to_schema_kind",
    "walk_logical_fields",
    "walk_type_slots",
]
