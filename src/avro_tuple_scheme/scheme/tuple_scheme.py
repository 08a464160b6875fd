"""Scheme that reads and writes tuples as Avro records."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import fastavro
from fastavro.schema import SchemaParseException

from avro_tuple_scheme.record_conversion.record_decoder import decode_record
from avro_tuple_scheme.record_conversion.record_encoder import encode_record
from avro_tuple_scheme.record_conversion.tuple_models import FlatTuple, TupleEntry
from avro_tuple_scheme.schema_management.field_spec import FieldSpec
from avro_tuple_scheme.schema_management.schema_builder import build_schema
from avro_tuple_scheme.schema_management.schema_errors import ConfigurationError
from avro_tuple_scheme.schema_management.schema_models import RecordNode

_LOGGER = logging.getLogger(__name__)


class OutputCollectorProtocol(Protocol):
    """Key/value sink that receives encoded Avro records."""

    def collect(self, key: Mapping[str, Any], value: None) -> None: ...


class TupleScheme:
    """Converts between pipeline tuples and Avro records for one field declaration.

    The field declaration is validated at construction time. The derived Avro
    schema is built on first use and cached for the lifetime of the instance;
    instances are not meant to be shared between threads.
    """

    def __init__(self, field_names: Sequence[str], field_types: Sequence[Any]) -> None:
        self._fields = FieldSpec(field_names, field_types)
        self._schema: RecordNode | None = None
        self._parsed_schema: Any = None

    @classmethod
    def from_field_spec(cls, fields: FieldSpec) -> TupleScheme:
        return cls(fields.names, fields.types)

    @property
    def fields(self) -> FieldSpec:
        return self._fields

    @property
    def field_names(self) -> tuple[str, ...]:
        return self._fields.names

    @property
    def schema(self) -> RecordNode:
        """Derived record schema, built once per instance."""
        if self._schema is None:
            self._schema = build_schema(self._fields)
        return self._schema

    @property
    def avro_schema(self) -> dict[str, Any]:
        """Derived schema in its JSON-compatible Avro form."""
        return self.schema.to_avro()

    @property
    def parsed_schema(self) -> Any:
        """Derived schema as parsed and validated by fastavro."""
        if self._parsed_schema is None:
            try:
                self._parsed_schema = fastavro.parse_schema(self.avro_schema)
            except SchemaParseException as exc:
                raise ConfigurationError(f"Derived Avro schema is invalid: {exc}") from exc
        return self._parsed_schema

    def source_init(self) -> Any:
        """Return the schema used to read Avro records."""
        schema = self.parsed_schema
        _LOGGER.info(
            "Initializing Avro scheme for source - scheme fields: %s", list(self.field_names)
        )
        return schema

    def sink_init(self) -> Any:
        """Return the schema used to write Avro records."""
        schema = self.parsed_schema
        _LOGGER.info(
            "Initializing Avro scheme for sink - scheme fields: %s", list(self.field_names)
        )
        return schema

    def source(self, record: Mapping[str, Any]) -> FlatTuple:
        """Convert one Avro record into a tuple."""
        return decode_record(record, self._fields)

    def sink(
        self, row: TupleEntry | Sequence[Any], collector: OutputCollectorProtocol
    ) -> None:
        """Encode one tuple and hand it to the collector with a null value."""
        collector.collect(self.to_record(row), None)

    def to_record(self, row: TupleEntry | Sequence[Any]) -> dict[str, Any]:
        """Convert one tuple, projecting named entries to the scheme fields."""
        values = row.select(self.field_names) if isinstance(row, TupleEntry) else row
        return encode_record(values, self._fields)

    def __repr__(self) -> str:
        return f"TupleScheme({self._fields!r})"
