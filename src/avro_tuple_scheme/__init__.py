"""Convert flat tuples to and from Avro records."""

import logging

from .record_conversion import FlatTuple, TupleEntry, decode_record, encode_record
from .schema_management import (
    ConfigurationError,
    ContainerIOError,
    FieldSpec,
    FieldType,
    SchemaMismatchError,
    SchemeError,
    UnsupportedTypeError,
    build_schema,
)
from .scheme import TupleScheme

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "ContainerIOError",
    "FieldSpec",
    "FieldType",
    "FlatTuple",
    "SchemaMismatchError",
    "SchemeError",
    "TupleEntry",
    "TupleScheme",
    "UnsupportedTypeError",
    "build_schema",
    "decode_record",
    "encode_record",
]
