"""Type catalog tests."""

from __future__ import annotations

import pytest
from avro_tuple_scheme.schema_management.schema_errors import (
    ConfigurationError,
    UnsupportedTypeError,
)
from avro_tuple_scheme.schema_management.type_catalog import (
    TYPE_CATALOG,
    FieldType,
    SchemaKind,
    to_schema_kind,
)


@pytest.mark.parametrize(
    ("declared", "expected"),
    [
        ("int", FieldType.INT),
        ("LONG", FieldType.LONG),
        (" string ", FieldType.STRING),
        ("integer32", FieldType.INT),
        ("integer64", FieldType.LONG),
        ("float32", FieldType.FLOAT),
        ("float64", FieldType.DOUBLE),
        ("text", FieldType.STRING),
        ("binary", FieldType.BYTES),
        ("bool", FieldType.BOOLEAN),
        (FieldType.MAP, FieldType.MAP),
    ],
)
def test_resolves_declared_types(declared: object, expected: FieldType) -> None:
    assert FieldType.from_declaration(declared) is expected


@pytest.mark.parametrize("declared", ["enum", "fixed", "union", "record", "", 42, None, int])
def test_rejects_unknown_declared_types(declared: object) -> None:
    with pytest.raises(UnsupportedTypeError) as exc_info:
        FieldType.from_declaration(declared)

    assert exc_info.value.declared_type == declared
    assert repr(declared) in str(exc_info.value)


def test_unsupported_type_error_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        to_schema_kind("fixed")


def test_catalog_covers_every_field_type() -> None:
    assert set(TYPE_CATALOG) == set(FieldType)
    assert to_schema_kind(FieldType.INT) is SchemaKind.INT
    assert to_schema_kind("bytes") is SchemaKind.BYTES
    assert to_schema_kind("array") is SchemaKind.ARRAY
    assert to_schema_kind("map") is SchemaKind.MAP


def test_catalog_is_read_only() -> None:
    with pytest.raises(TypeError):
        TYPE_CATALOG[FieldType.INT] = SchemaKind.LONG  # type: ignore[index]


def test_only_array_and_map_are_containers() -> None:
    containers = {field_type for field_type in FieldType if field_type.is_container}

    assert containers == {FieldType.ARRAY, FieldType.MAP}
