"""Tuple scheme tests."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import avro_tuple_scheme.scheme.tuple_scheme as tuple_scheme_module
import pytest
from avro_tuple_scheme.record_conversion.tuple_models import TupleEntry
from avro_tuple_scheme.schema_management.schema_errors import (
    ConfigurationError,
    SchemaMismatchError,
)
from avro_tuple_scheme.schema_management.schema_models import PrimitiveNode
from avro_tuple_scheme.schema_management.type_catalog import FieldType, SchemaKind
from avro_tuple_scheme.scheme.tuple_scheme import TupleScheme


class FakeCollector:
    def __init__(self) -> None:
        self.collected: list[tuple[Mapping[str, Any], None]] = []

    def collect(self, key: Mapping[str, Any], value: None) -> None:
        self.collected.append((key, value))


def test_construction_validates_declaration() -> None:
    with pytest.raises(ConfigurationError):
        TupleScheme([], [])
    with pytest.raises(ConfigurationError):
        TupleScheme(["tags", "tagType"], [FieldType.ARRAY, FieldType.STRING])
    with pytest.raises(ConfigurationError):
        TupleScheme(["nested"], [FieldType.MAP, FieldType.ARRAY])


def test_id_and_name_scenario() -> None:
    scheme = TupleScheme(["id", "name"], [FieldType.INT, FieldType.STRING])

    assert [field.node for field in scheme.schema.fields] == [
        PrimitiveNode(SchemaKind.INT),
        PrimitiveNode(SchemaKind.STRING),
    ]
    assert scheme.source({"id": 7, "name": "Alice"}) == (7, "Alice")
    assert scheme.to_record((7, "Alice")) == {"id": 7, "name": "Alice"}


def test_array_scenario_round_trips() -> None:
    scheme = TupleScheme(["tags"], [FieldType.ARRAY, FieldType.STRING])

    row = scheme.source({"tags": ["a", "b"]})

    assert row == (("a", "b"),)
    assert scheme.to_record(row) == {"tags": ["a", "b"]}


def test_map_scenario_round_trips_associations() -> None:
    scheme = TupleScheme(["attrs"], [FieldType.MAP, FieldType.STRING])

    row = scheme.source({"attrs": {"k1": "v1", "k2": "v2"}})

    assert row == (("k1", "v1", "k2", "v2"),)
    assert scheme.to_record(row) == {"attrs": {"k1": "v1", "k2": "v2"}}


@pytest.mark.parametrize(
    ("names", "types", "row"),
    [
        (["id", "name"], ["int", "string"], (7, "Alice")),
        (
            ["flag", "big", "ratio", "score", "blob"],
            ["boolean", "long", "float", "double", "bytes"],
            (False, 2**50, 0.25, -3.5, b"\x00\xff"),
        ),
        (
            ["id", "tags", "attrs", "blobs"],
            ["int", "array", "long", "map", "double", "array", "bytes"],
            (1, (1, 2, 3), ("a", 1.5, "b", 2.5), (b"x", b"")),
        ),
        (["tags", "attrs"], ["array", "string", "map", "boolean"], ((), ())),
    ],
)
def test_decode_of_encode_returns_original_tuple(
    names: list[str], types: list[str], row: tuple
) -> None:
    scheme = TupleScheme(names, types)

    assert scheme.source(scheme.to_record(row)) == row


def test_schema_is_derived_once_and_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[object] = []
    real_build_schema = tuple_scheme_module.build_schema

    def counting_build_schema(fields):
        calls.append(fields)
        return real_build_schema(fields)

    monkeypatch.setattr(tuple_scheme_module, "build_schema", counting_build_schema)
    scheme = TupleScheme(["id"], ["int"])

    first = scheme.schema
    second = scheme.schema

    assert first is second
    assert len(calls) == 1


def test_schema_is_not_derived_at_construction(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_build_schema(fields):
        raise AssertionError("schema derived eagerly")

    monkeypatch.setattr(tuple_scheme_module, "build_schema", failing_build_schema)

    TupleScheme(["id"], ["int"])


def test_parsed_schema_is_cached() -> None:
    scheme = TupleScheme(["id", "tags"], ["int", "array", "string"])

    assert scheme.parsed_schema is scheme.parsed_schema
    assert scheme.parsed_schema["name"] == "Schema_0"


def test_sink_projects_entries_and_collects_with_null_value() -> None:
    scheme = TupleScheme(["name", "id"], ["string", "int"])
    collector = FakeCollector()
    entry = TupleEntry.of(["id", "name", "ignored"], [7, "Alice", "x"])

    scheme.sink(entry, collector)

    assert collector.collected == [({"name": "Alice", "id": 7}, None)]


def test_sink_uses_plain_rows_positionally() -> None:
    scheme = TupleScheme(["id", "name"], ["int", "string"])
    collector = FakeCollector()

    scheme.sink((7, "Alice"), collector)

    assert collector.collected == [({"id": 7, "name": "Alice"}, None)]


def test_sink_with_short_row_raises_schema_mismatch() -> None:
    scheme = TupleScheme(["id", "name"], ["int", "string"])

    with pytest.raises(SchemaMismatchError):
        scheme.sink((7,), FakeCollector())


def test_source_with_missing_field_raises_schema_mismatch() -> None:
    scheme = TupleScheme(["id", "name"], ["int", "string"])

    with pytest.raises(SchemaMismatchError):
        scheme.source({"id": 7})


def test_init_hooks_log_scheme_fields(caplog: pytest.LogCaptureFixture) -> None:
    scheme = TupleScheme(["id", "name"], ["int", "string"])

    with caplog.at_level(logging.INFO, logger="avro_tuple_scheme"):
        source_schema = scheme.source_init()
        sink_schema = scheme.sink_init()

    assert source_schema is sink_schema
    assert "Initializing Avro scheme for source - scheme fields: ['id', 'name']" in caplog.text
    assert "Initializing Avro scheme for sink - scheme fields: ['id', 'name']" in caplog.text


def test_repr_describes_fields() -> None:
    scheme = TupleScheme(["id", "tags"], ["int", "array", "string"])

    assert repr(scheme) == "TupleScheme(FieldSpec(id:int, tags:array<string>))"
