"""Avro record decoding tests."""

from __future__ import annotations

from collections import OrderedDict

import pytest
from avro_tuple_scheme.record_conversion.record_decoder import decode_primitive, decode_record
from avro_tuple_scheme.schema_management.field_spec import FieldSpec
from avro_tuple_scheme.schema_management.schema_errors import SchemaMismatchError


def test_decodes_primitive_fields_by_name() -> None:
    fields = FieldSpec(["id", "name"], ["int", "string"])

    assert decode_record({"name": "Alice", "id": 7}, fields) == (7, "Alice")


def test_decodes_every_primitive_kind() -> None:
    fields = FieldSpec(
        ["flag", "small", "big", "ratio", "score", "label", "blob"],
        ["boolean", "int", "long", "float", "double", "string", "bytes"],
    )
    record = {
        "flag": True,
        "small": 1,
        "big": 2**40,
        "ratio": 0.5,
        "score": 1.25,
        "label": "x",
        "blob": bytearray(b"\x00\x01"),
    }

    result = decode_record(record, fields)

    assert result == (True, 1, 2**40, 0.5, 1.25, "x", b"\x00\x01")
    assert type(result[-1]) is bytes


def test_array_becomes_nested_tuple() -> None:
    fields = FieldSpec(["tags"], ["array", "string"])

    assert decode_record({"tags": ["a", "b"]}, fields) == (("a", "b"),)


def test_map_becomes_flattened_key_value_tuple_in_iteration_order() -> None:
    fields = FieldSpec(["attrs"], ["map", "string"])
    runtime_map = OrderedDict([("k2", "v2"), ("k1", "v1")])

    assert decode_record({"attrs": runtime_map}, fields) == (("k2", "v2", "k1", "v1"),)


def test_map_of_binary_values_converts_each_value() -> None:
    fields = FieldSpec(["chunks"], ["map", "bytes"])

    result = decode_record({"chunks": {"a": memoryview(b"ab")}}, fields)

    assert result == (("a", b"ab"),)
    assert type(result[0][1]) is bytes


def test_empty_containers_decode_to_empty_tuples() -> None:
    fields = FieldSpec(["tags", "attrs"], ["array", "int", "map", "int"])

    assert decode_record({"tags": [], "attrs": {}}, fields) == ((), ())


def test_extra_record_fields_are_ignored() -> None:
    fields = FieldSpec(["id"], ["int"])

    assert decode_record({"id": 1, "other": "ignored"}, fields) == (1,)


def test_missing_field_raises_schema_mismatch() -> None:
    fields = FieldSpec(["id", "name"], ["int", "string"])

    with pytest.raises(SchemaMismatchError, match="missing field name"):
        decode_record({"id": 7}, fields)


def test_non_mapping_record_raises_schema_mismatch() -> None:
    with pytest.raises(SchemaMismatchError, match="must be a mapping"):
        decode_record([7], FieldSpec(["id"], ["int"]))  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("types", "value"),
    [
        (["array", "string"], "not-a-list"),
        (["array", "string"], {"a": "b"}),
        (["array", "string"], None),
        (["map", "string"], ["a", "b"]),
        (["map", "string"], None),
    ],
)
def test_container_shape_mismatch_raises(types: list[str], value: object) -> None:
    fields = FieldSpec(["value"], types)

    with pytest.raises(SchemaMismatchError, match="Field value expects"):
        decode_record({"value": value}, fields)


def test_primitive_step_passes_scalars_through() -> None:
    assert decode_primitive(3) == 3
    assert decode_primitive(None) is None
    assert decode_primitive("text") == "text"
    assert decode_primitive(b"raw") == b"raw"
