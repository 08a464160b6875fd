"""Avro object container file source and sink."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any

import fastavro
from fastavro.validation import ValidationError, validate_many

from avro_tuple_scheme.record_conversion.tuple_models import FlatTuple, TupleEntry
from avro_tuple_scheme.schema_management.schema_errors import ContainerIOError
from avro_tuple_scheme.scheme.tuple_scheme import TupleScheme

_LOGGER = logging.getLogger(__name__)

DEFAULT_CODEC = "null"
SUPPORTED_CODECS: tuple[str, ...] = ("null", "deflate", "bzip2", "xz")

ContainerTarget = Path | str | IO[bytes]

# Written type -> declared types it may be read as.
_PROMOTIONS: Mapping[str, tuple[str, ...]] = {
    "int": ("long", "float", "double"),
    "long": ("float", "double"),
    "float": ("double",),
}


def read_container(scheme: TupleScheme, source: ContainerTarget) -> Iterator[FlatTuple]:
    """Yield one tuple per record stored in an Avro container file.

    The container's writer schema is checked against the scheme's derived
    schema before any record is decoded. Fields the scheme does not declare are
    ignored; numeric promotions (int to long, float or double, long to float or
    double, float to double) are accepted.

    Args:
      scheme: Scheme whose declared fields are read from every record.
      source: Path to the container file or an open binary stream.

    Raises:
      ContainerIOError: If the container cannot be opened or parsed, or a declared
        field is stored with an incompatible type.
      SchemaMismatchError: If a record lacks a declared field or has the wrong shape.
    """
    expected_schema = scheme.source_init()
    count = 0
    with _open_binary(source, "rb") as stream:
        for record in _iter_container_records(stream, expected_schema):
            yield scheme.source(record)
            count += 1
    _LOGGER.info("Read %d records from %s", count, _describe(source))


def _iter_container_records(
    stream: IO[bytes], expected_schema: Mapping[str, Any]
) -> Iterator[Mapping[str, Any]]:
    try:
        reader = fastavro.reader(stream)
    except (ValueError, TypeError, EOFError) as exc:
        raise ContainerIOError(f"Failed to read Avro container: {exc}") from exc
    _check_writer_schema(reader.writer_schema, expected_schema)
    try:
        for record in reader:
            yield record
    except (ValueError, TypeError, EOFError) as exc:
        raise ContainerIOError(f"Failed to read Avro container: {exc}") from exc


def _check_writer_schema(writer_schema: Any, expected_schema: Mapping[str, Any]) -> None:
    if not isinstance(writer_schema, Mapping) or writer_schema.get("type") != "record":
        raise ContainerIOError("Avro container does not hold records.")
    written_types = {field["name"]: field["type"] for field in writer_schema["fields"]}
    for field in expected_schema["fields"]:
        # absent fields are reported per record by the decoder
        if field["name"] not in written_types:
            continue
        written = written_types[field["name"]]
        if not _types_compatible(written, field["type"]):
            raise ContainerIOError(
                f"Avro container field {field['name']} has type {_type_label(written)}, "
                f"expected {_type_label(field['type'])}."
            )


def _types_compatible(written: Any, declared: Any) -> bool:
    written_name = _type_name(written)
    declared_name = _type_name(declared)
    if written_name == "array" and declared_name == "array":
        return _types_compatible(written["items"], declared["items"])
    if written_name == "map" and declared_name == "map":
        return _types_compatible(written["values"], declared["values"])
    return written_name == declared_name or declared_name in _PROMOTIONS.get(written_name, ())


def _type_name(schema: Any) -> str:
    if isinstance(schema, str):
        return schema
    if isinstance(schema, list):
        return "union"
    if isinstance(schema, Mapping):
        if "logicalType" in schema:
            return str(schema["logicalType"])
        return _type_name(schema["type"])
    return repr(schema)


def _type_label(schema: Any) -> str:
    name = _type_name(schema)
    if name == "array":
        return f"array<{_type_label(schema['items'])}>"
    if name == "map":
        return f"map<{_type_label(schema['values'])}>"
    return name


class ContainerFileCollector:
    """Output collector that writes collected records to an Avro container file.

    Records are buffered and written when the collector is closed.
    """

    def __init__(
        self,
        scheme: TupleScheme,
        destination: ContainerTarget,
        *,
        codec: str = DEFAULT_CODEC,
    ) -> None:
        if codec not in SUPPORTED_CODECS:
            raise ContainerIOError(
                f"Unsupported container codec: {codec}. "
                f"Expected one of: {', '.join(SUPPORTED_CODECS)}."
            )
        self._destination = destination
        self._codec = codec
        self._records: list[Mapping[str, Any]] = []
        self._closed = False
        self._schema = scheme.sink_init()

    @property
    def collected(self) -> int:
        return len(self._records)

    def collect(self, key: Mapping[str, Any], value: None) -> None:
        """Accept one encoded record; the value half of the pair is always null."""
        if self._closed:
            raise ContainerIOError("Collector is already closed.")
        self._records.append(key)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # nothing touches the destination until every record validates
        try:
            validate_many(self._records, self._schema, raise_errors=True)
        except (ValidationError, ValueError, TypeError) as exc:
            raise ContainerIOError(f"Failed to write Avro container: {exc}") from exc
        try:
            if isinstance(self._destination, (str, Path)):
                self._write_file(Path(self._destination))
            else:
                self._write_stream(self._destination)
        except (ValidationError, ValueError, TypeError) as exc:
            raise ContainerIOError(f"Failed to write Avro container: {exc}") from exc
        except OSError as exc:
            raise ContainerIOError(
                f"Failed to write Avro container {_describe(self._destination)}: {exc}"
            ) from exc
        _LOGGER.info(
            "Wrote %d records to %s with codec %s",
            len(self._records),
            _describe(self._destination),
            self._codec,
        )

    def _write_stream(self, stream: IO[bytes]) -> None:
        fastavro.writer(stream, self._schema, self._records, codec=self._codec)

    def _write_file(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        partial_path = _partial_path(path)
        try:
            with partial_path.open("wb") as stream:
                self._write_stream(stream)
        except BaseException:
            partial_path.unlink(missing_ok=True)
            raise
        partial_path.replace(path)

    def __enter__(self) -> ContainerFileCollector:
        return self

    def __exit__(self, exc_type: Any, exc: Any, traceback: Any) -> None:
        if exc_type is None:
            self.close()


def write_container(
    scheme: TupleScheme,
    rows: Iterable[TupleEntry | Sequence[Any]],
    destination: ContainerTarget,
    *,
    codec: str = DEFAULT_CODEC,
) -> int:
    """Encode every row through the scheme and write them to a container file.

    Returns:
      Number of records written.
    """
    with ContainerFileCollector(scheme, destination, codec=codec) as collector:
        for row in rows:
            scheme.sink(row, collector)
        written = collector.collected
    return written


def _partial_path(path: Path) -> Path:
    return path.with_name(f"{path.name}.partial")


@contextmanager
def _open_binary(target: ContainerTarget, mode: str) -> Iterator[IO[bytes]]:
    if isinstance(target, (str, Path)):
        path = Path(target)
        try:
            stream = path.open(mode)
        except OSError as exc:
            raise ContainerIOError(f"Cannot open Avro container {path}: {exc}") from exc
        with stream:
            yield stream
    else:
        yield target


def _describe(target: ContainerTarget) -> str:
    if isinstance(target, (str, Path)):
        return str(target)
    return str(getattr(target, "name", "<stream>"))
