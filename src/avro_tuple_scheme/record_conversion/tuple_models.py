"""Row containers exchanged with the tuple pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from avro_tuple_scheme.schema_management.schema_errors import SchemaMismatchError

FlatTuple = tuple[Any, ...]


@dataclass(frozen=True)
class TupleEntry:
    """Ordered row whose values are also addressable by field name."""

    fields: tuple[str, ...]
    values: FlatTuple

    def __post_init__(self) -> None:
        if len(self.fields) != len(self.values):
            raise SchemaMismatchError(
                f"Tuple entry has {len(self.values)} values for {len(self.fields)} fields."
            )

    @classmethod
    def of(cls, fields: Sequence[str], values: Sequence[Any]) -> TupleEntry:
        return cls(fields=tuple(fields), values=tuple(values))

    def get(self, name: str) -> Any:
        """Return the value stored under a field name."""
        try:
            index = self.fields.index(name)
        except ValueError as exc:
            raise SchemaMismatchError(f"Tuple entry has no field named {name}.") from exc
        return self.values[index]

    def select(self, names: Sequence[str]) -> FlatTuple:
        """Project the entry down to the named fields, in the requested order."""
        return tuple(self.get(name) for name in names)
