"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from avro_tuple_scheme.schema_management.field_spec import FieldSpec


@dataclass(frozen=True)
class SchemeSettings:
    """Validated flat field declaration."""

    fields: FieldSpec

    @property
    def field_names(self) -> tuple[str, ...]:
        return self.fields.names


@dataclass(frozen=True)
class ContainerSettings:
    """Avro container file output settings."""

    codec: str = "null"


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration structure."""

    path: Path
    scheme: SchemeSettings
    container: ContainerSettings
