"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from avro_tuple_scheme.container_io.container_files import DEFAULT_CODEC, SUPPORTED_CODECS
from avro_tuple_scheme.schema_management.field_spec import FieldSpec
from avro_tuple_scheme.schema_management.schema_errors import ConfigurationError

from .runtime_settings import Configuration, ContainerSettings, SchemeSettings


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    scheme = _parse_scheme_section(parsed.get("scheme"))
    container = _parse_container_section(parsed.get("container"))
    return Configuration(path=path, scheme=scheme, container=container)


def _parse_scheme_section(value: Any) -> SchemeSettings:
    section = _require_mapping(value, "scheme")
    names = _require_string_sequence(section.get("fields"), "scheme.fields")
    types = _require_string_sequence(section.get("types"), "scheme.types")
    return SchemeSettings(fields=FieldSpec(names, types))


def _parse_container_section(value: Any) -> ContainerSettings:
    if value is None:
        return ContainerSettings(codec=DEFAULT_CODEC)
    section = _require_mapping(value, "container")
    codec_raw = section.get("codec", DEFAULT_CODEC)
    # YAML reads a bare null as None
    if codec_raw is None:
        codec_raw = DEFAULT_CODEC
    if not isinstance(codec_raw, str):
        raise ConfigurationError("container.codec must be a string.")
    codec = codec_raw.strip().lower()
    if codec not in SUPPORTED_CODECS:
        raise ConfigurationError(
            f"container.codec must be one of: {', '.join(SUPPORTED_CODECS)}."
        )
    return ContainerSettings(codec=codec)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        raise ConfigurationError(f"{field_name} is required.")
    if isinstance(value, str):
        items = [item.strip() for item in value.split(",")]
    elif isinstance(value, Sequence):
        items = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            items.append(item.strip())
    else:
        raise ConfigurationError(f"{field_name} must be a string or list of strings.")
    if any(not item for item in items):
        raise ConfigurationError(f"{field_name} entries must not be empty.")
    return tuple(items)
