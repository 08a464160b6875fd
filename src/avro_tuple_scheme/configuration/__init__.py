"""Configuration domain exports."""

from avro_tuple_scheme.schema_management.schema_errors import ConfigurationError

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import load_configuration
from .runtime_settings import Configuration, ContainerSettings, SchemeSettings

__all__ = [
    "Configuration",
    "ContainerSettings",
    "SchemeSettings",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
