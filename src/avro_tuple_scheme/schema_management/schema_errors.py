"""Scheme error taxonomy."""

from __future__ import annotations

from typing import Any


class SchemeError(Exception):
    """Base class for all tuple scheme failures."""


class ConfigurationError(SchemeError):
    """Raised when a field declaration or configuration file is invalid."""


class UnsupportedTypeError(ConfigurationError):
    """Raised when a declared type has no type catalog entry."""

    def __init__(self, declared_type: Any) -> None:
        super().__init__(f"The field type {declared_type!r} is currently unsupported")
        self.declared_type = declared_type


class SchemaMismatchError(SchemeError):
    """Raised when a record or tuple does not match the declared fields."""


class ContainerIOError(SchemeError):
    """Raised when an Avro container file cannot be read or written."""
