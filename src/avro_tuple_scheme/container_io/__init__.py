"""Container file and row exchange exports."""

from .container_files import (
    DEFAULT_CODEC,
    SUPPORTED_CODECS,
    ContainerFileCollector,
    read_container,
    write_container,
)
from .json_rows import dump_json_lines, load_json_lines, row_from_json, row_to_json

__all__ = [
    "ContainerFileCollector",
    "DEFAULT_CODEC",
    "SUPPORTED_CODECS",
    "dump_json_lines",
    "load_json_lines",
    "read_container",
    "row_from_json",
    "row_to_json",
    "write_container",
]
