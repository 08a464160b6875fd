"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "scheme.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Scheme configuration template for avro-tuple-scheme.
# Replace the example fields and types with the declaration of your records.

scheme:
  # One name per declared field, in tuple order.
  fields:
    - id
    - name
    - tags
    - attrs
  # Flat type slots. array and map consume the following slot as their element type.
  # Supported types: boolean, int, long, float, double, string, bytes, array, map.
  types:
    - int
    - string
    - array
    - string
    - map
    - long

container:
  # Avro container codec: null, deflate, bzip2 or xz.
  codec: "null"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML scheme configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the scheme configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Scheme configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
