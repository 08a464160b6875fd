"""Boundary tests for the conversion core."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_conversion_core_does_not_import_io_libraries() -> None:
    package_dir = _project_root() / "src" / "avro_tuple_scheme"
    core_modules = (
        *sorted((package_dir / "schema_management").glob("*.py")),
        *sorted((package_dir / "record_conversion").glob("*.py")),
    )
    forbidden_import_fragments = (
        "import fastavro",
        "from fastavro",
        "import openpyxl",
        "from openpyxl",
        "import yaml",
        "avro_tuple_scheme.container_io",
        "avro_tuple_scheme.scheme",
    )

    assert core_modules
    for module_path in core_modules:
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden core dependency in {module_path}: {fragment}"
