"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import click

from avro_tuple_scheme.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    load_configuration,
    write_placeholder_configuration,
)
from avro_tuple_scheme.container_io import (
    dump_json_lines,
    load_json_lines,
    read_container,
    write_container,
)
from avro_tuple_scheme.results_writing import write_rows_workbook
from avro_tuple_scheme.schema_management import SchemeError
from avro_tuple_scheme.scheme import TupleScheme


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="avro-tuple-scheme")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log progress to stderr.")
def cli(verbose: bool) -> None:
    """Convert flat tuples to and from Avro records."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML scheme configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML scheme configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="show-schema")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON scheme configuration file",
)
def show_schema(config_path: str) -> None:
    """Print the Avro schema derived from the configured fields."""
    _, scheme = _load_scheme(config_path)
    try:
        scheme.sink_init()
    except SchemeError as exc:
        raise CliError(str(exc)) from exc
    click.echo(json.dumps(scheme.avro_schema, indent=2))


@cli.command(name="read")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON scheme configuration file",
)
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the Avro container file to read",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional JSON-lines file to write instead of stdout",
)
def read_rows(config_path: str, input_path: str, output_path: str | None) -> None:
    """Decode an Avro container file into JSON-lines tuples."""
    _, scheme = _load_scheme(config_path)
    try:
        rows = read_container(scheme, input_path)
        if output_path is None:
            dump_json_lines(rows, scheme.fields, click.get_text_stream("stdout"))
            return
        destination = Path(output_path)
        count = _dump_rows_to_file(rows, scheme, destination)
    except (SchemeError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"{count} rows written to {destination.resolve()}")


@cli.command(name="write")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON scheme configuration file",
)
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON-lines tuples to encode",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the Avro container file to write",
)
def write_rows(config_path: str, input_path: str, output_path: str) -> None:
    """Encode JSON-lines tuples into an Avro container file."""
    configuration, scheme = _load_scheme(config_path)
    try:
        with Path(input_path).open("r", encoding="utf-8") as stream:
            count = write_container(
                scheme,
                load_json_lines(stream, scheme.fields),
                output_path,
                codec=configuration.container.codec,
            )
    except (SchemeError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"{count} records written to {Path(output_path).resolve()}")


@cli.command(name="export-workbook")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON scheme configuration file",
)
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the Avro container file to read",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the workbook to write",
)
def export_workbook(config_path: str, input_path: str, output_path: str) -> None:
    """Decode an Avro container file into an Excel workbook."""
    _, scheme = _load_scheme(config_path)
    try:
        write_rows_workbook(read_container(scheme, input_path), scheme, output_path)
    except (SchemeError, OSError, ValueError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(Path(output_path).resolve()))


def _dump_rows_to_file(
    rows: Iterable[Sequence[Any]], scheme: TupleScheme, destination: Path
) -> int:
    # rows land in a sibling file that replaces the destination once all are decoded
    destination.parent.mkdir(parents=True, exist_ok=True)
    partial_path = destination.with_name(f"{destination.name}.partial")
    try:
        with partial_path.open("w", encoding="utf-8") as stream:
            count = dump_json_lines(rows, scheme.fields, stream)
    except BaseException:
        partial_path.unlink(missing_ok=True)
        raise
    partial_path.replace(destination)
    return count


def _load_scheme(config_path: str) -> tuple[Configuration, TupleScheme]:
    try:
        configuration = load_configuration(config_path)
    except SchemeError as exc:
        raise CliError(str(exc)) from exc
    return configuration, TupleScheme.from_field_spec(configuration.scheme.fields)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
