"""Module entry point for `python -m avro_tuple_scheme`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
