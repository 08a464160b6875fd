"""Tuple scheme exports."""

from .tuple_scheme import OutputCollectorProtocol, TupleScheme

__all__ = ["OutputCollectorProtocol", "TupleScheme"]
