"""Record conversion exports."""

from .record_decoder import decode_primitive, decode_record
from .record_encoder import encode_primitive, encode_record
from .tuple_models import FlatTuple, TupleEntry

__all__ = [
    "FlatTuple",
    "TupleEntry",
    "decode_primitive",
    "decode_record",
    "encode_primitive",
    "encode_record",
]
