# EWKB codec modules
from .cursor import ByteCursor, ByteOrder, to_bytes
from .decoder import WkbDecoder, decode
from .encoder import WkbEncoder, encode
from .errors import (
    EndianMismatch,
    InconsistentSrid,
    MalformedEncoding,
    NestingTooDeep,
    TruncatedInput,
    UnknownGeometryType,
    WkbError,
)
from .srid import set_srid_recurse

__all__ = [
    "ByteCursor",
    "ByteOrder",
    "to_bytes",
    "WkbDecoder",
    "decode",
    "WkbEncoder",
    "encode",
    "set_srid_recurse",
    "WkbError",
    "MalformedEncoding",
    "TruncatedInput",
    "EndianMismatch",
    "UnknownGeometryType",
    "InconsistentSrid",
    "NestingTooDeep",
]
