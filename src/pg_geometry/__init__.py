"""PostGIS EWKB geometry codec."""

from .config import CodecConfig
from .geometry import (
    Coordinate,
    Geometry,
    GeometryCollection,
    GeometryKind,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from .wire import WireValueAdapter, decode, encode
from .wkb import (
    ByteOrder,
    EndianMismatch,
    InconsistentSrid,
    MalformedEncoding,
    NestingTooDeep,
    TruncatedInput,
    UnknownGeometryType,
    WkbDecoder,
    WkbEncoder,
    WkbError,
    set_srid_recurse,
)

__version__ = "0.1.0"

__all__ = [
    "CodecConfig",
    "Coordinate",
    "Geometry",
    "GeometryCollection",
    "GeometryKind",
    "LinearRing",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "WireValueAdapter",
    "decode",
    "encode",
    "ByteOrder",
    "WkbDecoder",
    "WkbEncoder",
    "set_srid_recurse",
    "WkbError",
    "MalformedEncoding",
    "TruncatedInput",
    "EndianMismatch",
    "UnknownGeometryType",
    "InconsistentSrid",
    "NestingTooDeep",
]
