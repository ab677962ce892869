"""
Pure-Python EWKB (PostGIS extended Well-Known Binary) parser.

Turns bytes or hex text, as read from a geometry column, into the
geometry model in pg_geometry.geometry. Supports Point, LineString,
Polygon, the Multi* variants and GeometryCollection, with optional Z,
M (read and dropped) and SRID.
"""

import logging
import math
from typing import Optional

from ..geometry import (
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
from .cursor import ByteCursor, ByteSource
from .errors import (
    EndianMismatch,
    InconsistentSrid,
    MalformedEncoding,
    NestingTooDeep,
    UnknownGeometryType,
)

logger = logging.getLogger(__name__)


# Flag bits in the type word (PostGIS EWKB)
WKB_Z_FLAG = 0x80000000
WKB_M_FLAG = 0x40000000
WKB_SRID_FLAG = 0x20000000

# Low 29 bits carry the geometry kind
TYPE_MASK = 0x1FFFFFFF

UNKNOWN_SRID = 0
DEFAULT_MAX_DEPTH = 32

# Upper bound for max_depth; each level costs several interpreter frames
MAX_DEPTH_LIMIT = 128

# SRIDs travel as a signed 32-bit word
MAX_SRID = 0x7FFFFFFF

# Smallest possible encoded sub-geometry: marker byte + type word
_MIN_NODE_SIZE = 5

# Element kind required inside each Multi* container
_ELEMENT_KINDS = {
    GeometryKind.MULTIPOINT: GeometryKind.POINT,
    GeometryKind.MULTILINESTRING: GeometryKind.LINESTRING,
    GeometryKind.MULTIPOLYGON: GeometryKind.POLYGON,
}


def parse_srid(srid: int) -> int:
    """Map legacy negative SRIDs (old PostGIS "unknown") to 0."""
    return UNKNOWN_SRID if srid < 0 else srid


class WkbDecoder:
    """
    Recursive EWKB decoder.

    The first byte of the input fixes the byte order for the whole value;
    every nested node repeats its marker and must agree with it. SRIDs
    found on nested nodes must match the SRID of the enclosing value.
    The decoder keeps no state between calls and can be shared.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Args:
            max_depth: Maximum nesting depth of collections inside collections
        """
        if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}"
            )
        self.max_depth = max_depth

        self._readers = {
            GeometryKind.POINT: self._parse_point,
            GeometryKind.LINESTRING: self._parse_linestring,
            GeometryKind.POLYGON: self._parse_polygon,
            GeometryKind.MULTIPOINT: self._parse_multi,
            GeometryKind.MULTILINESTRING: self._parse_multi,
            GeometryKind.MULTIPOLYGON: self._parse_multi,
            GeometryKind.GEOMETRYCOLLECTION: self._parse_multi,
        }

    def decode(self, source: ByteSource) -> Geometry:
        """
        Decode a complete EWKB value.

        Args:
            source: EWKB bytes or hex text (either byte order)

        Returns:
            The decoded geometry

        Raises:
            MalformedEncoding: Bad hex text, unknown marker or trailing bytes
            TruncatedInput: The value ends before the geometry is complete
            EndianMismatch: A nested node uses a different byte order
            UnknownGeometryType: Unsupported or misplaced geometry kind
            InconsistentSrid: A nested SRID differs from the outer one
            NestingTooDeep: Collections nested deeper than max_depth
        """
        cursor = ByteCursor.from_source(source)
        geom = self._parse_geometry(cursor, UNKNOWN_SRID, False, 0)
        if cursor.remaining:
            raise MalformedEncoding(
                f"{cursor.remaining} trailing bytes after geometry",
                cursor.position
            )
        logger.debug(
            "Decoded %s (srid=%d, %s) from %d bytes",
            geom.geom_type, geom.srid, cursor.byte_order.name, len(cursor)
        )
        return geom

    def _parse_geometry(
        self,
        data: ByteCursor,
        srid: int,
        inherit_srid: bool,
        depth: int,
        expected: Optional[GeometryKind] = None
    ) -> Geometry:
        """Parse one full node: marker, type word, optional SRID, payload."""
        if depth > self.max_depth:
            raise NestingTooDeep(self.max_depth, data.position)

        marker_pos = data.position
        marker = data.read_byte()
        if marker != data.byte_order.value:
            raise EndianMismatch(
                f"Byte order marker {marker} does not match {data.byte_order.name}",
                marker_pos
            )

        type_pos = data.position
        typeword = data.read_uint32()
        realtype = typeword & TYPE_MASK

        have_z = bool(typeword & WKB_Z_FLAG)
        have_m = bool(typeword & WKB_M_FLAG)
        have_srid = bool(typeword & WKB_SRID_FLAG)

        if have_srid:
            srid_pos = data.position
            new_srid = parse_srid(data.read_int32())
            if inherit_srid and new_srid != srid:
                raise InconsistentSrid(srid, new_srid, srid_pos)
            srid = new_srid
        elif not inherit_srid:
            srid = UNKNOWN_SRID

        try:
            kind = GeometryKind(realtype)
        except ValueError:
            raise UnknownGeometryType(realtype, type_pos) from None

        if expected is not None and kind is not expected:
            raise UnknownGeometryType(
                realtype, type_pos,
                message=f"Expected {expected.name} element, got {kind.name}"
            )

        return self._readers[kind](data, kind, have_z, have_m, srid, depth)

    def _read_coordinates(self, data: ByteCursor, have_z: bool, have_m: bool) -> tuple[Coordinate, ...]:
        """
        Read a "slim" coordinate array: a count followed by bare ordinates,
        without per-point marker or type word (LineString and ring data,
        not MultiPoint elements).
        """
        count = data.read_uint32()
        width = 2 + have_z + have_m
        data.require(count * width * 8)
        flat = data.read_float64s(count * width)

        coords = []
        for i in range(0, len(flat), width):
            z = flat[i + 2] if have_z else None
            coords.append(Coordinate(flat[i], flat[i + 1], z))
        return tuple(coords)

    def _parse_point(self, data, kind, have_z, have_m, srid, depth) -> Point:
        values = data.read_float64s(2 + have_z + have_m)
        # POINT EMPTY is written as all-NaN ordinates
        if all(math.isnan(v) for v in values[:2 + have_z]):
            return Point(srid=srid)
        z = values[2] if have_z else None
        return Point(Coordinate(values[0], values[1], z), srid=srid)

    def _parse_linestring(self, data, kind, have_z, have_m, srid, depth) -> LineString:
        return LineString(self._read_coordinates(data, have_z, have_m), srid=srid)

    def _parse_polygon(self, data, kind, have_z, have_m, srid, depth) -> Polygon:
        ring_count = data.read_uint32()
        if ring_count == 0:
            return Polygon(srid=srid)

        # every ring needs at least its point count
        data.require(ring_count * 4)
        shell = LinearRing(self._read_coordinates(data, have_z, have_m), srid=srid)
        holes = tuple(
            LinearRing(self._read_coordinates(data, have_z, have_m), srid=srid)
            for _ in range(ring_count - 1)
        )
        return Polygon(shell, holes, srid=srid)

    def _parse_multi(self, data, kind, have_z, have_m, srid, depth) -> GeometryCollection:
        """Parse an array of full sub-geometries (Multi* and collections)."""
        count = data.read_uint32()
        data.require(count * _MIN_NODE_SIZE)

        element_kind = _ELEMENT_KINDS.get(kind)
        parts = tuple(
            self._parse_geometry(data, srid, True, depth + 1, element_kind)
            for _ in range(count)
        )

        if kind is GeometryKind.MULTIPOINT:
            return MultiPoint(parts, srid=srid)
        elif kind is GeometryKind.MULTILINESTRING:
            return MultiLineString(parts, srid=srid)
        elif kind is GeometryKind.MULTIPOLYGON:
            return MultiPolygon(parts, srid=srid)
        return GeometryCollection(parts, srid=srid)


def decode(source: ByteSource, max_depth: int = DEFAULT_MAX_DEPTH) -> Geometry:
    """Decode EWKB bytes or hex text with a one-off decoder."""
    return WkbDecoder(max_depth=max_depth).decode(source)
