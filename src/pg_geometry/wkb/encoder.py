"""
EWKB writer, the inverse of the decoder.

Produces bytes or hex text suitable for sending back to a PostGIS
geometry column.
"""

import binascii
import logging
import math
import struct

from ..geometry import (
    Coordinate,
    Geometry,
    GeometryCollection,
    GeometryKind,
    LineString,
    Point,
    Polygon,
)
from .cursor import ByteOrder
from .decoder import MAX_SRID, WKB_SRID_FLAG, WKB_Z_FLAG

logger = logging.getLogger(__name__)


class WkbEncoder:
    """
    Serialize model geometries to EWKB.

    The SRID is written on the top-level node only (when it is positive;
    0 and legacy negative values mean unknown and are left out);
    nested nodes inherit it, which is what the decoder's consistency
    check expects. M is never written.
    """

    def __init__(self, byte_order: ByteOrder = ByteOrder.NDR, uppercase: bool = True):
        self.byte_order = byte_order
        self.uppercase = uppercase

        prefix = byte_order.prefix
        self._header = struct.Struct(f"{prefix}BI")
        self._uint32 = struct.Struct(f"{prefix}I")
        self._int32 = struct.Struct(f"{prefix}i")
        self._prefix = prefix

        self._writers = {
            GeometryKind.POINT: self._write_point,
            GeometryKind.LINESTRING: self._write_linestring,
            GeometryKind.POLYGON: self._write_polygon,
            GeometryKind.MULTIPOINT: self._write_multi,
            GeometryKind.MULTILINESTRING: self._write_multi,
            GeometryKind.MULTIPOLYGON: self._write_multi,
            GeometryKind.GEOMETRYCOLLECTION: self._write_multi,
        }

    def encode_bytes(self, geom: Geometry) -> bytes:
        """
        Encode a geometry to EWKB bytes.

        Args:
            geom: Any model geometry

        Returns:
            EWKB bytes in this encoder's byte order
        """
        if not isinstance(geom, Geometry):
            raise TypeError(f"Cannot encode {type(geom).__name__} as EWKB")
        if geom.srid > MAX_SRID:
            raise ValueError(f"SRID {geom.srid} does not fit in a 32-bit type word")
        chunks: list[bytes] = []
        self._write_geometry(geom, chunks, top_level=True)
        result = b"".join(chunks)
        logger.debug("Encoded %s (srid=%d) to %d bytes", geom.geom_type, geom.srid, len(result))
        return result

    def encode(self, geom: Geometry) -> str:
        """Encode a geometry to hex text, two digits per byte."""
        text = binascii.hexlify(self.encode_bytes(geom)).decode("ascii")
        return text.upper() if self.uppercase else text

    def _write_geometry(self, geom: Geometry, out: list[bytes], top_level: bool = False):
        kind = geom.kind
        typeword = int(kind)
        if geom.has_z:
            typeword |= WKB_Z_FLAG

        write_srid = top_level and geom.srid > 0
        if write_srid:
            typeword |= WKB_SRID_FLAG

        out.append(self._header.pack(self.byte_order.value, typeword))
        if write_srid:
            out.append(self._int32.pack(geom.srid))

        self._writers[kind](geom, out)

    def _pack_coordinates(self, coords: tuple[Coordinate, ...], has_z: bool) -> bytes:
        width = 3 if has_z else 2
        flat = []
        for c in coords:
            flat.extend(c[:width])
        return struct.pack(f"{self._prefix}{len(flat)}d", *flat)

    def _write_point(self, geom: Point, out: list[bytes]):
        if geom.coordinate is None:
            out.append(struct.pack(f"{self._prefix}2d", math.nan, math.nan))
            return
        out.append(self._pack_coordinates((geom.coordinate,), geom.has_z))

    def _write_coordinate_array(self, coords: tuple[Coordinate, ...], has_z: bool, out: list[bytes]):
        """Slim array: count, then bare ordinates."""
        out.append(self._uint32.pack(len(coords)))
        out.append(self._pack_coordinates(coords, has_z))

    def _write_linestring(self, geom: LineString, out: list[bytes]):
        self._write_coordinate_array(geom.coordinates, geom.has_z, out)

    def _write_polygon(self, geom: Polygon, out: list[bytes]):
        rings = geom.rings
        out.append(self._uint32.pack(len(rings)))
        for ring in rings:
            self._write_coordinate_array(ring.coordinates, geom.has_z, out)

    def _write_multi(self, geom: GeometryCollection, out: list[bytes]):
        out.append(self._uint32.pack(len(geom.geoms)))
        for part in geom.geoms:
            self._write_geometry(part, out)


def encode(geom: Geometry, byte_order: ByteOrder = ByteOrder.NDR) -> str:
    """Encode a geometry to uppercase hex EWKB with a one-off encoder."""
    return WkbEncoder(byte_order=byte_order).encode(geom)
