import struct

import pytest

from pg_geometry.geometry import (
    Coordinate,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from pg_geometry.wkb.decoder import WKB_SRID_FLAG
from pg_geometry.wkb.srid import set_srid_recurse


POINT_HEX = "0101000000000000000000F03F0000000000000040"

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
HOLE_A = [(1, 1), (2, 1), (2, 2), (1, 1)]
HOLE_B = [(5, 5), (6, 5), (6, 6), (5, 5)]


def uniform(geom, srid):
    """Stamp `srid` on every node, the shape a decoded value has."""
    set_srid_recurse(geom, srid)
    return geom


def ndr_header(type_word, srid=None):
    """Little endian node header, with SRID when given."""
    data = struct.pack("<BI", 1, type_word | (WKB_SRID_FLAG if srid is not None else 0))
    if srid is not None:
        data += struct.pack("<i", srid)
    return data


def ndr_ring(coords):
    data = struct.pack("<I", len(coords))
    for c in coords:
        data += struct.pack(f"<{len(c)}d", *c)
    return data


@pytest.fixture
def polygon_with_holes():
    return Polygon(SQUARE, [HOLE_A, HOLE_B])


def sample_geometries():
    """One geometry per shape the codec has to handle."""
    return [
        Point(Coordinate(1.0, 2.0)),
        uniform(Point(Coordinate(1.5, -2.5, 3.25)), 4326),
        LineString([(0, 0), (1, 1), (2, 0)]),
        LineString([]),
        uniform(LineString([(0, 0, 1), (1, 1, 2)]), 3006),
        Polygon(SQUARE),
        uniform(Polygon(SQUARE, [HOLE_A, HOLE_B]), 4326),
        Polygon(),
        Point(srid=4326),
        uniform(Polygon([(0, 0, 5), (1, 0, 5), (1, 1, 5), (0, 0, 5)]), 3857),
        MultiPoint([Point((0, 0)), Point((1, 2))]),
        MultiPoint([]),
        uniform(MultiLineString([LineString([(0, 0), (1, 1)]), LineString([(2, 2), (3, 3)])]), 4326),
        MultiPolygon([Polygon(SQUARE), Polygon(SQUARE, [HOLE_A])]),
        MultiPolygon([]),
        uniform(GeometryCollection([
            Point((1, 1)),
            LineString([(0, 0), (1, 0)]),
            GeometryCollection([Polygon(SQUARE), MultiPoint([Point((3, 3, 3))])]),
        ]), 4326),
        GeometryCollection([]),
    ]


@pytest.fixture(params=range(len(sample_geometries())))
def sample_geometry(request):
    return sample_geometries()[request.param]
