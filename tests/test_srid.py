from conftest import SQUARE
from pg_geometry.geometry import GeometryCollection, MultiPolygon, Point, Polygon
from pg_geometry.wkb.decoder import decode
from pg_geometry.wkb.encoder import encode
from pg_geometry.wkb.srid import set_srid_recurse


def test_polygon_rings_receive_srid(polygon_with_holes):
    set_srid_recurse(polygon_with_holes, 4326)
    assert polygon_with_holes.srid == 4326
    assert polygon_with_holes.exterior.srid == 4326
    assert [r.srid for r in polygon_with_holes.interiors] == [4326, 4326]


def test_nested_collections_receive_srid(polygon_with_holes):
    geom = GeometryCollection([
        Point((0, 0)),
        MultiPolygon([polygon_with_holes]),
    ])
    set_srid_recurse(geom, 3006)

    assert geom.geoms[0].srid == 3006
    multi = geom.geoms[1]
    assert multi.srid == 3006
    assert multi.geoms[0].srid == 3006
    assert all(r.srid == 3006 for r in multi.geoms[0].rings)


def test_propagated_value_survives_round_trip():
    geom = MultiPolygon([Polygon(SQUARE)])
    geom.srid = 4326
    # only the root carries the SRID: nested nodes decode with the inherited one
    assert decode(encode(geom)) != geom

    set_srid_recurse(geom, 4326)
    assert decode(encode(geom)) == geom


def test_reset_to_unknown(polygon_with_holes):
    set_srid_recurse(polygon_with_holes, 4326)
    set_srid_recurse(polygon_with_holes, 0)
    assert all(r.srid == 0 for r in polygon_with_holes.rings)
