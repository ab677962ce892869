import pytest

from conftest import POINT_HEX, SQUARE, sample_geometries
from pg_geometry.geometry import Coordinate, GeometryKind, LinearRing, LineString, Point, Polygon
from pg_geometry.wkb.cursor import ByteOrder
from pg_geometry.wkb.decoder import WkbDecoder, decode
from pg_geometry.wkb.encoder import WkbEncoder, encode
from pg_geometry.wkb.errors import TruncatedInput


def test_encode_point_hex():
    assert encode(Point(Coordinate(1.0, 2.0))) == POINT_HEX


def test_point_hex_round_trip():
    assert encode(decode(POINT_HEX)).upper() == POINT_HEX.upper()


def test_encode_big_endian_with_srid():
    geom = Point((1.0, 2.0), srid=4326)
    assert encode(geom, ByteOrder.XDR) == "0020000001000010E63FF00000000000004000000000000000"


def test_lowercase_output():
    assert WkbEncoder(uppercase=False).encode(Point((1.0, 2.0))) == POINT_HEX.lower()


def test_round_trip(sample_geometry):
    assert decode(encode(sample_geometry)) == sample_geometry


@pytest.mark.parametrize("byte_order", [ByteOrder.NDR, ByteOrder.XDR])
def test_round_trip_both_byte_orders(sample_geometry, byte_order):
    data = WkbEncoder(byte_order=byte_order).encode_bytes(sample_geometry)
    assert data[0] == byte_order.value
    assert decode(data) == sample_geometry


def test_byte_orders_decode_identically(sample_geometry):
    ndr = WkbEncoder(byte_order=ByteOrder.NDR).encode_bytes(sample_geometry)
    xdr = WkbEncoder(byte_order=ByteOrder.XDR).encode_bytes(sample_geometry)
    assert ndr != xdr
    assert decode(ndr) == decode(xdr)


def test_truncation_by_one_byte_fails(sample_geometry):
    data = WkbEncoder().encode_bytes(sample_geometry)
    with pytest.raises(TruncatedInput):
        decode(data[:-1])


def test_srid_written_on_top_level_only(polygon_with_holes):
    from pg_geometry.geometry import MultiPolygon
    from pg_geometry.wkb.srid import set_srid_recurse

    geom = MultiPolygon([polygon_with_holes])
    set_srid_recurse(geom, 4326)
    data = WkbEncoder().encode_bytes(geom)
    # one SRID value in the whole value
    assert data.count((4326).to_bytes(4, "little")) == 1
    assert decode(data) == geom


def test_linear_ring_written_as_linestring():
    ring = LinearRing(SQUARE)
    geom = decode(encode(ring))
    assert isinstance(geom, LineString)
    assert geom.coordinates == ring.coordinates


def test_polygon_3d_sets_z_flag():
    geom = Polygon([(0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 0, 1)])
    data = WkbEncoder().encode_bytes(geom)
    assert data[4] & 0x80


def test_encode_rejects_non_geometry():
    with pytest.raises(TypeError):
        encode({"type": "Point"})


def test_every_kind_has_a_writer():
    assert set(WkbEncoder()._writers) == set(GeometryKind)


def test_decoder_and_encoder_are_reusable():
    decoder = WkbDecoder()
    encoder = WkbEncoder(byte_order=ByteOrder.XDR)
    for geom in sample_geometries():
        assert decoder.decode(encoder.encode(geom)) == geom


def test_empty_point_round_trip():
    empty_hex = "0101000000000000000000F87F000000000000F87F"
    assert encode(Point()) == empty_hex
    assert encode(decode(empty_hex)) == empty_hex
    assert decode(encode(Point(srid=4326))) == Point(srid=4326)


def test_empty_point_big_endian():
    assert encode(Point(), ByteOrder.XDR) == "00000000017FF80000000000007FF8000000000000"


@pytest.mark.parametrize("srid", [0, -1])
def test_unknown_srid_not_written(srid):
    assert encode(Point((1.0, 2.0), srid=srid)) == POINT_HEX
    assert decode(encode(Point((1.0, 2.0), srid=srid))).srid == 0


def test_srid_out_of_range():
    with pytest.raises(ValueError):
        encode(Point((1.0, 2.0), srid=2 ** 31))
