import pytest
from fastapi.testclient import TestClient

from conftest import POINT_HEX
from pg_geometry.config import CodecConfig
from pg_geometry.serving.api import create_app


@pytest.fixture
def client():
    return TestClient(create_app(CodecConfig()))


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["byte_order"] == "ndr"
    assert body["database"] == "none"


def test_decode_hex(client):
    response = client.post("/api/decode", json={"value": POINT_HEX})
    assert response.status_code == 200
    body = response.json()
    assert body["geometry_type"] == "Point"
    assert body["srid"] == 0
    assert body["has_z"] is False
    assert body["ewkt"] == "POINT (1 2)"
    assert body["hex"] == POINT_HEX


def test_decode_ewkt(client):
    response = client.post("/api/decode", json={"value": "SRID=4326;LINESTRING(0 0, 1 1)"})
    assert response.status_code == 200
    assert response.json()["srid"] == 4326


def test_decode_invalid_value(client):
    response = client.post("/api/decode", json={"value": "01FF"})
    assert response.status_code == 422


def test_encode(client):
    response = client.post("/api/encode", json={"wkt": "POINT (1 2)", "srid": 4326, "byte_order": "xdr"})
    assert response.status_code == 200
    body = response.json()
    assert body["byte_order"] == "xdr"
    assert body["hex"] == "0020000001000010E63FF00000000000004000000000000000"


def test_encode_default_byte_order(client):
    response = client.post("/api/encode", json={"wkt": "POINT (1 2)"})
    assert response.json() == {"hex": POINT_HEX, "byte_order": "ndr"}


def test_encode_invalid_wkt(client):
    response = client.post("/api/encode", json={"wkt": "POINT (1"})
    assert response.status_code == 422


def test_tables_need_database(client):
    assert client.get("/api/tables").status_code == 503
    assert client.get("/api/tables/roads").status_code == 503


def test_encode_srid_out_of_range(client):
    response = client.post("/api/encode", json={"wkt": "POINT (1 2)", "srid": 2 ** 40})
    assert response.status_code == 422
