from unittest import mock

import psycopg2
import psycopg2.extras
import pytest

from conftest import POINT_HEX
from pg_geometry.db.store import GeometryStore
from pg_geometry.geometry import Point


@pytest.fixture
def fake_conn(monkeypatch):
    conn = mock.MagicMock()
    conn.closed = False
    monkeypatch.setattr(psycopg2, "connect", mock.Mock(return_value=conn))
    return conn


def _cursor(conn):
    return conn.cursor.return_value.__enter__.return_value


def test_sanitize_name(fake_conn):
    store = GeometryStore("dbname=test")
    assert store._sanitize_name("My Table-1") == "my_table_1"
    assert store._sanitize_name("1st") == "_1st"


def test_insert_sends_hex_ewkb(fake_conn, monkeypatch):
    execute_values = mock.Mock()
    monkeypatch.setattr(psycopg2.extras, "execute_values", execute_values)

    with GeometryStore("dbname=test", schema="gis") as store:
        count = store.insert("points", [Point((1.0, 2.0)), Point((1.0, 2.0))])

    assert count == 2
    args, kwargs = execute_values.call_args
    assert '"gis"."points"' in args[1]
    assert args[2] == [(POINT_HEX,), (POINT_HEX,)]
    assert kwargs["template"] == "(%s::geometry)"
    fake_conn.commit.assert_called()
    fake_conn.close.assert_called_once()


def test_insert_nothing(fake_conn):
    assert GeometryStore("dbname=test").insert("points", []) == 0


def test_fetch_decodes_rows(fake_conn):
    _cursor(fake_conn).__iter__.return_value = iter([(1, POINT_HEX), (2, None)])

    store = GeometryStore("dbname=test")
    rows = list(store.fetch("points", limit=10))

    assert rows[0].fid == 1
    assert rows[0].geometry == Point((1.0, 2.0))
    assert rows[1].geometry is None
    query, params = _cursor(fake_conn).execute.call_args[0]
    assert "LIMIT %s" in query
    assert params == [10]


def test_create_table_fails_when_exists(fake_conn):
    _cursor(fake_conn).fetchone.return_value = (True,)
    store = GeometryStore("dbname=test")
    with pytest.raises(ValueError):
        store.create_table("points", srid=4326, geometry_type="POINT")


def test_create_table(fake_conn):
    _cursor(fake_conn).fetchone.return_value = (False,)
    store = GeometryStore("dbname=test")
    name = store.create_table("New Points", srid=4326, geometry_type="point; drop")

    assert name == "new_points"
    statements = [c[0][0] for c in _cursor(fake_conn).execute.call_args_list]
    assert any("geometry(POINTDROP, 4326)" in s for s in statements)
    assert any("USING GIST" in s for s in statements)


def test_list_tables(fake_conn):
    _cursor(fake_conn).fetchall.return_value = [("public", "roads", "LINESTRING", 3006, 2)]
    tables = GeometryStore("dbname=test").list_tables()
    assert tables[0].name == "roads"
    assert tables[0].srid == 3006


def test_schema_is_sanitized(fake_conn):
    store = GeometryStore("dbname=test", schema='My"Schema')
    assert store.schema == "my_schema"

    store.drop_table("points")
    statement = _cursor(fake_conn).execute.call_args[0][0]
    assert '"my_schema"."points"' in statement
