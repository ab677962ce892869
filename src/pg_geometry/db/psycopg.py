"""
psycopg2 integration for PostGIS geometry columns.

After register_geometry(conn), geometry (and geometry[]) columns come back
as model geometries, and model geometries or PostGISGeometry values can be
passed directly as query parameters.
"""

import logging
from typing import Optional

try:
    import psycopg2
    import psycopg2.extensions
    HAS_PSYCOPG2 = True
except ImportError:
    HAS_PSYCOPG2 = False

from ..config import CodecConfig
from ..geometry import KIND_CLASSES, Geometry, LinearRing
from ..wire import WireValueAdapter
from .column import GeometryParseError, PostGISGeometry, geom_from_string

logger = logging.getLogger(__name__)


def _require_psycopg2():
    if not HAS_PSYCOPG2:
        raise ImportError(
            "psycopg2 is required for database integration. "
            "Install with: pip install psycopg2-binary"
        )


class GeometryAdapter:
    """psycopg2 adapter quoting a geometry as '<hex ewkb>'::geometry."""

    def __init__(self, value, adapter: WireValueAdapter):
        self._value = value
        self._adapter = adapter

    def getquoted(self) -> bytes:
        geom = self._value.geom if isinstance(self._value, PostGISGeometry) else self._value
        if geom is None:
            return b"NULL"
        # hex digits only, nothing to escape
        return f"'{self._adapter.to_hex(geom)}'::geometry".encode("ascii")

    def __str__(self) -> str:
        return self.getquoted().decode("ascii")


def lookup_geometry_oids(conn_or_curs) -> tuple[int, int]:
    """
    Look up the OIDs of the geometry type and its array type.

    Args:
        conn_or_curs: psycopg2 connection or cursor

    Returns:
        (geometry_oid, geometry_array_oid)
    """
    sql = "SELECT 'geometry'::regtype::oid, 'geometry[]'::regtype::oid"
    if hasattr(conn_or_curs, "execute"):
        conn_or_curs.execute(sql)
        row = conn_or_curs.fetchone()
    else:
        with conn_or_curs.cursor() as cur:
            cur.execute(sql)
            row = cur.fetchone()
    return row[0], row[1]


def make_typecaster(adapter: WireValueAdapter):
    """Build the function psycopg2 calls with each geometry column value."""

    def cast_geometry(value: Optional[str], cur) -> Optional[Geometry]:
        if value is None:
            return None
        try:
            return geom_from_string(value, adapter)
        except GeometryParseError as e:
            raise psycopg2.DataError(str(e)) from e

    return cast_geometry


def register_geometry(
    conn_or_curs=None,
    oid: Optional[int] = None,
    array_oid: Optional[int] = None,
    config: Optional[CodecConfig] = None
):
    """
    Register geometry typecasters and adapters with psycopg2.

    Args:
        conn_or_curs: Connection or cursor to register on; None registers
            globally (then `oid` must be given)
        oid: OID of the geometry type, looked up when not given
        array_oid: OID of geometry[]; looked up together with `oid`
        config: Codec settings (byte order of values sent to the server)

    Returns:
        The registered psycopg2 type object
    """
    _require_psycopg2()

    if oid is None:
        if conn_or_curs is None:
            raise ValueError("Either a connection/cursor or the geometry oid is required")
        oid, array_oid = lookup_geometry_oids(conn_or_curs)

    adapter = WireValueAdapter(config)
    geometry_type = psycopg2.extensions.new_type((oid,), "GEOMETRY", make_typecaster(adapter))
    psycopg2.extensions.register_type(geometry_type, conn_or_curs)

    if array_oid is not None:
        array_type = psycopg2.extensions.new_array_type((array_oid,), "GEOMETRY[]", geometry_type)
        psycopg2.extensions.register_type(array_type, conn_or_curs)

    # adapters are global in psycopg2
    for cls in list(KIND_CLASSES.values()) + [LinearRing, PostGISGeometry]:
        psycopg2.extensions.register_adapter(cls, lambda value: GeometryAdapter(value, adapter))

    logger.debug("Registered geometry typecaster for oid %s (array oid %s)", oid, array_oid)
    return geometry_type
