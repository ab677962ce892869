"""
Geometry column values.

PostGIS returns geometry columns as hex EWKB; older servers and hand
written SQL may hand over EWKT ("SRID=4326;POINT(1 2)") or plain WKT.
PostGISGeometry accepts all three and always writes hex EWKB back.
"""

import logging
from typing import Optional

from ..config import CodecConfig
from ..geometry import Geometry
from ..shapes import from_wkt, to_ewkt
from ..wire import WireValueAdapter
from ..wkb.srid import set_srid_recurse

logger = logging.getLogger(__name__)

_default_adapter = WireValueAdapter()


class GeometryParseError(ValueError):
    """A column value could not be turned into a geometry."""


def geom_from_string(value: str, adapter: Optional[WireValueAdapter] = None) -> Geometry:
    """
    Parse a geometry column value.

    A value starting with "00" or "01" (the byte order marker of hex
    EWKB) goes to the EWKB decoder. Anything else is read as WKT with an
    optional "SRID=<int>;" prefix; the SRID (0 when absent) is then set
    on every node of the parsed geometry.

    Args:
        value: Column text
        adapter: Codec to use (defaults to the library defaults)

    Returns:
        The parsed geometry

    Raises:
        GeometryParseError: If the value cannot be parsed
    """
    adapter = adapter or _default_adapter
    try:
        value = value.strip()
        if value.startswith("00") or value.startswith("01"):
            return adapter.from_hex(value)

        srid = 0
        if value.startswith("SRID="):
            prefix, sep, wkt = value.partition(";")
            if not sep:
                raise ValueError(f"Missing ';' after SRID prefix: {prefix!r}")
            srid = int(prefix[5:])
            value = wkt.strip()

        geom = from_wkt(value)
        set_srid_recurse(geom, srid)
        return geom
    except Exception as e:
        logger.debug("Failed to parse geometry column value %.60r", value, exc_info=True)
        raise GeometryParseError(f"Error parsing geometry value: {e}") from e


class PostGISGeometry:
    """
    Wrapper for reading and writing geometry column values.

    Holds a model geometry; `value` is the hex EWKB text sent to the
    database and str() gives EWKT.
    """

    def __init__(self, geom: Optional[Geometry] = None, adapter: Optional[WireValueAdapter] = None):
        self.geom = geom
        self._adapter = adapter or _default_adapter

    @classmethod
    def from_value(cls, value: str, config: Optional[CodecConfig] = None) -> "PostGISGeometry":
        """Parse a column value (hex EWKB, EWKT or WKT)."""
        adapter = WireValueAdapter(config) if config else _default_adapter
        return cls(geom_from_string(value, adapter), adapter)

    @property
    def value(self) -> Optional[str]:
        if self.geom is None:
            return None
        return self._adapter.to_hex(self.geom)

    def __str__(self) -> str:
        if self.geom is None:
            return ""
        return to_ewkt(self.geom)

    def __repr__(self) -> str:
        return f"PostGISGeometry({self})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PostGISGeometry):
            return NotImplemented
        return self.geom == other.geom

    def __hash__(self):
        return hash(self.value)
