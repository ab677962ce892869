"""Recursive SRID assignment."""

from ..geometry import Geometry, GeometryCollection, Polygon


def set_srid_recurse(geom: Geometry, srid: int) -> None:
    """
    Set a SRID on a geometry and all of its sub-geometries.

    Collections are walked element by element; for a Polygon the exterior
    ring and every interior ring are stamped as well. This is the only
    operation that modifies a geometry after construction; it is meant for
    values built from a source without per-node SRIDs (such as WKT) so they
    satisfy the decoder's nested-SRID check after a round trip.

    Args:
        geom: Geometry to work on (modified in place)
        srid: SRID to set
    """
    geom.srid = srid
    if isinstance(geom, GeometryCollection):
        for part in geom.geoms:
            set_srid_recurse(part, srid)
    elif isinstance(geom, Polygon):
        for ring in geom.rings:
            ring.srid = srid
