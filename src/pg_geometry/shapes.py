"""
Bridge between the wire model and shapely.

shapely supplies WKT parsing and the Euclidean operations (area,
intersection, ...); the wire model supplies per-node SRIDs and the EWKB
codec. Conversions copy coordinates and never share state.
"""

import shapely.geometry as sg
import shapely.wkt

from .geometry import (
    Geometry,
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)


def to_shapely(geom: Geometry):
    """
    Convert a model geometry to the matching shapely geometry.

    SRIDs are not carried over; shapely geometries have no per-node SRID.
    """
    if isinstance(geom, Point):
        if geom.is_empty:
            return sg.Point()
        return sg.Point(tuple(geom.coordinate[:3 if geom.has_z else 2]))
    elif isinstance(geom, LinearRing):
        return sg.LinearRing(_coords(geom))
    elif isinstance(geom, LineString):
        return sg.LineString(_coords(geom))
    elif isinstance(geom, Polygon):
        if geom.exterior is None:
            return sg.Polygon()
        return sg.Polygon(_coords(geom.exterior), [_coords(r) for r in geom.interiors])
    elif isinstance(geom, MultiPoint):
        return sg.MultiPoint([to_shapely(p) for p in geom.geoms])
    elif isinstance(geom, MultiLineString):
        return sg.MultiLineString([to_shapely(l) for l in geom.geoms])
    elif isinstance(geom, MultiPolygon):
        return sg.MultiPolygon([to_shapely(p) for p in geom.geoms])
    elif isinstance(geom, GeometryCollection):
        return sg.GeometryCollection([to_shapely(g) for g in geom.geoms])
    raise TypeError(f"Not a geometry: {type(geom).__name__}")


def _coords(line: LineString) -> list[tuple[float, ...]]:
    width = 3 if line.has_z else 2
    return [tuple(c[:width]) for c in line.coordinates]


def from_shapely(shape, srid: int = 0) -> Geometry:
    """
    Convert a shapely geometry to the wire model.

    Args:
        shape: Any shapely geometry
        srid: SRID stamped on every node that is created

    Returns:
        The model geometry

    Raises:
        ValueError: For an unsupported geometry type
    """
    geom_type = shape.geom_type

    if geom_type == "Point":
        if shape.is_empty:
            return Point(srid=srid)
        return Point(shape.coords[0], srid=srid)

    elif geom_type == "LineString":
        return LineString(tuple(shape.coords), srid=srid)

    elif geom_type == "LinearRing":
        return LinearRing(tuple(shape.coords), srid=srid)

    elif geom_type == "Polygon":
        if shape.is_empty:
            return Polygon(srid=srid)
        shell = LinearRing(tuple(shape.exterior.coords), srid=srid)
        holes = tuple(LinearRing(tuple(r.coords), srid=srid) for r in shape.interiors)
        return Polygon(shell, holes, srid=srid)

    elif geom_type == "MultiPoint":
        return MultiPoint(tuple(from_shapely(p, srid) for p in shape.geoms), srid=srid)

    elif geom_type == "MultiLineString":
        return MultiLineString(tuple(from_shapely(l, srid) for l in shape.geoms), srid=srid)

    elif geom_type == "MultiPolygon":
        return MultiPolygon(tuple(from_shapely(p, srid) for p in shape.geoms), srid=srid)

    elif geom_type == "GeometryCollection":
        return GeometryCollection(tuple(from_shapely(g, srid) for g in shape.geoms), srid=srid)

    raise ValueError(f"Unsupported geometry type: {geom_type}")


def from_wkt(wkt: str, srid: int = 0) -> Geometry:
    """Parse WKT with shapely and convert it to the wire model."""
    return from_shapely(shapely.wkt.loads(wkt), srid)


def to_wkt(geom: Geometry) -> str:
    return to_shapely(geom).wkt


def to_ewkt(geom: Geometry) -> str:
    """WKT with a "SRID=n;" prefix when the geometry has a SRID."""
    wkt = to_wkt(geom)
    if geom.srid:
        return f"SRID={geom.srid};{wkt}"
    return wkt
