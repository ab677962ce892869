"""
In-memory geometry model exchanged with the EWKB codec.

Every node carries its own SRID (0 means unknown). Coordinates hold X, Y
and an optional Z; M ordinates are read from the wire and dropped.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Iterable, NamedTuple, Optional


class GeometryKind(IntEnum):
    """Geometry type codes as they appear in the low bits of a type word."""
    POINT = 1
    LINESTRING = 2
    POLYGON = 3
    MULTIPOINT = 4
    MULTILINESTRING = 5
    MULTIPOLYGON = 6
    GEOMETRYCOLLECTION = 7


class Coordinate(NamedTuple):
    x: float
    y: float
    z: Optional[float] = None

    @property
    def has_z(self) -> bool:
        return self.z is not None


def _as_coordinate(value) -> Coordinate:
    if isinstance(value, Coordinate):
        return value
    values = tuple(value)
    if len(values) not in (2, 3):
        raise ValueError(f"Coordinate needs 2 or 3 ordinates, got {len(values)}")
    return Coordinate(*(float(v) for v in values))


def _uniform_z(coords: tuple[Coordinate, ...], what: str) -> bool:
    """Return the shared has_z of `coords`, rejecting mixed dimensions."""
    if not coords:
        return False
    has_z = coords[0].has_z
    if any(c.has_z != has_z for c in coords):
        raise ValueError(f"{what} mixes 2D and 3D coordinates")
    return has_z


class Geometry:
    """Common interface of all geometry variants."""

    kind: ClassVar[GeometryKind]
    srid: int

    @property
    def geom_type(self) -> str:
        return type(self).__name__

    @property
    def has_z(self) -> bool:
        raise NotImplementedError

    @property
    def is_empty(self) -> bool:
        raise NotImplementedError


@dataclass(eq=True)
class Point(Geometry):
    """Point; `coordinate=None` is the empty point (NaN ordinates on the wire)."""
    kind: ClassVar[GeometryKind] = GeometryKind.POINT

    coordinate: Optional[Coordinate] = None
    srid: int = 0

    def __post_init__(self):
        if self.coordinate is not None:
            self.coordinate = _as_coordinate(self.coordinate)

    @property
    def x(self) -> Optional[float]:
        return None if self.coordinate is None else self.coordinate.x

    @property
    def y(self) -> Optional[float]:
        return None if self.coordinate is None else self.coordinate.y

    @property
    def z(self) -> Optional[float]:
        return None if self.coordinate is None else self.coordinate.z

    @property
    def has_z(self) -> bool:
        return self.coordinate is not None and self.coordinate.has_z

    @property
    def is_empty(self) -> bool:
        return self.coordinate is None


@dataclass(eq=True)
class LineString(Geometry):
    kind: ClassVar[GeometryKind] = GeometryKind.LINESTRING

    coordinates: tuple[Coordinate, ...] = ()
    srid: int = 0

    def __post_init__(self):
        self.coordinates = tuple(_as_coordinate(c) for c in self.coordinates)
        self._has_z = _uniform_z(self.coordinates, self.geom_type)

    @property
    def has_z(self) -> bool:
        return self._has_z

    @property
    def is_empty(self) -> bool:
        return not self.coordinates

    def __len__(self) -> int:
        return len(self.coordinates)


@dataclass(eq=True)
class LinearRing(LineString):
    """Closed coordinate sequence bounding a polygon or one of its holes."""

    # written on the wire as a LineString
    kind: ClassVar[GeometryKind] = GeometryKind.LINESTRING

    @property
    def is_closed(self) -> bool:
        return bool(self.coordinates) and self.coordinates[0] == self.coordinates[-1]


def _as_ring(value, srid: int) -> LinearRing:
    if isinstance(value, LinearRing):
        return value
    if isinstance(value, LineString):
        return LinearRing(value.coordinates, srid=value.srid)
    return LinearRing(tuple(value), srid=srid)


@dataclass(eq=True)
class Polygon(Geometry):
    """
    Polygon with one exterior ring and zero or more holes.

    `exterior=None` is the empty polygon, which has no holes either.
    Plain coordinate sequences are accepted for rings and become
    LinearRings stamped with the polygon's SRID.
    """
    kind: ClassVar[GeometryKind] = GeometryKind.POLYGON

    exterior: Optional[LinearRing] = None
    interiors: tuple[LinearRing, ...] = ()
    srid: int = 0

    def __post_init__(self):
        if self.exterior is not None:
            self.exterior = _as_ring(self.exterior, self.srid)
        self.interiors = tuple(_as_ring(r, self.srid) for r in self.interiors)

        if self.exterior is None:
            if self.interiors:
                raise ValueError("Polygon without exterior ring cannot have holes")
            return
        has_z = self.exterior.has_z
        for ring in self.interiors:
            if ring.coordinates and ring.has_z != has_z:
                raise ValueError("Polygon rings mix 2D and 3D coordinates")

    @property
    def rings(self) -> tuple[LinearRing, ...]:
        """All rings, exterior first, as they are laid out on the wire."""
        if self.exterior is None:
            return ()
        return (self.exterior,) + self.interiors

    @property
    def has_z(self) -> bool:
        return self.exterior is not None and self.exterior.has_z

    @property
    def is_empty(self) -> bool:
        return self.exterior is None or self.exterior.is_empty


@dataclass(eq=True)
class GeometryCollection(Geometry):
    kind: ClassVar[GeometryKind] = GeometryKind.GEOMETRYCOLLECTION
    element_type: ClassVar[type] = Geometry

    geoms: tuple[Geometry, ...] = field(default=())
    srid: int = 0

    def __post_init__(self):
        self.geoms = tuple(self.geoms)
        for geom in self.geoms:
            if not isinstance(geom, self.element_type):
                raise TypeError(
                    f"{self.geom_type} cannot contain {type(geom).__name__}"
                )

    @property
    def has_z(self) -> bool:
        return any(g.has_z for g in self.geoms)

    @property
    def is_empty(self) -> bool:
        return all(g.is_empty for g in self.geoms)

    def __len__(self) -> int:
        return len(self.geoms)

    def __iter__(self):
        return iter(self.geoms)


@dataclass(eq=True)
class MultiPoint(GeometryCollection):
    kind: ClassVar[GeometryKind] = GeometryKind.MULTIPOINT
    element_type: ClassVar[type] = Point


@dataclass(eq=True)
class MultiLineString(GeometryCollection):
    kind: ClassVar[GeometryKind] = GeometryKind.MULTILINESTRING
    element_type: ClassVar[type] = LineString


@dataclass(eq=True)
class MultiPolygon(GeometryCollection):
    kind: ClassVar[GeometryKind] = GeometryKind.MULTIPOLYGON
    element_type: ClassVar[type] = Polygon


# Concrete class built for each wire kind
KIND_CLASSES: dict[GeometryKind, type] = {
    GeometryKind.POINT: Point,
    GeometryKind.LINESTRING: LineString,
    GeometryKind.POLYGON: Polygon,
    GeometryKind.MULTIPOINT: MultiPoint,
    GeometryKind.MULTILINESTRING: MultiLineString,
    GeometryKind.MULTIPOLYGON: MultiPolygon,
    GeometryKind.GEOMETRYCOLLECTION: GeometryCollection,
}


def iter_coordinates(geom: Geometry) -> Iterable[Coordinate]:
    """Yield every coordinate of a geometry in wire order."""
    if isinstance(geom, Point):
        if geom.coordinate is not None:
            yield geom.coordinate
    elif isinstance(geom, LineString):
        yield from geom.coordinates
    elif isinstance(geom, Polygon):
        for ring in geom.rings:
            yield from ring.coordinates
    elif isinstance(geom, GeometryCollection):
        for part in geom.geoms:
            yield from iter_coordinates(part)
    else:
        raise TypeError(f"Not a geometry: {type(geom).__name__}")
