# Database integration modules
from .column import GeometryParseError, PostGISGeometry, geom_from_string
from .psycopg import GeometryAdapter, register_geometry
from .store import GeometryStore, StoredGeometry, TableInfo

__all__ = [
    "GeometryParseError",
    "PostGISGeometry",
    "geom_from_string",
    "GeometryAdapter",
    "register_geometry",
    "GeometryStore",
    "StoredGeometry",
    "TableInfo",
]
