"""
FastAPI REST API around the EWKB codec.

Provides endpoints for:
- Decoding column values (hex EWKB, EWKT or WKT)
- Encoding WKT to hex EWKB
- Reading geometry tables from PostGIS (when a database is configured)
"""

from typing import Optional

try:
    from fastapi import FastAPI, HTTPException, Query
    from fastapi.middleware.cors import CORSMiddleware
    from pydantic import BaseModel
    HAS_FASTAPI = True
except ImportError:
    HAS_FASTAPI = False

from ..config import CodecConfig
from ..db.column import GeometryParseError, geom_from_string
from ..geometry import Geometry
from ..shapes import from_wkt, to_ewkt
from ..wire import WireValueAdapter
from ..wkb.cursor import ByteOrder
from ..wkb.srid import set_srid_recurse


# Pydantic models for API requests and responses
if HAS_FASTAPI:

    class DecodeRequest(BaseModel):
        value: str

    class GeometryInfo(BaseModel):
        geometry_type: str
        srid: int
        has_z: bool
        ewkt: str
        hex: str

    class EncodeRequest(BaseModel):
        wkt: str
        srid: int = 0
        byte_order: Optional[str] = None

    class EncodeResult(BaseModel):
        hex: str
        byte_order: str

    class TableSummary(BaseModel):
        name: str
        geometry_type: str
        srid: int
        coord_dimension: int

    class StoredRow(BaseModel):
        fid: int
        geometry: Optional[GeometryInfo] = None


def create_app(
    config: Optional[CodecConfig] = None,
    db_connection: Optional[str] = None,
    schema: str = "public"
) -> "FastAPI":
    """
    Create the FastAPI application.

    Args:
        config: Codec settings (defaults from environment variables)
        db_connection: PostgreSQL connection string; table endpoints
            answer 503 without one
        schema: Schema name for PostGIS tables

    Returns:
        Configured FastAPI app
    """
    if not HAS_FASTAPI:
        raise ImportError(
            "FastAPI is required for the API server. "
            "Install with: pip install fastapi uvicorn"
        )

    config = config or CodecConfig.from_env()
    adapter = WireValueAdapter(config)

    app = FastAPI(
        title="pg-geometry API",
        description="Decode and encode PostGIS EWKB geometry values",
        version="0.1.0"
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store config in app state
    app.state.config = config
    app.state.db_connection = db_connection
    app.state.schema = schema

    def describe(geom: Geometry) -> GeometryInfo:
        return GeometryInfo(
            geometry_type=geom.geom_type,
            srid=geom.srid,
            has_z=geom.has_z,
            ewkt=to_ewkt(geom),
            hex=adapter.to_hex(geom)
        )

    def get_store():
        if not db_connection:
            raise HTTPException(status_code=503, detail="No database configured")
        from ..db.store import GeometryStore
        return GeometryStore(db_connection, schema=schema, config=config)

    # ==================== Health ====================

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "byte_order": config.byte_order.name.lower(),
            "max_depth": config.max_depth,
            "database": "configured" if db_connection else "none"
        }

    # ==================== Codec ====================

    @app.post("/api/decode", response_model=GeometryInfo)
    def decode_value(request: DecodeRequest):
        """Decode a hex EWKB, EWKT or WKT column value."""
        try:
            geom = geom_from_string(request.value, adapter)
        except GeometryParseError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return describe(geom)

    @app.post("/api/encode", response_model=EncodeResult)
    def encode_value(request: EncodeRequest):
        """Encode WKT (plus SRID) to hex EWKB."""
        try:
            byte_order = ByteOrder.from_name(request.byte_order) if request.byte_order else config.byte_order
            geom = from_wkt(request.wkt)
        except Exception as e:
            raise HTTPException(status_code=422, detail=str(e))
        set_srid_recurse(geom, request.srid)

        encoder = adapter if byte_order is adapter.byte_order else WireValueAdapter(
            CodecConfig(
                max_depth=config.max_depth,
                byte_order=byte_order,
                uppercase_hex=config.uppercase_hex
            )
        )
        try:
            hex_value = encoder.to_hex(geom)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return EncodeResult(hex=hex_value, byte_order=byte_order.name.lower())

    # ==================== Tables ====================

    @app.get("/api/tables", response_model=list[TableSummary])
    def list_tables():
        """List geometry tables in the schema."""
        with get_store() as store:
            return [
                TableSummary(
                    name=t.name,
                    geometry_type=t.geometry_type,
                    srid=t.srid,
                    coord_dimension=t.coord_dimension
                )
                for t in store.list_tables()
            ]

    @app.get("/api/tables/{table_name}", response_model=list[StoredRow])
    def read_table(
        table_name: str,
        limit: int = Query(100, ge=1, le=10000),
        offset: int = Query(0, ge=0)
    ):
        """Read decoded geometries from a table."""
        with get_store() as store:
            try:
                return [
                    StoredRow(
                        fid=row.fid,
                        geometry=describe(row.geometry) if row.geometry is not None else None
                    )
                    for row in store.fetch(table_name, limit=limit, offset=offset)
                ]
            except GeometryParseError as e:
                raise HTTPException(status_code=500, detail=str(e))

    return app


def run_server(
    config: Optional[CodecConfig] = None,
    db_connection: Optional[str] = None,
    schema: str = "public",
    host: str = "127.0.0.1",
    port: int = 8000
):
    """
    Run the API server.

    Args:
        config: Codec settings
        db_connection: PostgreSQL connection string
        schema: Schema name for PostGIS tables
        host: Host to bind to
        port: Port to listen on
    """
    try:
        import uvicorn
    except ImportError:
        raise ImportError(
            "uvicorn is required to run the server. "
            "Install with: pip install uvicorn"
        )

    app = create_app(config, db_connection, schema)
    uvicorn.run(app, host=host, port=port)
