"""
Command line tool for PostGIS EWKB values.

Usage:
    pg-geometry decode 0101000000000000000000F03F0000000000000040
    pg-geometry encode "POINT (1 2)" --srid 4326 --byte-order xdr
    pg-geometry serve --port 8000 --db "postgresql://localhost/gis"
"""

import argparse
import logging
import os
import sys
from typing import Optional

from .config import CodecConfig
from .db.column import GeometryParseError, geom_from_string
from .shapes import from_wkt, to_ewkt
from .wire import WireValueAdapter
from .wkb.cursor import ByteOrder
from .wkb.srid import set_srid_recurse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pg-geometry",
        description="Decode and encode PostGIS EWKB geometry values"
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("PG_GEOMETRY_LOG_LEVEL", "WARNING"),
        help="Logging level (default: WARNING, or PG_GEOMETRY_LOG_LEVEL)"
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum collection nesting depth (default: PG_GEOMETRY_MAX_DEPTH or 32)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    decode_parser = subparsers.add_parser("decode", help="Decode a hex EWKB, EWKT or WKT value")
    decode_parser.add_argument("value", help="Column value to decode")

    encode_parser = subparsers.add_parser("encode", help="Encode WKT to hex EWKB")
    encode_parser.add_argument("wkt", help="Geometry as WKT")
    encode_parser.add_argument(
        "--srid",
        type=int,
        default=0,
        help="SRID to set on the geometry (default: 0)"
    )
    encode_parser.add_argument(
        "--byte-order",
        choices=["ndr", "xdr"],
        default=None,
        help="Output byte order (default: PG_GEOMETRY_BYTE_ORDER or ndr)"
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "-p", "--port",
        type=int,
        default=8000,
        help="Port to listen on (default: 8000)"
    )
    serve_parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="PostgreSQL connection string (or set DATABASE_URL env var)"
    )
    serve_parser.add_argument(
        "--schema",
        type=str,
        default=os.environ.get("DB_SCHEMA", "public"),
        help="PostGIS schema name (default: public, or DB_SCHEMA)"
    )
    return parser


def _load_config(args) -> CodecConfig:
    config = CodecConfig.from_env()
    byte_order = getattr(args, "byte_order", None)
    return CodecConfig(
        max_depth=args.max_depth if args.max_depth is not None else config.max_depth,
        byte_order=ByteOrder.from_name(byte_order) if byte_order else config.byte_order,
        uppercase_hex=config.uppercase_hex
    )


def cmd_decode(args, config: CodecConfig) -> int:
    adapter = WireValueAdapter(config)
    geom = geom_from_string(args.value, adapter)
    print(f"Type:   {geom.geom_type}")
    print(f"SRID:   {geom.srid}")
    print(f"Has Z:  {geom.has_z}")
    print(f"EWKT:   {to_ewkt(geom)}")
    return 0


def cmd_encode(args, config: CodecConfig) -> int:
    geom = from_wkt(args.wkt)
    set_srid_recurse(geom, args.srid)
    print(WireValueAdapter(config).to_hex(geom))
    return 0


def cmd_serve(args, config: CodecConfig) -> int:
    from .serving.api import run_server

    db_connection = args.db or os.environ.get("DATABASE_URL")

    print("pg-geometry API Server")
    print("=" * 40)
    print(f"API:        http://{args.host}:{args.port}/api/decode")
    print(f"Docs:       http://{args.host}:{args.port}/docs")
    print(f"Database:   {'configured' if db_connection else 'none'}")
    print(f"Schema:     {args.schema}")
    print()
    print("Press Ctrl+C to stop")
    print()

    run_server(
        config=config,
        db_connection=db_connection,
        schema=args.schema,
        host=args.host,
        port=args.port
    )
    return 0


COMMANDS = {
    "decode": cmd_decode,
    "encode": cmd_encode,
    "serve": cmd_serve,
}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        config = _load_config(args)
        return COMMANDS[args.command](args, config)
    except GeometryParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ImportError as e:
        print(f"Error: Missing dependency - {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nShutting down...")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
