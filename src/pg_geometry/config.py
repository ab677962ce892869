"""
Codec configuration.

Values come from keyword arguments or from environment variables:

    PG_GEOMETRY_MAX_DEPTH    maximum collection nesting depth (default 32, at most 128)
    PG_GEOMETRY_BYTE_ORDER   output byte order, "ndr" or "xdr" (default ndr)
    PG_GEOMETRY_HEX_CASE     "upper" or "lower" hex output (default upper)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .wkb.cursor import ByteOrder
from .wkb.decoder import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT


@dataclass(frozen=True)
class CodecConfig:
    """Settings shared by the decoder, encoder and database integration."""
    max_depth: int = DEFAULT_MAX_DEPTH
    byte_order: ByteOrder = ByteOrder.NDR
    uppercase_hex: bool = True

    def __post_init__(self):
        if not 1 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {self.max_depth}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CodecConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            CodecConfig with defaults for unset variables

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        max_depth = DEFAULT_MAX_DEPTH
        raw_depth = env.get("PG_GEOMETRY_MAX_DEPTH")
        if raw_depth:
            try:
                max_depth = int(raw_depth)
            except ValueError:
                raise ValueError(f"PG_GEOMETRY_MAX_DEPTH must be an integer, got {raw_depth!r}") from None

        byte_order = ByteOrder.from_name(env.get("PG_GEOMETRY_BYTE_ORDER", "ndr"))

        hex_case = env.get("PG_GEOMETRY_HEX_CASE", "upper").strip().lower()
        if hex_case not in ("upper", "lower"):
            raise ValueError(f"PG_GEOMETRY_HEX_CASE must be 'upper' or 'lower', got {hex_case!r}")

        return cls(
            max_depth=max_depth,
            byte_order=byte_order,
            uppercase_hex=hex_case == "upper"
        )
