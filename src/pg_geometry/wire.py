"""
Entry points used by database wrappers to move geometries on and off the wire.
"""

from typing import Optional, Union

from .config import CodecConfig
from .geometry import Geometry
from .wkb.cursor import ByteOrder, ByteSource
from .wkb.decoder import WkbDecoder
from .wkb.encoder import WkbEncoder


class WireValueAdapter:
    """
    Pairs a decoder and an encoder built from one CodecConfig.

    Decoding always follows the byte order marker of the input; the
    configured byte order only selects what the encoder writes.
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        self.config = config or CodecConfig()
        self._decoder = WkbDecoder(max_depth=self.config.max_depth)
        self._encoder = WkbEncoder(
            byte_order=self.config.byte_order,
            uppercase=self.config.uppercase_hex
        )

    @property
    def byte_order(self) -> ByteOrder:
        return self._encoder.byte_order

    def from_hex(self, value: str) -> Geometry:
        return self._decoder.decode(value.strip())

    def from_bytes(self, value: Union[bytes, bytearray, memoryview]) -> Geometry:
        return self._decoder.decode(value)

    def from_value(self, value: ByteSource) -> Geometry:
        """Decode either hex text or raw bytes."""
        if isinstance(value, str):
            return self.from_hex(value)
        return self.from_bytes(value)

    def to_hex(self, geom: Geometry) -> str:
        return self._encoder.encode(geom)

    def to_bytes(self, geom: Geometry) -> bytes:
        return self._encoder.encode_bytes(geom)


_default_adapter = WireValueAdapter()


def decode(source: ByteSource) -> Geometry:
    """Decode hex text or bytes with the default settings."""
    return _default_adapter.from_value(source)


def encode(geom: Geometry, byte_order: ByteOrder = ByteOrder.NDR) -> str:
    """Encode to hex text, little endian unless told otherwise."""
    if byte_order is _default_adapter.byte_order:
        return _default_adapter.to_hex(geom)
    return WireValueAdapter(CodecConfig(byte_order=byte_order)).to_hex(geom)
