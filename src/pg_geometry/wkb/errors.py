"""
Errors raised while decoding or encoding EWKB values.

All of them are ValueError subclasses, so callers that only care about
"bad data" can keep catching ValueError.
"""

from typing import Optional


class WkbError(ValueError):
    """Base class for EWKB codec failures."""

    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} (at byte {position})"
        super().__init__(message)
        self.position = position


class MalformedEncoding(WkbError):
    """Invalid hex text, unknown byte-order marker or trailing bytes."""


class TruncatedInput(WkbError):
    """A read would go past the end of the available bytes."""


class EndianMismatch(WkbError):
    """A nested byte-order marker disagrees with the value's byte order."""


class UnknownGeometryType(WkbError):
    """The type word names a geometry kind the codec does not know."""

    def __init__(self, type_code: int, position: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message or f"Unknown geometry type: {type_code}", position)
        self.type_code = type_code


class InconsistentSrid(WkbError):
    """A nested SRID conflicts with the SRID inherited from its parent."""

    def __init__(self, inherited: int, found: int, position: Optional[int] = None):
        super().__init__(
            f"Inconsistent srids in complex geometry: {inherited}, {found}",
            position
        )
        self.inherited = inherited
        self.found = found


class NestingTooDeep(WkbError):
    """Collections are nested deeper than the configured limit."""

    def __init__(self, max_depth: int, position: Optional[int] = None):
        super().__init__(f"Geometry nesting exceeds maximum depth of {max_depth}", position)
        self.max_depth = max_depth
