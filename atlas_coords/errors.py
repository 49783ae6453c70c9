"""
Exception types for Atlas Coords.

Per-point projection failures are not exceptions: projections return
None and transform() returns NaN coordinates. Everything here is a
definition or resource error that the caller must deal with.
"""

from typing import Optional, Sequence


class AtlasCoordsError(Exception):
    """Base class for all Atlas Coords errors."""
    pass


class DefinitionError(AtlasCoordsError, ValueError):
    """Raised when a projection definition cannot be parsed or resolved."""
    pass


class WktParseError(DefinitionError):
    """Raised when the WKT scanner meets a character it cannot handle."""

    def __init__(self, message: str, char: Optional[str] = None, position: int = -1):
        super().__init__(message)
        self.char = char
        self.position = position


class GridShiftError(AtlasCoordsError):
    """
    Raised when an NTv2 grid shift cannot be applied.

    Either a mandatory grid has not been loaded (grid_name is set) or
    the point lies outside every candidate grid (attempted and point
    are set).
    """

    def __init__(
        self,
        message: str,
        grid_name: Optional[str] = None,
        attempted: Sequence[str] = (),
        point: Optional[tuple] = None
    ):
        super().__init__(message)
        self.grid_name = grid_name
        self.attempted = list(attempted)
        self.point = point


class NTv2FormatError(AtlasCoordsError, ValueError):
    """Raised when an NTv2 buffer is truncated or malformed."""
    pass


class GridReferenceError(AtlasCoordsError, ValueError):
    """Raised for unrecognized national grid references."""
    pass


class MGRSError(AtlasCoordsError, ValueError):
    """Raised for invalid MGRS strings, UTM zones or latitude bands."""
    pass
