"""
Core geometry types for Atlas Coords.

Provides Point and Bounds, the value types that flow through the
projection engine and the image-space transform.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence
import math


@dataclass(frozen=True, slots=True)
class Point:
    """
    A coordinate in whatever space the caller is working in.

    Geodetic points carry longitude in x and latitude in y (radians
    inside the engine, degrees at the public boundary). Projected
    points carry easting/northing in x/y.
    """
    x: float
    y: float
    z: float = 0.0
    m: Optional[float] = None

    def with_xy(self, x: float, y: float) -> 'Point':
        """Return a copy with new x/y, keeping z and m."""
        return replace(self, x=x, y=y)

    @property
    def is_finite(self) -> bool:
        """True if both x and y are finite numbers."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    @staticmethod
    def from_sequence(coords: Sequence[float]) -> 'Point':
        """Create a point from [x, y], [x, y, z] or [x, y, z, m]."""
        if len(coords) < 2:
            raise ValueError(f"Coordinate needs at least 2 values, got {len(coords)}")
        z = coords[2] if len(coords) > 2 and coords[2] is not None else 0.0
        m = coords[3] if len(coords) > 3 else None
        return Point(float(coords[0]), float(coords[1]), float(z), m)


NAN_POINT = Point(math.nan, math.nan)


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned rectangle in world coordinates."""
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    @property
    def width(self) -> float:
        """Width in X direction."""
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        """Height in Y direction."""
        return self.ymax - self.ymin

    def contains(self, x: float, y: float) -> bool:
        """Check if a point is inside the bounds (inclusive)."""
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax

    def validate(self) -> None:
        """Raise ValueError unless xmax > xmin and ymax > ymin."""
        if not self.xmax > self.xmin:
            raise ValueError(f"Bounds xmax ({self.xmax}) must exceed xmin ({self.xmin})")
        if not self.ymax > self.ymin:
            raise ValueError(f"Bounds ymax ({self.ymax}) must exceed ymin ({self.ymin})")

    def lerp(self, other: 'Bounds', t: float) -> 'Bounds':
        """Linearly interpolate every field towards other."""
        return Bounds(
            _lerp(self.xmin, other.xmin, t),
            _lerp(self.ymin, other.ymin, t),
            _lerp(self.xmax, other.xmax, t),
            _lerp(self.ymax, other.ymax, t),
        )

    @staticmethod
    def from_dict(d: dict) -> 'Bounds':
        """Create bounds from a {xmin, ymin, xmax, ymax} mapping."""
        return Bounds(
            float(d['xmin']), float(d['ymin']),
            float(d['xmax']), float(d['ymax'])
        )

    def to_list(self) -> List[float]:
        """[xmin, ymin, xmax, ymax]"""
        return [self.xmin, self.ymin, self.xmax, self.ymax]


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t
