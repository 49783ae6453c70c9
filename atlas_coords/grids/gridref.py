"""
British, Irish and Channel Islands grid references.

A reference is a 100 km square prefix followed by digits and an
optional suffix. Its precision is the size of the square it names:

    SO            100 km
    SO12          10 km (hectad)
    SO12NE        5 km (quadrant)
    SO12A         2 km (tetrad, letters A-Z without O)
    SO1234        1 km (monad)
    SO123456      100 m
    SO12345678    10 m
    SO1234567890  1 m

Prefixes are two letters on the British National Grid (gb), one
letter on the Irish Grid (ir) and WA / WV for the Channel Islands
(ci, UTM zone 30N).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
import logging
import math
import re

from ..config import CIRCLE_SEGMENTS
from ..context import ProjectionContext, default_context
from ..errors import GridReferenceError

logger = logging.getLogger(__name__)

# Map region codes
REGIONS = ('gb', 'ir', 'ci', 'wg')

# 500 km squares of the British National Grid: letter -> (easting, northing)
_GB_500K = {
    'S': (0, 0),
    'T': (500000, 0),
    'N': (0, 500000),
    'O': (500000, 500000),
    'H': (0, 1000000),
    'J': (500000, 1000000),
}

# 5x5 letter grid, A at the top left, no I
_LETTER_GRID = 'ABCDEFGHJKLMNOPQRSTUVWXYZ'

# Channel Islands 100 km squares in UTM 30N
_CI_100K = {
    'WA': (500000, 5500000),
    'WV': (500000, 5400000),
}

# Tetrad letters, numbered up the columns from the south-west
_TETRAD_LETTERS = 'ABCDEFGHIJKLMNPQRSTUVWXYZ'

_QUADRANTS = {
    'SW': (0, 0),
    'NW': (0, 5000),
    'SE': (5000, 0),
    'NE': (5000, 5000),
}

# Precision ladder, in order of precedence
_PATTERNS: Tuple[Tuple[int, re.Pattern], ...] = (
    (100000, re.compile(r'^[A-Z]{1,2}$')),
    (10000, re.compile(r'^[A-Z]{1,2}\d{2}$')),
    (5000, re.compile(r'^[A-Z]{1,2}\d{2}[NS][EW]$')),
    (2000, re.compile(r'^[A-Z]{1,2}\d{2}[A-NP-Z]$')),
    (1000, re.compile(r'^[A-Z]{1,2}\d{4}$')),
    (100, re.compile(r'^[A-Z]{1,2}\d{6}$')),
    (10, re.compile(r'^[A-Z]{1,2}\d{8}$')),
    (1, re.compile(r'^[A-Z]{1,2}\d{10}$')),
)

SHAPES = ('square', 'circle', 'triangle-up', 'triangle-down', 'diamond', 'cross')


@dataclass(frozen=True, slots=True)
class GridReferenceInfo:
    """Result of checking a grid reference."""
    precision: int
    region: str
    prefix: str


@dataclass(frozen=True, slots=True)
class GridReference:
    """
    A parsed grid reference.

    x, y are the south-west corner of the square in the region's own
    coordinates (meters).
    """
    text: str
    precision: int
    region: str
    prefix: str
    x: float
    y: float

    @property
    def centroid(self) -> Tuple[float, float]:
        half = self.precision / 2
        return (self.x + half, self.y + half)

    @property
    def info(self) -> GridReferenceInfo:
        return GridReferenceInfo(self.precision, self.region, self.prefix)


@dataclass(frozen=True, slots=True)
class Centroid:
    """Centre of a grid square in a region's coordinates."""
    centroid: Tuple[float, float]
    proj: str


# =============================================================================
# PREFIXES
# =============================================================================

def _clean(text: str) -> str:
    if not isinstance(text, str):
        raise GridReferenceError(f"{text!r} is not a recognized grid reference")
    return text.replace(' ', '').upper()


def _prefix_origin(prefix: str) -> Optional[Tuple[str, float, float]]:
    """Region and south-west corner of a 100 km square, or None."""
    if prefix in _CI_100K:
        x, y = _CI_100K[prefix]
        return 'ci', x, y

    if len(prefix) == 1:
        k = _LETTER_GRID.find(prefix)
        if k < 0:
            return None
        return 'ir', (k % 5) * 100000, (4 - k // 5) * 100000

    if len(prefix) == 2 and prefix[0] in _GB_500K:
        k = _LETTER_GRID.find(prefix[1])
        if k < 0:
            return None
        x0, y0 = _GB_500K[prefix[0]]
        return 'gb', x0 + (k % 5) * 100000, y0 + (4 - k // 5) * 100000

    return None


# =============================================================================
# CHECK / PARSE
# =============================================================================

def check_grid_reference(text: str) -> GridReferenceInfo:
    """
    Validate a grid reference.

    Args:
        text: Reference such as "SO12NE" (case and spaces ignored)

    Returns:
        GridReferenceInfo(precision, region, prefix)

    Raises:
        GridReferenceError: Not a recognized reference or unknown prefix
    """
    return parse_grid_reference(text).info


def parse_grid_reference(text: str) -> GridReference:
    """
    Parse a grid reference into its square.

    Raises:
        GridReferenceError: Not a recognized reference or unknown prefix
    """
    gr = _clean(text)

    precision = None
    for size, pattern in _PATTERNS:
        if pattern.match(gr):
            precision = size
            break
    if precision is None:
        raise GridReferenceError(f"{text!r} is not a recognized grid reference")

    match = re.match(r'^[A-Z]+', gr)
    prefix = match.group(0)
    rest = gr[len(prefix):]

    origin = _prefix_origin(prefix)
    if origin is None:
        raise GridReferenceError(
            f"{text!r} is not a recognized grid reference (unknown prefix {prefix!r})"
        )
    region, x, y = origin

    if precision == 5000:
        digits, suffix = rest[:2], rest[2:]
        qx, qy = _QUADRANTS[suffix]
        x += int(digits[0]) * 10000 + qx
        y += int(digits[1]) * 10000 + qy
    elif precision == 2000:
        digits, suffix = rest[:2], rest[2:]
        i = _TETRAD_LETTERS.index(suffix)
        x += int(digits[0]) * 10000 + (i // 5) * 2000
        y += int(digits[1]) * 10000 + (i % 5) * 2000
    elif rest:
        half = len(rest) // 2
        unit = 10 ** (5 - half)
        x += int(rest[:half]) * unit
        y += int(rest[half:]) * unit

    return GridReference(
        text=gr, precision=precision, region=region, prefix=prefix, x=float(x), y=float(y)
    )


# =============================================================================
# CENTROIDS AND POLYGONS
# =============================================================================

def _region_transformer(
    source: str,
    target: Optional[str],
    context: Optional[ProjectionContext]
):
    if target is None or target == source:
        return None
    if target not in REGIONS:
        raise ValueError(f"Unknown region {target!r}; expected one of {REGIONS}")
    if context is None:
        context = default_context()

    def move(x: float, y: float) -> Tuple[float, float]:
        out = context.transform(source, target, [x, y])
        return (out[0], out[1])

    return move


def centroid_of(
    text: str,
    target_region: Optional[str] = None,
    context: Optional[ProjectionContext] = None
) -> Centroid:
    """
    Centre of a grid square.

    Args:
        text: Grid reference
        target_region: "gb", "ir", "ci" or "wg" (lon/lat); default is
            the reference's own region
        context: ProjectionContext for the reprojection (default:
            process-wide)

    Returns:
        Centroid(centroid=(x, y), proj=region)

    Raises:
        GridReferenceError: Not a recognized reference
    """
    gr = parse_grid_reference(text)
    cx, cy = gr.centroid
    move = _region_transformer(gr.region, target_region, context)
    if move is None:
        return Centroid((cx, cy), gr.region)
    return Centroid(move(cx, cy), target_region)


def _outline(shape: str, cx: float, cy: float, h: float) -> List[Tuple[float, float]]:
    if shape == 'square':
        return [(cx - h, cy - h), (cx - h, cy + h), (cx + h, cy + h), (cx + h, cy - h)]
    if shape == 'triangle-up':
        return [(cx - h, cy - h), (cx, cy + h), (cx + h, cy - h)]
    if shape == 'triangle-down':
        return [(cx - h, cy + h), (cx + h, cy + h), (cx, cy - h)]
    if shape == 'diamond':
        return [(cx, cy - h), (cx - h, cy), (cx, cy + h), (cx + h, cy)]
    if shape == 'circle':
        step = 2 * math.pi / CIRCLE_SEGMENTS
        return [
            (cx + h * math.cos(i * step), cy + h * math.sin(i * step))
            for i in range(CIRCLE_SEGMENTS)
        ]
    if shape == 'cross':
        w = h / 3
        return [
            (cx - w, cy + h), (cx + w, cy + h), (cx + w, cy + w), (cx + h, cy + w),
            (cx + h, cy - w), (cx + w, cy - w), (cx + w, cy - h), (cx - w, cy - h),
            (cx - w, cy - w), (cx - h, cy - w), (cx - h, cy + w), (cx - w, cy + w),
        ]
    raise ValueError(f"Unknown shape {shape!r}; expected one of {SHAPES}")


def grid_reference_to_polygon(
    text: str,
    target_region: Optional[str] = None,
    shape: str = 'square',
    scale: float = 1.0,
    context: Optional[ProjectionContext] = None
) -> Dict[str, Any]:
    """
    GeoJSON polygon outlining a grid square.

    The outline is built in the reference's own region around the
    square's centre, with half-size precision / 2 * scale, then each
    vertex is reprojected into target_region.

    Args:
        text: Grid reference
        target_region: Output region (default: the reference's own)
        shape: One of SHAPES
        scale: Size relative to the grid square

    Returns:
        {"type": "Polygon", "coordinates": [ring]} with a closed ring

    Raises:
        GridReferenceError: Not a recognized reference
        ValueError: Unknown shape or region
    """
    gr = parse_grid_reference(text)
    cx, cy = gr.centroid
    vertices = _outline(shape, cx, cy, gr.precision / 2 * scale)

    move = _region_transformer(gr.region, target_region, context)
    if move is not None:
        vertices = [move(x, y) for x, y in vertices]

    ring: List[List[float]] = [[x, y] for x, y in vertices]
    ring.append(list(ring[0]))
    return {'type': 'Polygon', 'coordinates': [ring]}

