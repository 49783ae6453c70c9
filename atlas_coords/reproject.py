"""
Point reprojection between two constructed projections.

reproject_point is the pipeline behind transform(): unproject the
source to geodetic radians, shift datums, project into the
destination. Coordinate shapes (Point, mapping, sequence) are handled
by reproject, which returns the same shape it was given.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging
import math

from .config import D2R, DEFAULT_CONFIG, EPSLN, HALF_PI, R2D, CoordsConfig
from .datum.ntv2 import GridRegistry
from .datum.transform import datum_transform
from .models.datum import DatumType
from .models.geometry import Point
from .projection.base import Projection

logger = logging.getLogger(__name__)

_SHIFTED = (DatumType.PARAM_3, DatumType.PARAM_7, DatumType.GRIDSHIFT)


# =============================================================================
# AXIS ORDER
# =============================================================================

def adjust_axis(axis: str, denormalize: bool, p: Point) -> Optional[Point]:
    """
    Reorder and flip axes between "enu" and a definition's axis order.

    Args:
        axis: Three letters from "ewnsud", e.g. "neu"
        denormalize: True to go from "enu" to axis, False for the reverse
        p: The point

    Returns:
        The adjusted point, or None for an unusable axis string
    """
    values = (p.x, p.y, p.z or 0.0)
    out: Dict[str, float] = {'x': p.x, 'y': p.y, 'z': p.z}
    for i, letter in enumerate(axis[:3]):
        v = values[i]
        if i == 0:
            target = 'x' if letter in 'ew' else 'y'
        elif i == 1:
            target = 'y' if letter in 'ns' else 'x'
        else:
            target = 'z'

        if letter in 'en':
            out[target] = v
        elif letter in 'ws':
            out[target] = -v
        elif letter == 'u':
            out['z'] = v
        elif letter == 'd':
            out['z'] = -v
        else:
            return None
    return Point(out['x'], out['y'], out['z'], p.m)


# =============================================================================
# PIPELINE
# =============================================================================

def _needs_wgs84_pivot(source: Projection, dest: Projection) -> bool:
    return ((source.datum.datum_type in _SHIFTED and dest.datum_code != 'WGS84')
            or (dest.datum.datum_type in _SHIFTED and source.datum_code != 'WGS84'))


def reproject_point(
    source: Projection,
    dest: Projection,
    p: Point,
    registry: Optional[GridRegistry] = None,
    config: CoordsConfig = DEFAULT_CONFIG,
    wgs84: Optional[Projection] = None
) -> Optional[Point]:
    """
    Move one point from source to destination coordinates.

    Geographic sides take and return degrees; projected sides use
    their own units (to_meter).

    Args:
        source: Projection of the input
        dest: Projection of the output
        p: Input point
        registry: Loaded NTv2 grids
        wgs84: Geographic WGS84 projection, used as the pivot when a
            shifted datum meets anything other than WGS84

    Returns:
        The output point, or None if any stage could not project it

    Raises:
        GridShiftError: A needed grid is missing or does not cover p
    """
    if wgs84 is not None and source is not wgs84 and _needs_wgs84_pivot(source, dest):
        p = reproject_point(source, wgs84, p, registry, config)
        if p is None:
            return None
        source = wgs84

    if config.enforce_axis and source.axis != 'enu':
        p = adjust_axis(source.axis, False, p)
        if p is None:
            return None

    if source.is_latlong:
        p = Point(p.x * D2R, p.y * D2R, p.z or 0.0, p.m)
    else:
        if source.to_meter:
            p = Point(p.x * source.to_meter, p.y * source.to_meter, p.z or 0.0, p.m)
        p = source.inverse(p)
        # Unprojectable, or a latitude beyond a pole
        if p is None or abs(p.y) > HALF_PI + EPSLN:
            return None

    if source.from_greenwich:
        p = p.with_xy(p.x + source.from_greenwich, p.y)

    p = datum_transform(source.datum, dest.datum, p, registry, config)

    if dest.from_greenwich:
        p = p.with_xy(p.x - dest.from_greenwich, p.y)

    if dest.is_latlong:
        p = Point(p.x * R2D, p.y * R2D, p.z or 0.0, p.m)
    else:
        p = dest.forward(p)
        if p is None:
            return None
        if dest.to_meter:
            p = p.with_xy(p.x / dest.to_meter, p.y / dest.to_meter)

    if config.enforce_axis and dest.axis != 'enu':
        p = adjust_axis(dest.axis, True, p)

    return p


# =============================================================================
# SHAPE HANDLING
# =============================================================================

def _safe_reproject(
    source: Projection,
    dest: Projection,
    p: Point,
    registry: Optional[GridRegistry],
    config: CoordsConfig,
    wgs84: Optional[Projection]
) -> Optional[Point]:
    if not p.is_finite:
        return None
    try:
        out = reproject_point(source, dest, p, registry, config, wgs84)
    except (ArithmeticError, ValueError) as exc:
        logger.debug(f"Point ({p.x}, {p.y}) failed {source!r} -> {dest!r}: {exc}")
        return None
    if out is None or not out.is_finite:
        return None
    return out


def reproject(
    source: Projection,
    dest: Projection,
    point: Any,
    registry: Optional[GridRegistry] = None,
    config: CoordsConfig = DEFAULT_CONFIG,
    wgs84: Optional[Projection] = None
) -> Any:
    """
    Reproject a coordinate, returning it in the shape it came in.

    Accepts a Point, a mapping with "x", "y" and optional "z", or a
    sequence [x, y, z, ...] whose trailing elements are copied
    through. A point that cannot be projected comes back with NaN x
    and y.

    Raises:
        ValueError: The coordinate is not one of the accepted shapes
        GridShiftError: A needed grid is missing or does not cover it
    """
    if isinstance(point, Point):
        out = _safe_reproject(source, dest, point, registry, config, wgs84)
        return out if out is not None else point.with_xy(math.nan, math.nan)

    if isinstance(point, Mapping):
        if 'x' not in point or 'y' not in point:
            raise ValueError(f"Coordinate mapping needs x and y, got {sorted(point)}")
        has_z = point.get('z') is not None
        p = Point(float(point['x']), float(point['y']),
                  float(point['z']) if has_z else 0.0, point.get('m'))
        out = _safe_reproject(source, dest, p, registry, config, wgs84)
        result = dict(point)
        if out is None:
            result['x'] = math.nan
            result['y'] = math.nan
            return result
        result['x'] = out.x
        result['y'] = out.y
        if has_z:
            result['z'] = out.z
        return result

    if isinstance(point, Sequence) and not isinstance(point, (str, bytes)):
        p = Point.from_sequence(point)
        out = _safe_reproject(source, dest, p, registry, config, wgs84)
        result: List[Any] = list(point)
        if out is None:
            result[0] = math.nan
            result[1] = math.nan
        else:
            result[0] = out.x
            result[1] = out.y
            if len(result) > 2 and result[2] is not None:
                result[2] = out.z
        return tuple(result) if isinstance(point, tuple) else result

    raise ValueError(f"Unsupported coordinate type: {type(point).__name__}")
