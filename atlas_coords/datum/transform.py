"""
Datum-to-datum transformation of geodetic points.

Points are shifted through WGS84: grid shifts are applied to geodetic
coordinates, Helmert shifts in geocentric space. Datums with an
unknown relation to WGS84 (NODATUM) are passed through untouched.
"""

from typing import Optional
import logging

from ..config import (
    DATUM_ES_TOLERANCE,
    DEFAULT_CONFIG,
    SRS_WGS84_ESQUARED,
    SRS_WGS84_SEMIMAJOR,
    SRS_WGS84_SEMIMINOR,
    CoordsConfig,
)
from ..models.datum import Datum, DatumType
from ..models.geometry import Point
from .geocentric import (
    geocentric_from_wgs84,
    geocentric_to_geodetic,
    geocentric_to_wgs84,
    geodetic_to_geocentric,
)
from .ntv2 import GridRegistry, apply_grid_shift

logger = logging.getLogger(__name__)


def compare_datums(source: Datum, dest: Datum) -> bool:
    """
    True if two datums are interchangeable.

    Same type, same semi-major axis, eccentricities within
    DATUM_ES_TOLERANCE, and the same Helmert parameters or grids.
    """
    if source.datum_type is not dest.datum_type:
        return False
    if source.a != dest.a or abs(source.es - dest.es) > DATUM_ES_TOLERANCE:
        return False
    if source.datum_type in (DatumType.PARAM_3, DatumType.PARAM_7):
        return tuple(source.params) == tuple(dest.params)
    if source.datum_type is DatumType.GRIDSHIFT:
        return tuple(g.name for g in source.grids) == tuple(g.name for g in dest.grids)
    return True


def _grid_shift(
    datum: Datum,
    registry: GridRegistry,
    inverse: bool,
    p: Point,
    config: CoordsConfig
) -> Point:
    lon, lat = apply_grid_shift(
        datum.grids,
        registry,
        inverse,
        p.x,
        p.y,
        max_iter=config.ntv2_inverse_max_iter,
        tolerance=config.ntv2_inverse_tolerance,
        strict=config.strict_ntv2_inverse,
    )
    return p.with_xy(lon, lat)


def datum_transform(
    source: Datum,
    dest: Datum,
    p: Point,
    registry: Optional[GridRegistry] = None,
    config: CoordsConfig = DEFAULT_CONFIG
) -> Point:
    """
    Move a geodetic point from one datum to another.

    Args:
        source: Datum of the input point
        dest: Datum of the output point
        p: Longitude in x, latitude in y (radians), height in z
        registry: Loaded NTv2 grids, needed for GRIDSHIFT datums

    Returns:
        The shifted point (the input itself when no shift applies)

    Raises:
        GridShiftError: A needed grid is missing or does not cover p
    """
    if compare_datums(source, dest):
        return p

    if source.datum_type is DatumType.NODATUM or dest.datum_type is DatumType.NODATUM:
        return p

    if registry is None:
        registry = GridRegistry()

    source_a, source_es = source.a, source.es
    if source.datum_type is DatumType.GRIDSHIFT:
        p = _grid_shift(source, registry, False, p, config)
        source_a = SRS_WGS84_SEMIMAJOR
        source_es = SRS_WGS84_ESQUARED

    dest_a, dest_b, dest_es = dest.a, dest.b, dest.es
    if dest.datum_type is DatumType.GRIDSHIFT:
        dest_a = SRS_WGS84_SEMIMAJOR
        dest_b = SRS_WGS84_SEMIMINOR
        dest_es = SRS_WGS84_ESQUARED

    if (source_es == dest_es and source_a == dest_a
            and not source.has_helmert and not dest.has_helmert):
        if dest.datum_type is DatumType.GRIDSHIFT:
            p = _grid_shift(dest, registry, True, p, config)
        return p

    p = geodetic_to_geocentric(p, source_es, source_a)
    if source.has_helmert:
        p = geocentric_to_wgs84(p, source.datum_type, source.params)
    if dest.has_helmert:
        p = geocentric_from_wgs84(p, dest.datum_type, dest.params)
    p = geocentric_to_geodetic(p, dest_es, dest_a, dest_b)

    if dest.datum_type is DatumType.GRIDSHIFT:
        p = _grid_shift(dest, registry, True, p, config)

    return p
