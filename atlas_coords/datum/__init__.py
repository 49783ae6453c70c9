"""
Datums: resolution from definitions, geocentric conversion, Helmert
and NTv2 grid shifts.
"""

from .geocentric import (
    geodetic_to_geocentric,
    geocentric_to_geodetic,
    geocentric_to_wgs84,
    geocentric_from_wgs84,
)
from .ntv2 import (
    NTv2Grid,
    NTv2Header,
    NTv2Subgrid,
    GridRegistry,
    load_ntv2,
    parse_nadgrids,
    apply_grid_shift,
)
from .resolve import build_datum, resolve_params
from .transform import compare_datums, datum_transform

__all__ = [
    'geodetic_to_geocentric',
    'geocentric_to_geodetic',
    'geocentric_to_wgs84',
    'geocentric_from_wgs84',
    'NTv2Grid',
    'NTv2Header',
    'NTv2Subgrid',
    'GridRegistry',
    'load_ntv2',
    'parse_nadgrids',
    'apply_grid_shift',
    'build_datum',
    'resolve_params',
    'compare_datums',
    'datum_transform',
]
