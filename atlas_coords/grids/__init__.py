"""
Grid reference systems: British/Irish/Channel Islands national grid
references and MGRS.
"""

from .gridref import (
    GridReference,
    GridReferenceInfo,
    Centroid,
    SHAPES,
    REGIONS,
    check_grid_reference,
    parse_grid_reference,
    centroid_of,
    grid_reference_to_polygon,
)
from .mgrs import (
    UTMCoordinate,
    utm_zone,
    latitude_band,
    lat_lon_to_utm,
    utm_to_lat_lon,
    mgrs_encode,
    mgrs_decode,
    decode_utm,
    mgrs_to_point,
)

__all__ = [
    'GridReference',
    'GridReferenceInfo',
    'Centroid',
    'SHAPES',
    'REGIONS',
    'check_grid_reference',
    'parse_grid_reference',
    'centroid_of',
    'grid_reference_to_polygon',
    'UTMCoordinate',
    'utm_zone',
    'latitude_band',
    'lat_lon_to_utm',
    'utm_to_lat_lon',
    'mgrs_encode',
    'mgrs_decode',
    'decode_utm',
    'mgrs_to_point',
]
