"""
Data models for Atlas Coords.
"""

from .geometry import Point, Bounds, NAN_POINT
from .datum import Ellipsoid, DatumDefinition, Datum, DatumType, GridRef
from .params import ProjParams

__all__ = [
    'Point', 'Bounds', 'NAN_POINT',
    'Ellipsoid', 'DatumDefinition', 'Datum', 'DatumType', 'GridRef',
    'ProjParams',
]
