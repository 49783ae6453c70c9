"""
Projection algorithms.

Each algorithm is a Projection subclass built from resolved
ProjParams; create_projection picks the class by name.
"""

from .base import Projection
from .kinds import ProjectionKind, create_projection, find_kind
from .transverse_mercator import utm_zone_for_longitude

__all__ = [
    'Projection',
    'ProjectionKind',
    'create_projection',
    'find_kind',
    'utm_zone_for_longitude',
]
