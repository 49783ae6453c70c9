"""
Static registry tables.

These are the seed values; each ProjectionContext takes its own copy so
callers can add entries without affecting other contexts.
"""

from typing import Mapping, Optional, TypeVar

from .datums import DATUMS
from .definitions import (
    NAMED_DEFINITIONS,
    REGION_DEFINITIONS,
    OSGB_DEF,
    IRISH_GRID_DEF,
    ITM_DEF,
    LAEA_EUROPE_DEF,
    UTM30N_DEF,
    WGS84_DEF,
    WEB_MERCATOR_DEF,
)
from .ellipsoids import ELLIPSOIDS, WGS84_ELLIPSOID
from .units import PRIME_MERIDIANS, UNITS

T = TypeVar('T')


def _fold(key: str) -> str:
    return ''.join(c for c in key.lower() if c not in ' _-/')


def lookup(table: Mapping[str, T], key: Optional[str]) -> Optional[T]:
    """
    Find a table entry by exact key, then ignoring case, spaces,
    underscores, hyphens and slashes.
    """
    if not key:
        return None
    if key in table:
        return table[key]
    folded = _fold(key)
    for name, value in table.items():
        if _fold(name) == folded:
            return value
    return None


__all__ = [
    'DATUMS',
    'ELLIPSOIDS',
    'WGS84_ELLIPSOID',
    'NAMED_DEFINITIONS',
    'REGION_DEFINITIONS',
    'PRIME_MERIDIANS',
    'UNITS',
    'OSGB_DEF',
    'IRISH_GRID_DEF',
    'ITM_DEF',
    'LAEA_EUROPE_DEF',
    'UTM30N_DEF',
    'WGS84_DEF',
    'WEB_MERCATOR_DEF',
    'lookup',
]
