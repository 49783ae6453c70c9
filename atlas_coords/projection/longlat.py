"""
Geographic and geocentric pseudo-projections.
"""

from typing import Optional

from ..datum.geocentric import geocentric_to_geodetic, geodetic_to_geocentric
from ..models.geometry import Point
from .base import Projection


class LongLat(Projection):
    """Identity: coordinates stay geodetic radians."""

    names = ('longlat', 'identity')

    def forward(self, p: Point) -> Optional[Point]:
        return p

    def inverse(self, p: Point) -> Optional[Point]:
        return p

    @property
    def is_latlong(self) -> bool:
        return True


class Geocentric(Projection):
    """Earth-centred Cartesian X, Y, Z on the projection's ellipsoid."""

    names = ('Geocentric', 'geocentric', 'geocent', 'Geocent')

    def forward(self, p: Point) -> Optional[Point]:
        return geodetic_to_geocentric(p, self.es, self.a)

    def inverse(self, p: Point) -> Optional[Point]:
        return geocentric_to_geodetic(p, self.es, self.a, self.b)

    @property
    def is_geocentric(self) -> bool:
        return True
