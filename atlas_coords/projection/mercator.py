"""
Mercator and Miller cylindrical projections.

Mercator is undefined at the poles: forward returns None within EPSLN
of +/-90 degrees.
"""

from typing import Optional
import math

from ..config import EPSLN, FORTPI, HALF_PI
from ..models.geometry import Point
from .base import Projection
from .common import adjust_lon, msfnz, phi2z, tsfnz


class Mercator(Projection):
    """Normal-aspect Mercator, spherical or ellipsoidal."""

    names = (
        'Mercator',
        'Popular Visualisation Pseudo Mercator',
        'Mercator_1SP',
        'Mercator_Auxiliary_Sphere',
        'merc',
    )

    def init(self) -> None:
        con = self.b / self.a
        self.es = 1 - con * con
        self.e = math.sqrt(self.es)
        if self.lat_ts:
            if self.sphere:
                self.k0 = math.cos(self.lat_ts)
            else:
                self.k0 = msfnz(self.e, math.sin(self.lat_ts), math.cos(self.lat_ts))

    def forward(self, p: Point) -> Optional[Point]:
        lon = p.x
        lat = p.y
        if abs(lat) > HALF_PI + EPSLN or abs(abs(lat) - HALF_PI) <= EPSLN:
            return None

        x = self.x0 + self.a * self.k0 * adjust_lon(lon - self.long0)
        if self.sphere:
            y = self.y0 + self.a * self.k0 * math.log(math.tan(FORTPI + 0.5 * lat))
        else:
            ts = tsfnz(self.e, lat, math.sin(lat))
            y = self.y0 - self.a * self.k0 * math.log(ts)
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = p.y - self.y0
        if self.sphere:
            lat = HALF_PI - 2 * math.atan(math.exp(-y / (self.a * self.k0)))
        else:
            ts = math.exp(-y / (self.a * self.k0))
            lat = phi2z(self.e, ts)
            if lat is None:
                return None
        lon = adjust_lon(self.long0 + x / (self.a * self.k0))
        return p.with_xy(lon, lat)


class MillerCylindrical(Projection):
    """Miller cylindrical (spherical only)."""

    names = ('Miller_Cylindrical', 'mill')

    def forward(self, p: Point) -> Optional[Point]:
        dlon = adjust_lon(p.x - self.long0)
        x = self.x0 + self.a * dlon
        y = self.y0 + self.a * math.log(math.tan((math.pi / 4) + (p.y / 2.5))) * 1.25
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = p.y - self.y0
        lon = adjust_lon(self.long0 + x / self.a)
        lat = 2.5 * (math.atan(math.exp(0.8 * y / self.a)) - math.pi / 4)
        return p.with_xy(lon, lat)
