"""Equal-area and equidistant cylindrical projections."""

from typing import Optional
import math

from ..models.geometry import Point
from .base import Projection
from .common import adjust_lat, adjust_lon, iqsfnz, msfnz, qsfnz


class CylindricalEqualArea(Projection):
    """Lambert Cylindrical Equal Area with a true-scale parallel (+lat_ts)."""

    names = ('cea', 'Cylindrical_Equal_Area', 'Lambert_Cylindrical_Equal_Area')

    def init(self) -> None:
        self.lat_ts = self.lat_ts or 0.0
        if not self.is_spherical:
            self.k0 = msfnz(self.e, math.sin(self.lat_ts), math.cos(self.lat_ts))

    def forward(self, p: Point) -> Optional[Point]:
        dlon = adjust_lon(p.x - self.long0)
        if self.is_spherical:
            x = self.x0 + self.a * dlon * math.cos(self.lat_ts)
            y = self.y0 + self.a * math.sin(p.y) / math.cos(self.lat_ts)
        else:
            qs = qsfnz(self.e, math.sin(p.y))
            x = self.x0 + self.a * self.k0 * dlon
            y = self.y0 + self.a * qs * 0.5 / self.k0
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = p.y - self.y0
        if self.is_spherical:
            sin_lat = (y / self.a) * math.cos(self.lat_ts)
            if abs(sin_lat) > 1:
                return None
            lon = adjust_lon(self.long0 + (x / self.a) / math.cos(self.lat_ts))
            return p.with_xy(lon, math.asin(sin_lat))

        lat = iqsfnz(self.e, 2 * y * self.k0 / self.a)
        if lat is None:
            return None
        lon = adjust_lon(self.long0 + x / (self.a * self.k0))
        return p.with_xy(lon, lat)


class EquidistantCylindrical(Projection):
    """Equidistant Cylindrical (Plate Carree when lat_ts is 0)."""

    names = (
        'Equirectangular',
        'Equidistant_Cylindrical',
        'Equidistant_Cylindrical_Spherical',
        'eqc',
    )

    def init(self) -> None:
        self.lat_ts = self.lat_ts or 0.0
        self.rc = math.cos(self.lat_ts)

    def forward(self, p: Point) -> Optional[Point]:
        dlon = adjust_lon(p.x - self.long0)
        dlat = adjust_lat(p.y - self.lat0)
        return p.with_xy(self.x0 + self.a * dlon * self.rc, self.y0 + self.a * dlat)

    def inverse(self, p: Point) -> Optional[Point]:
        lon = adjust_lon(self.long0 + (p.x - self.x0) / (self.a * self.rc))
        lat = adjust_lat(self.lat0 + (p.y - self.y0) / self.a)
        return p.with_xy(lon, lat)
