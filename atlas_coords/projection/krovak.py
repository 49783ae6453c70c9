"""
Krovak oblique conformal conic (S-JTSK, Czech Republic and Slovakia).

Default output is the "East North" axis convention used by EPSG:5514,
i.e. negated southing/westing. Pass +czech for the native
positive-south, positive-west axes.
"""

from typing import Optional
import math

from ..config import CONIC_MAX_ITER
from ..models.geometry import Point
from .base import Projection
from .common import adjust_lon

_S45 = 0.785398163397448
_S90 = 2 * _S45
# Co-latitude of the cone axis
_UQ = 1.04216856380474
# Latitude of the pseudo standard parallel (78.5 degrees)
_S0 = 1.37008346281555
_DEFAULT_LAT0 = 0.863937979737193
_DEFAULT_LONG0 = 0.7417649320975901 - 0.308341501185665


class Krovak(Projection):
    """Krovak."""

    names = ('Krovak', 'krovak')

    def init(self) -> None:
        if not self.params.lat0:
            self.lat0 = _DEFAULT_LAT0
        if not self.params.long0:
            self.long0 = _DEFAULT_LONG0
        if not self.params.k0:
            self.k0 = 0.9999
        self.czech = bool(self.params.extras.get('czech'))

        fi0 = self.lat0
        e2 = self.es
        self.alfa = math.sqrt(1 + (e2 * math.pow(math.cos(fi0), 4)) / (1 - e2))
        self.u0 = math.asin(math.sin(fi0) / self.alfa)
        g = math.pow((1 + self.e * math.sin(fi0)) / (1 - self.e * math.sin(fi0)),
                     self.alfa * self.e / 2)
        self.k = math.tan(self.u0 / 2 + _S45) / math.pow(math.tan(fi0 / 2 + _S45), self.alfa) * g
        n0 = self.a * math.sqrt(1 - e2) / (1 - e2 * math.pow(math.sin(fi0), 2))
        self.n = math.sin(_S0)
        self.ro0 = self.k0 * n0 / math.tan(_S0)
        self.ad = _S90 - _UQ

    def forward(self, p: Point) -> Optional[Point]:
        lat = p.y
        delta_lon = adjust_lon(p.x - self.long0)
        esin = self.e * math.sin(lat)
        gfi = math.pow((1 + esin) / (1 - esin), self.alfa * self.e / 2)
        u = 2 * (math.atan(self.k * math.pow(math.tan(lat / 2 + _S45), self.alfa) / gfi) - _S45)
        deltav = -delta_lon * self.alfa
        s = math.asin(math.cos(self.ad) * math.sin(u)
                      + math.sin(self.ad) * math.cos(u) * math.cos(deltav))
        d = math.asin(math.cos(u) * math.sin(deltav) / math.cos(s))
        eps = self.n * d
        ro = self.ro0 * math.pow(math.tan(_S0 / 2 + _S45), self.n) \
            / math.pow(math.tan(s / 2 + _S45), self.n)

        y = ro * math.cos(eps)
        x = ro * math.sin(eps)
        if not self.czech:
            x, y = -x, -y
        return p.with_xy(x + self.x0, y + self.y0)

    def inverse(self, p: Point) -> Optional[Point]:
        # Axes are swapped: the native system is (southing, westing)
        x = p.y - self.y0
        y = p.x - self.x0
        if not self.czech:
            x, y = -x, -y

        ro = math.sqrt(x * x + y * y)
        eps = math.atan2(y, x)
        d = eps / math.sin(_S0)
        s = 2 * (math.atan(math.pow(self.ro0 / ro, 1 / self.n) * math.tan(_S0 / 2 + _S45)) - _S45)
        u = math.asin(math.cos(self.ad) * math.sin(s)
                      - math.sin(self.ad) * math.cos(s) * math.cos(d))
        deltav = math.asin(math.cos(s) * math.sin(d) / math.cos(u))
        lon = self.long0 - deltav / self.alfa

        fi1 = u
        for _ in range(CONIC_MAX_ITER):
            lat = 2 * (math.atan(
                math.pow(self.k, -1 / self.alfa)
                * math.pow(math.tan(u / 2 + _S45), 1 / self.alfa)
                * math.pow((1 + self.e * math.sin(fi1)) / (1 - self.e * math.sin(fi1)), self.e / 2)
            ) - _S45)
            if abs(fi1 - lat) < 1e-10:
                return p.with_xy(lon, lat)
            fi1 = lat
        return None
