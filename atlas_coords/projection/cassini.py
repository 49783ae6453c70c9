"""Cassini-Soldner."""

from typing import Optional
import math

from ..config import EPSLN, HALF_PI
from ..models.geometry import Point
from .base import Projection
from .common import adjust_lat, adjust_lon, e0fn, e1fn, e2fn, e3fn, gN, imlfn, mlfn


class Cassini(Projection):
    """Cassini-Soldner, spherical and ellipsoidal."""

    names = ('Cassini', 'Cassini_Soldner', 'cass')

    def init(self) -> None:
        if not self.is_spherical:
            self.e0 = e0fn(self.es)
            self.e1 = e1fn(self.es)
            self.e2 = e2fn(self.es)
            self.e3 = e3fn(self.es)
            self.ml0 = self.a * mlfn(self.e0, self.e1, self.e2, self.e3, self.lat0)

    def forward(self, p: Point) -> Optional[Point]:
        phi = p.y
        lam = adjust_lon(p.x - self.long0)

        if self.is_spherical:
            x = self.a * math.asin(math.cos(phi) * math.sin(lam))
            y = self.a * (math.atan2(math.tan(phi), math.cos(lam)) - self.lat0)
        else:
            sinphi = math.sin(phi)
            cosphi = math.cos(phi)
            nl = gN(self.a, self.es, sinphi)
            tl = math.tan(phi) * math.tan(phi)
            al = lam * cosphi
            asq = al * al
            cl = self.es * cosphi * cosphi / (1 - self.es)
            ml = self.a * mlfn(self.e0, self.e1, self.e2, self.e3, phi)
            x = nl * al * (1 - asq * tl * (1 / 6 - (8 - tl + 8 * cl) * asq / 120))
            y = ml - self.ml0 + nl * sinphi / cosphi * asq * (0.5 + (5 - tl + 6 * cl) * asq / 24)

        return p.with_xy(x + self.x0, y + self.y0)

    def inverse(self, p: Point) -> Optional[Point]:
        x = (p.x - self.x0) / self.a
        y = (p.y - self.y0) / self.a

        if self.is_spherical:
            dd = y + self.lat0
            phi = math.asin(math.sin(dd) * math.cos(x))
            lam = math.atan2(math.tan(x), math.cos(dd))
            return p.with_xy(adjust_lon(lam + self.long0), adjust_lat(phi))

        phi1 = imlfn(self.ml0 / self.a + y, self.e0, self.e1, self.e2, self.e3)
        if phi1 is None or abs(phi1) > HALF_PI + EPSLN:
            return None
        if abs(abs(phi1) - HALF_PI) <= EPSLN:
            return p.with_xy(self.long0, -HALF_PI if y < 0 else HALF_PI)

        nl1 = gN(self.a, self.es, math.sin(phi1))
        rl1 = nl1 * nl1 * nl1 / self.a / self.a * (1 - self.es)
        tl1 = math.pow(math.tan(phi1), 2)
        dl = x * self.a / nl1
        dsq = dl * dl
        phi = phi1 - nl1 * math.tan(phi1) / rl1 * dl * dl * (0.5 - (1 + 3 * tl1) * dl * dl / 24)
        if abs(phi) > HALF_PI + EPSLN:
            return None
        lam = dl * (1 - dsq * (tl1 / 3 + (1 + 3 * tl1) * tl1 * dsq / 15)) / math.cos(phi1)
        return p.with_xy(adjust_lon(lam + self.long0), adjust_lat(phi))
