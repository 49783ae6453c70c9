"""
Conic projections: Lambert Conformal, Albers Equal Area, Equidistant.

All three take one or two standard parallels (lat1, lat2). With a
single parallel the cone is tangent; lat2 defaults to lat1.
"""

from typing import Optional
import math

from ..config import EPSLN, HALF_PI
from ..errors import DefinitionError
from ..models.geometry import Point
from .base import Projection
from .common import (
    adjust_lon,
    asinz,
    e0fn,
    e1fn,
    e2fn,
    e3fn,
    imlfn,
    mlfn,
    msfnz,
    phi2z,
    qsfnz,
    sign,
    tsfnz,
)


def _standard_parallels(proj: Projection):
    lat1 = proj.lat1 if proj.lat1 is not None else proj.lat0
    lat2 = proj.lat2 if proj.lat2 else lat1
    return lat1, lat2


class LambertConformalConic(Projection):
    """Lambert Conformal Conic, one or two standard parallels."""

    names = (
        'Lambert Tangential Conformal Conic Projection',
        'Lambert_Conformal_Conic',
        'Lambert_Conformal_Conic_1SP',
        'Lambert_Conformal_Conic_2SP',
        'lcc',
        'Lambert Conic Conformal (1SP)',
        'Lambert Conic Conformal (2SP)',
    )

    def init(self) -> None:
        self.lat1, self.lat2 = _standard_parallels(self)
        if not self.k0:
            self.k0 = 1.0
        if abs(self.lat1 + self.lat2) < EPSLN:
            raise_equator_cone(self)

        temp = self.b / self.a
        self.e = math.sqrt(1 - temp * temp)

        sin1 = math.sin(self.lat1)
        ms1 = msfnz(self.e, sin1, math.cos(self.lat1))
        ts1 = tsfnz(self.e, self.lat1, sin1)
        sin2 = math.sin(self.lat2)
        ms2 = msfnz(self.e, sin2, math.cos(self.lat2))
        ts2 = tsfnz(self.e, self.lat2, sin2)
        ts0 = tsfnz(self.e, self.lat0, math.sin(self.lat0))

        if abs(self.lat1 - self.lat2) > EPSLN:
            self.ns = math.log(ms1 / ms2) / math.log(ts1 / ts2)
        else:
            self.ns = sin1
        if math.isnan(self.ns):
            self.ns = sin1

        self.f0 = ms1 / (self.ns * math.pow(ts1, self.ns))
        self.rh = self.a * self.f0 * math.pow(ts0, self.ns)

    def forward(self, p: Point) -> Optional[Point]:
        lat = p.y
        if abs(2 * abs(lat) - math.pi) <= EPSLN:
            lat = sign(lat) * (HALF_PI - 2 * EPSLN)

        con = abs(abs(lat) - HALF_PI)
        if con > EPSLN:
            ts = tsfnz(self.e, lat, math.sin(lat))
            rh1 = self.a * self.f0 * math.pow(ts, self.ns)
        else:
            # Apex of the cone is the only projectable pole
            if lat * self.ns <= 0:
                return None
            rh1 = 0.0

        theta = self.ns * adjust_lon(p.x - self.long0)
        x = self.k0 * (rh1 * math.sin(theta)) + self.x0
        y = self.k0 * (self.rh - rh1 * math.cos(theta)) + self.y0
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        x = (p.x - self.x0) / self.k0
        y = self.rh - (p.y - self.y0) / self.k0
        if self.ns > 0:
            rh1 = math.sqrt(x * x + y * y)
            con = 1.0
        else:
            rh1 = -math.sqrt(x * x + y * y)
            con = -1.0

        theta = 0.0
        if rh1 != 0:
            theta = math.atan2(con * x, con * y)

        if rh1 != 0 or self.ns > 0:
            ts = math.pow(rh1 / (self.a * self.f0), 1 / self.ns)
            lat = phi2z(self.e, ts)
            if lat is None:
                return None
        else:
            lat = -HALF_PI

        lon = adjust_lon(theta / self.ns + self.long0)
        return p.with_xy(lon, lat)


def raise_equator_cone(proj: Projection) -> None:
    """Standard parallels symmetric about the equator make a cylinder."""
    raise DefinitionError(
        f"{proj.proj_name}: standard parallels must not be equal and opposite"
    )


def _phi1z(eccent: float, qs: float) -> Optional[float]:
    """Latitude from authalic q for the Albers inverse."""
    phi = asinz(0.5 * qs)
    if eccent < EPSLN:
        return phi
    eccnts = eccent * eccent
    for _ in range(25):
        sinphi = math.sin(phi)
        cosphi = math.cos(phi)
        con = eccent * sinphi
        com = 1 - con * con
        dphi = 0.5 * com * com / cosphi * (
            qs / (1 - eccnts) - sinphi / com
            + 0.5 / eccent * math.log((1 - con) / (1 + con)))
        phi = phi + dphi
        if abs(dphi) <= 1e-7:
            return phi
    return None


class AlbersEqualArea(Projection):
    """Albers Equal Area Conic."""

    names = ('Albers_Conic_Equal_Area', 'Albers_Equal_Area', 'Albers', 'aea')

    def init(self) -> None:
        self.lat1, self.lat2 = _standard_parallels(self)
        if abs(self.lat1 + self.lat2) < EPSLN:
            raise_equator_cone(self)

        temp = self.b / self.a
        self.es = 1 - temp * temp
        self.e3 = math.sqrt(self.es)

        sin_po = math.sin(self.lat1)
        cos_po = math.cos(self.lat1)
        con = sin_po
        ms1 = msfnz(self.e3, sin_po, cos_po)
        qs1 = qsfnz(self.e3, sin_po)

        sin_po = math.sin(self.lat2)
        cos_po = math.cos(self.lat2)
        ms2 = msfnz(self.e3, sin_po, cos_po)
        qs2 = qsfnz(self.e3, sin_po)

        qs0 = qsfnz(self.e3, math.sin(self.lat0))

        if abs(self.lat1 - self.lat2) > EPSLN:
            self.ns0 = (ms1 * ms1 - ms2 * ms2) / (qs2 - qs1)
        else:
            self.ns0 = con
        self.c = ms1 * ms1 + self.ns0 * qs1
        self.rh = self.a * math.sqrt(self.c - self.ns0 * qs0) / self.ns0

    def forward(self, p: Point) -> Optional[Point]:
        qs = qsfnz(self.e3, math.sin(p.y))
        radicand = self.c - self.ns0 * qs
        if radicand < 0:
            return None
        rh1 = self.a * math.sqrt(radicand) / self.ns0
        theta = self.ns0 * adjust_lon(p.x - self.long0)
        x = rh1 * math.sin(theta) + self.x0
        y = self.rh - rh1 * math.cos(theta) + self.y0
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = self.rh - p.y + self.y0
        if self.ns0 >= 0:
            rh1 = math.sqrt(x * x + y * y)
            con = 1.0
        else:
            rh1 = -math.sqrt(x * x + y * y)
            con = -1.0

        theta = 0.0
        if rh1 != 0:
            theta = math.atan2(con * x, con * y)

        con = rh1 * self.ns0 / self.a
        if self.sphere:
            lat = asinz((self.c - con * con) / (2 * self.ns0))
        else:
            qs = (self.c - con * con) / self.ns0
            lat = _phi1z(self.e3, qs)
            if lat is None:
                return None

        lon = adjust_lon(theta / self.ns0 + self.long0)
        return p.with_xy(lon, lat)


class EquidistantConic(Projection):
    """Equidistant Conic."""

    names = ('Equidistant_Conic', 'eqdc')

    def init(self) -> None:
        self.lat1, self.lat2 = _standard_parallels(self)
        if abs(self.lat1 + self.lat2) < EPSLN:
            raise_equator_cone(self)

        temp = self.b / self.a
        self.es = 1 - temp * temp
        self.e = math.sqrt(self.es)
        self.e0 = e0fn(self.es)
        self.e1 = e1fn(self.es)
        self.e2 = e2fn(self.es)
        self.e3 = e3fn(self.es)

        sinphi = math.sin(self.lat1)
        cosphi = math.cos(self.lat1)
        ms1 = msfnz(self.e, sinphi, cosphi)
        ml1 = mlfn(self.e0, self.e1, self.e2, self.e3, self.lat1)

        if abs(self.lat1 - self.lat2) < EPSLN:
            self.ns = sinphi
        else:
            sinphi = math.sin(self.lat2)
            cosphi = math.cos(self.lat2)
            ms2 = msfnz(self.e, sinphi, cosphi)
            ml2 = mlfn(self.e0, self.e1, self.e2, self.e3, self.lat2)
            self.ns = (ms1 - ms2) / (ml2 - ml1)

        self.g = ml1 + ms1 / self.ns
        self.ml0 = mlfn(self.e0, self.e1, self.e2, self.e3, self.lat0)
        self.rh = self.a * (self.g - self.ml0)

    def forward(self, p: Point) -> Optional[Point]:
        if self.sphere:
            rh1 = self.a * (self.g - p.y)
        else:
            ml = mlfn(self.e0, self.e1, self.e2, self.e3, p.y)
            rh1 = self.a * (self.g - ml)
        theta = self.ns * adjust_lon(p.x - self.long0)
        x = self.x0 + rh1 * math.sin(theta)
        y = self.y0 + self.rh - rh1 * math.cos(theta)
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = self.rh - p.y + self.y0
        if self.ns >= 0:
            rh1 = math.sqrt(x * x + y * y)
            con = 1.0
        else:
            rh1 = -math.sqrt(x * x + y * y)
            con = -1.0

        theta = 0.0
        if rh1 != 0:
            theta = math.atan2(con * x, con * y)

        lon = adjust_lon(self.long0 + theta / self.ns)
        if self.sphere:
            lat = self.g - rh1 / self.a
        else:
            lat = imlfn(self.g - rh1 / self.a, self.e0, self.e1, self.e2, self.e3)
        if lat is None or abs(lat) > HALF_PI + EPSLN:
            return None
        return p.with_xy(lon, lat)
