"""
Azimuthal projections.

LambertAzimuthalEqualArea   polar, equatorial and oblique aspects on the
                            ellipsoid (authalic latitude) or sphere
AzimuthalEquidistant        sphere exact; ellipsoid along Vincenty geodesics
Gnomonic                    spherical, true great circles as lines
Orthographic                spherical, hemisphere facing the centre only
"""

from enum import Enum
from typing import Optional, Tuple
import math

from ..config import EPSLN, FORTPI, HALF_PI
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
    qsfnz,
    vincenty_direct,
    vincenty_inverse,
)


class Aspect(Enum):
    """Where the projection centre sits."""
    S_POLE = 1
    N_POLE = 2
    EQUIT = 3
    OBLIQ = 4


def aspect_of(lat0: float) -> Aspect:
    t = abs(lat0)
    if abs(t - HALF_PI) < EPSLN:
        return Aspect.S_POLE if lat0 < 0 else Aspect.N_POLE
    if t < EPSLN:
        return Aspect.EQUIT
    return Aspect.OBLIQ


# Authalic latitude series coefficients
_P00 = 0.33333333333333333333
_P01 = 0.17222222222222222222
_P02 = 0.10257936507936507936
_P10 = 0.06388888888888888888
_P11 = 0.06640211640211640211
_P20 = 0.01641501294219154443


def authset(es: float) -> Tuple[float, float, float]:
    t = es * es
    apa0 = es * _P00 + t * _P01
    apa1 = t * _P10
    t *= es
    apa0 += t * _P02
    apa1 += t * _P11
    apa2 = t * _P20
    return (apa0, apa1, apa2)


def authlat(beta: float, apa: Tuple[float, float, float]) -> float:
    t = beta + beta
    return beta + apa[0] * math.sin(t) + apa[1] * math.sin(t + t) + apa[2] * math.sin(t + t + t)


class LambertAzimuthalEqualArea(Projection):
    """Lambert Azimuthal Equal Area."""

    names = ('Lambert Azimuthal Equal Area', 'Lambert_Azimuthal_Equal_Area', 'laea')

    def init(self) -> None:
        self.mode = aspect_of(self.lat0)
        self.sinph0 = math.sin(self.lat0)
        self.cosph0 = math.cos(self.lat0)
        if self.is_spherical:
            return

        self.qp = qsfnz(self.e, 1)
        self.mmf = 0.5 / (1 - self.es)
        self.apa = authset(self.es)
        self.rq = math.sqrt(0.5 * self.qp)
        self.xmf = self.ymf = 1.0
        if self.mode in (Aspect.N_POLE, Aspect.S_POLE):
            self.dd = 1.0
        elif self.mode is Aspect.EQUIT:
            self.dd = 1 / self.rq
            self.xmf = 1.0
            self.ymf = 0.5 * self.qp
        else:
            sinphi = self.sinph0
            self.sinb1 = qsfnz(self.e, sinphi) / self.qp
            self.cosb1 = math.sqrt(1 - self.sinb1 * self.sinb1)
            self.dd = self.cosph0 / (
                math.sqrt(1 - self.es * sinphi * sinphi) * self.rq * self.cosb1)
            self.ymf = self.rq / self.dd
            self.xmf = self.rq * self.dd

    def forward(self, p: Point) -> Optional[Point]:
        phi = p.y
        lam = adjust_lon(p.x - self.long0)
        mode = self.mode

        if self.is_spherical:
            sinphi = math.sin(phi)
            cosphi = math.cos(phi)
            coslam = math.cos(lam)
            if mode in (Aspect.OBLIQ, Aspect.EQUIT):
                if mode is Aspect.EQUIT:
                    y = 1 + cosphi * coslam
                else:
                    y = 1 + self.sinph0 * sinphi + self.cosph0 * cosphi * coslam
                if y <= EPSLN:
                    return None
                y = math.sqrt(2 / y)
                x = y * cosphi * math.sin(lam)
                if mode is Aspect.EQUIT:
                    y *= sinphi
                else:
                    y *= self.cosph0 * sinphi - self.sinph0 * cosphi * coslam
            else:
                if mode is Aspect.N_POLE:
                    coslam = -coslam
                if abs(phi + self.lat0) < EPSLN:
                    return None
                y = FORTPI - phi * 0.5
                y = 2 * (math.cos(y) if mode is Aspect.S_POLE else math.sin(y))
                x = y * math.sin(lam)
                y *= coslam
            return p.with_xy(self.a * x + self.x0, self.a * y + self.y0)

        coslam = math.cos(lam)
        sinlam = math.sin(lam)
        sinphi = math.sin(phi)
        q = qsfnz(self.e, sinphi)
        sinb = cosb = 0.0
        if mode in (Aspect.OBLIQ, Aspect.EQUIT):
            sinb = q / self.qp
            cosb = math.sqrt(max(0.0, 1 - sinb * sinb))

        if mode is Aspect.OBLIQ:
            b = 1 + self.sinb1 * sinb + self.cosb1 * cosb * coslam
        elif mode is Aspect.EQUIT:
            b = 1 + cosb * coslam
        elif mode is Aspect.N_POLE:
            b = HALF_PI + phi
            q = self.qp - q
        else:
            b = phi - HALF_PI
            q = self.qp + q
        if abs(b) < EPSLN:
            return None

        if mode is Aspect.OBLIQ:
            b = math.sqrt(2 / b)
            y = self.ymf * b * (self.cosb1 * sinb - self.sinb1 * cosb * coslam)
            x = self.xmf * b * cosb * sinlam
        elif mode is Aspect.EQUIT:
            b = math.sqrt(2 / (1 + cosb * coslam))
            y = b * sinb * self.ymf
            x = self.xmf * b * cosb * sinlam
        elif q >= 0:
            b = math.sqrt(q)
            x = b * sinlam
            y = coslam * (b if mode is Aspect.S_POLE else -b)
        else:
            x = y = 0.0

        return p.with_xy(self.a * x + self.x0, self.a * y + self.y0)

    def inverse(self, p: Point) -> Optional[Point]:
        x = (p.x - self.x0) / self.a
        y = (p.y - self.y0) / self.a
        mode = self.mode

        if self.is_spherical:
            rh = math.sqrt(x * x + y * y)
            phi = rh * 0.5
            if phi > 1:
                return None
            phi = 2 * math.asin(phi)
            sinz = math.sin(phi)
            cosz = math.cos(phi)
            if mode is Aspect.EQUIT:
                phi = 0.0 if abs(rh) <= EPSLN else math.asin(y * sinz / rh)
                x *= sinz
                y = cosz * rh
            elif mode is Aspect.OBLIQ:
                if abs(rh) <= EPSLN:
                    phi = self.lat0
                else:
                    phi = math.asin(cosz * self.sinph0 + y * sinz * self.cosph0 / rh)
                x *= sinz * self.cosph0
                y = (cosz - math.sin(phi) * self.sinph0) * rh
            elif mode is Aspect.N_POLE:
                y = -y
                phi = HALF_PI - phi
            else:
                phi -= HALF_PI
            if y == 0 and mode in (Aspect.EQUIT, Aspect.OBLIQ):
                lam = 0.0
            else:
                lam = math.atan2(x, y)
            return p.with_xy(adjust_lon(self.long0 + lam), phi)

        if mode in (Aspect.OBLIQ, Aspect.EQUIT):
            x /= self.dd
            y *= self.dd
            rho = math.sqrt(x * x + y * y)
            if rho < EPSLN:
                return p.with_xy(self.long0, self.lat0)
            arg = 0.5 * rho / self.rq
            if arg > 1:
                return None
            s_ce = 2 * math.asin(arg)
            c_ce = math.cos(s_ce)
            s_ce = math.sin(s_ce)
            x *= s_ce
            if mode is Aspect.OBLIQ:
                ab = c_ce * self.sinb1 + y * s_ce * self.cosb1 / rho
                y = rho * self.cosb1 * c_ce - y * self.sinb1 * s_ce
            else:
                ab = y * s_ce / rho
                y = rho * c_ce
        else:
            if mode is Aspect.N_POLE:
                y = -y
            q = x * x + y * y
            if not q:
                return p.with_xy(self.long0, self.lat0)
            ab = 1 - q / self.qp
            if mode is Aspect.S_POLE:
                ab = -ab

        lam = math.atan2(x, y)
        phi = authlat(asinz(ab), self.apa)
        return p.with_xy(adjust_lon(self.long0 + lam), phi)


class AzimuthalEquidistant(Projection):
    """
    Azimuthal Equidistant.

    Distances and azimuths from the centre are true. On the ellipsoid
    the oblique and equatorial aspects follow the geodesic from the
    centre (Vincenty), so they hold up to the far side of the globe;
    points that are nearly antipodal to the centre do not project.
    """

    names = ('Azimuthal_Equidistant', 'aeqd')

    def init(self) -> None:
        self.sin_p12 = math.sin(self.lat0)
        self.cos_p12 = math.cos(self.lat0)
        self.north_polar = abs(self.sin_p12 - 1) <= EPSLN
        self.south_polar = abs(self.sin_p12 + 1) <= EPSLN
        if not self.is_spherical:
            self.en = (e0fn(self.es), e1fn(self.es), e2fn(self.es), e3fn(self.es))
            self.mlp = self.a * mlfn(*self.en, HALF_PI)
            self.f = 1 - self.b / self.a

    def forward(self, p: Point) -> Optional[Point]:
        lat = p.y
        sinphi = math.sin(lat)
        cosphi = math.cos(lat)
        dlon = adjust_lon(p.x - self.long0)

        if self.is_spherical:
            if self.north_polar:
                r = self.a * (HALF_PI - lat)
                return p.with_xy(self.x0 + r * math.sin(dlon), self.y0 - r * math.cos(dlon))
            if self.south_polar:
                r = self.a * (HALF_PI + lat)
                return p.with_xy(self.x0 + r * math.sin(dlon), self.y0 + r * math.cos(dlon))
            cos_c = self.sin_p12 * sinphi + self.cos_p12 * cosphi * math.cos(dlon)
            # Antipode of the centre
            if cos_c + 1 <= EPSLN:
                return None
            c = math.acos(min(1.0, cos_c))
            kp = c / math.sin(c) if c else 1.0
            x = self.x0 + self.a * kp * cosphi * math.sin(dlon)
            y = self.y0 + self.a * kp * (self.cos_p12 * sinphi - self.sin_p12 * cosphi * math.cos(dlon))
            return p.with_xy(x, y)

        if self.north_polar or self.south_polar:
            ml = self.a * mlfn(*self.en, lat)
            if self.north_polar:
                r = self.mlp - ml
                return p.with_xy(self.x0 + r * math.sin(dlon), self.y0 - r * math.cos(dlon))
            r = self.mlp + ml
            return p.with_xy(self.x0 + r * math.sin(dlon), self.y0 + r * math.cos(dlon))

        if abs(dlon) < EPSLN and abs(lat - self.lat0) < EPSLN:
            return p.with_xy(self.x0, self.y0)

        geodesic = vincenty_inverse(self.lat0, self.long0, lat, p.x, self.a, self.f)
        if geodesic is None:
            return None
        az, s = geodesic
        return p.with_xy(self.x0 + s * math.sin(az), self.y0 + s * math.cos(az))

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = p.y - self.y0
        rh = math.sqrt(x * x + y * y)

        if self.is_spherical:
            if rh > 2 * HALF_PI * self.a:
                return None
            z = rh / self.a
            sinz = math.sin(z)
            cosz = math.cos(z)
            if abs(rh) <= EPSLN:
                return p.with_xy(self.long0, self.lat0)
            lat = asinz(cosz * self.sin_p12 + (y * sinz * self.cos_p12) / rh)
            if abs(abs(self.lat0) - HALF_PI) <= EPSLN:
                if self.lat0 >= 0:
                    lon = adjust_lon(self.long0 + math.atan2(x, -y))
                else:
                    lon = adjust_lon(self.long0 - math.atan2(-x, y))
            else:
                lon = adjust_lon(self.long0 + math.atan2(
                    x * sinz, rh * self.cos_p12 * cosz - y * self.sin_p12 * sinz))
            return p.with_xy(lon, lat)

        # No point is further from the centre than pole to pole
        if rh > 2 * self.mlp:
            return None

        if self.north_polar or self.south_polar:
            m = self.mlp - rh if self.north_polar else rh - self.mlp
            lat = imlfn(m / self.a, *self.en)
            if lat is None or abs(lat) > HALF_PI + EPSLN:
                return None
            if self.north_polar:
                lon = adjust_lon(self.long0 + math.atan2(x, -y))
            else:
                lon = adjust_lon(self.long0 + math.atan2(x, y))
            return p.with_xy(lon, lat)

        if rh <= EPSLN:
            return p.with_xy(self.long0, self.lat0)

        end = vincenty_direct(self.lat0, self.long0, math.atan2(x, y), rh, self.a, self.f)
        if end is None:
            return None
        lat, lon = end
        if abs(lat) > HALF_PI + EPSLN:
            return None
        return p.with_xy(adjust_lon(lon), lat)


class Gnomonic(Projection):
    """Gnomonic (spherical)."""

    names = ('gnom',)

    def init(self) -> None:
        self.sin_p14 = math.sin(self.lat0)
        self.cos_p14 = math.cos(self.lat0)

    def forward(self, p: Point) -> Optional[Point]:
        lat = p.y
        dlon = adjust_lon(p.x - self.long0)
        sinphi = math.sin(lat)
        cosphi = math.cos(lat)
        coslon = math.cos(dlon)
        g = self.sin_p14 * sinphi + self.cos_p14 * cosphi * coslon
        # At or beyond 90 degrees from the centre
        if g <= EPSLN:
            return None
        r = self.a * self.k0 / g
        x = self.x0 + r * cosphi * math.sin(dlon)
        y = self.y0 + r * (self.cos_p14 * sinphi - self.sin_p14 * cosphi * coslon)
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        x = (p.x - self.x0) / self.a / self.k0
        y = (p.y - self.y0) / self.a / self.k0
        rh = math.sqrt(x * x + y * y)
        if not rh:
            return p.with_xy(self.long0, self.lat0)
        c = math.atan2(rh, 1)
        sinc = math.sin(c)
        cosc = math.cos(c)
        lat = asinz(cosc * self.sin_p14 + (y * sinc * self.cos_p14) / rh)
        lon = math.atan2(x * sinc, rh * self.cos_p14 * cosc - y * self.sin_p14 * sinc)
        return p.with_xy(adjust_lon(self.long0 + lon), lat)


class Orthographic(Projection):
    """Orthographic (spherical)."""

    names = ('ortho',)

    def init(self) -> None:
        self.sin_p14 = math.sin(self.lat0)
        self.cos_p14 = math.cos(self.lat0)

    def forward(self, p: Point) -> Optional[Point]:
        lat = p.y
        dlon = adjust_lon(p.x - self.long0)
        sinphi = math.sin(lat)
        cosphi = math.cos(lat)
        coslon = math.cos(dlon)
        g = self.sin_p14 * sinphi + self.cos_p14 * cosphi * coslon
        # Far side of the globe
        if g < -EPSLN:
            return None
        x = self.x0 + self.a * cosphi * math.sin(dlon)
        y = self.y0 + self.a * (self.cos_p14 * sinphi - self.sin_p14 * cosphi * coslon)
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = p.y - self.y0
        rh = math.sqrt(x * x + y * y)
        if rh > self.a + EPSLN:
            return None
        if abs(rh) <= EPSLN:
            return p.with_xy(self.long0, self.lat0)
        z = asinz(rh / self.a)
        sinz = math.sin(z)
        cosz = math.cos(z)
        lat = asinz(cosz * self.sin_p14 + (y * sinz * self.cos_p14) / rh)
        if abs(abs(self.lat0) - HALF_PI) <= EPSLN:
            if self.lat0 >= 0:
                lon = adjust_lon(self.long0 + math.atan2(x, -y))
            else:
                lon = adjust_lon(self.long0 - math.atan2(-x, y))
        else:
            lon = adjust_lon(self.long0 + math.atan2(
                x * sinz, rh * self.cos_p14 * cosz - y * self.sin_p14 * sinz))
        return p.with_xy(lon, lat)
