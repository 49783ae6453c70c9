"""
Stereographic projections.

Stereographic       polar and oblique stereographic on the ellipsoid
                    via conformal latitude (Snyder)
ObliqueStereographic
                    double stereographic: ellipsoid -> Gauss conformal
                    sphere -> stereographic (used by RD New and others)
"""

from typing import Optional, Tuple
import math

from ..config import EPSLN, FORTPI, HALF_PI, PROJ_MAX_ITER
from ..models.geometry import Point
from .base import Projection
from .common import adjust_lon, msfnz, phi2z, sign, srat, tsfnz


def _ssfn(phit: float, sinphi: float, eccen: float) -> float:
    sinphi *= eccen
    return math.tan(0.5 * (HALF_PI + phit)) * math.pow((1 - sinphi) / (1 + sinphi), 0.5 * eccen)


class Stereographic(Projection):
    """Stereographic, polar or oblique aspect."""

    names = (
        'stere',
        'Stereographic_South_Pole',
        'Polar Stereographic (variant B)',
        'Polar_Stereographic',
    )

    def init(self) -> None:
        self.coslat0 = math.cos(self.lat0)
        self.sinlat0 = math.sin(self.lat0)
        self.polar = abs(self.coslat0) <= EPSLN

        if self.is_spherical:
            if self.k0 == 1 and self.lat_ts is not None and self.polar:
                self.k0 = 0.5 * (1 + sign(self.lat0) * math.sin(self.lat_ts))
            return

        self.con = 1 if self.lat0 > 0 else -1
        self.cons = math.sqrt(
            math.pow(1 + self.e, 1 + self.e) * math.pow(1 - self.e, 1 - self.e))
        if (self.k0 == 1 and self.lat_ts is not None and self.polar
                and abs(math.cos(self.lat_ts)) > EPSLN):
            self.k0 = 0.5 * self.cons * msfnz(
                self.e, math.sin(self.lat_ts), math.cos(self.lat_ts)
            ) / tsfnz(self.e, self.con * self.lat_ts, self.con * math.sin(self.lat_ts))

        self.ms1 = msfnz(self.e, self.sinlat0, self.coslat0)
        self.X0 = 2 * math.atan(_ssfn(self.lat0, self.sinlat0, self.e)) - HALF_PI
        self.cosX0 = math.cos(self.X0)
        self.sinX0 = math.sin(self.X0)

    def forward(self, p: Point) -> Optional[Point]:
        lon, lat = p.x, p.y
        sinlat = math.sin(lat)
        coslat = math.cos(lat)
        dlon = adjust_lon(lon - self.long0)

        # Antipode of the projection centre
        if abs(abs(dlon) - math.pi) <= EPSLN and abs(lat + self.lat0) <= EPSLN:
            return None

        if self.is_spherical:
            denom = 1 + self.sinlat0 * sinlat + self.coslat0 * coslat * math.cos(dlon)
            if abs(denom) <= EPSLN:
                return None
            a_ = 2 * self.k0 / denom
            x = self.a * a_ * coslat * math.sin(dlon) + self.x0
            y = self.a * a_ * (self.coslat0 * sinlat - self.sinlat0 * coslat * math.cos(dlon)) + self.y0
            return p.with_xy(x, y)

        chi = 2 * math.atan(_ssfn(lat, sinlat, self.e)) - HALF_PI
        cos_chi = math.cos(chi)
        sin_chi = math.sin(chi)

        if self.polar:
            ts = tsfnz(self.e, lat * self.con, self.con * sinlat)
            rh = 2 * self.a * self.k0 * ts / self.cons
            x = self.x0 + rh * math.sin(dlon)
            y = self.y0 - self.con * rh * math.cos(dlon)
            return p.with_xy(x, y)

        if abs(self.sinlat0) < EPSLN:
            a_ = 2 * self.a * self.k0 / (1 + cos_chi * math.cos(dlon))
            y = a_ * sin_chi + self.y0
        else:
            a_ = 2 * self.a * self.k0 * self.ms1 / (self.cosX0 * (
                1 + self.sinX0 * sin_chi + self.cosX0 * cos_chi * math.cos(dlon)))
            y = a_ * (self.cosX0 * sin_chi - self.sinX0 * cos_chi * math.cos(dlon)) + self.y0
        x = a_ * cos_chi * math.sin(dlon) + self.x0
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = p.y - self.y0
        rh = math.sqrt(x * x + y * y)

        if self.is_spherical:
            if rh <= EPSLN:
                return p.with_xy(self.long0, self.lat0)
            c = 2 * math.atan(rh / (2 * self.a * self.k0))
            lat = math.asin(math.cos(c) * self.sinlat0 + y * math.sin(c) * self.coslat0 / rh)
            if abs(self.coslat0) < EPSLN:
                if self.lat0 > 0:
                    lon = adjust_lon(self.long0 + math.atan2(x, -y))
                else:
                    lon = adjust_lon(self.long0 + math.atan2(x, y))
            else:
                lon = adjust_lon(self.long0 + math.atan2(
                    x * math.sin(c),
                    rh * self.coslat0 * math.cos(c) - y * self.sinlat0 * math.sin(c)))
            return p.with_xy(lon, lat)

        if self.polar:
            if rh <= EPSLN:
                return p.with_xy(self.long0, self.lat0)
            x *= self.con
            y *= self.con
            ts = rh * self.cons / (2 * self.a * self.k0)
            phi = phi2z(self.e, ts)
            if phi is None:
                return None
            lat = self.con * phi
            lon = self.con * adjust_lon(self.con * self.long0 + math.atan2(x, -y))
            return p.with_xy(lon, lat)

        ce = 2 * math.atan(rh * self.cosX0 / (2 * self.a * self.k0 * self.ms1))
        lon = self.long0
        if rh <= EPSLN:
            chi = self.X0
        else:
            chi = math.asin(math.cos(ce) * self.sinX0 + y * math.sin(ce) * self.cosX0 / rh)
            lon = adjust_lon(self.long0 + math.atan2(
                x * math.sin(ce),
                rh * self.cosX0 * math.cos(ce) - y * self.sinX0 * math.sin(ce)))
        phi = phi2z(self.e, math.tan(0.5 * (HALF_PI + chi)))
        if phi is None:
            return None
        return p.with_xy(lon, -phi)


class GaussSphere:
    """
    Conformal mapping of the ellipsoid onto the Gauss sphere.

    Args:
        lat0: Latitude of the point of tangency (radians)
        e: First eccentricity
        es: Eccentricity squared
    """

    def __init__(self, lat0: float, e: float, es: float):
        sphi = math.sin(lat0)
        cphi = math.cos(lat0)
        cphi *= cphi
        self.e = e
        self.rc = math.sqrt(1 - es) / (1 - es * sphi * sphi)
        self.C = math.sqrt(1 + es * cphi * cphi / (1 - es))
        self.phic0 = math.asin(sphi / self.C)
        self.ratexp = 0.5 * self.C * e
        self.K = math.tan(0.5 * self.phic0 + FORTPI) / (
            math.pow(math.tan(0.5 * lat0 + FORTPI), self.C) * srat(e * sphi, self.ratexp))

    def forward(self, lon: float, lat: float) -> Tuple[float, float]:
        y = 2 * math.atan(
            self.K * math.pow(math.tan(0.5 * lat + FORTPI), self.C)
            * srat(self.e * math.sin(lat), self.ratexp)) - HALF_PI
        return self.C * lon, y

    def inverse(self, lon: float, lat: float) -> Optional[Tuple[float, float]]:
        """None if the latitude iteration does not settle."""
        lam = lon / self.C
        num = math.pow(math.tan(0.5 * lat + FORTPI) / self.K, 1 / self.C)
        phi = lat
        for _ in range(PROJ_MAX_ITER):
            nxt = 2 * math.atan(num * srat(self.e * math.sin(phi), -0.5 * self.e)) - HALF_PI
            if abs(nxt - phi) < 1e-14:
                return lam, nxt
            phi = nxt
        return None


class ObliqueStereographic(Projection):
    """Oblique (double) stereographic."""

    names = (
        'Stereographic_North_Pole',
        'Oblique_Stereographic',
        'Oblique Stereographic Alternative',
        'Double_Stereographic',
        'sterea',
        'gauss',
    )

    def init(self) -> None:
        self.gauss = GaussSphere(self.lat0, self.e, self.es)
        self.sinc0 = math.sin(self.gauss.phic0)
        self.cosc0 = math.cos(self.gauss.phic0)
        self.R2 = 2 * self.gauss.rc

    def forward(self, p: Point) -> Optional[Point]:
        lam, phi = self.gauss.forward(adjust_lon(p.x - self.long0), p.y)
        sinc = math.sin(phi)
        cosc = math.cos(phi)
        cosl = math.cos(lam)
        denom = 1 + self.sinc0 * sinc + self.cosc0 * cosc * cosl
        if abs(denom) <= EPSLN:
            return None
        k = self.k0 * self.R2 / denom
        x = k * cosc * math.sin(lam)
        y = k * (self.cosc0 * sinc - self.sinc0 * cosc * cosl)
        return p.with_xy(self.a * x + self.x0, self.a * y + self.y0)

    def inverse(self, p: Point) -> Optional[Point]:
        x = (p.x - self.x0) / self.a / self.k0
        y = (p.y - self.y0) / self.a / self.k0
        rho = math.hypot(x, y)
        if rho:
            c = 2 * math.atan2(rho, self.R2)
            sinc = math.sin(c)
            cosc = math.cos(c)
            lat = math.asin(cosc * self.sinc0 + y * sinc * self.cosc0 / rho)
            lon = math.atan2(x * sinc, rho * self.cosc0 * cosc - y * self.sinc0 * sinc)
        else:
            lat = self.gauss.phic0
            lon = 0.0

        result = self.gauss.inverse(lon, lat)
        if result is None:
            return None
        lam, phi = result
        return p.with_xy(adjust_lon(lam + self.long0), phi)
