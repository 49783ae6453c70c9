"""
American Polyconic and New Zealand Map Grid.

NZMG is a complex-polynomial conformal projection; the series run on
Python complex numbers.
"""

from typing import Optional
import math

from ..config import EPSLN, PROJ_MAX_ITER, SEC_TO_RAD
from ..models.geometry import Point
from .base import Projection
from .common import adjust_lat, adjust_lon, asinz, e0fn, e1fn, e2fn, e3fn, gN, mlfn


class Polyconic(Projection):
    """American Polyconic."""

    names = ('Polyconic', 'American_Polyconic', 'poly')

    def init(self) -> None:
        temp = self.b / self.a
        self.es = 1 - temp * temp
        self.e = math.sqrt(self.es)
        self.e0 = e0fn(self.es)
        self.e1 = e1fn(self.es)
        self.e2 = e2fn(self.es)
        self.e3 = e3fn(self.es)
        self.ml0 = self.a * mlfn(self.e0, self.e1, self.e2, self.e3, self.lat0)

    def forward(self, p: Point) -> Optional[Point]:
        lat = p.y
        dlon = adjust_lon(p.x - self.long0)
        el = dlon * math.sin(lat)

        if self.is_spherical:
            if abs(lat) <= EPSLN:
                x = self.a * dlon
                y = -self.a * self.lat0
            else:
                x = self.a * math.sin(el) / math.tan(lat)
                y = self.a * (adjust_lat(lat - self.lat0) + (1 - math.cos(el)) / math.tan(lat))
        else:
            if abs(lat) <= EPSLN:
                x = self.a * dlon
                y = -self.ml0
            else:
                nl = gN(self.a, self.es, math.sin(lat)) / math.tan(lat)
                x = nl * math.sin(el)
                y = self.a * mlfn(self.e0, self.e1, self.e2, self.e3, lat) - self.ml0 \
                    + nl * (1 - math.cos(el))

        return p.with_xy(x + self.x0, y + self.y0)

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = p.y - self.y0

        if self.is_spherical:
            if abs(y + self.a * self.lat0) <= EPSLN:
                return p.with_xy(adjust_lon(x / self.a + self.long0), 0.0)
            al = self.lat0 + y / self.a
            bl = x * x / self.a / self.a + al * al
            phi = al
            for _ in range(PROJ_MAX_ITER):
                tanphi = math.tan(phi)
                dphi = -(al * (phi * tanphi + 1) - phi - 0.5 * (phi * phi + bl) * tanphi) \
                    / ((phi - al) / tanphi - 1)
                phi += dphi
                if abs(dphi) <= EPSLN:
                    break
            else:
                return None
            lon = adjust_lon(self.long0 + asinz(x * math.tan(phi) / self.a) / math.sin(phi))
            return p.with_xy(lon, phi)

        if abs(y + self.ml0) <= EPSLN:
            return p.with_xy(adjust_lon(self.long0 + x / self.a), 0.0)

        al = (self.ml0 + y) / self.a
        bl = x * x / self.a / self.a + al * al
        phi = al
        for _ in range(PROJ_MAX_ITER):
            con = self.e * math.sin(phi)
            cl = math.sqrt(1 - con * con) * math.tan(phi)
            ma = mlfn(self.e0, self.e1, self.e2, self.e3, phi)
            mlnp = (self.e0 - 2 * self.e1 * math.cos(2 * phi) + 4 * self.e2 * math.cos(4 * phi)
                    - 6 * self.e3 * math.cos(6 * phi))
            dphi = (al * (cl * ma + 1) - ma - 0.5 * cl * (ma * ma + bl)) / (
                self.es * math.sin(2 * phi) * (ma * ma + bl - 2 * al * ma) / (4 * cl)
                + (al - ma) * (cl * mlnp - 2 / math.sin(2 * phi)) - mlnp)
            phi -= dphi
            if abs(dphi) <= EPSLN:
                break
        else:
            return None

        cl = math.sqrt(1 - self.es * math.pow(math.sin(phi), 2)) * math.tan(phi)
        lon = adjust_lon(self.long0 + asinz(x * cl / self.a) / math.sin(phi))
        return p.with_xy(lon, phi)


# Latitude difference (1e5 arc-seconds) -> isometric latitude difference
_NZMG_A = (0.6399175073, -0.1358797613, 0.063294409, -0.02526853, 0.0117879,
           -0.0055161, 0.0026906, -0.001333, 0.00067, -0.00034)
# theta -> z
_NZMG_B = (complex(0.7557853228, 0), complex(0.249204646, 0.003371507),
           complex(-0.001541739, 0.041058560), complex(-0.10162907, 0.01727609),
           complex(-0.26623489, -0.36249218), complex(-0.6870983, -1.1651967))
# z -> theta, first approximation
_NZMG_C = (complex(1.3231270439, 0), complex(-0.577245789, -0.007809598),
           complex(0.508307513, -0.112208952), complex(-0.15094762, 0.18200602),
           complex(1.01418179, 1.64497696), complex(1.9660549, 2.5127645))
# isometric latitude difference -> latitude difference
_NZMG_D = (1.5627014243, 0.5185406398, -0.03333098, -0.1052906, -0.0368594,
           0.007317, 0.01220, 0.00394, -0.0013)


class NewZealandMapGrid(Projection):
    """New Zealand Map Grid."""

    names = ('New_Zealand_Map_Grid', 'nzmg')

    def forward(self, p: Point) -> Optional[Point]:
        d_phi = (p.y - self.lat0) / SEC_TO_RAD * 1e-5
        d_lambda = p.x - self.long0

        d_psi = sum(a * d_phi ** (n + 1) for n, a in enumerate(_NZMG_A))
        theta = complex(d_psi, d_lambda)
        z = sum(b * theta ** (n + 1) for n, b in enumerate(_NZMG_B))

        return p.with_xy(z.imag * self.a + self.x0, z.real * self.a + self.y0)

    def inverse(self, p: Point) -> Optional[Point]:
        z = complex((p.y - self.y0) / self.a, (p.x - self.x0) / self.a)

        theta = sum(c * z ** (n + 1) for n, c in enumerate(_NZMG_C))

        # Newton refinement of theta
        for _ in range(PROJ_MAX_ITER):
            num = z + sum((n - 1) * _NZMG_B[n - 1] * theta ** n for n in range(2, 7))
            den = _NZMG_B[0] + sum(n * _NZMG_B[n - 1] * theta ** (n - 1) for n in range(2, 7))
            refined = num / den
            converged = abs(refined - theta) < 1e-12
            theta = refined
            if converged:
                break
        else:
            return None

        d_psi = theta.real
        d_lambda = theta.imag
        d_phi = sum(d * d_psi ** (n + 1) for n, d in enumerate(_NZMG_D))

        lat = self.lat0 + d_phi * SEC_TO_RAD * 1e5
        lon = self.long0 + d_lambda
        return p.with_xy(lon, lat)
