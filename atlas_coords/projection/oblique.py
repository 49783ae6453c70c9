"""
Oblique Mercator projections.

HotineObliqueMercator   Hotine / Rectified Skew Orthomorphic, with the
                        azimuth form (+alpha/+gamma, +lonc) or the
                        two-point form (+lat_1 +lon_1 +lat_2 +lon_2)
SwissObliqueMercator    Swiss Oblique Mercator (somerc), used by CH1903
"""

from typing import Optional
import math

from ..config import EPSLN, FORTPI, HALF_PI, PROJ_MAX_ITER, TWO_PI
from ..errors import DefinitionError
from ..models.geometry import Point
from .base import Projection
from .common import adjust_lon, phi2z, tsfnz

_TOL = 1e-7

# Variant A: u measured from the natural origin, not the projection centre
_TYPE_A_NAMES = (
    'Hotine_Oblique_Mercator',
    'Hotine_Oblique_Mercator_variant_A',
    'Hotine_Oblique_Mercator_Azimuth_Natural_Origin',
)


class HotineObliqueMercator(Projection):
    """Hotine Oblique Mercator (variants A and B)."""

    names = (
        'Hotine_Oblique_Mercator',
        'Hotine Oblique Mercator',
        'Hotine_Oblique_Mercator_variant_A',
        'Hotine_Oblique_Mercator_Variant_B',
        'Hotine_Oblique_Mercator_Azimuth_Natural_Origin',
        'Hotine_Oblique_Mercator_Two_Point_Natural_Origin',
        'Hotine_Oblique_Mercator_Azimuth_Center',
        'Oblique_Mercator',
        'omerc',
    )

    def init(self) -> None:
        params = self.params
        self.no_off = params.no_uoff or params.proj_name in _TYPE_A_NAMES
        self.no_rot = params.no_rot

        has_alpha = params.alpha is not None
        has_gamma = params.gamma is not None
        alpha_c = params.alpha if has_alpha else 0.0
        gamma = params.gamma if has_gamma else 0.0
        lamc = 0.0
        lam1 = lam2 = phi1 = phi2 = 0.0

        if has_alpha or has_gamma:
            lamc = params.longc if params.longc is not None else self.long0
        else:
            lam1 = params.long1 or 0.0
            lam2 = params.long2 or 0.0
            phi1 = self.lat1 or 0.0
            phi2 = self.lat2 or 0.0
            con = abs(phi1)
            if (abs(phi1 - phi2) <= _TOL or con <= _TOL or abs(con - HALF_PI) <= _TOL
                    or abs(abs(self.lat0) - HALF_PI) <= _TOL
                    or abs(abs(phi2) - HALF_PI) <= _TOL):
                raise DefinitionError(
                    f"{params.proj_name}: invalid two-point oblique mercator parameters"
                )

        one_es = 1.0 - self.es
        com = math.sqrt(one_es)

        if abs(self.lat0) > EPSLN:
            sinph0 = math.sin(self.lat0)
            cosph0 = math.cos(self.lat0)
            con = 1 - self.es * sinph0 * sinph0
            self.B = cosph0 * cosph0
            self.B = math.sqrt(1 + self.es * self.B * self.B / one_es)
            self.A = self.B * self.k0 * com / con
            d = self.B * com / (cosph0 * math.sqrt(con))
            f = d * d - 1
            if f <= 0:
                f = 0.0
            else:
                f = math.sqrt(f)
                if self.lat0 < 0:
                    f = -f
            f += d
            self.E = f * math.pow(tsfnz(self.e, self.lat0, sinph0), self.B)
        else:
            self.B = 1 / com
            self.A = self.k0
            self.E = d = f = 1.0

        if has_alpha or has_gamma:
            if has_alpha:
                gamma0 = math.asin(math.sin(alpha_c) / d)
                if not has_gamma:
                    gamma = alpha_c
            else:
                gamma0 = gamma
                alpha_c = math.asin(d * math.sin(gamma0))
            self.lam0 = lamc - math.asin(0.5 * (f - 1 / f) * math.tan(gamma0)) / self.B
        else:
            h = math.pow(tsfnz(self.e, phi1, math.sin(phi1)), self.B)
            l_ = math.pow(tsfnz(self.e, phi2, math.sin(phi2)), self.B)
            f = self.E / h
            p = (l_ - h) / (l_ + h)
            j = self.E * self.E
            j = (j - l_ * h) / (j + l_ * h)
            con = lam1 - lam2
            if con < -math.pi:
                lam2 -= TWO_PI
            elif con > math.pi:
                lam2 += TWO_PI
            self.lam0 = adjust_lon(
                0.5 * (lam1 + lam2)
                - math.atan(j * math.tan(0.5 * self.B * (lam1 - lam2)) / p) / self.B)
            gamma0 = math.atan(2 * math.sin(self.B * adjust_lon(lam1 - self.lam0)) / (f - 1 / f))
            gamma = alpha_c = math.asin(d * math.sin(gamma0))

        self.singam = math.sin(gamma0)
        self.cosgam = math.cos(gamma0)
        self.sinrot = math.sin(gamma)
        self.cosrot = math.cos(gamma)

        self.rB = 1 / self.B
        self.ArB = self.A * self.rB
        self.BrA = 1 / self.ArB

        if self.no_off:
            self.u_0 = 0.0
        else:
            self.u_0 = abs(self.ArB * math.atan(math.sqrt(max(0.0, d * d - 1)) / math.cos(alpha_c)))
            if self.lat0 < 0:
                self.u_0 = -self.u_0

        half = 0.5 * gamma0
        self.v_pole_n = self.ArB * math.log(math.tan(FORTPI - half))
        self.v_pole_s = self.ArB * math.log(math.tan(FORTPI + half))

    def forward(self, p: Point) -> Optional[Point]:
        lam = p.x - self.lam0
        phi = p.y

        if abs(abs(phi) - HALF_PI) > EPSLN:
            w = self.E / math.pow(tsfnz(self.e, phi, math.sin(phi)), self.B)
            temp = 1 / w
            s = 0.5 * (w - temp)
            t = 0.5 * (w + temp)
            v_ = math.sin(self.B * lam)
            u_ = (s * self.singam - v_ * self.cosgam) / t
            if abs(abs(u_) - 1.0) < EPSLN:
                return None
            v = 0.5 * self.ArB * math.log((1 - u_) / (1 + u_))
            temp = math.cos(self.B * lam)
            if abs(temp) < _TOL:
                u = self.A * lam
            else:
                u = self.ArB * math.atan2(s * self.cosgam + v_ * self.singam, temp)
        else:
            v = self.v_pole_n if phi > 0 else self.v_pole_s
            u = self.ArB * phi

        if self.no_rot:
            x, y = u, v
        else:
            u -= self.u_0
            x = v * self.cosrot + u * self.sinrot
            y = u * self.cosrot - v * self.sinrot

        return p.with_xy(self.a * x + self.x0, self.a * y + self.y0)

    def inverse(self, p: Point) -> Optional[Point]:
        x = (p.x - self.x0) / self.a
        y = (p.y - self.y0) / self.a

        if self.no_rot:
            v, u = y, x
        else:
            v = x * self.cosrot - y * self.sinrot
            u = y * self.cosrot + x * self.sinrot + self.u_0

        qp = math.exp(-self.BrA * v)
        sp = 0.5 * (qp - 1 / qp)
        tp = 0.5 * (qp + 1 / qp)
        vp = math.sin(self.BrA * u)
        up = (vp * self.cosgam + sp * self.singam) / tp

        if abs(abs(up) - 1) < EPSLN:
            return p.with_xy(self.lam0, -HALF_PI if up < 0 else HALF_PI)

        ts = self.E / math.sqrt((1 + up) / (1 - up))
        lat = phi2z(self.e, math.pow(ts, 1 / self.B))
        if lat is None:
            return None
        lon = -self.rB * math.atan2(sp * self.cosgam - vp * self.singam, math.cos(self.BrA * u))
        return p.with_xy(lon + self.lam0, lat)


class SwissObliqueMercator(Projection):
    """Swiss Oblique Mercator (somerc)."""

    names = ('Swiss Oblique Mercator', 'Swiss_Oblique_Mercator', 'somerc')

    def init(self) -> None:
        phy0 = self.lat0
        self.lambda0 = self.long0
        sin_phy0 = math.sin(phy0)
        e2 = self.es
        e = math.sqrt(e2)
        self.e = e

        self.R = self.k0 * self.a * math.sqrt(1 - e2) / (1 - e2 * sin_phy0 * sin_phy0)
        self.alpha = math.sqrt(1 + e2 / (1 - e2) * math.pow(math.cos(phy0), 4))
        self.b0 = math.asin(sin_phy0 / self.alpha)
        k1 = math.log(math.tan(math.pi / 4 + self.b0 / 2))
        k2 = math.log(math.tan(math.pi / 4 + phy0 / 2))
        k3 = math.log((1 + e * sin_phy0) / (1 - e * sin_phy0))
        self.K = k1 - self.alpha * k2 + self.alpha * e / 2 * k3

    def forward(self, p: Point) -> Optional[Point]:
        sa1 = math.log(math.tan(math.pi / 4 - p.y / 2))
        sa2 = self.e / 2 * math.log((1 + self.e * math.sin(p.y)) / (1 - self.e * math.sin(p.y)))
        s = -self.alpha * (sa1 + sa2) + self.K
        b = 2 * (math.atan(math.exp(s)) - math.pi / 4)
        i = self.alpha * (p.x - self.lambda0)

        rot_i = math.atan(math.sin(i) / (
            math.sin(self.b0) * math.tan(b) + math.cos(self.b0) * math.cos(i)))
        rot_b = math.asin(
            math.cos(self.b0) * math.sin(b) - math.sin(self.b0) * math.cos(b) * math.cos(i))

        y = self.R / 2 * math.log((1 + math.sin(rot_b)) / (1 - math.sin(rot_b))) + self.y0
        x = self.R * rot_i + self.x0
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        y_ = p.x - self.x0
        x_ = p.y - self.y0

        rot_i = y_ / self.R
        rot_b = 2 * (math.atan(math.exp(x_ / self.R)) - math.pi / 4)

        b = math.asin(math.cos(self.b0) * math.sin(rot_b)
                      + math.sin(self.b0) * math.cos(rot_b) * math.cos(rot_i))
        i = math.atan(math.sin(rot_i) / (
            math.cos(self.b0) * math.cos(rot_i) - math.sin(self.b0) * math.tan(rot_b)))

        lam = self.lambda0 + i / self.alpha

        phy = b
        prev = -1000.0
        for _ in range(PROJ_MAX_ITER):
            if abs(phy - prev) <= 1e-7:
                return p.with_xy(lam, phy)
            s = 1 / self.alpha * (math.log(math.tan(math.pi / 4 + b / 2)) - self.K) \
                + self.e * math.log(math.tan(math.pi / 4 + math.asin(self.e * math.sin(phy)) / 2))
            prev = phy
            phy = 2 * math.atan(math.exp(s)) - math.pi / 2
        return None
