"""
Pseudo-cylindrical and other whole-world projections.

Sinusoidal, Mollweide, Robinson, Equal Earth, Van der Grinten.
All but the ellipsoidal Sinusoidal are spherical (radius a).
"""

from typing import Optional, Sequence
import math

from ..config import D2R, EPSLN, HALF_PI, PROJ_MAX_ITER, R2D
from ..models.geometry import Point
from .base import Projection
from .common import adjust_lat, adjust_lon, asinz, pj_enfn, pj_inv_mlfn, pj_mlfn, sign


class Sinusoidal(Projection):
    """Sinusoidal (Sanson-Flamsteed)."""

    names = ('Sinusoidal', 'sinu')

    def init(self) -> None:
        if not self.is_spherical:
            self.en = pj_enfn(self.es)

    def forward(self, p: Point) -> Optional[Point]:
        lat = p.y
        lon = adjust_lon(p.x - self.long0)
        if self.is_spherical:
            x = self.a * lon * math.cos(lat)
            y = self.a * lat
        else:
            s = math.sin(lat)
            c = math.cos(lat)
            y = self.a * pj_mlfn(lat, s, c, self.en)
            x = self.a * lon * c / math.sqrt(1 - self.es * s * s)
        return p.with_xy(x + self.x0, y + self.y0)

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = p.y - self.y0

        if self.is_spherical:
            lat = y / self.a
            if abs(lat) > HALF_PI + EPSLN:
                return None
            cos_lat = math.cos(lat)
            lon = self.long0 if cos_lat <= EPSLN else adjust_lon(x / (self.a * cos_lat) + self.long0)
            return p.with_xy(lon, adjust_lat(lat))

        lat = pj_inv_mlfn(y / self.a, self.es, self.en)
        if lat is None:
            return None
        s = abs(lat)
        if s < HALF_PI:
            s = math.sin(lat)
            lon = adjust_lon(self.long0 + x * math.sqrt(1 - self.es * s * s) / (self.a * math.cos(lat)))
        elif (s - EPSLN) < HALF_PI:
            lon = self.long0
        else:
            return None
        return p.with_xy(lon, lat)


_MOLL_X = 0.900316316158
_MOLL_Y = 1.4142135623731


class Mollweide(Projection):
    """Mollweide (spherical)."""

    names = ('Mollweide', 'moll')

    def forward(self, p: Point) -> Optional[Point]:
        lat = p.y
        delta_lon = adjust_lon(p.x - self.long0)

        if HALF_PI - abs(lat) < EPSLN:
            theta = sign(lat) * HALF_PI
            delta_lon = 0.0
        else:
            theta = lat
            con = math.pi * math.sin(lat)
            for _ in range(PROJ_MAX_ITER):
                delta_theta = -(theta + math.sin(theta) - con) / (1 + math.cos(theta))
                theta += delta_theta
                if abs(delta_theta) < EPSLN:
                    break
            else:
                # Newton converges only linearly this close to a pole
                theta = sign(lat) * math.pi
            theta /= 2

        x = _MOLL_X * self.a * delta_lon * math.cos(theta) + self.x0
        y = _MOLL_Y * self.a * math.sin(theta) + self.y0
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        x = p.x - self.x0
        y = p.y - self.y0

        arg = y / (_MOLL_Y * self.a)
        if abs(arg) > 1 + EPSLN:
            return None
        arg = max(-0.999999999999, min(0.999999999999, arg))
        theta = math.asin(arg)
        lon = adjust_lon(self.long0 + (x / (_MOLL_X * self.a * math.cos(theta))))
        lon = max(-math.pi, min(math.pi, lon))
        arg = (2 * theta + math.sin(2 * theta)) / math.pi
        lat = math.asin(max(-1.0, min(1.0, arg)))
        return p.with_xy(lon, lat)


# Robinson table: cubic fits per 5 degree latitude interval
_ROBIN_X = (
    (1.0000, 2.2199e-17, -7.15515e-05, 3.1103e-06),
    (0.9986, -0.000482243, -2.4897e-05, -1.3309e-06),
    (0.9954, -0.00083103, -4.48605e-05, -9.86701e-07),
    (0.9900, -0.00135364, -5.9661e-05, 3.6777e-06),
    (0.9822, -0.00167442, -4.49547e-06, -5.72411e-06),
    (0.9730, -0.00214868, -9.03571e-05, 1.8736e-08),
    (0.9600, -0.00305085, -9.00761e-05, 1.64917e-06),
    (0.9427, -0.00382792, -6.53386e-05, -2.6154e-06),
    (0.9216, -0.00467746, -0.00010457, 4.81243e-06),
    (0.8962, -0.00536223, -3.23831e-05, -5.43432e-06),
    (0.8679, -0.00609363, -0.000113898, 3.32484e-06),
    (0.8350, -0.00698325, -6.40253e-05, 9.34959e-07),
    (0.7986, -0.00755338, -5.00009e-05, 9.35324e-07),
    (0.7597, -0.00798324, -3.5971e-05, -2.27626e-06),
    (0.7186, -0.00851367, -7.01149e-05, -8.6303e-06),
    (0.6732, -0.00986209, -0.000199569, 1.91974e-05),
    (0.6213, -0.010418, 8.83923e-05, 6.24051e-06),
    (0.5722, -0.00906601, 0.000182, 6.24051e-06),
    (0.5322, -0.00677797, 0.000275608, 6.24051e-06),
)

_ROBIN_Y = (
    (-5.20417e-18, 0.0124, 1.21431e-18, -8.45284e-11),
    (0.0620, 0.0124, -1.26793e-09, 4.22642e-10),
    (0.1240, 0.0124, 5.07171e-09, -1.60604e-09),
    (0.1860, 0.0123999, -1.90189e-08, 6.00152e-09),
    (0.2480, 0.0124002, 7.10039e-08, -2.24e-08),
    (0.3100, 0.0123992, -2.64997e-07, 8.35986e-08),
    (0.3720, 0.0124029, 9.88983e-07, -3.11994e-07),
    (0.4340, 0.0123893, -3.69093e-06, -4.35621e-07),
    (0.4958, 0.0123198, -1.02252e-05, -3.45523e-07),
    (0.5571, 0.0121916, -1.54081e-05, -5.82288e-07),
    (0.6176, 0.0119938, -2.41424e-05, -5.25327e-07),
    (0.6769, 0.011713, -3.20223e-05, -5.16405e-07),
    (0.7346, 0.0113541, -3.97684e-05, -6.09052e-07),
    (0.7903, 0.0109107, -4.89042e-05, -1.04739e-06),
    (0.8435, 0.0103431, -6.4615e-05, -1.40374e-09),
    (0.8936, 0.00969686, -6.4636e-05, -8.547e-06),
    (0.9394, 0.00840947, -0.000192841, -4.2106e-06),
    (0.9761, 0.00616527, -0.000256, -4.2106e-06),
    (1.0000, 0.00328947, -0.000319159, -4.2106e-06),
)

_FXC = 0.8487
_FYC = 1.3523
_C1 = R2D / 5
_RC1 = 1 / _C1
_NODES = 18


def _poly3(coefs: Sequence[float], x: float) -> float:
    return coefs[0] + x * (coefs[1] + x * (coefs[2] + x * coefs[3]))


def _diff_poly3(coefs: Sequence[float], x: float) -> float:
    return coefs[1] + x * (2 * coefs[2] + x * 3 * coefs[3])


class Robinson(Projection):
    """Robinson (spherical, tabular)."""

    names = ('Robinson', 'robin')

    def forward(self, p: Point) -> Optional[Point]:
        lon = adjust_lon(p.x - self.long0)
        dphi = abs(p.y)
        i = int(math.floor(dphi * _C1))
        i = max(0, min(_NODES - 1, i))
        dphi = R2D * (dphi - _RC1 * i)

        x = _poly3(_ROBIN_X[i], dphi) * lon
        y = _poly3(_ROBIN_Y[i], dphi)
        if p.y < 0:
            y = -y
        return p.with_xy(x * self.a * _FXC + self.x0, y * self.a * _FYC + self.y0)

    def inverse(self, p: Point) -> Optional[Point]:
        dy = p.y - self.y0
        x = (p.x - self.x0) / (self.a * _FXC)
        y = abs(dy) / (self.a * _FYC)

        if y >= 1:
            x /= _ROBIN_X[_NODES][0]
            lat = -HALF_PI if dy < 0 else HALF_PI
        else:
            i = max(0, min(_NODES - 1, int(math.floor(y * _NODES))))
            while i > 0 and _ROBIN_Y[i][0] > y:
                i -= 1
            while i < _NODES - 1 and _ROBIN_Y[i + 1][0] <= y:
                i += 1

            coefs = _ROBIN_Y[i]
            t = 5 * (y - coefs[0]) / (_ROBIN_Y[i + 1][0] - coefs[0])
            for _ in range(100):
                upd = (_poly3(coefs, t) - y) / _diff_poly3(coefs, t)
                t -= upd
                if abs(upd) < EPSLN:
                    break
            else:
                return None

            x /= _poly3(_ROBIN_X[i], t)
            lat = (5 * i + t) * D2R
            if dy < 0:
                lat = -lat

        return p.with_xy(adjust_lon(x + self.long0), lat)


_EE_A1 = 1.340264
_EE_A2 = -0.081106
_EE_A3 = 0.000893
_EE_A4 = 0.003796
_EE_M = math.sqrt(3) / 2.0


class EqualEarth(Projection):
    """Equal Earth (Savric, Patterson, Jenny 2018), spherical form."""

    names = ('Equal Earth', 'Equal_Earth', 'eqearth')

    def forward(self, p: Point) -> Optional[Point]:
        lam = adjust_lon(p.x - self.long0)
        param_lat = math.asin(_EE_M * math.sin(p.y))
        sq = param_lat * param_lat
        pow6 = sq * sq * sq
        x = lam * math.cos(param_lat) / (
            _EE_M * (_EE_A1 + 3 * _EE_A2 * sq + pow6 * (7 * _EE_A3 + 9 * _EE_A4 * sq)))
        y = param_lat * (_EE_A1 + _EE_A2 * sq + pow6 * (_EE_A3 + _EE_A4 * sq))
        return p.with_xy(self.a * x + self.x0, self.a * y + self.y0)

    def inverse(self, p: Point) -> Optional[Point]:
        x = (p.x - self.x0) / self.a
        y = (p.y - self.y0) / self.a

        param_lat = y
        for _ in range(12):
            sq = param_lat * param_lat
            pow6 = sq * sq * sq
            fy = param_lat * (_EE_A1 + _EE_A2 * sq + pow6 * (_EE_A3 + _EE_A4 * sq)) - y
            fpy = _EE_A1 + 3 * _EE_A2 * sq + pow6 * (7 * _EE_A3 + 9 * _EE_A4 * sq)
            dlat = fy / fpy
            param_lat -= dlat
            if abs(dlat) < 1e-9:
                break
        else:
            return None

        sq = param_lat * param_lat
        pow6 = sq * sq * sq
        lon = _EE_M * x * (_EE_A1 + 3 * _EE_A2 * sq + pow6 * (7 * _EE_A3 + 9 * _EE_A4 * sq)) \
            / math.cos(param_lat)
        sin_lat = math.sin(param_lat) / _EE_M
        if abs(sin_lat) > 1:
            return None
        return p.with_xy(adjust_lon(lon + self.long0), math.asin(sin_lat))


class VanDerGrinten(Projection):
    """Van der Grinten I (spherical)."""

    names = ('Van_der_Grinten_I', 'VanDerGrinten', 'vandg')

    def forward(self, p: Point) -> Optional[Point]:
        lat = p.y
        r = self.a
        dlon = adjust_lon(p.x - self.long0)

        if abs(lat) <= EPSLN:
            return p.with_xy(self.x0 + r * dlon, self.y0)

        theta = asinz(2 * abs(lat / math.pi))
        if abs(dlon) <= EPSLN or abs(abs(lat) - HALF_PI) <= EPSLN:
            y = math.pi * r * math.tan(0.5 * theta)
            return p.with_xy(self.x0, self.y0 + (y if lat >= 0 else -y))

        al = 0.5 * abs((math.pi / dlon) - (dlon / math.pi))
        asq = al * al
        sinth = math.sin(theta)
        costh = math.cos(theta)
        g = costh / (sinth + costh - 1)
        gsq = g * g
        m = g * (2 / sinth - 1)
        msq = m * m
        con = math.pi * r * (al * (g - msq) + math.sqrt(
            asq * (g - msq) * (g - msq) - (msq + asq) * (gsq - msq))) / (msq + asq)
        if dlon < 0:
            con = -con
        x = self.x0 + con

        q = asq + g
        con = math.pi * r * (m * q - al * math.sqrt((msq + asq) * (asq + 1) - q * q)) / (msq + asq)
        y = self.y0 + con if lat >= 0 else self.y0 - con
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        con = math.pi * self.a
        xx = (p.x - self.x0) / con
        yy = (p.y - self.y0) / con
        xys = xx * xx + yy * yy
        if xys < EPSLN * EPSLN:
            return p.with_xy(self.long0, 0.0)

        c1 = -abs(yy) * (1 + xys)
        c2 = c1 - 2 * yy * yy + xx * xx
        c3 = -2 * c1 + 1 + 2 * yy * yy + xys * xys
        d = yy * yy / c3 + (2 * c2 * c2 * c2 / c3 / c3 / c3 - 9 * c1 * c2 / c3 / c3) / 27
        a1 = (c1 - c2 * c2 / 3 / c3) / c3
        m1 = 2 * math.sqrt(-a1 / 3)
        con = ((3 * d) / a1) / m1
        con = max(-1.0, min(1.0, con))
        th1 = math.acos(con) / 3

        lat = (-m1 * math.cos(th1 + math.pi / 3) - c2 / 3 / c3) * math.pi
        if yy < 0:
            lat = -lat

        if abs(xx) < EPSLN:
            lon = self.long0
        else:
            lon = adjust_lon(self.long0 + math.pi * (
                xys - 1 + math.sqrt(1 + 2 * (xx * xx - yy * yy) + xys * xys)) / 2 / xx)
        return p.with_xy(lon, lat)
