"""
Transverse Mercator projections.

Two implementations:

FastTransverseMercator
    Classic Snyder power series in the longitude difference. Accurate
    to millimetres within a few degrees of the central meridian, and
    the only variant that handles a sphere. Selected explicitly with
    "Fast_Transverse_Mercator" or with "+approx".

ExtendedTransverseMercator
    Poder/Engsager series via Gaussian latitude and complex Clenshaw
    summation. Accurate across a whole UTM zone and well beyond, and
    the default for "tmerc" / "Transverse_Mercator". Falls back to the
    fast series on a sphere.

UniversalTransverseMercator
    ExtendedTransverseMercator with the UTM zone constants.
"""

from typing import Optional
import math

from ..config import D2R, EPSLN, HALF_PI
from ..errors import DefinitionError
from ..models.geometry import Point
from .base import Projection
from .common import (
    adjust_lon,
    asinhy,
    clens,
    clens_cmplx,
    gatg,
    pj_enfn,
    pj_inv_mlfn,
    pj_mlfn,
    sign,
)

# |Ce| beyond this is outside the series' domain (about 150 degrees of
# longitude difference)
_ETMERC_LIMIT = 2.623395162778


class FastTransverseMercator(Projection):
    """
    Transverse Mercator by Snyder power series.

    The ellipsoidal inverse iterates for the footpoint latitude
    (pj_inv_mlfn) and returns None if that fails to converge.
    """

    names = ('Fast_Transverse_Mercator', 'Fast Transverse Mercator')

    def init(self) -> None:
        self._init_fast()

    def _init_fast(self) -> None:
        if self.es:
            self.en = pj_enfn(self.es)
            self.ml0 = pj_mlfn(self.lat0, math.sin(self.lat0), math.cos(self.lat0), self.en)

    def forward(self, p: Point) -> Optional[Point]:
        return self._forward_fast(p)

    def inverse(self, p: Point) -> Optional[Point]:
        return self._inverse_fast(p)

    def _forward_fast(self, p: Point) -> Optional[Point]:
        lat = p.y
        delta_lon = adjust_lon(p.x - self.long0)
        sin_phi = math.sin(lat)
        cos_phi = math.cos(lat)

        if not self.es:
            b = cos_phi * math.sin(delta_lon)
            if abs(abs(b) - 1) < EPSLN:
                return None
            x = 0.5 * self.a * self.k0 * math.log((1 + b) / (1 - b)) + self.x0
            y = cos_phi * math.cos(delta_lon) / math.sqrt(1 - b * b)
            b = abs(y)
            if b >= 1:
                if (b - 1) > EPSLN:
                    return None
                y = 0.0
            else:
                y = math.acos(y)
            if lat < 0:
                y = -y
            y = self.a * self.k0 * (y - self.lat0) + self.y0
            return p.with_xy(x, y)

        al = cos_phi * delta_lon
        als = al * al
        c = self.ep2 * cos_phi * cos_phi
        cs = c * c
        tq = math.tan(lat) if abs(cos_phi) > EPSLN else 0.0
        t = tq * tq
        ts = t * t
        con = 1 - self.es * sin_phi * sin_phi
        al = al / math.sqrt(con)
        ml = pj_mlfn(lat, sin_phi, cos_phi, self.en)

        x = self.a * (self.k0 * al * (
            1 + als / 6 * (1 - t + c + als / 20 * (
                5 - 18 * t + ts + 14 * c - 58 * t * c + als / 42 * (
                    61 + 179 * ts - ts * t - 479 * t))))) + self.x0

        y = self.a * (self.k0 * (ml - self.ml0 + sin_phi * delta_lon * al / 2 * (
            1 + als / 12 * (5 - t + 9 * c + 4 * cs + als / 30 * (
                61 + ts - 58 * t + 270 * c - 330 * t * c + als / 56 * (
                    1385 + 543 * ts - ts * t - 3111 * t)))))) + self.y0

        return p.with_xy(x, y)

    def _inverse_fast(self, p: Point) -> Optional[Point]:
        x = (p.x - self.x0) / self.a
        y = (p.y - self.y0) / self.a

        if not self.es:
            f = math.exp(x / self.k0)
            g = 0.5 * (f - 1 / f)
            temp = self.lat0 + y / self.k0
            h = math.cos(temp)
            con = math.sqrt((1 - h * h) / (1 + g * g))
            lat = math.asin(min(1.0, con))
            if temp < 0:
                lat = -lat
            if g == 0 and h == 0:
                lon = self.long0
            else:
                lon = adjust_lon(math.atan2(g, h) + self.long0)
            return p.with_xy(lon, lat)

        con = self.ml0 + y / self.k0
        phi = pj_inv_mlfn(con, self.es, self.en)
        if phi is None:
            return None

        if abs(phi) >= HALF_PI:
            return p.with_xy(0.0, HALF_PI * sign(y))

        sin_phi = math.sin(phi)
        cos_phi = math.cos(phi)
        tan_phi = math.tan(phi) if abs(cos_phi) > EPSLN else 0.0
        c = self.ep2 * cos_phi * cos_phi
        cs = c * c
        t = tan_phi * tan_phi
        ts = t * t
        con = 1 - self.es * sin_phi * sin_phi
        d = x * math.sqrt(con) / self.k0
        ds = d * d
        con = con * tan_phi

        lat = phi - (con * ds / (1 - self.es)) * 0.5 * (
            1 - ds / 12 * (5 + 3 * t - 9 * c * t + c - 4 * cs - ds / 30 * (
                61 + 90 * t - 252 * c * t + 45 * ts + 46 * c - ds / 56 * (
                    1385 + 3633 * t + 4095 * ts + 1574 * ts * t))))
        lon = adjust_lon(self.long0 + (d * (
            1 - ds / 6 * (1 + 2 * t + c - ds / 20 * (
                5 + 28 * t + 24 * ts + 8 * c * t + 6 * c - ds / 42 * (
                    61 + 662 * t + 1320 * ts + 720 * ts * t)))) / cos_phi))

        return p.with_xy(lon, lat)


class ExtendedTransverseMercator(FastTransverseMercator):
    """Transverse Mercator by Poder/Engsager series (ellipsoid only)."""

    names = (
        'Extended_Transverse_Mercator',
        'Extended Transverse Mercator',
        'etmerc',
        'Transverse_Mercator',
        'Transverse Mercator',
        'Gauss Kruger',
        'Gauss_Kruger',
        'tmerc',
    )

    def init(self) -> None:
        self.use_fast = bool(self.params.approx) or not self.es or self.es <= 0
        if self.use_fast:
            self._init_fast()
            return
        self._init_extended()

    def _init_extended(self) -> None:
        f = self.es / (1 + math.sqrt(1 - self.es))
        n = f / (2 - f)
        np_ = n

        cgb = [0.0] * 6
        cbg = [0.0] * 6
        utg = [0.0] * 6
        gtu = [0.0] * 6

        cgb[0] = n * (2 + n * (-2 / 3 + n * (-2 + n * (116 / 45 + n * (26 / 45 + n * (-2854 / 675))))))
        cbg[0] = n * (-2 + n * (2 / 3 + n * (4 / 3 + n * (-82 / 45 + n * (32 / 45 + n * (4642 / 4725))))))
        np_ = np_ * n
        cgb[1] = np_ * (7 / 3 + n * (-8 / 5 + n * (-227 / 45 + n * (2704 / 315 + n * (2323 / 945)))))
        cbg[1] = np_ * (5 / 3 + n * (-16 / 15 + n * (-13 / 9 + n * (904 / 315 + n * (-1522 / 945)))))
        np_ = np_ * n
        cgb[2] = np_ * (56 / 15 + n * (-136 / 35 + n * (-1262 / 105 + n * (73814 / 2835))))
        cbg[2] = np_ * (-26 / 15 + n * (34 / 21 + n * (8 / 5 + n * (-12686 / 2835))))
        np_ = np_ * n
        cgb[3] = np_ * (4279 / 630 + n * (-332 / 35 + n * (-399572 / 14175)))
        cbg[3] = np_ * (1237 / 630 + n * (-12 / 5 + n * (-24832 / 14175)))
        np_ = np_ * n
        cgb[4] = np_ * (4174 / 315 + n * (-144838 / 6237))
        cbg[4] = np_ * (-734 / 315 + n * (109598 / 31185))
        np_ = np_ * n
        cgb[5] = np_ * (601676 / 22275)
        cbg[5] = np_ * (444337 / 155925)

        np_ = n * n
        self.Qn = self.k0 / (1 + n) * (1 + np_ * (1 / 4 + np_ * (1 / 64 + np_ / 256)))

        utg[0] = n * (-0.5 + n * (2 / 3 + n * (-37 / 96 + n * (1 / 360 + n * (81 / 512 + n * (-96199 / 604800))))))
        gtu[0] = n * (0.5 + n * (-2 / 3 + n * (5 / 16 + n * (41 / 180 + n * (-127 / 288 + n * (7891 / 37800))))))
        utg[1] = np_ * (-1 / 48 + n * (-1 / 15 + n * (437 / 1440 + n * (-46 / 105 + n * (1118711 / 3870720)))))
        gtu[1] = np_ * (13 / 48 + n * (-3 / 5 + n * (557 / 1440 + n * (281 / 630 + n * (-1983433 / 1935360)))))
        np_ = np_ * n
        utg[2] = np_ * (-17 / 480 + n * (37 / 840 + n * (209 / 4480 + n * (-5569 / 90720))))
        gtu[2] = np_ * (61 / 240 + n * (-103 / 140 + n * (15061 / 26880 + n * (167603 / 181440))))
        np_ = np_ * n
        utg[3] = np_ * (-4397 / 161280 + n * (11 / 504 + n * (830251 / 7257600)))
        gtu[3] = np_ * (49561 / 161280 + n * (-179 / 168 + n * (6601661 / 7257600)))
        np_ = np_ * n
        utg[4] = np_ * (-4583 / 161280 + n * (108847 / 3991680))
        gtu[4] = np_ * (34729 / 80640 + n * (-3418889 / 1995840))
        np_ = np_ * n
        utg[5] = np_ * (-20648693 / 638668800)
        gtu[5] = np_ * (212378941 / 319334400)

        self.cgb = tuple(cgb)
        self.cbg = tuple(cbg)
        self.utg = tuple(utg)
        self.gtu = tuple(gtu)

        z = gatg(self.cbg, self.lat0)
        self.Zb = -self.Qn * (z + clens(self.gtu, 2 * z))

    def forward(self, p: Point) -> Optional[Point]:
        if self.use_fast:
            return self._forward_fast(p)

        ce = adjust_lon(p.x - self.long0)
        cn = gatg(self.cbg, p.y)
        sin_cn = math.sin(cn)
        cos_cn = math.cos(cn)
        sin_ce = math.sin(ce)
        cos_ce = math.cos(ce)

        cn = math.atan2(sin_cn, cos_ce * cos_cn)
        ce = math.atan2(sin_ce * cos_cn, math.hypot(sin_cn, cos_cn * cos_ce))
        ce = asinhy(math.tan(ce))

        tmp = clens_cmplx(self.gtu, 2 * cn, 2 * ce)
        cn = cn + tmp[0]
        ce = ce + tmp[1]

        if abs(ce) > _ETMERC_LIMIT:
            return None
        x = self.a * (self.Qn * ce) + self.x0
        y = self.a * (self.Qn * cn + self.Zb) + self.y0
        return p.with_xy(x, y)

    def inverse(self, p: Point) -> Optional[Point]:
        if self.use_fast:
            return self._inverse_fast(p)

        ce = (p.x - self.x0) / self.a
        cn = (p.y - self.y0) / self.a
        cn = (cn - self.Zb) / self.Qn
        ce = ce / self.Qn

        if not abs(ce) <= _ETMERC_LIMIT:
            return None

        tmp = clens_cmplx(self.utg, 2 * cn, 2 * ce)
        cn = cn + tmp[0]
        ce = ce + tmp[1]
        ce = math.atan(math.sinh(ce))

        sin_cn = math.sin(cn)
        cos_cn = math.cos(cn)
        sin_ce = math.sin(ce)
        cos_ce = math.cos(ce)

        cn = math.atan2(sin_cn * cos_ce, math.hypot(sin_ce, cos_ce * cos_cn))
        ce = math.atan2(sin_ce, cos_ce * cos_cn)

        lon = adjust_lon(ce + self.long0)
        lat = gatg(self.cgb, cn)
        return p.with_xy(lon, lat)


def utm_zone_for_longitude(zone: Optional[int], lon: float) -> int:
    """Zone number from +zone, or derived from a longitude in radians."""
    if zone is None:
        zone = int(math.floor((adjust_lon(lon) + math.pi) * 30 / math.pi)) + 1
        return max(0, min(60, zone))
    return zone


class UniversalTransverseMercator(ExtendedTransverseMercator):
    """UTM: Transverse Mercator with zone-derived origin and fixed constants."""

    names = ('Universal Transverse Mercator System', 'utm')

    def init(self) -> None:
        zone = utm_zone_for_longitude(self.params.zone, self.long0)
        if not 1 <= abs(zone) <= 60:
            raise DefinitionError(f"Unknown UTM zone: {self.params.zone}")
        self.zone = zone
        self.lat0 = 0.0
        self.long0 = ((6 * abs(zone)) - 183) * D2R
        self.x0 = 500000.0
        self.y0 = 10000000.0 if self.params.utm_south else 0.0
        self.k0 = 0.9996
        super().init()
